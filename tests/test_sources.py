"""Tests for file sources.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import os
import sys

import pytest
import redis

from roadstatic_core.store.backend import valid_path
from roadstatic_core.store.file import DirectorySource
from roadstatic_core.store.memory import MemoryFile, MemorySource
from roadstatic_core.store.redis import RedisSource, RedisSourceConfig


class FakeRedis:
    """Minimal stand-in for a redis client."""

    def __init__(self, data=None, error=None):
        self.data = dict(data or {})
        self.error = error

    def get(self, key):
        if self.error is not None:
            raise self.error
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value
        return True


class TestValidPath:
    """Tests for path validation."""

    @pytest.mark.parametrize("path", ["a.txt", "nested/file.js", "file with spaces.txt", "file@#$%^&*().txt"])
    def test_valid(self, path):
        """Test accepted paths."""
        assert valid_path(path)

    @pytest.mark.parametrize(
        "path",
        ["", "/etc/passwd", "../../../etc/passwd", "a/../b", "./a", "a//b", "dir/", "..\\..\\windows"],
    )
    def test_invalid(self, path):
        """Test rejected paths."""
        assert not valid_path(path)


class TestMemorySource:
    """Tests for MemorySource."""

    def test_read_file(self):
        """Test whole-file reads."""
        source = MemorySource({"a.txt": b"alpha", "nested/b.js": b"beta"})

        assert source.read_file("a.txt") == b"alpha"
        assert source.read_file("nested/b.js") == b"beta"
        assert source.get_stats().reads == 2

    def test_open_stream(self):
        """Test streaming reads."""
        source = MemorySource({"a.txt": b"alpha"})

        with source.open_stream("a.txt") as stream:
            assert stream.read() == b"alpha"
        assert source.get_stats().opens == 1

    def test_missing_file(self):
        """Test not-found errors."""
        source = MemorySource()

        with pytest.raises(FileNotFoundError):
            source.read_file("missing.txt")
        with pytest.raises(FileNotFoundError):
            source.open_stream("missing.txt")
        assert source.get_stats().errors == 2

    def test_invalid_path_is_not_found(self):
        """Test that invalid paths are reported as not found."""
        source = MemorySource({"a.txt": b"alpha"})

        with pytest.raises(FileNotFoundError):
            source.read_file("/a.txt")

    def test_unreadable_file(self):
        """Test permission errors."""
        source = MemorySource({"secret.txt": MemoryFile(b"x", readable=False)})

        with pytest.raises(PermissionError):
            source.read_file("secret.txt")

    def test_add_and_remove(self):
        """Test mutating the file set."""
        source = MemorySource()

        source.add("a.txt", b"one")
        assert source.read_file("a.txt") == b"one"
        assert source.remove("a.txt")
        assert not source.remove("a.txt")
        assert len(source) == 0


class TestDirectorySource:
    """Tests for DirectorySource."""

    def test_read_file(self, tmp_path):
        """Test reading from disk."""
        (tmp_path / "css").mkdir()
        (tmp_path / "css" / "site.css").write_bytes(b"body{}")
        source = DirectorySource(tmp_path)

        assert source.read_file("css/site.css") == b"body{}"

    def test_open_stream(self, tmp_path):
        """Test streaming from disk."""
        (tmp_path / "a.txt").write_bytes(b"alpha")
        source = DirectorySource(str(tmp_path))

        with source.open_stream("a.txt") as stream:
            assert stream.read() == b"alpha"

    def test_missing_file(self, tmp_path):
        """Test not-found from the operating system."""
        source = DirectorySource(tmp_path)

        with pytest.raises(FileNotFoundError):
            source.read_file("missing.txt")

    def test_traversal_rejected(self, tmp_path):
        """Test that paths escaping the root never reach the disk."""
        source = DirectorySource(tmp_path / "root")

        with pytest.raises(OSError) as excinfo:
            source.read_file("../outside.txt")

        assert not isinstance(excinfo.value, (FileNotFoundError, PermissionError))

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permission bits are not enforced",
    )
    def test_permission_denied(self, tmp_path):
        """Test permission errors from the operating system."""
        target = tmp_path / "forbidden.txt"
        target.write_bytes(b"x")
        target.chmod(0)
        source = DirectorySource(tmp_path)

        try:
            with pytest.raises(PermissionError):
                source.read_file("forbidden.txt")
        finally:
            target.chmod(0o644)


class TestRedisSource:
    """Tests for RedisSource."""

    def test_read_file(self):
        """Test reading bytes stored under the key prefix."""
        client = FakeRedis({"assets:app.js": b"console.log(1);"})
        source = RedisSource(client=client)

        assert source.read_file("app.js") == b"console.log(1);"

    def test_custom_prefix(self):
        """Test key prefix configuration."""
        client = FakeRedis({"site:a.txt": b"alpha"})
        source = RedisSource(RedisSourceConfig(prefix="site:"), client=client)

        with source.open_stream("a.txt") as stream:
            assert stream.read() == b"alpha"

    def test_put(self):
        """Test storing a file."""
        client = FakeRedis()
        source = RedisSource(client=client)

        source.put("a.txt", b"alpha")
        assert client.data == {"assets:a.txt": b"alpha"}

        with pytest.raises(ValueError):
            source.put("../a.txt", b"alpha")

    def test_missing_key(self):
        """Test not-found mapping."""
        source = RedisSource(client=FakeRedis())

        with pytest.raises(FileNotFoundError):
            source.read_file("missing.txt")

    def test_authentication_error(self):
        """Test that auth failures become permission errors."""
        error = redis.exceptions.AuthenticationError("invalid password")
        source = RedisSource(client=FakeRedis(error=error))

        with pytest.raises(PermissionError) as excinfo:
            source.read_file("a.txt")

        assert excinfo.value.__cause__ is error

    def test_other_errors_pass_through(self):
        """Test that connection errors are not rewritten."""
        error = redis.exceptions.ConnectionError("refused")
        source = RedisSource(client=FakeRedis(error=error))

        with pytest.raises(redis.exceptions.ConnectionError) as excinfo:
            source.read_file("a.txt")

        assert excinfo.value is error
        assert source.get_stats().errors == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
