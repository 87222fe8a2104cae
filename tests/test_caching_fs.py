"""Tests for CachingFS.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import threading
import time

import pytest

from roadstatic_core.errors import EntryNotFoundError, MissingFilesystemError
from roadstatic_core.fs.caching import CachingFS, CachingFSConfig, FSLoader
from roadstatic_core.store.backend import FileSource
from roadstatic_core.store.memory import MemoryFile, MemorySource


def caching_test_files():
    return MemorySource({
        "cached.txt": b"cached content",
        "test.css": b"body { color: red; }",
        "large.js": b"console.log('large file content');",
        "nested/file.js": b"nested content",
    })


class ErrorSource(FileSource):
    """Source that fails every read in a path-specific way."""

    def open_stream(self, path):
        raise NotImplementedError("streams unsupported")

    def read_file(self, path):
        if path == "permission_error":
            raise PermissionError("permission denied")
        if path == "invalid_error":
            raise ValueError("invalid argument")
        raise FileNotFoundError(path)


class GatedSource(MemorySource):
    """Memory source whose reads block until released."""

    def __init__(self, files):
        super().__init__(files)
        self.release = threading.Event()

    def read_file(self, path):
        self.release.wait(timeout=5)
        return super().read_file(path)


class TestFSLoader:
    """Tests for the loader adapter."""

    def test_load_existing_file(self):
        """Test loading a file."""
        loader = FSLoader(caching_test_files())

        assert loader.load("cached.txt") == b"cached content"
        assert loader("nested/file.js") == b"nested content"

    def test_not_found_becomes_entry_not_found(self):
        """Test not-found translation at the cache boundary."""
        loader = FSLoader(caching_test_files())

        with pytest.raises(EntryNotFoundError) as excinfo:
            loader.load("nonexistent.txt")

        assert excinfo.value.key == "nonexistent.txt"
        assert isinstance(excinfo.value.__cause__, FileNotFoundError)

    def test_permission_error_passes_through(self):
        """Test that permission errors are not translated."""
        loader = FSLoader(ErrorSource())

        with pytest.raises(PermissionError):
            loader.load("permission_error")

    def test_other_error_passes_through(self):
        """Test that unrelated errors are not translated."""
        loader = FSLoader(ErrorSource())

        with pytest.raises(ValueError):
            loader.load("invalid_error")


class TestNewCachingFS:
    """Tests for construction."""

    def test_valid_source(self):
        """Test construction with defaults."""
        cfs = CachingFS.with_defaults(caching_test_files())

        assert cfs.cache.config.max_entries == 1000
        assert cfs.cache.config.initial_capacity == 100

    def test_missing_source(self):
        """Test construction without a source."""
        with pytest.raises(MissingFilesystemError):
            CachingFS(None)

    def test_options(self):
        """Test custom and non-positive sizes."""
        cfs = CachingFS(caching_test_files(), CachingFSConfig(max_entry_count=5, initial_capacity=0))

        assert cfs.cache.config.max_entries == 5
        assert cfs.cache.config.initial_capacity == 5


class TestCachingFSReadFile:
    """Tests for cached whole-file reads."""

    def test_read_existing_file(self):
        """Test a single read."""
        cfs = CachingFS(caching_test_files())

        assert cfs.read_file("cached.txt") == b"cached content"

    def test_second_read_served_from_cache(self):
        """Test that the source is read once."""
        source = caching_test_files()
        cfs = CachingFS(source)

        first = cfs.read_file("cached.txt")
        second = cfs.read_file("cached.txt")

        assert first == second == b"cached content"
        assert source.get_stats().reads == 1
        assert cfs.get_cache_stats().hits == 1

    def test_multiple_files(self):
        """Test reading several files."""
        cfs = CachingFS(caching_test_files())

        assert cfs.read_file("cached.txt") == b"cached content"
        assert cfs.read_file("test.css") == b"body { color: red; }"
        assert cfs.read_file("large.js") == b"console.log('large file content');"

    def test_not_found(self):
        """Test that a missing file is a standard not-found error."""
        cfs = CachingFS(caching_test_files())

        with pytest.raises(FileNotFoundError) as excinfo:
            cfs.read_file("nonexistent.txt")

        assert isinstance(excinfo.value.__cause__, EntryNotFoundError)

    def test_permission_error_passes_through(self):
        """Test that permission errors are not reported as not found."""
        source = MemorySource({"locked.txt": MemoryFile(b"x", readable=False)})
        cfs = CachingFS(source)

        with pytest.raises(PermissionError) as excinfo:
            cfs.read_file("locked.txt")

        assert not isinstance(excinfo.value, FileNotFoundError)

    def test_errors_not_cached(self):
        """Test that a file appearing after a failed read is picked up."""
        source = MemorySource()
        cfs = CachingFS(source)

        with pytest.raises(FileNotFoundError):
            cfs.read_file("late.txt")
        source.add("late.txt", b"here now")

        assert cfs.read_file("late.txt") == b"here now"

    def test_failed_reads_are_recorded(self):
        """Test that every failed read is counted in the source stats."""
        source = MemorySource({"locked.txt": MemoryFile(b"x", readable=False)})
        cfs = CachingFS(source)

        with pytest.raises(FileNotFoundError):
            cfs.read_file("missing.txt")
        assert cfs.get_stats().errors == 1
        assert "file does not exist" in cfs.get_stats().last_error

        with pytest.raises(PermissionError):
            cfs.read_file("locked.txt")
        assert cfs.get_stats().errors == 2

        assert cfs.get_stats().reads == 2

    def test_other_errors_are_recorded(self):
        """Test that unrelated source errors are counted too."""
        cfs = CachingFS(ErrorSource())

        with pytest.raises(ValueError):
            cfs.read_file("invalid_error")

        assert cfs.get_stats().errors == 1
        assert cfs.get_stats().last_error == "invalid argument"

    def test_cached_bytes_are_not_refreshed(self):
        """Test that a changed file keeps serving the loaded bytes."""
        source = MemorySource({"a.txt": b"old"})
        cfs = CachingFS(source)

        cfs.read_file("a.txt")
        source.add("a.txt", b"new")

        assert cfs.read_file("a.txt") == b"old"

    @pytest.mark.parametrize("path", ["", "../../../etc/passwd", "..\\..\\windows\\system32", "/etc/passwd"])
    def test_invalid_paths(self, path):
        """Test that invalid paths fail."""
        cfs = CachingFS(caching_test_files())

        with pytest.raises(FileNotFoundError):
            cfs.read_file(path)

    def test_binary_and_empty_content(self):
        """Test arbitrary byte content."""
        binary = bytes([0x00, 0x01, 0x02, 0x03, 0xFF, 0xFE, 0xFD])
        large = bytes(i % 256 for i in range(1024 * 1024))
        cfs = CachingFS(MemorySource({"binary.bin": binary, "empty.txt": b"", "large.bin": large}))

        assert cfs.read_file("binary.bin") == binary
        assert cfs.read_file("empty.txt") == b""
        assert cfs.read_file("large.bin") == large

    def test_fills_beyond_capacity(self):
        """Test that every file stays readable when the cache overflows."""
        count = 2000
        source = MemorySource({f"file{i}.txt": f"content of file {i}".encode() for i in range(count)})
        cfs = CachingFS(source)

        for i in range(count):
            assert cfs.read_file(f"file{i}.txt") == f"content of file {i}".encode()

        assert len(cfs.cache) <= 1000


class TestCachingFSOpen:
    """Tests for streamed reads."""

    def test_open_bypasses_cache(self):
        """Test that streams come from the source every time."""
        source = caching_test_files()
        cfs = CachingFS(source)

        for _ in range(2):
            with cfs.open_stream("cached.txt") as stream:
                assert stream.read() == b"cached content"

        assert source.get_stats().opens == 2
        assert len(cfs.cache) == 0

    def test_open_not_found(self):
        """Test that stream errors pass through."""
        cfs = CachingFS(caching_test_files())

        with pytest.raises(FileNotFoundError) as excinfo:
            cfs.open_stream("nonexistent.txt")

        assert excinfo.value.__cause__ is None

    def test_open_other_error(self):
        """Test that stream errors are not translated."""
        cfs = CachingFS(ErrorSource())

        with pytest.raises(NotImplementedError):
            cfs.open_stream("anything")


class TestCachingFSConcurrency:
    """Tests for concurrent reads."""

    def test_concurrent_first_reads_load_once(self):
        """Test that concurrent misses on one path cause a single source read."""
        source = GatedSource({"cached.txt": b"cached content"})
        cfs = CachingFS(source)

        n = 100
        barrier = threading.Barrier(n + 1)
        results = []
        lock = threading.Lock()

        def worker():
            barrier.wait()
            data = cfs.read_file("cached.txt")
            with lock:
                results.append(data)

        threads = [threading.Thread(target=worker) for _ in range(n)]
        for t in threads:
            t.start()
        barrier.wait()
        time.sleep(0.2)
        source.release.set()
        for t in threads:
            t.join(timeout=10)

        assert source.get_stats().reads == 1
        assert len(results) == n
        assert all(data == b"cached content" for data in results)

    def test_concurrent_reads_of_different_files(self):
        """Test concurrent reads spread over several paths."""
        source = caching_test_files()
        cfs = CachingFS(source)
        files = ["cached.txt", "test.css", "large.js", "nested/file.js"]
        expected = {path: source.read_file(path) for path in files}
        source.reset_stats()

        results = {path: [] for path in files}
        errors = []
        lock = threading.Lock()

        def worker(path):
            try:
                data = cfs.read_file(path)
            except Exception as e:
                errors.append(e)
                return
            with lock:
                results[path].append(data)

        threads = [threading.Thread(target=worker, args=(path,)) for path in files for _ in range(25)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        for path in files:
            assert len(results[path]) == 25
            assert all(data == expected[path] for data in results[path])
        assert source.get_stats().reads == len(files)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
