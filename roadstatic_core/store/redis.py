"""RoadStatic Redis Source - Network File Source backed by Redis.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import errno
import io
import logging
import threading
from dataclasses import dataclass
from typing import Any, BinaryIO, Optional

import redis

from roadstatic_core.store.backend import FileSource, valid_path

logger = logging.getLogger(__name__)


@dataclass
class RedisSourceConfig:
    """Redis source configuration.

    Attributes:
        host: Redis host
        port: Redis port
        db: Redis database number
        password: Redis password
        socket_timeout: Socket timeout
        socket_connect_timeout: Connection timeout
        max_connections: Connection pool size
        prefix: Key prefix prepended to every file path
    """

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: Optional[str] = None
    socket_timeout: float = 5.0
    socket_connect_timeout: float = 5.0
    max_connections: int = 10
    prefix: str = "assets:"


class RedisSource(FileSource):
    """File source that reads file bytes from Redis string keys.

    Each file is stored whole under ``prefix + path``. The connection is
    established lazily on first use, so constructing a source never touches
    the network.

    Error mapping:
    - missing key -> FileNotFoundError
    - authentication/ACL failure -> PermissionError
    - anything else raised by the client passes through unchanged

    Example:
        source = RedisSource(RedisSourceConfig(host="redis.local"))
        source.put("app.js", b"console.log('hi');")
        data = source.read_file("app.js")
    """

    def __init__(
        self,
        config: Optional[RedisSourceConfig] = None,
        client: Optional[Any] = None,
    ):
        """Initialize Redis source.

        Args:
            config: Redis configuration
            client: Pre-built client; skips pool creation when given
        """
        super().__init__()
        self.config = config or RedisSourceConfig()
        self._client: Optional[Any] = client
        self._pool: Optional[redis.ConnectionPool] = None
        self._connect_lock = threading.Lock()

    def _ensure_connected(self) -> Any:
        """Ensure Redis connection exists.

        Returns:
            Redis client
        """
        if self._client is not None:
            return self._client

        with self._connect_lock:
            if self._client is not None:
                return self._client

            self._pool = redis.ConnectionPool(
                host=self.config.host,
                port=self.config.port,
                db=self.config.db,
                password=self.config.password,
                socket_timeout=self.config.socket_timeout,
                socket_connect_timeout=self.config.socket_connect_timeout,
                max_connections=self.config.max_connections,
                decode_responses=False,
            )
            self._client = redis.Redis(connection_pool=self._pool)
            logger.info(f"Connected to Redis at {self.config.host}:{self.config.port}")
            return self._client

    def _make_key(self, path: str) -> str:
        return f"{self.config.prefix}{path}"

    def _fetch(self, op: str, path: str) -> bytes:
        if not valid_path(path):
            error: OSError = FileNotFoundError(
                errno.ENOENT, f"{op} {path}: file does not exist", path
            )
            self._record_error(error)
            raise error

        try:
            data = self._ensure_connected().get(self._make_key(path))
        except (redis.exceptions.AuthenticationError, redis.exceptions.NoPermissionError) as e:
            self._record_error(e)
            raise PermissionError(errno.EACCES, f"{op} {path}: {e}", path) from e
        except Exception as e:
            logger.error(f"Redis {op} error for {path}: {e}")
            self._record_error(e)
            raise

        if data is None:
            error = FileNotFoundError(errno.ENOENT, f"{op} {path}: file does not exist", path)
            self._record_error(error)
            raise error
        return bytes(data)

    def open_stream(self, path: str) -> BinaryIO:
        """Open a file as an in-memory stream.

        Args:
            path: File path

        Returns:
            BytesIO over the stored bytes
        """
        self._record_open()
        return io.BytesIO(self._fetch("open", path))

    def read_file(self, path: str) -> bytes:
        """Read a whole file.

        Args:
            path: File path

        Returns:
            File contents
        """
        self._record_read()
        return self._fetch("read", path)

    def put(self, path: str, data: bytes) -> None:
        """Store a file.

        Args:
            path: File path
            data: File contents
        """
        if not valid_path(path):
            raise ValueError(f"invalid path: {path!r}")
        self._ensure_connected().set(self._make_key(path), data)

    def close(self) -> None:
        """Close Redis connection."""
        if self._pool:
            self._pool.disconnect()
            self._pool = None
            self._client = None

    def __repr__(self) -> str:
        return f"RedisSource(host={self.config.host}, port={self.config.port})"


__all__ = ["RedisSource", "RedisSourceConfig"]
