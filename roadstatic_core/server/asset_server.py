"""RoadStatic Asset Server - Serves Files from a File Source over HTTP.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Optional, Pattern, Tuple, Union

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Mount
from starlette.types import Receive, Scope, Send

from roadstatic_core.errors import (
    AbsoluteFSPrefixError,
    BadCompressedSuffixError,
    BadFSPrefixError,
    EmptyRouteError,
    MissingFilesystemError,
)
from roadstatic_core.server.mime import MimeTypeTable
from roadstatic_core.server.policies import (
    CacheControlHeaders,
    DefaultErrorTranslator,
    ErrorTranslator,
    HeaderPolicy,
)
from roadstatic_core.store.backend import FileSource

logger = logging.getLogger(__name__)

BROTLI_ENCODING = "br"


class AssetServer:
    """ASGI application serving static assets from a file source.

    For a request path the server strips ``route``, prepends ``fs_prefix``
    and, when ``brotli_suffix`` is set, prefers the pre-compressed variant
    ``path + brotli_suffix``. The media type always comes from the
    uncompressed name.

    Configuration (``fs_prefix``, ``brotli_suffix``, ``error_translator``,
    ``header_policy`` and the media-type table) is plain attribute state with
    no locking: set it up completely, call ``check()``, then start serving.

    Reads block, so the ASGI entry point runs them in Starlette's threadpool;
    pair the server with a ``CachingFS`` to keep repeated reads in memory.

    Example:
        server = AssetServer("/static/", CachingFS(DirectorySource("public")))
        server.brotli_suffix = ".br"
        server.check()
        app = Starlette(routes=[server.as_mount()])
    """

    def __init__(self, route: str, files: Optional[FileSource]):
        """Initialize asset server.

        Args:
            route: URL path prefix stripped from incoming requests
            files: Source to read assets from

        Raises:
            EmptyRouteError: If route is empty
            MissingFilesystemError: If files is None
        """
        if not route:
            raise EmptyRouteError()
        if files is None:
            raise MissingFilesystemError()

        self.route = route
        self.files: Optional[FileSource] = files
        self.typers = MimeTypeTable()
        self.fs_prefix = ""
        self.brotli_suffix = ""
        self.error_translator: Optional[ErrorTranslator] = DefaultErrorTranslator()
        self.header_policy: Optional[HeaderPolicy] = CacheControlHeaders()

        logger.info(f"Asset server for {route} created over {files!r}")

    def check(self) -> None:
        """Verify the server is properly configured.

        Raises:
            ConfigurationError: The subclass naming the first problem found
        """
        if not self.route:
            raise EmptyRouteError()
        if self.files is None:
            raise MissingFilesystemError()
        if self.brotli_suffix and not self.brotli_suffix.startswith("."):
            raise BadCompressedSuffixError()
        if self.fs_prefix:
            if self.fs_prefix.startswith("/"):
                raise AbsoluteFSPrefixError()
            if not self.fs_prefix.endswith("/"):
                raise BadFSPrefixError()

    def register_mime_type(
        self,
        expr: Union[str, Pattern[str]],
        mime_type: str,
        priority: bool = False,
    ) -> bool:
        """Add a media-type rule.

        Args:
            expr: Pattern searched for in the file path
            mime_type: Media type to declare
            priority: Check this rule before all existing ones

        Returns:
            True on success, False if mime_type is already registered
        """
        return self.typers.register(expr, mime_type, priority)

    def remove_mime_type(self, mime_type: str) -> bool:
        """Remove a media-type rule.

        Returns:
            True on success, False if mime_type wasn't registered
        """
        return self.typers.remove(mime_type)

    def is_mime_type_registered(self, mime_type: str) -> bool:
        """Check whether a media type has a rule.

        Args:
            mime_type: Media type

        Returns:
            True if registered
        """
        return self.typers.is_registered(mime_type)

    def infer_mime_type(self, path: str) -> str:
        """Infer the media type of a path, ignoring the compressed suffix.

        Args:
            path: File path

        Returns:
            Media type
        """
        if self.brotli_suffix and path.endswith(self.brotli_suffix):
            path = path[: -len(self.brotli_suffix)]
        return self.typers.infer(path)

    def lookup_path(self, request_path: str) -> str:
        """Map a request path to a source path.

        Args:
            request_path: URL path of the request

        Returns:
            Path to look up in the source
        """
        if request_path.startswith(self.route):
            request_path = request_path[len(self.route):]
        return f"{self.fs_prefix}{request_path}"

    def read_asset(self, path: str) -> Tuple[bytes, bool]:
        """Read an asset, preferring its compressed variant.

        Args:
            path: Source path (route stripped, fs_prefix applied)

        Returns:
            (data, is_compressed)

        Raises:
            Whatever the source raised for the last read attempted
        """
        suffix = self.brotli_suffix
        compressed_requested = bool(suffix) and path.endswith(suffix)

        if suffix and not compressed_requested:
            try:
                return self.files.read_file(f"{path}{suffix}"), True
            except Exception as e:
                logger.debug(f"No compressed variant for {path}: {e}")

        data = self.files.read_file(path)
        return data, compressed_requested

    def serve(self, request: Request) -> Response:
        """Serve one request. Blocks on source reads.

        Args:
            request: Incoming request; only the path is consulted

        Returns:
            Asset response, or whatever the error translator produced
        """
        path = self.lookup_path(request.url.path)

        try:
            data, is_compressed = self.read_asset(path)
        except Exception as e:
            if self.error_translator is not None:
                return self.error_translator.translate(request, e)
            logger.debug(f"Read of {path} failed with no error translator: {e}")
            return Response()

        response = Response(content=data, status_code=200)
        if self.header_policy is not None:
            self.header_policy.apply(response.headers, data)
        response.headers["Content-Type"] = self.infer_mime_type(path)
        if is_compressed:
            response.headers["Content-Encoding"] = BROTLI_ENCODING
        return response

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        assert scope["type"] == "http"
        request = Request(scope, receive)
        response = await run_in_threadpool(self.serve, request)
        await response(scope, receive, send)

    def as_mount(self, name: Optional[str] = None) -> Mount:
        """Build a Starlette route that forwards the server's route prefix here.

        Args:
            name: Optional route name

        Returns:
            Mount route
        """
        return Mount(self.route.rstrip("/"), app=self, name=name)

    def __repr__(self) -> str:
        return f"AssetServer(route={self.route!r}, files={self.files!r})"


__all__ = ["AssetServer", "BROTLI_ENCODING"]
