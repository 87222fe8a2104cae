"""RoadStatic Response Policies - Error Translation and Response Headers.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE = 604800  # 7 days


class ErrorTranslator(ABC):
    """Turns a failed asset read into an HTTP response."""

    @abstractmethod
    def translate(self, request: Request, error: BaseException) -> Response:
        """Build the error response.

        Args:
            request: Request being served
            error: Error raised while reading the asset

        Returns:
            Response to send
        """
        pass


class DefaultErrorTranslator(ErrorTranslator):
    """Maps not-found to 404, permission denied to 403 and anything else to 500.

    The body is the error's own message as ``text/plain``.
    """

    def status_for(self, error: BaseException) -> int:
        if isinstance(error, FileNotFoundError):
            return 404
        if isinstance(error, PermissionError):
            return 403
        return 500

    def translate(self, request: Request, error: BaseException) -> Response:
        status_code = self.status_for(error)
        if status_code >= 500:
            logger.error(f"Failed to serve {request.url.path}: {error!r}")
        return Response(
            content=str(error),
            status_code=status_code,
            headers={"Content-Type": "text/plain"},
        )


class HeaderPolicy(ABC):
    """Adds headers to a successful asset response."""

    @abstractmethod
    def apply(self, headers: MutableHeaders, data: bytes) -> None:
        """Add headers before Content-Type and Content-Encoding are set.

        Args:
            headers: Response headers to modify
            data: Asset bytes about to be sent
        """
        pass


class CacheControlHeaders(HeaderPolicy):
    """Sets Cache-Control so clients keep assets for ``max_age`` seconds."""

    def __init__(self, max_age: int = DEFAULT_MAX_AGE, private: bool = True):
        self.max_age = max_age
        self.private = private

    @property
    def value(self) -> str:
        scope = "private" if self.private else "public"
        return f"{scope}, max-age={self.max_age}"

    def apply(self, headers: MutableHeaders, data: bytes) -> None:
        headers.append("Cache-Control", self.value)

    def __repr__(self) -> str:
        return f"CacheControlHeaders({self.value!r})"


__all__ = [
    "ErrorTranslator",
    "DefaultErrorTranslator",
    "HeaderPolicy",
    "CacheControlHeaders",
    "DEFAULT_MAX_AGE",
]
