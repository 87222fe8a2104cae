"""RoadStatic Media Types - Ordered First-Match Media-Type Rules.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Pattern, Union

logger = logging.getLogger(__name__)

MIME_TYPE_CSS = "text/css"
MIME_TYPE_JS = "text/javascript"
MIME_TYPE_JSON = "application/json"
MIME_TYPE_HTML = "text/html"
MIME_TYPE_PNG = "image/png"
MIME_TYPE_WOFF2 = "font/woff2"
MIME_TYPE_WOFF = "font/woff"
MIME_TYPE_JPG = "image/jpeg"
MIME_TYPE_TEXT = "text/plain"
MIME_TYPE_UNKNOWN = "application/octet-stream"


@dataclass(frozen=True)
class MimeTyper:
    """A media-type rule.

    Attributes:
        expr: Pattern searched for in the file path
        mime_type: Media type declared when the pattern matches
    """

    expr: Pattern[str]
    mime_type: str

    def matches(self, path: str) -> bool:
        return self.expr.search(path) is not None


def default_typers() -> List[MimeTyper]:
    """Build the default rule list.

    Returns:
        Fresh list of rules; order is significant as first match wins
    """
    return [
        MimeTyper(re.compile(r"\.css$"), MIME_TYPE_CSS),
        MimeTyper(re.compile(r"\.js$"), MIME_TYPE_JS),
        MimeTyper(re.compile(r"\.html$"), MIME_TYPE_HTML),
        MimeTyper(re.compile(r"\.json$"), MIME_TYPE_JSON),
        MimeTyper(re.compile(r"\.png$"), MIME_TYPE_PNG),
        MimeTyper(re.compile(r"\.woff2$"), MIME_TYPE_WOFF2),
        MimeTyper(re.compile(r"\.woff$"), MIME_TYPE_WOFF),
        MimeTyper(re.compile(r"\.jpeg$"), MIME_TYPE_JPG),
        MimeTyper(re.compile(r"\.jpg$"), MIME_TYPE_JPG),
        MimeTyper(re.compile(r"\.txt$"), MIME_TYPE_TEXT),
    ]


class MimeTypeTable:
    """Ordered list of media-type rules where the first match wins.

    Registration and removal are configuration-phase operations. The table
    takes no lock, so mutate it only before requests are being served.

    Example:
        table = MimeTypeTable()
        table.register(r"\\.svg$", "image/svg+xml")
        table.infer("logo.svg")  # "image/svg+xml"
    """

    def __init__(self, typers: Union[List[MimeTyper], None] = None, fallback: str = MIME_TYPE_UNKNOWN):
        """Initialize table.

        Args:
            typers: Initial rules; the defaults when None
            fallback: Media type used when no rule matches
        """
        self._typers: List[MimeTyper] = list(typers) if typers is not None else default_typers()
        self.fallback = fallback

    def infer(self, path: str) -> str:
        """Infer the media type of a path.

        Args:
            path: File path

        Returns:
            Media type of the first matching rule, or the fallback
        """
        for typer in self._typers:
            if typer.matches(path):
                return typer.mime_type
        return self.fallback

    def register(self, expr: Union[str, Pattern[str]], mime_type: str, priority: bool = False) -> bool:
        """Add a rule.

        Args:
            expr: Regular expression (string or compiled)
            mime_type: Media type to declare
            priority: Insert at the front instead of the end

        Returns:
            True if added, False if mime_type is already registered
        """
        if self.is_registered(mime_type):
            return False

        if isinstance(expr, str):
            expr = re.compile(expr)
        typer = MimeTyper(expr, mime_type)

        if priority:
            self._typers.insert(0, typer)
        else:
            self._typers.append(typer)
        logger.debug(f"Registered media type {mime_type} for {expr.pattern!r}")
        return True

    def remove(self, mime_type: str) -> bool:
        """Remove the rule declaring a media type.

        Args:
            mime_type: Media type to remove

        Returns:
            True if removed, False if it wasn't registered
        """
        for i, typer in enumerate(self._typers):
            if typer.mime_type == mime_type:
                del self._typers[i]
                return True
        return False

    def is_registered(self, mime_type: str) -> bool:
        """Check whether a media type has a rule.

        Args:
            mime_type: Media type

        Returns:
            True if registered
        """
        return any(typer.mime_type == mime_type for typer in self._typers)

    def mime_types(self) -> List[str]:
        """Get registered media types in evaluation order.

        Returns:
            List of media types
        """
        return [typer.mime_type for typer in self._typers]

    def __iter__(self) -> Iterator[MimeTyper]:
        return iter(list(self._typers))

    def __len__(self) -> int:
        return len(self._typers)

    def __getitem__(self, index: int) -> MimeTyper:
        return self._typers[index]

    def __repr__(self) -> str:
        return f"MimeTypeTable(rules={len(self._typers)})"


__all__ = [
    "MimeTyper",
    "MimeTypeTable",
    "default_typers",
    "MIME_TYPE_CSS",
    "MIME_TYPE_JS",
    "MIME_TYPE_JSON",
    "MIME_TYPE_HTML",
    "MIME_TYPE_PNG",
    "MIME_TYPE_WOFF2",
    "MIME_TYPE_WOFF",
    "MIME_TYPE_JPG",
    "MIME_TYPE_TEXT",
    "MIME_TYPE_UNKNOWN",
]
