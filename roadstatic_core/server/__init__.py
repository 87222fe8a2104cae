"""Server module - Content resolution and HTTP serving of assets."""

from roadstatic_core.server.mime import (
    MimeTyper,
    MimeTypeTable,
    default_typers,
    MIME_TYPE_CSS,
    MIME_TYPE_JS,
    MIME_TYPE_JSON,
    MIME_TYPE_HTML,
    MIME_TYPE_PNG,
    MIME_TYPE_WOFF2,
    MIME_TYPE_WOFF,
    MIME_TYPE_JPG,
    MIME_TYPE_TEXT,
    MIME_TYPE_UNKNOWN,
)
from roadstatic_core.server.policies import (
    ErrorTranslator,
    DefaultErrorTranslator,
    HeaderPolicy,
    CacheControlHeaders,
)
from roadstatic_core.server.asset_server import AssetServer, BROTLI_ENCODING

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
    "ErrorTranslator",
    "DefaultErrorTranslator",
    "HeaderPolicy",
    "CacheControlHeaders",
    "AssetServer",
    "BROTLI_ENCODING",
]
