"""
Core infrastructure for the RDF graph loader.

- Error taxonomy (GraphLoadError and the internal error kinds)
- HTTP request/response handling (RequestHandler, ResponseHandler)
- Memory pre-flight checks (MemoryManager)

The GraphLoader itself lives in rdfloader.core.loader and is re-exported
from the top-level package.
"""

from .errors import (
    RDFLoaderError,
    NotFoundError,
    UnsupportedFormatError,
    FormatError,
    TranslationError,
    StreamError,
    ResourceLimitError,
    GraphLoadError,
)
from .http_client import RequestHandler, ResponseHandler
from .memory import MemoryManager

__all__ = [
    # Errors
    "RDFLoaderError",
    "NotFoundError",
    "UnsupportedFormatError",
    "FormatError",
    "TranslationError",
    "StreamError",
    "ResourceLimitError",
    "GraphLoadError",
    # HTTP
    "RequestHandler",
    "ResponseHandler",
    # Memory
    "MemoryManager",
]
