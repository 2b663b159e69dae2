"""
Error taxonomy for graph loading.

Internal failures are raised as one of the RDFLoaderError subclasses below.
The public load_graph* entry points never let those escape: they re-raise
every failure as GraphLoadError, an OSError, keeping the internal error on
``cause`` and ``__cause__`` for diagnostics.
"""

from typing import Any, Optional


class RDFLoaderError(Exception):
    """Base class for internal loader errors."""
    pass


class NotFoundError(RDFLoaderError):
    """The resource cannot be located or opened."""
    pass


class UnsupportedFormatError(RDFLoaderError):
    """The resolved format has no registered parser.

    Attributes:
        format_name: Canonical name of the format that could not be parsed
    """

    def __init__(self, format_name: str, message: str = ""):
        self.format_name = format_name
        super().__init__(message or f"Unknown RDF syntax: {format_name}")


class FormatError(RDFLoaderError):
    """The bytes do not conform to the resolved format's grammar."""
    pass


class TranslationError(RDFLoaderError):
    """A statement violates the subject/predicate/object role constraints.

    Attributes:
        statement: The offending (subject, predicate, object) as emitted by the parser
    """

    def __init__(self, message: str, statement: Optional[Any] = None):
        self.statement = statement
        super().__init__(message)


class StreamError(RDFLoaderError):
    """The underlying network or local stream failed."""
    pass


class ResourceLimitError(RDFLoaderError):
    """The document is too large to load with the memory available."""
    pass


class GraphLoadError(OSError):
    """Single failure category raised by every load_graph* entry point.

    Attributes:
        source: The URL, file or resource name that was being loaded
        cause: The internal error that aborted the load
    """

    def __init__(self, message: str, source: Optional[str] = None, cause: Optional[BaseException] = None):
        self.source = source
        self.cause = cause
        super().__init__(message)
