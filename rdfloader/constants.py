"""
Centralized constants for the RDF graph loader.

Groups the fixed values used across the package:
- HTTPConfig: Outbound request header defaults
- FormatNames: Canonical names of the built-in serializations
- MimeTypeOverrides: Content types answered outside the format registry
- MemoryLimits: Pre-flight memory check thresholds
"""

from typing import Dict

from . import __version__


class HTTPConfig:
    """Default values for content negotiation requests."""

    PRODUCT = "rdfloader"
    USER_AGENT = f"{PRODUCT}/{__version__}"
    ACCEPT_CHARSET = "utf-8"
    ACCEPT_ENCODING = "gzip"
    GZIP_ENCODING = "gzip"
    NOT_FOUND_STATUS_CODES = (404, 410)


class FormatNames:
    """Canonical names of the built-in RDF serializations."""

    RDFXML = "RDF/XML"
    N3 = "N3"
    TURTLE = "Turtle"
    TRIX = "TriX"
    RDFA = "RDFa"

    DEFAULT = RDFXML


class MimeTypeOverrides:
    """
    Content types that servers commonly send but the registry does not carry.

    Only consulted for HTTP responses, after the registry lookup fails.
    """

    TURTLE = "text/turtle"
    N3 = "text/n3"

    MAPPING: Dict[str, str] = {
        TURTLE: FormatNames.TURTLE,
        N3: FormatNames.N3,
    }


class MemoryLimits:
    """Thresholds for the local file memory pre-flight check."""

    MIN_AVAILABLE_MEMORY_MB = 256
    MAX_SAFE_FILE_MB = 500
    # rdflib keeps roughly 3-4x the document size while building a graph
    MEMORY_MULTIPLIER = 3.5
    LOAD_FACTOR = 0.7
