"""
RDF Format Registry

Describes the supported RDF serializations and resolves a format from the
weak signals available when loading a document: an HTTP content type or a
file name.

Registration order is fixed: RDF/XML, N3, Turtle, TriX, RDFa. MIME types
and file extensions are matched in that order and the first match wins,
which is why ``.xml`` resolves to RDF/XML rather than TriX.

Usage:
    from rdfloader.formats import FormatRegistry

    registry = FormatRegistry.default()
    registry.resolve_by_mime_type("application/rdf+xml; charset=utf-8")  # RDFXML
    registry.resolve_by_file_name("data.ttl?version=2")                   # TURTLE
    registry.resolve_by_file_name("notes.unknown")                        # RDFXML (default)
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, Iterator, Optional, Tuple

from ..constants import FormatNames, MimeTypeOverrides

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RDFFormat:
    """
    Descriptor of one RDF serialization.

    Attributes:
        name: Canonical format name (e.g. "Turtle").
        mime_types: MIME types, in lookup order. The first is the default.
        default_charset: Charset assumed when none is declared.
        file_extensions: Extensions without the leading dot, in lookup order.
        supports_namespaces: True if the syntax can declare prefixes.
        supports_contexts: True if the syntax can carry named graphs.
    """
    name: str
    mime_types: Tuple[str, ...]
    default_charset: str = "UTF-8"
    file_extensions: Tuple[str, ...] = ()
    supports_namespaces: bool = False
    supports_contexts: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Format name cannot be empty")
        if not self.mime_types:
            raise ValueError(f"Format '{self.name}' must declare at least one MIME type")

    @property
    def default_mime_type(self) -> str:
        return self.mime_types[0]

    @property
    def default_file_extension(self) -> Optional[str]:
        return self.file_extensions[0] if self.file_extensions else None

    def has_mime_type(self, mime_type: str) -> bool:
        return mime_type in self.mime_types

    def has_file_extension(self, extension: str) -> bool:
        return extension in self.file_extensions

    def __str__(self) -> str:
        return f"{self.name} ({self.default_mime_type})"


RDFXML = RDFFormat(
    FormatNames.RDFXML,
    ("application/rdf+xml", "application/xml"),
    "UTF-8",
    ("rdf", "rdfs", "owl", "xml"),
    supports_namespaces=True,
)

N3 = RDFFormat(
    FormatNames.N3,
    ("text/rdf+n3",),
    "UTF-8",
    ("n3",),
    supports_namespaces=True,
)

TURTLE = RDFFormat(
    FormatNames.TURTLE,
    ("application/x-turtle",),
    "UTF-8",
    ("ttl",),
    supports_namespaces=True,
)

TRIX = RDFFormat(
    FormatNames.TRIX,
    ("application/trix",),
    "UTF-8",
    ("xml", "trix"),
    supports_contexts=True,
)

RDFA = RDFFormat(
    FormatNames.RDFA,
    ("application/xhtml+xml", "text/html"),
    "UTF-8",
    ("html", "xhtml", "htm"),
    supports_namespaces=True,
)

BUILTIN_FORMATS: Tuple[RDFFormat, ...] = (RDFXML, N3, TURTLE, TRIX, RDFA)


def normalize_mime_type(mime_type: Optional[str]) -> Optional[str]:
    """
    Strip parameters and case from a content type.

    "Text/Turtle; charset=UTF-8" becomes "text/turtle". Returns None for
    empty input.
    """
    if not mime_type:
        return None
    normalized = mime_type.split(";", 1)[0].strip().lower()
    return normalized or None


def file_extension(name: Optional[str]) -> Optional[str]:
    """
    Extract the lower-cased extension of a file name, path or URL path.

    Query and fragment parts are ignored. Returns None if there is no
    extension.
    """
    if not name:
        return None
    for delimiter in ("#", "?"):
        name = name.split(delimiter, 1)[0]
    base = name.replace("\\", "/").rsplit("/", 1)[-1]
    if "." not in base:
        return None
    extension = base.rsplit(".", 1)[1].lower()
    return extension or None


class FormatRegistry:
    """
    Read-only table of RDF format descriptors.

    The registry is built once from an ordered collection of descriptors
    and never mutated afterwards, so it can be shared between concurrent
    loads.

    Example:
        >>> registry = FormatRegistry([RDFXML, TURTLE])
        >>> registry.resolve_by_mime_type("APPLICATION/X-TURTLE") is TURTLE
        True
    """

    def __init__(self, formats: Iterable[RDFFormat], default_format: Optional[RDFFormat] = None):
        """
        Args:
            formats: Descriptors in registration order.
            default_format: Fallback for file name resolution. Defaults to
                the registered RDF/XML descriptor, else the first one.

        Raises:
            ValueError: If no formats are given or names collide.
        """
        self._formats: Tuple[RDFFormat, ...] = tuple(formats)
        if not self._formats:
            raise ValueError("A format registry needs at least one format")

        self._by_name: Dict[str, RDFFormat] = {}
        for fmt in self._formats:
            key = fmt.name.lower()
            if key in self._by_name:
                raise ValueError(f"Duplicate format name: {fmt.name}")
            self._by_name[key] = fmt

        if default_format is None:
            default_format = self._by_name.get(FormatNames.DEFAULT.lower(), self._formats[0])
        self._default = default_format

    @classmethod
    def default(cls) -> "FormatRegistry":
        """Return the shared registry of built-in formats."""
        return _default_registry()

    @property
    def formats(self) -> Tuple[RDFFormat, ...]:
        return self._formats

    @property
    def default_format(self) -> RDFFormat:
        return self._default

    def get(self, name: str) -> RDFFormat:
        """
        Look up a format by canonical name (case-insensitive).

        Raises:
            KeyError: If no format has that name.
        """
        try:
            return self._by_name[name.lower()]
        except KeyError:
            raise KeyError(
                f"Unknown RDF format '{name}'. "
                f"Registered formats: {[fmt.name for fmt in self._formats]}"
            ) from None

    def resolve_by_mime_type(self, mime_type: Optional[str]) -> Optional[RDFFormat]:
        """
        Resolve a format from a MIME type.

        Parameters after ';' are ignored and matching is case-insensitive.

        Returns:
            The first registered format declaring the type, or None. None
            is not the default: callers decide how to fall back.
        """
        normalized = normalize_mime_type(mime_type)
        if normalized is None:
            return None
        for fmt in self._formats:
            if fmt.has_mime_type(normalized):
                return fmt
        return None

    def resolve_by_file_name(self, name: Optional[str], default: Optional[RDFFormat] = None) -> RDFFormat:
        """
        Resolve a format from a file name, path or URL path.

        Args:
            name: File name. Query and fragment are stripped.
            default: Format returned when nothing matches. Defaults to the
                registry default (RDF/XML).

        Returns:
            The first registered format declaring the extension, else the default.
        """
        fallback = default if default is not None else self._default
        extension = file_extension(name)
        if extension is not None:
            for fmt in self._formats:
                if fmt.has_file_extension(extension):
                    return fmt
        logger.debug(f"No format registered for '{name}', using {fallback.name}")
        return fallback

    def accept_header(self) -> str:
        """
        Build the HTTP Accept header value for content negotiation.

        Lists RDF/XML, Turtle, N3 and TriX. Turtle and N3 are advertised
        with their current media types (text/turtle, text/n3), which the
        loader maps back through MimeTypeOverrides.
        """
        preferred = {name: mime for mime, name in MimeTypeOverrides.MAPPING.items()}
        advertised = []
        for name in (FormatNames.RDFXML, FormatNames.TURTLE, FormatNames.N3, FormatNames.TRIX):
            fmt = self._by_name.get(name.lower())
            if fmt is not None:
                advertised.append(preferred.get(fmt.name, fmt.default_mime_type))
        return ",".join(advertised)

    def __iter__(self) -> Iterator[RDFFormat]:
        return iter(self._formats)

    def __len__(self) -> int:
        return len(self._formats)

    def __contains__(self, fmt: object) -> bool:
        return fmt in self._formats


@lru_cache(maxsize=1)
def _default_registry() -> FormatRegistry:
    return FormatRegistry(BUILTIN_FORMATS)
