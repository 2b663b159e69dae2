"""
RDF Parser Module

Maps a resolved RDF format to a streaming parser backed by rdflib's parser
plugins, and defines the statement sink contract parsers feed.

Components:
- StatementSink: Consumer interface receiving parsed statements
- RDFParser: Parses one byte stream and emits its statements to a sink
- ParserDispatcher: Data-driven format name to parser plugin table

RDFa is parsed by pyRdfa, registered below as the rdflib "rdfa" plugin.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, BinaryIO, Dict, Iterator, Mapping, Optional, Protocol, Tuple, runtime_checkable

import rdflib
from rdflib import Dataset, Graph, plugin
from rdflib.parser import Parser, create_input_source
from rdflib.plugin import PluginException

from ..constants import FormatNames
from ..core.errors import FormatError, StreamError, UnsupportedFormatError
from .registry import RDFFormat

logger = logging.getLogger(__name__)

plugin.register("rdfa", Parser, "pyRdfa.rdflibparsers", "RDFaParser")


_normalize_lock = threading.Lock()
_active_parses = 0
_saved_normalize = rdflib.NORMALIZE_LITERALS


@contextmanager
def preserve_literal_labels() -> Iterator[None]:
    """
    Stop rdflib from rewriting literal lexical forms while parsing.

    rdflib canonicalizes typed literals on construction ("010"^^xsd:integer
    becomes "10") unless rdflib.NORMALIZE_LITERALS is False. The flag is
    process-wide: it is switched off while at least one parse is running
    and restored when the last one finishes.
    """
    global _active_parses, _saved_normalize
    with _normalize_lock:
        if _active_parses == 0:
            _saved_normalize = rdflib.NORMALIZE_LITERALS
            rdflib.NORMALIZE_LITERALS = False
        _active_parses += 1
    try:
        yield
    finally:
        with _normalize_lock:
            _active_parses -= 1
            if _active_parses == 0:
                rdflib.NORMALIZE_LITERALS = _saved_normalize


@runtime_checkable
class StatementSink(Protocol):
    """
    Consumer of parsed statements.

    A parser calls start_document() once, handle_statement() for every
    triple in document order, then end_document(). end_document() is
    called even when the parse is aborted.
    """

    def start_document(self) -> None:
        ...

    def handle_statement(self, subject: Any, predicate: Any, obj: Any) -> None:
        ...

    def end_document(self) -> None:
        ...


# Canonical format name -> rdflib parser plugin name
DEFAULT_PARSER_PLUGINS: Dict[str, str] = {
    FormatNames.RDFXML: "xml",
    FormatNames.N3: "n3",
    FormatNames.TURTLE: "turtle",
    FormatNames.TRIX: "trix",
    FormatNames.RDFA: "rdfa",
}

# Canonical format name -> keyword arguments for the rdflib parser.
# pyRdfa treats a stream with no media type as generic XML; HTML pages
# need its html5lib front end.
DEFAULT_PARSER_OPTIONS: Dict[str, Dict[str, Any]] = {
    FormatNames.RDFA: {"media_type": "text/html"},
}


class RDFParser:
    """
    Parser for a single RDF format.

    Each instance wraps a freshly created rdflib parser and a scratch
    rdflib graph that lives only for the duration of one parse() call, so
    blank node labels never leak between documents.
    """

    def __init__(
        self,
        rdf_format: RDFFormat,
        plugin_name: str,
        rdflib_parser: Parser,
        options: Optional[Mapping[str, Any]] = None,
    ):
        self.format = rdf_format
        self.plugin_name = plugin_name
        self.options: Dict[str, Any] = dict(options or {})
        self._parser = rdflib_parser

    def _create_scratch_graph(self) -> Graph:
        """Instantiate the rdflib graph implementation suited to the format."""
        if self.format.supports_contexts:
            return Dataset(default_union=True)
        return Graph()

    def _statements(self, scratch: Graph) -> Iterator[Tuple[Any, Any, Any]]:
        if isinstance(scratch, Dataset):
            # One statement per named graph the triple appears in
            for s, p, o, _ in scratch.quads((None, None, None, None)):
                yield s, p, o
        else:
            yield from scratch

    def parse(self, stream: BinaryIO, base_identifier: str, sink: StatementSink) -> int:
        """
        Parse a byte stream and emit every statement to ``sink``.

        Literal lexical forms are kept exactly as written in the document.

        Args:
            stream: Readable binary stream. The caller owns and closes it.
            base_identifier: Absolute URI used to resolve relative references.
            sink: Receives the parsed statements.

        Returns:
            Number of statements emitted.

        Raises:
            FormatError: If the input is not valid for the format.
            StreamError: If reading the stream fails.
            Any exception raised by the sink propagates unchanged.
        """
        logger.debug(f"Parsing {self.format.name} document (base: {base_identifier})")
        scratch = self._create_scratch_graph()
        source = create_input_source(source=stream, publicID=base_identifier)
        try:
            with preserve_literal_labels():
                self._parser.parse(source, scratch, **self.options)
        except OSError as e:
            logger.error(f"Failed to read {self.format.name} document {base_identifier}: {e}")
            raise StreamError(f"Error reading {base_identifier}: {e}") from e
        except MemoryError:
            raise
        except Exception as e:
            logger.error(f"Failed to parse {self.format.name} document {base_identifier}: {e}")
            raise FormatError(f"Invalid {self.format.name} syntax in {base_identifier}: {e}") from e

        count = 0
        sink.start_document()
        try:
            for subject, predicate, obj in self._statements(scratch):
                sink.handle_statement(subject, predicate, obj)
                count += 1
        finally:
            sink.end_document()

        logger.info(f"Parsed {count} statements from {self.format.name} document {base_identifier}")
        return count

    def __repr__(self) -> str:
        return f"<RDFParser {self.format.name} via rdflib '{self.plugin_name}'>"


class ParserDispatcher:
    """
    Creates a parser for a resolved format.

    Dispatch is a plain lookup in a format name to rdflib plugin table;
    adding a format is a data change. A new parser is created for every
    call, so concurrent loads never share parser state.

    Example:
        >>> dispatcher = ParserDispatcher()
        >>> parser = dispatcher.create_parser(TURTLE)
        >>> parser.parse(stream, "http://example.org/doc.ttl", sink)
    """

    def __init__(
        self,
        plugins: Optional[Mapping[str, str]] = None,
        options: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ):
        """
        Args:
            plugins: Format name to rdflib parser plugin name. Defaults to
                DEFAULT_PARSER_PLUGINS.
            options: Format name to parser keyword arguments. Defaults to
                DEFAULT_PARSER_OPTIONS with the default plugins, else none.
        """
        source = DEFAULT_PARSER_PLUGINS if plugins is None else plugins
        if options is None:
            options = DEFAULT_PARSER_OPTIONS if plugins is None else {}
        self._plugins: Dict[str, str] = {name.lower(): plugin_name for name, plugin_name in source.items()}
        self._options: Dict[str, Dict[str, Any]] = {name.lower(): dict(kwargs) for name, kwargs in options.items()}

    def supports(self, rdf_format: RDFFormat) -> bool:
        """Return True if a parser plugin is registered and installed for the format."""
        plugin_name = self._plugins.get(rdf_format.name.lower())
        if plugin_name is None:
            return False
        try:
            plugin.get(plugin_name, Parser)
        except (PluginException, ImportError):
            return False
        return True

    def create_parser(self, rdf_format: RDFFormat) -> RDFParser:
        """
        Create a new parser bound to ``rdf_format``.

        Raises:
            UnsupportedFormatError: If no parser is registered for the
                format or the rdflib plugin is not installed.
        """
        plugin_name = self._plugins.get(rdf_format.name.lower())
        if plugin_name is None:
            raise UnsupportedFormatError(rdf_format.name)
        try:
            parser_class = plugin.get(plugin_name, Parser)
        except (PluginException, ImportError) as e:
            raise UnsupportedFormatError(
                rdf_format.name,
                f"Unknown RDF syntax: {rdf_format.name} (rdflib parser plugin '{plugin_name}' is not available)",
            ) from e

        logger.debug(f"Created rdflib '{plugin_name}' parser for {rdf_format.name}")
        options = self._options.get(rdf_format.name.lower())
        return RDFParser(rdf_format, plugin_name, parser_class(), options)
