"""
Graph Loader

Loads an RDF graph from an HTTP(S) URL, a local file or a package resource.

For every load the loader:
1. Opens the byte source (HTTP GET with content negotiation headers, a
   local file, or a resource inside a Python package)
2. Determines the base identifier (the resource's own absolute URI unless
   one is given explicitly)
3. Resolves the serialization: Content-Type for HTTP responses, else the
   file extension, falling back to RDF/XML
4. Decompresses the response body if it declares Content-Encoding: gzip
5. Parses into a fresh graph through the StatementTranslator
6. Returns the populated graph

Every failure is raised as GraphLoadError (an OSError) with the internal
error kept as its cause. A graph is only returned once the whole document
has been parsed.

Usage:
    from rdfloader import GraphLoader, LoaderConfig

    loader = GraphLoader(LoaderConfig(timeout=30))
    graph = loader.load_graph_url("https://example.org/data.ttl")
    graph = loader.load_graph_file("ontology.rdf")
    graph = loader.load_graph_resource("/test.n3", package="myapp.data")
"""

import gzip
import importlib.resources
import logging
import os
from contextlib import ExitStack, closing, contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Mapping, Optional, Union
from urllib.parse import urlsplit

from ..config import LoaderConfig
from ..constants import MimeTypeOverrides
from ..formats.parsers import ParserDispatcher, RDFParser
from ..formats.registry import FormatRegistry, RDFFormat, normalize_mime_type
from ..formats.translator import StatementTranslator
from ..models.graph import AppendableGraph, GraphFactory, MemoryGraphFactory
from .errors import GraphLoadError, NotFoundError
from .http_client import RequestHandler, ResponseHandler
from .memory import MemoryManager

logger = logging.getLogger(__name__)

PathType = Union[str, os.PathLike]

_HTTP_SCHEMES = ("http", "https")


def is_http_url(value: str) -> bool:
    """Return True if ``value`` is an absolute http or https URL."""
    parts = urlsplit(value)
    return parts.scheme.lower() in _HTTP_SCHEMES and bool(parts.netloc)


class GraphLoader:
    """
    Loads RDF documents into graphs.

    The loader holds no per-load state: the registry is read-only and every
    load creates its own graph, parser and translator, so one instance can
    serve concurrent loads from several threads.

    Attributes:
        config: LoaderConfig with headers, timeout and file limits
        registry: FormatRegistry used to resolve formats
        dispatcher: ParserDispatcher creating a parser per load
        graph_factory: Factory creating the graph returned by each load
    """

    def __init__(
        self,
        config: Optional[LoaderConfig] = None,
        registry: Optional[FormatRegistry] = None,
        dispatcher: Optional[ParserDispatcher] = None,
        graph_factory: Optional[GraphFactory] = None,
        request_handler: Optional[RequestHandler] = None,
        memory_manager: Optional[MemoryManager] = None,
        mime_type_overrides: Optional[Mapping[str, str]] = None,
    ):
        """
        Args:
            config: Loader configuration (defaults to LoaderConfig()).
            registry: Format table (defaults to the built-in formats).
            dispatcher: Parser factory (defaults to the rdflib plugins).
            graph_factory: Graph factory (defaults to MemoryGraphFactory).
            request_handler: HTTP request executor.
            memory_manager: Memory pre-flight checker for local files.
            mime_type_overrides: Content types resolved outside the registry,
                mapped to format names. Defaults to text/turtle and text/n3.

        Raises:
            ValueError: If config.default_format is not in the registry.
        """
        self.config = config or LoaderConfig()
        self.registry = registry or FormatRegistry.default()
        self.dispatcher = dispatcher or ParserDispatcher()
        self.graph_factory = graph_factory or MemoryGraphFactory()
        self._request_handler = request_handler or RequestHandler(default_timeout=self.config.timeout)
        self._memory = memory_manager or MemoryManager(max_safe_file_mb=self.config.max_safe_file_mb)
        self._mime_type_overrides = dict(
            MimeTypeOverrides.MAPPING if mime_type_overrides is None else mime_type_overrides
        )
        try:
            self._default_format = self.registry.get(self.config.default_format)
        except KeyError as e:
            raise ValueError(f"Invalid default_format: {e}") from e

    @property
    def default_format(self) -> RDFFormat:
        return self._default_format

    # =========================================================================
    # Entry points
    # =========================================================================

    def load_graph(self, source: Union[str, os.PathLike], base_identifier: Optional[str] = None) -> AppendableGraph:
        """
        Load a graph, choosing the entry point from the kind of ``source``.

        - os.PathLike (e.g. pathlib.Path): local file
        - str with an http/https scheme: URL
        - any other str: package resource name

        Args:
            source: What to load.
            base_identifier: Explicit base URI for file and resource loads.
                A URL is always its own base.

        Raises:
            GraphLoadError: If the graph cannot be loaded.
            TypeError: If ``source`` has an unsupported type.
            ValueError: If a base identifier is given for a URL.
        """
        if isinstance(source, os.PathLike):
            return self.load_graph_file(source, base_identifier)
        if isinstance(source, str):
            if is_http_url(source):
                if base_identifier is not None:
                    raise ValueError("The base identifier of a URL load is the URL itself")
                return self.load_graph_url(source)
            return self.load_graph_resource(source, base_identifier)
        raise TypeError(f"Cannot load a graph from {type(source).__name__}")

    def load_graph_url(self, url: str) -> AppendableGraph:
        """
        Fetch and parse a graph from an HTTP(S) URL.

        The format comes from the response Content-Type if declared, else
        from the URL's file extension. The body is gunzipped only when the
        response declares Content-Encoding: gzip.

        Raises:
            GraphLoadError: If the request, format resolution or parse fails.
        """
        with self._failure_boundary(url):
            base = self._check_base_identifier(url)
            logger.info(f"Loading graph from {url}")
            response = self._request_handler.execute(
                "GET", url, "Load graph",
                headers=self.config.request_headers(),
                stream=True,
            )
            with closing(response), ExitStack() as stack:
                ResponseHandler.check(response, "Load graph")
                rdf_format = self._resolve_response_format(response, url)
                parser = self.dispatcher.create_parser(rdf_format)

                stream: BinaryIO = response.raw
                if ResponseHandler.is_gzip_encoded(response):
                    logger.debug(f"Decompressing gzip response from {url}")
                    stream = stack.enter_context(gzip.GzipFile(fileobj=stream, mode="rb"))
                return self._parse(parser, stream, base)

    def load_graph_resource(
        self,
        file_name: str,
        base_identifier: Optional[str] = None,
        package: Optional[str] = None,
    ) -> AppendableGraph:
        """
        Load a graph from a resource shipped inside a Python package.

        Args:
            file_name: Resource path relative to the package; a leading
                '/' is ignored.
            base_identifier: Explicit base URI. Defaults to the resource's
                file URI.
            package: Anchor package. Defaults to config.resource_package.

        Raises:
            GraphLoadError: If the resource does not exist or cannot be parsed.
        """
        anchor = package or self.config.resource_package
        with self._failure_boundary(file_name):
            resource = self._locate_resource(file_name, anchor)
            with importlib.resources.as_file(resource) as path:
                return self.load_graph_file(path, base_identifier)

    def load_graph_file(self, path: PathType, base_identifier: Optional[str] = None) -> AppendableGraph:
        """
        Load a graph from a local file.

        The format is resolved from the file extension (RDF/XML if unknown).

        Args:
            path: File to read.
            base_identifier: Explicit base URI. Defaults to the file's URI.

        Raises:
            GraphLoadError: If the file does not exist or cannot be parsed.
        """
        file_path = Path(path)
        with self._failure_boundary(str(file_path)):
            if not file_path.is_file():
                raise NotFoundError(f"File not found: {file_path}")

            if base_identifier is None:
                base_identifier = file_path.resolve().as_uri()
            base = self._check_base_identifier(base_identifier)

            rdf_format = self.registry.resolve_by_file_name(file_path.name, self._default_format)
            parser = self.dispatcher.create_parser(rdf_format)

            if self.config.check_memory:
                self._memory.ensure_file_fits(file_path, force=self.config.force_large_file)

            logger.info(f"Loading graph from {file_path} as {rdf_format.name}")
            with open(file_path, "rb") as stream:
                return self._parse(parser, stream, base)

    # =========================================================================
    # Steps
    # =========================================================================

    def _parse(self, parser: RDFParser, stream: BinaryIO, base: str) -> AppendableGraph:
        graph = self.graph_factory.create_graph()
        translator = StatementTranslator(graph)
        parser.parse(stream, base, translator)
        logger.info(f"Loaded {translator.statement_count} statements from {base}")
        return graph

    def _resolve_response_format(self, response, url: str) -> RDFFormat:
        """Resolve the format of an HTTP response."""
        content_type = ResponseHandler.content_type(response)
        if content_type is None:
            rdf_format = self.registry.resolve_by_file_name(urlsplit(url).path, self._default_format)
            logger.debug(f"No Content-Type from {url}, resolved {rdf_format.name} from file name")
            return rdf_format

        mime_type = normalize_mime_type(content_type)
        rdf_format = self.registry.resolve_by_mime_type(mime_type)
        if rdf_format is not None:
            logger.debug(f"Content-Type {mime_type} resolved to {rdf_format.name}")
            return rdf_format

        override = self._mime_type_overrides.get(mime_type)
        if override is not None and override.lower() in {fmt.name.lower() for fmt in self.registry}:
            rdf_format = self.registry.get(override)
            logger.debug(f"Content-Type {mime_type} mapped to {rdf_format.name}")
            return rdf_format

        logger.warning(
            f"Unrecognized Content-Type '{mime_type}' from {url}, "
            f"assuming {self._default_format.name}"
        )
        return self._default_format

    @staticmethod
    def _locate_resource(file_name: str, package: str):
        name = file_name.lstrip("/")
        if not name:
            raise NotFoundError("File not found: empty resource name")
        try:
            root = importlib.resources.files(package)
        except ModuleNotFoundError as e:
            raise NotFoundError(f"Resource package not found: {package}") from e

        resource = root.joinpath(name)
        if not resource.is_file():
            raise NotFoundError(f"File not found: {file_name}")
        return resource

    @staticmethod
    def _check_base_identifier(base_identifier: str) -> str:
        if not isinstance(base_identifier, str) or not urlsplit(base_identifier).scheme:
            raise ValueError(f"Base identifier must be an absolute URI: {base_identifier!r}")
        return base_identifier

    @contextmanager
    def _failure_boundary(self, source: str) -> Iterator[None]:
        """Re-raise any failure inside the block as GraphLoadError."""
        try:
            yield
        except GraphLoadError:
            raise
        except MemoryError:
            raise
        except Exception as e:
            logger.error(f"Failed to load graph from {source}: {e}")
            raise GraphLoadError(f"Failed to load graph from {source}: {e}", source=source, cause=e) from e
