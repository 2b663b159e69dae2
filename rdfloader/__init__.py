"""RDF graph loader: format negotiation and statement translation on top of rdflib."""

__version__ = "0.1.0"
__author__ = "rdfloader contributors"

from functools import lru_cache

from .config import LoaderConfig
from .core.errors import GraphLoadError
from .core.loader import GraphLoader
from .formats import (
    FormatRegistry,
    ParserDispatcher,
    RDFFormat,
    StatementTranslator,
    RDFXML,
    N3,
    TURTLE,
    TRIX,
    RDFA,
)
from .models import (
    Bnode,
    Literal,
    MemoryGraph,
    MemoryGraphFactory,
    Uri,
)


@lru_cache(maxsize=1)
def get_default_loader() -> GraphLoader:
    """Return the shared GraphLoader built from the default configuration."""
    return GraphLoader()


def load_graph(source, base_identifier=None):
    """Load a graph from a URL, a path or a package resource name."""
    return get_default_loader().load_graph(source, base_identifier)


def load_graph_url(url):
    """Fetch and parse a graph from an HTTP(S) URL."""
    return get_default_loader().load_graph_url(url)


def load_graph_resource(file_name, base_identifier=None, package=None):
    """Load a graph from a resource inside a Python package."""
    return get_default_loader().load_graph_resource(file_name, base_identifier, package)


def load_graph_file(path, base_identifier=None):
    """Load a graph from a local file."""
    return get_default_loader().load_graph_file(path, base_identifier)


__all__ = [
    # Loading
    "GraphLoader",
    "LoaderConfig",
    "GraphLoadError",
    "get_default_loader",
    "load_graph",
    "load_graph_url",
    "load_graph_resource",
    "load_graph_file",
    # Formats
    "FormatRegistry",
    "ParserDispatcher",
    "RDFFormat",
    "StatementTranslator",
    "RDFXML",
    "N3",
    "TURTLE",
    "TRIX",
    "RDFA",
    # Graph model
    "Uri",
    "Bnode",
    "Literal",
    "MemoryGraph",
    "MemoryGraphFactory",
]
