"""
RDF Format Support Package

Components:
- registry: RDFFormat descriptors and the FormatRegistry lookups
- parsers: ParserDispatcher and the rdflib-backed RDFParser
- translator: StatementTranslator, converting rdflib terms to graph nodes

Usage:
    from rdfloader.formats import FormatRegistry, ParserDispatcher, StatementTranslator

    registry = FormatRegistry.default()
    fmt = registry.resolve_by_file_name("ontology.ttl")
    parser = ParserDispatcher().create_parser(fmt)
"""

from .registry import (
    RDFFormat,
    FormatRegistry,
    RDFXML,
    N3,
    TURTLE,
    TRIX,
    RDFA,
    BUILTIN_FORMATS,
    normalize_mime_type,
    file_extension,
)
from .parsers import (
    StatementSink,
    RDFParser,
    ParserDispatcher,
    DEFAULT_PARSER_PLUGINS,
    DEFAULT_PARSER_OPTIONS,
    preserve_literal_labels,
)
from .translator import StatementTranslator

__all__ = [
    # Registry
    'RDFFormat',
    'FormatRegistry',
    'RDFXML',
    'N3',
    'TURTLE',
    'TRIX',
    'RDFA',
    'BUILTIN_FORMATS',
    'normalize_mime_type',
    'file_extension',
    # Parsing
    'StatementSink',
    'RDFParser',
    'ParserDispatcher',
    'DEFAULT_PARSER_PLUGINS',
    'DEFAULT_PARSER_OPTIONS',
    'preserve_literal_labels',
    # Translation
    'StatementTranslator',
]
