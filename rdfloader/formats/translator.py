"""
Statement translation from rdflib terms to the loader's node model.

StatementTranslator is the sink a parser feeds. Each statement's terms are
matched against the closed set of kinds the graph understands:

    subject    URIRef -> Uri, BNode -> Bnode
    predicate  URIRef -> Uri
    object     URIRef -> Uri, BNode -> Bnode, Literal -> Literal

Anything else (a literal subject, a blank node predicate, an N3 variable or
quoted formula) raises TranslationError, aborting the load.
"""

import logging
from typing import Any, Dict, Optional

from rdflib import BNode as RDFBNode
from rdflib import Literal as RDFLiteral
from rdflib import URIRef

from ..core.errors import TranslationError
from ..models.graph import AppendableGraph
from ..models.nodes import Bnode, Literal, ObjectNode, PredicateNode, SubjectNode, Uri

logger = logging.getLogger(__name__)


class StatementTranslator:
    """
    Converts parsed statements and appends them to a graph.

    Blank node identity is kept in a label map that exists only between
    start_document() and end_document(); a label seen twice in the same
    document yields the same Bnode.

    Attributes:
        graph: The graph receiving translated statements.
    """

    def __init__(self, graph: AppendableGraph):
        self.graph = graph
        self._bnodes: Optional[Dict[str, Bnode]] = None
        self._count = 0

    @property
    def statement_count(self) -> int:
        """Statements inserted in the current (or last) document."""
        return self._count

    def start_document(self) -> None:
        self._bnodes = {}
        self._count = 0

    def end_document(self) -> None:
        self._bnodes = None

    def handle_statement(self, subject: Any, predicate: Any, obj: Any) -> None:
        """
        Translate one statement and insert it into the graph.

        Raises:
            TranslationError: If a term has no counterpart for its position.
        """
        statement = (subject, predicate, obj)
        try:
            translated = (
                self._to_subject(subject),
                self._to_predicate(predicate),
                self._to_object(obj),
            )
        except TranslationError as e:
            e.statement = statement
            raise
        except ValueError as e:
            raise TranslationError(f"Invalid statement {self._describe(statement)}: {e}", statement) from e

        self.graph.insert(*translated)
        self._count += 1

    def _bnode(self, term: RDFBNode) -> Bnode:
        label = str(term)
        if self._bnodes is None:
            # Statement outside a document session; no identity to keep.
            return Bnode(label)
        node = self._bnodes.get(label)
        if node is None:
            node = self._bnodes[label] = Bnode(label)
        return node

    def _to_subject(self, term: Any) -> SubjectNode:
        if isinstance(term, RDFBNode):
            return self._bnode(term)
        if isinstance(term, URIRef):
            return Uri(str(term))
        raise TranslationError(f"Illegal subject {self._describe_term(term)}: expected a URI or blank node")

    def _to_predicate(self, term: Any) -> PredicateNode:
        if isinstance(term, URIRef):
            return Uri(str(term))
        raise TranslationError(f"Illegal predicate {self._describe_term(term)}: expected a URI")

    def _to_object(self, term: Any) -> ObjectNode:
        if isinstance(term, RDFBNode):
            return self._bnode(term)
        if isinstance(term, URIRef):
            return Uri(str(term))
        if isinstance(term, RDFLiteral):
            language = term.language or None
            # rdflib never pairs a language with a datatype other than rdf:langString
            datatype = str(term.datatype) if term.datatype is not None and language is None else None
            return Literal(str(term), language, datatype)
        raise TranslationError(f"Illegal object {self._describe_term(term)}")

    @staticmethod
    def _describe_term(term: Any) -> str:
        return f"{type(term).__name__} {term!r}"

    @staticmethod
    def _describe(statement: Any) -> str:
        return "(" + ", ".join(repr(term) for term in statement) + ")"
