"""
Graph capabilities consumed by the loader, plus a default in-memory graph.

The loader only needs two things from a graph library:
- GraphFactory.create_graph(): a fresh, empty graph per load
- AppendableGraph.insert(subject, predicate, object): append one statement

MemoryGraph is the default implementation returned by the loader. It keeps
statements in insertion order with set semantics and answers the simple
lookups callers usually need after a load (is_asserted, get_subjects,
get_value).
"""

import logging
from typing import Dict, Iterator, List, Optional, Protocol, Set, Tuple, Union, runtime_checkable

from .nodes import (
    Node,
    ObjectNode,
    PredicateNode,
    SubjectNode,
    Uri,
    is_object_node,
    is_predicate_node,
    is_subject_node,
)

logger = logging.getLogger(__name__)

Triple = Tuple[SubjectNode, PredicateNode, ObjectNode]


@runtime_checkable
class AppendableGraph(Protocol):
    """Write-only graph capability used while translating statements."""

    def insert(self, subject: SubjectNode, predicate: PredicateNode, obj: ObjectNode) -> None:
        ...


@runtime_checkable
class GraphFactory(Protocol):
    """Creates a new, empty graph for every load."""

    def create_graph(self) -> AppendableGraph:
        ...


def _as_node(value: Union[Node, str]) -> Node:
    # Plain strings are accepted as URIs in query arguments.
    if isinstance(value, str):
        return Uri(value)
    return value


class MemoryGraph:
    """
    In-memory graph of Uri, Bnode and Literal nodes.

    Example:
        >>> graph = MemoryGraph()
        >>> graph.insert(Uri("http://ex.org/a"), Uri("http://ex.org/p"), Literal("x"))
        >>> graph.is_asserted("http://ex.org/a", "http://ex.org/p", Literal("x"))
        True
    """

    def __init__(self) -> None:
        self._triples: Dict[Triple, None] = {}
        self._index: Dict[SubjectNode, Dict[PredicateNode, List[ObjectNode]]] = {}

    def insert(self, subject: SubjectNode, predicate: PredicateNode, obj: ObjectNode) -> None:
        """
        Append a statement.

        Args:
            subject: Uri or Bnode.
            predicate: Uri.
            obj: Uri, Bnode or Literal.

        Raises:
            TypeError: If a node does not satisfy its role restriction.
        """
        if not is_subject_node(subject):
            raise TypeError(f"Invalid subject node: {subject!r}")
        if not is_predicate_node(predicate):
            raise TypeError(f"Invalid predicate node: {predicate!r}")
        if not is_object_node(obj):
            raise TypeError(f"Invalid object node: {obj!r}")

        triple = (subject, predicate, obj)
        if triple in self._triples:
            return
        self._triples[triple] = None
        self._index.setdefault(subject, {}).setdefault(predicate, []).append(obj)

    def is_asserted(
        self,
        subject: Union[SubjectNode, str],
        predicate: Union[PredicateNode, str],
        obj: Union[ObjectNode, str],
    ) -> bool:
        """Return True if the statement is in the graph. Strings are read as URIs."""
        return (_as_node(subject), _as_node(predicate), _as_node(obj)) in self._triples

    def get_subjects(self, predicate: Union[PredicateNode, str], obj: Union[ObjectNode, str]) -> List[SubjectNode]:
        """Return every subject having ``predicate`` with value ``obj``, in insertion order."""
        predicate = _as_node(predicate)
        obj = _as_node(obj)
        subjects: List[SubjectNode] = []
        seen: Set[SubjectNode] = set()
        for s, p, o in self._triples:
            if p == predicate and o == obj and s not in seen:
                seen.add(s)
                subjects.append(s)
        return subjects

    def get_values(self, subject: Union[SubjectNode, str], predicate: Union[PredicateNode, str]) -> List[ObjectNode]:
        """Return all values of ``predicate`` on ``subject``."""
        by_predicate = self._index.get(_as_node(subject), {})
        return list(by_predicate.get(_as_node(predicate), []))

    def get_value(self, subject: Union[SubjectNode, str], predicate: Union[PredicateNode, str]) -> Optional[ObjectNode]:
        """Return the first value of ``predicate`` on ``subject``, or None."""
        values = self.get_values(subject, predicate)
        return values[0] if values else None

    def subjects(self) -> List[SubjectNode]:
        return list(self._index)

    def triples(self) -> List[Triple]:
        return list(self._triples)

    def __contains__(self, triple: object) -> bool:
        return triple in self._triples

    def __iter__(self) -> Iterator[Triple]:
        return iter(list(self._triples))

    def __len__(self) -> int:
        return len(self._triples)

    def __repr__(self) -> str:
        return f"<MemoryGraph with {len(self)} statements>"


class MemoryGraphFactory:
    """Factory producing an empty MemoryGraph per call."""

    def create_graph(self) -> MemoryGraph:
        logger.debug("Creating new in-memory graph")
        return MemoryGraph()
