"""
Graph data model: node kinds and graph capabilities.

Usage:
    from rdfloader.models import Uri, Bnode, Literal, MemoryGraph
"""

from .nodes import (
    Uri,
    Bnode,
    Literal,
    Node,
    SubjectNode,
    PredicateNode,
    ObjectNode,
    is_subject_node,
    is_predicate_node,
    is_object_node,
    RDF_NS,
    RDFS_NS,
    XSD_NS,
    RDF_TYPE,
    RDFS_LABEL,
    XSD_STRING,
    XSD_INTEGER,
    XSD_DECIMAL,
    XSD_BOOLEAN,
)
from .graph import (
    AppendableGraph,
    GraphFactory,
    MemoryGraph,
    MemoryGraphFactory,
)

__all__ = [
    # Nodes
    "Uri",
    "Bnode",
    "Literal",
    "Node",
    "SubjectNode",
    "PredicateNode",
    "ObjectNode",
    "is_subject_node",
    "is_predicate_node",
    "is_object_node",
    # Vocabulary
    "RDF_NS",
    "RDFS_NS",
    "XSD_NS",
    "RDF_TYPE",
    "RDFS_LABEL",
    "XSD_STRING",
    "XSD_INTEGER",
    "XSD_DECIMAL",
    "XSD_BOOLEAN",
    # Graphs
    "AppendableGraph",
    "GraphFactory",
    "MemoryGraph",
    "MemoryGraphFactory",
]
