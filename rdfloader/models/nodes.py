"""
Node model for loaded graphs.

A graph is built from exactly three node kinds:
- Uri: an absolute URI reference
- Bnode: a blank node, identified by a label that is only meaningful
  within the document it was parsed from
- Literal: a plain, language-tagged or typed literal

Role aliases restrict where each kind may appear in a statement:
SubjectNode is Uri or Bnode, PredicateNode is Uri, ObjectNode is any node.

Usage:
    from rdfloader.models import Uri, Bnode, Literal, XSD_INTEGER

    name = Uri("http://xmlns.com/foaf/0.1/name")
    size = Literal("10", datatype=XSD_INTEGER)
"""

from dataclasses import dataclass
from typing import Any, Optional, Union
from urllib.parse import urlsplit


RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RDFS_NS = "http://www.w3.org/2000/01/rdf-schema#"
XSD_NS = "http://www.w3.org/2001/XMLSchema#"

RDF_TYPE = f"{RDF_NS}type"
RDFS_LABEL = f"{RDFS_NS}label"
XSD_STRING = f"{XSD_NS}string"
XSD_INTEGER = f"{XSD_NS}integer"
XSD_DECIMAL = f"{XSD_NS}decimal"
XSD_BOOLEAN = f"{XSD_NS}boolean"


def _check_absolute(value: str, what: str) -> None:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{what} must be a non-empty string, got {value!r}")
    if not urlsplit(value).scheme:
        raise ValueError(f"{what} must be an absolute URI: {value!r}")


@dataclass(frozen=True)
class Uri:
    """
    A URI node.

    Attributes:
        value: The absolute URI string. Two Uri nodes are equal iff
            their strings are identical.
    """
    value: str

    def __post_init__(self) -> None:
        _check_absolute(self.value, "Uri value")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Bnode:
    """A blank node, equal to another blank node with the same label."""
    id: str

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise ValueError(f"Bnode id must be a non-empty string, got {self.id!r}")

    def __str__(self) -> str:
        return f"_:{self.id}"


@dataclass(frozen=True)
class Literal:
    """
    A literal node.

    A plain literal has no datatype and an optional language tag; a typed
    literal has a datatype and no language tag.

    Attributes:
        text: The lexical form.
        language: Optional language tag.
        datatype: Optional absolute datatype URI.
    """
    text: str
    language: Optional[str] = None
    datatype: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise ValueError(f"Literal text must be a string, got {type(self.text).__name__}")
        if self.language is not None and self.datatype is not None:
            raise ValueError(
                f"Literal {self.text!r} cannot carry both language "
                f"'{self.language}' and datatype <{self.datatype}>"
            )
        if self.datatype is not None:
            _check_absolute(self.datatype, "Literal datatype")

    def is_plain(self) -> bool:
        return self.datatype is None

    def is_typed(self) -> bool:
        return self.datatype is not None

    def __str__(self) -> str:
        if self.language:
            return f'"{self.text}"@{self.language}'
        if self.datatype:
            return f'"{self.text}"^^<{self.datatype}>'
        return f'"{self.text}"'


Node = Union[Uri, Bnode, Literal]
SubjectNode = Union[Uri, Bnode]
PredicateNode = Uri
ObjectNode = Node


def is_subject_node(node: Any) -> bool:
    return isinstance(node, (Uri, Bnode))


def is_predicate_node(node: Any) -> bool:
    return isinstance(node, Uri)


def is_object_node(node: Any) -> bool:
    return isinstance(node, (Uri, Bnode, Literal))
