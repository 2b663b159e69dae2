"""
Unit tests for the node model and the in-memory graph.

Run with: python -m pytest tests/test_nodes.py -v
"""

import pytest

from rdfloader.models import (
    Bnode,
    Literal,
    MemoryGraph,
    MemoryGraphFactory,
    Uri,
    XSD_INTEGER,
    is_object_node,
    is_predicate_node,
    is_subject_node,
)

EX_A = Uri("http://example.org/a")
EX_B = Uri("http://example.org/b")
EX_P = Uri("http://example.org/p")
EX_Q = Uri("http://example.org/q")


@pytest.mark.unit
class TestNodes:
    """Equality and validation rules of Uri, Bnode and Literal."""

    def test_uri_equality_is_string_equality(self):
        assert Uri("http://example.org/a") == EX_A
        assert Uri("http://example.org/a/") != EX_A
        assert hash(Uri("http://example.org/a")) == hash(EX_A)

    def test_uri_must_be_absolute(self):
        with pytest.raises(ValueError, match="absolute URI"):
            Uri("relative/path")
        with pytest.raises(ValueError):
            Uri("")

    def test_bnode_equality_by_label(self):
        assert Bnode("b1") == Bnode("b1")
        assert Bnode("b1") != Bnode("b2")
        assert Bnode("b1") != Uri("http://example.org/b1")

    def test_literal_equality_compares_all_fields(self):
        assert Literal("10") == Literal("10")
        assert Literal("10") != Literal("10", datatype=XSD_INTEGER)
        assert Literal("chat", "fr") != Literal("chat", "en")
        assert Literal("chat", "fr") != Literal("chat")

    def test_literal_kinds(self):
        assert Literal("plain").is_plain()
        assert Literal("hello", "en").is_plain()
        assert Literal("10", datatype=XSD_INTEGER).is_typed()

    def test_literal_rejects_language_and_datatype(self):
        with pytest.raises(ValueError, match="cannot carry both"):
            Literal("10", "en", XSD_INTEGER)

    def test_literal_datatype_must_be_absolute(self):
        with pytest.raises(ValueError):
            Literal("10", datatype="integer")

    def test_string_forms(self):
        assert str(EX_A) == "http://example.org/a"
        assert str(Bnode("x")) == "_:x"
        assert str(Literal("hi", "en")) == '"hi"@en'
        assert str(Literal("10", datatype=XSD_INTEGER)) == f'"10"^^<{XSD_INTEGER}>'

    def test_role_restrictions(self):
        assert is_subject_node(EX_A) and is_subject_node(Bnode("x"))
        assert not is_subject_node(Literal("x"))
        assert is_predicate_node(EX_P)
        assert not is_predicate_node(Bnode("x"))
        assert not is_predicate_node(Literal("x"))
        assert all(is_object_node(n) for n in (EX_A, Bnode("x"), Literal("x")))
        assert not is_object_node("http://example.org/a")


@pytest.mark.unit
class TestMemoryGraph:
    """Insert and lookup behaviour of the default graph."""

    def test_factory_creates_fresh_graphs(self):
        factory = MemoryGraphFactory()
        first = factory.create_graph()
        second = factory.create_graph()
        first.insert(EX_A, EX_P, EX_B)
        assert first is not second
        assert len(first) == 1
        assert len(second) == 0

    def test_insert_and_is_asserted(self):
        graph = MemoryGraph()
        graph.insert(EX_A, EX_P, Literal("x", "en"))
        assert graph.is_asserted(EX_A, EX_P, Literal("x", "en"))
        assert graph.is_asserted("http://example.org/a", "http://example.org/p", Literal("x", "en"))
        assert not graph.is_asserted(EX_A, EX_P, Literal("x"))

    def test_duplicates_are_ignored(self):
        graph = MemoryGraph()
        graph.insert(EX_A, EX_P, EX_B)
        graph.insert(EX_A, EX_P, EX_B)
        assert len(graph) == 1
        assert graph.get_values(EX_A, EX_P) == [EX_B]

    def test_insert_enforces_roles(self):
        graph = MemoryGraph()
        with pytest.raises(TypeError):
            graph.insert(Literal("x"), EX_P, EX_B)
        with pytest.raises(TypeError):
            graph.insert(EX_A, Bnode("p"), EX_B)
        with pytest.raises(TypeError):
            graph.insert(EX_A, EX_P, "plain string")
        assert len(graph) == 0

    def test_get_subjects_and_values(self):
        graph = MemoryGraph()
        bnode = Bnode("n1")
        graph.insert(bnode, EX_P, Literal("name"))
        graph.insert(EX_A, EX_P, Literal("name"))
        graph.insert(EX_A, EX_Q, Literal("1"))
        graph.insert(EX_A, EX_Q, Literal("2"))

        assert graph.get_subjects(EX_P, Literal("name")) == [bnode, EX_A]
        assert graph.get_value(EX_A, EX_Q) == Literal("1")
        assert graph.get_values(EX_A, EX_Q) == [Literal("1"), Literal("2")]
        assert graph.get_value(EX_B, EX_Q) is None
        assert graph.subjects() == [bnode, EX_A]

    def test_iteration_preserves_insertion_order(self):
        graph = MemoryGraph()
        graph.insert(EX_B, EX_P, EX_A)
        graph.insert(EX_A, EX_P, EX_B)
        assert list(graph) == [(EX_B, EX_P, EX_A), (EX_A, EX_P, EX_B)]
        assert (EX_A, EX_P, EX_B) in graph
        assert graph.triples() == list(graph)
