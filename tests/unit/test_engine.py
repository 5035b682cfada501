"""Tests for the tree engine."""

import copy

import pytest

from tests.unit.fakes import sample_document
from travel_journal.core.tree import engine
from travel_journal.errors import NodeNotFoundError
from travel_journal.models.node import Page, Section


def _ids(nodes: list) -> list[str]:
    return [n.id for n in nodes]


def test_locate_returns_frames_from_root_to_node() -> None:
    doc = sample_document()
    path = engine.locate(doc.tree, "p3")
    assert path is not None
    assert [f.node.id for f in path] == ["s1", "s2", "p3"]
    assert [f.index for f in path] == [1, 1, 0]
    assert path[0].siblings is doc.tree
    assert path[-1].siblings is path[-2].node.children


def test_locate_missing_returns_none_and_require_path_raises() -> None:
    doc = sample_document()
    assert engine.locate(doc.tree, "nope") is None
    with pytest.raises(NodeNotFoundError) as excinfo:
        engine.require_path(doc.tree, "nope")
    assert excinfo.value.node_id == "nope"


def test_insert_after_minus_one_inserts_at_head() -> None:
    nodes = [Page(id="a", title="A")]
    engine.insert_after(nodes, -1, Page(id="b", title="B"))
    engine.insert_after(nodes, 1, Page(id="c", title="C"))
    assert _ids(nodes) == ["b", "a", "c"]


def test_create_page_allocates_matching_content() -> None:
    page, content = engine.create_page("Day 2", now=42)
    assert content.id == page.id
    assert content.title == "Day 2"
    assert content.formatted_text == ""
    assert content.created_at == content.updated_at == 42


def test_created_ids_are_unique() -> None:
    ids = {engine.create_section("s").id for _ in range(50)}
    ids |= {engine.create_page("p", now=0)[0].id for _ in range(50)}
    assert len(ids) == 100


def test_move_up_and_down_swap_with_neighbours() -> None:
    doc = sample_document()
    assert engine.move_down(engine.require_path(doc.tree, "p1")) is True
    assert _ids(doc.tree) == ["s1", "p1", "p4"]
    assert engine.move_up(engine.require_path(doc.tree, "p4")) is True
    assert _ids(doc.tree) == ["s1", "p4", "p1"]


def test_move_at_boundaries_is_a_noop() -> None:
    doc = sample_document()
    before = copy.deepcopy(doc.tree)
    assert engine.move_up(engine.require_path(doc.tree, "p1")) is False
    assert engine.move_down(engine.require_path(doc.tree, "p4")) is False
    assert engine.move_up(engine.require_path(doc.tree, "p2")) is False
    assert engine.move_down(engine.require_path(doc.tree, "s2")) is False
    assert doc.tree == before


def test_indent_appends_to_previous_section() -> None:
    doc = sample_document()
    assert engine.indent(engine.require_path(doc.tree, "p4")) is True
    assert _ids(doc.tree) == ["p1", "s1"]
    section = doc.tree[1]
    assert isinstance(section, Section)
    assert _ids(section.children) == ["p2", "s2", "p4"]


def test_indent_first_sibling_or_under_page_is_a_noop() -> None:
    doc = sample_document()
    before = copy.deepcopy(doc.tree)
    assert engine.indent(engine.require_path(doc.tree, "p1")) is False
    # previous sibling p1 is a page
    assert engine.indent(engine.require_path(doc.tree, "s1")) is False
    assert doc.tree == before


def test_outdent_lands_right_after_parent() -> None:
    doc = sample_document()
    assert engine.outdent(engine.require_path(doc.tree, "p3")) is True
    s1 = doc.tree[1]
    assert isinstance(s1, Section)
    assert _ids(s1.children) == ["p2", "s2", "p3"]

    assert engine.outdent(engine.require_path(doc.tree, "p2")) is True
    assert _ids(doc.tree) == ["p1", "s1", "p2", "p4"]


def test_outdent_at_root_is_a_noop() -> None:
    doc = sample_document()
    before = copy.deepcopy(doc.tree)
    assert engine.outdent(engine.require_path(doc.tree, "s1")) is False
    assert doc.tree == before


def test_indent_then_outdent_restores_position() -> None:
    doc = sample_document()
    engine.outdent(engine.require_path(doc.tree, "p2"))
    before = copy.deepcopy(doc.tree)
    original_index = engine.require_path(doc.tree, "p2")[-1].index

    assert engine.indent(engine.require_path(doc.tree, "p2")) is True
    assert engine.outdent(engine.require_path(doc.tree, "p2")) is True

    path = engine.require_path(doc.tree, "p2")
    assert len(path) == 1
    assert path[-1].index == original_index
    assert doc.tree == before


def test_delete_section_cascades_to_nested_pages() -> None:
    doc = sample_document()
    removed = engine.delete(engine.require_path(doc.tree, "s1"), doc.pages)
    assert sorted(removed) == ["p2", "p3"]
    assert sorted(doc.pages) == ["p1", "p4"]
    assert _ids(doc.tree) == ["p1", "p4"]


def test_delete_page_removes_single_content() -> None:
    doc = sample_document()
    assert engine.delete(engine.require_path(doc.tree, "p3"), doc.pages) == ["p3"]
    assert "p3" not in doc.pages
    assert len(doc.pages) == 3


def test_rename_keeps_page_content_title_in_sync() -> None:
    doc = sample_document()
    engine.rename(engine.require_path(doc.tree, "p3"), "Sintra & Cascais", doc.pages)
    assert engine.require_path(doc.tree, "p3")[-1].node.title == "Sintra & Cascais"
    assert doc.pages["p3"].title == "Sintra & Cascais"

    engine.rename(engine.require_path(doc.tree, "s2"), "Excursions", doc.pages)
    assert "s2" not in doc.pages


def test_iter_nodes_is_depth_first_in_display_order() -> None:
    doc = sample_document()
    assert _ids(list(engine.iter_nodes(doc.tree))) == ["p1", "s1", "p2", "s2", "p3", "p4"]
    assert engine.collect_page_ids(doc.tree[1]) == ["p2", "p3"]
