"""Tests for markdown rendering of journal trees."""

from tests.unit.fakes import sample_document
from travel_journal.core.tree.markdown import render_tree_as_markdown
from travel_journal.models.node import JournalDocument


def test_render_full_tree() -> None:
    md = render_tree_as_markdown(sample_document())
    assert md == (
        "- Arrival\n"
        "- **Days**\n"
        "    - Day 1  <\n"
        "    - **Side trips**\n"
        "        - Sintra\n"
        "- Departure\n"
    )


def test_render_with_max_depth_shows_truncation() -> None:
    md = render_tree_as_markdown(sample_document(), max_depth=0)
    assert "    - ... (2 more children)\n" in md
    assert "Day 1" not in md

    md = render_tree_as_markdown(sample_document(), max_depth=1)
    assert "        - ... (1 more child)\n" in md
    assert "Sintra" not in md


def test_render_with_ids() -> None:
    md = render_tree_as_markdown(sample_document(), show_ids=True)
    assert "- Arrival  [id=p1]\n" in md
    assert "- Day 1  [id=p2]  <\n" in md


def test_render_empty_document() -> None:
    assert render_tree_as_markdown(JournalDocument(tree=[], pages={})) == ""
