"""Tests for GraphKey sizing and item placement."""

from __future__ import annotations

import pytest

from psgraph.errors import ConfigurationError, ResourceError
from psgraph.key import GraphKey
from psgraph.rendering import procsets
from psgraph.rendering.document import PostScriptDocument
from psgraph.rendering.paper import GraphPaper


def _paper(key_width: float) -> GraphPaper:
    doc = PostScriptDocument(paper='A4')
    return GraphPaper({'layout': {'key_width': key_width}}, doc)


def test_single_column_size() -> None:
    """Items fitting the height are stacked in one column."""
    key = GraphKey(500, 3)
    assert key.item_width == pytest.approx(8 + 10 + 8 + 40 + 8)
    assert key.item_height == pytest.approx(14)
    assert key.top_margin == pytest.approx(24)
    assert (key.rows, key.columns) == (3, 1)
    assert key.height == pytest.approx(24 + 8 + 3 * 14)
    assert key.width == pytest.approx(8 + 74)


def test_wraps_into_columns() -> None:
    """Items beyond the available height start new columns."""
    key = GraphKey(100, 10)
    assert key.rows == 4
    assert key.columns == 3
    assert key.width == pytest.approx(8 + 3 * 74)


def test_too_short_for_a_row() -> None:
    """A key that cannot hold one row is a configuration error."""
    with pytest.raises(ConfigurationError, match='no room for a row'):
        GraphKey(40, 2)


def test_bad_arguments() -> None:
    """Item count and sizes are validated."""
    with pytest.raises(ConfigurationError, match='num_items'):
        GraphKey(500, 0)
    with pytest.raises(ConfigurationError, match='font sizes'):
        GraphKey(500, 1, text_size=0)
    with pytest.raises(ConfigurationError, match='key.background'):
        GraphKey(500, 1, background=-1)


def test_build_key_centres_box() -> None:
    """The box is centred vertically in the key area and the procset installed."""
    key = GraphKey(500, 2)
    paper = _paper(key.width)
    key.build_key(paper)
    area = paper.key_area()
    box = key.box
    assert box is not None
    assert box.left == pytest.approx(area.left)
    assert box.height == pytest.approx(key.height)
    assert box.bottom - area.bottom == pytest.approx(area.top - box.top)
    assert paper.document.has_function(procsets.GRAPH_KEY)
    code = paper.document.page_code()
    assert '(Key) /Helvetica-Bold 12' in code
    assert 'keybox' in code


def test_add_key_item_positions() -> None:
    """Items fill columns top to bottom and show their label."""
    key = GraphKey(100, 5)
    paper = _paper(key.width)
    key.build_key(paper)
    key.add_key_item('North', 'kix0 kiy0 moveto kix1 kiy1 lineto')
    key.add_key_item('South')
    code = paper.document.page_code()
    assert f'/kdy {key.height - key.top_margin - key.item_height:g} def' in code
    assert 'kix0 kiy0 moveto kix1 kiy1 lineto' in code
    assert '(North) show' in code
    assert '(South) show' in code


def test_second_column_offset() -> None:
    """The first item of the second column moves right by one item width."""
    key = GraphKey(100, 5)
    paper = _paper(key.width)
    key.build_key(paper)
    for label in ('a', 'b', 'c', 'd', 'e'):
        key.add_key_item(label)
    assert key.rows == 4
    assert f'/kdx {key.item_width:g} def' in paper.document.page_code()


def test_add_before_build() -> None:
    """Items need a built key."""
    key = GraphKey(500, 1, paper=_paper(100))
    with pytest.raises(ResourceError, match='build_key'):
        key.add_key_item('x')
    with pytest.raises(ResourceError, match='GraphPaper'):
        GraphKey(500, 1).build_key()


def test_too_many_items() -> None:
    """Adding more items than declared is rejected."""
    key = GraphKey(500, 1)
    key.build_key(_paper(key.width))
    key.add_key_item('one')
    with pytest.raises(ConfigurationError, match='already holds all 1'):
        key.add_key_item('two')


def test_key_text_checked_up_front() -> None:
    """Key text that cannot be written fails before anything is drawn."""
    with pytest.raises(ConfigurationError, match='key.title'):
        GraphKey(500, 1, title='Légende ✓')
    key = GraphKey(500, 2)
    paper = _paper(key.width)
    key.build_key(paper)
    before = paper.document.page_code()
    with pytest.raises(ConfigurationError, match='key item label'):
        key.add_key_item('bad ★')
    assert paper.document.page_code() == before
    key.add_key_item('one')
    key.add_key_item('two')
