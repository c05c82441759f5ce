"""Tests for GraphPaper grid drawing."""

from __future__ import annotations

from pathlib import Path

import pytest

from psgraph.errors import ConfigurationError
from psgraph.rendering import procsets
from psgraph.rendering.document import PostScriptDocument
from psgraph.rendering.paper import GraphPaper, grid_code


def _bar_paper() -> GraphPaper:
    return GraphPaper(
        {
            'layout': {'heading': 'Bar chart', 'right_edge': 250, 'top_edge': 500, 'key_width': 100},
            'x_axis': {'labels': ['First bar', 'Second bar', 'Third bar']},
            'y_axis': {'low': 123, 'high': 456.7},
        },
        PostScriptDocument(paper='A4'),
    )


def test_grid_installed_and_drawn() -> None:
    """Creating paper installs the procset and adds the grid to the page."""
    paper = _bar_paper()
    assert paper.document.function_names() == [procsets.GRAPH_PAPER]
    code = paper.document.page_code()
    assert code.startswith('gpaperdict begin\n')
    assert '    67 135 134 468 1 graph_area\n' in code
    assert '(Bar chart) heading_labels' in code
    assert 'drawgpaper' in code
    assert code.rstrip().endswith('end')


def test_axis_statements() -> None:
    """Axis marks and labels carry the resolved scale."""
    code = grid_code(_bar_paper().engine)
    assert '0.5 0 8 22.33333333 xaxis_marks' in code
    assert '0.5 1.875 8 0.8325 yaxis_marks' in code
    assert (
        '[3] [(First bar) (Second bar) (Third bar) ()] 0 3 /Helvetica 10 0 () xaxis_labels'
        in code
    )
    assert '[8 5 2 5] [100 150 200 250 300 350 400 450 500] 0 0 /Helvetica 10 0 () yaxis_labels' in code


def test_conversion_constants() -> None:
    """conv_consts carries both transforms."""
    code = grid_code(_bar_paper().engine)
    assert '22.33333333 67 0.8325 51.75 conv_consts' in code


def test_geometry_delegates_to_engine() -> None:
    """Geometry queries match the layout engine."""
    paper = _bar_paper()
    assert paper.graph_area() == paper.engine.graph_area()
    assert paper.physical_point(1, 300) == pytest.approx((89.3333, 301.5), abs=1e-3)
    assert paper.ly(paper.py(222)) == pytest.approx(222)
    assert paper.vertical_bar_area(2).right == pytest.approx(134)


def test_default_document_created() -> None:
    """Paper without a document makes its own."""
    paper = GraphPaper()
    assert paper.document.page_count == 1
    assert paper.x_axis.high == 100


def test_output_writes_file(tmp_path: Path) -> None:
    """output() writes the whole document."""
    paper = _bar_paper()
    path = paper.output(tmp_path / 'grid')
    text = path.read_text(encoding='latin-1')
    assert '%%BeginResource: procset GraphPaper' in text
    assert 'graph_area' in text


def test_bad_heading_leaves_document_empty() -> None:
    """Invalid text fails before the procset or any grid code is added."""
    doc = PostScriptDocument(paper='A4')
    with pytest.raises(ConfigurationError, match=r'layout\.heading'):
        GraphPaper({'layout': {'heading': 'Temp ℃'}}, doc)
    assert doc.function_names() == []
    assert doc.page_code() == ''
