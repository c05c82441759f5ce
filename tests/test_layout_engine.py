"""Tests for LayoutEngine chart regions, axis resolution and point conversion."""

from __future__ import annotations

from typing import Any

import pytest

from psgraph.errors import ConfigurationError
from psgraph.layout.engine import Box, LayoutEngine
from psgraph.params import AxisSpec, ChartOptions, PageLayout

A4_BBOX = (36.0, 36.0, 559.0, 806.0)


def _bar_options() -> dict[str, Any]:
    return {
        'layout': {
            'heading': 'Bar chart',
            'right_edge': 250,
            'top_edge': 500,
            'key_width': 100,
        },
        'x_axis': {'labels': ['First bar', 'Second bar', 'Third bar']},
        'y_axis': {'low': 123, 'high': 456.7},
    }


@pytest.fixture
def bar_engine() -> LayoutEngine:
    return LayoutEngine(_bar_options(), A4_BBOX)


def test_default_page_areas() -> None:
    """Default options on A4 fill the page inside one point of the bounding box."""
    engine = LayoutEngine(None, A4_BBOX)
    assert engine.graph_area() == pytest.approx((67, 70, 542, 773))
    assert engine.page.left_edge == 37
    assert engine.page.top_edge == 805
    assert engine.heading_height == pytest.approx(27)


def test_default_page_axes() -> None:
    """Default 0..100 axes resolve to step 10 labels with five depths."""
    engine = LayoutEngine(None, A4_BBOX)
    x, y = engine.x_axis, engine.y_axis
    assert (x.low, x.high) == (0, 100)
    assert (y.low, y.high) == (0, 100)
    assert x.labels_req == 15
    assert x.factors == (5, 2, 5, 2, 5)
    assert x.mark_gap == pytest.approx(0.95)
    assert x.label_depth == 1
    assert list(x.labels) == pytest.approx([float(v) for v in range(0, 101, 10)])
    assert y.labels_req == 23
    assert y.mark_gap == pytest.approx(1.406)
    assert y.label_depth == 1
    assert x.flags == 0
    assert x.mark_multiplier == pytest.approx((8 - 0.5) / 5)


def test_bar_layout_areas(bar_engine: LayoutEngine) -> None:
    """Categorical x axis with a key reserves rotated label space and key room."""
    assert bar_engine.graph_area() == pytest.approx((67, 135, 134, 468))
    assert bar_engine.key_area() == pytest.approx((149, 37, 249, 500))
    assert bar_engine.x_axis.width == pytest.approx(67)
    assert bar_engine.x_axis.height == pytest.approx(98)
    assert bar_engine.heading_height == pytest.approx(27)
    assert bar_engine.areas.heading == pytest.approx((67, 473, 134, 500))
    assert bar_engine.areas.y_axis == pytest.approx((37, 37, 67, 500))


def test_bar_layout_y_axis(bar_engine: LayoutEngine) -> None:
    """y range 123..456.7 resolves to 100..500 labelled every 50."""
    y = bar_engine.y_axis
    assert y.labels_req == 11
    assert (y.low, y.high) == (100, 500)
    assert y.factors == (8, 5, 2, 5)
    assert y.scale.spreads == pytest.approx((50, 10, 5, 1))
    assert y.mark_gap == pytest.approx(0.8325)
    assert y.label_depth == 0
    assert list(y.labels) == pytest.approx([100 + 50 * i for i in range(9)])
    assert y.transform.constant == pytest.approx(51.75)


def test_bar_layout_x_axis(bar_engine: LayoutEngine) -> None:
    """Categorical x axis is rotated and centred with one slot per label."""
    x = bar_engine.x_axis
    assert x.categorical
    assert x.labels_req == 3
    assert len(x.labels) == x.labels_req + 1
    assert x.rotate and x.center
    assert x.flags == 3
    assert x.mark_gap == pytest.approx(67 / 3)
    assert x.mark_multiplier == 0
    assert x.labels == ('First bar', 'Second bar', 'Third bar', '')


def test_physical_point(bar_engine: LayoutEngine) -> None:
    """Logical points convert with the resolved axis transforms."""
    assert bar_engine.physical_point(20, 50) == pytest.approx((513.6667, 93.375), abs=1e-3)
    assert bar_engine.logical_point(*bar_engine.physical_point(20, 50)) == pytest.approx((20, 50))
    px, py = bar_engine.physical_point(1.25, 321)
    assert bar_engine.logical_point(px, py) == pytest.approx((1.25, 321))
    assert bar_engine.lx(bar_engine.px(2)) == pytest.approx(2)
    assert bar_engine.ly(bar_engine.py(450)) == pytest.approx(450)


def test_vertical_bar_area(bar_engine: LayoutEngine) -> None:
    """Bar slots start at the graph bottom and rise to the given value."""
    box = bar_engine.vertical_bar_area(1, 300)
    assert box == pytest.approx((89.3333, 135, 111.6667, 301.5), abs=1e-3)
    assert isinstance(box, Box)
    assert box.width == pytest.approx(67 / 3)
    full = bar_engine.vertical_bar_area(0)
    assert full.top == pytest.approx(468)


def test_horizontal_bar_area() -> None:
    """Horizontal bars use y slots and extend right to the given value."""
    engine = LayoutEngine(
        {'y_axis': {'labels': ['a', 'b', 'c', 'd']}, 'x_axis': {'low': 0, 'high': 100}},
        A4_BBOX,
    )
    gap = engine.y_axis.mark_gap
    graph = engine.graph_area()
    box = engine.horizontal_bar_area(2, 50)
    assert box.left == pytest.approx(graph.left)
    assert box.bottom == pytest.approx(graph.bottom + 2 * gap)
    assert box.top == pytest.approx(graph.bottom + 3 * gap)
    assert box.right == pytest.approx(engine.px(50))


def test_categorical_y_axis_width_from_labels() -> None:
    """Unrotated categorical y labels widen the y axis strip."""
    engine = LayoutEngine({'y_axis': {'labels': ['short', 'much longer']}}, A4_BBOX)
    assert engine.y_axis.width == pytest.approx(8 + 11 * 0.8 * 10)
    assert not engine.y_axis.rotate
    assert engine.y_axis.center


def test_explicit_flags_override_defaults() -> None:
    """rotate and center given explicitly win over categorical defaults."""
    engine = LayoutEngine(
        {'x_axis': {'labels': ['a', 'b'], 'rotate': False, 'center': False}}, A4_BBOX
    )
    assert engine.x_axis.flags == 0
    assert engine.x_axis.height == pytest.approx(8 + 2.5 * 10)


def test_center_only_sets_center_flag() -> None:
    """Centring a numeric axis sets only the centre bit."""
    engine = LayoutEngine({'x_axis': {'center': True}}, A4_BBOX)
    assert engine.x_axis.flags == 2


def test_chart_options_instance_accepted() -> None:
    """Typed options give the same layout as the equivalent mapping."""
    opts = ChartOptions(
        layout=PageLayout(heading='Bar chart', right_edge=250, top_edge=500, key_width=100),
        x_axis=AxisSpec(labels=['First bar', 'Second bar', 'Third bar']),
        y_axis=AxisSpec(low=123, high=456.7),
    )
    engine = LayoutEngine(opts, A4_BBOX)
    assert engine.graph_area() == pytest.approx((67, 135, 134, 468))


def test_colour_defaults_follow_grid_colour() -> None:
    """Unset per-depth colours take the grid colour; heading colour takes font colour."""
    engine = LayoutEngine({'layout': {'color': 0.2, 'font_color': (1, 0, 0)}}, A4_BBOX)
    assert engine.page.heavy_color == 0.2
    assert engine.page.light_color == 0.2
    assert engine.page.heading_font_color == (1.0, 0.0, 0.0)


def test_spacing_shrinks_graph() -> None:
    """Spacing separates regions from the edges and each other."""
    plain = LayoutEngine(None, A4_BBOX).graph_area()
    spaced = LayoutEngine({'layout': {'spacing': 4}}, A4_BBOX).graph_area()
    assert spaced.left == pytest.approx(plain.left + 4)
    assert spaced.bottom == pytest.approx(plain.bottom + 4)
    assert spaced.top == pytest.approx(plain.top - 12)


def test_no_room_for_graph() -> None:
    """A key wider than the page leaves no graph area."""
    with pytest.raises(ConfigurationError, match='non-positive size'):
        LayoutEngine({'layout': {'key_width': 600}}, A4_BBOX)


def test_bad_bounding_box() -> None:
    """The bounding box needs exactly four numbers."""
    with pytest.raises(ConfigurationError, match='four values'):
        LayoutEngine(None, (0, 0, 100))


def test_invalid_axis_options() -> None:
    """Axis validation names the axis and the offending option."""
    with pytest.raises(ConfigurationError, match='x_axis: label_gap'):
        LayoutEngine({'x_axis': {'label_gap': 0}}, A4_BBOX)
    with pytest.raises(ConfigurationError, match='y_axis: mark_max'):
        LayoutEngine({'y_axis': {'mark_min': 5, 'mark_max': 2}}, A4_BBOX)
    with pytest.raises(ConfigurationError, match='y axis: high'):
        LayoutEngine({'y_axis': {'low': 10, 'high': 10}}, A4_BBOX)


def test_invalid_layout_options() -> None:
    """Edges and colours are validated."""
    with pytest.raises(ConfigurationError, match='right_edge'):
        LayoutEngine({'layout': {'left_edge': 300, 'right_edge': 200}}, A4_BBOX)
    with pytest.raises(ConfigurationError, match='layout.background'):
        LayoutEngine({'layout': {'background': 2}}, A4_BBOX)


def test_unknown_option_rejected() -> None:
    """Misspelt option names are reported."""
    with pytest.raises(ConfigurationError, match='unknown option'):
        LayoutEngine({'x_axis': {'lowe': 1}}, A4_BBOX)


def test_non_numeric_option_named() -> None:
    """A string where a number belongs fails as a configuration error naming the field."""
    with pytest.raises(ConfigurationError, match=r'y_axis\.low must be a number'):
        LayoutEngine({'y_axis': {'low': 'abc', 'high': 10}}, A4_BBOX)


def test_key_area_without_key() -> None:
    """With no key width the key area is an empty strip right of the graph margin."""
    engine = LayoutEngine({'layout': {'spacing': 10}}, A4_BBOX)
    key = engine.key_area()
    assert key.width == 0
    assert key.left == pytest.approx(engine.graph_area().right + engine.page.right_margin)


def test_key_narrower_than_spacing() -> None:
    """A key width that spacing would swallow is rejected."""
    with pytest.raises(ConfigurationError, match='key_width'):
        LayoutEngine({'layout': {'spacing': 10, 'key_width': 4}}, A4_BBOX)
