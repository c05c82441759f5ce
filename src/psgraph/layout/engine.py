"""Layout engine: divide a page into chart regions and resolve both axes.

The engine is built once from ChartOptions and a page bounding box. All
geometry is computed in the constructor; afterwards the object only answers
queries (areas, bar rectangles, point conversion).
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, NamedTuple

from psgraph.colors import Color, check_color
from psgraph.constants import (
    CHAR_WIDTH_RATIO,
    DEFAULT_AXIS_HIGH,
    DEFAULT_AXIS_LOW,
    DEFAULT_Y_AXIS_WIDTH,
    FLAG_CENTER,
    FLAG_ROTATE,
    HEADING_Y_TITLE_LINES,
    SMALLEST_MARK_DOTS,
    X_AXIS_TEXT_LINES,
)
from psgraph.errors import ConfigurationError
from psgraph.layout.scale import ResolvedScale, calculate_scale, categorical_scale
from psgraph.layout.transform import CoordinateTransform
from psgraph.params import AxisSpec, ChartOptions, PageLayout

logger = logging.getLogger(__name__)


class Box(NamedTuple):
    """Rectangle in physical units."""

    left: float
    bottom: float
    right: float
    top: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom


@dataclass(frozen=True)
class ChartArea:
    """Named regions of one chart. Regions share edges but never overlap."""

    heading: Box
    x_axis: Box
    y_axis: Box
    graph: Box
    key: Box


@dataclass(frozen=True)
class AxisLayout:
    """Every resolved setting for one axis.

    low and high are the rounded logical bounds; labels are those of the
    resolved scale (numbers, or strings ending in an empty fencepost label).
    """

    name: str
    low: float
    high: float
    width: float
    height: float
    label_gap: float
    smallest: float
    title: str
    font: str
    font_size: float
    font_color: Color
    mark_min: float
    mark_max: float
    mark_multiplier: float
    labels: tuple[float | str, ...]
    labels_req: int
    rotate: bool
    center: bool
    scale: ResolvedScale
    transform: CoordinateTransform

    @property
    def flags(self) -> int:
        """Label flag bits passed to the GraphPaper procedures."""
        return (FLAG_ROTATE if self.rotate else 0) | (FLAG_CENTER if self.center else 0)

    @property
    def mark_gap(self) -> float:
        return self.scale.mark_gap

    @property
    def factors(self) -> tuple[int, ...]:
        return self.scale.factors

    @property
    def label_depth(self) -> int:
        return self.scale.label_depth

    @property
    def categorical(self) -> bool:
        return self.scale.categorical


@dataclass(frozen=True)
class _AxisSizing:
    font: str
    font_size: float
    font_color: Color
    rotate: bool
    center: bool
    width: float
    height: float


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigurationError(message)


def _resolve_page(layout: PageLayout, bounding_box: Sequence[float]) -> tuple[PageLayout, Box]:
    """Fill edge and colour defaults; validate sizes and colours."""
    bl, bb, br, bt = (float(v) for v in bounding_box)
    edges = Box(
        bl + 1 if layout.left_edge is None else layout.left_edge,
        bb + 1 if layout.bottom_edge is None else layout.bottom_edge,
        br - 1 if layout.right_edge is None else layout.right_edge,
        bt - 1 if layout.top_edge is None else layout.top_edge,
    )
    page = dataclasses.replace(
        layout,
        left_edge=edges.left,
        bottom_edge=edges.bottom,
        right_edge=edges.right,
        top_edge=edges.top,
        color=check_color(layout.color, 'layout.color'),
        background=check_color(layout.background, 'layout.background'),
        font_color=check_color(layout.font_color, 'layout.font_color'),
        heading=layout.heading or '',
    )
    page = dataclasses.replace(
        page,
        heavy_color=check_color(
            page.color if layout.heavy_color is None else layout.heavy_color, 'layout.heavy_color'
        ),
        mid_color=check_color(
            page.color if layout.mid_color is None else layout.mid_color, 'layout.mid_color'
        ),
        light_color=check_color(
            page.color if layout.light_color is None else layout.light_color, 'layout.light_color'
        ),
        heading_font_color=check_color(
            page.font_color if layout.heading_font_color is None else layout.heading_font_color,
            'layout.heading_font_color',
        ),
    )
    _require(
        edges.right > edges.left,
        f'layout: right_edge ({edges.right}) must be greater than left_edge ({edges.left})',
    )
    _require(
        edges.top > edges.bottom,
        f'layout: top_edge ({edges.top}) must be greater than bottom_edge ({edges.bottom})',
    )
    _require(page.dots_per_inch > 0, f'layout: dots_per_inch must be positive, got {page.dots_per_inch}')
    _require(page.font_size > 0, f'layout: font_size must be positive, got {page.font_size}')
    _require(
        page.heading_font_size > 0,
        f'layout: heading_font_size must be positive, got {page.heading_font_size}',
    )
    _require(page.key_width >= 0, f'layout: key_width must not be negative, got {page.key_width}')
    _require(page.spacing >= 0, f'layout: spacing must not be negative, got {page.spacing}')
    for name in ('heavy_width', 'mid_width', 'light_width'):
        value = getattr(page, name)
        _require(value >= 0, f'layout: {name} must not be negative, got {value}')
    return page, edges


def _check_axis(spec: AxisSpec, axis: str) -> None:
    _require(spec.label_gap > 0, f'{axis}_axis: label_gap must be positive, got {spec.label_gap}')
    _require(spec.mark_min >= 0, f'{axis}_axis: mark_min must not be negative, got {spec.mark_min}')
    _require(
        spec.mark_max >= spec.mark_min,
        f'{axis}_axis: mark_max ({spec.mark_max}) must not be less than mark_min ({spec.mark_min})',
    )
    if spec.font_size is not None:
        _require(spec.font_size > 0, f'{axis}_axis: font_size must be positive, got {spec.font_size}')
    if spec.smallest is not None:
        _require(spec.smallest > 0, f'{axis}_axis: smallest must be positive, got {spec.smallest}')
    if spec.labels is not None:
        _require(len(spec.labels) > 0, f'{axis}_axis: labels must not be empty')


class LayoutEngine:
    """Compute chart regions, axis scales and coordinate transforms for one chart.

    Parameters:
        options: ChartOptions, or a mapping with optional 'layout', 'x_axis'
            and 'y_axis' groups.
        bounding_box: Printable page area (left, bottom, right, top).

    Raises:
        ConfigurationError: Invalid options, or no room left for the graph.
    """

    def __init__(
        self,
        options: ChartOptions | Mapping[str, Any] | None,
        bounding_box: Sequence[float],
    ) -> None:
        if len(bounding_box) != 4:
            raise ConfigurationError(
                f'bounding box must have four values (left, bottom, right, top), got {bounding_box!r}'
            )
        opts = ChartOptions.from_dict(options)
        _check_axis(opts.x_axis, 'x')
        _check_axis(opts.y_axis, 'y')
        page, edges = _resolve_page(opts.layout, bounding_box)
        self._page = page

        left, bottom, right, top = edges
        spc = page.spacing

        # y axis and key are full height
        y_size = self._size_axis('y', opts.y_axis, 0.0, top - bottom - 2 * spc)
        yx0 = left + spc
        yx1 = yx0 + y_size.width
        y_box = Box(yx0, bottom + spc, yx1, top - spc)

        # heading and x axis fit between y axis and key
        x_width = right - 1 - page.key_width - page.right_margin - yx1
        x_size = self._size_axis('x', opts.x_axis, x_width, 0.0)

        head = page.heading_font_size if page.heading_height is None else page.heading_height
        head += HEADING_Y_TITLE_LINES * y_size.font_size
        hy1 = top - spc
        heading_box = Box(yx1, hy1 - head - spc, yx1 + x_size.width, hy1)

        xy0 = bottom + spc
        x_box = Box(yx1, xy0, heading_box.right, xy0 + x_size.height)

        graph = Box(x_box.left, x_box.top, x_box.right, heading_box.bottom - page.top_margin - spc)
        if graph.width <= 0 or graph.height <= 0:
            raise ConfigurationError(
                f'graph area {tuple(graph)} has non-positive size '
                f'({graph.width:g} x {graph.height:g}); reduce margins, key width or axis sizes'
            )
        key_left = graph.right + page.right_margin
        if page.key_width == 0:
            key = Box(key_left, bottom + spc, key_left, top - spc)
        elif page.key_width <= spc:
            raise ConfigurationError(
                f'layout: key_width ({page.key_width:g}) must be greater than spacing ({spc:g})'
            )
        else:
            key = Box(key_left, bottom + spc, right - spc - 1, top - spc)
        self._areas = ChartArea(heading=heading_box, x_axis=x_box, y_axis=y_box, graph=graph, key=key)

        self._x = self._resolve_axis('x', opts.x_axis, x_size, graph.left, graph.right)
        self._y = self._resolve_axis('y', opts.y_axis, y_size, graph.bottom, graph.top)
        logger.debug('Graph area %s, key area %s', tuple(graph), tuple(key))

    # ===================================================================
    # Construction helpers
    # ===================================================================

    def _size_axis(self, axis: str, spec: AxisSpec, width: float, height: float) -> _AxisSizing:
        """Resolve fonts and flags and the default strip size for one axis."""
        page = self._page
        categorical = spec.is_categorical
        rotate = (categorical and axis == 'x') if spec.rotate is None else bool(spec.rotate)
        center = categorical if spec.center is None else bool(spec.center)
        font_size = page.font_size if spec.font_size is None else spec.font_size
        font_color = check_color(
            page.font_color if spec.font_color is None else spec.font_color, f'{axis}_axis.font_color'
        )
        maxlen = max((len(label) for label in spec.labels), default=0) if spec.labels else 0
        if axis == 'x':
            if categorical and rotate:
                height = spec.mark_max + (1 + maxlen * CHAR_WIDTH_RATIO) * font_size
            else:
                height = spec.mark_max + X_AXIS_TEXT_LINES * font_size
        elif categorical and not rotate:
            width = spec.mark_max + maxlen * CHAR_WIDTH_RATIO * font_size
        else:
            width = DEFAULT_Y_AXIS_WIDTH
        return _AxisSizing(
            font=page.font if spec.font is None else spec.font,
            font_size=font_size,
            font_color=font_color,
            rotate=rotate,
            center=center,
            width=width if spec.width is None else spec.width,
            height=height if spec.height is None else spec.height,
        )

    def _resolve_axis(
        self,
        axis: str,
        spec: AxisSpec,
        size: _AxisSizing,
        physical_low: float,
        physical_high: float,
    ) -> AxisLayout:
        extent = physical_high - physical_low
        smallest = (
            SMALLEST_MARK_DOTS * 72.0 / self._page.dots_per_inch
            if spec.smallest is None
            else spec.smallest
        )
        if spec.labels is not None:
            scale = categorical_scale(spec.labels, extent, axis)
            multiplier = 0.0
        else:
            labels_req = int(extent / spec.label_gap) if spec.labels_req is None else spec.labels_req
            low = DEFAULT_AXIS_LOW if spec.low is None else spec.low
            high = DEFAULT_AXIS_HIGH if spec.high is None else spec.high
            scale = calculate_scale(low, high, extent, labels_req, smallest, axis)
            multiplier = (spec.mark_max - spec.mark_min) / len(scale.factors)
        transform = CoordinateTransform.from_ranges(
            scale.rounded_low,
            scale.rounded_high,
            physical_low,
            physical_low + scale.physical_extent,
            axis,
        )
        logger.debug(
            '%s axis: %g..%g factors=%s mark_gap=%g label_depth=%d labels_req=%d',
            axis,
            scale.rounded_low,
            scale.rounded_high,
            list(scale.factors),
            scale.mark_gap,
            scale.label_depth,
            scale.labels_req,
        )
        return AxisLayout(
            name=axis,
            low=scale.rounded_low,
            high=scale.rounded_high,
            width=size.width,
            height=size.height,
            label_gap=spec.label_gap,
            smallest=smallest,
            title=spec.title or '',
            font=size.font,
            font_size=size.font_size,
            font_color=size.font_color,
            mark_min=spec.mark_min,
            mark_max=spec.mark_max,
            mark_multiplier=multiplier,
            labels=scale.labels,
            labels_req=scale.labels_req,
            rotate=size.rotate,
            center=size.center,
            scale=scale,
            transform=transform,
        )

    # ===================================================================
    # Resolved settings
    # ===================================================================

    @property
    def page(self) -> PageLayout:
        """Chart-wide settings with every default filled in."""
        return self._page

    @property
    def areas(self) -> ChartArea:
        return self._areas

    @property
    def x_axis(self) -> AxisLayout:
        return self._x

    @property
    def y_axis(self) -> AxisLayout:
        return self._y

    @property
    def heading_height(self) -> float:
        """Height of the heading strip, including the y axis title line."""
        return self._areas.heading.height - self._page.spacing

    # ===================================================================
    # Geometry queries
    # ===================================================================

    def graph_area(self) -> Box:
        return self._areas.graph

    def key_area(self) -> Box:
        """Region right of the graph reserved for a key."""
        return self._areas.key

    def vertical_bar_area(self, index: int, top: float | None = None) -> Box:
        """Rectangle of the bar in x slot index, rising from the graph bottom.

        Parameters:
            index: 0-based slot number along the x axis.
            top: Logical y value of the bar top (default: the axis high).

        Returns:
            Box (left, bottom, right, top) in physical units.
        """
        gap = self._x.mark_gap
        left = self._areas.graph.left + index * gap
        y = self._y.high if top is None else top
        return Box(left, self._areas.graph.bottom, left + gap, self.py(y))

    def horizontal_bar_area(self, index: int, right: float | None = None) -> Box:
        """Rectangle of the bar in y slot index, extending from the graph left edge."""
        gap = self._y.mark_gap
        bottom = self._areas.graph.bottom + index * gap
        x = self._x.high if right is None else right
        return Box(self._areas.graph.left, bottom, self.px(x), bottom + gap)

    def physical_point(self, x: float, y: float) -> tuple[float, float]:
        return self.px(x), self.py(y)

    def logical_point(self, px: float, py: float) -> tuple[float, float]:
        return self.lx(px), self.ly(py)

    def px(self, value: float) -> float:
        return self._x.transform.to_physical(value)

    def py(self, value: float) -> float:
        return self._y.transform.to_physical(value)

    def lx(self, value: float) -> float:
        return self._x.transform.to_logical(value)

    def ly(self, value: float) -> float:
        return self._y.transform.to_logical(value)
