"""Graph paper: lay out a chart on a document page and draw its grid."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from psgraph.layout.engine import AxisLayout, Box, ChartArea, LayoutEngine
from psgraph.params import ChartOptions, PageLayout
from psgraph.rendering import procsets
from psgraph.rendering.builder import PostScriptBuilder, PSName
from psgraph.rendering.document import PostScriptDocument

logger = logging.getLogger(__name__)


def _axis_statements(b: PostScriptBuilder, axis: AxisLayout) -> None:
    b.call(
        f'{axis.name}axis_marks',
        axis.mark_min,
        axis.mark_multiplier,
        axis.mark_max,
        axis.mark_gap,
    )


def _label_statements(b: PostScriptBuilder, axis: AxisLayout) -> None:
    b.call(
        f'{axis.name}axis_labels',
        list(axis.factors),
        list(axis.labels),
        axis.label_depth,
        axis.flags,
        PSName(axis.font),
        axis.font_size,
        axis.font_color,
        axis.title,
    )


def grid_code(engine: LayoutEngine) -> str:
    """Return the page statements that draw the graph paper for engine."""
    page = engine.page
    areas = engine.areas
    x, y = engine.x_axis, engine.y_axis
    b = PostScriptBuilder()
    b.begin('gpaperdict')
    b.call('graph_area', *areas.graph, page.background)
    b.call(
        'graph_colors',
        page.heavy_width,
        page.heavy_color,
        page.mid_width,
        page.mid_color,
        page.light_width,
        page.light_color,
    )
    b.call('heading_area', *areas.heading)
    b.call(
        'heading_labels',
        PSName(page.heading_font),
        page.heading_font_size,
        page.heading_font_color,
        page.heading,
    )
    b.call('xaxis_area', *areas.x_axis)
    b.call('yaxis_area', *areas.y_axis)
    _axis_statements(b, x)
    _axis_statements(b, y)
    _label_statements(b, x)
    _label_statements(b, y)
    b.raw('drawgpaper')
    b.call(
        'conv_consts',
        x.transform.multiplier,
        x.transform.constant,
        y.transform.multiplier,
        y.transform.constant,
    )
    b.end()
    return b.text()


class GraphPaper:
    """Chart grid drawn on a PostScript document.

    The layout is computed when the object is created and the grid is added
    to the document's current page straight away. Geometry queries are
    answered by the underlying LayoutEngine.

    Parameters:
        options: ChartOptions or a mapping of option groups.
        document: Document to draw on (default: a new A4 document).
    """

    def __init__(
        self,
        options: ChartOptions | Mapping[str, Any] | None = None,
        document: PostScriptDocument | None = None,
    ) -> None:
        self._document = PostScriptDocument() if document is None else document
        self._engine = LayoutEngine(options, self._document.get_page_bounding_box())
        code = grid_code(self._engine)
        procsets.install(self._document, procsets.GRAPH_PAPER)
        self._document.add_to_page(code)
        logger.debug('Graph paper drawn in %s', tuple(self._engine.graph_area()))

    @property
    def document(self) -> PostScriptDocument:
        return self._document

    @property
    def engine(self) -> LayoutEngine:
        return self._engine

    @property
    def page(self) -> PageLayout:
        return self._engine.page

    @property
    def areas(self) -> ChartArea:
        return self._engine.areas

    @property
    def x_axis(self) -> AxisLayout:
        return self._engine.x_axis

    @property
    def y_axis(self) -> AxisLayout:
        return self._engine.y_axis

    def graph_area(self) -> Box:
        return self._engine.graph_area()

    def key_area(self) -> Box:
        return self._engine.key_area()

    def vertical_bar_area(self, index: int, top: float | None = None) -> Box:
        return self._engine.vertical_bar_area(index, top)

    def horizontal_bar_area(self, index: int, right: float | None = None) -> Box:
        return self._engine.horizontal_bar_area(index, right)

    def physical_point(self, x: float, y: float) -> tuple[float, float]:
        return self._engine.physical_point(x, y)

    def logical_point(self, px: float, py: float) -> tuple[float, float]:
        return self._engine.logical_point(px, py)

    def px(self, value: float) -> float:
        return self._engine.px(value)

    def py(self, value: float) -> float:
        return self._engine.py(value)

    def lx(self, value: float) -> float:
        return self._engine.lx(value)

    def ly(self, value: float) -> float:
        return self._engine.ly(value)

    def add_to_page(self, code: str) -> None:
        self._document.add_to_page(code)

    def add_function(self, name: str, code: str) -> None:
        self._document.add_function(name, code)

    def new_page(self, label: str | None = None) -> None:
        self._document.new_page(label)

    def output(self, path: str | Path) -> Path:
        """Write the document; see PostScriptDocument.output."""
        return self._document.output(path)
