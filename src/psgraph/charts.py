"""Bar and XY charts built from delimited data.

Both builders read a table whose first column holds the x values (category
labels for bar charts, numbers for XY charts) and whose remaining columns
are data series. Axis ranges come from the data unless given in the
options; each series gets its own style from a shared Sequence and an entry
in the key.
"""

from __future__ import annotations

import csv
import dataclasses
import io
import logging
from collections.abc import Iterable, Mapping
from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

import numpy as np
from numpy.typing import NDArray

from psgraph.constants import BAR_SLOT_MARGIN
from psgraph.errors import ConfigurationError, DataShapeError, ResourceError
from psgraph.key import GraphKey
from psgraph.params import ChartOptions, check_text
from psgraph.rendering import procsets
from psgraph.rendering.builder import PostScriptBuilder, ps_array
from psgraph.rendering.document import PostScriptDocument
from psgraph.rendering.paper import GraphPaper
from psgraph.style import Sequence, Style

logger = logging.getLogger(__name__)

_STYLE_OPTIONS = frozenset({'auto', 'changes_only', 'same', 'use_color', 'line', 'bar', 'point'})

DataSource = str | Path | TextIO | Iterable[SequenceABC[Any]]


@dataclass
class DataTable:
    """Rows of delimited data with their column headings."""

    headings: list[str]
    rows: list[list[str]]

    @property
    def width(self) -> int:
        return len(self.headings)

    def __len__(self) -> int:
        return len(self.rows)

    def column(self, index: int) -> list[str]:
        return [row[index] for row in self.rows]

    def numeric(self, first: int = 0) -> NDArray[np.float64]:
        """Return columns first.. as a (rows, columns) float array.

        Raises:
            DataShapeError: A value is not a finite number.
        """
        values = np.empty((len(self.rows), self.width - first), dtype=np.float64)
        for r, row in enumerate(self.rows):
            for c in range(first, self.width):
                cell = row[c]
                try:
                    values[r, c - first] = float(cell)
                except ValueError as e:
                    raise DataShapeError(
                        f'Row {r + 1}, column {self.headings[c]!r}: {cell!r} is not a number'
                    ) from e
        if not np.all(np.isfinite(values)):
            raise DataShapeError('Data values must be finite numbers')
        return values


def _read_rows(source: DataSource, delimiter: str) -> list[list[str]]:
    try:
        if isinstance(source, (str, Path)):
            with open(source, newline='', encoding='utf-8') as f:
                return [row for row in csv.reader(f, delimiter=delimiter)]
        if isinstance(source, io.TextIOBase):
            return [row for row in csv.reader(source, delimiter=delimiter)]
    except (UnicodeDecodeError, csv.Error) as e:
        raise DataShapeError(f'Cannot read delimited data: {e}') from e
    return [[str(cell) for cell in row] for row in source]


def read_csv(source: DataSource | DataTable, delimiter: str = ',', headings: bool = True) -> DataTable:
    """Read delimited data into a DataTable.

    Parameters:
        source: File path, open text stream, or iterable of rows.
        delimiter: Field separator for file and stream input.
        headings: First row holds column headings; otherwise headings are
            the column numbers.

    Returns:
        DataTable with stripped cells; blank lines are skipped.

    Raises:
        DataShapeError: No data rows, or rows of different lengths.
    """
    if isinstance(source, DataTable):
        return source
    rows = [[cell.strip() for cell in row] for row in _read_rows(source, delimiter)]
    rows = [row for row in rows if any(row)]
    if not rows:
        raise DataShapeError('No data rows found')
    names = rows.pop(0) if headings else [str(i + 1) for i in range(len(rows[0]))]
    if not rows:
        raise DataShapeError('No data rows found after the heading row')
    for number, row in enumerate(rows, start=2 if headings else 1):
        if len(row) != len(names):
            raise DataShapeError(
                f'Row {number} has {len(row)} fields; expected {len(names)}'
            )
    logger.debug('Read %d rows x %d columns', len(rows), len(names))
    return DataTable(headings=names, rows=rows)


def _option_groups(options: ChartOptions | Mapping[str, Any] | None) -> dict[str, dict[str, Any]]:
    """Copy validated options to plain nested dicts so data-derived defaults can be filled in."""
    parsed = ChartOptions.from_dict(options)
    return {
        'layout': dataclasses.asdict(parsed.layout),
        'x_axis': dataclasses.asdict(parsed.x_axis),
        'y_axis': dataclasses.asdict(parsed.y_axis),
    }


def _fill(group: dict[str, Any], key: str, value: Any) -> None:
    if group.get(key) is None:
        group[key] = value


def _fill_title(group: dict[str, Any], title: str) -> None:
    if not group.get('title'):
        group['title'] = title


def _data_range(values: NDArray[np.float64], include_zero: bool = False) -> tuple[float, float]:
    low = float(values.min())
    high = float(values.max())
    if include_zero:
        low, high = min(low, 0.0), max(high, 0.0)
    if high <= low:
        high = low + 1.0
    return low, high


def _series_names(table: DataTable) -> list[str]:
    """Series headings, checked before anything is drawn since they become key labels."""
    return [check_text(name, f'series heading {name!r}') for name in table.headings[1:]]


class _Chart:
    """Shared setup: options, document, key and styles."""

    procset = ''
    default_auto: tuple[str, ...] | None = None

    def __init__(
        self,
        options: ChartOptions | Mapping[str, Any] | None = None,
        style: Mapping[str, Any] | None = None,
        key: Mapping[str, Any] | bool | None = None,
        document: PostScriptDocument | None = None,
        sequence: Sequence | None = None,
    ) -> None:
        self._options = _option_groups(options)
        self._style_options = dict(style or {})
        unknown = set(self._style_options) - _STYLE_OPTIONS
        if unknown:
            raise ConfigurationError(f'style: unknown option(s): {", ".join(sorted(unknown))}')
        self._key_option = key
        self.document = PostScriptDocument() if document is None else document
        self.sequence = Sequence() if sequence is None else sequence
        self.paper: GraphPaper | None = None
        self.key: GraphKey | None = None
        self.styles: list[Style] = []

    def _make_key(self, count: int) -> GraphKey | None:
        if self._key_option is False or (self._key_option is None and count < 2):
            return None
        key_opts = dict(self._key_option) if isinstance(self._key_option, Mapping) else {}
        layout = self._options['layout']
        _, bottom, _, top = self.document.get_page_bounding_box()
        spacing = layout.get('spacing') or 0.0
        max_height = key_opts.pop('max_height', top - bottom - 2 - 2 * spacing)
        key = GraphKey(max_height, count, **key_opts)
        if not layout.get('key_width'):
            layout['key_width'] = key.width
        return key

    def _build_paper(self, key: GraphKey | None) -> GraphPaper:
        paper = GraphPaper(self._options, self.document)
        for style in self.styles:
            style.background(paper.page.background)
        procsets.install(self.document, procsets.GRAPH_STYLE)
        procsets.install(self.document, self.procset)
        if key is not None:
            key.build_key(paper)
        self.paper = paper
        self.key = key
        return paper

    def _make_styles(self, count: int, groups: Mapping[str, Any]) -> list[Style]:
        """Create one style per series; outer colours wait for the paper background."""
        opts = {k: v for k, v in self._style_options.items() if k not in ('line', 'bar', 'point')}
        opts.setdefault('auto', self.default_auto)
        self.styles = [Style(sequence=self.sequence, **opts, **groups) for _ in range(count)]
        return self.styles

    def output(self, path: str | Path) -> Path:
        """Write the chart document.

        Raises:
            ResourceError: build_chart has not been called.
        """
        if self.paper is None:
            raise ResourceError('build_chart() must be called before output()')
        return self.document.output(path)


class BarChart(_Chart):
    """Bar chart: one slot per category, one sub-bar per series.

    Parameters:
        options: Chart options; y range, x labels and titles default from
            the data.
        style: Style options (auto, changes_only, same, use_color, bar).
        key: GraphKey options, True to force a key or False for none
            (default: a key when there is more than one series).
        document: Existing document to draw on.
        sequence: Style sequence shared with other charts.
    """

    procset = procsets.BAR_CHART
    default_auto = ('red', 'green', 'blue')

    def build_chart(self, source: DataSource | DataTable) -> GraphPaper:
        """Read data, lay out the paper and draw every bar.

        Raises:
            DataShapeError: Fewer than two columns or non-numeric values.
        """
        table = read_csv(source)
        if table.width < 2:
            raise DataShapeError('Bar chart data needs a label column and at least one series')
        labels = table.column(0)
        values = table.numeric(first=1)
        series = _series_names(table)

        x_opts, y_opts = self._options['x_axis'], self._options['y_axis']
        low, high = _data_range(values, include_zero=True)
        _fill(x_opts, 'labels', labels)
        if len(x_opts['labels']) != len(labels):
            raise DataShapeError(
                f'x_axis labels has {len(x_opts["labels"])} entries for {len(labels)} data rows'
            )
        _fill_title(x_opts, table.headings[0])
        _fill(y_opts, 'low', low)
        _fill(y_opts, 'high', high)
        if len(series) == 1:
            _fill_title(y_opts, series[0])

        styles = self._make_styles(len(series), {'bar': self._style_options.get('bar', {})})
        key = self._make_key(len(series))
        paper = self._build_paper(key)
        base = min(max(0.0, paper.y_axis.low), paper.y_axis.high)
        base_y = paper.py(base)
        tops = paper.y_axis.transform.to_physical_array(values)
        gap = paper.x_axis.mark_gap
        margin = gap * BAR_SLOT_MARGIN
        width = (gap - 2 * margin) / len(series)

        for j, (name, style) in enumerate(zip(series, styles)):
            style.write(self.document)
            b = PostScriptBuilder()
            b.begin('gpaperdict')
            b.begin('gstyledict')
            b.begin('barchartdict')
            for i in range(len(labels)):
                slot = paper.vertical_bar_area(i)
                left = slot.left + margin + j * width
                y0, y1 = sorted((base_y, float(tops[i, j])))
                b.call('drawbar', left, y0, left + width, y1)
            b.end()
            b.end()
            b.end()
            self.document.add_to_page(b.text())
            if key is not None:
                key.add_key_item(
                    name,
                    'gstyledict begin barchartdict begin\n'
                    'kix0 kiy0 kix1 kiy1 drawbar\n'
                    'end end',
                )
        logger.info('Bar chart: %d categories, %d series', len(labels), len(series))
        return paper


class XYChart(_Chart):
    """Line chart with points: x values in the first column, one series per further column.

    Parameters are as for BarChart; style groups default to both line and
    point settings.
    """

    procset = procsets.XY_CHART

    def build_chart(self, source: DataSource | DataTable) -> GraphPaper:
        """Read data, lay out the paper and draw each series as a line with points.

        Raises:
            DataShapeError: Fewer than two columns or non-numeric values.
        """
        table = read_csv(source)
        if table.width < 2:
            raise DataShapeError('XY chart data needs an x column and at least one y series')
        data = table.numeric()
        xs, ys = data[:, 0], data[:, 1:]
        series = _series_names(table)

        x_opts, y_opts = self._options['x_axis'], self._options['y_axis']
        x_low, x_high = _data_range(xs)
        y_low, y_high = _data_range(ys)
        _fill(x_opts, 'low', x_low)
        _fill(x_opts, 'high', x_high)
        _fill(y_opts, 'low', y_low)
        _fill(y_opts, 'high', y_high)
        _fill_title(x_opts, table.headings[0])
        if len(series) == 1:
            _fill_title(y_opts, series[0])

        groups = {
            'line': self._style_options.get('line', {}),
            'point': self._style_options.get('point', {}),
        }
        styles = self._make_styles(len(series), groups)
        key = self._make_key(len(series))
        paper = self._build_paper(key)
        pxs = paper.x_axis.transform.to_physical_array(xs)
        pys = paper.y_axis.transform.to_physical_array(ys)

        for j, (name, style) in enumerate(zip(series, styles)):
            style.write(self.document)
            coords = np.column_stack((pxs, pys[:, j])).ravel()
            b = PostScriptBuilder()
            b.begin('gpaperdict')
            b.begin('gstyledict')
            b.begin('xychartdict')
            b.raw(f'{ps_array(coords.tolist())} {len(coords) - 1}')
            b.raw('2 copy line_outer drawxyline line_inner drawxyline')
            for phase in ('point_outer', 'point_inner'):
                b.raw(phase)
                for px, py in zip(pxs, pys[:, j]):
                    b.call('draw1point', float(px), float(py))
            b.end()
            b.end()
            b.end()
            self.document.add_to_page(b.text())
            if key is not None:
                key.add_key_item(
                    name,
                    'gstyledict begin xychartdict begin\n'
                    '2 dict begin\n'
                    '/kpx kix0 kix1 add 2 div def\n'
                    '/kpy kiy0 kiy1 add 2 div def\n'
                    '[ kix0 kpy kix1 kpy ] 3 2 copy line_outer drawxyline line_inner drawxyline\n'
                    'point_outer kpx kpy draw1point\n'
                    'point_inner kpx kpy draw1point\n'
                    'end\n'
                    'end end',
                )
        logger.info('XY chart: %d points, %d series', len(xs), len(series))
        return paper
