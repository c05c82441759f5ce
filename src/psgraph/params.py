"""Typed chart options: page layout, per-axis settings, and dict parsing."""

from __future__ import annotations

import logging
import numbers
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any, TypeVar

from psgraph.colors import Color
from psgraph.constants import (
    DEFAULT_BACKGROUND,
    DEFAULT_DOTS_PER_INCH,
    DEFAULT_FONT,
    DEFAULT_FONT_COLOR,
    DEFAULT_FONT_SIZE,
    DEFAULT_GRID_COLOR,
    DEFAULT_HEADING_FONT,
    DEFAULT_HEADING_FONT_SIZE,
    DEFAULT_HEAVY_WIDTH,
    DEFAULT_KEY_WIDTH,
    DEFAULT_LABEL_GAP,
    DEFAULT_LIGHT_WIDTH,
    DEFAULT_MARK_MAX,
    DEFAULT_MARK_MIN,
    DEFAULT_MID_WIDTH,
    DEFAULT_RIGHT_MARGIN,
    DEFAULT_SPACING,
    DEFAULT_TOP_MARGIN,
)
from psgraph.errors import ConfigurationError

logger = logging.getLogger(__name__)

_T = TypeVar('_T')


def check_text(text: str, name: str) -> str:
    """Return text if every character can be written to a PostScript string.

    Raises:
        ConfigurationError: text is not a str or holds a character outside
            Latin-1.
    """
    if not isinstance(text, str):
        raise ConfigurationError(f'{name} must be text, got {type(text).__name__}')
    for ch in text:
        if ord(ch) > 255:
            raise ConfigurationError(f'{name}: cannot write {ch!r} in a PostScript string: {text!r}')
    return text


@dataclass
class PageLayout:
    """Chart-wide options. Lengths in points; None means derive from the page.

    Attributes:
        left_edge, bottom_edge, right_edge, top_edge: Outer chart boundary
            (default: page bounding box inset by one point).
        top_margin: Space above the graph for the topmost y label.
        right_margin: Space right of the graph for the last x label.
        spacing: Extra separation between chart regions.
        dots_per_inch: Device resolution; minimum mark gaps are multiples of it.
        color: Default grid line colour.
        background: Graph area fill colour.
        heavy_color, mid_color, light_color: Per-depth grid colours
            (default: color).
        heavy_width, mid_width, light_width: Per-depth grid line widths.
        font, font_size, font_color: Default text settings.
        heading_font, heading_font_size, heading_font_color: Heading text
            (heading colour defaults to font_color).
        heading: Title above the graph.
        heading_height: Height of the heading strip, excluding the y title
            line (default: heading_font_size).
        key_width: Space reserved at the right for a key (0 for none).
    """

    left_edge: float | None = None
    bottom_edge: float | None = None
    right_edge: float | None = None
    top_edge: float | None = None
    top_margin: float = DEFAULT_TOP_MARGIN
    right_margin: float = DEFAULT_RIGHT_MARGIN
    spacing: float = DEFAULT_SPACING
    dots_per_inch: float = DEFAULT_DOTS_PER_INCH
    color: Color = DEFAULT_GRID_COLOR
    background: Color = DEFAULT_BACKGROUND
    heavy_color: Color | None = None
    mid_color: Color | None = None
    light_color: Color | None = None
    heavy_width: float = DEFAULT_HEAVY_WIDTH
    mid_width: float = DEFAULT_MID_WIDTH
    light_width: float = DEFAULT_LIGHT_WIDTH
    font: str = DEFAULT_FONT
    font_size: float = DEFAULT_FONT_SIZE
    font_color: Color = DEFAULT_FONT_COLOR
    heading_font: str = DEFAULT_HEADING_FONT
    heading_font_size: float = DEFAULT_HEADING_FONT_SIZE
    heading_font_color: Color | None = None
    heading: str = ''
    heading_height: float | None = None
    key_width: float = DEFAULT_KEY_WIDTH


@dataclass
class AxisSpec:
    """Options for one axis.

    When labels is given the axis is categorical: low and high are ignored and
    one slot is laid out per label.

    Attributes:
        low, high: Logical range to cover; rounded outward to the chosen scale
            (default: derived from chart data, else 0 and 100).
        labels: Explicit category labels.
        labels_req: Requested number of labelled marks (default: derived from
            label_gap).
        label_gap: Physical space between the start of each label.
        smallest: Smallest allowed physical gap between marks (default: three
            device dots).
        title: Axis title.
        font, font_size, font_color: Label text (default: chart settings).
        mark_min, mark_max: Length of the smallest and largest marks.
        rotate: Rotate labels 90 degrees (default: on for categorical x).
        center: Centre labels between marks (default: on when labels given).
        width, height: Override the reserved axis strip size.
    """

    low: float | None = None
    high: float | None = None
    labels: list[str] | None = None
    labels_req: int | None = None
    label_gap: float = DEFAULT_LABEL_GAP
    smallest: float | None = None
    title: str = ''
    font: str | None = None
    font_size: float | None = None
    font_color: Color | None = None
    mark_min: float = DEFAULT_MARK_MIN
    mark_max: float = DEFAULT_MARK_MAX
    rotate: bool | None = None
    center: bool | None = None
    width: float | None = None
    height: float | None = None

    @property
    def is_categorical(self) -> bool:
        return self.labels is not None


@dataclass
class ChartOptions:
    """Options accepted by the layout engine: page layout plus both axes."""

    layout: PageLayout = field(default_factory=PageLayout)
    x_axis: AxisSpec = field(default_factory=AxisSpec)
    y_axis: AxisSpec = field(default_factory=AxisSpec)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ChartOptions:
        """Build options from nested mappings {layout: {...}, x_axis: {...}, y_axis: {...}}.

        Parameters:
            data: Option groups; missing groups and fields take defaults.

        Returns:
            Validated ChartOptions instance.

        Raises:
            ConfigurationError: Unknown group or field name, or a value of
                the wrong type.
        """
        if data is None:
            opts = cls()
        elif isinstance(data, ChartOptions):
            opts = data
        else:
            unknown = set(data) - {'layout', 'x_axis', 'y_axis'}
            if unknown:
                raise ConfigurationError(f'Unknown option group(s): {", ".join(sorted(unknown))}')
            opts = cls(
                layout=_from_mapping(PageLayout, data.get('layout'), 'layout'),
                x_axis=_from_mapping(AxisSpec, data.get('x_axis'), 'x_axis'),
                y_axis=_from_mapping(AxisSpec, data.get('y_axis'), 'y_axis'),
            )
        opts.validate()
        return opts

    def validate(self) -> None:
        """Check that numeric options are numbers and text can be written.

        Raises:
            ConfigurationError: Names the group and field of the bad value.
        """
        _check_fields(self.layout, 'layout')
        _check_fields(self.x_axis, 'x_axis')
        _check_fields(self.y_axis, 'y_axis')


def _check_fields(obj: Any, group: str) -> None:
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value is None:
            continue
        name = f'{group}.{f.name}'
        kind = str(f.type).split(' | ')[0]
        if kind in ('float', 'int'):
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ConfigurationError(f'{name} must be a number, got {value!r}')
        elif kind == 'str':
            check_text(value, name)
        elif kind == 'list[str]':
            if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
                raise ConfigurationError(f'{name} must be a list of labels, got {value!r}')
            for i, label in enumerate(value):
                check_text(str(label), f'{name}[{i}]')


def _from_mapping(cls: type[_T], data: Mapping[str, Any] | _T | None, group: str) -> _T:
    """Construct dataclass cls from a mapping, rejecting unknown keys."""
    if data is None:
        return cls()
    if isinstance(data, cls):
        return data
    if not isinstance(data, Mapping):
        raise ConfigurationError(f'{group}: expected a mapping of options, got {type(data).__name__}')
    names = {f.name for f in fields(cls)}
    unknown = set(data) - names
    if unknown:
        raise ConfigurationError(f'{group}: unknown option(s): {", ".join(sorted(unknown))}')
    values = dict(data)
    labels = values.get('labels')
    if isinstance(labels, Iterable) and not isinstance(labels, (str, bytes)):
        values['labels'] = [str(label) for label in values['labels']]
    logger.debug('%s options: %s', group, values)
    return cls(**values)
