"""Line, bar and point styles, varied automatically through a Sequence.

A Sequence holds lists of candidate values (colour components, point shapes,
widths, dash patterns, sizes) and hands out a different permutation each
time a Style is created from it. Styles write their settings into the
gstyledict dictionary used by the chart drawing procedures.

Example:
    seq = Sequence()
    seq.setup('red', [0, 1, 0.2, 0.8, 0.4, 0.6])
    for series in data:
        style = Style(sequence=seq, auto=['dashes', 'red', 'shape'], line={})
        style.write(document)
"""

from __future__ import annotations

import copy
import logging
import weakref
from collections.abc import Mapping
from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass
from typing import Any

from psgraph.colors import Color, OuterColor, check_color
from psgraph.constants import DEFAULT_BACKGROUND, POINT_SHAPES
from psgraph.errors import ConfigurationError
from psgraph.rendering import procsets
from psgraph.rendering.builder import PostScriptBuilder, ps_array, ps_color, ps_number
from psgraph.rendering.document import PostScriptDocument

logger = logging.getLogger(__name__)

# Candidate values varied by a Sequence
_SEQUENCE_DEFAULTS: dict[str, list[Any]] = {
    'red': [0.5, 1, 0],
    'green': [0, 0.5, 0.25, 0.75, 1],
    'blue': [0, 1, 0.5],
    'yellow': [0.9, 0.2, 0.5],
    'mauve': [0.9, 0.2, 0.5],
    'cyan': [0.9, 0.2, 0.5],
    'gray': [0.6, 0, 0.45, 0.15, 0.75, 0.3, 0.9],
    'shape': list(POINT_SHAPES),
    'width': [1, 0.5, 4, 2],
    'dashes': [[], [3, 3], [9, 9], [10, 5, 3, 5]],
    'size': [5, 3, 7],
}
DEFAULT_AUTO = ('shape', 'dashes', 'size', 'width')

_LINE_OPTIONS = frozenset(
    {'color', 'width', 'dashes', 'outer_color', 'outer_width', 'outer_dashes',
     'inner_color', 'inner_width', 'inner_dashes'}
)
_BAR_OPTIONS = frozenset({'color', 'width', 'outer_color', 'outer_width', 'inner_color', 'inner_width'})
_POINT_OPTIONS = _BAR_OPTIONS | {'size', 'shape'}


@dataclass(frozen=True)
class StyleDefaults:
    """One permutation of sequence values; fields not varied keep these defaults."""

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0
    gray: Color = 0.0
    shape: str = 'dot'
    width: float = 0.5
    dashes: tuple[float, ...] = ()
    size: float = 5.0


class Sequence:
    """Source of varying style defaults.

    Each call to create() returns the next permutation of the chosen
    features; the first feature listed varies fastest. A Sequence mutates on
    every use and should be owned by one chart (or guarded by the caller).
    """

    def __init__(self) -> None:
        self._values: dict[str, list[Any]] = copy.deepcopy(_SEQUENCE_DEFAULTS)
        self._initialized = False
        self._auto: tuple[str, ...] | None = None
        self._choices: list[str] = []
        self._counts: list[int] = []
        self._style_id = 0
        # last style written to each document, for changes_only
        self._previous: weakref.WeakKeyDictionary[PostScriptDocument, Style] = (
            weakref.WeakKeyDictionary()
        )

    def setup(self, key: str, values: SequenceABC[Any]) -> None:
        """Replace the candidate values for one feature and restart the sequence.

        Raises:
            ConfigurationError: Unknown feature or empty value list.
        """
        if key not in self._values:
            raise ConfigurationError(
                f'Unknown sequence feature {key!r}; expected one of {", ".join(self._values)}'
            )
        if isinstance(values, str) or len(values) == 0:
            raise ConfigurationError(f'Sequence feature {key!r} needs a non-empty list of values')
        if key == 'shape':
            for shape in values:
                _check_shape(shape)
        self._values[key] = list(values)
        self._initialized = False

    def values(self, key: str) -> list[Any]:
        return list(self._values[key])

    def reset(self) -> None:
        """Start the permutations again from the first."""
        self._initialized = False

    def create(self, auto: SequenceABC[str] | None = None) -> StyleDefaults:
        """Return the next set of defaults.

        Parameters:
            auto: Features to vary, fastest first. A list different from the
                previous call restarts the sequence; None keeps the current
                list (or DEFAULT_AUTO on first use).

        Raises:
            ConfigurationError: Unknown feature name.
        """
        if auto is not None:
            requested = tuple(auto)
            for key in requested:
                if key not in self._values:
                    raise ConfigurationError(f'Unknown auto feature {key!r}')
            if requested != self._auto:
                self._auto = requested
                self._initialized = False
        if self._initialized:
            return self._next_row()
        self._do_reset()
        return self._output_row()

    def _do_reset(self) -> None:
        self._initialized = True
        self._choices = list(self._auto) if self._auto else list(DEFAULT_AUTO)
        self._counts = [0] * len(self._choices)

    def _next_row(self) -> StyleDefaults:
        for i, key in enumerate(self._choices):
            if self._counts[i] < len(self._values[key]) - 1:
                self._counts[i] += 1
                return self._output_row()
            self._counts[i] = 0
        return self._output_row()

    def _output_row(self) -> StyleDefaults:
        row: dict[str, Any] = {}
        for key, chosen in zip(self._choices, self._counts):
            value = self._values[key][chosen]
            if key == 'yellow':
                row['red'] = row['green'] = value
            elif key == 'mauve':
                row['red'] = row['blue'] = value
            elif key == 'cyan':
                row['green'] = row['blue'] = value
            elif key == 'gray':
                if not isinstance(value, (list, tuple)):
                    row['red'] = value * 0.3
                    row['green'] = value * 0.59
                    row['blue'] = value * 0.11
                    row['gray'] = value
                else:
                    row['gray'] = tuple(value)
            elif key == 'dashes':
                row['dashes'] = tuple(value)
            else:
                row[key] = value
        return StyleDefaults(**row)

    def new_style_id(self) -> int:
        self._style_id += 1
        return self._style_id

    @property
    def style_id(self) -> int:
        """Id given to the most recent style."""
        return self._style_id

    def previous_style(self, document: PostScriptDocument) -> Style | None:
        """Style most recently written from this sequence to document."""
        return self._previous.get(document)

    def register_style(self, style: Style, document: PostScriptDocument) -> None:
        self._previous[document] = style


def _check_shape(shape: object) -> str:
    if shape not in POINT_SHAPES:
        raise ConfigurationError(
            f'Unknown point shape {shape!r}; expected one of {", ".join(POINT_SHAPES)}'
        )
    return str(shape)


def _check_dashes(value: object, field_name: str) -> tuple[float, ...]:
    if isinstance(value, str) or not isinstance(value, SequenceABC):
        raise ConfigurationError(f'{field_name}: dash pattern must be a list of numbers, got {value!r}')
    try:
        dashes = tuple(float(v) for v in value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f'{field_name}: dash pattern must be numeric, got {value!r}') from e
    if any(d < 0 for d in dashes):
        raise ConfigurationError(f'{field_name}: dash lengths must not be negative, got {value!r}')
    return dashes


def _check_width(value: object, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise ConfigurationError(f'{field_name}: width must be a non-negative number, got {value!r}')
    return float(value)


def _group(options: Mapping[str, Any] | None, allowed: frozenset[str], group: str) -> dict[str, Any] | None:
    if options is None:
        return None
    if not isinstance(options, Mapping):
        raise ConfigurationError(f'{group}: expected a mapping of options, got {type(options).__name__}')
    unknown = set(options) - allowed
    if unknown:
        raise ConfigurationError(f'{group}: unknown option(s): {", ".join(sorted(unknown))}')
    return {k: v for k, v in options.items() if v is not None}


def _outer(options: Mapping[str, Any], group: str) -> OuterColor:
    if 'outer_color' in options:
        return OuterColor.explicit(check_color(options['outer_color'], f'{group}.outer_color'))
    return OuterColor.complement()


def _inner(options: Mapping[str, Any], default: Color, group: str) -> Color:
    value = options.get('inner_color', options.get('color', default))
    return check_color(value, f'{group}.inner_color')


@dataclass
class LineStyle:
    outer_color: OuterColor
    outer_width: float
    outer_dashes: tuple[float, ...]
    inner_color: Color
    inner_width: float
    inner_dashes: tuple[float, ...]


@dataclass
class BarStyle:
    outer_color: OuterColor
    outer_width: float
    inner_color: Color
    inner_width: float


@dataclass
class PointStyle:
    size: float
    shape: str
    outer_color: OuterColor
    outer_width: float
    inner_color: Color
    inner_width: float


class Style:
    """Drawing settings for lines, bars and/or points.

    Only the groups given (line, bar, point; an empty dict is enough) are
    active and written out. Outer colours not set explicitly follow the
    chart background: its complement, or the same colour when same is True.

    Parameters:
        sequence: Source of varying defaults (a new Sequence when omitted).
        auto: Features to vary, or 'none' to use fixed defaults.
        changes_only: Write only values that differ from the previous style
            written from the same sequence to the same document.
        same: Outer colours match the background instead of complementing it.
        use_color: Take inner colours from red/green/blue rather than gray.
        line, bar, point: Option groups.

    Raises:
        ConfigurationError: Unknown option, bad colour, width or point shape.
    """

    def __init__(
        self,
        sequence: Sequence | None = None,
        auto: SequenceABC[str] | str | None = None,
        changes_only: bool = True,
        same: bool = False,
        use_color: bool = True,
        line: Mapping[str, Any] | None = None,
        bar: Mapping[str, Any] | None = None,
        point: Mapping[str, Any] | None = None,
    ) -> None:
        if isinstance(auto, str):
            if auto != 'none':
                raise ConfigurationError(f"auto must be a list of features or 'none', got {auto!r}")
            self._sequence: Sequence | None = None
            self.id: int | None = None
            d = StyleDefaults()
        else:
            self._sequence = Sequence() if sequence is None else sequence
            d = self._sequence.create(auto)
            self.id = self._sequence.new_style_id()
        self.changes_only = changes_only
        self.same = same
        self.use_color = use_color
        color: Color = (d.red, d.green, d.blue) if use_color else d.gray

        self.line: LineStyle | None = None
        self.bar: BarStyle | None = None
        self.point: PointStyle | None = None

        li = _group(line, _LINE_OPTIONS, 'line')
        if li is not None:
            width = _check_width(li.get('width', d.width), 'line.width')
            dashes = _check_dashes(li.get('dashes', d.dashes), 'line.dashes')
            self.line = LineStyle(
                outer_color=_outer(li, 'line'),
                outer_width=_check_width(li.get('outer_width', 2 * width), 'line.outer_width'),
                outer_dashes=_check_dashes(li.get('outer_dashes', dashes), 'line.outer_dashes'),
                inner_color=_inner(li, color, 'line'),
                inner_width=_check_width(li.get('inner_width', width), 'line.inner_width'),
                inner_dashes=_check_dashes(li.get('inner_dashes', dashes), 'line.inner_dashes'),
            )

        bl = _group(bar, _BAR_OPTIONS, 'bar')
        if bl is not None:
            width = _check_width(bl.get('width', d.width), 'bar.width')
            self.bar = BarStyle(
                outer_color=_outer(bl, 'bar'),
                outer_width=_check_width(bl.get('outer_width', 2 * width), 'bar.outer_width'),
                inner_color=_inner(bl, color, 'bar'),
                inner_width=_check_width(bl.get('inner_width', width), 'bar.inner_width'),
            )

        pp = _group(point, _POINT_OPTIONS, 'point')
        if pp is not None:
            width = _check_width(pp.get('width', d.width), 'point.width')
            self.point = PointStyle(
                size=_check_width(pp.get('size', d.size), 'point.size'),
                shape=_check_shape(pp.get('shape', d.shape)),
                outer_color=_outer(pp, 'point'),
                outer_width=_check_width(pp.get('outer_width', 2 * width), 'point.outer_width'),
                inner_color=_inner(pp, color, 'point'),
                inner_width=_check_width(pp.get('inner_width', width), 'point.inner_width'),
            )
        self._written: dict[str, str] = {}

    @property
    def sequence(self) -> Sequence | None:
        return self._sequence

    def background(self, color: Color, same: bool | None = None) -> None:
        """Resolve outer colours that follow the background.

        Parameters:
            color: Chart background colour.
            same: Override the constructor's same setting.
        """
        bgnd = check_color(color, 'background')
        match = self.same if same is None else same
        for group in (self.line, self.bar, self.point):
            if group is not None:
                group.outer_color = group.outer_color.resolve(bgnd, match)

    def settings(self) -> dict[str, str]:
        """Return every gstyledict variable this style sets, formatted for PostScript.

        Outer colours still waiting for a background are resolved against the
        default white background.
        """
        if not all(
            g.outer_color.is_resolved for g in (self.line, self.bar, self.point) if g is not None
        ):
            self.background(DEFAULT_BACKGROUND)
        values: dict[str, str] = {}
        if self.line is not None:
            values['locolor'] = ps_color(_explicit(self.line.outer_color))
            values['lowidth'] = ps_number(self.line.outer_width)
            values['lostyle'] = ps_array(self.line.outer_dashes)
            values['licolor'] = ps_color(self.line.inner_color)
            values['liwidth'] = ps_number(self.line.inner_width)
            values['listyle'] = ps_array(self.line.inner_dashes)
        if self.point is not None:
            values['ppshape'] = f'/make_{self.point.shape} cvx'
            values['ppsize'] = ps_number(self.point.size)
            values['powidth'] = ps_number(self.point.outer_width)
            values['pocolor'] = ps_color(_explicit(self.point.outer_color))
            values['picolor'] = ps_color(self.point.inner_color)
            values['piwidth'] = ps_number(self.point.inner_width)
        if self.bar is not None:
            values['bocolor'] = ps_color(_explicit(self.bar.outer_color))
            values['bowidth'] = ps_number(self.bar.outer_width)
            values['bicolor'] = ps_color(self.bar.inner_color)
            values['biwidth'] = ps_number(self.bar.inner_width)
        return values

    def write(self, document: PostScriptDocument) -> None:
        """Add the style settings to the document's current page."""
        procsets.install(document, procsets.GRAPH_STYLE)
        values = self.settings()
        previous = self._sequence.previous_style(document) if self._sequence is not None else None
        b = PostScriptBuilder()
        b.begin('gstyledict')
        for name, value in values.items():
            if (
                self.changes_only
                and previous is not None
                and previous._written.get(name) == value
            ):
                continue
            b.raw(f'/{name} {value} def')
        b.end()
        self._written = values
        if self._sequence is not None:
            self._sequence.register_style(self, document)
        document.add_to_page(b.text())
        logger.debug('Style %s written (%d settings)', self.id, len(b) - 2)


def _explicit(outer: OuterColor) -> Color:
    if outer.color is None:
        raise ConfigurationError('outer colour has not been resolved against a background')
    return outer.color
