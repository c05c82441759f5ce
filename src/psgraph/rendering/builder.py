"""Small builder for PostScript page statements.

Values are formatted by type: numbers compactly, str as escaped PostScript
strings, PSName as /literal names, tuples of three floats or other sequences
as arrays. Statements are collected as lines and returned by text().
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import Union

import numpy as np

from psgraph.colors import Color
from psgraph.params import check_text


class PSName(str):
    """A PostScript literal name, emitted as /name."""


PSValue = Union[int, float, str, PSName, Sequence['PSValue'], None]


def ps_number(value: float) -> str:
    """Format a number compactly: integers without a decimal point, -0 as 0."""
    if isinstance(value, (bool, np.bool_)):
        return 'true' if value else 'false'
    v = float(value)
    if not math.isfinite(v):
        raise ValueError(f'Cannot write non-finite number {value!r} to PostScript')
    if v == 0:
        return '0'
    if v.is_integer() and abs(v) < 1e15:
        return str(int(v))
    return f'{v:.10g}'


def ps_string(text: str) -> str:
    """Escape backslash and parentheses and wrap text as a PostScript string.

    Non-ASCII Latin-1 characters (such as the degree sign) are written as
    octal escapes so each prints as one glyph.

    Raises:
        ConfigurationError: text holds a character outside Latin-1.
    """
    check_text(text, 'text')
    temp = text.replace('\\', '\\\\').replace('(', '\\(').replace(')', '\\)')
    temp = temp.replace('\n', '\\n').replace('\r', '\\r').replace('\t', '\\t')
    out = []
    for ch in temp:
        code = ord(ch)
        if code > 127:
            out.append(f'\\{code:03o}')
        else:
            out.append(ch)
    return '(' + ''.join(out) + ')'


def ps_array(values: Iterable[PSValue]) -> str:
    return '[' + ' '.join(ps_value(v) for v in values) + ']'


def ps_color(color: Color) -> str:
    """Grey level as a number, RGB as a three element array."""
    if isinstance(color, tuple):
        return ps_array(color)
    return ps_number(color)


def ps_value(value: PSValue) -> str:
    """Format any supported Python value as a PostScript token."""
    if value is None:
        return 'null'
    if isinstance(value, PSName):
        return '/' + value
    if isinstance(value, str):
        return ps_string(value)
    if isinstance(value, (bool, int, float, np.integer, np.floating, np.bool_)):
        return ps_number(value)
    if isinstance(value, (Sequence, np.ndarray)):
        return ps_array(value)
    raise TypeError(f'Cannot format {type(value).__name__} as PostScript')


class PostScriptBuilder:
    """Accumulate PostScript statements.

    Example:
        b = PostScriptBuilder()
        b.begin('gpaperdict')
        b.call('graph_area', 67, 135, 134, 468, 1)
        b.end()
        code = b.text()
    """

    def __init__(self, indent: str = '') -> None:
        self._lines: list[str] = []
        self._indent = indent

    def __len__(self) -> int:
        return len(self._lines)

    def raw(self, line: str) -> PostScriptBuilder:
        """Append a line of PostScript as is."""
        self._lines.append(self._indent + line)
        return self

    def call(self, proc: str, *args: PSValue) -> PostScriptBuilder:
        """Append 'args... proc'."""
        parts = [ps_value(a) for a in args]
        parts.append(proc)
        return self.raw(' '.join(parts))

    def define(self, name: str, value: PSValue) -> PostScriptBuilder:
        """Append '/name value def'."""
        return self.raw(f'/{name} {ps_value(value)} def')

    def begin(self, dictionary: str) -> PostScriptBuilder:
        self.raw(f'{dictionary} begin')
        self._indent += '    '
        return self

    def end(self) -> PostScriptBuilder:
        self._indent = self._indent[:-4]
        return self.raw('end')

    def comment(self, text: str) -> PostScriptBuilder:
        return self.raw(f'% {text}')

    def extend(self, lines: Iterable[str]) -> PostScriptBuilder:
        for line in lines:
            self.raw(line)
        return self

    def text(self) -> str:
        """Return the statements joined by newlines, ending with a newline."""
        if not self._lines:
            return ''
        return '\n'.join(self._lines) + '\n'
