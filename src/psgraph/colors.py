"""Grey/RGB colour values and the two-phase outer colour used by styles."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from psgraph.errors import ConfigurationError

# A grey level, or red/green/blue components; every value in [0, 1].
Color = float | tuple[float, float, float]


def check_color(value: object, field: str) -> Color:
    """Validate and normalise a colour option.

    Parameters:
        value: Grey level or sequence of three RGB components.
        field: Option name used in the error message.

    Returns:
        Float grey level or a tuple of three floats.

    Raises:
        ConfigurationError: Wrong shape or component outside [0, 1].
    """
    if isinstance(value, bool):
        raise ConfigurationError(f'{field}: colour must be a number or RGB triple, got {value!r}')
    if isinstance(value, (int, float)):
        components: tuple[float, ...] = (float(value),)
    elif isinstance(value, Sequence) and not isinstance(value, str) and len(value) == 3:
        try:
            components = tuple(float(v) for v in value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f'{field}: RGB components must be numeric, got {value!r}') from e
    else:
        raise ConfigurationError(f'{field}: colour must be a number or RGB triple, got {value!r}')
    for c in components:
        if not math.isfinite(c) or c < 0.0 or c > 1.0:
            raise ConfigurationError(f'{field}: colour components must be in [0, 1], got {value!r}')
    if len(components) == 1:
        return components[0]
    return (components[0], components[1], components[2])


def complement(color: Color) -> Color:
    """Return the complementary colour (1 - each component)."""
    if isinstance(color, tuple):
        return (1.0 - color[0], 1.0 - color[1], 1.0 - color[2])
    return 1.0 - color


def gray_of(red: float, green: float, blue: float) -> float:
    """Luminance-weighted grey level of an RGB colour."""
    return red * 0.3 + green * 0.59 + blue * 0.11


class OuterColorMode(Enum):
    """How an outer (edge) colour is determined."""

    EXPLICIT = 'explicit'
    COMPLEMENT_OF_BACKGROUND = 'complement'


@dataclass(frozen=True)
class OuterColor:
    """Outer colour that may only be known once the chart background is known.

    Use OuterColor.explicit(c) for a fixed colour or OuterColor.complement()
    to take the complement of (or, with same=True, match) the background.
    """

    mode: OuterColorMode
    color: Color | None = None

    @classmethod
    def explicit(cls, color: Color) -> OuterColor:
        return cls(OuterColorMode.EXPLICIT, color)

    @classmethod
    def complement(cls) -> OuterColor:
        return cls(OuterColorMode.COMPLEMENT_OF_BACKGROUND)

    @property
    def is_resolved(self) -> bool:
        return self.mode is OuterColorMode.EXPLICIT

    def resolve(self, background: Color, same: bool = False) -> OuterColor:
        """Bind a pending colour to the given background; explicit colours are unchanged."""
        if self.is_resolved:
            return self
        return OuterColor.explicit(background if same else complement(background))
