"""Affine mapping between logical (data) and physical (page) coordinates."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from psgraph.errors import ConfigurationError


@dataclass(frozen=True)
class CoordinateTransform:
    """physical = multiplier * logical + constant, with its algebraic inverse.

    Attributes:
        multiplier, constant: Logical to physical coefficients.
        inverse_multiplier, inverse_constant: Physical to logical coefficients.
    """

    multiplier: float
    constant: float
    inverse_multiplier: float
    inverse_constant: float

    @classmethod
    def from_ranges(
        cls,
        logical_low: float,
        logical_high: float,
        physical_low: float,
        physical_high: float,
        axis: str = 'x',
    ) -> CoordinateTransform:
        """Map [logical_low, logical_high] onto [physical_low, physical_high].

        Raises:
            ConfigurationError: Either range is empty or not finite.
        """
        lrange = logical_high - logical_low
        prange = physical_high - physical_low
        if not math.isfinite(lrange) or lrange == 0:
            raise ConfigurationError(
                f'{axis} axis: logical range {logical_low!r}..{logical_high!r} is degenerate'
            )
        if not math.isfinite(prange) or prange == 0:
            raise ConfigurationError(
                f'{axis} axis: physical range {physical_low!r}..{physical_high!r} is degenerate'
            )
        m = prange / lrange
        c = physical_low - m * logical_low
        return cls(multiplier=m, constant=c, inverse_multiplier=1.0 / m, inverse_constant=-c / m)

    def to_physical(self, value: float) -> float:
        return self.multiplier * value + self.constant

    def to_logical(self, value: float) -> float:
        return self.inverse_multiplier * value + self.inverse_constant

    def to_physical_array(self, values: ArrayLike) -> NDArray[np.float64]:
        """Vectorised to_physical for a sequence or array of logical values."""
        return self.multiplier * np.asarray(values, dtype=np.float64) + self.constant

    def to_logical_array(self, values: ArrayLike) -> NDArray[np.float64]:
        """Vectorised to_logical for a sequence or array of physical values."""
        return self.inverse_multiplier * np.asarray(values, dtype=np.float64) + self.inverse_constant
