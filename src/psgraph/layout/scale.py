"""Axis scale calculation: nice-number ranges, nested mark subdivision, labels.

A numeric axis is resolved in three stages. A step is chosen from a fixed
list of "nice" multipliers of the range's power of ten so that the number of
major marks is close to the number of labels requested. The range is rounded
outward to whole steps and each major mark is repeatedly subdivided (by 2 and
5 alternately) while marks stay at least `smallest` apart. Finally the
subdivision depth that carries text labels is chosen and the label values are
generated.

A categorical axis has one slot per explicit label and no search.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from psgraph.constants import NICE_SCALES, NICE_SUBDIVISIONS
from psgraph.errors import ConfigurationError


@dataclass(frozen=True)
class ResolvedScale:
    """Result of laying out one axis.

    Attributes:
        rounded_low, rounded_high: Logical bounds after outward rounding.
        factors: Number of sub-marks at each depth, most significant first.
            factors[0] is the number of major divisions.
        spreads: Logical size of one mark at each depth.
        mark_gap: Physical distance between adjacent innermost marks.
        label_depth: Deepest index into factors whose marks are labelled.
        labels: Label values (numbers, or strings plus an empty fencepost for
            a categorical axis), one per labelled mark.
        labels_req: Number of labels that was requested.
        physical_extent: Physical length covered, product(factors) * mark_gap.
        categorical: True when laid out from explicit labels.
    """

    rounded_low: float
    rounded_high: float
    factors: tuple[int, ...]
    spreads: tuple[float, ...]
    mark_gap: float
    label_depth: int
    labels: tuple[float | str, ...]
    labels_req: int
    physical_extent: float
    categorical: bool = False

    @property
    def mark_count(self) -> int:
        """Number of innermost divisions (one less than the number of marks)."""
        return math.prod(self.factors)

    @property
    def depth(self) -> int:
        return len(self.factors)


def _check_positive(value: float, axis: str, name: str) -> None:
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f'{axis} axis: {name} must be positive, got {value!r}')


def _choose_step(lrange: float, labels_req: int) -> tuple[float, float, int]:
    """Pick the nice step whose major-mark count is closest to labels_req.

    Returns:
        (fractional mark count, step, first subdivision factor). Ties go to
        the earliest candidate.
    """
    magnitude = 10.0 ** math.floor(math.log10(lrange))
    mantissa = lrange / magnitude
    best = math.inf
    nmarks = mantissa
    step = magnitude
    subdivs = NICE_SUBDIVISIONS[0]
    for scale, subdiv in zip(NICE_SCALES, NICE_SUBDIVISIONS):
        count = mantissa * scale
        score = abs(count - labels_req)
        if score < best:
            best = score
            nmarks = count
            step = magnitude / scale
            subdivs = subdiv
    return nmarks, step, subdivs


def _round_outward(low: float, high: float, nmarks: float, step: float) -> tuple[float, int]:
    """Round low down to a whole step and count the major marks needed to pass high.

    A non-negative low is truncated toward zero; a negative low that is not
    already a whole step gets one more step below it. Rounding error in
    low / step never leaves the rounded value above low.
    """
    rounded_low = math.trunc(low / step) * step
    if low >= 0:
        if rounded_low < low:
            nmarks += 1
    elif rounded_low > low:
        rounded_low -= step
        nmarks += 1
    while rounded_low > low:
        rounded_low -= step
        nmarks += 1
    count = math.ceil(nmarks)
    while rounded_low + count * step < high:
        count += 1
    return rounded_low, count


def _subdivide(
    nmarks: int,
    step: float,
    subdivs: int,
    physical_extent: float,
    smallest: float,
) -> tuple[list[int], list[float]]:
    """Split each major mark while the innermost marks stay at least smallest apart."""
    factors = [nmarks]
    spreads = [step]
    nphys = int(physical_extent / smallest)
    rem = nphys / nmarks
    while rem > subdivs:
        rem /= subdivs
        step /= subdivs
        factors.append(subdivs)
        spreads.append(step)
        subdivs = 5 if subdivs == 2 else 2
    # use what headroom is left
    if rem / 5 > 1:
        factors.append(5)
        spreads.append(step / 5)
    elif rem / 2 > 1:
        factors.append(2)
        spreads.append(step / 2)
    return factors, spreads


def _label_depth(factors: Sequence[int], labels_req: int) -> int:
    """Choose the labelled depth whose cumulative mark count is nearest labels_req.

    The two depths straddling the request are compared and the shallower one
    wins a tie. Never returns less than 0; returns the deepest depth when even
    that falls short of the request.
    """
    nlabels = 1
    for depth, factor in enumerate(factors):
        last = nlabels
        nlabels *= factor
        if nlabels >= labels_req:
            if abs(last - labels_req) <= abs(nlabels - labels_req):
                return max(depth - 1, 0)
            return depth
    return len(factors) - 1


def _label_values(
    low: float,
    high: float,
    factors: Sequence[int],
    spreads: Sequence[float],
    depth: int,
) -> list[float]:
    """Step a multi-radix counter over factors[0..depth] and convert to values.

    Each value is recomputed from the counter rather than accumulated, and
    the last label is exactly high.
    """
    counter = [0] * (depth + 1)
    values = [low]
    while True:
        level = depth
        while level >= 0:
            counter[level] += 1
            if counter[level] < factors[level]:
                break
            counter[level] = 0
            level -= 1
        if level < 0:
            break
        values.append(low + sum(c * s for c, s in zip(counter, spreads)))
    values.append(high)
    return values


def calculate_scale(
    low: float,
    high: float,
    physical_extent: float,
    labels_req: int,
    smallest: float,
    axis: str = 'x',
) -> ResolvedScale:
    """Lay out a numeric axis covering [low, high] over physical_extent points.

    Parameters:
        low, high: Logical range that must appear on the axis (low < high).
        physical_extent: Physical length available for the axis.
        labels_req: Requested number of labelled marks (values below 1 use 1).
        smallest: Smallest allowed physical gap between marks.
        axis: Axis name for error messages.

    Returns:
        ResolvedScale with a rounded range, subdivision factors and labels.

    Raises:
        ConfigurationError: Non-finite bounds, high <= low, or non-positive
            extent or smallest.
    """
    if not (math.isfinite(low) and math.isfinite(high)):
        raise ConfigurationError(f'{axis} axis: low and high must be finite, got {low!r}, {high!r}')
    if high <= low:
        raise ConfigurationError(
            f'{axis} axis: high ({high!r}) must be greater than low ({low!r})'
        )
    _check_positive(physical_extent, axis, 'physical extent')
    _check_positive(smallest, axis, 'smallest mark gap')
    labels_req = max(int(labels_req), 1)

    nmarks, step, subdivs = _choose_step(high - low, labels_req)
    rounded_low, count = _round_outward(low, high, nmarks, step)
    rounded_high = rounded_low + count * step

    factors, spreads = _subdivide(count, step, subdivs, physical_extent, smallest)
    total = math.prod(factors)
    mark_gap = physical_extent / total

    depth = _label_depth(factors, labels_req)
    labels = _label_values(rounded_low, rounded_high, factors, spreads, depth)
    return ResolvedScale(
        rounded_low=rounded_low,
        rounded_high=rounded_high,
        factors=tuple(factors),
        spreads=tuple(spreads),
        mark_gap=mark_gap,
        label_depth=depth,
        labels=tuple(labels),
        labels_req=labels_req,
        physical_extent=total * mark_gap,
    )


def categorical_scale(
    labels: Sequence[str],
    physical_extent: float,
    axis: str = 'x',
) -> ResolvedScale:
    """Lay out an axis with one slot per label.

    N labels give N slots delimited by N+1 marks; the label list gains an
    empty fencepost entry so that every mark has a label.

    Raises:
        ConfigurationError: No labels, or non-positive extent.
    """
    if not labels:
        raise ConfigurationError(f'{axis} axis: labels must not be empty')
    _check_positive(physical_extent, axis, 'physical extent')
    n = len(labels)
    return ResolvedScale(
        rounded_low=0.0,
        rounded_high=float(n),
        factors=(n,),
        spreads=(1.0,),
        mark_gap=physical_extent / n,
        label_depth=0,
        labels=(*(str(label) for label in labels), ''),
        labels_req=n,
        physical_extent=physical_extent,
        categorical=True,
    )
