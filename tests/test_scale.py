"""Tests for nice-number axis scale calculation."""

from __future__ import annotations

import math
import random

import pytest

from psgraph.errors import ConfigurationError
from psgraph.layout.scale import calculate_scale, categorical_scale


def test_default_x_axis_scale() -> None:
    """0..100 over 475 points picks step 20 with five nested depths."""
    scale = calculate_scale(0, 100, 475, 15, 0.72)
    assert scale.rounded_low == 0
    assert scale.rounded_high == 100
    assert scale.factors == (5, 2, 5, 2, 5)
    assert scale.mark_gap == pytest.approx(0.95)
    assert scale.label_depth == 1
    assert scale.labels == pytest.approx(tuple(float(v) for v in range(0, 101, 10)))


def test_default_y_axis_scale() -> None:
    """A taller axis keeps the same factors with a wider mark gap."""
    scale = calculate_scale(0, 100, 703, 23, 0.72, axis='y')
    assert scale.factors == (5, 2, 5, 2, 5)
    assert scale.mark_gap == pytest.approx(1.406)
    assert scale.label_depth == 1


def test_range_rounded_outward() -> None:
    """123..456.7 rounds to 100..500 in steps of 50."""
    scale = calculate_scale(123, 456.7, 333, 11, 0.72, axis='y')
    assert scale.rounded_low == 100
    assert scale.rounded_high == 500
    assert scale.factors == (8, 5, 2, 5)
    assert scale.spreads == pytest.approx((50, 10, 5, 1))
    assert scale.mark_gap == pytest.approx(0.8325)
    assert scale.label_depth == 0
    assert list(scale.labels) == pytest.approx([100 + 50 * i for i in range(9)])


def test_negative_low_rounds_down() -> None:
    """A negative low is lowered to the next whole step below it."""
    scale = calculate_scale(-37, 80, 300, 6, 0.72)
    assert scale.spreads[0] == pytest.approx(20)
    assert scale.rounded_low == pytest.approx(-40)
    assert scale.rounded_high == pytest.approx(100)
    assert scale.rounded_low <= -37
    assert scale.rounded_high >= 80


def test_negative_low_on_step_is_kept() -> None:
    """A negative low that is already a whole step is not lowered."""
    scale = calculate_scale(-40, 80, 300, 6, 0.72)
    assert scale.rounded_low == pytest.approx(-40)


def test_range_always_covered() -> None:
    """Rounded bounds enclose the requested range for assorted inputs."""
    for low, high in [(25, 930), (-5.5, -0.2), (170, 180), (1000, 3300), (-1000, 1)]:
        scale = calculate_scale(low, high, 400, 10, 0.72)
        assert scale.rounded_low <= low
        assert scale.rounded_high >= high
        assert scale.labels[-1] == scale.rounded_high


def test_mark_gap_respects_smallest() -> None:
    """Innermost marks are never closer than smallest."""
    for extent in (50, 200, 475, 1000):
        scale = calculate_scale(0, 100, extent, int(extent / 30), 2.0)
        assert scale.mark_gap >= 2.0
        assert scale.mark_count * scale.mark_gap == pytest.approx(extent)


def test_no_subdivision_when_space_is_tight() -> None:
    """Major marks alone when there is no room between them."""
    scale = calculate_scale(0, 100, 20, 5, 4.0)
    assert scale.depth == 1
    assert scale.label_depth == 0


def test_labels_req_below_one_uses_one() -> None:
    """A zero label request is treated as one."""
    scale = calculate_scale(0, 10, 100, 0, 0.72)
    assert scale.labels_req == 1
    assert len(scale.labels) >= 2


def test_high_not_above_low_rejected() -> None:
    """Equal or reversed bounds are a configuration error naming the axis."""
    with pytest.raises(ConfigurationError, match='y axis: high'):
        calculate_scale(5, 5, 100, 5, 0.72, axis='y')
    with pytest.raises(ConfigurationError, match='high'):
        calculate_scale(10, 1, 100, 5, 0.72)


def test_non_finite_bounds_rejected() -> None:
    """NaN or infinite bounds are rejected."""
    with pytest.raises(ConfigurationError, match='finite'):
        calculate_scale(float('nan'), 1, 100, 5, 0.72)
    with pytest.raises(ConfigurationError, match='finite'):
        calculate_scale(0, float('inf'), 100, 5, 0.72)


def test_non_positive_extent_rejected() -> None:
    """Physical extent and smallest gap must be positive."""
    with pytest.raises(ConfigurationError, match='physical extent'):
        calculate_scale(0, 1, 0, 5, 0.72)
    with pytest.raises(ConfigurationError, match='smallest'):
        calculate_scale(0, 1, 100, 5, -1)


def test_categorical_scale() -> None:
    """One slot per label with an empty fencepost label."""
    scale = categorical_scale(['First bar', 'Second bar', 'Third bar'], 67)
    assert scale.categorical
    assert scale.factors == (3,)
    assert scale.spreads == (1.0,)
    assert scale.rounded_low == 0
    assert scale.rounded_high == 3
    assert scale.mark_gap == pytest.approx(67 / 3)
    assert scale.label_depth == 0
    assert scale.labels == ('First bar', 'Second bar', 'Third bar', '')


def test_categorical_scale_needs_labels() -> None:
    """An empty label list is rejected."""
    with pytest.raises(ConfigurationError, match='labels must not be empty'):
        categorical_scale([], 100)


def test_rounding_error_never_lifts_low() -> None:
    """A low that divides by the step inexactly still rounds to at or below itself."""
    scale = calculate_scale(49, 49.001, 333.27, 37, 3.4465)
    assert scale.rounded_low <= 49
    assert scale.rounded_high >= 49.001
    assert scale.labels[0] <= 49


def test_random_ranges_keep_invariants() -> None:
    """Outward rounding, total extent and label order hold across random inputs."""
    rng = random.Random(20240607)
    for _ in range(2000):
        low = rng.choice([0.0, rng.uniform(-1000, 1000), float(rng.randint(0, 100))])
        high = low + 10 ** rng.uniform(-3, 4)
        extent = rng.uniform(20, 800)
        labels_req = rng.randint(0, 30)
        smallest = rng.uniform(0.5, 5)
        scale = calculate_scale(low, high, extent, labels_req, smallest)
        assert scale.rounded_low <= low
        assert scale.rounded_high >= high
        assert len(scale.factors) == len(scale.spreads)
        assert math.prod(scale.factors) * scale.mark_gap == pytest.approx(extent)
        assert scale.labels[0] == scale.rounded_low
        assert scale.labels[-1] == scale.rounded_high
        assert all(a < b for a, b in zip(scale.labels, scale.labels[1:]))
