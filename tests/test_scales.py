from __future__ import annotations

import math

import pytest

from barchart.core.dataset import TEAM_SCORES, load_dataset
from barchart.core.scales import compute_category_scale, compute_value_scale, nice_ticks
from barchart.models import InvalidInput, Record, UnknownCategory


@pytest.fixture
def teams():
    return load_dataset(TEAM_SCORES)


def _records(n: int, value: float = 1.0):
    return tuple(Record(category=f"c{i}", value=value) for i in range(n))


def test_value_scale_maps_max_to_full_width(teams) -> None:
    scale = compute_value_scale(teams, 540)
    assert scale.domain == (0.0, 100.0)
    assert scale.range == (0.0, 540.0)
    assert scale(100) == 540
    assert scale(30) == pytest.approx(162)
    assert scale(0) == 0


def test_value_scale_zero_domain_maps_to_zero() -> None:
    scale = compute_value_scale(_records(3, value=0.0), 540)
    assert scale.domain_max == 0
    assert scale(0) == 0.0
    assert scale(5) == 0.0


def test_value_scale_rejects_empty_dataset() -> None:
    with pytest.raises(InvalidInput):
        compute_value_scale((), 540)


@pytest.mark.parametrize("width", [0, -10, math.nan])
def test_value_scale_rejects_bad_width(teams, width) -> None:
    with pytest.raises(InvalidInput):
        compute_value_scale(teams, width)


def test_band_scale_slots_and_bandwidth(teams) -> None:
    scale = compute_category_scale(teams, 210, 0.33)
    assert scale.domain == ("Boston", "Detroit", "New York", "Chicago", "Atlanta")
    assert scale.step == pytest.approx(42)
    assert scale.bandwidth == pytest.approx(28.14)
    assert scale.band_start("Boston") == pytest.approx(6.93)
    assert scale.band_start("Detroit") == pytest.approx(42 + 6.93)
    assert scale.band_center("Atlanta") == pytest.approx(168 + 21)


def test_band_scale_reverse_puts_first_category_furthest(teams) -> None:
    scale = compute_category_scale(teams, 210, 0.33, reverse=True)
    assert scale.band_start("Boston") == pytest.approx(168 + 6.93)
    assert scale.band_start("Atlanta") == pytest.approx(6.93)


@pytest.mark.parametrize("count", range(1, 13))
def test_band_slots_cover_range(count) -> None:
    scale = compute_category_scale(_records(count), 210, 0.33)
    widths = [stop - start for start, stop in (scale.slot_bounds(c) for c in scale.domain)]
    assert math.fsum(widths) == pytest.approx(210)
    assert scale.slot_bounds(scale.domain[-1])[1] == 210


def test_single_record_band_is_padded_symmetrically() -> None:
    scale = compute_category_scale(_records(1), 100, 0.2)
    start = scale.band_start("c0")
    assert start == pytest.approx(10)
    assert 100 - (start + scale.bandwidth) == pytest.approx(10)


def test_band_scale_unknown_category(teams) -> None:
    scale = compute_category_scale(teams, 210, 0.33)
    assert "Denver" not in scale
    with pytest.raises(UnknownCategory):
        scale.band_start("Denver")


@pytest.mark.parametrize("height, padding", [(0, 0.33), (-1, 0.33), (210, 1.0), (210, -0.1)])
def test_band_scale_rejects_bad_input(teams, height, padding) -> None:
    with pytest.raises(InvalidInput):
        compute_category_scale(teams, height, padding)


def test_band_scale_rejects_empty_and_duplicates() -> None:
    with pytest.raises(InvalidInput):
        compute_category_scale((), 210, 0.33)
    with pytest.raises(InvalidInput):
        compute_category_scale((Record(category="a", value=1), Record(category="a", value=2)), 210, 0.33)


def test_scales_are_pure(teams) -> None:
    assert compute_value_scale(teams, 540) == compute_value_scale(teams, 540)
    assert compute_category_scale(teams, 210, 0.33) == compute_category_scale(teams, 210, 0.33)


@pytest.mark.parametrize(
    "domain_max, count, expected",
    [
        (100, 5, ["0", "50", "100"]),
        (85, 5, ["0", "20", "40", "60", "80"]),
        (7, 5, ["0", "2", "4", "6"]),
        (1.0, 5, ["0.0", "0.5", "1.0"]),
        (100, 1, ["0"]),
        (0, 5, ["0"]),
    ],
)
def test_nice_ticks(domain_max, count, expected) -> None:
    ticks = nice_ticks(domain_max, count)
    assert [label for _, label in ticks] == expected
    assert len(ticks) <= count
    assert all(0 <= value <= domain_max for value, _ in ticks)


def test_nice_ticks_rejects_zero_count() -> None:
    with pytest.raises(InvalidInput):
        nice_ticks(100, 0)


def test_value_scale_keeps_huge_values_inside_width() -> None:
    scale = compute_value_scale((Record(category="a", value=1e306), Record(category="b", value=5e305)), 540)
    assert scale(1e306) == 540
    assert scale(5e305) == pytest.approx(270)


@pytest.mark.parametrize(
    "domain_max, count",
    [(1e308, 1), (1e308, 5), (1.7e308, 3), (1e-310, 5), (5e-324, 5), (1e-300, 1)],
)
def test_nice_ticks_at_float_extremes(domain_max, count) -> None:
    ticks = nice_ticks(domain_max, count)
    assert 1 <= len(ticks) <= count
    assert ticks[0][0] == 0.0
    assert all(0 <= value <= domain_max for value, _ in ticks)
    assert all(float(label) == pytest.approx(value, rel=1e-6, abs=0) for value, label in ticks[1:])
