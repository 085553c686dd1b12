"""Correlation pricing scale tests."""

from __future__ import annotations

import pytest

from parlayvig.parlays.legs import parse_legs
from parlayvig.parlays.pricing_scale import (
    book_total_to_decimal,
    compute_pricing_scale_from_book_total,
    correlation_label,
    scale_marker_position,
)
from parlayvig.parlays.types import Leg


def _even_legs(count: int = 2):
    return parse_legs([Leg(id=i, american_odds="+100") for i in range(1, count + 1)]).valid_legs


def test_book_price_below_independence_baseline() -> None:
    result = compute_pricing_scale_from_book_total(_even_legs(), 3.6)
    assert result is not None
    assert result.independent_decimal == pytest.approx(4.0)
    assert result.adjustment_pct == pytest.approx(-10.0)
    assert correlation_label(result) == "-10% correlation pricing (better)"


def test_matching_price_has_zero_adjustment() -> None:
    result = compute_pricing_scale_from_book_total(_even_legs(3), 8.0)
    assert result is not None
    assert result.adjustment_pct == pytest.approx(0.0)
    assert correlation_label(result) == "+0% correlation pricing"


def test_large_positive_adjustment_is_reported() -> None:
    result = compute_pricing_scale_from_book_total(_even_legs(), 6.0)
    assert result is not None
    assert result.adjustment_pct == pytest.approx(50.0)
    assert correlation_label(result) == "+50% correlation pricing"


def test_single_leg_has_no_scale() -> None:
    assert compute_pricing_scale_from_book_total(_even_legs(1), 2.0) is None


@pytest.mark.parametrize("quoted", [None, 1.0, 0.5, float("inf"), float("nan")])
def test_invalid_quoted_price(quoted) -> None:
    assert compute_pricing_scale_from_book_total(_even_legs(), quoted) is None


def test_book_total_to_decimal() -> None:
    assert book_total_to_decimal("+300") == pytest.approx(4.0)
    assert book_total_to_decimal("") is None
    assert book_total_to_decimal("0") is None
    assert book_total_to_decimal("x") is None


def test_scale_marker_clamps_but_keeps_label() -> None:
    high = scale_marker_position(45.0, 30.0)
    assert high.position_pct == pytest.approx(100.0)
    assert high.capped_high is True
    assert high.label == "45%"

    low = scale_marker_position(-10.0, 30.0)
    assert low.position_pct == pytest.approx(0.0)
    assert low.below_zero is True
    assert low.label == "-10%"

    mid = scale_marker_position(15.0, 30.0)
    assert mid.position_pct == pytest.approx(50.0)
    assert not mid.capped_high and not mid.below_zero


@pytest.mark.parametrize(("adjustment", "label"), [(2.5, "3%"), (12.49, "12%"), (-10.0, "-10%")])
def test_scale_marker_label_rounds_half_up(adjustment, label) -> None:
    assert scale_marker_position(adjustment).label == label


def test_scale_marker_cap_floor() -> None:
    marker = scale_marker_position(2.5, visual_cap_pct=1.0)
    assert marker.position_pct == pytest.approx(50.0)
