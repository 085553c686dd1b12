"""Leg parsing tests."""

from __future__ import annotations

import pytest

from parlayvig.parlays.legs import display_name, parse_legs, sort_by_implied_prob
from parlayvig.parlays.types import Leg


@pytest.mark.parametrize("raw", ["", "   ", "0", "abc", "nan", "-inf"])
def test_invalid_odds_mark_leg_invalid(raw: str) -> None:
    result = parse_legs([Leg(id=1, american_odds="-110"), Leg(id=2, american_odds=raw)])
    assert [leg.is_valid for leg in result.parsed_legs] == [True, False]
    assert [leg.id for leg in result.valid_legs] == [1]
    assert result.all_valid is False
    bad = result.parsed_legs[1]
    assert bad.decimal is None
    assert bad.implied_prob is None


def test_valid_legs_keep_order_and_values() -> None:
    result = parse_legs([Leg(id=3, american_odds="+150"), Leg(id=1, american_odds="-110")])
    assert result.all_valid is True
    assert [leg.id for leg in result.parsed_legs] == [3, 1]
    assert result.valid_legs[0].decimal == pytest.approx(2.5)
    assert result.valid_legs[1].implied_prob == pytest.approx(0.5238095)


def test_empty_leg_list_is_not_all_valid() -> None:
    result = parse_legs([])
    assert result.parsed_legs == []
    assert result.all_valid is False


def test_display_name() -> None:
    assert display_name(Leg(id=9, label="  Lakers ML "), 1) == "Lakers ML"
    assert display_name(Leg(id=9, label="   "), 2) == "Leg 2"


def test_sort_by_implied_prob_puts_longshots_first_and_invalid_last() -> None:
    result = parse_legs(
        [
            Leg(id=1, american_odds="-200"),
            Leg(id=2, american_odds="oops"),
            Leg(id=3, american_odds="+300"),
            Leg(id=4, american_odds="-110"),
        ]
    )
    ordered = sort_by_implied_prob(result.parsed_legs)
    assert [leg.id for _, leg in ordered] == [3, 4, 1, 2]
    assert [position for position, _ in ordered] == [3, 4, 1, 2]
