"""Odds conversion tests."""

from __future__ import annotations

import math

import pytest

from parlayvig.odds import conversion


@pytest.mark.parametrize("odds", [-10000, -250, -110, -100, -1, 0.5, 1, 100, 150, 2500])
def test_conversions_stay_in_range(odds: float) -> None:
    decimal = conversion.american_to_decimal(odds)
    prob = conversion.american_to_implied_prob(odds)
    assert decimal is not None and decimal > 1
    assert prob is not None and 0 < prob < 1
    assert prob == pytest.approx(1 / decimal)


def test_minus_110() -> None:
    assert conversion.american_to_decimal(-110) == pytest.approx(1.909090909)
    assert conversion.american_to_implied_prob(-110) == pytest.approx(0.523809524)


def test_plus_150() -> None:
    assert conversion.american_to_decimal(150) == pytest.approx(2.5)
    assert conversion.american_to_implied_prob(150) == pytest.approx(0.4)


@pytest.mark.parametrize("odds", [0, math.inf, -math.inf, math.nan, None])
def test_unpriceable_odds_return_none(odds) -> None:
    assert conversion.american_to_decimal(odds) is None
    assert conversion.american_to_implied_prob(odds) is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("-110", -110.0), (" +150 ", 150.0), ("120.5", 120.5), ("", None), ("   ", None), ("0", None), ("abc", None), ("inf", None)],
)
def test_parse_american(raw: str, expected: float | None) -> None:
    assert conversion.parse_american(raw) == expected


@pytest.mark.parametrize(("raw", "expected"), [("10", 10.0), ("2.5", 2.5), ("0", None), ("-5", None), ("", None), ("ten", None)])
def test_parse_stake(raw: str, expected: float | None) -> None:
    assert conversion.parse_stake(raw) == expected


def test_decimal_to_american() -> None:
    assert conversion.decimal_to_american(2.5) == 150
    assert conversion.decimal_to_american(2.0) == 100
    assert conversion.decimal_to_american(1.909090909) == -110
    assert conversion.decimal_to_american(3.644628) == 264
    assert conversion.decimal_to_american(1.0) is None
    assert conversion.decimal_to_american(math.nan) is None


def test_format_american() -> None:
    assert conversion.format_american(150) == "+150"
    assert conversion.format_american(-110) == "-110"
    assert conversion.format_american(None) == conversion.PLACEHOLDER
    assert conversion.format_american(0) == conversion.PLACEHOLDER
    assert conversion.american_input_display("149.6") == "+150"
    assert conversion.american_input_display("junk") == conversion.PLACEHOLDER
