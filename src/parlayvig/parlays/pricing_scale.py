"""Correlation pricing scale.

Compares the sportsbook's quoted all-up price against the price obtained by
multiplying the legs as if they were independent::

    adjustment_pct = (book_total_decimal / independent_decimal - 1) * 100

A positive value means the quoted price pays more than the independence
baseline; a negative value means it pays less, which is how a book prices
in correlation between legs. ``correlation_label`` tags negative values as
"(better)". This is a qualitative signal, not a correlation estimate.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from parlayvig.odds.conversion import american_to_decimal, parse_american, round_half_up
from parlayvig.parlays.engine import combine_odds
from parlayvig.parlays.types import ParsedLeg, PricingScaleResult, ScaleMarker

MIN_SCALE_LEGS = 2
MIN_VISUAL_CAP_PCT = 5.0


def book_total_to_decimal(raw: str | None) -> float | None:
    """Decimal price of the book's quoted total American odds, if usable."""
    decimal = american_to_decimal(parse_american(raw))
    if decimal is None or decimal <= 1:
        return None
    return decimal


def compute_pricing_scale_from_book_total(
    valid_legs: Sequence[ParsedLeg],
    book_total_decimal: float | None,
) -> PricingScaleResult | None:
    if len(valid_legs) < MIN_SCALE_LEGS:
        return None
    if book_total_decimal is None or not math.isfinite(book_total_decimal) or book_total_decimal <= 1:
        return None

    independent_decimal = combine_odds(valid_legs)
    if not math.isfinite(independent_decimal) or independent_decimal <= 1:
        return None

    return PricingScaleResult(
        independent_decimal=independent_decimal,
        book_total_decimal=book_total_decimal,
        adjustment_pct=(book_total_decimal / independent_decimal - 1) * 100,
    )


def correlation_label(result: PricingScaleResult) -> str:
    rounded = round_half_up(result.adjustment_pct)
    if rounded < 0:
        return f"{rounded}% correlation pricing (better)"
    return f"+{rounded}% correlation pricing"


def scale_marker_position(adjustment_pct: float, visual_cap_pct: float = 30.0) -> ScaleMarker:
    """Place the marker on a 0..cap bar; the label keeps the true percentage."""

    cap = max(MIN_VISUAL_CAP_PCT, visual_cap_pct)
    clamped = min(max(adjustment_pct, 0.0), cap)
    return ScaleMarker(
        position_pct=clamped / cap * 100,
        label=f"{round_half_up(adjustment_pct)}%",
        capped_high=adjustment_pct > cap,
        below_zero=adjustment_pct < 0,
    )
