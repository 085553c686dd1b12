"""Parlay pricing, fair value and expected value."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

from parlayvig.odds.market import analyze_leg_market
from parlayvig.parlays.types import (
    ExpectedValue,
    FairParlayMetrics,
    Leg,
    ParlayMetrics,
    ParsedLeg,
    Payout,
)


def combine_odds(legs: Iterable[ParsedLeg]) -> float:
    decimal = 1.0
    for leg in legs:
        decimal *= leg.decimal if leg.decimal is not None else 1.0
    return decimal


def _valid_stake(stake: float) -> bool:
    return math.isfinite(stake) and stake > 0


def compute_parlay_metrics(stake: float, valid_legs: Sequence[ParsedLeg]) -> ParlayMetrics | None:
    """Price the parlay at the book's numbers by multiplying leg decimals."""

    if not _valid_stake(stake) or not valid_legs:
        return None
    combined_decimal = combine_odds(valid_legs)
    if not math.isfinite(combined_decimal) or combined_decimal <= 1:
        return None
    potential_return = stake * combined_decimal
    return ParlayMetrics(
        combined_decimal=combined_decimal,
        parlay_implied_prob=1 / combined_decimal,
        potential_return=potential_return,
        profit=potential_return - stake,
    )


def fair_parlay_probability(legs: Iterable[Leg]) -> float | None:
    """Product of each leg's no-vig probability; every leg needs both sides."""

    prob = 1.0
    seen = False
    for leg in legs:
        market = analyze_leg_market(leg)
        if market is None:
            return None
        prob *= market.p_no_vig_you
        seen = True
    if not seen or not math.isfinite(prob) or prob <= 0:
        return None
    return prob


def compute_fair_parlay_metrics(
    stake: float,
    legs: Iterable[Leg],
    parlay: ParlayMetrics | None = None,
) -> FairParlayMetrics | None:
    if not _valid_stake(stake):
        return None
    parlay_prob_fair = fair_parlay_probability(legs)
    if parlay_prob_fair is None:
        return None
    fair_decimal = 1 / parlay_prob_fair
    fair_return = stake * fair_decimal
    edge_pct = None
    if parlay is not None and fair_decimal > 0:
        edge_pct = 1 - parlay.combined_decimal / fair_decimal
    return FairParlayMetrics(
        parlay_prob_fair=parlay_prob_fair,
        fair_decimal=fair_decimal,
        fair_return=fair_return,
        fair_profit=fair_return - stake,
        edge_pct=edge_pct,
    )


def compute_expected_value(parlay: ParlayMetrics, p_true: float | None, stake: float) -> ExpectedValue | None:
    """Expected profit of a bet paid at the book's price but won at the fair rate."""

    if p_true is None or not 0 < p_true < 1:
        return None
    if not math.isfinite(parlay.profit) or not _valid_stake(stake):
        return None
    ev = p_true * parlay.profit - (1 - p_true) * stake
    return ExpectedValue(ev=ev, ev_pct=ev / stake * 100)


def compute_payout(
    stake: float,
    parlay: ParlayMetrics | None,
    book_total_decimal: float | None = None,
) -> Payout | None:
    """What the ticket actually pays: the book's total when quoted, else the baseline."""

    if parlay is None or not _valid_stake(stake):
        return None
    uses_book_total = book_total_decimal is not None
    decimal = book_total_decimal if uses_book_total else parlay.combined_decimal
    if not math.isfinite(decimal) or decimal <= 1:
        return None
    potential_return = stake * decimal
    return Payout(
        potential_return=potential_return,
        profit=potential_return - stake,
        decimal_used=decimal,
        uses_book_total=uses_book_total,
    )
