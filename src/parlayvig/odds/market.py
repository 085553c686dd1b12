"""Two-sided market analysis: vig, fair probability and house edge."""

from __future__ import annotations

import math
from dataclasses import dataclass

from parlayvig.odds.conversion import (
    american_to_decimal,
    american_to_implied_prob,
    parse_american,
)
from parlayvig.parlays.types import Leg


@dataclass(frozen=True)
class MarketAnalysis:
    p_you: float
    p_opp: float
    overround: float
    hold: float
    p_no_vig_you: float
    fair_decimal: float
    house_edge_pct: float

    @property
    def p_no_vig_opp(self) -> float:
        return self.p_opp / self.overround


def analyze_two_sided_market(your_odds: float | None, opp_odds: float | None) -> MarketAnalysis | None:
    """Strip the shared margin from a two-way market.

    ``hold`` is reported as-is and can be negative on promotional prices.
    ``house_edge_pct`` is positive when the quoted price is worse than fair.
    Returns ``None`` when either side is unpriceable or any intermediate is
    degenerate; partial results are never produced.
    """

    book_decimal = american_to_decimal(your_odds)
    p_you = american_to_implied_prob(your_odds)
    p_opp = american_to_implied_prob(opp_odds)
    if book_decimal is None or p_you is None or p_opp is None:
        return None

    overround = p_you + p_opp
    if not math.isfinite(overround) or overround <= 0:
        return None

    hold = overround - 1
    p_no_vig_you = p_you / overround
    if not math.isfinite(p_no_vig_you) or not 0 < p_no_vig_you < 1:
        return None

    fair_decimal = 1 / p_no_vig_you
    if not math.isfinite(fair_decimal) or fair_decimal <= 1:
        return None

    return MarketAnalysis(
        p_you=p_you,
        p_opp=p_opp,
        overround=overround,
        hold=hold,
        p_no_vig_you=p_no_vig_you,
        fair_decimal=fair_decimal,
        house_edge_pct=1 - book_decimal / fair_decimal,
    )


def analyze_leg_market(leg: Leg) -> MarketAnalysis | None:
    """Analyze a leg's market when it carries the opponent's price."""
    if not leg.use_opponent:
        return None
    return analyze_two_sided_market(parse_american(leg.american_odds), parse_american(leg.opponent_odds))
