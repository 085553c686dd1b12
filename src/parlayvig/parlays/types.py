"""Dataclasses for leg and parlay modeling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

DEFAULT_LEG_ODDS = "-110"


@dataclass
class Leg:
    """One user-entered selection; odds are kept as the raw input strings."""

    id: int
    label: str = ""
    american_odds: str = DEFAULT_LEG_ODDS
    use_opponent: bool = False
    opponent_odds: str = ""


@dataclass(frozen=True)
class ParsedLeg:
    leg: Leg
    odds_num: float | None
    decimal: float | None
    implied_prob: float | None
    is_valid: bool

    @property
    def id(self) -> int:
        return self.leg.id

    @property
    def label(self) -> str:
        return self.leg.label


@dataclass(frozen=True)
class LegParseResult:
    parsed_legs: List[ParsedLeg]
    valid_legs: List[ParsedLeg]
    all_valid: bool


@dataclass(frozen=True)
class ParlayMetrics:
    combined_decimal: float
    parlay_implied_prob: float
    potential_return: float
    profit: float


@dataclass(frozen=True)
class FairParlayMetrics:
    parlay_prob_fair: float
    fair_decimal: float
    fair_return: float
    fair_profit: float
    edge_pct: float | None = None


@dataclass(frozen=True)
class ExpectedValue:
    ev: float
    ev_pct: float


@dataclass(frozen=True)
class Payout:
    potential_return: float
    profit: float
    decimal_used: float
    uses_book_total: bool


@dataclass(frozen=True)
class PricingScaleResult:
    independent_decimal: float
    book_total_decimal: float
    adjustment_pct: float


@dataclass(frozen=True)
class ScaleMarker:
    position_pct: float
    label: str
    capped_high: bool
    below_zero: bool
