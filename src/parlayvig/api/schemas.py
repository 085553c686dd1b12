"""Pydantic schemas for the ParlayVig API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class LegIn(BaseModel):
    id: int = Field(ge=1)
    label: str = ""
    american_odds: str = "-110"
    use_opponent: bool = False
    opponent_odds: str = ""


class ConvertRequest(BaseModel):
    odds: str


class ConvertResponse(BaseModel):
    odds: str
    decimal: float | None
    implied_prob: float | None
    american: str


class MarketRequest(BaseModel):
    your_odds: str
    opp_odds: str


class MarketResponse(BaseModel):
    available: bool
    p_you: float | None = None
    p_opp: float | None = None
    overround: float | None = None
    hold: float | None = None
    p_no_vig_you: float | None = None
    p_no_vig_opp: float | None = None
    fair_decimal: float | None = None
    house_edge_pct: float | None = None


class AnalyzeRequest(BaseModel):
    stake: str = "10"
    legs: list[LegIn] = Field(min_length=1)
    book_total_odds: str = ""
    excluded_ids: list[int] = Field(default_factory=list)


class ParsedLegOut(BaseModel):
    id: int
    name: str
    american_odds: str
    decimal: float | None
    implied_prob: float | None
    is_valid: bool
    excluded: bool
    market: MarketResponse | None = None


class ParlayOut(BaseModel):
    combined_decimal: float
    parlay_implied_prob: float
    potential_return: float
    profit: float
    best_odds: str


class FairParlayOut(BaseModel):
    parlay_prob_fair: float
    fair_decimal: float
    fair_return: float
    fair_profit: float
    edge_pct: float | None
    ev: float | None = None
    ev_pct: float | None = None


class PayoutOut(BaseModel):
    potential_return: float
    profit: float
    decimal_used: float
    uses_book_total: bool


class PricingScaleOut(BaseModel):
    independent_decimal: float
    book_total_decimal: float
    adjustment_pct: float
    label: str


class AnalyzeResponse(BaseModel):
    stake: float | None
    all_valid: bool
    legs: list[ParsedLegOut]
    parlay: ParlayOut | None = None
    fair: FairParlayOut | None = None
    payout: PayoutOut | None = None
    pricing_scale: PricingScaleOut | None = None
    summary_text: str = ""
