"""FastAPI backend for ParlayVig."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, FastAPI, Header, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from parlayvig import __version__
from parlayvig.api.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    ConvertRequest,
    ConvertResponse,
    FairParlayOut,
    MarketRequest,
    MarketResponse,
    ParlayOut,
    ParsedLegOut,
    PayoutOut,
    PricingScaleOut,
)
from parlayvig.config import get_api_access_key
from parlayvig.export.summary import build_summary_text
from parlayvig.odds.conversion import (
    american_input_display,
    american_to_decimal,
    american_to_implied_prob,
    parse_american,
)
from parlayvig.odds.market import MarketAnalysis, analyze_leg_market, analyze_two_sided_market
from parlayvig.parlays.legs import display_name
from parlayvig.parlays.types import Leg
from parlayvig.session.state import ParlaySession, SlipAnalysis

logger = logging.getLogger(__name__)

app = FastAPI(
    title="ParlayVig API",
    version=__version__,
    description="Odds conversion, no-vig fair pricing and parlay analysis.",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    expected = get_api_access_key()
    if expected is None:
        return
    if not x_api_key or x_api_key != expected:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


APIKeyDep = Annotated[None, Depends(require_api_key)]


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/version")
def version() -> dict[str, str]:
    return {"name": "parlayvig", "version": __version__}


@app.post("/convert", response_model=ConvertResponse)
def convert(payload: ConvertRequest, _: APIKeyDep) -> ConvertResponse:
    odds = parse_american(payload.odds)
    return ConvertResponse(
        odds=payload.odds,
        decimal=american_to_decimal(odds),
        implied_prob=american_to_implied_prob(odds),
        american=american_input_display(payload.odds),
    )


def _market_response(market: MarketAnalysis | None) -> MarketResponse:
    if market is None:
        return MarketResponse(available=False)
    return MarketResponse(
        available=True,
        p_you=market.p_you,
        p_opp=market.p_opp,
        overround=market.overround,
        hold=market.hold,
        p_no_vig_you=market.p_no_vig_you,
        p_no_vig_opp=market.p_no_vig_opp,
        fair_decimal=market.fair_decimal,
        house_edge_pct=market.house_edge_pct,
    )


@app.post("/market", response_model=MarketResponse)
def market(payload: MarketRequest, _: APIKeyDep) -> MarketResponse:
    analysis = analyze_two_sided_market(parse_american(payload.your_odds), parse_american(payload.opp_odds))
    return _market_response(analysis)


def _session_from_request(payload: AnalyzeRequest) -> ParlaySession:
    legs = [Leg(**leg.model_dump()) for leg in payload.legs]
    known_ids = {leg.id for leg in legs}
    return ParlaySession(
        stake=payload.stake,
        book_total_odds=payload.book_total_odds,
        legs=legs,
        preview_removed_ids={leg_id for leg_id in payload.excluded_ids if leg_id in known_ids},
    )


def _analysis_response(state: ParlaySession, analysis: SlipAnalysis) -> AnalyzeResponse:
    legs = [
        ParsedLegOut(
            id=parsed.id,
            name=display_name(parsed.leg, position),
            american_odds=parsed.leg.american_odds,
            decimal=parsed.decimal,
            implied_prob=parsed.implied_prob,
            is_valid=parsed.is_valid,
            excluded=parsed.id in state.preview_removed_ids,
            market=_market_response(analyze_leg_market(parsed.leg)) if parsed.leg.use_opponent else None,
        )
        for position, parsed in enumerate(analysis.all_legs.parsed_legs, start=1)
    ]
    parlay = None
    if analysis.parlay is not None:
        parlay = ParlayOut(
            combined_decimal=analysis.parlay.combined_decimal,
            parlay_implied_prob=analysis.parlay.parlay_implied_prob,
            potential_return=analysis.parlay.potential_return,
            profit=analysis.parlay.profit,
            best_odds=analysis.best_odds_display,
        )
    fair = None
    if analysis.fair is not None:
        ev = analysis.expected_value
        fair = FairParlayOut(
            parlay_prob_fair=analysis.fair.parlay_prob_fair,
            fair_decimal=analysis.fair.fair_decimal,
            fair_return=analysis.fair.fair_return,
            fair_profit=analysis.fair.fair_profit,
            edge_pct=analysis.fair.edge_pct,
            ev=ev.ev if ev else None,
            ev_pct=ev.ev_pct if ev else None,
        )
    payout = None
    if analysis.payout is not None:
        payout = PayoutOut(
            potential_return=analysis.payout.potential_return,
            profit=analysis.payout.profit,
            decimal_used=analysis.payout.decimal_used,
            uses_book_total=analysis.payout.uses_book_total,
        )
    pricing_scale = None
    if analysis.pricing_scale is not None:
        pricing_scale = PricingScaleOut(
            independent_decimal=analysis.pricing_scale.independent_decimal,
            book_total_decimal=analysis.pricing_scale.book_total_decimal,
            adjustment_pct=analysis.pricing_scale.adjustment_pct,
            label=analysis.correlation_label or "",
        )
    return AnalyzeResponse(
        stake=analysis.stake,
        all_valid=analysis.all_legs.all_valid,
        legs=legs,
        parlay=parlay,
        fair=fair,
        payout=payout,
        pricing_scale=pricing_scale,
        summary_text=build_summary_text(analysis),
    )


@app.post("/analyze", response_model=AnalyzeResponse)
def analyze(payload: AnalyzeRequest, _: APIKeyDep) -> AnalyzeResponse:
    state = _session_from_request(payload)
    analysis = state.evaluate()
    logger.debug("Analyzed slip with %d legs (%d excluded)", len(state.legs), analysis.excluded_count)
    return _analysis_response(state, analysis)
