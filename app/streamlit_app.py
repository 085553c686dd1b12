"""Streamlit interface for ParlayVig."""

from __future__ import annotations

import pandas as pd
import streamlit as st
from sqlalchemy.exc import OperationalError

from parlayvig.analytics import track_event
from parlayvig.config import configure_logging, get_settings
from parlayvig.db.database import init_db
from parlayvig.export.share_card import render_share_card
from parlayvig.export.summary import build_summary_text
from parlayvig.odds.market import analyze_leg_market
from parlayvig.parlays.legs import display_name, sort_by_implied_prob
from parlayvig.parlays.pricing_scale import scale_marker_position
from parlayvig.session.state import ParlaySession, SlipAnalysis
from parlayvig.session.storage import load_session, save_session

settings = get_settings()
configure_logging()
init_db()

st.set_page_config(page_title="ParlayVig", layout="wide", page_icon="🎯")
st.title("🎯 ParlayVig")
st.caption(
    "At a minimum, check your implied win percentage. Include both sides of a bet "
    "to see the house edge and a no-vig fair price. Entertainment purposes only."
)


def get_slip() -> ParlaySession:
    if "slip" not in st.session_state:
        try:
            restored = load_session()
        except OperationalError:
            restored = None
        st.session_state["slip"] = restored or ParlaySession()
    return st.session_state["slip"]


def persist(slip: ParlaySession) -> None:
    try:
        save_session(slip)
    except OperationalError as exc:  # pragma: no cover - storage unavailable
        st.caption(f"Session not saved: {exc}")


def render_inputs(slip: ParlaySession) -> None:
    st.subheader("Slip")
    slip.stake = st.text_input("Stake ($)", value=slip.stake)
    slip.book_total_odds = st.text_input(
        "Book offered total odds (optional)",
        value=slip.book_total_odds,
        help="The all-up American price the sportsbook quotes for this parlay.",
    )

    for position, leg in enumerate(list(slip.legs), start=1):
        with st.container(border=True):
            cols = st.columns([0.45, 0.35, 0.2])
            label = cols[0].text_input("Label", value=leg.label, key=f"label_{leg.id}")
            odds = cols[1].text_input(f"{display_name(leg, position)} odds", value=leg.american_odds, key=f"odds_{leg.id}")
            if cols[2].button("Remove", key=f"remove_{leg.id}", disabled=len(slip.legs) <= 1):
                slip.remove_leg(leg.id)
                st.rerun()
            slip.update_leg(leg.id, "label", label)
            slip.update_leg(leg.id, "american_odds", odds)

            use_opponent = st.toggle(
                "Opponent odds (optional, for no-vig fair payout)",
                value=leg.use_opponent,
                key=f"use_opp_{leg.id}",
            )
            slip.update_leg(leg.id, "use_opponent", use_opponent)
            if use_opponent:
                opp = st.text_input("Opponent odds", value=leg.opponent_odds, key=f"opp_{leg.id}")
                slip.update_leg(leg.id, "opponent_odds", opp)
                render_market(slip, leg.id)

    if st.button("Add leg", use_container_width=True):
        slip.add_leg()
        st.rerun()


def render_market(slip: ParlaySession, leg_id: int) -> None:
    leg = next(leg for leg in slip.legs if leg.id == leg_id)
    market = analyze_leg_market(leg)
    if market is None:
        st.caption("Enter valid odds on both sides to see the vig.")
        return
    cols = st.columns(3)
    cols[0].metric("Hold", f"{market.hold:.2%}")
    cols[1].metric("No-vig prob", f"{market.p_no_vig_you:.2%}")
    cols[2].metric("House edge", f"{market.house_edge_pct:.2%}")


def render_pricing_scale(analysis: SlipAnalysis) -> None:
    if analysis.pricing_scale is None:
        st.caption("Add book offered total odds (and use 2+ valid legs) to see correlation pricing.")
        return
    marker = scale_marker_position(analysis.pricing_scale.adjustment_pct, settings.pricing_scale_cap_pct)
    st.write("**Parlay pricing assumption**")
    st.progress(int(round(marker.position_pct)), text=f"Best Odds 0% → {marker.label} → 100% Worst Odds")
    with st.expander("How to read this"):
        st.markdown(
            "- **0%**: no correlation, legs keep the highest payout advantage\n"
            "- **100%**: fully correlated, legs have no payout advantage\n\n"
            "The bar is capped for readability; the label shows the true %."
        )


def render_outcome(slip: ParlaySession, analysis: SlipAnalysis) -> None:
    st.subheader("Outcome")
    if analysis.stake is None:
        st.info("Enter a positive stake to see outcomes.")
        return
    if not analysis.all_legs.valid_legs:
        st.info("Add at least one valid leg to see outcomes.")
        return
    if analysis.parlay is None or analysis.payout is None:
        st.warning("Remaining legs need valid odds to compute the parlay.")
    else:
        suffix = f" (excluded {analysis.excluded_count})" if analysis.is_previewing else ""
        cols = st.columns(4)
        if analysis.book_total_decimal is not None:
            cols[0].metric(f"Book offered odds{suffix}", analysis.book_total_display)
            cols[1].metric("Best odds (independent)", analysis.best_odds_display)
        else:
            cols[0].metric(f"Best odds{suffix}", analysis.best_odds_display)
            cols[1].metric("Implied win %", f"{analysis.parlay.parlay_implied_prob:.1%}")
        cols[2].metric("Return (includes stake)", f"${analysis.payout.potential_return:.2f}")
        cols[3].metric("Profit", f"${analysis.payout.profit:.2f}")
        if analysis.correlation_label:
            st.write(f"Correlation pricing: **{analysis.correlation_label}**")
        render_pricing_scale(analysis)

    st.write("**Legs (sorted by implied win probability)**")
    st.caption("Uncheck to exclude; the outcome updates instantly.")
    for position, parsed in sort_by_implied_prob(analysis.all_legs.parsed_legs):
        included = parsed.id not in slip.preview_removed_ids
        pct = f"{parsed.implied_prob:.1%} implied" if parsed.implied_prob is not None else "—"
        checked = st.checkbox(
            f"{position}. {display_name(parsed.leg, position)} ({parsed.leg.american_odds or '—'}) · {pct}",
            value=included,
            key=f"include_{parsed.id}",
        )
        if checked != included:
            slip.toggle_preview_remove(parsed.id)
            st.rerun()
    if analysis.is_previewing:
        cols = st.columns(2)
        if cols[0].button("Reset (include all)"):
            slip.clear_preview()
            reset_include_checkboxes(slip)
            st.rerun()
        if cols[1].button("Remove excluded legs"):
            slip.apply_preview_removals()
            reset_include_checkboxes(slip)
            st.rerun()


def reset_include_checkboxes(slip: ParlaySession) -> None:
    for leg in slip.legs:
        st.session_state.pop(f"include_{leg.id}", None)


def render_fair_value(analysis: SlipAnalysis) -> None:
    st.subheader("No-vig fair price")
    if analysis.fair is None:
        st.caption(
            "Enter opponent odds for every leg. We'll strip out the house edge using both "
            "sides of each market."
        )
        return
    cols = st.columns(4)
    cols[0].metric("Fair win %", f"{analysis.fair.parlay_prob_fair:.2%}")
    cols[1].metric("Fair decimal", f"{analysis.fair.fair_decimal:.2f}")
    cols[2].metric("Fair return", f"${analysis.fair.fair_return:.2f}")
    cols[3].metric("Fair profit", f"${analysis.fair.fair_profit:.2f}")
    if analysis.fair.edge_pct is not None:
        st.metric("Estimated book edge on this parlay", f"{analysis.fair.edge_pct:.2%}")
    if analysis.expected_value is not None:
        st.metric("EV per $100 staked", f"${analysis.expected_value.ev_pct:.2f}")


def render_share(analysis: SlipAnalysis) -> None:
    st.subheader("Share slip")
    st.caption("Exports the current included legs and outcome.")
    summary = build_summary_text(analysis)
    has_scale = analysis.pricing_scale is not None
    include_scale = st.checkbox("Include scale on slip", value=False, disabled=not has_scale)
    include_key = st.checkbox("Include key on slip", value=False, disabled=not (has_scale and include_scale))
    if summary:
        st.code(summary, language=None)
        png = render_share_card(analysis, include_scale=include_scale, include_key=include_key)
        if st.download_button("Download slip", data=png, file_name="parlay-slip.png", mime="image/png"):
            track_event("slip_downloaded", legs=len(analysis.preview_legs))


slip = get_slip()
col_main, col_right = st.columns([0.5, 0.5], gap="large")

with col_main:
    render_inputs(slip)

analysis = slip.evaluate()

with col_right:
    render_outcome(slip, analysis)
    render_fair_value(analysis)
    if analysis.parlay is not None:
        st.dataframe(
            pd.DataFrame(
                [
                    {
                        "leg": display_name(p.leg, idx),
                        "odds": p.leg.american_odds,
                        "decimal": p.decimal,
                        "implied": p.implied_prob,
                    }
                    for idx, p in enumerate(analysis.preview.parsed_legs, start=1)
                ]
            ),
            use_container_width=True,
        )
    render_share(analysis)

persist(slip)
