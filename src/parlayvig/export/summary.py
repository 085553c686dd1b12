"""Plain-text slip summary used by the "copy text" action."""

from __future__ import annotations

from parlayvig.odds.conversion import round_half_up
from parlayvig.parlays.types import Leg
from parlayvig.session.state import SlipAnalysis

SEPARATOR = " · "


def describe_leg(leg: Leg, position: int) -> str:
    label = leg.label.strip()
    base = f"Leg {position}: {label}" if label else f"Leg {position}"
    if leg.use_opponent and leg.opponent_odds.strip():
        odds = f"{leg.american_odds} vs {leg.opponent_odds}"
    else:
        odds = leg.american_odds
    return f"{base} ({odds})"


def build_summary_text(analysis: SlipAnalysis) -> str:
    if analysis.stake is None or analysis.parlay is None or analysis.payout is None:
        return ""

    parts = ["Parlay", f"Stake ${analysis.stake:.2f}"]
    if analysis.book_total_decimal is not None:
        parts.append(f"Book odds {analysis.book_total_display}")
    parts.append(f"Best odds {analysis.best_odds_display}")
    if analysis.pricing_scale is not None:
        parts.append(f"Correlation {round_half_up(analysis.pricing_scale.adjustment_pct)}%")
    parts.append(f"Return ${analysis.payout.potential_return:.2f}")
    parts.append(f"Profit ${analysis.payout.profit:.2f}")
    legs = " | ".join(describe_leg(leg, idx) for idx, leg in enumerate(analysis.preview_legs, start=1))
    if legs:
        parts.append(f"Legs {legs}")
    return SEPARATOR.join(parts)

