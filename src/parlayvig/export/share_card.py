"""PNG share slip rendered with matplotlib."""

from __future__ import annotations

import io

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from parlayvig.config import get_settings  # noqa: E402
from parlayvig.odds.conversion import american_to_implied_prob, parse_american  # noqa: E402
from parlayvig.parlays.legs import display_name  # noqa: E402
from parlayvig.parlays.pricing_scale import scale_marker_position  # noqa: E402
from parlayvig.session.state import SlipAnalysis  # noqa: E402

BACKGROUND = "#000000"
ACCENT = "#57c79c"
TEXT = "#f5f5f5"
MUTED = "#9aa5a0"

SCALE_KEY_LINES = (
    "0%  No correlation: legs keep the full payout advantage",
    "100%  Fully correlated: legs have no payout advantage",
)


def _slip_legs(analysis: SlipAnalysis) -> list[tuple[str, str, float | None]]:
    """Preview legs as ``(name, odds, implied_prob)`` sorted least likely first."""

    rows = []
    for position, leg in enumerate(analysis.preview_legs, start=1):
        prob = american_to_implied_prob(parse_american(leg.american_odds))
        rows.append((display_name(leg, position), leg.american_odds, prob))
    return sorted(rows, key=lambda row: (row[2] is None, row[2] or 0.0))


def _draw_scale(ax: plt.Axes, y: float, adjustment_pct: float) -> None:
    marker = scale_marker_position(adjustment_pct, get_settings().pricing_scale_cap_pct)
    ax.text(0.05, y, "Parlay pricing assumption", color=MUTED, fontsize=9, va="center")
    bar_y = y - 0.05
    ax.plot([0.2, 0.8], [bar_y, bar_y], color=MUTED, linewidth=3, solid_capstyle="round")
    x = 0.2 + 0.6 * marker.position_pct / 100
    ax.plot([x], [bar_y], marker="o", color=ACCENT, markersize=9)
    ax.text(x, bar_y + 0.03, marker.label, color=ACCENT, fontsize=9, ha="center")
    ax.text(0.05, bar_y, "Best Odds 0%", color=MUTED, fontsize=7, va="center")
    ax.text(0.95, bar_y, "100% Worst Odds", color=MUTED, fontsize=7, va="center", ha="right")
    if marker.capped_high:
        ax.text(0.82, bar_y, "+", color=ACCENT, fontsize=10, va="center")
    if marker.below_zero:
        ax.text(0.17, bar_y, "−", color=ACCENT, fontsize=10, va="center")


def render_share_card(
    analysis: SlipAnalysis,
    include_scale: bool = False,
    include_key: bool = False,
) -> bytes:
    """Render the slip for download.

    The scale is drawn only when a pricing-scale result exists, and the key
    only when the scale is drawn.
    """

    show_scale = include_scale and analysis.pricing_scale is not None
    show_key = include_key and show_scale
    legs = _slip_legs(analysis)

    rows: list[tuple[str, str]] = []
    if analysis.stake is not None:
        rows.append(("Stake", f"${analysis.stake:.2f}"))
    if analysis.book_total_decimal is not None:
        rows.append(("Book offered odds", analysis.book_total_display))
        rows.append(("Best odds (independent)", analysis.best_odds_display))
    else:
        rows.append(("Best odds", analysis.best_odds_display))
    if analysis.payout is not None:
        rows.append(("Return", f"${analysis.payout.potential_return:.2f}"))
        rows.append(("Profit", f"${analysis.payout.profit:.2f}"))

    line_count = 2 + len(rows) + len(legs) + (3 if show_scale else 0) + (3 if show_key else 0)
    height = max(3.0, 0.32 * line_count)
    fig, ax = plt.subplots(figsize=(4.5, height))
    try:
        fig.patch.set_facecolor(BACKGROUND)
        ax.set_facecolor(BACKGROUND)
        ax.set_axis_off()
        ax.set_xlim(0, 1)
        ax.set_ylim(0, 1)

        step = 1.0 / (line_count + 1)
        y = 1 - step
        ax.text(0.05, y, "Parlay slip", color=TEXT, fontsize=13, fontweight="bold", va="center")
        y -= step * 1.5
        for label, value in rows:
            ax.text(0.05, y, label, color=MUTED, fontsize=10, va="center")
            ax.text(0.95, y, value, color=TEXT, fontsize=10, va="center", ha="right")
            y -= step
        for idx, (name, odds, prob) in enumerate(legs, start=1):
            pct = f"{prob * 100:.1f}%" if prob is not None else "—"
            ax.text(0.05, y, f"{idx}. {name} ({odds or '—'})", color=TEXT, fontsize=9, va="center")
            ax.text(0.95, y, pct, color=ACCENT, fontsize=9, va="center", ha="right")
            y -= step
        if show_scale:
            y -= step * 0.5
            _draw_scale(ax, y, analysis.pricing_scale.adjustment_pct)
            y -= step * 2.5
        if show_key:
            ax.text(0.05, y, "How to read this", color=MUTED, fontsize=8, va="center")
            for line in SCALE_KEY_LINES:
                y -= step
                ax.text(0.05, y, line, color=MUTED, fontsize=7, va="center")

        buffer = io.BytesIO()
        fig.savefig(buffer, format="png", facecolor=BACKGROUND, dpi=150)
        return buffer.getvalue()
    finally:
        plt.close(fig)
