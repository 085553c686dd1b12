"""American odds conversions.

Every helper returns ``None`` when the input cannot be priced (blank, zero,
non-numeric or non-finite) so callers branch on presence rather than catch.
"""

from __future__ import annotations

import math

PLACEHOLDER = "—"


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _is_priceable(odds: float | None) -> bool:
    return odds is not None and math.isfinite(odds) and odds != 0


def american_to_decimal(odds: float | None) -> float | None:
    """Convert American odds to decimal odds (stake included)."""
    if not _is_priceable(odds):
        return None
    if odds > 0:
        return 1 + odds / 100
    return 1 + 100 / abs(odds)


def american_to_implied_prob(odds: float | None) -> float | None:
    """Convert American odds to implied probability (vig included if from a book)."""
    if not _is_priceable(odds):
        return None
    if odds > 0:
        return 100 / (odds + 100)
    return abs(odds) / (abs(odds) + 100)


def parse_number(raw: str | float | int | None) -> float | None:
    """Parse a user-entered number; blank or non-numeric input yields ``None``."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    text = raw.strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def parse_american(raw: str | float | int | None) -> float | None:
    """Parse American odds, rejecting blank, zero and non-finite values."""
    odds = parse_number(raw)
    return odds if _is_priceable(odds) else None


def parse_stake(raw: str | float | int | None) -> float | None:
    stake = parse_number(raw)
    if stake is None or not math.isfinite(stake) or stake <= 0:
        return None
    return stake


def decimal_to_american(decimal: float | None) -> int | None:
    """Convert decimal odds back to rounded American odds."""
    if decimal is None or not math.isfinite(decimal) or decimal <= 1:
        return None
    if decimal >= 2:
        return round_half_up((decimal - 1) * 100)
    return round_half_up(-100 / (decimal - 1))


def format_american(american: float | None) -> str:
    if american is None or not math.isfinite(american) or american == 0:
        return PLACEHOLDER
    american = round_half_up(american)
    return f"+{american}" if american > 0 else f"{american}"


def american_input_display(raw: str | None) -> str:
    """Format a raw odds input for display, e.g. ``"150"`` -> ``"+150"``."""
    return format_american(parse_american(raw))
