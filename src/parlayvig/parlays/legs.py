"""Leg validation and display helpers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from parlayvig.odds.conversion import american_to_decimal, american_to_implied_prob, parse_number
from parlayvig.parlays.types import Leg, LegParseResult, ParsedLeg


def parse_leg(leg: Leg) -> ParsedLeg:
    odds_num = parse_number(leg.american_odds)
    decimal = american_to_decimal(odds_num)
    implied_prob = american_to_implied_prob(odds_num)
    is_valid = (
        leg.american_odds.strip() != ""
        and odds_num is not None
        and decimal is not None
        and implied_prob is not None
    )
    return ParsedLeg(
        leg=leg,
        odds_num=odds_num,
        decimal=decimal if is_valid else None,
        implied_prob=implied_prob if is_valid else None,
        is_valid=is_valid,
    )


def parse_legs(legs: Iterable[Leg]) -> LegParseResult:
    """Parse every leg, keeping invalid ones so callers can flag them per row."""

    parsed_legs = [parse_leg(leg) for leg in legs]
    valid_legs = [leg for leg in parsed_legs if leg.is_valid]
    all_valid = bool(parsed_legs) and len(valid_legs) == len(parsed_legs)
    return LegParseResult(parsed_legs=parsed_legs, valid_legs=valid_legs, all_valid=all_valid)


def display_name(leg: Leg, position: int) -> str:
    """Trimmed label, or ``Leg N`` for a 1-based position."""
    label = leg.label.strip()
    return label if label else f"Leg {position}"


def sort_by_implied_prob(parsed_legs: Sequence[ParsedLeg]) -> list[tuple[int, ParsedLeg]]:
    """Return ``(position, leg)`` pairs, least likely valid legs first, invalid legs last."""

    numbered = list(enumerate(parsed_legs, start=1))
    valid = sorted(
        (item for item in numbered if item[1].is_valid),
        key=lambda item: item[1].implied_prob,
    )
    invalid = [item for item in numbered if not item[1].is_valid]
    return valid + invalid
