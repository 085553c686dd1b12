"""Session state for the interactive slip.

``ParlaySession`` is the single holder of form state (stake, legs, the
preview-exclusion set and the book's quoted total). It owns id assignment
and the one-leg minimum but performs no arithmetic: ``evaluate`` hands the
current snapshot to the pure functions in ``parlayvig.odds`` and
``parlayvig.parlays``.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any

from parlayvig.config import get_settings
from parlayvig.odds.conversion import (
    PLACEHOLDER,
    american_input_display,
    decimal_to_american,
    format_american,
    parse_stake,
)
from parlayvig.parlays.engine import (
    compute_expected_value,
    compute_fair_parlay_metrics,
    compute_parlay_metrics,
    compute_payout,
)
from parlayvig.parlays.legs import parse_legs
from parlayvig.parlays.pricing_scale import (
    book_total_to_decimal,
    compute_pricing_scale_from_book_total,
    correlation_label,
)
from parlayvig.parlays.types import (
    ExpectedValue,
    FairParlayMetrics,
    Leg,
    LegParseResult,
    ParlayMetrics,
    Payout,
    PricingScaleResult,
)

logger = logging.getLogger(__name__)

LEG_FIELDS = frozenset(f.name for f in fields(Leg)) - {"id"}


def next_leg_id(legs: list[Leg]) -> int:
    return max(leg.id for leg in legs) + 1 if legs else 1


def default_legs(odds: str | None = None) -> list[Leg]:
    odds = odds or get_settings().default_leg_odds
    return [Leg(id=1, american_odds=odds), Leg(id=2, american_odds=odds)]


@dataclass(frozen=True)
class SlipAnalysis:
    """Everything the presentation layer renders for one input snapshot."""

    stake: float | None
    all_legs: LegParseResult
    preview_legs: list[Leg]
    preview: LegParseResult
    excluded_count: int
    parlay: ParlayMetrics | None = None
    fair: FairParlayMetrics | None = None
    expected_value: ExpectedValue | None = None
    book_total_decimal: float | None = None
    book_total_display: str = PLACEHOLDER
    pricing_scale: PricingScaleResult | None = None
    correlation_label: str | None = None
    payout: Payout | None = None

    @property
    def best_odds_display(self) -> str:
        if self.parlay is None:
            return PLACEHOLDER
        return format_american(decimal_to_american(self.parlay.combined_decimal))

    @property
    def is_previewing(self) -> bool:
        return self.excluded_count > 0


@dataclass
class ParlaySession:
    stake: str = field(default_factory=lambda: get_settings().default_stake)
    book_total_odds: str = ""
    legs: list[Leg] = field(default_factory=default_legs)
    preview_removed_ids: set[int] = field(default_factory=set)

    # ----- leg list ---------------------------------------------------------
    def add_leg(self) -> Leg:
        leg = Leg(id=next_leg_id(self.legs), american_odds=get_settings().default_leg_odds)
        self.legs = [*self.legs, leg]
        return leg

    def remove_leg(self, leg_id: int) -> None:
        remaining = [leg for leg in self.legs if leg.id != leg_id]
        if not remaining:
            return
        self.legs = remaining
        self.preview_removed_ids.discard(leg_id)

    def update_leg(self, leg_id: int, field_name: str, value: str | bool) -> None:
        if field_name not in LEG_FIELDS:
            raise ValueError(f"Unknown leg field: {field_name}")
        updated: list[Leg] = []
        for leg in self.legs:
            if leg.id != leg_id:
                updated.append(leg)
            elif field_name == "use_opponent" and value is False:
                updated.append(replace(leg, use_opponent=False, opponent_odds=""))
            else:
                updated.append(replace(leg, **{field_name: value}))
        self.legs = updated

    # ----- preview exclusions -----------------------------------------------
    def toggle_preview_remove(self, leg_id: int) -> None:
        if leg_id in self.preview_removed_ids:
            self.preview_removed_ids.discard(leg_id)
        else:
            self.preview_removed_ids.add(leg_id)

    def clear_preview(self) -> None:
        self.preview_removed_ids = set()

    def apply_preview_removals(self) -> None:
        if not self.preview_removed_ids:
            return
        remaining = [leg for leg in self.legs if leg.id not in self.preview_removed_ids]
        if remaining:
            self.legs = remaining
        else:
            logger.info("Ignoring preview removal that would empty the slip")
        self.clear_preview()

    @property
    def preview_legs(self) -> list[Leg]:
        if not self.preview_removed_ids:
            return list(self.legs)
        return [leg for leg in self.legs if leg.id not in self.preview_removed_ids]

    # ----- computation ------------------------------------------------------
    def evaluate(self) -> SlipAnalysis:
        stake = parse_stake(self.stake)
        all_legs = parse_legs(self.legs)
        preview_legs = self.preview_legs
        preview = parse_legs(preview_legs)
        book_total_decimal = book_total_to_decimal(self.book_total_odds)
        base = dict(
            stake=stake,
            all_legs=all_legs,
            preview_legs=preview_legs,
            preview=preview,
            excluded_count=len(self.preview_removed_ids),
            book_total_decimal=book_total_decimal,
            book_total_display=american_input_display(self.book_total_odds),
        )
        if stake is None:
            return SlipAnalysis(**base)

        parlay = compute_parlay_metrics(stake, preview.valid_legs)
        fair = compute_fair_parlay_metrics(stake, preview_legs, parlay) if preview.all_valid else None
        expected_value = None
        if parlay is not None and fair is not None:
            expected_value = compute_expected_value(parlay, fair.parlay_prob_fair, stake)
        pricing_scale = compute_pricing_scale_from_book_total(preview.valid_legs, book_total_decimal)
        return SlipAnalysis(
            **base,
            parlay=parlay,
            fair=fair,
            expected_value=expected_value,
            pricing_scale=pricing_scale,
            correlation_label=correlation_label(pricing_scale) if pricing_scale else None,
            payout=compute_payout(stake, parlay, book_total_decimal),
        )

    # ----- snapshots --------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        return {
            "stake": self.stake,
            "book_total_odds": self.book_total_odds,
            "legs": [asdict(leg) for leg in self.legs],
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> ParlaySession:
        """Restore a snapshot, dropping anything malformed instead of failing."""

        session = cls()
        stake = payload.get("stake")
        if isinstance(stake, str) and parse_stake(stake) is not None:
            session.stake = stake
        book_total = payload.get("book_total_odds")
        if isinstance(book_total, str):
            session.book_total_odds = book_total
        raw_legs = payload.get("legs")
        if isinstance(raw_legs, list):
            cleaned: list[Leg] = []
            for raw in raw_legs:
                leg = _clean_leg(raw)
                if leg is None or not leg.american_odds.strip():
                    continue
                # invalid or repeated ids get a fresh one
                if leg.id <= 0 or any(other.id == leg.id for other in cleaned):
                    leg = replace(leg, id=next_leg_id(cleaned))
                cleaned.append(leg)
            if cleaned:
                session.legs = cleaned
        return session


def _clean_leg(raw: Any) -> Leg | None:
    if not isinstance(raw, dict):
        return None
    leg_id = raw.get("id")
    opponent = raw.get("use_opponent")

    def _text(key: str) -> str:
        value = raw.get(key)
        return value if isinstance(value, str) else ""

    return Leg(
        id=leg_id if isinstance(leg_id, int) and not isinstance(leg_id, bool) else 0,
        label=_text("label"),
        american_odds=_text("american_odds"),
        use_opponent=opponent if isinstance(opponent, bool) else False,
        opponent_odds=_text("opponent_odds"),
    )
