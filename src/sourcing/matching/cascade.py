#!/usr/bin/env python3
"""
Option Match Cascade

Finds the verification record that corresponds to a local (offer id, option)
pair. Candidates are always scoped by exact offer id first; option text is then
compared through four tiers, stopping at the first tier with a hit:

1. EXACT           normalize(query) == normalize(target)
2. REVERSED        reverse_order(normalize(query)) == normalize(target)
3. LOOSE           normalize_for_matching on both sides
4. REVERSED_LOOSE  normalize_for_matching(reverse_order(...)) vs loose target

When a tier has several candidates the first one in target order wins. The
count is kept on the result so callers can report the ambiguity.

This module is the single place that decides "is this line matched"; image and
price substitution go through it as well.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from ..core.money import Money
from ..orders.models import OrderLine, VerificationLine
from .normalizer import normalize, normalize_for_matching, reverse_order

logger = logging.getLogger(__name__)


class MatchTier(Enum):
    """Cascade tiers, in evaluation order."""

    EXACT = "exact"
    REVERSED = "reversed"
    LOOSE = "loose"
    REVERSED_LOOSE = "reversed_loose"


# (tier, query transform, target transform); both receive already-normalized text
_TIERS: tuple[tuple[MatchTier, Callable[[str], str], Callable[[str], str]], ...] = (
    (MatchTier.EXACT, lambda q: q, lambda t: t),
    (MatchTier.REVERSED, reverse_order, lambda t: t),
    (MatchTier.LOOSE, normalize_for_matching, normalize_for_matching),
    (MatchTier.REVERSED_LOOSE, lambda q: normalize_for_matching(reverse_order(q)), normalize_for_matching),
)


@dataclass(frozen=True)
class CascadeMatch:
    """A successful cascade lookup."""

    record: VerificationLine
    tier: MatchTier
    candidate_count: int = 1

    @property
    def is_ambiguous(self) -> bool:
        return self.candidate_count > 1


def scope_by_key(external_key: str, targets: Iterable[VerificationLine]) -> list[VerificationLine]:
    """Targets sharing the offer id, in their original order."""
    return [target for target in targets if target.external_key == external_key]


def find_match_with_tier(
    external_key: str, option_raw: str, targets: Iterable[VerificationLine]
) -> CascadeMatch | None:
    """
    Run the four-tier cascade and report which tier matched.

    Args:
        external_key: Offer id of the local line
        option_raw: Free-text option of the local line
        targets: Verification snapshot (any iterable, order is significant)

    Returns:
        CascadeMatch, or None when the key is empty or no tier matches
    """
    if not external_key:
        return None

    scoped = scope_by_key(external_key, targets)
    if not scoped:
        return None

    query = normalize(option_raw)
    normalized_targets = [normalize(target.option_raw) for target in scoped]

    for tier, query_transform, target_transform in _TIERS:
        wanted = query_transform(query)
        candidates = [
            target
            for target, normalized in zip(scoped, normalized_targets)
            if target_transform(normalized) == wanted
        ]
        if candidates:
            if len(candidates) > 1:
                logger.debug(
                    "Ambiguous %s match for %s / %r: %d candidates, using first",
                    tier.value,
                    external_key,
                    option_raw,
                    len(candidates),
                )
            return CascadeMatch(record=candidates[0], tier=tier, candidate_count=len(candidates))

    return None


def find_match(external_key: str, option_raw: str, targets: Iterable[VerificationLine]) -> VerificationLine | None:
    """Return the matching verification record, or None."""
    match = find_match_with_tier(external_key, option_raw, targets)
    return match.record if match else None


@dataclass(frozen=True)
class FieldChange:
    """One explicit field update made from a verification record."""

    line_id: str
    field: str
    old_value: Any
    new_value: Any

    def to_dict(self) -> dict[str, Any]:
        def plain(value: Any) -> Any:
            return str(value) if isinstance(value, Money) else value

        return {
            "line_id": self.line_id,
            "field": self.field,
            "old_value": plain(self.old_value),
            "new_value": plain(self.new_value),
        }


def apply_verification_details(
    line: OrderLine, targets: Iterable[VerificationLine]
) -> tuple[OrderLine, list[FieldChange]]:
    """
    Copy display details from the matched verification record.

    - An empty image URL is filled from the record's image.
    - The unit cost is replaced only when the record carries a price that
      differs from it.

    The input line is left untouched. Returns the updated copy and the list of
    changes made.
    """
    record = find_match(line.external_key, line.option_raw, targets)
    if record is None:
        return line, []

    changes: list[FieldChange] = []
    updates: dict[str, Any] = {}

    if not line.image_url and record.image_url:
        updates["image_url"] = record.image_url
        changes.append(FieldChange(line.id, "image_url", line.image_url, record.image_url))

    if record.unit_price is not None and record.unit_price != line.unit_cost:
        updates["unit_cost"] = record.unit_price
        changes.append(FieldChange(line.id, "unit_cost", line.unit_cost, record.unit_price))

    for change in changes:
        logger.info(
            "Line %s: %s %s -> %s (from verification %s)",
            change.line_id,
            change.field,
            change.old_value,
            change.new_value,
            record.external_key,
        )

    if not updates:
        return line, []
    return replace(line, **updates), changes
