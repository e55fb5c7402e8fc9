#!/usr/bin/env python3
"""
Quantity Aggregation

Sums local quantities per (offer id, option group) and looks up the verified
quantity for the same group through the match cascade.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass

from ..orders.models import OrderLine, VerificationLine
from .cascade import find_match
from .normalizer import normalize, option_group_key


def total_quantity(external_key: str, normalized_option: str, order_lines: Iterable[OrderLine]) -> int:
    """
    Sum quantities of every local line in the same group.

    A line belongs to the group when its offer id is equal and its option has
    the same group key (normalized, two-part field order ignored). Zero and
    negative quantities are summed as-is.
    """
    wanted = option_group_key(normalized_option)
    return sum(
        line.quantity
        for line in order_lines
        if line.external_key == external_key and option_group_key(line.option_raw) == wanted
    )


def verified_quantity(
    external_key: str, normalized_option: str, verification_lines: Iterable[VerificationLine]
) -> int:
    """Quantity reported by the matched verification record, or 0 when nothing matches."""
    record = find_match(external_key, normalized_option, verification_lines)
    return record.quantity if record else 0


@dataclass(frozen=True)
class AmbiguousGroup:
    """Verification entries that share one offer id and normalized option."""

    external_key: str
    normalized_option: str
    entry_count: int
    quantities: tuple[int, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            "external_key": self.external_key,
            "normalized_option": self.normalized_option,
            "entry_count": self.entry_count,
            "quantities": list(self.quantities),
        }


def find_ambiguous_groups(verification_lines: Iterable[VerificationLine]) -> list[AmbiguousGroup]:
    """
    Report duplicate (offer id, normalized option) verification entries.

    The cascade uses the first entry of such a group. Whether duplicates should
    be summed or rejected is left to the operator; this only surfaces them.
    """
    groups: dict[tuple[str, str], list[int]] = defaultdict(list)
    for line in verification_lines:
        groups[(line.external_key, normalize(line.option_raw))].append(line.quantity)

    return [
        AmbiguousGroup(
            external_key=key,
            normalized_option=option,
            entry_count=len(quantities),
            quantities=tuple(quantities),
        )
        for (key, option), quantities in groups.items()
        if len(quantities) > 1
    ]
