#!/usr/bin/env python3
"""
Reconciliation Classifier

Assigns every order line a quantity status and an identity status, and derives
one display status from them using a fixed precedence:

    cancelled > quantity mismatch > identity mismatch > matched > unclassified

Classification is recomputed from scratch on every call; nothing is cached, so
it can be re-run after every cell edit. How a status is colored or labelled is
up to the caller.
"""

import logging
from collections import Counter, defaultdict
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..orders.models import OrderLine, VerificationLine
from .aggregator import AmbiguousGroup, find_ambiguous_groups, total_quantity
from .cascade import MatchTier, find_match_with_tier, scope_by_key
from .normalizer import normalize

logger = logging.getLogger(__name__)


class QuantityStatus(Enum):
    """Local total versus verified quantity."""

    MATCHED = "matched"
    INSUFFICIENT = "insufficient"  # Local total above verified: shortage
    EXCESS = "excess"  # Local total below verified: surplus
    NOT_VERIFIED = "not-verified"


class IdentityStatus(Enum):
    """Whether the line's offer id and option were found at all."""

    MATCHED = "matched"
    OFFER_ID_ONLY = "offerId-only"
    NOT_MATCHED = "not-matched"


class DisplayStatus(Enum):
    """Single status per line, ordered by precedence (highest first)."""

    CANCELLED = "cancelled"
    QUANTITY_MISMATCH = "quantity-mismatch"
    IDENTITY_MISMATCH = "identity-mismatch"
    MATCHED = "matched"
    UNCLASSIFIED = "unclassified"

    @property
    def precedence(self) -> int:
        """Lower number wins."""
        return _DISPLAY_ORDER.index(self)


_DISPLAY_ORDER = list(DisplayStatus)


def classify_quantity(local_total: int, verified: int) -> QuantityStatus:
    if verified == 0:
        return QuantityStatus.NOT_VERIFIED
    if local_total == verified:
        return QuantityStatus.MATCHED
    if local_total < verified:
        return QuantityStatus.EXCESS
    return QuantityStatus.INSUFFICIENT


def resolve_display_status(
    cancelled: bool, quantity_status: QuantityStatus, identity_status: IdentityStatus
) -> DisplayStatus:
    """Collapse the two classifications (plus the cancel flag) into one display status."""
    if cancelled:
        return DisplayStatus.CANCELLED
    if quantity_status in (QuantityStatus.INSUFFICIENT, QuantityStatus.EXCESS):
        return DisplayStatus.QUANTITY_MISMATCH
    if identity_status != IdentityStatus.MATCHED:
        return DisplayStatus.IDENTITY_MISMATCH
    if quantity_status == QuantityStatus.MATCHED:
        return DisplayStatus.MATCHED
    return DisplayStatus.UNCLASSIFIED


@dataclass(frozen=True)
class LineClassification:
    """Classification of one order line."""

    line_id: str
    external_key: str
    normalized_option: str
    local_total: int
    verified_quantity: int
    quantity_status: QuantityStatus
    identity_status: IdentityStatus
    display_status: DisplayStatus
    match_tier: MatchTier | None = None
    ambiguous: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "line_id": self.line_id,
            "external_key": self.external_key,
            "normalized_option": self.normalized_option,
            "local_total": self.local_total,
            "verified_quantity": self.verified_quantity,
            "quantity_status": self.quantity_status.value,
            "identity_status": self.identity_status.value,
            "display_status": self.display_status.value,
            "match_tier": self.match_tier.value if self.match_tier else None,
            "ambiguous": self.ambiguous,
        }


def classify(
    order_line: OrderLine,
    verification_lines: Iterable[VerificationLine],
    order_lines: Sequence[OrderLine] | None = None,
) -> LineClassification:
    """
    Classify one order line against the verification snapshot.

    Args:
        order_line: The line to classify
        verification_lines: Verification snapshot
        order_lines: Every local line (for group totals). Defaults to just
            `order_line`.

    Returns:
        LineClassification with both statuses and the display status
    """
    local_lines: Sequence[OrderLine] = order_lines if order_lines is not None else [order_line]
    scoped = scope_by_key(order_line.external_key, verification_lines) if order_line.external_key else []
    return _classify_scoped(order_line, scoped, local_lines)


def _classify_scoped(
    order_line: OrderLine, scoped: list[VerificationLine], local_lines: Sequence[OrderLine]
) -> LineClassification:
    normalized_option = normalize(order_line.option_raw)
    match = find_match_with_tier(order_line.external_key, normalized_option, scoped)

    if not scoped:
        identity = IdentityStatus.NOT_MATCHED
    elif match is None:
        identity = IdentityStatus.OFFER_ID_ONLY
    else:
        identity = IdentityStatus.MATCHED

    local_total = total_quantity(order_line.external_key, normalized_option, local_lines)
    verified = match.record.quantity if match else 0
    quantity = classify_quantity(local_total, verified)

    return LineClassification(
        line_id=order_line.id,
        external_key=order_line.external_key,
        normalized_option=normalized_option,
        local_total=local_total,
        verified_quantity=verified,
        quantity_status=quantity,
        identity_status=identity,
        display_status=resolve_display_status(order_line.is_cancelled, quantity, identity),
        match_tier=match.tier if match else None,
        ambiguous=match.is_ambiguous if match else False,
    )


@dataclass
class ReconciliationReport:
    """Result of one full reconciliation pass."""

    classifications: list[LineClassification]
    ambiguous_groups: list[AmbiguousGroup] = field(default_factory=list)
    no_link_count: int = 0

    @property
    def line_count(self) -> int:
        return len(self.classifications)

    @property
    def ambiguous_group_count(self) -> int:
        return len(self.ambiguous_groups)

    def by_line_id(self) -> dict[str, LineClassification]:
        return {classification.line_id: classification for classification in self.classifications}

    def quantity_counts(self) -> dict[str, int]:
        counts = Counter(c.quantity_status.value for c in self.classifications)
        return {status.value: counts.get(status.value, 0) for status in QuantityStatus}

    def identity_counts(self) -> dict[str, int]:
        counts = Counter(c.identity_status.value for c in self.classifications)
        return {status.value: counts.get(status.value, 0) for status in IdentityStatus}

    def display_counts(self) -> dict[str, int]:
        counts = Counter(c.display_status.value for c in self.classifications)
        return {status.value: counts.get(status.value, 0) for status in DisplayStatus}

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": {
                "total_lines": self.line_count,
                "no_link_lines": self.no_link_count,
                "ambiguous_groups": self.ambiguous_group_count,
                "quantity_status": self.quantity_counts(),
                "identity_status": self.identity_counts(),
                "display_status": self.display_counts(),
            },
            "ambiguous_groups": [group.to_dict() for group in self.ambiguous_groups],
            "lines": [classification.to_dict() for classification in self.classifications],
        }


def reconcile(order_lines: Sequence[OrderLine], verification_lines: Sequence[VerificationLine]) -> ReconciliationReport:
    """
    Classify every order line against the verification snapshot.

    Verification lines are grouped by offer id once up front; per-line results
    are the same as calling `classify` for each line.
    """
    by_key: dict[str, list[VerificationLine]] = defaultdict(list)
    for verification in verification_lines:
        by_key[verification.external_key].append(verification)

    classifications = []
    no_link = 0
    for line in order_lines:
        if not line.external_key:
            no_link += 1
        scoped = by_key.get(line.external_key, []) if line.external_key else []
        classifications.append(_classify_scoped(line, scoped, order_lines))

    report = ReconciliationReport(
        classifications=classifications,
        ambiguous_groups=find_ambiguous_groups(verification_lines),
        no_link_count=no_link,
    )

    logger.info(
        "Reconciled %d lines against %d verification lines: %s",
        report.line_count,
        len(verification_lines),
        report.display_counts(),
    )
    if report.ambiguous_group_count:
        logger.warning("%d ambiguous verification group(s); first entry used", report.ambiguous_group_count)

    return report


def split_for_export(
    order_lines: Sequence[OrderLine], report: ReconciliationReport
) -> tuple[list[OrderLine], list[OrderLine]]:
    """
    Split lines into (success, cancelled) for the export sheets.

    A line goes to the cancelled side when its display status is CANCELLED.
    The report must come from `reconcile` over the same lines, in the same order.
    """
    if len(order_lines) != report.line_count:
        raise ValueError(f"Report covers {report.line_count} lines, got {len(order_lines)}")

    success: list[OrderLine] = []
    cancelled: list[OrderLine] = []
    for line, classification in zip(order_lines, report.classifications):
        if classification.display_status == DisplayStatus.CANCELLED:
            cancelled.append(line)
        else:
            success.append(line)
    return success, cancelled
