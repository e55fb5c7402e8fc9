#!/usr/bin/env python3
"""
Delivery Joiner

Attaches delivery registry records to order lines by exact equality of the
extracted order number. There is no fuzzy fallback at this layer: an order
line either has a record with the same canonical order number or it stays
unjoined, which is the common case and not an error.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from ..matching.order_numbers import extract_order_number
from ..orders.models import DeliveryRecord, OrderLine

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 10


@dataclass
class DeliveryJoinResult:
    """Enriched copies of the order lines plus join statistics."""

    lines: list[OrderLine]
    matched_count: int = 0
    unmatched_count: int = 0
    unmatched_sample: list[str] = field(default_factory=list)

    @property
    def match_rate(self) -> float:
        total = self.matched_count + self.unmatched_count
        return self.matched_count / total if total else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": {
                "total_lines": len(self.lines),
                "matched": self.matched_count,
                "unmatched": self.unmatched_count,
                "match_rate": self.match_rate,
                "unmatched_sample": self.unmatched_sample,
            },
            "lines": [line.to_dict() for line in self.lines],
        }


def index_delivery_records(records: Iterable[DeliveryRecord]) -> dict[str, DeliveryRecord]:
    """Index records by canonical order number; the first record for a number wins."""
    index: dict[str, DeliveryRecord] = {}
    for record in records:
        if record.canonical_order_number and record.canonical_order_number not in index:
            index[record.canonical_order_number] = record
    return index


def attach_delivery(line: OrderLine, record: DeliveryRecord) -> OrderLine:
    """Return a copy of the line carrying the record's logistics fields."""
    return replace(
        line,
        delivery_shop=record.shop,
        delivery_order_id=record.order_id,
        delivery_status=record.status_code,
        delivery_code=record.delivery_code,
        order_payment_time=record.order_payment_time,
        delivery_extra={"offer_id": record.offer_id, "order_info": record.order_info, **record.extra},
    )


def clear_delivery(line: OrderLine) -> OrderLine:
    """Return a copy of the line with every delivery field emptied."""
    return replace(
        line,
        delivery_shop="",
        delivery_order_id="",
        delivery_status="",
        delivery_code="",
        order_payment_time=None,
        delivery_extra={},
    )


def join_deliveries(
    order_lines: Sequence[OrderLine],
    delivery_records: Iterable[DeliveryRecord],
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> DeliveryJoinResult:
    """
    Join order lines to delivery records.

    Args:
        order_lines: Local lines; not modified
        delivery_records: Registry snapshot
        sample_size: How many unmatched order numbers to keep for diagnosis

    Returns:
        DeliveryJoinResult with enriched copies and statistics
    """
    index = index_delivery_records(delivery_records)
    result = DeliveryJoinResult(lines=[])

    if not index:
        logger.warning("Delivery registry is empty; nothing to join")

    for line in order_lines:
        canonical = extract_order_number(line.composite_order_number)
        record = index.get(canonical) if canonical else None

        if record is None:
            result.unmatched_count += 1
            if canonical and len(result.unmatched_sample) < sample_size:
                result.unmatched_sample.append(canonical)
            result.lines.append(clear_delivery(line))
            continue

        result.matched_count += 1
        result.lines.append(attach_delivery(line, record))

    logger.info("Delivery join: %d matched, %d unmatched", result.matched_count, result.unmatched_count)
    for order_number in result.unmatched_sample:
        logger.debug("Unmatched order number: %r", order_number)

    return result
