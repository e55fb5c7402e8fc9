#!/usr/bin/env python3
"""Tests for the delivery joiner."""

import pytest

from sourcing.delivery.joiner import index_delivery_records, join_deliveries
from sourcing.orders.models import DeliveryRecord


@pytest.mark.delivery
class TestJoinDeliveries:
    """Test exact-match delivery enrichment."""

    def test_attaches_by_extracted_order_number(self, make_order_line, sample_delivery_record):
        line = make_order_line(composite_order_number="BZ-250925-0039#1")

        result = join_deliveries([line], [sample_delivery_record])

        joined = result.lines[0]
        assert result.matched_count == 1
        assert result.unmatched_count == 0
        assert joined.delivery_shop == "义乌童装店"
        assert joined.delivery_order_id == "4012345678901"
        assert joined.delivery_status == "等待卖家发货"
        assert joined.delivery_code == "YT7512345678"
        assert joined.order_payment_time == "2025-09-25T14:30:00"
        assert joined.has_delivery is True
        # Input lines are not modified
        assert line.delivery_status == ""

    def test_no_fuzzy_join(self, make_order_line, sample_delivery_record):
        lines = [
            make_order_line(id="1", composite_order_number="BZ-250925-003"),
            make_order_line(id="2", composite_order_number="bz-250925-0039"),
        ]

        result = join_deliveries(lines, [sample_delivery_record])

        assert result.matched_count == 0
        assert result.unmatched_count == 2
        assert all(not line.has_delivery for line in result.lines)

    def test_first_record_wins(self, make_order_line):
        records = [
            DeliveryRecord(canonical_order_number="X-1", status_code="交易成功"),
            DeliveryRecord(canonical_order_number="X-1", status_code="退款中"),
        ]

        result = join_deliveries([make_order_line(composite_order_number="X-1C2")], records)

        assert result.lines[0].delivery_status == "交易成功"

    def test_unmatched_sample_is_bounded(self, make_order_line):
        lines = [make_order_line(id=str(n), composite_order_number=f"NO-{n}#1") for n in range(15)]

        result = join_deliveries(lines, [], sample_size=10)

        assert result.unmatched_count == 15
        assert result.unmatched_sample == [f"NO-{n}" for n in range(10)]
        assert result.match_rate == 0.0

    def test_empty_order_number_counted_not_sampled(self, make_order_line, sample_delivery_record):
        result = join_deliveries([make_order_line(composite_order_number="")], [sample_delivery_record])

        assert result.unmatched_count == 1
        assert result.unmatched_sample == []

    def test_rejoin_clears_stale_fields(self, make_order_line):
        line = make_order_line(composite_order_number="X-1", delivery_status="交易成功", delivery_shop="old")

        result = join_deliveries([line], [DeliveryRecord(canonical_order_number="X-2")])

        assert result.lines[0].delivery_status == ""
        assert result.lines[0].delivery_shop == ""

    def test_registry_pass_through_fields_carried(self, make_order_line):
        record = DeliveryRecord.from_dict(
            {
                "sheet_order_number": "X-1",
                "delivery_status": "交易成功",
                "offer_id": "716234098123",
                "order_info": "X-1 粉色 130cm",
                "carrier": "YTO",
            }
        )

        joined = join_deliveries([make_order_line(composite_order_number="X-1#1")], [record]).lines[0]

        extra = joined.to_dict()["delivery_extra"]
        assert extra["carrier"] == "YTO"
        assert extra["offer_id"] == "716234098123"
        assert extra["order_info"] == "X-1 粉色 130cm"

        rejoined = join_deliveries([joined], []).lines[0]
        assert rejoined.delivery_extra == {}

    def test_to_dict(self, make_order_line, sample_delivery_record):
        lines = [
            make_order_line(id="1", composite_order_number="BZ-250925-0039#1"),
            make_order_line(id="2", composite_order_number="NOPE-1"),
        ]

        data = join_deliveries(lines, [sample_delivery_record]).to_dict()

        assert data["summary"]["matched"] == 1
        assert data["summary"]["match_rate"] == 0.5
        assert data["summary"]["unmatched_sample"] == ["NOPE-1"]
        assert len(data["lines"]) == 2


@pytest.mark.delivery
def test_index_skips_empty_keys():
    """Test that records without an order number are not indexed."""
    records = [DeliveryRecord(canonical_order_number=""), DeliveryRecord(canonical_order_number="A")]
    assert list(index_delivery_records(records)) == ["A"]
