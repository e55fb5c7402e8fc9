#!/usr/bin/env python3
"""Tests for the order-check export parser."""

import pytest

from sourcing.delivery.export_parser import (
    COLUMN_DELIVERY_CODE,
    COLUMN_DELIVERY_STATUS,
    COLUMN_OFFER_ID,
    COLUMN_ORDER_ID,
    COLUMN_ORDER_INFO,
    COLUMN_PAYMENT_TIME,
    COLUMN_SHOP,
    load_delivery_export,
    parse_delivery_export,
    parse_payment_time,
)

ROW_WIDTH = COLUMN_DELIVERY_CODE + 1


def export_row(
    order_id="",
    shop="",
    status="",
    payment_time="",
    offer_id="",
    order_info="",
    delivery_code="",
) -> list:
    """Build one export row with values at their column positions."""
    row = [""] * ROW_WIDTH
    row[COLUMN_ORDER_ID] = order_id
    row[COLUMN_SHOP] = shop
    row[COLUMN_DELIVERY_STATUS] = status
    row[COLUMN_PAYMENT_TIME] = payment_time
    row[COLUMN_OFFER_ID] = offer_id
    row[COLUMN_ORDER_INFO] = order_info
    row[COLUMN_DELIVERY_CODE] = delivery_code
    return row


@pytest.mark.delivery
class TestParsePaymentTime:
    """Test payment-time cell parsing."""

    def test_excel_serial(self):
        assert parse_payment_time(45925.5) == "2025-09-25T12:00:00"
        assert parse_payment_time("45925.5") == "2025-09-25T12:00:00"
        assert parse_payment_time(45925) == "2025-09-25T00:00:00"

    def test_plain_datetime(self):
        assert parse_payment_time("2025-09-25 14:30:05") == "2025-09-25T14:30:05"

    def test_korean_meridiem(self):
        assert parse_payment_time("2025-09-25 2:30:05 오후") == "2025-09-25T14:30:05"
        assert parse_payment_time("2025-09-25 12:10:00 오전") == "2025-09-25T00:10:00"
        assert parse_payment_time("2025-09-25 12:10:00 오후") == "2025-09-25T12:10:00"

    def test_english_meridiem(self):
        assert parse_payment_time("2025-09-25 09:00:00 PM") == "2025-09-25T21:00:00"

    def test_fallback_formats(self):
        assert parse_payment_time("2025/09/25 14:30") == "2025-09-25T14:30:00"

    @pytest.mark.parametrize("value", [None, "", "not a date", 0, -3, True, float("nan")])
    def test_unparseable(self, value):
        assert parse_payment_time(value) is None

    @pytest.mark.parametrize("value", ["2025-13-45 10:00:00", "2025-02-30 25:00:00", "99999999", 99999999, 99999999.0])
    def test_out_of_range_returns_none(self, value, caplog):
        assert parse_payment_time(value) is None
        assert "Invalid payment time" in caplog.text


@pytest.mark.delivery
class TestParseDeliveryExport:
    """Test merged-cell grouping and record building."""

    def test_group_with_multiple_lines(self):
        rows = [
            export_row(
                order_id="4012345678901",
                shop="义乌童装店",
                status="等待卖家发货",
                payment_time="2025-09-25 14:30:00",
                offer_id="716234098123",
                order_info="BZ-250925-0039 // 深灰色 | FREE // S00 // 1ea\nBZ-250925-0040 // 黑色 | L // S01 // 2ea",
                delivery_code="YT1",
            ),
            export_row(offer_id="716234098124", delivery_code="YT2"),
        ]

        records = parse_delivery_export(rows)

        assert [record.id for record in records] == ["4012345678901-1", "4012345678901-2"]
        assert [record.canonical_order_number for record in records] == ["BZ-250925-0039", "BZ-250925-0040"]
        first = records[0]
        assert first.order_id == "4012345678901"
        assert first.shop == "义乌童装店"
        assert first.status_code == "等待卖家发货"
        assert first.offer_id == "716234098123"
        assert first.delivery_code == "YT1\nYT2"
        assert first.order_payment_time == "2025-09-25T14:30:00"

    def test_order_info_on_continuation_row(self):
        rows = [
            export_row(order_id="1", status="交易成功"),
            export_row(order_info="X-1 // a // b"),
        ]

        records = parse_delivery_export(rows)

        assert len(records) == 1
        assert records[0].canonical_order_number == "X-1"
        assert records[0].status_code == "交易成功"

    def test_bad_payment_time_keeps_record(self):
        rows = [export_row(order_id="1", payment_time="2025-13-45 10:00:00", order_info="X-1 // a")]

        records = parse_delivery_export(rows)

        assert len(records) == 1
        assert records[0].canonical_order_number == "X-1"
        assert records[0].order_payment_time is None

    def test_group_without_order_info_skipped(self):
        rows = [export_row(order_id="1"), export_row(order_id="2", order_info="X-2 // a")]
        assert [record.order_id for record in parse_delivery_export(rows)] == ["2"]

    def test_rows_before_first_order_ignored(self):
        rows = [export_row(order_info="X-0 // a"), [], export_row(order_id="1", order_info="X-1 // a")]
        assert [record.canonical_order_number for record in parse_delivery_export(rows)] == ["X-1"]

    def test_short_rows(self):
        records = parse_delivery_export([["9"] + [""] * 5])
        assert records == []

    def test_load_delivery_export(self, tmp_path):
        header = ",".join(f"col{n}" for n in range(ROW_WIDTH))
        body = export_row(order_id="1", status="交易成功", order_info="X-1 // a", delivery_code="YT9")
        path = tmp_path / "order_check.csv"
        path.write_text(header + "\n" + ",".join(body) + "\n", encoding="utf-8")

        records = load_delivery_export(path)

        assert len(records) == 1
        assert records[0].canonical_order_number == "X-1"
        assert records[0].delivery_code == "YT9"
