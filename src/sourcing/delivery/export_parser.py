#!/usr/bin/env python3
"""
Delivery Export Parser

Turns the marketplace "order check" export into DeliveryRecords.

The export is laid out by column position and uses merged cells: a value in
the order-id column starts a new order group, and the following rows without
one belong to the same group. A group's order-info cell holds one pasted
order line per text line ("BZ-250925-0039 // 深灰色 | FREE // S0033426163033 // 1ea"),
and each of those becomes its own record.
"""

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import pandas as pd

from ..matching.order_numbers import extract_sheet_order_number
from ..orders.loader import read_table
from ..orders.models import DeliveryRecord, coerce_str

logger = logging.getLogger(__name__)

# Zero-based column positions in the export sheet
COLUMN_ORDER_ID = 0  # A
COLUMN_SHOP = 3  # D
COLUMN_DELIVERY_STATUS = 9  # J
COLUMN_PAYMENT_TIME = 11  # L
COLUMN_OFFER_ID = 24  # Y
COLUMN_ORDER_INFO = 29  # AD
COLUMN_DELIVERY_CODE = 31  # AF

EXCEL_EPOCH = datetime(1899, 12, 30)

_EXCEL_SERIAL = re.compile(r"^\d+(?:\.\d+)?$")
_PLAIN_DATETIME = re.compile(r"^\d{4}-\d{2}-\d{2}\s+\d{1,2}:\d{2}:\d{2}$")
_MERIDIEM_DATETIME = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})\s+(\d{1,2}):(\d{2}):(\d{2})\s*(오후|오전|AM|PM)?$", re.IGNORECASE
)


def parse_payment_time(value: Any) -> str | None:
    """
    Parse a payment-time cell into an ISO 8601 string.

    Accepts Excel serial numbers (45234.567), "YYYY-MM-DD HH:MM:SS", and the
    same with an AM/PM or 오전/오후 marker. Returns None when nothing parses.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        if value != value or value <= 0:
            return None
        try:
            moment = EXCEL_EPOCH + timedelta(days=float(value))
        except OverflowError:
            logger.warning("Invalid payment time: %r", value)
            return None
        return moment.replace(microsecond=0).isoformat()

    text = coerce_str(value)
    if not text:
        return None

    if _EXCEL_SERIAL.match(text):
        return parse_payment_time(float(text))

    if _PLAIN_DATETIME.match(text):
        try:
            return datetime.strptime(" ".join(text.split()), "%Y-%m-%d %H:%M:%S").isoformat()
        except ValueError:
            logger.warning("Invalid payment time: %r", value)
            return None

    match = _MERIDIEM_DATETIME.match(text)
    if match:
        year, month, day, hour, minute, second, meridiem = match.groups()
        hour_value = int(hour)
        if meridiem and meridiem.upper() in ("오후", "PM") and hour_value < 12:
            hour_value += 12
        if meridiem and meridiem.upper() in ("오전", "AM") and hour_value == 12:
            hour_value = 0
        try:
            return datetime(int(year), int(month), int(day), hour_value, int(minute), int(second)).isoformat()
        except ValueError:
            logger.warning("Invalid payment time: %r", value)
            return None

    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        logger.warning("Could not parse payment time: %r", value)
        return None
    return parsed.to_pydatetime().replace(microsecond=0).isoformat()


@dataclass
class _OrderGroup:
    order_id: str
    shop: str
    delivery_status: str
    payment_time: str | None
    order_info: str
    delivery_codes: list[str] = field(default_factory=list)
    offer_ids: list[str] = field(default_factory=list)

    def collect(self, offer_id: str, delivery_code: str) -> None:
        if delivery_code:
            self.delivery_codes.append(delivery_code)
        if offer_id:
            self.offer_ids.append(offer_id)


def _cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else None


def group_export_rows(rows: Iterable[Sequence[Any]]) -> list[_OrderGroup]:
    """Collect merged-cell row runs into order groups."""
    groups: list[_OrderGroup] = []
    current: _OrderGroup | None = None

    for row in rows:
        if not row:
            continue

        order_id = coerce_str(_cell(row, COLUMN_ORDER_ID))
        offer_id = coerce_str(_cell(row, COLUMN_OFFER_ID))
        order_info = coerce_str(_cell(row, COLUMN_ORDER_INFO))
        delivery_code = coerce_str(_cell(row, COLUMN_DELIVERY_CODE))

        if order_id:
            current = _OrderGroup(
                order_id=order_id,
                shop=coerce_str(_cell(row, COLUMN_SHOP)),
                delivery_status=coerce_str(_cell(row, COLUMN_DELIVERY_STATUS)),
                payment_time=parse_payment_time(_cell(row, COLUMN_PAYMENT_TIME)),
                order_info=order_info,
            )
            groups.append(current)
            current.collect(offer_id, delivery_code)
        elif current is not None:
            current.collect(offer_id, delivery_code)
            # Merged cells may carry the text on a later row of the run
            if order_info:
                current.order_info = order_info
        else:
            logger.warning("Skipping row before the first order id: %r", list(row)[:3])

    return groups


def parse_delivery_export(rows: Iterable[Sequence[Any]]) -> list[DeliveryRecord]:
    """
    Parse export data rows (header already removed) into DeliveryRecords.

    Each non-empty line of a group's order info becomes one record with id
    "{order_id}-{n}", the group's first offer id, and all of the group's
    delivery codes joined by newlines.
    """
    records: list[DeliveryRecord] = []

    for group in group_export_rows(rows):
        if not group.order_info:
            logger.debug("Order %s has no order info; skipped", group.order_id)
            continue

        info_lines = [line.strip() for line in group.order_info.split("\n") if line.strip()]
        delivery_codes = "\n".join(group.delivery_codes)

        for index, info_line in enumerate(info_lines, start=1):
            records.append(
                DeliveryRecord(
                    canonical_order_number=extract_sheet_order_number(info_line),
                    status_code=group.delivery_status,
                    id=f"{group.order_id}-{index}",
                    order_id=group.order_id,
                    shop=group.shop,
                    offer_id=group.offer_ids[0] if group.offer_ids else "",
                    order_info=info_line,
                    delivery_code=delivery_codes,
                    order_payment_time=group.payment_time,
                )
            )

    logger.info("Parsed %d delivery record(s) from export", len(records))
    return records


def load_delivery_export(path: str | Path) -> list[DeliveryRecord]:
    """
    Load an order-check export file (CSV with a header row) into DeliveryRecords.

    Raises:
        FileNotFoundError: If the file does not exist
        LoaderError: If the file type is not supported
    """
    frame = read_table(path, header=False)
    if frame.empty:
        return []
    rows = frame.values.tolist()[1:]
    return parse_delivery_export(rows)
