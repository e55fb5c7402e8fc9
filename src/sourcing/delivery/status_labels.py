#!/usr/bin/env python3
"""
Delivery Status Labels

Display labels for marketplace delivery statuses and the multi-line "info"
column shown next to each order line. Labels are presentation data: they can be
overridden from a YAML file without touching the joiner.
"""

import logging
from collections import Counter
from collections.abc import Iterable
from pathlib import Path

import yaml

from ..orders.models import OrderLine

logger = logging.getLogger(__name__)

UNMATCHED_KEY = "unmatched"

DEFAULT_DELIVERY_STATUS_LABELS: dict[str, str] = {
    "等待买家确认收货": "等待买家确认收货 | 수령대기",
    "等待卖家发货": "等待卖家发货 | 판매자 배송 전",
    "交易关闭": "交易关闭 | 거래 종료",
    "退款中": "退款中 | 환불 진행 중",
    "交易成功": "交易成功 | 거래 성공",
}


def load_status_labels(path: str | Path | None) -> dict[str, str]:
    """
    Load status labels, with entries from a YAML mapping overriding the defaults.

    The file is a flat mapping of status code to label:

        交易成功: "交易成功 | Completed"

    Raises:
        FileNotFoundError: If the path is given but does not exist
        ValueError: If the file is not a mapping
    """
    labels = dict(DEFAULT_DELIVERY_STATUS_LABELS)
    if path is None:
        return labels

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Status labels file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Status labels file must contain a mapping: {path}")

    labels.update({str(key): str(value) for key, value in data.items()})
    logger.debug("Loaded %d status label override(s) from %s", len(data), path)
    return labels


def translate_delivery_status(status: str, labels: dict[str, str] | None = None) -> str:
    """Return the display label for a status, or the status itself if unknown."""
    mapping = labels if labels is not None else DEFAULT_DELIVERY_STATUS_LABELS
    return mapping.get(status, status)


def format_info_column(line: OrderLine, labels: dict[str, str] | None = None) -> str:
    """
    Build the info column text for a joined line.

    Order: shop, marketplace order id, translated status, delivery code(s),
    payment time. Empty fields are skipped.
    """
    parts = []
    if line.delivery_shop:
        parts.append(line.delivery_shop)
    if line.delivery_order_id:
        parts.append(line.delivery_order_id)
    if line.delivery_status:
        parts.append(translate_delivery_status(line.delivery_status, labels))
    if line.delivery_code:
        # May already hold several newline-separated codes
        parts.append(line.delivery_code)
    if line.order_payment_time:
        parts.append(line.order_payment_time)
    return "\n".join(parts)


def summarize_delivery_statuses(lines: Iterable[OrderLine]) -> dict[str, int]:
    """
    Count lines per delivery status.

    Keys: "all", every known status, any other status seen, and "unmatched"
    for lines without a delivery status.
    """
    lines = list(lines)
    counts = Counter(line.delivery_status for line in lines if line.delivery_status)

    summary = {"all": len(lines)}
    for status in DEFAULT_DELIVERY_STATUS_LABELS:
        summary[status] = counts.pop(status, 0)
    summary.update(sorted(counts.items()))
    summary[UNMATCHED_KEY] = sum(1 for line in lines if not line.delivery_status)
    return summary
