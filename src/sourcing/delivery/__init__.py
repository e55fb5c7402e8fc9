"""
Delivery Package

Joins delivery registry records onto order lines by extracted order number,
parses the marketplace order-check export, and formats status labels.
"""

from .export_parser import load_delivery_export, parse_delivery_export, parse_payment_time
from .joiner import (
    DEFAULT_SAMPLE_SIZE,
    DeliveryJoinResult,
    attach_delivery,
    clear_delivery,
    index_delivery_records,
    join_deliveries,
)
from .status_labels import (
    DEFAULT_DELIVERY_STATUS_LABELS,
    UNMATCHED_KEY,
    format_info_column,
    load_status_labels,
    summarize_delivery_statuses,
    translate_delivery_status,
)

__all__ = [
    "DEFAULT_DELIVERY_STATUS_LABELS",
    "DEFAULT_SAMPLE_SIZE",
    "UNMATCHED_KEY",
    "DeliveryJoinResult",
    "attach_delivery",
    "clear_delivery",
    "format_info_column",
    "index_delivery_records",
    "join_deliveries",
    "load_delivery_export",
    "load_status_labels",
    "parse_delivery_export",
    "parse_payment_time",
    "summarize_delivery_statuses",
    "translate_delivery_status",
]
