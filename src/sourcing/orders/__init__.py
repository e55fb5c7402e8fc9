"""
Orders Package

Domain models for local order lines, marketplace verification lines, and
delivery registry records, plus file loaders that build them from snapshots.
"""

from .loader import (
    LoaderError,
    load_delivery_records,
    load_order_lines,
    load_verification_lines,
    read_table,
)
from .models import (
    DeliveryRecord,
    OrderLine,
    VerificationLine,
    coerce_int,
    coerce_money,
    coerce_str,
)

__all__ = [
    "DeliveryRecord",
    "LoaderError",
    "OrderLine",
    "VerificationLine",
    "coerce_int",
    "coerce_money",
    "coerce_str",
    "load_delivery_records",
    "load_order_lines",
    "load_verification_lines",
    "read_table",
]
