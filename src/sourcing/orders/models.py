#!/usr/bin/env python3
"""
Order Domain Models

Dataclasses for the three record kinds the reconciliation works with:
- OrderLine: a locally held order line (one sheet row)
- VerificationLine: a marketplace verification export row
- DeliveryRecord: one line of the logistics / delivery registry

`from_dict` constructors are permissive: missing strings become "", missing or
non-numeric quantities become 0, and blank prices become None.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from ..core.currency import is_blank_currency
from ..core.money import Money


def coerce_str(value: Any) -> str:
    """Coerce a cell to a trimmed string; None and NaN become '', 123.0 becomes '123'."""
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        # JSON reads integral ids as floats when the column has gaps
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def coerce_int(value: Any) -> int:
    """Coerce a cell to an int; anything non-numeric becomes 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return 0 if math.isnan(value) or math.isinf(value) else int(value)
    text = str(value).replace(",", "").strip()
    if not text:
        return 0
    try:
        return int(Decimal(text))
    except (InvalidOperation, ValueError, OverflowError):
        return 0


def coerce_money(value: Any) -> Money | None:
    """Coerce a price cell; blank cells become None, garbage becomes ¥0.00."""
    if isinstance(value, Money):
        return value
    if is_blank_currency(value):
        return None
    return Money.from_cell(value)


def _first(data: dict[str, Any], *keys: str) -> Any:
    """Return the first present, non-blank value among alias keys."""
    for key in keys:
        if key in data and coerce_str(data[key]) != "":
            return data[key]
    return None


@dataclass
class OrderLine:
    """
    One locally held order line.

    Mutable: cell edits update fields in place. Matching only reads
    `external_key`, `option_raw`, and `quantity`.
    """

    id: str
    external_key: str
    option_raw: str
    quantity: int

    # Display / auxiliary fields
    unit_cost: Money | None = None
    note: str = ""
    cancel_mark: str = ""
    image_url: str = ""
    product_name: str = ""

    # Delivery join key and the fields the joiner fills in
    composite_order_number: str = ""
    delivery_shop: str = ""
    delivery_order_id: str = ""
    delivery_status: str = ""
    delivery_code: str = ""
    order_payment_time: str | None = None
    # Remaining registry fields (offer id, order info, extra columns)
    delivery_extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_cancelled(self) -> bool:
        """
        A line is cancelled when its cancel column holds a non-zero quantity or
        any non-numeric mark. A blank cell or "0" is not a cancellation.
        """
        mark = self.cancel_mark.strip()
        if not mark:
            return False
        try:
            return Decimal(mark.replace(",", "")) != 0
        except InvalidOperation:
            return True

    @property
    def has_delivery(self) -> bool:
        return bool(self.delivery_status)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OrderLine":
        """
        Create an OrderLine from a loosely typed row.

        Accepts snake_case, camelCase, and the sheet's own column names
        (china_option1/china_option2, order_qty, cost, cancel_qty, order_number).
        """
        from ..matching.normalizer import join_options

        option_raw = _first(data, "option_raw", "optionRaw", "option")
        if option_raw is None:
            option_raw = join_options(
                coerce_str(_first(data, "option1", "china_option1")),
                coerce_str(_first(data, "option2", "china_option2")),
            )

        return cls(
            id=coerce_str(_first(data, "id", "row_id")),
            external_key=coerce_str(_first(data, "external_key", "externalKey", "offer_id", "offerId")),
            option_raw=coerce_str(option_raw),
            quantity=coerce_int(_first(data, "quantity", "order_qty", "qty")),
            unit_cost=coerce_money(_first(data, "unit_cost", "unitCost", "cost")),
            note=coerce_str(_first(data, "note")),
            cancel_mark=coerce_str(_first(data, "cancel_mark", "cancelMark", "cancel_qty")),
            image_url=coerce_str(_first(data, "image_url", "imageUrl", "img_url")),
            product_name=coerce_str(_first(data, "product_name", "productName")),
            composite_order_number=coerce_str(
                _first(data, "composite_order_number", "compositeOrderNumber", "order_number")
            ),
            delivery_shop=coerce_str(_first(data, "delivery_shop")),
            delivery_order_id=coerce_str(_first(data, "delivery_order_id")),
            delivery_status=coerce_str(_first(data, "delivery_status")),
            delivery_code=coerce_str(_first(data, "delivery_code")),
            order_payment_time=coerce_str(_first(data, "order_payment_time")) or None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON serialization."""
        return {
            "id": self.id,
            "external_key": self.external_key,
            "option_raw": self.option_raw,
            "quantity": self.quantity,
            "unit_cost": str(self.unit_cost) if self.unit_cost is not None else None,
            "note": self.note,
            "cancel_mark": self.cancel_mark,
            "image_url": self.image_url,
            "product_name": self.product_name,
            "composite_order_number": self.composite_order_number,
            "delivery_shop": self.delivery_shop,
            "delivery_order_id": self.delivery_order_id,
            "delivery_status": self.delivery_status,
            "delivery_code": self.delivery_code,
            "order_payment_time": self.order_payment_time,
            "delivery_extra": dict(self.delivery_extra),
        }


@dataclass(frozen=True)
class VerificationLine:
    """One row of a marketplace verification export (read-only snapshot)."""

    external_key: str
    option_raw: str
    quantity: int
    unit_price: Money | None = None
    image_url: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VerificationLine":
        return cls(
            external_key=coerce_str(_first(data, "external_key", "externalKey", "offer_id", "offerId")),
            option_raw=coerce_str(_first(data, "option_raw", "optionRaw", "option", "product_size")),
            quantity=coerce_int(_first(data, "quantity", "qty")),
            unit_price=coerce_money(_first(data, "unit_price", "unitPrice", "price")),
            image_url=coerce_str(_first(data, "image_url", "imageUrl", "img_url")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "external_key": self.external_key,
            "option_raw": self.option_raw,
            "quantity": self.quantity,
            "unit_price": str(self.unit_price) if self.unit_price is not None else None,
            "image_url": self.image_url,
        }


@dataclass(frozen=True)
class DeliveryRecord:
    """
    One line of the delivery / logistics registry.

    `canonical_order_number` is the join key. When a source only provides the
    pasted order-info line, the key is derived from it.
    """

    canonical_order_number: str
    status_code: str = ""

    # Logistics pass-through fields
    id: str = ""
    order_id: str = ""
    shop: str = ""
    offer_id: str = ""
    order_info: str = ""
    delivery_code: str = ""
    order_payment_time: str | None = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DeliveryRecord":
        from ..matching.order_numbers import extract_sheet_order_number

        known = {
            "canonical_order_number",
            "canonicalOrderNumber",
            "sheet_order_number",
            "status_code",
            "statusCode",
            "delivery_status",
            "id",
            "order_id",
            "shop",
            "offer_id",
            "order_info",
            "delivery_code",
            "order_payment_time",
        }
        order_info = coerce_str(_first(data, "order_info"))
        canonical = coerce_str(_first(data, "canonical_order_number", "canonicalOrderNumber", "sheet_order_number"))
        if not canonical:
            canonical = extract_sheet_order_number(order_info)

        return cls(
            canonical_order_number=canonical,
            status_code=coerce_str(_first(data, "status_code", "statusCode", "delivery_status")),
            id=coerce_str(_first(data, "id")),
            order_id=coerce_str(_first(data, "order_id")),
            shop=coerce_str(_first(data, "shop")),
            offer_id=coerce_str(_first(data, "offer_id")),
            order_info=order_info,
            delivery_code=coerce_str(_first(data, "delivery_code")),
            order_payment_time=coerce_str(_first(data, "order_payment_time")) or None,
            extra={key: value for key, value in data.items() if key not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "canonical_order_number": self.canonical_order_number,
            "status_code": self.status_code,
            "id": self.id,
            "order_id": self.order_id,
            "shop": self.shop,
            "offer_id": self.offer_id,
            "order_info": self.order_info,
            "delivery_code": self.delivery_code,
            "order_payment_time": self.order_payment_time,
            **self.extra,
        }
