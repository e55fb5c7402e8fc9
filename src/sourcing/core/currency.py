#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

Currency handling for sourcing costs and marketplace prices.
All amounts are kept as integer fen to avoid floating-point errors.

Currency Systems:
- Internal calculations use fen: 100 fen = ¥1.00
- Display uses yuan strings: "¥12.34"
- Spreadsheet cells arrive as strings, ints, or floats
"""

from decimal import Decimal, InvalidOperation
from typing import Union

CURRENCY_SYMBOLS = ("¥", "￥", "CNY", "RMB")


def _strip_currency(value: str) -> str:
    clean = value.replace(",", "").strip()
    for symbol in CURRENCY_SYMBOLS:
        clean = clean.replace(symbol, "")
    return clean.strip()


def fen_to_yuan_str(fen: int) -> str:
    """
    Convert fen to yuan string using pure integer arithmetic.

    Example:
        fen_to_yuan_str(4599) -> "45.99"
    """
    is_negative = fen < 0
    abs_fen = abs(int(fen))

    yuan = abs_fen // 100
    remainder = abs_fen % 100

    if is_negative:
        return f"-{yuan}.{remainder:02d}"
    return f"{yuan}.{remainder:02d}"


def safe_currency_to_fen(value: Union[str, int, float, None]) -> int:
    """
    Safely convert a spreadsheet cell to integer fen.

    Returns 0 for empty or unparseable input instead of raising.

    Examples:
        safe_currency_to_fen("¥45.99") -> 4599
        safe_currency_to_fen(45.99) -> 4599
        safe_currency_to_fen("") -> 0
    """
    if value is None:
        return 0
    try:
        if isinstance(value, bool):
            return 0
        if isinstance(value, int):
            return value * 100
        if isinstance(value, float):
            if value != value:  # NaN
                return 0
            return int(Decimal(str(value)) * 100)

        clean = _strip_currency(str(value))
        if not clean or clean.lower() in ("nan", "none", "-"):
            return 0
        return int(Decimal(clean) * 100)
    except (ValueError, TypeError, OverflowError, InvalidOperation):
        return 0


def is_blank_currency(value: Union[str, int, float, None]) -> bool:
    """Check whether a cell carries no price at all (as opposed to a zero price)."""
    if value is None:
        return True
    if isinstance(value, float) and value != value:
        return True
    if isinstance(value, str):
        return _strip_currency(value).lower() in ("", "nan", "none")
    return False
