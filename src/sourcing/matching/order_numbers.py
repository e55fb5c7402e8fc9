#!/usr/bin/env python3
"""
Order-Number Extraction

Reduces composite, human-entered order identifiers to the stable order number
used for cross-system joins.

Formats seen in the wild:
- "BZ-250925-0039#2"        line suffix after '#'
- "BZ-250925-0039C2"        trailing C-suffix (split/combined shipment marker)
- "BZ-250925-0039 // 深灰色 | FREE // S0033426163033 // 1ea"
                             pasted order-info line, fields separated by '//'
- "HI-250918-0039-B"        barcode with a box letter after the third hyphen

Every extractor is total and returns a string.
"""

import re

_C_SUFFIX = re.compile(r"C\d*$")
SHEET_FIELD_SEPARATOR = "//"


def extract_order_number(composite: str | None) -> str:
    """
    Extract the base order number from a composite identifier.

    Two candidates are computed (text before the first '#', text before a
    trailing C-suffix) and the shorter non-empty one wins.

    Examples:
        extract_order_number("BZ-250925-0039#1") -> "BZ-250925-0039"
        extract_order_number("BZ-250925-0039C2") -> "BZ-250925-0039"
        extract_order_number("BZ-250925-0039") -> "BZ-250925-0039"
    """
    if not composite:
        return ""
    text = str(composite).strip()

    candidates = []

    hash_index = text.find("#")
    if hash_index > 0:
        candidates.append(text[:hash_index].strip())

    suffix = _C_SUFFIX.search(text)
    if suffix and suffix.start() > 0:
        candidates.append(text[: suffix.start()].strip())

    candidates = [candidate for candidate in candidates if candidate]
    if not candidates:
        return text
    return min(candidates, key=len)


def extract_sheet_order_number(order_info: str | None) -> str:
    """
    Take the order number from a pasted order-info line.

    Example:
        extract_sheet_order_number("BZ-250925-0039 // 深灰色 | FREE // S0033426163033 // 1ea")
            -> "BZ-250925-0039"

    Without a '//' separator the whole trimmed string is returned.
    """
    if not order_info:
        return ""
    text = str(order_info).strip()
    if SHEET_FIELD_SEPARATOR in text:
        return text.split(SHEET_FIELD_SEPARATOR, 1)[0].strip()
    return text


def normalize_search_order_number(composite: str | None) -> str:
    """
    Normalize a scanned barcode or searched order number.

    With a '#': keep the line number but drop anything after its first hyphen
    ("HI-250918-0039#1-A" -> "HI-250918-0039#1").
    Without one: keep the first three hyphen-delimited segments
    ("HI-250918-0039-B" -> "HI-250918-0039").
    """
    if not composite:
        return ""
    text = str(composite).strip()

    if "#" in text:
        parts = text.split("#")
        if len(parts) == 2:
            before_hash, after_hash = parts
            return f"{before_hash}#{after_hash.split('-')[0]}"
        return text

    segments = text.split("-")
    if len(segments) > 3:
        return "-".join(segments[:3])
    return text
