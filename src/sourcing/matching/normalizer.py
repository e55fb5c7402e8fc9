#!/usr/bin/env python3
"""
Option Normalizer

Canonicalizes free-text option/size descriptions so that the same option typed
by different people (or exported by the marketplace) compares equal.

Three transforms are provided:
- normalize: qualifier removal, FREE/均码 folding, 2XL -> XXL, separator cleanup
- normalize_for_matching: normalize plus trailing unit suffix removal (cm / 码)
- reverse_order: swap the two halves of a "color; size" option

All functions are total: any input (including None) yields a string.
"""

import re

# Qualifier segments such as weight/fit annotations: 均码【85-120斤】
_BRACKETED = re.compile(r"【[^】]*】|\[[^\]]*\]|（[^）]*）|\([^)]*\)")
_FREE_SIZE = re.compile(r"free", re.IGNORECASE)
_NUMBERED_XL = re.compile(r"(?<!\d)([1-9])XL", re.IGNORECASE)
_SEPARATOR = re.compile(r"\s*[;；]\s*")
_SEPARATOR_SPLIT = re.compile(r"[;；]")
_UNIT_SUFFIX = re.compile(r"(?:cm|码)$", re.IGNORECASE)

FREE_SIZE_TOKEN = "均码"
OPTION_SEPARATOR = "; "


def _strip_brackets(text: str) -> str:
    return _BRACKETED.sub("", text)


def _expand_xl(match: re.Match) -> str:
    return "X" * int(match.group(1)) + "L"


def normalize(option_raw: str | None) -> str:
    """
    Canonicalize an option description into a comparable key.

    Examples:
        normalize("均码【85-120斤】") -> "均码"
        normalize("free") -> "均码"
        normalize("3XL") -> "XXXL"
        normalize("粉色;130cm") -> "粉色; 130cm"
    """
    if not option_raw:
        return ""

    text = _strip_brackets(str(option_raw))
    text = _FREE_SIZE.sub(FREE_SIZE_TOKEN, text)
    text = _NUMBERED_XL.sub(_expand_xl, text)
    text = _SEPARATOR.sub(OPTION_SEPARATOR, text)
    return text.strip()


def normalize_for_matching(option_raw: str | None) -> str:
    """
    Stricter form of `normalize` used by the loose cascade tiers.

    Drops one trailing unit suffix ("cm" or "码") so that "130cm" and "130"
    compare equal, then strips brackets again.
    """
    text = normalize(option_raw)
    text = _UNIT_SUFFIX.sub("", text)
    return _strip_brackets(text).strip()


def split_option(option_raw: str | None) -> list[str]:
    """Split an option on ASCII or full-width semicolons, trimming each part."""
    if not option_raw:
        return []
    return [part.strip() for part in _SEPARATOR_SPLIT.split(str(option_raw))]


def reverse_order(option_raw: str | None) -> str:
    """
    Swap a two-part option: "130cm; 粉色" -> "粉色; 130cm".

    Anything that does not split into exactly two non-empty parts comes back
    unchanged.
    """
    text = option_raw or ""
    parts = split_option(text)
    if len(parts) != 2 or not all(parts):
        return text
    first, second = parts
    return f"{second}{OPTION_SEPARATOR}{first}"


def option_group_key(option_raw: str | None) -> str:
    """
    Aggregation key for an option: the normalized text with the two halves of a
    two-part option put in a fixed order, so that color/size field order does
    not split one group into two.
    """
    normalized = normalize(option_raw)
    reversed_form = reverse_order(normalized)
    return min(normalized, reversed_form)


def join_options(option1: str | None, option2: str | None) -> str:
    """Build a combined option from its two sub-fields, skipping empty halves."""
    parts = [str(part).strip() for part in (option1, option2) if part is not None and str(part).strip()]
    return OPTION_SEPARATOR.join(parts)
