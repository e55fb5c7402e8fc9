"""
Option Matching Package

Deterministic, rule-based matching of local order lines against marketplace
verification exports.

This package provides:
- Option normalization (qualifier removal, FREE/均码, 2XL -> XXL, field order)
- Order-number extraction for cross-system joins
- A four-tier match cascade (exact, reversed, loose, reversed+loose)
- Quantity aggregation per (offer id, option group)
- Quantity / identity classification with display precedence
"""

from .aggregator import (
    AmbiguousGroup,
    find_ambiguous_groups,
    total_quantity,
    verified_quantity,
)
from .cascade import (
    CascadeMatch,
    FieldChange,
    MatchTier,
    apply_verification_details,
    find_match,
    find_match_with_tier,
)
from .classifier import (
    DisplayStatus,
    IdentityStatus,
    LineClassification,
    QuantityStatus,
    ReconciliationReport,
    classify,
    reconcile,
    split_for_export,
)
from .normalizer import (
    join_options,
    normalize,
    normalize_for_matching,
    option_group_key,
    reverse_order,
)
from .order_numbers import (
    extract_order_number,
    extract_sheet_order_number,
    normalize_search_order_number,
)

__all__ = [
    "AmbiguousGroup",
    "CascadeMatch",
    "DisplayStatus",
    "FieldChange",
    "IdentityStatus",
    "LineClassification",
    "MatchTier",
    "QuantityStatus",
    "ReconciliationReport",
    "apply_verification_details",
    "classify",
    "extract_order_number",
    "extract_sheet_order_number",
    "find_ambiguous_groups",
    "find_match",
    "find_match_with_tier",
    "join_options",
    "normalize",
    "normalize_for_matching",
    "normalize_search_order_number",
    "option_group_key",
    "reconcile",
    "reverse_order",
    "split_for_export",
    "total_quantity",
    "verified_quantity",
]
