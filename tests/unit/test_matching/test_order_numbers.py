#!/usr/bin/env python3
"""Tests for order-number extraction."""

import pytest

from sourcing.matching.order_numbers import (
    extract_order_number,
    extract_sheet_order_number,
    normalize_search_order_number,
)


@pytest.mark.matching
class TestExtractOrderNumber:
    """Test base order-number extraction."""

    def test_line_suffix(self):
        assert extract_order_number("BZ-250925-0039#1") == "BZ-250925-0039"
        assert extract_order_number("BZ-250925-0039#12") == "BZ-250925-0039"

    def test_c_suffix(self):
        assert extract_order_number("BZ-250925-0039C2") == "BZ-250925-0039"
        assert extract_order_number("BZ-250925-0039C") == "BZ-250925-0039"

    def test_shorter_candidate_wins(self):
        assert extract_order_number("BZ-250925-0039#1C2") == "BZ-250925-0039"

    def test_plain_number_passes_through(self):
        assert extract_order_number("  BZ-250925-0039  ") == "BZ-250925-0039"
        assert extract_order_number("BZ-250925-0039c2") == "BZ-250925-0039c2"

    def test_leading_markers_are_not_candidates(self):
        assert extract_order_number("#123") == "#123"
        assert extract_order_number("C12") == "C12"

    def test_total_over_empty_input(self):
        assert extract_order_number(None) == ""
        assert extract_order_number("") == ""


@pytest.mark.matching
class TestSheetAndSearchVariants:
    """Test the pasted-line and barcode variants."""

    def test_sheet_order_number(self):
        line = "BZ-250925-0039 // 深灰色 | FREE // S0033426163033 // 1ea"
        assert extract_sheet_order_number(line) == "BZ-250925-0039"
        assert extract_sheet_order_number(" BZ-250925-0039 ") == "BZ-250925-0039"
        assert extract_sheet_order_number(None) == ""

    def test_search_keeps_line_number(self):
        assert normalize_search_order_number("BZ-250925-0039#1-A") == "BZ-250925-0039#1"
        assert normalize_search_order_number("BZ-250925-0039#1") == "BZ-250925-0039#1"

    def test_search_truncates_after_third_segment(self):
        assert normalize_search_order_number("HI-250918-0039-B") == "HI-250918-0039"
        assert normalize_search_order_number("HI-250918-0039") == "HI-250918-0039"

    def test_search_leaves_odd_shapes(self):
        assert normalize_search_order_number("A#1#2") == "A#1#2"
        assert normalize_search_order_number(None) == ""
