#!/usr/bin/env python3
"""Tests for the Money value type."""

import pytest

from sourcing.core.money import Money


@pytest.mark.currency
class TestMoney:
    """Test Money construction, equality, and formatting."""

    def test_constructors_agree(self):
        """Test that fen and cell constructors produce the same value."""
        assert Money.from_fen(1234) == Money.from_cell("¥12.34")
        assert Money.from_fen(1200) == Money.from_cell(12)

    def test_from_cell_is_lenient(self):
        """Test that unparseable cells become zero."""
        assert Money.from_cell("n/a").to_fen() == 0
        assert Money.from_cell(None).to_fen() == 0
        assert Money.from_cell(3.5).to_fen() == 350

    def test_equality_and_hashing(self):
        """Test equality used for price comparison."""
        small = Money.from_fen(100)

        assert small != Money.from_fen(200)
        assert len({Money.from_fen(100), small}) == 1
        assert (small == 100) is False

    def test_string_forms(self):
        """Test display and repr."""
        money = Money.from_fen(4599)

        assert str(money) == "¥45.99"
        assert repr(money) == "Money(fen=4599)"

    def test_immutable(self):
        """Test that Money cannot be modified."""
        money = Money.from_fen(100)
        with pytest.raises(AttributeError):
            money.fen = 200  # type: ignore[misc]
