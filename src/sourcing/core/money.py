#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer fen internally.
Used for order-line unit costs and marketplace unit prices.
"""

from dataclasses import dataclass

from .currency import fen_to_yuan_str, safe_currency_to_fen


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in fen (CNY).

    Examples:
        >>> cost = Money.from_fen(1234)
        >>> str(cost)
        '¥12.34'
        >>> Money.from_cell("¥3.5").to_fen()
        350
    """

    fen: int

    @classmethod
    def from_fen(cls, fen: int) -> "Money":
        """Create Money from fen."""
        return cls(fen=fen)

    @classmethod
    def from_cell(cls, value: object) -> "Money":
        """Create Money from a loosely typed spreadsheet cell (0 for garbage)."""
        return cls(fen=safe_currency_to_fen(value))  # type: ignore[arg-type]

    def to_fen(self) -> int:
        """Get value in fen."""
        return self.fen

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.fen == other.fen

    def __hash__(self) -> int:
        return hash(self.fen)

    def __str__(self) -> str:
        """Format as yuan string."""
        return f"¥{fen_to_yuan_str(self.fen)}"

    def __repr__(self) -> str:
        return f"Money(fen={self.fen})"
