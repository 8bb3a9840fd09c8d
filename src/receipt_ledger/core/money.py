#!/usr/bin/env python3
"""
Money Primitive Type

Immutable ledger amount that uses integer milliunits internally.
Prevents floating-point errors and keeps the YNAB sign convention in one place.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import (
    AmountLike,
    format_milliunits,
    milliunits_to_decimal,
    receipt_amount_to_milliunits,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable YNAB amount in milliunits.

    Negative amounts are outflows (expenses), positive amounts are inflows.

    Examples:
        >>> spent = Money.from_receipt_amount("45.99")
        >>> spent.to_milliunits()
        -45990
        >>> str(spent)
        '$-45.99'
        >>> spent.abs()
        Money(milliunits=45990)
    """

    milliunits: int

    @classmethod
    def from_milliunits(cls, milliunits: int) -> "Money":
        """Create Money from YNAB milliunits (sign preserved)."""
        return cls(milliunits=milliunits)

    @classmethod
    def from_receipt_amount(cls, amount: AmountLike) -> "Money":
        """
        Create Money from a receipt dollar amount.

        A positive receipt amount (money spent) becomes a negative ledger amount.
        """
        return cls(milliunits=receipt_amount_to_milliunits(amount))

    def to_milliunits(self) -> int:
        """Get value in YNAB milliunits."""
        return self.milliunits

    def to_decimal(self) -> Decimal:
        """Get value in dollars, ledger sign preserved."""
        return milliunits_to_decimal(self.milliunits)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(milliunits=abs(self.milliunits))

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(milliunits=self.milliunits + other.milliunits)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(milliunits=self.milliunits - other.milliunits)

    def __neg__(self) -> "Money":
        return Money(milliunits=-self.milliunits)

    def __lt__(self, other: "Money") -> bool:
        return self.milliunits < other.milliunits

    def __le__(self, other: "Money") -> bool:
        return self.milliunits <= other.milliunits

    def __gt__(self, other: "Money") -> bool:
        return self.milliunits > other.milliunits

    def __ge__(self, other: "Money") -> bool:
        return self.milliunits >= other.milliunits

    def __str__(self) -> str:
        """Format as dollar string."""
        return format_milliunits(self.milliunits)

    def __repr__(self) -> str:
        return f"Money(milliunits={self.milliunits})"
