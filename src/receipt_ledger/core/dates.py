#!/usr/bin/env python3
"""
FinancialDate Primitive Type and Transaction Date Normalization

Immutable date wrapper with consistent formatting, plus the policy that keeps
receipt dates inside the window YNAB accepts (not in the future, not more than
five years old).
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

MAX_TRANSACTION_AGE_YEARS = 5

FUTURE_DATE_REASON = "Date was in the future"
TOO_OLD_DATE_REASON = f"Date was more than {MAX_TRANSACTION_AGE_YEARS} years ago"


class InvalidDateError(ValueError):
    """Raised when a transaction date string cannot be parsed."""

    pass


@dataclass(frozen=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, date_format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            date_format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object

        Raises:
            InvalidDateError: If the string does not match the format
        """
        try:
            return cls(date=datetime.strptime(date_str.strip(), date_format).date())
        except (ValueError, TypeError, AttributeError) as e:
            raise InvalidDateError(f"Invalid transaction date: {date_str!r}") from e

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    def years_before(self, years: int) -> "FinancialDate":
        """Same calendar day ``years`` earlier; Feb 29 falls back to Feb 28."""
        try:
            return FinancialDate(date=self.date.replace(year=self.date.year - years))
        except ValueError:
            return FinancialDate(date=self.date.replace(year=self.date.year - years, day=28))

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def to_ynab_format(self) -> str:
        """Format as YNAB expects (ISO format)."""
        return self.date.isoformat()

    def __str__(self) -> str:
        return self.to_iso_string()

    def __lt__(self, other: "FinancialDate") -> bool:
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        return self.date >= other.date

    def __repr__(self) -> str:
        return f"FinancialDate(date={self.date!r})"


@dataclass(frozen=True)
class DateAdjustment:
    """Record of a transaction date that was clamped into the accepted window."""

    original_date: FinancialDate
    adjusted_date: FinancialDate
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "originalDate": self.original_date.to_iso_string(),
            "adjustedDate": self.adjusted_date.to_iso_string(),
            "reason": self.reason,
        }


def normalize_transaction_date(
    transaction_date: FinancialDate,
    today: FinancialDate | None = None,
) -> tuple[FinancialDate, DateAdjustment | None]:
    """
    Clamp a transaction date into [today - 5 years, today].

    Both bounds are inclusive: a date of exactly today, or exactly five years
    ago, is passed through unchanged.

    Args:
        transaction_date: Date read from the receipt
        today: Reference date (default: the local current date)

    Returns:
        Tuple of (validated date, adjustment record or None)
    """
    if today is None:
        today = FinancialDate.today()

    if transaction_date > today:
        return today, DateAdjustment(transaction_date, today, FUTURE_DATE_REASON)

    earliest = today.years_before(MAX_TRANSACTION_AGE_YEARS)
    if transaction_date < earliest:
        return earliest, DateAdjustment(transaction_date, earliest, TOO_OLD_DATE_REASON)

    return transaction_date, None
