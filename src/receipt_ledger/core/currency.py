#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

Receipt amounts arrive from the parser as decimal dollars. YNAB stores amounts
as signed integer milliunits (1000 milliunits = $1.00) with expenses negative.
All split arithmetic happens on milliunits so that sums are exact.

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Receipt dollars -> milliunits truncates toward zero and flips the sign,
  in exactly one function (receipt_amount_to_milliunits)
- Proportional shares truncate toward zero; remainders are assigned explicitly
"""

from decimal import Decimal, InvalidOperation
from typing import Union

MILLIUNITS_PER_DOLLAR = 1000

# Largest residual (in dollars) that a split may be adjusted by to match the total
SPLIT_TOLERANCE_DOLLARS = Decimal("0.05")
SPLIT_TOLERANCE_MILLIUNITS = int(SPLIT_TOLERANCE_DOLLARS * MILLIUNITS_PER_DOLLAR)

AmountLike = Union[Decimal, str, int, float]


def to_decimal(amount: AmountLike) -> Decimal:
    """
    Convert a parser-provided amount to Decimal without float noise.

    Floats go through their shortest repr, so 167.28 becomes Decimal("167.28")
    rather than its binary expansion.

    Raises:
        ValueError: If the amount is not a finite number
    """
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, bool):
        raise ValueError(f"Not a currency amount: {amount!r}")
    elif isinstance(amount, (int, float)):
        value = Decimal(str(amount))
    else:
        clean = str(amount).replace("$", "").replace(",", "").strip()
        try:
            value = Decimal(clean)
        except InvalidOperation as e:
            raise ValueError(f"Not a currency amount: {amount!r}") from e

    if not value.is_finite():
        raise ValueError(f"Not a currency amount: {amount!r}")
    return value


def receipt_amount_to_milliunits(amount: AmountLike) -> int:
    """
    Convert a receipt dollar amount to a YNAB ledger amount.

    Positive receipt amounts are money spent, which YNAB records as negative
    outflows. The product is truncated toward zero, never rounded.

    Args:
        amount: Dollar amount from the parsed receipt

    Returns:
        Signed milliunits, i.e. truncate(-amount * 1000)

    Examples:
        receipt_amount_to_milliunits("45.99") -> -45990
        receipt_amount_to_milliunits("-12.50") -> 12500
        receipt_amount_to_milliunits("0.0019") -> -1
    """
    return int(-to_decimal(amount) * MILLIUNITS_PER_DOLLAR)


def milliunits_to_decimal(milliunits: int) -> Decimal:
    """
    Convert milliunits to decimal dollars, keeping the ledger sign.

    Example:
        milliunits_to_decimal(-157820) -> Decimal("-157.82")
    """
    return Decimal(milliunits) / MILLIUNITS_PER_DOLLAR


def is_within_split_tolerance(difference_milliunits: int) -> bool:
    """Check whether a residual is small enough to be adjusted away (inclusive)."""
    return abs(milliunits_to_decimal(difference_milliunits)) <= SPLIT_TOLERANCE_DOLLARS


def safe_divide_proportional(numerator: int, denominator: int, total: int) -> int:
    """
    Calculate total * |numerator| / |denominator|, truncated toward zero.

    The result carries the sign of ``total``.

    Args:
        numerator: Weight of this share
        denominator: Sum of all weights
        total: Amount being distributed

    Returns:
        Proportional share (remainder handled separately)
    """
    if denominator == 0:
        return 0
    magnitude = (abs(numerator) * abs(total)) // abs(denominator)
    return -magnitude if total < 0 else magnitude


def allocate_remainder(amounts: list[int], total: int) -> list[int]:
    """
    Replace the last amount so the list sums exactly to ``total``.

    Args:
        amounts: Calculated shares before remainder allocation
        total: Target total that amounts should sum to

    Returns:
        New list whose last item holds total - sum(others)
    """
    if not amounts:
        return amounts

    amounts_copy = amounts.copy()
    amounts_copy[-1] = total - sum(amounts_copy[:-1])
    return amounts_copy


def distribute_proportionally(weights: list[int], total: int) -> list[int]:
    """
    Split ``total`` across ``weights`` by |weight_i| / |sum(weights)|.

    Every share but the last is truncated; the last receives the exact
    remainder, so the result always sums to ``total``.
    """
    if not weights:
        return []

    weight_total = sum(weights)
    shares = [safe_divide_proportional(w, weight_total, total) for w in weights]
    return allocate_remainder(shares, total)


def format_decimal_dollars(amount: Decimal) -> str:
    """Format a decimal dollar amount as "$12.34" / "$-12.34"."""
    return f"${amount:.2f}"


def format_milliunits(milliunits: int) -> str:
    """Format milliunits as a dollar string with $ prefix."""
    return format_decimal_dollars(milliunits_to_decimal(milliunits))
