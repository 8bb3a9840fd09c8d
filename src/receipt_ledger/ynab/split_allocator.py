#!/usr/bin/env python3
"""
Split Allocator for receipt transactions.

Turns a receipt total, an optional tax amount and per-category line amounts
into YNAB subtransactions whose amounts sum exactly to the transaction total,
or reports why the receipt should be recorded as a single-category
transaction instead.

All arithmetic is done on integer milliunits:
1. Tax is shared across lines by their proportion of the line total; every
   line but the last is truncated and the last line gets the remainder.
2. Whatever still separates the lines from the total is absorbed the same
   way, provided it is at most $0.05.
3. Lines are resolved to category ids and merged per category, in first-seen
   order.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Protocol

from ..core.currency import (
    AmountLike,
    distribute_proportionally,
    format_milliunits,
    is_within_split_tolerance,
    milliunits_to_decimal,
    receipt_amount_to_milliunits,
    to_decimal,
)
from ..core.models import ParsedReceipt
from ..core.money import Money
from .models import SaveSubTransaction
from .resolver import CategoryNotFoundError, resolve_category

logger = logging.getLogger(__name__)


class SplitEventHook(Protocol):
    """Receives structured events while a split is computed. Return value is ignored."""

    def __call__(self, event: str, **fields: Any) -> None: ...


def log_split_event(event: str, **fields: Any) -> None:
    """Default event hook: log the event at DEBUG level."""
    logger.debug("split %s: %s", event, fields)


class AdjustmentType(Enum):
    """How split amounts were changed to match the receipt total."""

    TAX_DISTRIBUTION = "tax_distribution"
    PROPORTIONAL_ADJUSTMENT = "proportional_adjustment"
    TOLERANCE = "tolerance"


@dataclass(frozen=True)
class SplitLine:
    """One receipt line as input to the allocator (receipt convention: positive = spent)."""

    category: str
    amount: Decimal

    @classmethod
    def of(cls, category: str, amount: AmountLike) -> "SplitLine":
        return cls(category=category, amount=to_decimal(amount))


@dataclass
class SplitAllocation:
    """Working amount for one line, in ledger milliunits."""

    category_name: str
    milliunits: int


@dataclass(frozen=True)
class SplitBreakdown:
    """The arithmetic behind a successful split: items + tax + adjustment = total."""

    original_split_total: Decimal
    tax_amount: Decimal
    final_adjustment: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "originalSplitTotal": self.original_split_total,
            "taxAmount": self.tax_amount,
            "finalAdjustment": self.final_adjustment,
        }


@dataclass
class SplitOutcome:
    """
    Report of a split attempt, returned to the caller alongside the transaction.

    Amounts are decimal dollars in ledger sign (expenses negative), except
    ``tax_distributed`` which is always a non-negative magnitude.
    """

    attempted: bool
    successful: bool
    split_count: int
    total_split_amount: Decimal
    expected_amount: Decimal
    tax_distributed: Decimal | None = None
    adjustment_applied: Decimal | None = None
    adjustment_type: AdjustmentType | None = None
    detailed_breakdown: SplitBreakdown | None = None
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting unset optional fields."""
        result: dict[str, Any] = {
            "attempted": self.attempted,
            "successful": self.successful,
            "splitCount": self.split_count,
            "totalSplitAmount": self.total_split_amount,
            "expectedAmount": self.expected_amount,
        }
        if self.tax_distributed is not None:
            result["taxDistributed"] = self.tax_distributed
        if self.adjustment_applied is not None:
            result["adjustmentApplied"] = self.adjustment_applied
        if self.adjustment_type is not None:
            result["adjustmentType"] = self.adjustment_type.value
        if self.detailed_breakdown is not None:
            result["detailedBreakdown"] = self.detailed_breakdown.to_dict()
        if self.reason is not None:
            result["reason"] = self.reason
        return result


@dataclass
class SplitResult:
    """Allocator output: the report plus the subtransactions to submit (empty on failure)."""

    outcome: SplitOutcome
    subtransactions: list[SaveSubTransaction] = field(default_factory=list)

    @property
    def successful(self) -> bool:
        return self.outcome.successful


def lines_from_receipt(receipt: ParsedReceipt) -> list[SplitLine]:
    """Build allocator input from a parsed receipt's line items (empty when not itemized)."""
    return [
        SplitLine(category=item.category, amount=item.line_item_total_amount)
        for item in receipt.line_items or []
    ]


def allocate_splits(
    total_amount: AmountLike,
    lines: Iterable[SplitLine],
    categories: dict[str, str],
    total_taxes: AmountLike | None = None,
    on_event: SplitEventHook | None = None,
) -> SplitResult:
    """
    Allocate a receipt total across per-category subtransactions.

    Args:
        total_amount: Receipt total in dollars (positive = spent), tax included
        lines: Per-category line amounts in dollars, tax excluded
        categories: Category name -> YNAB category id
        total_taxes: Receipt tax in dollars, distributed across the lines
        on_event: Structured event hook (default: DEBUG log)

    Returns:
        SplitResult. ``outcome.attempted`` is False when there are no lines;
        ``outcome.successful`` is False when the lines can't be reconciled
        with the total or a category is unknown.
    """
    emit = on_event or log_split_event

    total = receipt_amount_to_milliunits(total_amount)
    allocations = [
        SplitAllocation(category_name=line.category, milliunits=receipt_amount_to_milliunits(line.amount))
        for line in lines
    ]

    if not allocations:
        return SplitResult(
            outcome=SplitOutcome(
                attempted=False,
                successful=False,
                split_count=0,
                total_split_amount=Decimal("0"),
                expected_amount=milliunits_to_decimal(total),
            )
        )

    original_split_total = sum(a.milliunits for a in allocations)
    outcome = SplitOutcome(
        attempted=True,
        successful=False,
        split_count=0,
        total_split_amount=milliunits_to_decimal(original_split_total),
        expected_amount=milliunits_to_decimal(total),
    )
    emit("start", total=total, lines=len(allocations), split_total=original_split_total)

    # Step 1: proportional tax distribution, remainder to the last line
    tax_distributed = 0
    if total_taxes is not None and to_decimal(total_taxes) > 0:
        tax_magnitude = abs(receipt_amount_to_milliunits(total_taxes))
        # Tax pushes the total further in its own direction
        tax = tax_magnitude if total > 0 else -tax_magnitude

        shares = distribute_proportionally([a.milliunits for a in allocations], tax)
        for allocation, share in zip(allocations, shares):
            allocation.milliunits += share

        tax_distributed = abs(sum(shares))
        outcome.tax_distributed = milliunits_to_decimal(tax_distributed)
        outcome.adjustment_type = AdjustmentType.TAX_DISTRIBUTION
        emit("tax_distributed", tax=tax, shares=shares)

    # Step 2: residual check against the tolerance
    adjusted_total = sum(a.milliunits for a in allocations)
    difference = total - adjusted_total

    if not is_within_split_tolerance(difference):
        outcome.reason = (
            f"Split amounts ({format_milliunits(adjusted_total)}) don't match total "
            f"({format_milliunits(total)}) - difference of {format_milliunits(abs(difference))} "
            "exceeds tolerance"
        )
        emit("tolerance_exceeded", adjusted_total=adjusted_total, total=total, difference=difference)
        return SplitResult(outcome=outcome)

    # Step 3: absorb the residual proportionally, remainder to the last line
    if difference != 0:
        shares = distribute_proportionally([a.milliunits for a in allocations], difference)
        for allocation, share in zip(allocations, shares):
            allocation.milliunits += share

        outcome.adjustment_applied = milliunits_to_decimal(difference)
        if outcome.adjustment_type is None:
            # Same gate as the residual check above, so this is always TOLERANCE
            outcome.adjustment_type = (
                AdjustmentType.TOLERANCE
                if is_within_split_tolerance(difference)
                else AdjustmentType.PROPORTIONAL_ADJUSTMENT
            )
        emit("adjustment_applied", difference=difference, shares=shares)

    # Step 4: resolve categories and merge lines sharing a category
    merged: dict[str, int] = {}
    for allocation in allocations:
        try:
            category_id = resolve_category(allocation.category_name, categories)
        except CategoryNotFoundError as e:
            outcome.reason = str(e)
            emit("category_not_found", category=allocation.category_name)
            return SplitResult(outcome=outcome)
        merged[category_id] = merged.get(category_id, 0) + allocation.milliunits

    subtransactions = [
        SaveSubTransaction(amount=Money.from_milliunits(amount), category_id=category_id)
        for category_id, amount in merged.items()
    ]

    outcome.successful = True
    outcome.split_count = len(subtransactions)
    outcome.detailed_breakdown = SplitBreakdown(
        original_split_total=milliunits_to_decimal(original_split_total),
        tax_amount=milliunits_to_decimal(tax_distributed),
        final_adjustment=milliunits_to_decimal(difference),
    )
    emit("completed", split_count=len(subtransactions), amounts=list(merged.values()))

    return SplitResult(outcome=outcome, subtransactions=subtransactions)
