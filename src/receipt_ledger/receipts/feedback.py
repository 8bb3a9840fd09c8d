#!/usr/bin/env python3
"""
Receipt Processing Feedback

Human-readable summaries shown to the user before and after a receipt is
recorded: how it will be split, and what actually happened (tax shared out,
small adjustments, or a split that fell back to a single category).
"""

from decimal import Decimal

from ..core.currency import SPLIT_TOLERANCE_DOLLARS
from ..core.models import ParsedReceipt
from ..ynab.split_allocator import AdjustmentType, SplitOutcome

_ADJUSTMENT_LABELS = {
    AdjustmentType.TOLERANCE: "tolerance adjustment",
    AdjustmentType.PROPORTIONAL_ADJUSTMENT: "proportional adjustment",
    AdjustmentType.TAX_DISTRIBUTION: "with tax distribution",
}


def _dollars(amount: Decimal) -> str:
    return f"${amount:.2f}"


def generate_processing_feedback(receipt: ParsedReceipt) -> str:
    """
    Summarize how a receipt will be processed.

    Itemized receipts with more than one line are previewed as a split, with
    a warning when items (+ tax) don't add up to the total. Anything else is a
    single transaction.
    """
    line_items = receipt.line_items or []

    if len(line_items) <= 1:
        feedback = "• Single transaction"
        if receipt.total_taxes and receipt.total_taxes > 0:
            feedback += f" (+ {_dollars(receipt.total_taxes)} Tax)"
        return feedback

    line_item_total = receipt.line_item_total
    feedback = f"• Split Transaction: {len(line_items)} items totaling {_dollars(line_item_total)}"

    if receipt.total_taxes and receipt.total_taxes > 0:
        expected_total = line_item_total + receipt.total_taxes
        difference = abs(receipt.total_amount - expected_total)
        if difference < SPLIT_TOLERANCE_DOLLARS:
            feedback += f" + {_dollars(receipt.total_taxes)} Tax ≈ Total {_dollars(receipt.total_amount)}"
        else:
            feedback += (
                f"\n ⚠️ Discrepancy: Items+Tax {_dollars(expected_total)} ≠ Total {_dollars(receipt.total_amount)}"
            )
            feedback += "\n• Will attempt proportional adjustment if difference is small"
    else:
        difference = abs(receipt.total_amount - line_item_total)
        if difference < SPLIT_TOLERANCE_DOLLARS:
            feedback += f" (ignoring small difference {difference:.2f})"
        else:
            feedback += (
                f"\n ⚠️ Discrepancy: Items {_dollars(line_item_total)} ≠ Total {_dollars(receipt.total_amount)}"
            )
            feedback += "\n• Will attempt proportional adjustment if difference is small"

    return feedback


def build_split_feedback(split_info: SplitOutcome | None, receipt: ParsedReceipt) -> str:
    """
    Explain the outcome of a split attempt.

    Only the parts that apply are included: tax distributed, adjustment
    applied, the items + tax + adjustment = total breakdown, or for a failed
    split the two totals and the category used instead.
    """
    if split_info is None or not split_info.attempted:
        if receipt.line_items and len(receipt.line_items) > 1:
            return "\n• Single transaction (no splits attempted)"
        return ""

    if not split_info.successful:
        feedback = "\n• ⚠️ Split transaction attempted but failed."
        feedback += (
            f"\n• Expected total: {_dollars(split_info.expected_amount)}, "
            f"Split total: {_dollars(split_info.total_split_amount)}"
        )
        if split_info.reason:
            feedback += f"\n• Reason: {split_info.reason}"
        feedback += f'\n• Transaction created as single entry in "{receipt.category}" instead'
        return feedback

    feedback = ""
    if split_info.tax_distributed and split_info.tax_distributed > 0:
        feedback += f"\n• Tax distributed: {_dollars(split_info.tax_distributed)}"

    if split_info.adjustment_applied:
        label = _ADJUSTMENT_LABELS.get(split_info.adjustment_type, "adjustment")  # type: ignore[arg-type]
        sign = "+" if split_info.adjustment_applied >= 0 else ""
        feedback += f"\n• {label}: {sign}{_dollars(split_info.adjustment_applied)}"

    breakdown = split_info.detailed_breakdown
    if breakdown:
        feedback += f"\n• Split breakdown: Items {_dollars(breakdown.original_split_total)}"
        if breakdown.tax_amount > 0:
            feedback += f" + Tax {_dollars(breakdown.tax_amount)}"
        if breakdown.final_adjustment:
            feedback += f" + Adj {_dollars(breakdown.final_adjustment)}"
        feedback += f" = {_dollars(receipt.total_amount)}"

    return feedback
