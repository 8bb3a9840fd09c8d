#!/usr/bin/env python3
"""
Transaction Composer

Builds one YNAB transaction from a parsed receipt and submits it:

    resolve account -> attempt split (if itemized) -> resolve fallback
    category (if no split) -> submit once

An unknown account or fallback category aborts before anything is
submitted. A split that can't be reconciled is not an error: the receipt is
recorded under its top-level category and the reason is reported in the
result.
"""

import logging
from dataclasses import dataclass
from typing import Any

from ..core.dates import DateAdjustment, FinancialDate, normalize_transaction_date
from ..core.models import ParsedReceipt
from ..core.money import Money
from .client import LedgerProvider
from .models import SaveSubTransaction, TransactionRequest
from .resolver import LedgerLookup
from .split_allocator import SplitEventHook, SplitOutcome, allocate_splits, lines_from_receipt

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    """What was submitted to YNAB and how it differs from the receipt."""

    success: bool
    request: TransactionRequest
    split_info: SplitOutcome | None = None
    date_adjustment: DateAdjustment | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys; ``splitInfo`` is absent for non-itemized receipts."""
        result: dict[str, Any] = {"success": self.success}
        if self.split_info is not None:
            result["splitInfo"] = self.split_info.to_dict()
        if self.date_adjustment is not None:
            result["dateAdjustment"] = self.date_adjustment.to_dict()
        return result


def compose_transaction(
    account_name: str,
    receipt: ParsedReceipt,
    lookup: LedgerLookup,
    today: FinancialDate | None = None,
    on_event: SplitEventHook | None = None,
) -> ReconcileResult:
    """
    Build the transaction request for a receipt without submitting it.

    Args:
        account_name: YNAB account the purchase was paid from
        receipt: Parsed receipt
        lookup: Account and category maps for this budget
        today: Reference date for the date window (default: today)
        on_event: Structured event hook passed to the split allocator

    Returns:
        ReconcileResult whose ``request`` is ready to submit

    Raises:
        InvalidDateError: If the receipt date can't be parsed
        AccountNotFoundError: If the account name is unknown
        CategoryNotFoundError: If the fallback category is needed and unknown
    """
    transaction_date, date_adjustment = normalize_transaction_date(
        FinancialDate.from_string(receipt.transaction_date), today
    )
    if date_adjustment:
        logger.info(
            "Adjusted transaction date %s -> %s: %s",
            date_adjustment.original_date,
            date_adjustment.adjusted_date,
            date_adjustment.reason,
        )

    account_id = lookup.account_id(account_name)

    split_info: SplitOutcome | None = None
    subtransactions: list[SaveSubTransaction] = []
    if receipt.line_items is not None:
        split = allocate_splits(
            receipt.total_amount,
            lines_from_receipt(receipt),
            lookup.categories,
            total_taxes=receipt.total_taxes,
            on_event=on_event,
        )
        split_info = split.outcome
        subtransactions = split.subtransactions
        if split.outcome.attempted and not split.successful:
            logger.warning(
                "Split failed for %s, falling back to category %r: %s",
                receipt.merchant,
                receipt.category,
                split.outcome.reason,
            )

    request = TransactionRequest(
        account_id=account_id,
        amount=Money.from_receipt_amount(receipt.total_amount),
        date=transaction_date,
        payee_name=receipt.merchant,
        memo=receipt.memo,
    )

    if len(subtransactions) > 1:
        request.subtransactions = subtransactions
    elif len(subtransactions) == 1:
        # A split into a single category is a plain transaction in that category
        request.category_id = subtransactions[0].category_id
    else:
        request.category_id = lookup.category_id(receipt.category)

    return ReconcileResult(
        success=True,
        request=request,
        split_info=split_info,
        date_adjustment=date_adjustment,
    )


def reconcile(
    account_name: str,
    receipt: ParsedReceipt,
    lookup: LedgerLookup,
    provider: LedgerProvider,
    today: FinancialDate | None = None,
    on_event: SplitEventHook | None = None,
) -> ReconcileResult:
    """
    Compose the transaction for a receipt and submit it to the ledger once.

    Raises:
        AccountNotFoundError, CategoryNotFoundError: Before anything is submitted
        LedgerProviderError: If the submission fails (not retried)
    """
    result = compose_transaction(account_name, receipt, lookup, today=today, on_event=on_event)
    provider.create_transaction(result.request)
    logger.info(
        "Created transaction for %s in account %r (%s)",
        receipt.merchant,
        account_name,
        f"{len(result.request.subtransactions)}-way split" if result.request.is_split else "single category",
    )
    return result
