#!/usr/bin/env python3
"""
Receipt Processing Pipeline

Runs one upload end to end, each step feeding the next:

1. Load the budget's categories (and payees, if enabled)
2. Parse the receipt image with the external parser
3. Reconcile the receipt into a YNAB transaction
4. Store the receipt file, if storage is configured

Progress is reported through an optional callback so a caller can stream it.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from ..core.dates import FinancialDate
from ..core.models import ParsedReceipt
from ..ynab.client import LedgerProvider
from ..ynab.composer import ReconcileResult, reconcile
from ..ynab.loader import build_lookup, load_budget_info
from ..ynab.split_allocator import SplitEventHook
from .storage import SUPPORTED_MIME_TYPES, LocalReceiptStorage

logger = logging.getLogger(__name__)


class ReceiptProcessingError(Exception):
    """Base class for a failed pipeline stage."""

    message = "Failed to process the receipt"

    def __init__(self, detail: str | None = None):
        super().__init__(f"{self.message}: {detail}" if detail else self.message)


class ReceiptUploadError(ReceiptProcessingError):
    message = "Invalid receipt upload"


class ReceiptParseError(ReceiptProcessingError):
    message = "Failed to parse the receipt"


class ReceiptLedgerImportError(ReceiptProcessingError):
    message = "Failed to import the receipt into YNAB"


class ReceiptFileUploadError(ReceiptProcessingError):
    message = "Failed to upload the receipt file"


class ReceiptParser(Protocol):
    """The external receipt parser: image bytes in, structured receipt out."""

    def __call__(
        self,
        content: bytes,
        mime_type: str,
        categories: list[str],
        payees: list[str] | None,
    ) -> ParsedReceipt | dict[str, Any] | None: ...


class BudgetLedger(LedgerProvider, Protocol):
    """A ledger provider that can also return its budget document."""

    def get_budget(self) -> dict[str, Any]: ...


class ProgressHandler(Protocol):
    def __call__(self, event: str, data: Any = None) -> None: ...


@dataclass
class ProcessedReceipt:
    """Outcome of a fully processed upload."""

    receipt: ParsedReceipt
    result: ReconcileResult
    stored_path: Path | None = None

    def to_dict(self) -> dict[str, Any]:
        data = {"receipt": self.receipt.to_dict(), **self.result.to_dict()}
        if self.stored_path is not None:
            data["storedPath"] = str(self.stored_path)
        return data


def check_upload(content: bytes, mime_type: str, max_file_size: int) -> None:
    """
    Reject uploads that are too large or of an unsupported type.

    Raises:
        ReceiptUploadError: If the upload is not acceptable
    """
    if len(content) > max_file_size:
        raise ReceiptUploadError(f"Max file size is {max_file_size / 1024 / 1024:g}MB")
    if mime_type.lower() not in SUPPORTED_MIME_TYPES:
        raise ReceiptUploadError(f"Unsupported file type {mime_type}")


def process_receipt(
    account: str,
    content: bytes,
    mime_type: str,
    parser: ReceiptParser,
    ledger: BudgetLedger,
    storage: LocalReceiptStorage | None = None,
    on_progress: ProgressHandler | None = None,
    category_groups: list[str] | None = None,
    include_payees: bool = False,
    today: FinancialDate | None = None,
    on_event: SplitEventHook | None = None,
    max_file_size: int | None = None,
) -> ProcessedReceipt:
    """
    Parse a receipt image, record it in YNAB and store the file.

    Raises:
        ReceiptUploadError: If the file is too large or of an unsupported type
        LedgerProviderError: If the budget can't be loaded
        ReceiptParseError: If the parser fails or returns nothing usable
        ReceiptLedgerImportError: If the transaction can't be created
        ReceiptFileUploadError: If the file can't be stored (the transaction
            has already been created at that point)
    """

    def progress(event: str, data: Any = None) -> None:
        if on_progress is not None:
            on_progress(event, data)

    if max_file_size is not None:
        check_upload(content, mime_type, max_file_size)

    progress("upload-start")

    budget = ledger.get_budget()
    info = load_budget_info(budget, category_groups=category_groups, include_payees=include_payees)
    progress("categories-loaded", info.categories)
    if info.payees is not None:
        progress("payees-loaded", info.payees)

    try:
        progress("request-parser")
        parsed = parser(content, mime_type, info.categories, info.payees)
        if parsed is None:
            raise ValueError("Receipt was supposedly parsed but nothing was returned")
        receipt = parsed if isinstance(parsed, ParsedReceipt) else ParsedReceipt.from_dict(parsed)
        progress("response-parser", receipt.to_dict())
    except Exception as e:
        logger.error("Failed to parse the receipt: %s", e)
        raise ReceiptParseError(str(e)) from e

    try:
        progress("request-ynab")
        result = reconcile(account, receipt, build_lookup(budget), ledger, today=today, on_event=on_event)
        progress("response-ynab", result.to_dict())
    except Exception as e:
        logger.error("Failed to import the receipt into YNAB: %s", e)
        raise ReceiptLedgerImportError(str(e)) from e

    stored_path = None
    if storage is not None:
        try:
            progress("upload-file")
            stored_path = storage.store(receipt.merchant, result.request.date, content, mime_type)
            progress("upload-file-done", str(stored_path))
        except Exception as e:
            logger.error("Failed to upload the receipt: %s", e)
            raise ReceiptFileUploadError(str(e)) from e

    return ProcessedReceipt(receipt=receipt, result=result, stored_path=stored_path)
