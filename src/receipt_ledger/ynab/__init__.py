"""
YNAB Integration Package

Records parsed receipts as YNAB transactions.

Key Components:
- client: YNAB API client (httpx) and the LedgerProvider protocol
- loader: Category/payee/account names and resolver maps from a budget document
- resolver: Exact name -> id resolution for accounts and categories
- split_allocator: Tax distribution and rounding reconciliation across categories
- composer: Builds and submits the single transaction for a receipt
"""

from .client import LedgerProvider, LedgerProviderError, RecordingLedger, YnabClient
from .composer import ReconcileResult, compose_transaction, reconcile
from .loader import BudgetInfo, build_lookup, load_budget_cache, load_budget_info
from .models import (
    SaveSubTransaction,
    TransactionRequest,
    YnabAccount,
    YnabCategory,
    YnabCategoryGroup,
    YnabPayee,
)
from .resolver import (
    AccountNotFoundError,
    CategoryNotFoundError,
    LedgerLookup,
    NotFoundError,
    resolve_account,
    resolve_category,
)
from .split_allocator import (
    AdjustmentType,
    SplitBreakdown,
    SplitLine,
    SplitOutcome,
    SplitResult,
    allocate_splits,
    lines_from_receipt,
)

__all__ = [
    # Domain models
    "SaveSubTransaction",
    "TransactionRequest",
    "YnabAccount",
    "YnabCategory",
    "YnabCategoryGroup",
    "YnabPayee",
    # Client
    "LedgerProvider",
    "LedgerProviderError",
    "RecordingLedger",
    "YnabClient",
    # Budget loading
    "BudgetInfo",
    "build_lookup",
    "load_budget_cache",
    "load_budget_info",
    # Resolution
    "AccountNotFoundError",
    "CategoryNotFoundError",
    "LedgerLookup",
    "NotFoundError",
    "resolve_account",
    "resolve_category",
    # Split allocation
    "AdjustmentType",
    "SplitBreakdown",
    "SplitLine",
    "SplitOutcome",
    "SplitResult",
    "allocate_splits",
    "lines_from_receipt",
    # Composition
    "ReconcileResult",
    "compose_transaction",
    "reconcile",
]
