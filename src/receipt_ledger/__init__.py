"""
Receipt Ledger - Receipt to YNAB Reconciliation

Turns a parsed purchase receipt into a YNAB transaction: a single-category
transaction, or a split across budget categories with the receipt's tax
shared out across the splits.

Domain Packages:
- core: Currency handling, dates, receipt models, configuration
- ynab: YNAB client, budget loading, name resolution, split allocation, composition
- receipts: Upload pipeline, file storage, user-facing feedback
- cli: Command-line interface (receipts)

Example Usage:
    from receipt_ledger import ParsedReceipt, reconcile
    from receipt_ledger.ynab import RecordingLedger, build_lookup

Version: 0.1.0
"""

__version__ = "0.1.0"

from .core.config import Environment, get_config
from .core.currency import milliunits_to_decimal, receipt_amount_to_milliunits
from .core.models import LineItem, ParsedReceipt
from .ynab.composer import ReconcileResult, compose_transaction, reconcile
from .ynab.split_allocator import SplitOutcome, allocate_splits

__all__ = [
    # Currency
    "milliunits_to_decimal",
    "receipt_amount_to_milliunits",
    # Models
    "LineItem",
    "ParsedReceipt",
    # Reconciliation
    "ReconcileResult",
    "SplitOutcome",
    "allocate_splits",
    "compose_transaction",
    "reconcile",
    # Configuration
    "Environment",
    "get_config",
]
