"""
Core Utilities Package

Shared primitives used by the YNAB and receipt packages:
- Currency handling with integer milliunit arithmetic
- FinancialDate and the transaction date window
- Parsed receipt models
- Environment-based configuration
"""

from .config import (
    Config,
    Environment,
    StorageBackend,
    get_config,
    is_development,
    is_production,
    is_test,
    reload_config,
)
from .currency import (
    SPLIT_TOLERANCE_DOLLARS,
    SPLIT_TOLERANCE_MILLIUNITS,
    allocate_remainder,
    distribute_proportionally,
    format_milliunits,
    milliunits_to_decimal,
    receipt_amount_to_milliunits,
    safe_divide_proportional,
)
from .dates import DateAdjustment, FinancialDate, InvalidDateError, normalize_transaction_date
from .models import LineItem, ParsedReceipt, ReceiptValidationError
from .money import Money

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "StorageBackend",
    "get_config",
    "is_development",
    "is_production",
    "is_test",
    "reload_config",
    # Currency utilities
    "SPLIT_TOLERANCE_DOLLARS",
    "SPLIT_TOLERANCE_MILLIUNITS",
    "allocate_remainder",
    "distribute_proportionally",
    "format_milliunits",
    "milliunits_to_decimal",
    "receipt_amount_to_milliunits",
    "safe_divide_proportional",
    "Money",
    # Dates
    "DateAdjustment",
    "FinancialDate",
    "InvalidDateError",
    "normalize_transaction_date",
    # Data models
    "LineItem",
    "ParsedReceipt",
    "ReceiptValidationError",
]
