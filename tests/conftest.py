"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from pathlib import Path
from typing import Any

import pytest

from receipt_ledger.core import config as config_module
from receipt_ledger.ynab.loader import build_lookup
from receipt_ledger.ynab.resolver import LedgerLookup


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def sample_budget() -> dict[str, Any]:
    """Budget document shaped like GET /budgets/{id} -> data.budget."""
    return {
        "id": "budget-1",
        "name": "Household",
        "accounts": [
            {"id": "acct-checking", "name": "Checking", "type": "checking", "closed": False, "deleted": False},
            {"id": "acct-visa", "name": "Visa", "type": "creditCard", "closed": False, "deleted": False},
            {"id": "acct-old", "name": "Old Card", "type": "creditCard", "closed": True, "deleted": False},
            {"id": "acct-gone", "name": "Gone", "type": "checking", "closed": False, "deleted": True},
        ],
        "category_groups": [
            {"id": "grp-everyday", "name": "Everyday", "hidden": False, "deleted": False},
            {"id": "grp-home", "name": "Home", "hidden": False, "deleted": False},
        ],
        "categories": [
            {"id": "cat-groceries", "category_group_id": "grp-everyday", "name": "Groceries", "hidden": False},
            {"id": "cat-household", "category_group_id": "grp-home", "name": "Household", "hidden": False},
            {"id": "cat-dining", "category_group_id": "grp-everyday", "name": "Dining Out", "hidden": False},
            {"id": "cat-pets", "category_group_id": "grp-home", "name": "Pets", "hidden": False},
            {"id": "cat-hidden", "category_group_id": "grp-home", "name": "Hidden Stuff", "hidden": True},
            {
                "id": "cat-deleted",
                "category_group_id": "grp-home",
                "name": "Old Category",
                "hidden": False,
                "deleted": True,
            },
        ],
        "payees": [
            {"id": "payee-costco", "name": "Costco", "deleted": False},
            {"id": "payee-target", "name": "Target", "deleted": False},
            {"id": "payee-old", "name": "Closed Store", "deleted": True},
        ],
    }


@pytest.fixture
def sample_lookup(sample_budget) -> LedgerLookup:
    """Resolver maps built from the sample budget."""
    return build_lookup(sample_budget)


@pytest.fixture
def sample_receipt_data() -> dict[str, Any]:
    """Parsed receipt JSON with tax and two categories."""
    return {
        "merchant": "Costco",
        "transactionDate": "2025-05-20",
        "memo": "Weekly shop",
        "totalAmount": 167.28,
        "totalTaxes": 9.46,
        "category": "Groceries",
        "lineItems": [
            {"productName": "Produce", "lineItemTotalAmount": 62.40, "category": "Groceries"},
            {"productName": "Paper towels", "quantity": 2, "lineItemTotalAmount": 31.99, "category": "Household"},
            {"productName": "Chicken", "lineItemTotalAmount": 41.43, "category": "Groceries"},
            {"productName": "Dog food", "lineItemTotalAmount": 22.00, "category": "Pets"},
        ],
    }


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables and drop any cached configuration."""
    monkeypatch.setenv("RECEIPTS_ENV", "test")
    monkeypatch.setenv("YNAB_API_KEY", "test-token")
    monkeypatch.setenv("YNAB_BUDGET_ID", "budget-1")
    for name in (
        "YNAB_CATEGORY_GROUPS",
        "YNAB_INCLUDE_PAYEES_IN_PROMPT",
        "FILE_STORAGE",
        "LOCAL_DIRECTORY",
        "DATE_SUBDIRECTORIES",
        "MAX_FILE_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "_config", None)
