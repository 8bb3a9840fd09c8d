#!/usr/bin/env python3
"""
YNAB Budget Loader

Turns a YNAB budget document (live from the API or saved to disk) into the
reference data this package needs:

- load_budget_info: category, payee and account names offered to the parser
- build_lookup: name -> id maps used to resolve a parsed receipt
- load_budget_cache: read a budget document saved as JSON
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..core.json_utils import read_json
from .models import YnabAccount, YnabCategory, YnabCategoryGroup, YnabPayee
from .resolver import LedgerLookup


@dataclass
class BudgetInfo:
    """Names the receipt parser may choose from."""

    categories: list[str]
    accounts: list[str]
    payees: list[str] | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        return {"categories": self.categories, "payees": self.payees, "accounts": self.accounts}


def load_budget_cache(path: str | Path) -> dict[str, Any]:
    """
    Load a budget document saved on disk.

    Accepts either the raw API response (``{"data": {"budget": ...}}``) or the
    bare budget object.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file does not contain a budget
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YNAB budget cache not found: {path}")

    data: Any = read_json(path)
    if isinstance(data, dict) and "data" in data:
        data = data["data"]
    if isinstance(data, dict) and "budget" in data:
        data = data["budget"]
    if not isinstance(data, dict) or "accounts" not in data:
        raise ValueError(f"Not a YNAB budget document: {path}")
    return data


def budget_accounts(budget: dict[str, Any]) -> list[YnabAccount]:
    return [YnabAccount.from_dict(a) for a in budget.get("accounts") or []]


def budget_category_groups(budget: dict[str, Any]) -> list[YnabCategoryGroup]:
    return [YnabCategoryGroup.from_dict(g) for g in budget.get("category_groups") or []]


def budget_categories(budget: dict[str, Any]) -> list[YnabCategory]:
    """
    All categories in a budget document.

    The budget endpoint returns a flat ``categories`` list; the categories
    endpoint nests them under each group. Both shapes are handled.
    """
    groups = budget.get("category_groups") or []
    group_names = {g["id"]: g.get("name") for g in groups}

    if budget.get("categories") is not None:
        return [
            YnabCategory.from_dict(c, category_group_name=group_names.get(c.get("category_group_id")))
            for c in budget["categories"]
        ]

    categories: list[YnabCategory] = []
    for group in groups:
        categories.extend(
            YnabCategory.from_dict(c, category_group_name=group.get("name")) for c in group.get("categories", [])
        )
    return categories


def budget_payees(budget: dict[str, Any]) -> list[YnabPayee]:
    return [YnabPayee.from_dict(p) for p in budget.get("payees") or []]


def load_budget_info(
    budget: dict[str, Any],
    category_groups: list[str] | None = None,
    include_payees: bool = False,
) -> BudgetInfo:
    """
    Collect the names offered to the receipt parser.

    Args:
        budget: YNAB budget document
        category_groups: Only offer categories from these groups (None or empty: all)
        include_payees: Also list payee names

    Returns:
        BudgetInfo with usable category, account and (optionally) payee names

    Raises:
        ValueError: If the budget has no usable categories
    """
    categories = [c for c in budget_categories(budget) if not c.deleted and not c.hidden]
    if category_groups:
        allowed_ids = {g.id for g in budget_category_groups(budget) if g.name in category_groups}
        categories = [c for c in categories if c.category_group_id in allowed_ids]

    if not categories:
        raise ValueError("No categories found")

    accounts = [a.name for a in budget_accounts(budget) if not a.closed and not a.deleted]

    payees = None
    if include_payees:
        payees = [p.name for p in budget_payees(budget) if p.name and not p.deleted]

    return BudgetInfo(categories=[c.name for c in categories], accounts=accounts, payees=payees)


def build_lookup(budget: dict[str, Any]) -> LedgerLookup:
    """Build the account and category resolver maps for one request."""
    return LedgerLookup.from_entities(budget_accounts(budget), budget_categories(budget))
