#!/usr/bin/env python3
"""
YNAB Domain Models

Type-safe models for the parts of the YNAB API this package reads (accounts,
category groups, categories, payees) and writes (new transactions with
optional subtransactions).
"""

from dataclasses import dataclass, field
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money


@dataclass
class YnabAccount:
    """YNAB account from API."""

    id: str
    name: str
    type: str | None = None
    on_budget: bool = True
    closed: bool = False
    balance: Money | None = None
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "YnabAccount":
        """
        Create YnabAccount from API dict.

        Args:
            data: Account object from the YNAB budget or accounts endpoint

        Returns:
            YnabAccount instance
        """
        return cls(
            id=data["id"],
            name=data["name"],
            type=data.get("type"),
            on_budget=data.get("on_budget", True),
            closed=data.get("closed", False),
            balance=Money.from_milliunits(data["balance"]) if "balance" in data else None,
            deleted=data.get("deleted", False),
        )


@dataclass
class YnabCategoryGroup:
    """YNAB category group from API."""

    id: str
    name: str
    hidden: bool = False
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "YnabCategoryGroup":
        return cls(
            id=data["id"],
            name=data["name"],
            hidden=data.get("hidden", False),
            deleted=data.get("deleted", False),
        )


@dataclass
class YnabCategory:
    """
    YNAB category from API.

    Represents a budget category within a category group.
    """

    id: str
    category_group_id: str | None
    name: str
    hidden: bool = False
    deleted: bool = False
    category_group_name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any], category_group_name: str | None = None) -> "YnabCategory":
        """
        Create YnabCategory from API dict.

        Args:
            data: Category object from the YNAB API
            category_group_name: Name of parent category group, when known

        Returns:
            YnabCategory instance
        """
        return cls(
            id=data["id"],
            category_group_id=data.get("category_group_id"),
            name=data["name"],
            hidden=data.get("hidden", False),
            deleted=data.get("deleted", False),
            category_group_name=category_group_name or data.get("category_group_name"),
        )

    @property
    def full_name(self) -> str:
        """Get full category name including group."""
        if self.category_group_name:
            return f"{self.category_group_name}: {self.name}"
        return self.name


@dataclass
class YnabPayee:
    """YNAB payee from API."""

    id: str
    name: str | None
    deleted: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "YnabPayee":
        return cls(id=data["id"], name=data.get("name"), deleted=data.get("deleted", False))


@dataclass(frozen=True)
class SaveSubTransaction:
    """One category share of a split transaction being created."""

    amount: Money
    category_id: str

    def to_api_dict(self) -> dict[str, Any]:
        return {"amount": self.amount.to_milliunits(), "category_id": self.category_id}


@dataclass
class TransactionRequest:
    """
    New YNAB transaction, ready to be submitted.

    Exactly one of ``category_id`` and ``subtransactions`` is populated:
    a plain transaction carries a category, a split carries two or more
    subtransactions whose amounts sum to ``amount``.
    """

    account_id: str
    amount: Money
    date: FinancialDate
    payee_name: str
    memo: str
    category_id: str | None = None
    subtransactions: list[SaveSubTransaction] = field(default_factory=list)
    approved: bool = False

    @property
    def is_split(self) -> bool:
        """Check if this transaction is submitted as a split."""
        return len(self.subtransactions) > 1

    def to_api_dict(self) -> dict[str, Any]:
        """Build the ``transaction`` body for POST /budgets/{id}/transactions."""
        body: dict[str, Any] = {
            "account_id": self.account_id,
            "amount": self.amount.to_milliunits(),
            "date": self.date.to_ynab_format(),
            "payee_name": self.payee_name,
            "memo": self.memo,
            "approved": self.approved,
        }
        if self.is_split:
            body["subtransactions"] = [sub.to_api_dict() for sub in self.subtransactions]
        else:
            body["category_id"] = self.category_id
        return body
