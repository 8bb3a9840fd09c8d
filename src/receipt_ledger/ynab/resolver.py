#!/usr/bin/env python3
"""
Category and Account Resolution

Maps the human-readable names chosen by the receipt parser to YNAB ids.
Matching is exact and case-sensitive. Deleted, hidden and closed entries are
dropped when the candidate maps are built, once per request.
"""

from dataclasses import dataclass
from typing import Iterable

from .models import YnabAccount, YnabCategory


class NotFoundError(LookupError):
    """Raised when a name has no usable match in the budget."""

    kind = "Entry"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'{self.kind} "{name}" not found')


class AccountNotFoundError(NotFoundError):
    kind = "Account"


class CategoryNotFoundError(NotFoundError):
    kind = "Category"


def build_account_candidates(accounts: Iterable[YnabAccount]) -> dict[str, str]:
    """
    Build an ordered name -> id map of usable accounts.

    When two usable accounts share a name, the first one wins.
    """
    candidates: dict[str, str] = {}
    for account in accounts:
        if account.deleted or account.closed:
            continue
        candidates.setdefault(account.name, account.id)
    return candidates


def build_category_candidates(categories: Iterable[YnabCategory]) -> dict[str, str]:
    """Build an ordered name -> id map of categories that are neither deleted nor hidden."""
    candidates: dict[str, str] = {}
    for category in categories:
        if category.deleted or category.hidden:
            continue
        candidates.setdefault(category.name, category.id)
    return candidates


def resolve_account(name: str, candidates: dict[str, str]) -> str:
    """
    Resolve an account name to its id.

    Raises:
        AccountNotFoundError: If the name has no exact match
    """
    if name not in candidates:
        raise AccountNotFoundError(name)
    return candidates[name]


def resolve_category(name: str, candidates: dict[str, str]) -> str:
    """
    Resolve a category name to its id.

    Raises:
        CategoryNotFoundError: If the name has no exact match
    """
    if name not in candidates:
        raise CategoryNotFoundError(name)
    return candidates[name]


@dataclass(frozen=True)
class LedgerLookup:
    """Account and category name maps for one reconciliation request."""

    accounts: dict[str, str]
    categories: dict[str, str]

    @classmethod
    def from_entities(
        cls,
        accounts: Iterable[YnabAccount],
        categories: Iterable[YnabCategory],
    ) -> "LedgerLookup":
        return cls(
            accounts=build_account_candidates(accounts),
            categories=build_category_candidates(categories),
        )

    def account_id(self, name: str) -> str:
        return resolve_account(name, self.accounts)

    def category_id(self, name: str) -> str:
        return resolve_category(name, self.categories)
