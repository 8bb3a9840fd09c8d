#!/usr/bin/env python3
"""
YNAB API Client

Thin httpx wrapper over the YNAB REST API: read one budget's reference data
and create transactions. Failures surface as LedgerProviderError and are
never retried here.
"""

import logging
from typing import Any, Protocol

import httpx

from ..core.config import YNABConfig
from .models import TransactionRequest, YnabAccount, YnabCategory, YnabCategoryGroup, YnabPayee

logger = logging.getLogger(__name__)


class LedgerProviderError(RuntimeError):
    """Raised when the ledger provider cannot be reached or rejects a request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class LedgerProvider(Protocol):
    """Anything that can record a new transaction in the ledger."""

    def create_transaction(self, request: TransactionRequest) -> Any: ...


class RecordingLedger:
    """In-memory provider that keeps submitted requests instead of sending them."""

    def __init__(self) -> None:
        self.requests: list[TransactionRequest] = []

    def create_transaction(self, request: TransactionRequest) -> dict[str, Any]:
        self.requests.append(request)
        return request.to_api_dict()


class YnabClient:
    """
    Client for a single YNAB budget.

    Budget detail is fetched once per call to get_budget(); callers that need
    accounts, categories and payees together should use get_budget() and build
    their lookups from it.
    """

    def __init__(
        self,
        api_token: str,
        budget_id: str,
        base_url: str = "https://api.ynab.com/v1",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize YNAB client.

        Args:
            api_token: YNAB personal access token
            budget_id: Budget to read from and write to
            base_url: API root
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.budget_id = budget_id
        self._http = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={"Authorization": f"Bearer {api_token}"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: YNABConfig) -> "YnabClient":
        """
        Build a client from YNAB configuration.

        Raises:
            LedgerProviderError: If the API token or budget id is missing
        """
        if not config.api_token or not config.budget_id:
            raise LedgerProviderError("YNAB_API_KEY and YNAB_BUDGET_ID must be set to talk to YNAB")
        return cls(
            api_token=config.api_token,
            budget_id=config.budget_id,
            base_url=config.base_url,
            timeout=config.timeout,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "YnabClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error("Failed to connect to YNAB: %s", e)
            raise LedgerProviderError(f"Failed to connect to YNAB: {e}") from e

        if response.is_error:
            detail = _error_detail(response)
            logger.error("YNAB API error: %s - %s", response.status_code, detail)
            raise LedgerProviderError(
                f"YNAB API error {response.status_code}: {detail}", status_code=response.status_code
            )

        try:
            body = response.json()
        except ValueError as e:
            logger.error("YNAB returned a non-JSON response: %s", response.status_code)
            raise LedgerProviderError(
                f"YNAB returned a non-JSON response ({response.status_code})", status_code=response.status_code
            ) from e
        if not isinstance(body, dict):
            raise LedgerProviderError(
                f"Unexpected YNAB response ({response.status_code})", status_code=response.status_code
            )

        data: dict[str, Any] = body.get("data") or {}
        return data

    def get_budget(self) -> dict[str, Any]:
        """Fetch the full budget document (accounts, categories, category groups, payees)."""
        budget: dict[str, Any] | None = self._request("GET", f"/budgets/{self.budget_id}").get("budget")
        if budget is None:
            raise LedgerProviderError(f"YNAB response for budget {self.budget_id} has no budget")
        return budget

    def list_accounts(self) -> list[YnabAccount]:
        data = self._request("GET", f"/budgets/{self.budget_id}/accounts")
        return [YnabAccount.from_dict(a) for a in data.get("accounts", [])]

    def list_category_groups(self) -> list[YnabCategoryGroup]:
        data = self._request("GET", f"/budgets/{self.budget_id}/categories")
        return [YnabCategoryGroup.from_dict(g) for g in data.get("category_groups", [])]

    def list_categories(self) -> list[YnabCategory]:
        """List categories, flattened out of their groups."""
        data = self._request("GET", f"/budgets/{self.budget_id}/categories")
        categories: list[YnabCategory] = []
        for group in data.get("category_groups", []):
            categories.extend(
                YnabCategory.from_dict(c, category_group_name=group.get("name"))
                for c in group.get("categories", [])
            )
        return categories

    def list_payees(self) -> list[YnabPayee]:
        data = self._request("GET", f"/budgets/{self.budget_id}/payees")
        return [YnabPayee.from_dict(p) for p in data.get("payees", [])]

    def create_transaction(self, request: TransactionRequest) -> dict[str, Any]:
        """
        Create one transaction (plain or split).

        Returns:
            The created transaction as returned by YNAB

        Raises:
            LedgerProviderError: On transport failure or an error response
        """
        logger.info(
            "Creating YNAB transaction for %s (%s, %d subtransactions)",
            request.payee_name,
            request.amount,
            len(request.subtransactions) if request.is_split else 0,
        )
        data = self._request(
            "POST",
            f"/budgets/{self.budget_id}/transactions",
            json={"transaction": request.to_api_dict()},
        )
        transaction: dict[str, Any] = data.get("transaction", {})
        return transaction


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    error = body.get("error") if isinstance(body, dict) else None
    if not isinstance(error, dict):
        return response.text
    return error.get("detail") or error.get("name") or response.text
