#!/usr/bin/env python3
"""
Integration tests for the reconcile and info commands.

Budgets are read from saved JSON files; live submissions go to a stand-in
client so nothing leaves the process.
"""

import json

import pytest
from click.testing import CliRunner

from receipt_ledger.cli import reconcile as reconcile_cli
from receipt_ledger.cli.main import main
from receipt_ledger.core.json_utils import write_json
from receipt_ledger.ynab.client import LedgerProviderError


class StandInClient:
    """Replaces YnabClient in the CLI module for live-mode runs."""

    budget = None
    submitted = []
    fail_with = None

    @classmethod
    def from_config(cls, config):
        return cls()

    def get_budget(self):
        return StandInClient.budget

    def create_transaction(self, request):
        if StandInClient.fail_with:
            raise StandInClient.fail_with
        StandInClient.submitted.append(request)
        return {"id": "txn-1"}

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


@pytest.fixture
def receipt_file(temp_dir, sample_receipt_data):
    path = temp_dir / "costco.json"
    write_json(path, sample_receipt_data)
    return path


@pytest.fixture
def budget_file(temp_dir, sample_budget):
    path = temp_dir / "budget.json"
    write_json(path, {"data": {"budget": sample_budget}})
    return path


@pytest.fixture
def stand_in_client(monkeypatch, sample_budget):
    monkeypatch.setattr(StandInClient, "budget", sample_budget)
    monkeypatch.setattr(StandInClient, "submitted", [])
    monkeypatch.setattr(StandInClient, "fail_with", None)
    monkeypatch.setattr(reconcile_cli, "YnabClient", StandInClient)
    return StandInClient


@pytest.mark.integration
class TestReconcileCommand:
    """receipts reconcile"""

    def setup_method(self):
        self.runner = CliRunner()

    def test_dry_run_prints_split_transaction(self, receipt_file, budget_file):
        result = self.runner.invoke(
            main,
            [
                "reconcile",
                "--account",
                "Visa",
                "--receipt-file",
                str(receipt_file),
                "--budget-file",
                str(budget_file),
                "--today",
                "2025-06-01",
                "--dry-run",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "🧾 Costco on 2025-05-20: $167.28" in result.output
        assert "Split Transaction: 4 items totaling $157.82" in result.output
        assert "[DRY RUN] Transaction that would be created:" in result.output
        assert "Tax distributed: $9.46" in result.output

        body, _ = json.JSONDecoder().raw_decode(result.output.split("created:\n", 1)[1])
        assert body["account_id"] == "acct-visa"
        assert body["amount"] == -167280
        assert [s["amount"] for s in body["subtransactions"]] == [-110053, -33907, -23320]

    def test_date_adjustment_reported(self, temp_dir, sample_receipt_data, budget_file):
        sample_receipt_data["transactionDate"] = "2019-01-01"
        path = temp_dir / "old.json"
        write_json(path, sample_receipt_data)

        result = self.runner.invoke(
            main,
            [
                "reconcile",
                "--account",
                "Visa",
                "--receipt-file",
                str(path),
                "--budget-file",
                str(budget_file),
                "--today",
                "2025-06-01",
                "--dry-run",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Date adjusted from 2019-01-01 to 2020-06-01: Date was more than 5 years ago" in result.output

    def test_unknown_account(self, receipt_file, budget_file):
        result = self.runner.invoke(
            main,
            [
                "reconcile",
                "--account",
                "Savings",
                "--receipt-file",
                str(receipt_file),
                "--budget-file",
                str(budget_file),
                "--dry-run",
            ],
        )

        assert result.exit_code != 0
        assert 'Account "Savings" not found' in result.output

    def test_missing_receipt_file(self, temp_dir, budget_file):
        result = self.runner.invoke(
            main,
            ["reconcile", "--account", "Visa", "--receipt-file", str(temp_dir / "nope.json"), "--dry-run"],
        )

        assert result.exit_code != 0
        assert "Receipt file not found" in result.output

    def test_invalid_receipt(self, temp_dir, budget_file):
        path = temp_dir / "bad.json"
        write_json(path, {"merchant": "Costco"})

        result = self.runner.invoke(
            main, ["reconcile", "--account", "Visa", "--receipt-file", str(path), "--dry-run"]
        )

        assert result.exit_code != 0
        assert "missing required fields" in result.output

    def test_malformed_line_items(self, temp_dir, sample_receipt_data, budget_file):
        sample_receipt_data["lineItems"] = ["x"]
        path = temp_dir / "bad-items.json"
        write_json(path, sample_receipt_data)

        result = self.runner.invoke(
            main,
            ["reconcile", "--account", "Visa", "--receipt-file", str(path), "--budget-file", str(budget_file)],
        )

        assert result.exit_code == 1
        assert "Line item must be an object" in result.output
        assert not isinstance(result.exception, AttributeError)

    def test_live_run_submits_once(self, receipt_file, stand_in_client):
        result = self.runner.invoke(
            main,
            ["reconcile", "--account", "Visa", "--receipt-file", str(receipt_file), "--today", "2025-06-01"],
        )

        assert result.exit_code == 0, result.output
        assert "✅ Transaction created" in result.output
        assert len(stand_in_client.submitted) == 1
        assert stand_in_client.submitted[0].is_split

    def test_live_run_provider_error(self, receipt_file, stand_in_client):
        stand_in_client.fail_with = LedgerProviderError("YNAB API error 429: Too many requests", status_code=429)

        result = self.runner.invoke(
            main,
            ["reconcile", "--account", "Visa", "--receipt-file", str(receipt_file), "--today", "2025-06-01"],
        )

        assert result.exit_code != 0
        assert "Failed to create transaction: YNAB API error 429" in result.output


@pytest.mark.integration
class TestInfoCommand:
    """receipts info"""

    def setup_method(self):
        self.runner = CliRunner()

    def test_lists_names(self, budget_file):
        result = self.runner.invoke(main, ["info", "--budget-file", str(budget_file)])

        assert result.exit_code == 0, result.output
        assert "Accounts (2):" in result.output
        assert "Categories (4):" in result.output
        assert "Hidden Stuff" not in result.output
        assert "Payees" not in result.output

    def test_json_with_payees_and_group_filter(self, monkeypatch, budget_file):
        monkeypatch.setenv("YNAB_CATEGORY_GROUPS", "Home")
        monkeypatch.setenv("YNAB_INCLUDE_PAYEES_IN_PROMPT", "true")

        result = self.runner.invoke(main, ["info", "--budget-file", str(budget_file), "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "categories": ["Household", "Pets"],
            "payees": ["Costco", "Target"],
            "accounts": ["Checking", "Visa"],
        }

    def test_fetches_budget_without_file(self, stand_in_client):
        result = self.runner.invoke(main, ["info"])

        assert result.exit_code == 0, result.output
        assert "Checking" in result.output

    def test_bad_budget_file(self, temp_dir):
        path = temp_dir / "budget.json"
        write_json(path, {"nothing": "here"})

        result = self.runner.invoke(main, ["info", "--budget-file", str(path)])

        assert result.exit_code != 0
        assert "Not a YNAB budget document" in result.output
