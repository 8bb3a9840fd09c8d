#!/usr/bin/env python3
"""
Reconcile CLI - Record Parsed Receipts in YNAB

Commands for turning a parsed receipt JSON file into a YNAB transaction and
for listing the names the receipt parser may use.
"""

from datetime import datetime
from pathlib import Path
from typing import Any

import click

from ..core.config import Config, get_config
from ..core.dates import FinancialDate, InvalidDateError
from ..core.json_utils import format_json, read_json
from ..core.models import ParsedReceipt, ReceiptValidationError
from ..receipts.feedback import build_split_feedback, generate_processing_feedback
from ..ynab.client import LedgerProvider, LedgerProviderError, RecordingLedger, YnabClient
from ..ynab.composer import reconcile as reconcile_receipt
from ..ynab.loader import build_lookup, load_budget_cache, load_budget_info
from ..ynab.resolver import NotFoundError


def _config(ctx: click.Context) -> Config:
    ctx.ensure_object(dict)
    config: Config = ctx.obj.get("config") or get_config()
    return config


def _load_budget(config: Config, budget_file: str | None) -> dict[str, Any]:
    if budget_file:
        try:
            return load_budget_cache(budget_file)
        except (FileNotFoundError, ValueError) as e:
            raise click.ClickException(str(e)) from e

    try:
        with YnabClient.from_config(config.ynab) as client:
            return client.get_budget()
    except LedgerProviderError as e:
        raise click.ClickException(str(e)) from e


@click.command()
@click.option("--account", required=True, help="YNAB account the purchase was paid from")
@click.option("--receipt-file", required=True, help="Parsed receipt JSON file")
@click.option("--budget-file", help="Saved YNAB budget JSON (default: fetch from YNAB)")
@click.option("--dry-run", is_flag=True, help="Show the transaction without creating it")
@click.option("--today", help="Reference date for the date window, YYYY-MM-DD (default: today)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def reconcile(
    ctx: click.Context,
    account: str,
    receipt_file: str,
    budget_file: str | None,
    dry_run: bool,
    today: str | None,
    verbose: bool,
) -> None:
    """
    Record a parsed receipt as a YNAB transaction.

    Examples:
      receipts reconcile --account "Chase Sapphire" --receipt-file costco.json
      receipts reconcile --account "Chase Sapphire" --receipt-file costco.json --budget-file budget.json --dry-run
    """
    config = _config(ctx)
    verbose = verbose or ctx.obj.get("verbose", False)

    receipt_path = Path(receipt_file)
    if not receipt_path.exists():
        raise click.ClickException(f"Receipt file not found: {receipt_path}")

    try:
        receipt = ParsedReceipt.from_dict(read_json(receipt_path))
        reference_date = FinancialDate.from_string(today) if today else None
    except (ReceiptValidationError, InvalidDateError, ValueError) as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo("Receipt Reconciliation")
        click.echo(f"Receipt: {receipt_path}")
        click.echo(f"Account: {account}")
        click.echo(f"Mode: {'Dry run' if dry_run else 'Create transaction'}")
        click.echo()

    click.echo(f"🧾 {receipt.merchant} on {receipt.transaction_date}: ${receipt.total_amount:.2f}")
    click.echo(generate_processing_feedback(receipt))

    budget = _load_budget(config, budget_file)

    client: YnabClient | None = None
    provider: LedgerProvider
    if dry_run:
        provider = RecordingLedger()
    else:
        try:
            client = YnabClient.from_config(config.ynab)
        except LedgerProviderError as e:
            raise click.ClickException(str(e)) from e
        provider = client

    try:
        result = reconcile_receipt(account, receipt, build_lookup(budget), provider, today=reference_date)
    except (NotFoundError, InvalidDateError) as e:
        raise click.ClickException(str(e)) from e
    except LedgerProviderError as e:
        raise click.ClickException(f"Failed to create transaction: {e}") from e
    finally:
        if client is not None:
            client.close()

    if dry_run:
        click.echo("\n[DRY RUN] Transaction that would be created:")
        click.echo(format_json(result.request.to_api_dict()))
    else:
        click.echo("\n✅ Transaction created")

    split_feedback = build_split_feedback(result.split_info, receipt)
    if split_feedback:
        click.echo(split_feedback.lstrip("\n"))

    if result.date_adjustment:
        adjustment = result.date_adjustment
        click.echo(
            f"⚠️  Date adjusted from {adjustment.original_date} to {adjustment.adjusted_date}: {adjustment.reason}"
        )

    if verbose:
        click.echo(f"\nResult ({datetime.now().isoformat(timespec='seconds')}):")
        click.echo(format_json(result.to_dict()))


@click.command()
@click.option("--budget-file", help="Saved YNAB budget JSON (default: fetch from YNAB)")
@click.option("--json", "as_json", is_flag=True, help="Print as JSON")
@click.pass_context
def info(ctx: click.Context, budget_file: str | None, as_json: bool) -> None:
    """
    List the accounts, categories and payees offered to the receipt parser.

    Example:
      receipts info --budget-file budget.json
    """
    config = _config(ctx)
    budget = _load_budget(config, budget_file)

    try:
        budget_info = load_budget_info(
            budget,
            category_groups=config.ynab.category_groups,
            include_payees=config.ynab.include_payees_in_prompt,
        )
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(format_json(budget_info.to_dict()))
        return

    click.echo(f"Accounts ({len(budget_info.accounts)}):")
    for name in budget_info.accounts:
        click.echo(f"  {name}")
    click.echo(f"Categories ({len(budget_info.categories)}):")
    for name in budget_info.categories:
        click.echo(f"  {name}")
    if budget_info.payees is not None:
        click.echo(f"Payees ({len(budget_info.payees)}):")
        for name in budget_info.payees:
            click.echo(f"  {name}")
