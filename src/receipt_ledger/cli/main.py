#!/usr/bin/env python3
"""
Main CLI Entry Point for Receipt Ledger

Provides the `receipts` command-line interface.
"""

import logging
import os

import click

from ..core.config import get_config
from .reconcile import info, reconcile


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override RECEIPTS_ENV for this run",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Receipt Ledger - record parsed receipts in YNAB.

    Reconciles a parsed receipt into a single-category or split YNAB
    transaction, distributing tax across the split categories.
    """
    ctx.ensure_object(dict)

    # Both must be in place before the configuration is first loaded
    if config_env:
        os.environ["RECEIPTS_ENV"] = config_env
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    try:
        config_obj = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if debug:
        logging.getLogger("receipt_ledger").setLevel(logging.DEBUG)

    ctx.obj.update(verbose=verbose, debug=debug, config=config_obj)

    if verbose:
        click.echo(f"Environment: {config_obj.environment.value}")
    if debug:
        click.echo("Debug logging enabled")


@main.command()
def version() -> None:
    """Show version information."""
    from receipt_ledger import __version__

    click.echo(f"Receipt Ledger v{__version__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration (secrets redacted)."""
    settings = ctx.obj["config"].to_dict()
    ynab = settings["ynab"]
    storage = settings["storage"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {settings['environment']}")
    click.echo(f"  YNAB Budget: {ynab['budget_id'] or '(not set)'}")
    click.echo(f"  YNAB API Key: {ynab['api_token'] or '(not set)'}")
    click.echo(f"  Category Groups: {', '.join(ynab['category_groups']) or '(all)'}")
    click.echo(f"  Payees In Prompt: {ynab['include_payees_in_prompt']}")
    click.echo(f"  File Storage: {storage['backend']}")
    if storage["local_directory"]:
        click.echo(f"  Storage Directory: {storage['local_directory']}")
    click.echo(f"  Debug Mode: {settings['debug']}")
    click.echo(f"  Log Level: {settings['log_level']}")


main.add_command(reconcile)
main.add_command(info)


if __name__ == "__main__":
    main()
