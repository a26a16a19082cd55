"""CLI command modules."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from cloudant_auth.auth.credentials import resolve_account_config
from cloudant_auth.auth.types import AccountConfig

_console = Console()

ConfigOption = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to a Cloudant service-credentials JSON file.",
    exists=False,
    dir_okay=False,
)


def get_account_config(path: Path | None) -> AccountConfig:
    """Resolve the account config, or exit with an error message if it is empty."""
    config = resolve_account_config(path)
    if not any((config.api_key, config.host, config.username, config.password)):
        _console.print(
            "[red]No Cloudant credentials found. Set CLOUDANT_* variables or run 'cloudant-auth config save'.[/red]"
        )
        raise typer.Exit(1)
    return config
