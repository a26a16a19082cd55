"""Account configuration commands for the cloudant-auth CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from cloudant_auth._http import mask_secret
from cloudant_auth.auth.credentials import get_config_path, resolve_account_config, save_account_config

from . import ConfigOption

app = typer.Typer(help="Manage the stored Cloudant account config")
console = Console()


@app.command()
def show(config_path: Optional[Path] = ConfigOption) -> None:
    """Show the resolved account config with secrets masked."""
    config = resolve_account_config(config_path)

    table = Table(title=str(config_path or get_config_path()))
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("host", config.host or "[yellow]not set[/yellow]")
    table.add_row("username", config.username or "[yellow]not set[/yellow]")
    table.add_row("password", mask_secret(config.password) or "[yellow]not set[/yellow]")
    table.add_row("apikey", mask_secret(config.api_key) or "[yellow]not set[/yellow]")
    console.print(table)


@app.command()
def save(
    config_path: Optional[Path] = ConfigOption,
    host: Optional[str] = typer.Option(None, help="Cloudant hostname."),
    username: Optional[str] = typer.Option(None, help="Cloudant username."),
    password: Optional[str] = typer.Option(None, help="Cloudant password."),
    api_key: Optional[str] = typer.Option(None, "--apikey", help="IBM Cloud API key."),
) -> None:
    """Resolve the account config and persist it to the config file."""
    config = resolve_account_config(
        config_path, host=host, username=username, password=password, api_key=api_key
    )
    written = save_account_config(config, config_path)
    console.print(f"[green]Saved Cloudant config to {written}[/green]")
