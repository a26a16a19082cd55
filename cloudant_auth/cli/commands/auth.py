"""Credential commands for the cloudant-auth CLI."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cloudant_auth._http import mask_secret
from cloudant_auth.config import build_base_url
from cloudant_auth.exceptions import CloudantAuthError
from cloudant_auth.resolver import CredentialResolver

from . import ConfigOption, get_account_config

app = typer.Typer(help="Derive Cloudant credentials")
console = Console()


def _show(value: str, show_secrets: bool) -> str:
    if not value:
        return "[red]unavailable[/red]"
    return value if show_secrets else mask_secret(value)


@app.command()
def resolve(
    config_path: Optional[Path] = ConfigOption,
    show_secrets: bool = typer.Option(False, "--show-secrets", help="Print credentials unmasked."),
) -> None:
    """Derive every credential the account config allows."""
    config = get_account_config(config_path)

    with CredentialResolver() as resolver:
        creds = resolver.resolve_all(config)

    table = Table(title="Cloudant credentials")
    table.add_column("Method", style="cyan")
    table.add_column("Value")
    table.add_row("Base URL", creds.base_url or "[red]unavailable[/red]")
    table.add_row("Basic auth", _show(creds.basic_auth_header, show_secrets))
    table.add_row("Session cookie", _show(creds.session_cookie, show_secrets))
    table.add_row("Bearer token", _show(creds.bearer_token, show_secrets))
    console.print(table)

    if creds.is_empty:
        raise typer.Exit(1)


@app.command()
def token(config_path: Optional[Path] = ConfigOption) -> None:
    """Exchange the API key for an IAM bearer token and print it."""
    config = get_account_config(config_path)

    try:
        with CredentialResolver() as resolver:
            bearer = resolver.request_bearer_token(config.api_key)
    except CloudantAuthError as e:
        console.print(f"[red]Could not obtain IAM token: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    expires = datetime.fromtimestamp(bearer.expires_at, tz=timezone.utc).isoformat()
    typer.echo(bearer.access_token)
    typer.echo(f"Expires at {expires}", err=True)


@app.command()
def cookie(config_path: Optional[Path] = ConfigOption) -> None:
    """Open a session with username/password and print the AuthSession cookie."""
    config = get_account_config(config_path)

    try:
        with CredentialResolver() as resolver:
            value = resolver.request_session_cookie(build_base_url(config.host), config.username, config.password)
    except CloudantAuthError as e:
        console.print(f"[red]Could not open session: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    typer.echo(value)


@app.command()
def session(config_path: Optional[Path] = ConfigOption) -> None:
    """Open a session and print the /_session document."""
    config = get_account_config(config_path)
    base_url = build_base_url(config.host)

    try:
        with CredentialResolver() as resolver:
            value = resolver.request_session_cookie(base_url, config.username, config.password)
            info = resolver.get_session_info(base_url, value)
    except CloudantAuthError as e:
        console.print(f"[red]Could not read session: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    typer.echo(json.dumps(info, indent=2))
