"""Main entry point for the cloudant-auth CLI."""

from __future__ import annotations

import logging

try:
    import typer
except ImportError:
    import sys

    print("cloudant-auth CLI requires extras: pip install cloudant-auth[cli]")
    sys.exit(1)

from .commands import auth, config

app = typer.Typer(
    name="cloudant-auth",
    help="cloudant-auth CLI - Derive and inspect Cloudant credentials",
    no_args_is_help=True,
)

app.add_typer(auth.app, name="auth")
app.add_typer(config.app, name="config")


def _version_callback(value: bool) -> None:
    """Handle --version and exit early."""
    if value:
        from cloudant_auth import __version__

        typer.echo(f"cloudant-auth {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the CLI version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP progress to stderr."),
) -> None:
    """cloudant-auth CLI root callback."""
    _ = version
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@app.command()
def version() -> None:
    """Show the CLI version."""
    from cloudant_auth import __version__

    typer.echo(f"cloudant-auth {__version__}")


if __name__ == "__main__":
    app()
