"""Main Typer application — imports and registers all CLI commands.

Entry point: ``enginescout`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import typer

from enginescout.cli.commands.latest import latest_cmd
from enginescout.cli.commands.urls import urls_cmd
from enginescout.cli.commands.verify import verify_cmd

app = typer.Typer(
    name="enginescout",
    help="enginescout: find the newest engine commit with a fully published artifact matrix.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(name="latest", help="Resolve the newest fully published commit.")(latest_cmd)
app.command(name="verify", help="Verify every required asset of one commit.")(verify_cmd)
app.command(name="urls", help="List required asset URLs without probing.")(urls_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
