"""``enginescout urls COMMIT`` — list the required asset URLs without probing."""

from __future__ import annotations

import typer

from enginescout.cli.commands._common import load_settings, path_segment


def urls_cmd(
    commit: str = typer.Argument(
        ..., callback=path_segment, help="Commit hash to list assets for."
    ),
    branch: str = typer.Option(
        None, "--branch", "-b", callback=path_segment,
        help="Build channel segment of the download path.",
    ),
    base_url: str = typer.Option(
        None, "--base-url", help="Root URL of the binary distribution host."
    ),
    reference_only: bool = typer.Option(
        False, "--reference", help="Print only the scan reference artifact."
    ),
) -> None:
    """Print one download URL per line for COMMIT."""
    settings = load_settings(branch=branch, base_url=base_url)
    matrix = settings.matrix()
    if reference_only:
        typer.echo(matrix.reference_artifact(commit).url(settings.base_url))
        return
    for reference in matrix.references(commit):
        typer.echo(reference.url(settings.base_url))
