"""``enginescout verify COMMIT`` — check the full artifact matrix of one commit.

Skips the candidate scan and probes every required asset of the given
commit, then prints a summary table.  Exits non-zero and lists every
missing URL when the matrix is incomplete.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from enginescout.cli.commands._common import (
    EXIT_CANCELLED,
    EXIT_MISSING,
    build_probe,
    build_resolver,
    configure_logging,
    err_console,
    load_settings,
    path_segment,
)
from enginescout.core.aggregator import require_complete
from enginescout.core.errors import MissingAssetsError, VerificationCancelled
from enginescout.models.results import ProbeStatus, VerificationReport

console = Console()

_STATUS_STYLE = {
    ProbeStatus.PRESENT: "[green]present[/green]",
    ProbeStatus.ABSENT: "[red]absent[/red]",
    ProbeStatus.UNKNOWN: "[yellow]unreachable[/yellow]",
}


def _summary_table(report: VerificationReport) -> Table:
    """One row per platform with present/required counts per binary."""
    table = Table(title=f"Assets for {report.commit}")
    table.add_column("Platform", style="cyan")
    table.add_column("Binary")
    table.add_column("Present", justify="right")
    table.add_column("Status", justify="center")

    groups: dict[tuple[str, str], list] = {}
    for outcome in report.outcomes:
        key = (outcome.reference.platform, outcome.reference.binary)
        groups.setdefault(key, []).append(outcome)

    for (platform, binary), outcomes in groups.items():
        present = sum(1 for o in outcomes if o.exists)
        worst = ProbeStatus.PRESENT
        for o in outcomes:
            if o.status is ProbeStatus.UNKNOWN:
                worst = ProbeStatus.UNKNOWN
                break
            if o.status is ProbeStatus.ABSENT:
                worst = ProbeStatus.ABSENT
        table.add_row(platform, binary, f"{present}/{len(outcomes)}", _STATUS_STYLE[worst])
    return table


def verify_cmd(
    commit: str = typer.Argument(
        ..., callback=path_segment, help="Commit hash to verify."
    ),
    branch: str = typer.Option(
        None, "--branch", "-b", callback=path_segment,
        help="Build channel segment of the download path.",
    ),
    base_url: str = typer.Option(
        None, "--base-url", help="Root URL of the binary distribution host."
    ),
    concurrency: int = typer.Option(
        None, "--concurrency", "-c", min=1, help="Maximum probes in flight."
    ),
    timeout: float = typer.Option(
        None, "--timeout", min=0.001,
        help="Connect and read timeout per probe, in seconds.",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress the summary table."
    ),
    log_level: str = typer.Option(
        None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)."
    ),
) -> None:
    """Verify that every required asset of COMMIT is published."""
    settings = load_settings(
        branch=branch,
        base_url=base_url,
        max_in_flight=concurrency,
        connect_timeout=timeout,
        read_timeout=timeout,
        log_level=log_level,
    )
    configure_logging(settings.log_level)

    with build_probe(settings) as probe:
        resolver = build_resolver(settings, probe)
        try:
            report = resolver.verify_commit(commit)
        except VerificationCancelled as exc:
            err_console.print(f"[yellow]{exc}[/yellow]")
            raise typer.Exit(code=EXIT_CANCELLED)

    if not quiet:
        console.print(_summary_table(report))

    try:
        require_complete(report)
    except MissingAssetsError as exc:
        err_console.print(exc.render(), markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(code=EXIT_MISSING)

    console.print(
        f"[bold green]All {len(report.outcomes)} asset(s) present for {commit}.[/bold green]"
    )
