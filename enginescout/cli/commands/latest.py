"""``enginescout latest`` — resolve the newest fully published engine commit.

Fetches candidate commits from GitHub, picks the newest one whose reference
artifact exists, then verifies every platform × binary × extension asset.
On success only the commit hash is printed to stdout, so the command can be
used directly in shell pipelines.
"""

from __future__ import annotations

import json

import typer

from enginescout.bridge.github import GitHubCommitSource
from enginescout.cli.commands._common import (
    EXIT_CANCELLED,
    EXIT_MISSING,
    EXIT_UPSTREAM,
    build_probe,
    build_resolver,
    configure_logging,
    err_console,
    load_settings,
    path_segment,
)
from enginescout.core.errors import (
    MissingAssetsError,
    NoValidCommitFound,
    UpstreamListError,
    VerificationCancelled,
)


def latest_cmd(
    branch: str = typer.Option(
        None, "--branch", "-b", callback=path_segment,
        help="Branch to list commits from and build channel.",
    ),
    repo: str = typer.Option(
        None, "--repo", help="GitHub repository slug (owner/name)."
    ),
    base_url: str = typer.Option(
        None, "--base-url", help="Root URL of the binary distribution host."
    ),
    concurrency: int = typer.Option(
        None, "--concurrency", "-c", min=1, help="Maximum probes in flight."
    ),
    timeout: float = typer.Option(
        None, "--timeout", min=0.001,
        help="Connect and read timeout per request, in seconds.",
    ),
    limit: int = typer.Option(
        None, "--limit", "-n", min=1, help="Examine at most this many candidates."
    ),
    as_json: bool = typer.Option(
        False, "--json", help="Print a JSON summary instead of the bare commit."
    ),
    log_level: str = typer.Option(
        None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ...)."
    ),
) -> None:
    """Print the newest commit whose full artifact matrix is published."""
    settings = load_settings(
        branch=branch,
        github_repo=repo,
        base_url=base_url,
        max_in_flight=concurrency,
        connect_timeout=timeout,
        read_timeout=timeout,
        log_level=log_level,
    )
    configure_logging(settings.log_level)

    source = GitHubCommitSource(
        settings.github_repo,
        branch=settings.branch,
        api_url=settings.github_api_url,
        per_page=settings.commit_page_size,
        token=settings.github_token,
        timeout=settings.read_timeout,
        http_proxy=settings.http_proxy,
        https_proxy=settings.https_proxy,
    )
    try:
        candidates = source.list_commits()
    except UpstreamListError as exc:
        err_console.print(f"[bold red]Commit list unavailable:[/bold red] {exc}")
        raise typer.Exit(code=EXIT_UPSTREAM)
    finally:
        source.close()

    with build_probe(settings) as probe:
        resolver = build_resolver(settings, probe)
        try:
            result = resolver.resolve(candidates, limit=limit)
        except NoValidCommitFound as exc:
            err_console.print(f"[bold red]{exc}[/bold red]")
            raise typer.Exit(code=EXIT_MISSING)
        except MissingAssetsError as exc:
            err_console.print(exc.render(), markup=False, highlight=False, soft_wrap=True)
            raise typer.Exit(code=EXIT_MISSING)
        except VerificationCancelled as exc:
            err_console.print(f"[yellow]{exc}[/yellow]")
            raise typer.Exit(code=EXIT_CANCELLED)

    if as_json:
        typer.echo(json.dumps(result.model_dump(), sort_keys=True))
    else:
        typer.echo(result.commit)
