"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio

import httpx
import structlog
import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from auto_apply_agents.observability import configure_logging
from auto_apply_api.app import create_app
from auto_apply_cli.client import AutoApplyClient
from auto_apply_core.config.settings import Settings
from auto_apply_core.models.job import MatchStatus
from auto_apply_core.models.run import RunSnapshot, RunStatus

app = typer.Typer(
    name="auto-apply",
    help="Prototype auto-apply job pipeline",
)
console = Console()
logger = structlog.get_logger()

_STATUS_STYLES: dict[MatchStatus, str] = {
    MatchStatus.APPLIED: "green",
    MatchStatus.SKIPPED: "yellow",
    MatchStatus.FAILED: "red",
    MatchStatus.PENDING: "dim",
}


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Interface to bind"),
    port: int | None = typer.Option(None, "--port", help="Port to listen on"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Run the auto-apply HTTP server."""
    settings = Settings()
    if host is not None:
        settings.host = host
    if port is not None:
        settings.port = port
    if verbose:
        settings.log_level = "DEBUG"

    configure_logging(settings)
    console.print(f"[bold green]Auto-apply backend on[/bold green] {settings.host}:{settings.port}")
    if settings.llm_enabled:
        console.print(f"[dim]Scorer: LLM ({settings.scorer_model})[/dim]")
    else:
        console.print("[dim]Scorer: heuristic[/dim]")

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


@app.command()
def apply(
    server: str | None = typer.Option(None, "--server", help="Server base URL"),
    threshold: float | None = typer.Option(
        None, "--threshold", min=0.0, max=1.0, help="Minimum match score to apply"
    ),
    interval: float | None = typer.Option(None, "--interval", help="Seconds between polls"),
    max_wait: float = typer.Option(60.0, "--max-wait", help="Give up after this many seconds"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Start an auto-apply run and poll it until it finishes."""
    settings = Settings()
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)

    base_url = server or settings.server_url
    poll_interval = interval if interval is not None else settings.poll_interval_seconds

    try:
        result = asyncio.run(
            _run_client(base_url, threshold, poll_interval, max_wait),
        )
    except TimeoutError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    except httpx.HTTPError as exc:
        console.print(f"[red]Error:[/red] request to {base_url} failed: {exc}")
        raise typer.Exit(code=1) from exc

    if result.status == RunStatus.FAILED:
        console.print(f"\n[red]Run failed:[/red] {result.error or 'unknown error'}")
        raise typer.Exit(code=1)

    applied = sum(1 for j in result.jobs if j.status == MatchStatus.APPLIED)
    console.print(f"\n[bold]Run complete:[/bold] {applied}/{len(result.jobs)} applied")


@app.command()
def version() -> None:
    """Show version."""
    console.print("auto-apply-agent v0.1.0")


async def _run_client(
    base_url: str,
    threshold: float | None,
    interval: float,
    max_wait: float,
) -> RunSnapshot:
    """Start a run and poll it, rendering each new snapshot."""
    last: list[RunSnapshot] = []

    def _on_update(snapshot: RunSnapshot) -> None:
        if last and last[-1] == snapshot:
            return
        last.append(snapshot)
        console.print(render_snapshot(snapshot))

    async with AutoApplyClient(base_url) as client:
        run_id = await client.start(threshold)
        console.print(f"[bold green]Started run:[/bold green] {run_id}")
        return await client.poll(run_id, interval=interval, on_update=_on_update, max_wait=max_wait)


def render_snapshot(snapshot: RunSnapshot) -> Table:
    """Render a run snapshot as a rich table."""
    table = Table(
        title=f"Status: {snapshot.status.value} (threshold {snapshot.threshold:.2f})",
        title_justify="left",
    )
    table.add_column("Job")
    table.add_column("Company")
    table.add_column("Score", justify="right")
    table.add_column("Status")
    table.add_column("Reason", overflow="fold")
    for job in snapshot.jobs:
        style = _STATUS_STYLES.get(job.status, "")
        table.add_row(
            job.title,
            job.company,
            f"{job.match_score:.2f}",
            f"[{style}]{job.status.value}[/{style}]" if style else job.status.value,
            job.reason,
        )
    return table


if __name__ == "__main__":
    app()
