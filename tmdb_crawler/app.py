"""Typer CLI entrypoint for tmdb-crawler."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .config import ConfigLoader, EntityKind
from .errors import CrawlerError, StartupConfigurationError
from .logging_conf import configure_logging
from .orchestrator import CrawlOrchestrator, CrawlSummary
from .splitter import split_file

CONFIG_ERROR_EXIT = 42
PIPELINE_ERROR_EXIT = 1

app = typer.Typer(
    help="Parallel TMDb crawler: partition ids, fetch, filter and aggregate.",
    no_args_is_help=True,
    rich_markup_mode=None,
)

console = Console()
err_console = Console(stderr=True)


def _progress_default_enabled() -> bool:
    return console.is_terminal


def _render_summary(summary: CrawlSummary, kind: EntityKind) -> Table:
    table = Table(title=f"{kind.value} crawl result", box=box.SIMPLE_HEAD)
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="green", justify="right")
    table.add_row("Identifiers", str(summary.identifiers))
    table.add_row("Workers", str(summary.workers))
    table.add_row("Fetched", str(summary.fetched))
    table.add_row("Accepted", str(summary.accepted))
    table.add_row("Rejected", str(summary.rejected))
    table.add_row("Failed", str(summary.failed))
    if kind is EntityKind.MOVIE:
        table.add_row("Person ids", str(summary.secondary_unique))
    if summary.late_messages:
        table.add_row("Late messages", str(summary.late_messages))
    table.add_row("Seconds", f"{summary.elapsed:.1f}")
    return table


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    ctx.obj = {"verbose": verbose}


@app.command("crawl", help="Fetch every id in INPUT and write accepted records to OUTPUT.")
def crawl(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="File with one {\"id\": N} object per line."),
    output_path: Path = typer.Argument(..., help="Destination for accepted records."),
    secondary_output: Optional[Path] = typer.Option(
        None, "--people-output", "-p", help="Destination for discovered person ids (movie crawls)."
    ),
    kind: Optional[EntityKind] = typer.Option(None, "--kind", "-k", help="Entity kind to fetch."),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Number of parallel workers."),
    api_key: Optional[str] = typer.Option(
        None, "--api-key", help="TMDb API key (defaults to $TMDB_API_KEY).", show_default=False
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML or JSON file with run settings."
    ),
    output_format: Optional[str] = typer.Option(None, "--format", help="jsonl or sqlite."),
    quiet: bool = typer.Option(False, "--quiet", help="Print a one-line result only."),
) -> None:
    verbose = bool((ctx.obj or {}).get("verbose"))
    configure_logging(verbose=verbose)
    overrides = {
        "input_path": input_path,
        "output_path": output_path,
        "secondary_output_path": secondary_output,
        "kind": kind,
        "workers": workers,
        "output_format": output_format,
        "api": {"api_key": api_key},
        "progress": _progress_default_enabled() and not quiet,
    }
    try:
        config = ConfigLoader().load(config_file, **overrides)
        summary = CrawlOrchestrator(config).run()
    except StartupConfigurationError as exc:
        err_console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=CONFIG_ERROR_EXIT) from exc
    except CrawlerError as exc:
        err_console.print(f"[red]Crawl aborted:[/red] {exc}")
        raise typer.Exit(code=PIPELINE_ERROR_EXIT) from exc

    if quiet:
        console.print(
            f"Done: accepted {summary.accepted}, rejected {summary.rejected}, "
            f"failed {summary.failed} in {summary.elapsed:.1f}s"
        )
        return
    console.print(_render_summary(summary, config.kind))


@app.command("split", help="Write this machine's shard of a line-oriented file.")
def split(
    input_path: Path = typer.Argument(..., help="File to split."),
    output_path: Path = typer.Argument(..., help="Shard destination."),
    machines: int = typer.Argument(..., help="Total number of machines."),
    machine_id: int = typer.Argument(..., help="Zero-based index of this machine."),
) -> None:
    if machines < 1 or not 0 <= machine_id < machines:
        err_console.print(
            f"[red]Configuration error:[/red] machine_id must be in [0, machines), got {machine_id}/{machines}"
        )
        raise typer.Exit(code=CONFIG_ERROR_EXIT)
    if not input_path.exists():
        err_console.print(f"[red]Configuration error:[/red] input file not found: {input_path}")
        raise typer.Exit(code=CONFIG_ERROR_EXIT)
    written = split_file(input_path, output_path, machines, machine_id)
    console.print(f"Wrote {written} lines to {output_path}")


def cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    cli()
