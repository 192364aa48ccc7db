"""Command-line interface for CEAI survey scoring."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.table import Table

from ceai import __version__
from ceai.config import load_settings
from ceai.errors import CeaiError, DataQualityError
from ceai.instrument import Dimension

if TYPE_CHECKING:
    from ceai.scoring.models import AnalysisResult

app = typer.Typer(
    name="ceai",
    help="Score Corporate Entrepreneurship Assessment Instrument surveys.",
    no_args_is_help=True,
)
console = Console(width=min(100, Console().width))

_REPORT_FILENAME = "ceai-report.md"


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"ceai {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version", "-V",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Score Corporate Entrepreneurship Assessment Instrument surveys."""


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def _fmt(value: float | None, places: int = 2) -> str:
    return "n/a" if value is None else f"{value:.{places}f}"


def _print_statistics(result: AnalysisResult) -> None:
    stats = result.statistics
    table = Table(title=f"Dimension scores ({result.respondent_count} respondents)")
    table.add_column("Dimension")
    table.add_column("Mean", justify="right")
    table.add_column("Median", justify="right")
    table.add_column("SD", justify="right")
    table.add_column("")
    for dim in Dimension:
        summary = stats.summaries[dim]
        flag = ""
        if dim in stats.strong_dimensions:
            flag = "[green]strong[/green]"
        elif dim in stats.weak_dimensions:
            flag = "[red]weak[/red]"
        table.add_row(
            dim.label, _fmt(summary.mean), _fmt(summary.median), _fmt(summary.std_dev), flag
        )
    console.print(table)


def _print_reliability(result: AnalysisResult) -> None:
    from ceai.scoring.reliability import interpret_alpha

    table = Table(title="Reliability (Cronbach's alpha)")
    table.add_column("Dimension")
    table.add_column("Items", justify="right")
    table.add_column("Alpha", justify="right")
    table.add_column("Interpretation")
    for dim, rel in result.reliability.items():
        table.add_row(
            dim.label, str(rel.item_count), _fmt(rel.alpha, 3), interpret_alpha(rel.alpha)
        )
    console.print(table)


def _print_departments(result: AnalysisResult) -> None:
    if not result.department_breakdown:
        return
    table = Table(title="Departments")
    table.add_column("Department")
    table.add_column("n", justify="right")
    for dim in Dimension:
        table.add_column(dim.label, justify="right")
    for name, group in result.department_breakdown.items():
        table.add_row(
            name, str(group.respondents), *(_fmt(group.means[d]) for d in Dimension)
        )
    console.print(table)


def _print_diagnostics(result: AnalysisResult) -> None:
    for diag in result.diagnostics:
        console.print(f"[yellow]![/yellow] {diag.message}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def analyze(
    survey_file: Annotated[
        Path,
        typer.Argument(
            help="Survey export: .csv, .tsv, .txt or .xlsx with a header row.",
            exists=True,
            file_okay=True,
            dir_okay=False,
        ),
    ],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the full analysis as JSON."),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail when a question has no valid answers."),
    ] = False,
    report: Annotated[
        bool,
        typer.Option("--report", "-r", help="Write a narrative report to the output directory."),
    ] = False,
    llm_provider: Annotated[
        str | None,
        typer.Option("--llm", "-l", help="LLM provider for --report: gemini, claude, chatgpt, local."),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output directory for the report and log file."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Score a survey export and print dimension statistics and reliability."""
    from ceai.ingest import read_survey
    from ceai.logging import setup_logging
    from ceai.models import AnalysisReport
    from ceai.providers import resolve_provider
    from ceai.scoring import analyze_responses

    if llm_provider is not None:
        try:
            llm_provider = resolve_provider(llm_provider)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--llm") from exc

    settings = load_settings(output_dir=output_dir, llm_provider=llm_provider)
    setup_logging(output_dir=settings.output_dir, verbose=verbose)

    try:
        table = read_survey(survey_file)
        result = analyze_responses(table.rows, table.departments, strict=strict)
    except DataQualityError as exc:
        console.print(f"[red]Data quality error:[/red] {exc}")
        raise typer.Exit(1)
    except CeaiError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(AnalysisReport.from_result(result).model_dump_json(indent=2))
    else:
        _print_statistics(result)
        _print_reliability(result)
        _print_departments(result)
        _print_diagnostics(result)

    if report:
        from ceai.report import generate_report

        narrative = asyncio.run(generate_report(table, result, settings))
        settings.output_dir.mkdir(parents=True, exist_ok=True)
        path = settings.output_dir / _REPORT_FILENAME
        path.write_text(narrative.text, encoding="utf-8")
        if narrative.note:
            console.print(f"[yellow]{narrative.note}[/yellow]")
        console.print(f"Report written to [bold]{path}[/bold]")


# British English alias for analyze
analyse = app.command(name="analyse", hidden=True)(analyze)


@app.command()
def serve(
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="Port to serve on."),
    ] = 8160,
    dev: Annotated[
        bool,
        typer.Option("--dev", help="Development mode: auto-reload on Python changes."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Launch the HTTP API (POST /api/analyze, POST /api/report)."""
    import uvicorn

    console.print(f"\n  API docs: [bold cyan]http://127.0.0.1:{port}/api/docs[/bold cyan]\n")

    if dev:
        import os

        if verbose:
            os.environ["_CEAI_VERBOSE"] = "1"
        uvicorn.run(
            "ceai.server.app:create_app",
            host="127.0.0.1",
            port=port,
            reload=True,
            factory=True,
            log_level="info" if verbose else "warning",
        )
    else:
        from ceai.server.app import create_app

        uvicorn.run(
            create_app(verbose=verbose),
            host="127.0.0.1",
            port=port,
            log_level="info" if verbose else "warning",
        )
