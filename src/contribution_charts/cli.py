"""CLI interface for Contribution Charts."""

import logging
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from contribution_charts import __version__
from contribution_charts.config import Config, get_config
from contribution_charts.exceptions import (
    ContributionChartsError,
    ProjectNotFoundError,
    ReportParseError,
)
from contribution_charts.models.commit import CommitRecord
from contribution_charts.models.contribution import ContributionResult, Granularity
from contribution_charts.output.console import Console as OutputConsole
from contribution_charts.output.json_writer import read_json, write_json_report
from contribution_charts.services.engine import ContributionEngine
from contribution_charts.services.project_charts import project_owner_charts
from contribution_charts.services.report_builder import build_contribution_result

app = typer.Typer(
    name="contribution-charts",
    help="Aggregate per-project commit counts into per-owner chart series",
    add_completion=False,
)

console = Console()


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"contribution-charts version {__version__}")
        raise typer.Exit()


def _configure_logging(config: Config, verbose: bool) -> None:
    level = logging.DEBUG if verbose else config.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_settings(verbose: bool) -> Config:
    """Load configuration and set up logging from it."""
    config = get_config()
    _configure_logging(config, verbose)
    return config


def _parse_day(value: Optional[str], output_console: OutputConsole) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        output_console.print_error(f"Invalid date format: {value}. Use YYYY-MM-DD")
        raise typer.Exit(1)


def _load_result(path: Path) -> ContributionResult:
    return ContributionResult.from_api(read_json(path))


def _fail(error: ContributionChartsError, output_console: OutputConsole) -> None:
    message = str(error)
    path = getattr(error, "path", None)
    if isinstance(error, ReportParseError) and path and path not in message:
        message = f"{message} ({path})"
    output_console.print_error(message)
    raise typer.Exit(1)


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """Contribution Charts - per-owner commit time series for line charts."""
    pass


@app.command()
def combine(
    input_path: Path = typer.Argument(..., help="Contribution result JSON file"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output JSON file path",
    ),
    dense: Optional[bool] = typer.Option(
        None,
        "--dense/--observed",
        help="Generate every month/year in range (default from CONTRIB_DENSE_CALENDAR)",
    ),
    summary_only: bool = typer.Option(
        False,
        "--summary-only",
        help="Print summary only, don't save JSON",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Minimal output"),
):
    """Combine every project's contributions into one chart per owner.

    Examples:
        contribution-charts combine stats.json
        contribution-charts combine stats.json -o charts.json --dense
    """
    output_console = OutputConsole(verbose=verbose, quiet=quiet)

    try:
        config = _load_settings(verbose)
        result = _load_result(input_path)
        engine = ContributionEngine.from_config(config)
        if dense is not None:
            engine.dense_calendar = dense
        series = engine.build(result)
    except ContributionChartsError as e:
        _fail(e, output_console)

    output_console.print_header("Combined Contributions", str(input_path))
    output_console.print_result_summary(result)
    output_console.print_owner_series(series)

    if not summary_only:
        output_file = write_json_report(series, output, name=input_path.stem)
        output_console.print_output_path(str(output_file))

    output_console.print_success(f"Charted {len(series)} owners")


@app.command()
def project(
    input_path: Path = typer.Argument(..., help="Contribution result JSON file"),
    project_id: str = typer.Argument(..., help="Project to chart"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output JSON file path",
    ),
    summary_only: bool = typer.Option(
        False,
        "--summary-only",
        help="Print summary only, don't save JSON",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Minimal output"),
):
    """Chart each owner of one project separately."""
    output_console = OutputConsole(verbose=verbose, quiet=quiet)

    try:
        config = _load_settings(verbose)
        response = _load_result(input_path).get(project_id)
        if response is None:
            raise ProjectNotFoundError(project_id)
    except ContributionChartsError as e:
        _fail(e, output_console)

    charts = project_owner_charts(response, tick_interval=config.daily_tick_interval)

    output_console.print_header(response.project_name or f"Project {project_id}", str(input_path))
    output_console.print_owner_series(charts, title="Owners")

    if not summary_only:
        output_file = write_json_report(charts, output, name=f"project_{project_id}")
        output_console.print_output_path(str(output_file))

    output_console.print_success(f"Charted {len(charts)} owners")


@app.command()
def report(
    commits_path: Path = typer.Argument(..., help="Commit records JSON file (a list)"),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output JSON file path",
    ),
    breakdown: str = typer.Option(
        "daily",
        "--breakdown",
        "-b",
        help="Bucket size: daily, monthly or yearly",
    ),
    owner: Optional[int] = typer.Option(None, "--owner", help="Only count this owner"),
    project_id: Optional[int] = typer.Option(None, "--project", help="Only count this project"),
    since: Optional[str] = typer.Option(None, "--since", help="Start date (YYYY-MM-DD)"),
    until: Optional[str] = typer.Option(None, "--until", help="End date (YYYY-MM-DD)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Minimal output"),
):
    """Count commit records into a contribution result.

    Examples:
        contribution-charts report commits.json --breakdown monthly
        contribution-charts report commits.json --since 2023-01-01 --project 3
    """
    output_console = OutputConsole(verbose=verbose, quiet=quiet)
    start = _parse_day(since, output_console)
    end = _parse_day(until, output_console)

    try:
        _load_settings(verbose)
        raw = read_json(commits_path)
        if not isinstance(raw, list):
            raise ReportParseError("Commit records must be a JSON list", path=str(commits_path))
        try:
            commits = [CommitRecord.from_api(item) for item in raw]
        except (AttributeError, TypeError, ValueError) as e:
            raise ReportParseError(f"Malformed commit record: {e}", path=str(commits_path)) from e
    except ContributionChartsError as e:
        _fail(e, output_console)

    result = build_contribution_result(
        commits,
        granularity=Granularity.parse(breakdown),
        owner_id=owner,
        project_id=project_id,
        start=start,
        end=end,
    )
    if commits and not len(result):
        output_console.print_warning("No commits matched the given filters")

    output_console.print_header("Contribution Report", str(commits_path))
    output_console.print_result_summary(result)

    output_file = write_json_report(result.to_api(), output, name=commits_path.stem)
    output_console.print_output_path(str(output_file))

    output_console.print_success(f"Counted {len(commits)} commits into {len(result)} projects")


if __name__ == "__main__":
    app()
