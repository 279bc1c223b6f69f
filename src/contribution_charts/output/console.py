"""Rich console output for aggregation results."""

from collections.abc import Sequence

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from contribution_charts.models.chart import OwnerSeries
from contribution_charts.models.contribution import ContributionResult


class Console:
    """Wrapper for rich console output."""

    def __init__(self, verbose: bool = False, quiet: bool = False):
        self.console = RichConsole()
        self.verbose = verbose
        self.quiet = quiet

    def print_verbose(self, *args, **kwargs):
        """Print only in verbose mode."""
        if self.verbose and not self.quiet:
            self.console.print(*args, **kwargs)

    def print_error(self, message: str):
        """Print an error, even in quiet mode. Message markup is escaped."""
        self.console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str):
        """Print a warning unless quiet."""
        if not self.quiet:
            self.console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_success(self, message: str):
        """Print a completion message unless quiet."""
        if not self.quiet:
            self.console.print(f"[green]{escape(message)}[/green]")

    def print_header(self, title: str, subtitle: str = ""):
        """Print a boxed header."""
        if self.quiet:
            return

        self.console.print()
        body = f"[bold blue]{title}[/bold blue]"
        if subtitle:
            body += f"\n[dim]{subtitle}[/dim]"
        self.console.print(Panel(body, expand=False))
        self.console.print()

    def print_result_summary(self, result: ContributionResult):
        """Print the projects contained in a contribution result."""
        if self.quiet:
            return

        table = Table(title="Projects", expand=False)
        table.add_column("Project")
        table.add_column("Range")
        table.add_column("Breakdown", style="dim")
        table.add_column("Owners", justify="right")

        for response in result.responses():
            table.add_row(
                response.project_name or str(response.project_id),
                f"{response.start.isoformat()} - {response.end.isoformat()}",
                response.granularity.value,
                str(len(response.contributions)),
            )

        self.console.print(table)
        self.console.print()

    def print_owner_series(self, series: Sequence[OwnerSeries], title: str = "Contributors"):
        """Print one row per owner series, in chart order."""
        if self.quiet:
            return

        if not series:
            self.console.print("[yellow]No contributions found[/yellow]")
            return

        table = Table(title=title, expand=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Owner")
        table.add_column("Total", justify="right")
        table.add_column("Datasets", justify="right")
        table.add_column("Buckets", justify="right")

        for position, owner in enumerate(series, start=1):
            table.add_row(
                str(position),
                owner.owner_handle or str(owner.owner_id),
                str(owner.total),
                str(len(owner.datasets)),
                str(len(owner.labels)),
            )

        self.console.print(table)
        self.console.print()

        for owner in series:
            self.print_verbose(f"[bold]{owner.title}[/bold]")
            for dataset in owner.datasets:
                self.print_verbose(f"  {dataset.label}: {sum(dataset.data)} commits charted")

    def print_output_path(self, path: str):
        """Print output file path."""
        if not self.quiet:
            self.console.print(f"\n[green]Report saved to:[/green] {path}")
