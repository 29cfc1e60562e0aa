import logging
from rich.logging import RichHandler
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from typing import Optional

from .schemas import CheckReport, ResourceState, TeardownReport

log = logging.getLogger(__name__)

STATE_STYLES = {
    ResourceState.REMOVED: "green",
    ResourceState.SKIPPED_EXTERNAL: "cyan",
    ResourceState.SKIPPED_ABSENT: "dim",
    ResourceState.REMOVAL_FAILED: "bold red",
}


class Display:
    """
    A centralized display handler for all CLI output.

    This module handles structured UI elements (tables, panels) and configures
    the logging system. All other modules use logging.getLogger(__name__) for
    progress and warnings:

    - DEBUG: skipped resources, lookup details (verbose mode only)
    - INFO: each removal as it is requested
    - WARNING: a resource that could not be removed
    - ERROR: failures that abort the command
    """

    def __init__(self, verbose: bool = False):
        self._console = Console()
        self._verbose = verbose

        # Clear any existing handlers to avoid duplicate logs
        root_logger = logging.getLogger()
        if root_logger.hasHandlers():
            root_logger.handlers.clear()

        logging.basicConfig(
            level="DEBUG" if verbose else "INFO",
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=self._console, rich_tracebacks=True, show_path=verbose, show_level=verbose)]
        )

    @property
    def verbose(self) -> bool:
        """Returns whether verbose mode is enabled."""
        return self._verbose

    def success(self, message: str):
        """Prints a success message."""
        self._console.print(f"[bold green]Success:[/] {message}")

    def error(self, message: str, suggestion: Optional[str] = None):
        """Prints an error message and an optional suggestion."""
        error_panel = Panel(
            f"[bold red]Error:[/] {message}\n"
            + (f"\n[bold]Suggestion:[/] {suggestion}" if suggestion else ""),
            border_style="red",
            expand=False,
        )
        self._console.print(error_panel)

    def teardown_report(self, report: TeardownReport):
        """Displays the outcome of every resource a teardown touched."""
        if not report.outcomes:
            log.info(f"Nothing to remove for project {report.project}.")
            return

        table = Table(title=f"Teardown: {report.project}")
        table.add_column("Kind", style="cyan")
        table.add_column("Name", style="bold")
        table.add_column("Service", style="magenta")
        table.add_column("Result")
        table.add_column("Details", style="yellow")

        for outcome in report.outcomes:
            style = STATE_STYLES.get(outcome.state, "")
            table.add_row(
                outcome.kind.value,
                outcome.name,
                outcome.service or "",
                f"[{style}]{outcome.state.value}[/]",
                outcome.error or "",
            )
        self._console.print(table)

    def check_report(self, report: CheckReport):
        """Displays the results of an environment check."""
        for check in report.checks:
            status = "[bold green]PASSED[/]" if check.passed else "[bold red]FAILED[/]"
            self._console.print(f"{status}: {check.name}")
            if not check.passed and check.details:
                self._console.print(f"  [cyan]Details:[/] {check.details}")
            if not check.passed and check.suggestion:
                self._console.print(f"  [cyan]Suggestion:[/] {check.suggestion}")

    def json(self, data: str):
        """Prints pre-formatted JSON to the console."""
        self._console.print_json(data)
