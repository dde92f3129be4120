# src/kubedispatch/cli/formatter.py
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from kubedispatch.core.errors import DispatchError
from kubedispatch.dispatch.selection import DispatchReport


class DispatchFormatter:
    """
    Session output sink for the CLI.
    Renders errors and the per-object execution report.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def print_error(self, error: DispatchError):
        self.console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")

    def print_notice(self, text: str):
        self.console.print(f"[dim]{escape(text)}[/dim]")

    def print_report(self, report: DispatchReport):
        """
        Summary table shown after a multi-object exec, so failures that
        scrolled past between separators are visible in one place.
        """
        if report.attempted < 2:
            return

        table = Table(title="Exec Report", show_lines=True, header_style="bold magenta")
        table.add_column("Object", style="cyan")
        table.add_column("Namespace", style="white")
        table.add_column("Status", style="bold")
        table.add_column("Result", justify="center")

        for target, outcome in report.results:
            status = "[green]OK[/green]" if outcome.ok else f"[red]{escape(outcome.message)}[/red]"
            table.add_row(
                f"{target.kind}/{target.name}",
                target.namespace or "-",
                status,
                "✅" if outcome.ok else "❌",
            )

        self.console.print(table)
        failed = len(report.failures)
        self.console.print(Panel(
            f"Objects:  {report.attempted}\n"
            f"Success:  [green]{report.attempted - failed}[/green]\n"
            f"Failed:   [red]{failed}[/red]",
            border_style="dim",
            expand=False,
        ))
