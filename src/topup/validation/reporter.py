"""
Console output for the ``validate`` command.

One table row per input file (companies, users), then the full error for
every file that did not validate, then a one-line verdict.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from topup.validation.core import ValidationResult

_STATUS = {
    None: "[yellow]missing[/yellow]",
    True: "[green]valid[/green]",
    False: "[red]invalid[/red]",
}


class ConsoleReporter:
    """Prints validation results for the companies and users files."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def print_results(self, results: list[ValidationResult]) -> None:
        """
        Print the per-file table, any errors and the verdict.

        Args:
            results: One result per input file.
        """
        table = Table(title="Input Files", show_header=True)
        table.add_column("Dataset", style="cyan", no_wrap=True)
        table.add_column("File", style="dim")
        table.add_column("Records", justify="right")
        table.add_column("Status", justify="center")

        for result in results:
            table.add_row(
                f"{result.dataset_name} ({result.schema_name})",
                escape(str(result.file_path)),
                "-" if result.record_count is None else str(result.record_count),
                _STATUS[result.schema_valid if result.exists else None],
            )
        self.console.print(table)

        for result in results:
            if result.schema_valid is not True and result.error_message:
                self.console.print(
                    f"[bold]{result.dataset_name}:[/bold] {escape(result.error_message)}"
                )

        self.console.print(self._verdict(results))

    @staticmethod
    def _verdict(results: list[ValidationResult]) -> str:
        bad = sum(1 for r in results if r.schema_valid is not True)
        if not bad:
            return f"[green]All {len(results)} input files are valid[/green]"
        return f"[red]{bad} of {len(results)} input files failed validation[/red]"
