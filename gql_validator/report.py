"""Validation report and output formatting."""

import json
from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


@dataclass(frozen=True)
class ValidationError:
    """A single finding, rendered as its message."""

    message: str
    path: tuple[str, ...] = ()

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationReport:
    """Ordered findings of one validation call."""

    errors: tuple[ValidationError, ...] = ()
    operation: str = "query"

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> list[str]:
        return [str(e) for e in self.errors]

    def to_dict(self) -> dict:
        return {
            "operation": self.operation,
            "valid": self.valid,
            "errors": [{"message": e.message, "path": list(e.path)} for e in self.errors],
        }


@dataclass
class FileSummary:
    """Reports for every operation found in one query file."""

    path: str
    reports: list[ValidationReport] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return all(r.valid for r in self.reports)


def emit(summary: FileSummary, fmt: str) -> None:
    """
    Output validation results.

    Args:
        summary: Validation results for a query file
        fmt: Output format ("json" or "console")
    """
    if fmt == "json":
        print(
            json.dumps({
                "file": summary.path,
                "valid": summary.valid,
                "operations": [r.to_dict() for r in summary.reports],
            }, indent=2)
        )
        return

    console.print(f"\n[bold cyan]Validation of {summary.path}[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Operation", style="cyan")
    table.add_column("Result")

    for i, r in enumerate(summary.reports, 1):
        if r.valid:
            status = "[green]✓[/green] valid"
        else:
            status = f"[red]✖[/red] {len(r.errors)} error(s)"
        table.add_row(f"#{i} {r.operation}", status)

    console.print(table)

    for i, r in enumerate(summary.reports, 1):
        if r.valid:
            continue
        console.print(f"\n[bold cyan]Errors in #{i} {r.operation}:[/bold cyan]\n")
        for e in r.errors:
            msg = f"  [red]✖[/red] {escape(e.message)}"
            if e.path:
                msg += f" [dim]({escape('.'.join(e.path))})[/dim]"
            console.print(msg, highlight=False)

    if summary.valid:
        console.print("\n[green]✓ Query is valid[/green]")

    console.print()


def print_kv(title: str, data: dict) -> None:
    """
    Print key-value pairs (for schema pull, schema show).

    Args:
        title: Section title
        data: Key-value data
    """
    console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="yellow")

    for k, v in data.items():
        table.add_row(k, str(v))

    console.print(table)
    console.print()
