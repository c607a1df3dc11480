"""
Validate command - check splice file integrity and structure.
"""

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from splicedrum.formats.splice.binary_parser import SpliceParser
from splicedrum.formats.splice.errors import DecodeError
from splicedrum.formats.splice.layout import DEFAULT_LAYOUT

console = Console()
app = typer.Typer()


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: str  # "error", "warning", "info"
    area: str
    offset: Optional[int]
    message: str


@dataclass
class ValidationResult:
    """Result of validating a splice file."""

    filepath: str
    valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    info: List[ValidationIssue] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        return len(self.errors) + len(self.warnings) + len(self.info)


class SpliceValidator:
    """
    Validate splice file structure and content.

    The file is decoded leniently so every record can be checked. A last
    track ending past the declared body is an error, as in a strict decode.
    """

    def __init__(self, data: bytes, filepath: str):
        self.data = data
        self.filepath = filepath
        self.layout = DEFAULT_LAYOUT
        self.parser = SpliceParser(self.layout)
        self.issues: List[ValidationIssue] = []

    def validate(self) -> ValidationResult:
        """Perform full validation and return result."""
        self.issues = []

        if self._validate_decode():
            self._validate_track_region()
            self._validate_trailing_data()
            self._validate_tempo()
            self._validate_steps()

        errors = [i for i in self.issues if i.severity == "error"]
        warnings = [i for i in self.issues if i.severity == "warning"]
        info = [i for i in self.issues if i.severity == "info"]

        return ValidationResult(
            filepath=self.filepath,
            valid=not errors,
            errors=errors,
            warnings=warnings,
            info=info,
        )

    def _add_issue(
        self, severity: str, area: str, offset: Optional[int], message: str
    ) -> None:
        """Add a validation issue."""
        self.issues.append(
            ValidationIssue(severity=severity, area=area, offset=offset, message=message)
        )

    def _validate_decode(self) -> bool:
        """Decode the file; returns False if decoding failed."""
        try:
            header, tracks = self.parser.parse_bytes(self.data)
        except DecodeError as e:
            self._add_issue("error", type(e).__name__, e.offset, e.message)
            return False

        self._add_issue("info", "Header", 0, f"Magic {header.magic.decode('ascii')}")
        self._add_issue(
            "info", "Body", self.layout.body_length_offset, f"{header.body_length} bytes declared"
        )
        self._add_issue("info", "Tracks", self.layout.track_start, f"{len(tracks)} decoded")
        return True

    def _validate_track_region(self) -> None:
        """The last track should end exactly at the declared body end."""
        header = self.parser.header
        overrun = self.parser.bytes_consumed - header.track_budget
        if overrun > 0:
            self._add_issue(
                "error",
                "Track region",
                self.layout.track_start + header.track_budget,
                f"Last track ends {overrun} bytes past the declared body",
            )

    def _validate_trailing_data(self) -> None:
        """Bytes after the declared body are ignored by the decoder."""
        body_end = self.layout.body_length_end + self.parser.header.body_length
        trailing = len(self.data) - body_end
        if trailing > 0:
            self._add_issue(
                "warning",
                "Trailing data",
                body_end,
                f"{trailing} bytes after the declared body are ignored",
            )

    def _validate_tempo(self) -> None:
        tempo = self.parser.header.tempo
        if math.isnan(tempo) or math.isinf(tempo) or tempo <= 0:
            self._add_issue(
                "warning", "Tempo", self.layout.tempo_offset, f"Unusual tempo value {tempo}"
            )

    def _validate_steps(self) -> None:
        """Steps should be 0 or 1."""
        for (offset, size), track in zip(self.parser.records, self.parser.tracks):
            bad = [i for i, step in enumerate(track.steps) if step not in (0, 1)]
            if bad:
                steps_offset = offset + size - self.layout.step_count
                self._add_issue(
                    "warning",
                    "Steps",
                    steps_offset + bad[0],
                    f"Track {track.id} has step values other than 0/1 at {bad}",
                )


def display_validation(result: ValidationResult) -> None:
    """Display validation result with Rich formatting."""
    if result.valid and not result.warnings:
        status = "[green]VALID[/green]"
        border = "green"
    elif result.valid:
        status = "[yellow]VALID (with warnings)[/yellow]"
        border = "yellow"
    else:
        status = "[red]INVALID[/red]"
        border = "red"

    console.print(
        Panel(
            f"[bold]File:[/bold] {escape(result.filepath)}\n"
            f"[bold]Status:[/bold] {status}\n\n"
            f"Errors: [red]{len(result.errors)}[/red]  "
            f"Warnings: [yellow]{len(result.warnings)}[/yellow]  "
            f"Info: [blue]{len(result.info)}[/blue]",
            title="[bold]Validation Result[/bold]",
            border_style=border,
        )
    )

    if result.errors or result.warnings:
        table = Table(title="Issues", box=box.ROUNDED, show_header=True, header_style="bold cyan")
        table.add_column("Severity", width=10)
        table.add_column("Area", style="cyan", width=22)
        table.add_column("Offset", style="dim", width=8)
        table.add_column("Message", width=50)

        for issue in result.errors:
            table.add_row("[red]ERROR[/red]", issue.area, _offset(issue), escape(issue.message))

        for issue in result.warnings:
            table.add_row("[yellow]WARN[/yellow]", issue.area, _offset(issue), escape(issue.message))

        console.print(table)

    if result.info and not result.errors and not result.warnings:
        info_table = Table(title="Validation Checks", box=box.SIMPLE, show_header=False)
        info_table.add_column("", width=60)

        for issue in result.info:
            info_table.add_row(f"[green]OK[/green] {issue.area}: {escape(issue.message)}")

        console.print(info_table)


def _offset(issue: ValidationIssue) -> str:
    return "-" if issue.offset is None else f"0x{issue.offset:03X}"


@app.command()
def validate(
    file: Path = typer.Argument(..., help="Splice file to validate"),
    strict: bool = typer.Option(False, "--strict", "-s", help="Treat warnings as errors"),
) -> None:
    """
    Validate a splice pattern file structure and content.

    Checks for:

    - Valid "SPLICE" magic
    - Body length consistent with the file size
    - Complete track records
    - Last track ending exactly at the declared body end
    - Step values of 0 or 1

    Examples:

        splice validate pattern_1.splice

        splice validate pattern_1.splice --strict
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    with open(file, "rb") as f:
        data = f.read()

    validator = SpliceValidator(data, str(file))
    result = validator.validate()

    if strict and result.warnings:
        result.valid = False

    display_validation(result)

    if not result.valid:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
