"""Shared Rich display functions for reports and results.

Provides the usage report printer, the relocation results table and the
cleanup summary used by the status, clean and move commands.
"""

from rich.markup import escape
from rich.table import Table

from ovlspace.cleanup.engine import CleanupReport
from ovlspace.relocation.models import RelocationRecord
from ovlspace.usage.report import StatusReport, heavy_lines, severity_message, usage_lines
from ovlspace.utils.formatting import console, format_size_kb, print_success, print_warning


def print_status_report(report: StatusReport) -> None:
    """Print a usage report with the verdict styled by severity.

    Args:
        report: Report to print.
    """
    for line in usage_lines(report):
        console.print(line, markup=False, highlight=False)

    style = f"severity.{report.severity.value}"
    console.print()
    console.print(f"[{style}]{escape(severity_message(report))}[/]", highlight=False)

    heavy = heavy_lines(report)
    if heavy:
        console.print()
        for line in heavy:
            console.print(line, markup=False, highlight=False)


def create_relocation_table(records: list[RelocationRecord]) -> Table:
    """Create a Rich table of relocated directories.

    Args:
        records: Relocation records to display.

    Returns:
        Rich Table with Source, Destination and Note columns.
    """
    table = Table(
        title="Relocated",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Source", no_wrap=True)
    table.add_column("Destination")
    table.add_column("Note", style="muted")

    for record in records:
        note = "renamed (target existed)" if record.renamed else ""
        table.add_row(escape(str(record.source)), escape(str(record.destination)), note)

    return table


def print_cleanup_summary(report: CleanupReport) -> None:
    """Print what a cleanup run did.

    Args:
        report: Cleanup report to summarize.
    """
    console.print(
        f"Emptied [info]{len(report.emptied)}[/] cache dir(s), "
        f"removed [info]{report.removed_entries}[/] entr(ies), "
        f"truncated [info]{len(report.truncated)}[/] log(s), "
        f"deleted [info]{len(report.deleted)}[/] log(s) "
        f"([info]{format_size_kb(report.reclaimed_log_bytes // 1024)}[/] of logs)."
    )
    for failure in report.failures:
        print_warning(f"Could not clean {failure.path}: {failure.error}")

    if not report.has_failures:
        print_success("Cleanup complete.")
    console.print()
