"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from . import ui_messages as ui
from .engine import AnalysisResult
from .report import group_heading

_GROUP_LABELS = frozenset(
    {
        ui.SUMMARY_LABEL_FUNCTIONS,
        ui.SUMMARY_LABEL_MODULES,
        ui.SUMMARY_LABEL_RESOURCES,
        ui.SUMMARY_LABEL_COMPONENTS,
    }
)

# Occurrences shown per group unless --verbose.
MAX_OCCURRENCES_SHOWN = 5


def _summary_value_style(*, label: str, value: int) -> str:
    if value == 0:
        return "dim"
    if label == ui.SUMMARY_LABEL_FILES_SKIPPED:
        return "yellow"
    if label in _GROUP_LABELS:
        return "bold yellow"
    return "bold"


def _build_summary_rows(result: AnalysisResult) -> list[tuple[str, int]]:
    return [
        (ui.SUMMARY_LABEL_FILES_FOUND, result.files_found),
        (ui.SUMMARY_LABEL_FILES_ANALYZED, result.files_analyzed),
        (ui.SUMMARY_LABEL_FILES_SKIPPED, result.files_skipped),
        (ui.SUMMARY_LABEL_FUNCTIONS, len(result.functions)),
        (ui.SUMMARY_LABEL_MODULES, len(result.modules)),
        (ui.SUMMARY_LABEL_RESOURCES, len(result.resources)),
        (ui.SUMMARY_LABEL_COMPONENTS, len(result.components)),
    ]


def _build_summary_table(rows: list[tuple[str, int]]) -> Table:
    summary_table = Table(
        title=ui.SUMMARY_TITLE,
        show_header=True,
        width=ui.CLI_LAYOUT_WIDTH,
    )
    summary_table.add_column("Metric")
    summary_table.add_column("Value", justify="right")
    for label, value in rows:
        summary_table.add_row(
            label,
            Text(str(value), style=_summary_value_style(label=label, value=value)),
        )
    return summary_table


def _print_summary(*, console: Console, quiet: bool, result: AnalysisResult) -> None:
    invariant_ok = result.files_found == result.files_analyzed + result.files_skipped

    if quiet:
        console.print(ui.SUMMARY_TITLE)
        console.print(
            ui.fmt_summary_compact_input(
                found=result.files_found,
                analyzed=result.files_analyzed,
                skipped=result.files_skipped,
            )
        )
        console.print(
            ui.fmt_summary_compact_groups(
                functions=len(result.functions),
                modules=len(result.modules),
                resources=len(result.resources),
                components=len(result.components),
            )
        )
    else:
        console.print(_build_summary_table(_build_summary_rows(result)))

    if not invariant_ok:
        console.print(f"[warning]{ui.WARN_SUMMARY_ACCOUNTING_MISMATCH}[/warning]")


def _print_duplicates(
    *,
    console: Console,
    result: AnalysisResult,
    lang: str,
    verbose: bool,
) -> None:
    """Localized listing of every duplicate group, one section per category."""
    if result.group_count() == 0:
        console.print(f"[success]{ui.tr(lang, 'none')}[/success]")
        return

    sections = (
        ("functions", result.functions),
        ("modules", result.modules),
        ("resources", result.resources),
        ("components", result.components),
    )
    for category, groups in sections:
        if not groups:
            continue
        console.print(f"\n[bold]{ui.tr(lang, category)}[/bold] ({len(groups)})")
        for group in groups:
            # Values come from user files: never interpret them as markup.
            console.print(Text(group_heading(category, group, lang), style="info"))
            shown = group.occurrences if verbose else group.occurrences[:MAX_OCCURRENCES_SHOWN]
            for occ in shown:
                console.print(
                    Text(ui.tr(lang, "occurrence", file=occ.filepath, locator=occ.locator))
                )
            hidden = len(group.occurrences) - len(shown)
            if hidden > 0:
                console.print(f"  [dim]... and {hidden} more[/dim]")
