"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import platform
import shlex
import sys
import traceback
from pathlib import Path

from . import __version__

BANNER_SUBTITLE = "[italic]JavaScript / TypeScript duplication detector[/italic]"

MARKER_CONTRACT_ERROR = "[error]CONTRACT ERROR:[/error]"
MARKER_MEMORY_LIMIT = "[error]MEMORY LIMIT:[/error]"
MARKER_INTERNAL_ERROR = "[error]INTERNAL ERROR:[/error]"

HELP_VERSION = "Print the DupCheck version and exit."
HELP_ROOT = "Project root directory to scan."
HELP_CONFIG = (
    "Configuration file (JSON or YAML). "
    "Default: <root>/dupcheck.config.json when present."
)
HELP_MIN_STATEMENTS = "Minimum body statements for a function to be compared."
HELP_PROCESSES = "Number of parallel worker processes."
HELP_MEMORY_LIMIT_MB = "Abort the run when peak memory exceeds this many MB."
HELP_MAX_FILES = "Maximum number of files to scan."
HELP_EXCLUDE = "Directory or file name to ignore (repeatable)."
HELP_INCLUDE_PACKAGE_FILES = "Also compare package.json and package-lock.json."
HELP_NO_FUNCTIONS = "Skip exact duplicate function detection."
HELP_NO_MODULES = "Skip module similarity detection."
HELP_NO_RESOURCES = "Skip JSON/YAML resource similarity detection."
HELP_NO_COMPONENTS = "Skip React component similarity detection."
HELP_LANG = "Language of the duplicate listing (en, ja)."
HELP_JSON = "Generate a JSON report to FILE."
HELP_TEXT = "Generate a text report to FILE."
HELP_NO_PROGRESS = "Disable the progress bar (recommended for CI logs)."
HELP_NO_COLOR = "Disable ANSI colors in output."
HELP_QUIET = "Minimize output (still shows warnings and errors)."
HELP_VERBOSE = "List every occurrence of every duplicate group."
HELP_DEBUG = "Print debug details (traceback and environment) on internal errors."

SUMMARY_TITLE = "Analysis Summary"
CLI_LAYOUT_WIDTH = 40
SUMMARY_LABEL_FILES_FOUND = "Files found"
SUMMARY_LABEL_FILES_ANALYZED = "Files analyzed"
SUMMARY_LABEL_FILES_SKIPPED = "Files skipped"
SUMMARY_LABEL_FUNCTIONS = "Duplicate functions"
SUMMARY_LABEL_MODULES = "Similar modules"
SUMMARY_LABEL_RESOURCES = "Similar resources"
SUMMARY_LABEL_COMPONENTS = "Similar components"
SUMMARY_COMPACT_INPUT = "Input: found={found} analyzed={analyzed} skipped={skipped}"
SUMMARY_COMPACT_GROUPS = (
    "Duplicate groups: functions={functions} modules={modules} "
    "resources={resources} components={components}"
)
WARN_SUMMARY_ACCOUNTING_MISMATCH = (
    "Summary accounting mismatch: files_found != files_analyzed + files_skipped"
)

STATUS_DISCOVERING = "[bold green]Discovering source and resource files..."
STATUS_COMPARING = "[bold green]Comparing..."

INFO_SCANNING_ROOT = "[info]Scanning root:[/info] {root}"
INFO_CONFIG_LOADED = "[info]Config:[/info] {path}"
INFO_PROCESSING = "[info]Processing {count} files...[/info]"
INFO_ANALYZING = "Analyzing {count} files..."
INFO_JSON_REPORT_SAVED = "[info]JSON report saved:[/info] {path}"
INFO_TEXT_REPORT_SAVED = "[info]Text report saved:[/info] {path}"

WARN_PARALLEL_FALLBACK = (
    "[warning]Parallel processing unavailable, "
    "falling back to sequential: {error}[/warning]"
)
WARN_FAILED_FILES_HEADER = "\n[warning]{count} files failed to process:[/warning]"
WARN_UNKNOWN_LANGUAGE = (
    "[warning]Unknown language {value!r} in {source}; ignoring it.[/warning]"
)

ERR_INVALID_OUTPUT_EXT = (
    "[error]Invalid {label} output extension: {path} "
    "(expected {expected_suffix}).[/error]"
)
ERR_ROOT_NOT_FOUND = "[error]Root path does not exist: {path}[/error]"
ERR_INVALID_ROOT_PATH = "[error]Invalid root path: {error}[/error]"
ERR_SCAN_FAILED = "[error]Scan failed: {error}[/error]"
ERR_INVALID_CONFIG = "[error]Invalid configuration: {error}[/error]"
ERR_REPORT_WRITE_FAILED = (
    "[error]Failed to write {label} report: {path} ({error}).[/error]"
)


# =========================
# Localized duplicate listing
# =========================

LISTING_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "functions": "Duplicate functions",
        "modules": "Similar modules",
        "resources": "Similar resource values",
        "components": "Similar React components",
        "function_group": "Function: {name}",
        "module_group": "Module similarity: {percent}",
        "resource_group": "Value: {value} (similarity {percent})",
        "component_group": "Component: {name} (similarity {percent})",
        "none": "No duplicates found.",
        "occurrence": "  - {file} ({locator})",
    },
    "ja": {
        "functions": "重複した関数",
        "modules": "類似したモジュール",
        "resources": "類似したリソース値",
        "components": "類似したReactコンポーネント",
        "function_group": "関数: {name}",
        "module_group": "モジュール類似度: {percent}",
        "resource_group": "値: {value} (類似度 {percent})",
        "component_group": "コンポーネント: {name} (類似度 {percent})",
        "none": "重複は見つかりませんでした。",
        "occurrence": "  - {file} ({locator})",
    },
}


def tr(lang: str, key: str, **kwargs: object) -> str:
    table = LISTING_MESSAGES.get(lang, LISTING_MESSAGES["en"])
    return table[key].format(**kwargs)


def fmt_percent(similarity: float) -> str:
    return f"{round(similarity * 100, 1)}%"


def version_output(version: str) -> str:
    return f"DupCheck {version}"


def banner_title(version: str) -> str:
    return f"[bold white]DupCheck[/bold white] [dim]v{version}[/dim]\n{BANNER_SUBTITLE}"


def fmt_invalid_output_extension(
    *, label: str, path: Path, expected_suffix: str
) -> str:
    return ERR_INVALID_OUTPUT_EXT.format(
        label=label, path=path, expected_suffix=expected_suffix
    )


def fmt_report_write_failed(*, label: str, path: Path, error: object) -> str:
    return ERR_REPORT_WRITE_FAILED.format(label=label, path=path, error=error)


def fmt_invalid_config(error: object) -> str:
    return ERR_INVALID_CONFIG.format(error=error)


def fmt_scanning_root(root: Path) -> str:
    return INFO_SCANNING_ROOT.format(root=root)


def fmt_processing(count: int) -> str:
    return INFO_PROCESSING.format(count=count)


def fmt_parallel_fallback(error: object) -> str:
    return WARN_PARALLEL_FALLBACK.format(error=error)


def fmt_failed_files_header(count: int) -> str:
    return WARN_FAILED_FILES_HEADER.format(count=count)


def fmt_unknown_language(*, value: str, source: str) -> str:
    return WARN_UNKNOWN_LANGUAGE.format(value=value, source=source)


def fmt_path(template: str, path: Path) -> str:
    return template.format(path=path)


def fmt_summary_compact_input(*, found: int, analyzed: int, skipped: int) -> str:
    return SUMMARY_COMPACT_INPUT.format(found=found, analyzed=analyzed, skipped=skipped)


def fmt_summary_compact_groups(
    *, functions: int, modules: int, resources: int, components: int
) -> str:
    return SUMMARY_COMPACT_GROUPS.format(
        functions=functions,
        modules=modules,
        resources=resources,
        components=components,
    )


def fmt_argument_error(message: str) -> str:
    return f"CONTRACT ERROR: {message}\n"


def fmt_contract_error(message: str) -> str:
    return f"{MARKER_CONTRACT_ERROR}\n{message}"


def fmt_memory_limit(message: str) -> str:
    return f"{MARKER_MEMORY_LIMIT}\n{message}"


def fmt_internal_error(
    error: BaseException,
    *,
    debug: bool = False,
) -> str:
    error_name = type(error).__name__
    error_text = str(error).strip() or "<no message>"
    lines = [
        MARKER_INTERNAL_ERROR,
        "Unexpected exception.",
        f"Reason: {error_name}: {error_text}",
        "",
        "Next steps:",
        "- Re-run with --debug to include a traceback.",
        "- If this is reproducible, report it to the maintainers.",
        "- Attach: command line, DupCheck version and Python version.",
    ]
    if not debug:
        return "\n".join(lines)

    traceback_lines = traceback.format_exception(
        type(error), error, error.__traceback__
    )
    command_line = shlex.join(sys.argv)
    lines.extend(
        [
            "",
            "DEBUG DETAILS",
            f"Platform: {platform.platform()}",
            f"Python: {sys.version.split()[0]}",
            f"DupCheck: {__version__}",
            f"Command: {command_line}",
            f"CWD: {Path.cwd()}",
            "Traceback:",
            "".join(traceback_lines).rstrip(),
        ]
    )
    return "\n".join(lines)
