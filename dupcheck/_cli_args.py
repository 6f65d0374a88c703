"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn

from . import ui_messages as ui
from .config import SUPPORTED_LANGUAGES
from .contracts import ExitCode, cli_help_epilog


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(ExitCode.CONTRACT_ERROR, ui.fmt_argument_error(message))


def build_parser(version: str) -> argparse.ArgumentParser:
    ap = _ArgumentParser(
        prog="dupcheck",
        description=(
            "Duplicate function, module, resource and React component "
            "detector for JavaScript and TypeScript projects."
        ),
        epilog=cli_help_epilog(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument(
        "--version",
        action="version",
        version=ui.version_output(version),
        help=ui.HELP_VERSION,
    )

    core_group = ap.add_argument_group("Target")
    core_group.add_argument(
        "root",
        nargs="?",
        default=".",
        help=ui.HELP_ROOT,
    )
    core_group.add_argument(
        "--config",
        metavar="FILE",
        default=None,
        help=ui.HELP_CONFIG,
    )
    core_group.add_argument(
        "--exclude",
        dest="excludes",
        action="append",
        metavar="NAME",
        default=None,
        help=ui.HELP_EXCLUDE,
    )
    core_group.add_argument(
        "--include-package-files",
        action="store_true",
        help=ui.HELP_INCLUDE_PACKAGE_FILES,
    )

    # Tuning flags default to None so that config-file values survive.
    tune_group = ap.add_argument_group("Analysis Tuning")
    tune_group.add_argument(
        "--min-statements",
        type=int,
        default=None,
        metavar="N",
        help=ui.HELP_MIN_STATEMENTS,
    )
    tune_group.add_argument(
        "--processes",
        type=int,
        default=None,
        help=ui.HELP_PROCESSES,
    )
    tune_group.add_argument(
        "--memory-limit-mb",
        type=int,
        default=None,
        metavar="MB",
        help=ui.HELP_MEMORY_LIMIT_MB,
    )
    tune_group.add_argument(
        "--max-files",
        type=int,
        default=None,
        metavar="N",
        help=ui.HELP_MAX_FILES,
    )

    checks_group = ap.add_argument_group("Checks")
    checks_group.add_argument(
        "--no-functions", action="store_true", help=ui.HELP_NO_FUNCTIONS
    )
    checks_group.add_argument("--no-modules", action="store_true", help=ui.HELP_NO_MODULES)
    checks_group.add_argument(
        "--no-resources", action="store_true", help=ui.HELP_NO_RESOURCES
    )
    checks_group.add_argument(
        "--no-components", action="store_true", help=ui.HELP_NO_COMPONENTS
    )

    out_group = ap.add_argument_group("Reporting")
    out_group.add_argument(
        "--lang",
        choices=SUPPORTED_LANGUAGES,
        default=None,
        help=ui.HELP_LANG,
    )
    out_group.add_argument(
        "--json",
        dest="json_out",
        metavar="FILE",
        help=ui.HELP_JSON,
    )
    out_group.add_argument(
        "--text",
        dest="text_out",
        metavar="FILE",
        help=ui.HELP_TEXT,
    )
    out_group.add_argument(
        "--no-progress",
        action="store_true",
        help=ui.HELP_NO_PROGRESS,
    )
    out_group.add_argument(
        "--no-color",
        action="store_true",
        help=ui.HELP_NO_COLOR,
    )
    out_group.add_argument(
        "--quiet",
        action="store_true",
        help=ui.HELP_QUIET,
    )
    out_group.add_argument(
        "--verbose",
        action="store_true",
        help=ui.HELP_VERBOSE,
    )
    out_group.add_argument(
        "--debug",
        action="store_true",
        help=ui.HELP_DEBUG,
    )
    return ap
