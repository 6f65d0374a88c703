"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final

REPORT_SCHEMA_VERSION: Final = "1.0"

MODULE_DUPLICATE_PERCENT: Final = 66.7
COMPONENT_DUPLICATE_SIMILARITY: Final = 0.8
MEMORY_CHECK_INTERVAL: Final = 1000

DOCUMENT_LOCATOR: Final = "$"
MODULE_LOCATOR: Final = "*"

CONFIG_FILE_NAME: Final = "dupcheck.config.json"
LANG_ENV_VAR: Final = "DUPCHECK_LANG"


class ExitCode(IntEnum):
    SUCCESS = 0
    CONTRACT_ERROR = 2
    MEMORY_LIMIT = 4
    INTERNAL_ERROR = 5



EXIT_CODE_DESCRIPTIONS: Final[tuple[tuple[ExitCode, str], ...]] = (
    (ExitCode.SUCCESS, "success (duplicates, if any, are reported as findings)"),
    (
        ExitCode.CONTRACT_ERROR,
        "contract error (invalid configuration, missing root, invalid output path)",
    ),
    (ExitCode.MEMORY_LIMIT, "memory ceiling exceeded (run aborted)"),
    (
        ExitCode.INTERNAL_ERROR,
        "internal error (unexpected exception; please report)",
    ),
)


def cli_help_epilog() -> str:
    lines = ["Exit codes"]
    for code, description in EXIT_CODE_DESCRIPTIONS:
        lines.append(f"  - {int(code)} - {description}")
    return "\n".join(lines)
