"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TypedDict

from .config import DetectorConfig
from ._cli_paths import _relative_or_absolute
from .contracts import REPORT_SCHEMA_VERSION


def _current_python_version() -> str:
    return f"{sys.version_info.major}.{sys.version_info.minor}"


class ReportMeta(TypedDict):
    """
    Report metadata shared by the JSON and TXT reports.

    Key semantics:
    - root: absolute scan root; every reported path is relative to it
    - config_path: config file that was loaded (root-relative when inside
      the root), or None for defaults
    - checks: enabled detector categories, in report order
    """

    report_schema_version: str
    dupcheck_version: str
    python_version: str
    root: str
    config_path: str | None
    language: str
    checks: list[str]


def _enabled_checks(config: DetectorConfig) -> list[str]:
    flags = (
        ("functions", config.check_functions),
        ("modules", config.check_modules),
        ("resources", config.check_resources),
        ("components", config.check_components),
    )
    return [name for name, enabled in flags if enabled]


def _build_report_meta(
    *,
    dupcheck_version: str,
    root: Path,
    config: DetectorConfig,
    config_path: Path | None,
    language: str,
) -> ReportMeta:
    return {
        "report_schema_version": REPORT_SCHEMA_VERSION,
        "dupcheck_version": dupcheck_version,
        "python_version": _current_python_version(),
        "root": str(root),
        "config_path": (
            _relative_or_absolute(config_path, root)
            if config_path is not None
            else None
        ),
        "language": language,
        "checks": _enabled_checks(config),
    }
