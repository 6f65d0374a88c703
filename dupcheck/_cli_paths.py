"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

from rich.console import Console

from .contracts import CONFIG_FILE_NAME, ExitCode
from .ui_messages import fmt_contract_error


def _validate_output_path(
    path: str,
    *,
    expected_suffix: str,
    label: str,
    console: Console,
    invalid_message: Callable[..., str],
) -> Path:
    out = Path(path).expanduser()
    if out.suffix.lower() != expected_suffix:
        console.print(
            fmt_contract_error(
                invalid_message(label=label, path=out, expected_suffix=expected_suffix)
            )
        )
        sys.exit(ExitCode.CONTRACT_ERROR)
    return out.resolve()


def _resolve_config_path(config_arg: str | None, root: Path) -> Path | None:
    """Explicit --config wins; otherwise the project file at the root, if any."""
    if config_arg:
        return Path(config_arg).expanduser().resolve()
    candidate = root / CONFIG_FILE_NAME
    return candidate if candidate.is_file() else None


def _relative_or_absolute(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)
