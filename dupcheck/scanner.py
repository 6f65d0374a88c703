"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .contracts import CONFIG_FILE_NAME
from .errors import ValidationError
from .memory import MemoryGuard
from .parser import is_code_file
from .resources import is_resource_file

DEFAULT_EXCLUDES = (
    "node_modules",
    ".next",
    "build",
    "dist",
    ".git",
)

PACKAGE_FILES = frozenset({"package.json", "package-lock.json"})

SENSITIVE_DIRS = {
    "/etc",
    "/sys",
    "/proc",
    "/dev",
    "/root",
    "/boot",
    "/var",
    "/private/var",
    "/usr/bin",
    "/usr/sbin",
    "/private/etc",
}


@dataclass(slots=True)
class FileSet:
    code_files: list[str] = field(default_factory=list)
    resource_files: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.code_files) + len(self.resource_files)


def _get_tempdir() -> Path:
    return Path(tempfile.gettempdir()).resolve()


def _resolve_root(root: str) -> Path:
    try:
        rootp = Path(root).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise ValidationError(f"Invalid root path '{root}': {e}") from e

    if not rootp.is_dir():
        raise ValidationError(f"Root must be a directory: {root}")

    root_str = str(rootp)
    try:
        rootp.relative_to(_get_tempdir())
        return rootp
    except ValueError:
        pass

    if root_str in SENSITIVE_DIRS:
        raise ValidationError(f"Cannot scan sensitive directory: {root}")
    for sensitive in SENSITIVE_DIRS:
        if root_str.startswith(sensitive + "/"):
            raise ValidationError(f"Cannot scan under sensitive directory: {root}")
    return rootp


def iter_project_files(
    root: str,
    excludes: Iterable[str] = (),
    *,
    exclude_package_files: bool = True,
    max_files: int = 100_000,
    guard: MemoryGuard | None = None,
) -> Iterable[str]:
    """
    Yield code and resource files under root in a stable, sorted order.

    Ignored directory names are pruned before descent. A memory checkpoint
    runs at the start of every directory visited.
    """
    rootp = _resolve_root(root)
    ignored = set(DEFAULT_EXCLUDES) | set(excludes)

    file_count = 0
    for dirpath, dirnames, filenames in os.walk(rootp):
        if guard is not None:
            guard.check("file discovery")
        dirnames[:] = sorted(d for d in dirnames if d not in ignored)

        for name in sorted(filenames):
            if name in ignored or name == CONFIG_FILE_NAME:
                continue
            if exclude_package_files and name in PACKAGE_FILES:
                continue
            if not (is_code_file(name) or is_resource_file(name)):
                continue

            p = Path(dirpath) / name
            # Verify path is actually under root (prevent symlink attacks)
            try:
                p.resolve().relative_to(rootp)
            except ValueError:
                continue

            file_count += 1
            if file_count > max_files:
                raise ValidationError(
                    f"File count exceeds limit of {max_files}. "
                    "Use more specific root or increase limit."
                )
            yield str(p)


def discover_files(
    root: str,
    excludes: Iterable[str] = (),
    *,
    exclude_package_files: bool = True,
    max_files: int = 100_000,
    guard: MemoryGuard | None = None,
) -> FileSet:
    files = FileSet()
    for fp in iter_project_files(
        root,
        excludes,
        exclude_package_files=exclude_package_files,
        max_files=max_files,
        guard=guard,
    ):
        if is_code_file(fp):
            files.code_files.append(fp)
        else:
            files.resource_files.append(fp)
    return files


def relative_path(root: str, filepath: str) -> str:
    rootp = Path(root).resolve()
    fp = Path(filepath).resolve()
    try:
        return fp.relative_to(rootp).as_posix()
    except ValueError:
        return fp.as_posix()
