import os
from pathlib import Path

import pytest

import dupcheck.scanner as scanner
from dupcheck.errors import MemoryLimitError, ValidationError
from dupcheck.memory import MemoryGuard
from dupcheck.scanner import discover_files, iter_project_files, relative_path


def _rel(root: Path, files: list[str]) -> list[str]:
    return [relative_path(str(root), f) for f in files]


def test_discovers_code_and_resources_in_sorted_order(write_files) -> None:
    root = write_files(
        {
            "src/b.ts": "",
            "src/a.js": "",
            "src/view.tsx": "",
            "config/app.yaml": "",
            "data.json": "{}",
            "README.md": "",
            "styles.css": "",
        }
    )
    files = discover_files(str(root))
    assert _rel(root, files.code_files) == ["src/a.js", "src/b.ts", "src/view.tsx"]
    # Files in a directory come before its subdirectories.
    assert _rel(root, files.resource_files) == ["data.json", "config/app.yaml"]
    assert len(files) == 5


def test_default_excludes_and_package_files(write_files) -> None:
    root = write_files(
        {
            "node_modules/lib/index.js": "",
            "dist/out.js": "",
            ".next/page.js": "",
            "package.json": "{}",
            "package-lock.json": "{}",
            "index.js": "",
        }
    )
    assert _rel(root, list(iter_project_files(str(root)))) == ["index.js"]

    with_packages = iter_project_files(str(root), exclude_package_files=False)
    assert _rel(root, list(with_packages)) == [
        "index.js",
        "package-lock.json",
        "package.json",
    ]


def test_custom_excludes(write_files) -> None:
    root = write_files({"vendor/x.js": "", "src/y.js": ""})
    files = list(iter_project_files(str(root), ["vendor"]))
    assert _rel(root, files) == ["src/y.js"]


def test_max_files_limit(write_files) -> None:
    root = write_files({"a.js": "", "b.js": "", "c.js": ""})
    with pytest.raises(ValidationError, match="File count exceeds limit of 2"):
        list(iter_project_files(str(root), max_files=2))


def test_missing_root(tmp_path: Path) -> None:
    with pytest.raises(ValidationError, match="Invalid root path"):
        discover_files(str(tmp_path / "missing"))


def test_root_must_be_directory(write_files) -> None:
    root = write_files({"a.js": ""})
    with pytest.raises(ValidationError, match="Root must be a directory"):
        discover_files(str(root / "a.js"))


def test_sensitive_directory_is_rejected(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(scanner, "_get_tempdir", lambda: tmp_path / "elsewhere")
    monkeypatch.setattr(scanner, "SENSITIVE_DIRS", {str(tmp_path.resolve())})
    with pytest.raises(ValidationError, match="sensitive directory"):
        discover_files(str(tmp_path))


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unavailable")
def test_symlink_outside_root_is_skipped(tmp_path: Path) -> None:
    root = tmp_path / "project"
    outside = tmp_path / "outside"
    root.mkdir()
    outside.mkdir()
    (outside / "secret.js").write_text("", "utf-8")
    (root / "a.js").write_text("", "utf-8")
    (root / "link.js").symlink_to(outside / "secret.js")

    assert _rel(root, list(iter_project_files(str(root)))) == ["a.js"]


def test_memory_checked_during_discovery(write_files) -> None:
    root = write_files({"a.js": ""})
    guard = MemoryGuard(1, probe=lambda: 2)
    with pytest.raises(MemoryLimitError):
        discover_files(str(root), guard=guard)


def test_relative_path_outside_root(tmp_path: Path) -> None:
    other = tmp_path / "other.js"
    assert relative_path(str(tmp_path / "root"), str(other)) == other.resolve().as_posix()


def test_project_config_file_is_not_scanned(write_files) -> None:
    root = write_files({"dupcheck.config.json": "{}", "settings.json": "{}"})
    assert _rel(root, list(iter_project_files(str(root)))) == ["settings.json"]
