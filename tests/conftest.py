from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from dupcheck.config import DetectorConfig
from dupcheck.contracts import REPORT_SCHEMA_VERSION

WriteFiles = Callable[[Mapping[str, str]], Path]
ReportMetaFactory = Callable[..., dict[str, object]]

# Three functions with distinct normalized shapes, plus a fourth.
ADD_BODY = """{
  const x = a;
  const y = b;
  return x + y;
}"""

LOG_BODY = """{
  const x = a;
  console.log(x);
  return x;
}"""

COUNT_BODY = """{
  let t = 0;
  t = t + 1;
  return t * 2;
}"""

GUARD_BODY = """{
  if (a) {
    return 1;
  }
  const z = a;
  return z - 1;
}"""


@pytest.fixture
def write_files(tmp_path: Path) -> WriteFiles:
    def _write(files: Mapping[str, str]) -> Path:
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, "utf-8")
        return tmp_path

    return _write


@pytest.fixture
def sequential_config() -> DetectorConfig:
    return DetectorConfig(processes=1)


@pytest.fixture
def three_file_project() -> dict[str, str]:
    return {
        "file1.js": (
            f"function add(a, b) {ADD_BODY}\n"
            f"function show(a) {LOG_BODY}\n"
            f"function count(a) {COUNT_BODY}\n"
        ),
        "file2.js": (
            f"function sum(p, q) {ADD_BODY}\n"
            f"export const print = (a) => {LOG_BODY};\n"
            f"function guard(a) {GUARD_BODY}\n"
        ),
        "file3.js": f"const plus = function (m, n) {ADD_BODY};\n",
    }


@pytest.fixture
def report_meta_factory() -> ReportMetaFactory:
    def _make(**overrides: object) -> dict[str, object]:
        meta: dict[str, object] = {
            "report_schema_version": REPORT_SCHEMA_VERSION,
            "dupcheck_version": "1.0.0",
            "python_version": "3.13",
            "root": "/repo",
            "config_path": None,
            "language": "en",
            "checks": ["functions", "modules", "resources", "components"],
        }
        meta.update(overrides)
        return meta

    return _make
