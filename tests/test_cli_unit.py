import sys
from pathlib import Path
from typing import cast

import pytest
from rich.text import Text

import dupcheck._cli_summary as cli_summary
import dupcheck.cli as cli
from dupcheck import __version__
from dupcheck import ui_messages as ui
from dupcheck._cli_args import build_parser
from dupcheck._cli_meta import _build_report_meta
from dupcheck._cli_paths import _relative_or_absolute, _resolve_config_path
from dupcheck.config import DetectorConfig
from dupcheck.contracts import LANG_ENV_VAR
from dupcheck.engine import AnalysisResult
from dupcheck.registry import DuplicateGroup, Occurrence


def _result_with_groups() -> AnalysisResult:
    group = DuplicateGroup(
        key="k",
        representative="add",
        similarity=1.0,
        occurrences=[Occurrence(f"f{i}.js", f"fn{i}") for i in range(7)],
    )
    return AnalysisResult(functions=[group], files_found=7, files_analyzed=7)


def test_cli_module_main_guard(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["dupcheck", "--help"])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 0


def test_cli_version_flag_no_side_effects(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _boom(*_args: object, **_kwargs: object) -> None:
        raise AssertionError("Side effect detected")

    monkeypatch.setattr(cli, "discover_files", _boom)
    monkeypatch.setattr(sys, "argv", ["dupcheck", "--version"])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert __version__ in out
    assert "Scanning root" not in out


def test_cli_help_text_consistency(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["dupcheck", "--help"])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "--min-statements N" in out
    assert "--memory-limit-mb MB" in out
    assert "--lang {en,ja}" in out
    assert "--no-components" in out
    assert "--debug" in out
    assert "Exit codes" in out
    assert "0 - success" in out
    assert "2 - contract error" in out
    assert "4 - memory ceiling exceeded" in out
    assert "5 - internal error" in out
    assert "github.com" not in out
    assert "\x1b[" not in out


def test_cli_internal_error_marker(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _boom() -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(cli, "_main_impl", _boom)
    monkeypatch.setattr(sys, "argv", ["dupcheck"])
    monkeypatch.delenv("DUPCHECK_DEBUG", raising=False)
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 5
    out = capsys.readouterr().out
    assert "INTERNAL ERROR:" in out
    assert "Reason: RuntimeError: boom" in out
    assert "report it to the maintainers" in out
    assert "http" not in out
    assert "Traceback:" not in out


def test_cli_internal_error_debug_flag_includes_traceback(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _boom() -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(cli, "_main_impl", _boom)
    monkeypatch.setattr(sys, "argv", ["dupcheck", "--debug"])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 5
    out = capsys.readouterr().out
    assert "DEBUG DETAILS" in out
    assert "Traceback:" in out
    assert "Command: dupcheck --debug" in out


def test_cli_internal_error_debug_env_includes_traceback(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _boom() -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(cli, "_main_impl", _boom)
    monkeypatch.setenv("DUPCHECK_DEBUG", "1")
    monkeypatch.setattr(sys, "argv", ["dupcheck"])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 5
    assert "Traceback:" in capsys.readouterr().out


def test_cli_memory_limit_exit_code(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    from dupcheck.errors import MemoryLimitError

    def _boom() -> None:
        raise MemoryLimitError("too much", limit_bytes=1, used_bytes=2)

    monkeypatch.setattr(cli, "_main_impl", _boom)
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 4
    out = capsys.readouterr().out
    assert "MEMORY LIMIT:" in out
    assert "too much" in out


def test_argument_parser_contract_error_marker_for_invalid_args(
    capsys: pytest.CaptureFixture[str],
) -> None:
    parser = build_parser(__version__)
    with pytest.raises(SystemExit) as exc:
        parser.parse_args(["--unknown-flag"])
    assert exc.value.code == 2
    assert "CONTRACT ERROR:" in capsys.readouterr().err


def test_tuning_flags_default_to_none() -> None:
    args = build_parser(__version__).parse_args([])
    assert args.root == "."
    assert args.min_statements is None
    assert args.processes is None
    assert args.excludes is None
    assert args.lang is None


def test_resolve_language_precedence() -> None:
    cfg = DetectorConfig(language="ja")
    assert cli._resolve_language("en", cfg, environ={LANG_ENV_VAR: "ja"}) == "en"
    assert cli._resolve_language(None, DetectorConfig(), environ={LANG_ENV_VAR: "ja"}) == "ja"
    assert cli._resolve_language(None, cfg, environ={}) == "ja"


def test_resolve_language_unknown_env_warns() -> None:
    warnings: list[str] = []
    lang = cli._resolve_language(
        None, DetectorConfig(), environ={LANG_ENV_VAR: "de"}, warn=warnings.append
    )
    assert lang == "en"
    assert len(warnings) == 1
    assert "'de'" in warnings[0]


def test_load_detector_config_applies_overrides(tmp_path: Path) -> None:
    (tmp_path / "dupcheck.config.json").write_text(
        '{"processes": 3, "excludes": ["vendor"]}', "utf-8"
    )
    args = build_parser(__version__).parse_args(
        [str(tmp_path), "--exclude", "legacy", "--min-statements", "5", "--no-modules"]
    )
    config, config_path = cli._load_detector_config(args, tmp_path)
    assert config_path == tmp_path / "dupcheck.config.json"
    assert config.processes == 3
    assert config.excludes == ("vendor", "legacy")
    assert config.normalization.min_statements == 5
    assert config.check_modules is False
    assert config.check_functions is True


def test_resolve_config_path(tmp_path: Path) -> None:
    assert _resolve_config_path(None, tmp_path) is None
    explicit = _resolve_config_path(str(tmp_path / "custom.yaml"), tmp_path)
    assert explicit == (tmp_path / "custom.yaml").resolve()


def test_relative_or_absolute(tmp_path: Path) -> None:
    assert _relative_or_absolute(tmp_path / "a" / "b.json", tmp_path) == "a/b.json"
    outside = Path("/elsewhere/c.json")
    assert _relative_or_absolute(outside, tmp_path) == str(outside)


def test_build_report_meta(tmp_path: Path) -> None:
    meta = _build_report_meta(
        dupcheck_version="1.0.0",
        root=tmp_path,
        config=DetectorConfig(check_resources=False),
        config_path=tmp_path / "dupcheck.config.json",
        language="ja",
    )
    assert meta["config_path"] == "dupcheck.config.json"
    assert meta["checks"] == ["functions", "modules", "components"]
    assert meta["language"] == "ja"


def test_summary_value_style_mapping() -> None:
    style = cli_summary._summary_value_style
    assert style(label=ui.SUMMARY_LABEL_FUNCTIONS, value=0) == "dim"
    assert style(label=ui.SUMMARY_LABEL_FUNCTIONS, value=2) == "bold yellow"
    assert style(label=ui.SUMMARY_LABEL_FILES_SKIPPED, value=1) == "yellow"
    assert style(label=ui.SUMMARY_LABEL_FILES_FOUND, value=3) == "bold"


def test_build_summary_table_rows_and_styles() -> None:
    rows = cli_summary._build_summary_rows(
        AnalysisResult(files_found=2, files_analyzed=1, files_skipped=1)
    )
    table = cli_summary._build_summary_table(rows)
    assert table.title == ui.SUMMARY_TITLE
    assert table.columns[0]._cells == [label for label, _ in rows]
    value_cells = table.columns[1]._cells
    assert isinstance(value_cells[0], Text)
    assert str(value_cells[0]) == "2"
    assert cast(Text, value_cells[2]).style == "yellow"
    assert cast(Text, value_cells[3]).style == "dim"


def test_print_summary_invariant_warning(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli, "console", cli._make_console(no_color=True))
    cli_summary._print_summary(
        console=cli.console,
        quiet=False,
        result=AnalysisResult(files_found=1),
    )
    assert "Summary accounting mismatch" in capsys.readouterr().out


def test_print_summary_quiet_is_compact(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli, "console", cli._make_console(no_color=True))
    cli_summary._print_summary(
        console=cli.console, quiet=True, result=_result_with_groups()
    )
    out = capsys.readouterr().out
    assert "Input: found=7 analyzed=7 skipped=0" in out
    assert "functions=1 modules=0 resources=0 components=0" in out


def test_print_duplicates_truncates_unless_verbose(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli, "console", cli._make_console(no_color=True))
    result = _result_with_groups()

    cli_summary._print_duplicates(
        console=cli.console, result=result, lang="en", verbose=False
    )
    out = capsys.readouterr().out
    assert "Duplicate functions" in out
    assert "Function: add" in out
    assert "f4.js (fn4)" in out
    assert "f5.js" not in out
    assert "... and 2 more" in out

    cli_summary._print_duplicates(
        console=cli.console, result=result, lang="ja", verbose=True
    )
    out = capsys.readouterr().out
    assert "重複した関数" in out
    assert "f6.js (fn6)" in out


def test_print_duplicates_none_found(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli, "console", cli._make_console(no_color=True))
    cli_summary._print_duplicates(
        console=cli.console, result=AnalysisResult(), lang="ja", verbose=False
    )
    assert "重複は見つかりませんでした。" in capsys.readouterr().out
