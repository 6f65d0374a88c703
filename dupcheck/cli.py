"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import argparse
import os
import sys
import time
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.rule import Rule
from rich.theme import Theme

from . import __version__
from . import ui_messages as ui
from ._cli_args import build_parser
from ._cli_meta import _build_report_meta
from ._cli_paths import _resolve_config_path, _validate_output_path
from ._cli_summary import _print_duplicates, _print_summary
from .config import (
    SUPPORTED_LANGUAGES,
    DetectorConfig,
    NormalizationConfig,
    load_config,
)
from .contracts import LANG_ENV_VAR, ExitCode
from .engine import AnalysisResult, analyze_results, collect_results
from .errors import ConfigurationError, MemoryLimitError, ValidationError
from .memory import MemoryGuard
from .report import to_json_report, to_text_report
from .scanner import discover_files

# Custom theme for Rich
custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "dim": "dim",
    }
)


def _make_console(*, no_color: bool) -> Console:
    return Console(theme=custom_theme, width=100, no_color=no_color)


console = _make_console(no_color=False)


def print_banner() -> None:
    console.print(
        Panel(
            ui.banner_title(__version__),
            border_style="blue",
            padding=(0, 2),
            width=ui.CLI_LAYOUT_WIDTH,
            expand=False,
        )
    )


def _is_debug_enabled(
    *,
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> bool:
    args = list(sys.argv[1:] if argv is None else argv)
    debug_from_flag = any(arg == "--debug" for arg in args)
    env = os.environ if environ is None else environ
    debug_from_env = env.get("DUPCHECK_DEBUG") == "1"
    return debug_from_flag or debug_from_env


def _resolve_language(
    cli_value: str | None,
    config: DetectorConfig,
    *,
    environ: Mapping[str, str] | None = None,
    warn: Callable[[str], None] | None = None,
) -> str:
    """--lang, then the environment variable, then the config file."""
    if cli_value:
        return cli_value
    env = os.environ if environ is None else environ
    env_value = env.get(LANG_ENV_VAR, "").strip()
    if env_value:
        if env_value in SUPPORTED_LANGUAGES:
            return env_value
        if warn is not None:
            warn(ui.fmt_unknown_language(value=env_value, source=LANG_ENV_VAR))
    return config.language


def _load_detector_config(
    args: argparse.Namespace, root_path: Path
) -> tuple[DetectorConfig, Path | None]:
    """Config file (explicit or discovered at the root), then CLI overrides."""
    config_path = _resolve_config_path(args.config, root_path)
    config = load_config(config_path) if config_path is not None else DetectorConfig()

    config = config.with_overrides(
        processes=args.processes,
        memory_limit_mb=args.memory_limit_mb,
        max_files=args.max_files,
        excludes=(config.excludes + tuple(args.excludes)) if args.excludes else None,
        exclude_package_files=False if args.include_package_files else None,
        check_functions=False if args.no_functions else None,
        check_modules=False if args.no_modules else None,
        check_resources=False if args.no_resources else None,
        check_components=False if args.no_components else None,
    )
    if args.min_statements is not None:
        config = config.with_overrides(
            normalization=NormalizationConfig(min_statements=args.min_statements)
        )
    return config, config_path


def _main_impl() -> None:
    ap = build_parser(__version__)
    args = ap.parse_args()

    if args.quiet:
        args.no_progress = True

    global console
    console = _make_console(no_color=args.no_color)

    t0 = time.monotonic()

    if not args.quiet:
        print_banner()

    try:
        root_path = Path(args.root).resolve()
        if not root_path.exists():
            console.print(
                ui.fmt_contract_error(ui.ERR_ROOT_NOT_FOUND.format(path=root_path))
            )
            sys.exit(ExitCode.CONTRACT_ERROR)
    except OSError as e:
        console.print(ui.fmt_contract_error(ui.ERR_INVALID_ROOT_PATH.format(error=e)))
        sys.exit(ExitCode.CONTRACT_ERROR)

    # Configuration errors are reported before any scanning starts.
    try:
        config, config_path = _load_detector_config(args, root_path)
    except ConfigurationError as e:
        console.print(ui.fmt_contract_error(ui.fmt_invalid_config(e)))
        sys.exit(ExitCode.CONTRACT_ERROR)

    lang = _resolve_language(args.lang, config, warn=console.print)

    json_out_path: Path | None = None
    text_out_path: Path | None = None
    if args.json_out:
        json_out_path = _validate_output_path(
            args.json_out,
            expected_suffix=".json",
            label="JSON",
            console=console,
            invalid_message=ui.fmt_invalid_output_extension,
        )
    if args.text_out:
        text_out_path = _validate_output_path(
            args.text_out,
            expected_suffix=".txt",
            label="text",
            console=console,
            invalid_message=ui.fmt_invalid_output_extension,
        )

    if not args.quiet:
        console.print(ui.fmt_scanning_root(root_path))
        if config_path is not None:
            console.print(ui.fmt_path(ui.INFO_CONFIG_LOADED, config_path))

    guard = MemoryGuard(config.memory_limit_bytes)

    # Discovery phase
    try:
        if args.quiet:
            files = discover_files(
                str(root_path),
                config.excludes,
                exclude_package_files=config.exclude_package_files,
                max_files=config.max_files,
                guard=guard,
            )
        else:
            with console.status(ui.STATUS_DISCOVERING, spinner="dots"):
                files = discover_files(
                    str(root_path),
                    config.excludes,
                    exclude_package_files=config.exclude_package_files,
                    max_files=config.max_files,
                    guard=guard,
                )
    except ValidationError as e:
        console.print(ui.fmt_contract_error(str(e)))
        sys.exit(ExitCode.CONTRACT_ERROR)
    except OSError as e:
        console.print(ui.fmt_contract_error(ui.ERR_SCAN_FAILED.format(error=e)))
        sys.exit(ExitCode.CONTRACT_ERROR)

    all_files = files.code_files + files.resource_files
    total_files = len(all_files)

    def _on_fallback(error: Exception) -> None:
        console.print(ui.fmt_parallel_fallback(error))

    # Processing phase
    if args.no_progress:
        if not args.quiet:
            console.print(ui.fmt_processing(total_files))
        results = collect_results(
            all_files, str(root_path), config, on_fallback=_on_fallback
        )
    else:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
            console=console,
        ) as progress:
            task = progress.add_task(
                ui.INFO_ANALYZING.format(count=total_files), total=total_files
            )
            results = collect_results(
                all_files,
                str(root_path),
                config,
                on_progress=lambda: progress.advance(task),
                on_fallback=_on_fallback,
            )

    # Comparison phase
    if args.quiet:
        result = analyze_results(results, config, guard=guard)
    else:
        with console.status(ui.STATUS_COMPARING, spinner="dots"):
            result = analyze_results(results, config, guard=guard)

    _print_failures(result)

    if not args.quiet:
        console.print(Rule(style="dim"))

    _print_summary(console=console, quiet=args.quiet, result=result)
    if not args.quiet:
        _print_duplicates(console=console, result=result, lang=lang, verbose=args.verbose)

    report_meta = _build_report_meta(
        dupcheck_version=__version__,
        root=root_path,
        config=config,
        config_path=config_path,
        language=lang,
    )

    # Outputs
    output_notice_printed = False

    def _print_output_notice(message: str) -> None:
        nonlocal output_notice_printed
        if args.quiet:
            return
        if not output_notice_printed:
            console.print("")
            output_notice_printed = True
        console.print(message)

    def _write_report_output(*, out: Path, content: str, label: str) -> None:
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(content, "utf-8")
        except OSError as e:
            console.print(
                ui.fmt_contract_error(
                    ui.fmt_report_write_failed(label=label, path=out, error=e)
                )
            )
            sys.exit(ExitCode.CONTRACT_ERROR)

    if json_out_path:
        _write_report_output(
            out=json_out_path,
            content=to_json_report(result, report_meta),
            label="JSON",
        )
        _print_output_notice(ui.fmt_path(ui.INFO_JSON_REPORT_SAVED, json_out_path))

    if text_out_path:
        _write_report_output(
            out=text_out_path,
            content=to_text_report(result=result, meta=report_meta, lang=lang),
            label="text",
        )
        _print_output_notice(ui.fmt_path(ui.INFO_TEXT_REPORT_SAVED, text_out_path))

    if not args.quiet:
        elapsed = time.monotonic() - t0
        console.print(f"\n[dim]Done in {elapsed:.1f}s[/dim]")


def _print_failures(result: AnalysisResult) -> None:
    if not result.failures:
        return
    console.print(ui.fmt_failed_files_header(len(result.failures)))
    for failure in result.failures[:10]:
        console.print(f"  • {failure.filepath}: {failure.message}", markup=False)
    if len(result.failures) > 10:
        console.print(f"  ... and {len(result.failures) - 10} more")


def main() -> None:
    try:
        _main_impl()
    except SystemExit:
        raise
    except MemoryLimitError as e:
        console.print(ui.fmt_memory_limit(str(e)))
        sys.exit(ExitCode.MEMORY_LIMIT)
    except Exception as e:
        console.print(ui.fmt_internal_error(e, debug=_is_debug_enabled()))
        sys.exit(ExitCode.INTERNAL_ERROR)


if __name__ == "__main__":
    main()
