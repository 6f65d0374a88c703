"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from .components import ComponentDescriptor, find_duplicate_components
from .config import DetectorConfig
from .errors import ParseError, ResourceParseError
from .extractor import FunctionDescriptor, FunctionIndex, extract_units_from_source
from .memory import MemoryGuard
from .modules import ModuleDescriptor, ModuleSimilarityEngine, module_descriptor
from .parser import is_code_file
from .registry import Category, DuplicateGroup, DuplicateRegistry
from .resources import ResourceSimilarityEngine, load_resource
from .scanner import relative_path
from .similarity import SimilarityScorer

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
BATCH_SIZE = 100


# =========================
# Data structures
# =========================


@dataclass(slots=True)
class ProcessingResult:
    """Result of processing a single file."""

    filepath: str
    success: bool
    error: str | None = None
    error_kind: str | None = None
    functions: list[FunctionDescriptor] | None = None
    components: list[ComponentDescriptor] | None = None
    document: object = None
    is_resource: bool = False


@dataclass(frozen=True, slots=True)
class FileFailure:
    filepath: str
    kind: str
    message: str


@dataclass(slots=True)
class AnalysisResult:
    functions: list[DuplicateGroup] = field(default_factory=list)
    modules: list[DuplicateGroup] = field(default_factory=list)
    resources: list[DuplicateGroup] = field(default_factory=list)
    components: list[DuplicateGroup] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)
    files_found: int = 0
    files_analyzed: int = 0
    files_skipped: int = 0

    def group_count(self) -> int:
        return (
            len(self.functions)
            + len(self.modules)
            + len(self.resources)
            + len(self.components)
        )


# =========================
# Per-file work (runs in worker processes)
# =========================


def process_file(filepath: str, root: str, cfg: DetectorConfig) -> ProcessingResult:
    """
    Read one file and turn it into picklable descriptors.

    Never raises: every failure is reported through the returned result so
    that a single bad file cannot abort the run.
    """
    rel = relative_path(root, filepath)
    try:
        try:
            st_size = os.path.getsize(filepath)
            if st_size > MAX_FILE_SIZE:
                return ProcessingResult(
                    filepath=rel,
                    success=False,
                    error=f"File too large: {st_size} bytes (max {MAX_FILE_SIZE})",
                    error_kind="file_too_large",
                )
        except OSError as e:
            return ProcessingResult(
                filepath=rel,
                success=False,
                error=f"Cannot stat file: {e}",
                error_kind="source_read_error",
            )

        try:
            source = Path(filepath).read_text("utf-8")
        except UnicodeDecodeError as e:
            return ProcessingResult(
                filepath=rel,
                success=False,
                error=f"Encoding error: {e}",
                error_kind="source_read_error",
            )
        except OSError as e:
            return ProcessingResult(
                filepath=rel,
                success=False,
                error=f"Cannot read file: {e}",
                error_kind="source_read_error",
            )

        if not is_code_file(filepath):
            try:
                document = load_resource(source, rel)
            except ResourceParseError as e:
                return ProcessingResult(
                    filepath=rel,
                    success=False,
                    error=str(e),
                    error_kind="resource_parse_error",
                    is_resource=True,
                )
            return ProcessingResult(
                filepath=rel, success=True, document=document, is_resource=True
            )

        try:
            units = extract_units_from_source(source, rel, cfg)
        except ParseError as e:
            return ProcessingResult(
                filepath=rel,
                success=False,
                error=str(e),
                error_kind="parse_error",
            )
        return ProcessingResult(
            filepath=rel,
            success=True,
            functions=list(units.functions),
            components=list(units.components),
        )

    except Exception as e:
        return ProcessingResult(
            filepath=rel,
            success=False,
            error=f"Unexpected error: {type(e).__name__}: {e}",
            error_kind="unexpected_error",
        )


# =========================
# Orchestration
# =========================

ProgressCallback = Callable[[], None]
WarningCallback = Callable[[Exception], None]


def _process_sequential(
    files: Sequence[str],
    root: str,
    cfg: DetectorConfig,
    on_progress: ProgressCallback | None,
) -> dict[str, ProcessingResult]:
    results: dict[str, ProcessingResult] = {}
    for fp in files:
        results[fp] = process_file(fp, root, cfg)
        if on_progress is not None:
            on_progress()
    return results


def _process_parallel(
    files: Sequence[str],
    root: str,
    cfg: DetectorConfig,
    on_progress: ProgressCallback | None,
) -> dict[str, ProcessingResult]:
    results: dict[str, ProcessingResult] = {}
    with ProcessPoolExecutor(max_workers=cfg.processes) as executor:
        # Process in batches to manage memory
        for i in range(0, len(files), BATCH_SIZE):
            batch = files[i : i + BATCH_SIZE]
            futures = {
                executor.submit(process_file, fp, root, cfg): fp for fp in batch
            }
            for future in as_completed(futures):
                fp = futures[future]
                try:
                    results[fp] = future.result()
                except Exception as e:
                    results[fp] = ProcessingResult(
                        filepath=relative_path(root, fp),
                        success=False,
                        error=f"Worker failed: {e}",
                        error_kind="worker_error",
                    )
                if on_progress is not None:
                    on_progress()
    return results


def collect_results(
    files: Sequence[str],
    root: str,
    cfg: DetectorConfig,
    *,
    on_progress: ProgressCallback | None = None,
    on_fallback: WarningCallback | None = None,
) -> list[ProcessingResult]:
    """Process every file and return the results in input order."""
    if cfg.processes <= 1 or len(files) <= 1:
        by_path = _process_sequential(files, root, cfg, on_progress)
    else:
        try:
            by_path = _process_parallel(files, root, cfg, on_progress)
        except (OSError, RuntimeError, PermissionError) as e:
            if on_fallback is not None:
                on_fallback(e)
            by_path = _process_sequential(files, root, cfg, on_progress)
    return [by_path[fp] for fp in files]


def analyze_results(
    results: Sequence[ProcessingResult],
    cfg: DetectorConfig,
    *,
    guard: MemoryGuard | None = None,
) -> AnalysisResult:
    """
    Run every comparison pass over already-extracted descriptors.

    All mutable state (index, catalogues, registry) lives for this call only.
    """
    registry = DuplicateRegistry()
    analysis = AnalysisResult(files_found=len(results))

    code_results: list[ProcessingResult] = []
    documents: list[tuple[str, object]] = []
    for result in results:
        if not result.success:
            analysis.files_skipped += 1
            analysis.failures.append(
                FileFailure(
                    filepath=result.filepath,
                    kind=result.error_kind or "unexpected_error",
                    message=result.error or "",
                )
            )
            if not result.is_resource:
                code_results.append(result)
            continue
        analysis.files_analyzed += 1
        if result.is_resource:
            documents.append((result.filepath, result.document))
        else:
            code_results.append(result)

    if cfg.check_functions:
        index = FunctionIndex(registry)
        for result in code_results:
            for fn in result.functions or ():
                index.add(fn)

    if cfg.check_modules:
        modules: list[ModuleDescriptor | None] = [
            module_descriptor(r.filepath, (fn.digest for fn in r.functions or ()))
            if r.success
            else None
            for r in code_results
        ]
        ModuleSimilarityEngine(cfg.modules, registry, guard).compare_all(modules)

    if cfg.check_components:
        components = [c for r in code_results for c in r.components or ()]
        find_duplicate_components(components, cfg.components, registry)

    if cfg.check_resources:
        ResourceSimilarityEngine(
            cfg.resources, SimilarityScorer(cfg.scorer), registry
        ).run(documents)

    analysis.functions = registry.view(Category.FUNCTIONS)
    analysis.modules = registry.view(Category.MODULES)
    analysis.resources = registry.view(Category.RESOURCES)
    analysis.components = registry.view(Category.COMPONENTS)
    return analysis


def run_analysis(
    files: Sequence[str],
    root: str,
    cfg: DetectorConfig,
    *,
    guard: MemoryGuard | None = None,
    on_progress: ProgressCallback | None = None,
    on_fallback: WarningCallback | None = None,
) -> AnalysisResult:
    results = collect_results(
        files, root, cfg, on_progress=on_progress, on_fallback=on_fallback
    )
    return analyze_results(results, cfg, guard=guard)
