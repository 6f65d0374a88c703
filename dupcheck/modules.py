"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .config import ModuleConfig
from .contracts import MEMORY_CHECK_INTERVAL, MODULE_LOCATOR
from .fingerprint import pair_key
from .memory import MemoryGuard
from .registry import Category, DuplicateRegistry, Occurrence


@dataclass(frozen=True, slots=True)
class ModuleDescriptor:
    filepath: str
    shapes: frozenset[str]


def module_descriptor(filepath: str, digests: Iterable[str]) -> ModuleDescriptor:
    return ModuleDescriptor(filepath, frozenset(digests))


def module_similarity(a: ModuleDescriptor | None, b: ModuleDescriptor | None) -> float:
    """Dice coefficient over the two files' function shapes."""
    # A file that failed to parse has no descriptor.
    if a is None or b is None:
        return 0.0
    total = len(a.shapes) + len(b.shapes)
    if total == 0:
        return 0.0
    return 2 * len(a.shapes & b.shapes) / total


def similarity_percent(similarity: float) -> float:
    return round(similarity * 100, 1)


class ModuleSimilarityEngine:
    __slots__ = ("_cfg", "_guard", "_registry")

    def __init__(
        self,
        cfg: ModuleConfig,
        registry: DuplicateRegistry,
        guard: MemoryGuard | None = None,
    ) -> None:
        self._cfg = cfg
        self._registry = registry
        self._guard = guard

    def compare_all(self, modules: Sequence[ModuleDescriptor | None]) -> int:
        comparisons = 0
        for i, a in enumerate(modules):
            for b in modules[i + 1 :]:
                comparisons += 1
                if self._guard is not None and comparisons % MEMORY_CHECK_INTERVAL == 0:
                    self._guard.check("module comparison")

                similarity = module_similarity(a, b)
                if a is None or b is None:
                    continue
                if similarity_percent(similarity) < self._cfg.duplicate_percent:
                    continue
                self._registry.record(
                    Category.MODULES,
                    pair_key(a.filepath, b.filepath),
                    representative=f"{similarity_percent(similarity)}%",
                    occurrences=(
                        Occurrence(a.filepath, MODULE_LOCATOR),
                        Occurrence(b.filepath, MODULE_LOCATOR),
                    ),
                    similarity=min(1.0, similarity),
                )
        return comparisons
