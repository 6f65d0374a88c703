"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum


class Category(str, Enum):
    FUNCTIONS = "functions"
    MODULES = "modules"
    RESOURCES = "resources"
    COMPONENTS = "components"


@dataclass(frozen=True, slots=True)
class Occurrence:
    filepath: str
    locator: str


@dataclass(slots=True)
class DuplicateGroup:
    key: str
    representative: object
    similarity: float
    occurrences: list[Occurrence] = field(default_factory=list)

    def add(self, occurrence: Occurrence) -> bool:
        if occurrence in self.occurrences:
            return False
        self.occurrences.append(occurrence)
        return True


class DuplicateRegistry:
    """
    Per-run store of duplicate groups, one map per category.

    Groups keep discovery order. Adding an occurrence that is already in a
    group is a no-op, and a group's similarity only ever grows. The registry
    expects a single writer.
    """

    __slots__ = ("_groups",)

    def __init__(self) -> None:
        self._groups: dict[Category, dict[str, DuplicateGroup]] = {
            category: {} for category in Category
        }

    def record(
        self,
        category: Category,
        key: str,
        *,
        representative: object,
        occurrences: Iterable[Occurrence],
        similarity: float,
    ) -> DuplicateGroup:
        if not 0.0 <= similarity <= 1.0:
            raise ValueError(f"similarity out of range: {similarity!r}")

        groups = self._groups[category]
        group = groups.get(key)
        if group is None:
            group = DuplicateGroup(
                key=key,
                representative=representative,
                similarity=similarity,
            )
            groups[key] = group
        elif similarity > group.similarity:
            group.similarity = similarity

        for occurrence in occurrences:
            group.add(occurrence)
        return group

    def get(self, category: Category, key: str) -> DuplicateGroup | None:
        return self._groups[category].get(key)

    def view(self, category: Category) -> list[DuplicateGroup]:
        groups = list(self._groups[category].values())
        if category is Category.RESOURCES:
            groups.sort(key=lambda g: g.similarity, reverse=True)
        return groups

    def counts(self) -> dict[Category, int]:
        return {category: len(groups) for category, groups in self._groups.items()}
