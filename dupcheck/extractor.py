"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from tree_sitter import Node

from .components import ComponentDescriptor, analyze_component
from .config import DetectorConfig
from .fingerprint import sequence_digest
from .normalize import normalized_sequence
from .parser import iter_descendants, node_text, parse_source
from .registry import Category, DuplicateRegistry, Occurrence
from .styles import collect_styled_components

# =========================
# Data structures
# =========================


@dataclass(frozen=True, slots=True)
class FunctionDescriptor:
    filepath: str
    name: str
    start_line: int
    end_line: int
    sequence: tuple[str, ...]
    digest: str


@dataclass(frozen=True, slots=True)
class SourceUnits:
    functions: tuple[FunctionDescriptor, ...]
    components: tuple[ComponentDescriptor, ...]


# =========================
# Helpers
# =========================

FUNCTION_DECLARATIONS = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
    }
)

_ASSIGNABLE_FUNCTIONS = frozenset({"arrow_function", "function_expression", "function"})


def iter_named_functions(root: Node) -> Iterator[tuple[str, Node]]:
    """
    Yield (name, node) for every named function, in source order.

    Covers function declarations and function values bound by a variable
    declarator. Nested and exported functions are included; anonymous
    functions are not.
    """
    for node in iter_descendants(root):
        if node.type in FUNCTION_DECLARATIONS:
            name = node.child_by_field_name("name")
            if name is not None:
                yield node_text(name), node
        elif node.type == "variable_declarator":
            name = node.child_by_field_name("name")
            value = node.child_by_field_name("value")
            if (
                name is not None
                and name.type == "identifier"
                and value is not None
                and value.type in _ASSIGNABLE_FUNCTIONS
            ):
                yield node_text(name), value


# =========================
# Exact-duplicate index
# =========================


class FunctionIndex:
    """
    Groups functions whose normalized bodies are identical.

    The first function seen with a digest becomes the group representative;
    the group is registered once a second function shares the digest.
    """

    __slots__ = ("_first", "_registry")

    def __init__(self, registry: DuplicateRegistry) -> None:
        self._first: dict[str, FunctionDescriptor] = {}
        self._registry = registry

    def add(self, fn: FunctionDescriptor) -> None:
        first = self._first.get(fn.digest)
        if first is None:
            self._first[fn.digest] = fn
            return
        self._registry.record(
            Category.FUNCTIONS,
            fn.digest,
            representative=first.name,
            occurrences=(
                Occurrence(first.filepath, first.name),
                Occurrence(fn.filepath, fn.name),
            ),
            similarity=1.0,
        )

    def __len__(self) -> int:
        return len(self._first)


# =========================
# Public API
# =========================


def extract_units_from_source(
    source: str,
    filepath: str,
    cfg: DetectorConfig,
) -> SourceUnits:
    tree = parse_source(source, filepath)
    root = tree.root_node

    functions: list[FunctionDescriptor] = []
    components: list[ComponentDescriptor] = []
    styled_index = collect_styled_components(root) if cfg.check_components else {}

    for name, node in iter_named_functions(root):
        sequence = normalized_sequence(node, cfg.normalization)
        if sequence:
            functions.append(
                FunctionDescriptor(
                    filepath=filepath,
                    name=name,
                    start_line=node.start_point[0] + 1,
                    end_line=node.end_point[0] + 1,
                    sequence=sequence,
                    digest=sequence_digest(sequence),
                )
            )

        if cfg.check_components:
            component = analyze_component(
                name,
                node,
                filepath,
                styled_index,
                with_hooks=cfg.components.enable_hooks,
                with_styles=cfg.components.enable_styles,
            )
            if component is not None:
                components.append(component)

    return SourceUnits(tuple(functions), tuple(components))
