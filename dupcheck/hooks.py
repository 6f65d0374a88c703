"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from tree_sitter import Node

from .config import ComponentConfig
from .parser import (
    NOT_LITERAL,
    iter_descendants,
    literal_value,
    node_text,
    return_argument,
    statements,
    unwrap_parens,
)
from .similarity import jaccard, value_kind

_FUNCTION_TYPES = frozenset({"arrow_function", "function_expression", "function"})

T = TypeVar("T")


# =========================
# Data structures
# =========================


@dataclass(frozen=True, slots=True)
class StateHook:
    initial_kind: str
    initial_value: object
    setter: str | None


@dataclass(frozen=True, slots=True)
class EffectHook:
    dependencies: tuple[str, ...]
    has_effect_function: bool
    has_cleanup: bool


@dataclass(frozen=True, slots=True)
class CustomHook:
    name: str
    arguments: tuple[object, ...]


@dataclass(frozen=True, slots=True)
class HookSet:
    state: tuple[StateHook, ...] = ()
    effect: tuple[EffectHook, ...] = ()
    custom: tuple[CustomHook, ...] = ()

    def is_empty(self) -> bool:
        return not (self.state or self.effect or self.custom)


# =========================
# Extraction
# =========================


def _call_arguments(call: Node) -> list[Node]:
    args = call.child_by_field_name("arguments")
    if args is None or args.type != "arguments":
        return []
    return statements(args)


def _hook_name(call: Node) -> str | None:
    callee = call.child_by_field_name("function")
    if callee is None:
        return None
    if callee.type == "member_expression":
        # React.useState(...)
        callee = callee.child_by_field_name("property")
        if callee is None:
            return None
    elif callee.type != "identifier":
        return None
    name = node_text(callee)
    return name if name.startswith("use") else None


def _initial_state(node: Node | None) -> tuple[str, object]:
    if node is None:
        return "none", None
    node = unwrap_parens(node)
    value = literal_value(node)
    if value is not NOT_LITERAL:
        return value_kind(value).value, value
    if node.type == "identifier":
        return "identifier", node_text(node)
    if node.type == "object":
        return "object", None
    if node.type == "array":
        return "array", None
    if node.type in _FUNCTION_TYPES:
        return "function", None
    return "unknown", None


def _setter_name(call: Node) -> str | None:
    parent = call.parent
    if parent is None or parent.type != "variable_declarator":
        return None
    pattern = parent.child_by_field_name("name")
    if pattern is None or pattern.type != "array_pattern":
        return None
    elements = statements(pattern)
    if len(elements) < 2 or elements[1].type != "identifier":
        return None
    return node_text(elements[1])


def _dependency_names(node: Node | None) -> tuple[str, ...]:
    if node is None or node.type != "array":
        return ()
    names: list[str] = []
    for element in statements(node):
        if element.type in {"identifier", "member_expression"}:
            names.append(node_text(element))
        else:
            names.append("unknown")
    return tuple(names)


def _returns_cleanup(effect_fn: Node) -> bool:
    body = effect_fn.child_by_field_name("body")
    if body is None or body.type != "statement_block":
        return False
    for stmt in statements(body):
        if stmt.type != "return_statement":
            continue
        arg = return_argument(stmt)
        if arg is not None and arg.type in _FUNCTION_TYPES:
            return True
    return False


def _effect_hook(args: Sequence[Node]) -> EffectHook:
    effect_fn = unwrap_parens(args[0]) if args else None
    is_function = effect_fn is not None and effect_fn.type in _FUNCTION_TYPES
    return EffectHook(
        dependencies=_dependency_names(args[1] if len(args) > 1 else None),
        has_effect_function=is_function,
        has_cleanup=is_function and _returns_cleanup(effect_fn),  # type: ignore[arg-type]
    )


def _argument_value(node: Node) -> object:
    value = literal_value(node)
    if value is not NOT_LITERAL:
        return value
    return node_text(node)


def extract_hooks(func_node: Node) -> HookSet:
    """Collect every `use*` call inside a component body, nested scopes included."""
    body = func_node.child_by_field_name("body")
    if body is None:
        return HookSet()

    state: list[StateHook] = []
    effect: list[EffectHook] = []
    custom: list[CustomHook] = []

    for node in iter_descendants(body):
        if node.type != "call_expression":
            continue
        name = _hook_name(node)
        if name is None:
            continue
        args = _call_arguments(node)
        if name == "useState":
            kind, value = _initial_state(args[0] if args else None)
            state.append(StateHook(kind, value, _setter_name(node)))
        elif name == "useEffect":
            effect.append(_effect_hook(args))
        else:
            custom.append(CustomHook(name, tuple(_argument_value(a) for a in args)))

    return HookSet(tuple(state), tuple(effect), tuple(custom))


# =========================
# Comparison
# =========================


def setter_pattern(name: str | None) -> str:
    if not name:
        return "none"
    for prefix in ("set", "update", "toggle"):
        if name.startswith(prefix):
            return prefix
    return "other"


def compare_state_hooks(a: StateHook, b: StateHook) -> float:
    score = 0.0
    total = 0.5
    if a.initial_kind == b.initial_kind:
        score += 0.5 if a.initial_value == b.initial_value else 0.3
    if a.setter and b.setter:
        total += 0.5
        if setter_pattern(a.setter) == setter_pattern(b.setter):
            score += 0.5
    return score / total


def compare_effect_hooks(a: EffectHook, b: EffectHook) -> float:
    score = 0.0
    total = 0.7
    if a.has_effect_function and b.has_effect_function:
        total += 0.3
        if a.has_cleanup == b.has_cleanup:
            score += 0.3
    score += 0.7 * jaccard(set(a.dependencies), set(b.dependencies))
    return score / total


def compare_custom_hooks(a: CustomHook, b: CustomHook) -> float:
    if a.name != b.name:
        return 0.0
    longest = max(len(a.arguments), len(b.arguments))
    if longest == 0:
        # No arguments to match on.
        return 0.0
    matches = sum(1 for x, y in zip(a.arguments, b.arguments) if x == y)
    return matches / longest


def best_match_average(
    a: Sequence[T], b: Sequence[T], compare: Callable[[T, T], float]
) -> float:
    if not a or not b:
        return 0.0
    total = sum(max(compare(x, y) for y in b) for x in a)
    return total / max(len(a), len(b))


def compare_hooks(a: HookSet, b: HookSet, cfg: ComponentConfig) -> float:
    """
    Weighted hook similarity of two components.

    Every category keeps its weight. A category with no hooks on either side
    scores 0, so components without hooks share nothing here.
    """
    weighted = 0.0
    total = 0.0
    categories = (
        (cfg.state_hook_weight, a.state, b.state, compare_state_hooks),
        (cfg.effect_hook_weight, a.effect, b.effect, compare_effect_hooks),
        (cfg.custom_hook_weight, a.custom, b.custom, compare_custom_hooks),
    )
    for weight, left, right, compare in categories:
        total += weight
        weighted += weight * best_match_average(left, right, compare)  # type: ignore[arg-type]
    return weighted / total if total > 0 else 0.0
