"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from tree_sitter import Node

from .config import ComponentConfig
from .fingerprint import pair_key
from .hooks import HookSet, compare_hooks, extract_hooks
from .parser import (
    NOT_LITERAL,
    first_named,
    literal_value,
    node_text,
    property_name,
    return_argument,
    statements,
    unwrap_parens,
)
from .registry import Category, DuplicateRegistry, Occurrence
from .styles import StyledComponent, StyleSet, compare_styles, extract_styles

FRAGMENT_TAG = "Fragment"
MAX_JSX_DEPTH = 64

JSX_ELEMENT_TYPES = frozenset({"jsx_element", "jsx_self_closing_element", "jsx_fragment"})


# =========================
# Data structures
# =========================


@dataclass(frozen=True, slots=True)
class PropInfo:
    name: str
    required: bool
    default: object = None


@dataclass(frozen=True, slots=True)
class JSXNode:
    tag: str
    attributes: tuple[tuple[str, object], ...] = ()
    children: tuple[JSXNode, ...] = ()


@dataclass(frozen=True, slots=True)
class ComponentDescriptor:
    filepath: str
    name: str
    start_line: int
    props: tuple[PropInfo, ...]
    jsx: JSXNode
    hooks: HookSet
    styles: StyleSet


@dataclass(frozen=True, slots=True)
class ComponentScore:
    props: float
    jsx: float
    structural: float
    hooks: float
    styles: float
    overall: float


# =========================
# Extraction
# =========================


def is_component_name(name: str) -> bool:
    return name[:1].isupper()


def returned_jsx(func_node: Node) -> Node | None:
    """The JSX a function renders: its first top-level return, or its expression body."""
    body = func_node.child_by_field_name("body")
    if body is None:
        return None
    if body.type == "statement_block":
        for stmt in statements(body):
            if stmt.type == "return_statement":
                arg = return_argument(stmt)
                return arg if arg is not None and arg.type in JSX_ELEMENT_TYPES else None
        return None
    body = unwrap_parens(body)
    return body if body.type in JSX_ELEMENT_TYPES else None


def _prop_from_pattern(item: Node) -> PropInfo | None:
    if item.type == "shorthand_property_identifier_pattern":
        return PropInfo(node_text(item), True)
    if item.type == "object_assignment_pattern":
        left = item.child_by_field_name("left")
        default = literal_value(item.child_by_field_name("right"))
        if left is None:
            return None
        return PropInfo(
            node_text(left), False, None if default is NOT_LITERAL else default
        )
    if item.type == "pair_pattern":
        key = item.child_by_field_name("key")
        value = item.child_by_field_name("value")
        if key is None:
            return None
        if value is not None and value.type == "assignment_pattern":
            default = literal_value(value.child_by_field_name("right"))
            return PropInfo(
                property_name(key), False, None if default is NOT_LITERAL else default
            )
        return PropInfo(property_name(key), True)
    return None


def extract_props(func_node: Node) -> tuple[PropInfo, ...]:
    params = func_node.child_by_field_name("parameters")
    if params is None:
        # Single bare arrow parameter: nothing to destructure.
        return ()
    first = first_named(params)
    if first is None:
        return ()
    if first.type in {"required_parameter", "optional_parameter"}:
        first = first.child_by_field_name("pattern")
    if first is not None and first.type == "assignment_pattern":
        first = first.child_by_field_name("left")
    if first is None or first.type != "object_pattern":
        return ()

    props: list[PropInfo] = []
    for item in statements(first):
        prop = _prop_from_pattern(item)
        if prop is not None:
            props.append(prop)
    return tuple(props)


def _jsx_attribute(attr: Node) -> tuple[str, object]:
    children = statements(attr)
    name = node_text(children[0]) if children else ""
    value: object = None
    if len(children) > 1 and children[1].type == "string":
        value = literal_value(children[1])
    return name, value


def build_jsx_tree(node: Node, depth: int = 0) -> JSXNode:
    if node.type == "jsx_self_closing_element":
        opening: Node | None = node
    else:
        opening = node.child_by_field_name("open_tag")

    tag = FRAGMENT_TAG
    attributes: tuple[tuple[str, object], ...] = ()
    if opening is not None:
        name = opening.child_by_field_name("name")
        if name is not None:
            tag = node_text(name)
        attributes = tuple(
            _jsx_attribute(a) for a in statements(opening) if a.type == "jsx_attribute"
        )

    children: tuple[JSXNode, ...] = ()
    if node.type != "jsx_self_closing_element" and depth < MAX_JSX_DEPTH:
        children = tuple(
            build_jsx_tree(child, depth + 1)
            for child in node.named_children
            if child.type in JSX_ELEMENT_TYPES
        )
    return JSXNode(tag, attributes, children)


def analyze_component(
    name: str,
    func_node: Node,
    filepath: str,
    styled_index: Mapping[str, StyledComponent],
    *,
    with_hooks: bool = True,
    with_styles: bool = True,
) -> ComponentDescriptor | None:
    if not is_component_name(name):
        return None
    jsx = returned_jsx(func_node)
    if jsx is None:
        return None
    return ComponentDescriptor(
        filepath=filepath,
        name=name,
        start_line=func_node.start_point[0] + 1,
        props=extract_props(func_node),
        jsx=build_jsx_tree(jsx),
        hooks=extract_hooks(func_node) if with_hooks else HookSet(),
        styles=extract_styles(func_node, styled_index) if with_styles else StyleSet(),
    )


# =========================
# Comparison
# =========================


def _match_fraction(a: Sequence[object], b: Sequence[object]) -> float:
    if not a and not b:
        return 1.0
    matches = sum(1 for item in a if item in b)
    return matches / max(len(a), len(b))


def compare_props(a: Sequence[PropInfo], b: Sequence[PropInfo]) -> float:
    return _match_fraction(a, b)


def compare_jsx(a: JSXNode, b: JSXNode) -> float:
    if a.tag != b.tag:
        return 0.0
    attributes = _match_fraction(a.attributes, b.attributes)
    if not a.children and not b.children:
        children = 1.0
    else:
        total = sum(compare_jsx(x, y) for x, y in zip(a.children, b.children))
        children = total / max(len(a.children), len(b.children))
    return min(1.0, 0.4 + 0.3 * attributes + 0.3 * children)


def compare_components(
    a: ComponentDescriptor, b: ComponentDescriptor, cfg: ComponentConfig
) -> ComponentScore:
    props = compare_props(a.props, b.props)
    jsx = compare_jsx(a.jsx, b.jsx)
    structural = (cfg.props_weight * props + cfg.jsx_weight * jsx) / (
        cfg.props_weight + cfg.jsx_weight
    )

    hooks = compare_hooks(a.hooks, b.hooks, cfg)
    styles = compare_styles(a.styles, b.styles, cfg)

    weighted = cfg.structural_weight * structural
    total = cfg.structural_weight
    if cfg.enable_hooks:
        weighted += cfg.hooks_weight * hooks
        total += cfg.hooks_weight
    if cfg.enable_styles:
        weighted += cfg.styles_weight * styles
        total += cfg.styles_weight

    return ComponentScore(
        props=props,
        jsx=jsx,
        structural=structural,
        hooks=hooks,
        styles=styles,
        overall=min(1.0, weighted / total),
    )


def find_duplicate_components(
    components: Sequence[ComponentDescriptor],
    cfg: ComponentConfig,
    registry: DuplicateRegistry,
) -> None:
    for i, a in enumerate(components):
        for b in components[i + 1 :]:
            score = compare_components(a, b, cfg)
            if score.overall < cfg.duplicate_threshold:
                continue
            registry.record(
                Category.COMPONENTS,
                pair_key(f"{a.filepath}:{a.name}", f"{b.filepath}:{b.name}"),
                representative=a.name,
                occurrences=(
                    Occurrence(a.filepath, a.name),
                    Occurrence(b.filepath, b.name),
                ),
                similarity=score.overall,
            )
