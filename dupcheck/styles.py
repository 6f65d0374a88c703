"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from tree_sitter import Node

from .config import ComponentConfig
from .parser import (
    NOT_LITERAL,
    first_named,
    iter_descendants,
    literal_value,
    node_text,
    property_name,
    statements,
    template_raw,
    unwrap_parens,
)
from .similarity import jaccard, string_similarity

_CLASS_ATTRIBUTES = frozenset({"className", "class"})
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class StyledComponent:
    name: str
    base_tag: str
    css: str


@dataclass(frozen=True, slots=True)
class StyleSet:
    inline: tuple[Mapping[str, object], ...] = ()
    class_names: tuple[str, ...] = ()
    styled: tuple[StyledComponent, ...] = ()

    def is_empty(self) -> bool:
        return not (self.inline or self.class_names or self.styled)


# =========================
# Extraction
# =========================


def _attribute_parts(attr: Node) -> tuple[str, Node | None]:
    children = statements(attr)
    if not children:
        return "", None
    name = node_text(children[0])
    value = children[1] if len(children) > 1 else None
    if value is not None and value.type == "jsx_expression":
        inner = first_named(value)
        value = unwrap_parens(inner) if inner is not None else None
    return name, value


def _style_object(node: Node) -> dict[str, object]:
    style: dict[str, object] = {}
    for pair in statements(node):
        if pair.type != "pair":
            continue
        key = pair.child_by_field_name("key")
        value = literal_value(pair.child_by_field_name("value"))
        if key is None or value is NOT_LITERAL:
            continue
        style[property_name(key)] = value
    return style


def _class_tokens(node: Node) -> list[str]:
    value = literal_value(node)
    if not isinstance(value, str):
        return []
    return value.split()


def collect_styled_components(root: Node) -> dict[str, StyledComponent]:
    """`const Name = styled.tag\\`...\\`` declarations anywhere in a file."""
    found: dict[str, StyledComponent] = {}
    for node in iter_descendants(root):
        if node.type != "variable_declarator":
            continue
        name_node = node.child_by_field_name("name")
        value = node.child_by_field_name("value")
        if name_node is None or value is None or value.type != "call_expression":
            continue
        callee = value.child_by_field_name("function")
        template = value.child_by_field_name("arguments")
        if callee is None or callee.type != "member_expression":
            continue
        if template is None or template.type != "template_string":
            continue
        obj = callee.child_by_field_name("object")
        prop = callee.child_by_field_name("property")
        if obj is None or prop is None or node_text(obj) != "styled":
            continue
        name = node_text(name_node)
        found.setdefault(name, StyledComponent(name, node_text(prop), template_raw(template)))
    return found


def extract_styles(
    func_node: Node,
    styled_index: Mapping[str, StyledComponent],
) -> StyleSet:
    body = func_node.child_by_field_name("body")
    if body is None:
        return StyleSet()

    inline: list[dict[str, object]] = []
    class_names: list[str] = []
    styled: dict[str, StyledComponent] = {}

    for node in iter_descendants(body):
        if node.type in {"jsx_opening_element", "jsx_self_closing_element"}:
            tag = node.child_by_field_name("name")
            tag_name = node_text(tag)
            if tag_name in styled_index:
                styled.setdefault(tag_name, styled_index[tag_name])
            for attr in statements(node):
                if attr.type != "jsx_attribute":
                    continue
                name, value = _attribute_parts(attr)
                if value is None:
                    continue
                if name == "style" and value.type == "object":
                    inline.append(_style_object(value))
                elif name in _CLASS_ATTRIBUTES:
                    for token in _class_tokens(value):
                        if token not in class_names:
                            class_names.append(token)
        elif node.type == "variable_declarator":
            name_node = node.child_by_field_name("name")
            declared = node_text(name_node)
            if declared in styled_index:
                styled.setdefault(declared, styled_index[declared])

    return StyleSet(tuple(inline), tuple(class_names), tuple(styled.values()))


# =========================
# Comparison
# =========================


def _style_object_similarity(a: Mapping[str, object], b: Mapping[str, object]) -> float:
    if not a or not b:
        return 0.0
    matches = sum(1 for key, value in a.items() if key in b and b[key] == value)
    return matches / len(set(a) | set(b))


def compare_inline(
    a: tuple[Mapping[str, object], ...], b: tuple[Mapping[str, object], ...]
) -> float:
    if not a or not b:
        return 0.0
    total = sum(_style_object_similarity(x, y) for x in a for y in b)
    return total / (len(a) * len(b))


def compare_class_names(a: tuple[str, ...], b: tuple[str, ...]) -> float:
    if not a or not b:
        return 0.0
    return jaccard(set(a), set(b))


def css_similarity(a: str, b: str) -> float:
    return string_similarity(_WHITESPACE_RE.sub("", a), _WHITESPACE_RE.sub("", b))


def compare_styled(
    a: tuple[StyledComponent, ...], b: tuple[StyledComponent, ...]
) -> float:
    scores = [
        css_similarity(x.css, y.css) for x in a for y in b if x.base_tag == y.base_tag
    ]
    if not scores:
        return 0.0
    return sum(scores) / len(scores)


def compare_styles(a: StyleSet, b: StyleSet, cfg: ComponentConfig) -> float:
    # Identical sets, empty ones included, match outright. Otherwise every
    # category keeps its weight and an empty side scores 0.
    if a == b:
        return 1.0

    weighted = 0.0
    total = 0.0
    categories = (
        (cfg.inline_style_weight, a.inline, b.inline, compare_inline),
        (cfg.class_name_weight, a.class_names, b.class_names, compare_class_names),
        (cfg.styled_component_weight, a.styled, b.styled, compare_styled),
    )
    for weight, left, right, compare in categories:
        total += weight
        weighted += weight * compare(left, right)  # type: ignore[operator]
    return weighted / total if total > 0 else 0.0
