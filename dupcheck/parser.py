"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import tree_sitter_javascript as tsjavascript
import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser, Tree

from .errors import ParseError

CODE_SUFFIXES = (".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx")

# Returned by literal_value() for nodes that are not plain literals.
NOT_LITERAL = object()

_PARSERS: dict[str, Parser] = {}


def _language_for(suffix: str) -> Language:
    if suffix == ".ts":
        return Language(tstypescript.language_typescript())
    if suffix == ".tsx":
        return Language(tstypescript.language_tsx())
    # The JavaScript grammar includes JSX.
    return Language(tsjavascript.language())


def _parser_for(suffix: str) -> Parser:
    grammar = suffix if suffix in {".ts", ".tsx"} else ".js"
    parser = _PARSERS.get(grammar)
    if parser is None:
        parser = Parser(_language_for(grammar))
        _PARSERS[grammar] = parser
    return parser


def is_code_file(path: str) -> bool:
    return Path(path).suffix.lower() in CODE_SUFFIXES


def parse_source(source: str, filepath: str) -> Tree:
    suffix = Path(filepath).suffix.lower()
    tree = _parser_for(suffix).parse(source.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        line = _first_error_line(root)
        raise ParseError(f"Failed to parse {filepath}: syntax error near line {line}")
    return tree


def _first_error_line(root: Node) -> int:
    for node in iter_descendants(root):
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
    return root.start_point[0] + 1


# =========================
# Node helpers
# =========================


def node_text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def statements(node: Node) -> list[Node]:
    return [c for c in node.named_children if c.type != "comment"]


def first_named(node: Node) -> Node | None:
    for child in node.named_children:
        if child.type != "comment":
            return child
    return None


def unwrap_parens(node: Node) -> Node:
    while node.type == "parenthesized_expression":
        inner = first_named(node)
        if inner is None:
            break
        node = inner
    return node


def return_argument(stmt: Node) -> Node | None:
    arg = first_named(stmt)
    return unwrap_parens(arg) if arg is not None else None


def iter_descendants(node: Node) -> Iterator[Node]:
    """Pre-order walk in source order, without recursion."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def string_value(node: Node) -> str:
    text = node_text(node)
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`":
        return text[1:-1]
    return text


def number_value(node: Node) -> int | float | None:
    text = node_text(node).replace("_", "")
    if text.endswith("n"):
        text = text[:-1]
    try:
        return int(text, 0)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return None


def template_raw(node: Node) -> str:
    """Raw text of a template literal with `${...}` substitutions removed."""
    source = node.text or b""
    base = node.start_byte
    parts: list[bytes] = []
    cursor = base + 1
    for child in node.children:
        if child.type == "template_substitution":
            parts.append(source[cursor - base : child.start_byte - base])
            cursor = child.end_byte
    parts.append(source[cursor - base : node.end_byte - base - 1])
    return b"".join(parts).decode("utf-8", errors="replace")


def literal_value(node: Node | None) -> object:
    if node is None:
        return NOT_LITERAL
    node = unwrap_parens(node)
    kind = node.type
    if kind == "string":
        return string_value(node)
    if kind == "template_string":
        if any(c.type == "template_substitution" for c in node.children):
            return NOT_LITERAL
        return template_raw(node)
    if kind == "number":
        value = number_value(node)
        return NOT_LITERAL if value is None else value
    if kind == "true":
        return True
    if kind == "false":
        return False
    if kind in {"null", "undefined"}:
        return None
    if kind == "unary_expression":
        operand = node.child_by_field_name("argument")
        operator = node.child_by_field_name("operator")
        if operand is not None and operator is not None and operator.type == "-":
            value = literal_value(operand)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return -value
    return NOT_LITERAL


def property_name(node: Node) -> str:
    if node.type in {"string", "template_string"}:
        return string_value(node)
    return node_text(node)
