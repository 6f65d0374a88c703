"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

from tree_sitter import Node

from .config import NormalizationConfig
from .parser import first_named, return_argument, statements, unwrap_parens

DECLARATION_TOKEN = "declaration"

_DECLARATION_TYPES = frozenset(
    {
        "lexical_declaration",
        "variable_declaration",
    }
)


def statement_token(stmt: Node) -> str:
    kind = stmt.type

    # All declarations collapse into one token so renamed variants match.
    if kind in _DECLARATION_TYPES:
        return DECLARATION_TOKEN

    if kind == "expression_statement":
        expr = first_named(stmt)
        return unwrap_parens(expr).type if expr is not None else kind

    if kind == "return_statement":
        arg = return_argument(stmt)
        if arg is None:
            return kind
        if arg.type == "binary_expression":
            op = arg.child_by_field_name("operator")
            return f"return-binary:{op.type if op is not None else '?'}"
        return f"return:{arg.type}"

    return kind


def normalized_sequence(func_node: Node, cfg: NormalizationConfig) -> tuple[str, ...]:
    """
    Reduce a function body to its canonical statement-category sequence.

    Identifiers and literals never reach the sequence; binary operators of
    returned expressions do. Bodies shorter than ``cfg.min_statements`` and
    nodes without a body yield an empty tuple.
    """
    body = func_node.child_by_field_name("body")
    if body is None:
        return ()

    if body.type == "statement_block":
        tokens = tuple(statement_token(stmt) for stmt in statements(body))
    else:
        tokens = (unwrap_parens(body).type,)

    if len(tokens) < cfg.min_statements:
        return ()
    return tokens
