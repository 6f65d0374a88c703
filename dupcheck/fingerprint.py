"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable, Mapping


def sha1(s: str) -> str:
    return hashlib.sha1(s.encode("utf-8")).hexdigest()


def plain_value(value: object) -> object:
    """
    Copy of a parsed value with every mapping key turned into text.

    YAML allows keys of mixed types (``200`` next to ``default``), which
    neither sort nor serialize as JSON object keys.
    """
    if isinstance(value, Mapping):
        return {str(k): plain_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [plain_value(v) for v in value]
    return value


def canonical_json(value: object) -> str:
    """Stable text form of a parsed JSON/YAML value (key order independent)."""
    return json.dumps(
        plain_value(value),
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
        default=str,
    )


def value_digest(value: object) -> str:
    return sha1(canonical_json(value))


def pair_key(*digests: str) -> str:
    # Sorted so that comparing A with B and B with A yields the same key.
    return sha1("|".join(sorted(digests)))


def sequence_digest(tokens: Iterable[str]) -> str:
    return sha1("\n".join(tokens))
