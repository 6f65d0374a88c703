"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from enum import Enum

import Levenshtein

from .config import ScorerConfig
from .fingerprint import canonical_json


class ValueKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOL = "boolean"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"


def value_kind(value: object) -> ValueKind:
    # bool is an int subclass: test it first so True never scores as 1.0.
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    # str, and YAML scalars such as dates, compare as text.
    return ValueKind.STRING


def numeric_string_value(value: object) -> float | None:
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def string_similarity(a: str, b: str) -> float:
    if a == b:
        return 1.0
    longest = max(len(a), len(b))
    return 1.0 - Levenshtein.distance(a, b) / longest


def number_similarity(a: float, b: float) -> float:
    if a == b:
        return 1.0
    if not (math.isfinite(a) and math.isfinite(b)):
        return 0.0
    diff = abs(a - b)
    if abs(a) < 1 and abs(b) < 1:
        return 1.0 - min(diff, 1.0)
    mean = (abs(a) + abs(b)) / 2
    return max(0.0, 1.0 - diff / mean)


def _number_score(a: object, b: object) -> float:
    if a == b:
        return 1.0
    try:
        return number_similarity(float(a), float(b))  # type: ignore[arg-type]
    except OverflowError:
        # JSON integers are unbounded; past the float range only equality counts.
        return 0.0


def jaccard(a: set[object] | frozenset[object], b: set[object] | frozenset[object]) -> float:
    if not a and not b:
        return 1.0
    return len(a & b) / len(a | b)


def _sorted_form(items: Sequence[object]) -> list[str]:
    return sorted(canonical_json(item) for item in items)


class SimilarityScorer:
    """
    Type-dispatched similarity of parsed JSON/YAML values.

    Every score is in [0, 1]. Operands of different kinds score 0, except a
    numeric string against a number while number comparison is enabled.
    A comparison disabled in the config scores 0.
    """

    __slots__ = ("cfg",)

    def __init__(self, cfg: ScorerConfig | None = None):
        self.cfg = cfg or ScorerConfig()

    def similarity(self, a: object, b: object, depth: int = 0) -> float:
        kind_a = value_kind(a)
        kind_b = value_kind(b)

        if kind_a is not kind_b:
            return self._coerced_similarity(a, kind_a, b, kind_b)

        if kind_a is ValueKind.STRING:
            if not self.cfg.enable_string_comparison:
                return 0.0
            return string_similarity(str(a), str(b))
        if kind_a is ValueKind.NUMBER:
            if not self.cfg.enable_number_comparison:
                return 0.0
            return _number_score(a, b)
        if kind_a is ValueKind.ARRAY:
            if not self.cfg.enable_array_comparison:
                return 0.0
            return self.array_similarity(a, b, depth)  # type: ignore[arg-type]
        if kind_a is ValueKind.OBJECT:
            if not self.cfg.enable_object_comparison:
                return 0.0
            return self.object_similarity(a, b, depth)
        # BOOL, NULL
        return 1.0 if a == b else 0.0

    def _coerced_similarity(
        self, a: object, kind_a: ValueKind, b: object, kind_b: ValueKind
    ) -> float:
        if not self.cfg.enable_number_comparison:
            return 0.0
        if kind_a is ValueKind.NUMBER and kind_b is ValueKind.STRING:
            other = numeric_string_value(b)
            if other is not None:
                return _number_score(a, other)
        if kind_a is ValueKind.STRING and kind_b is ValueKind.NUMBER:
            other = numeric_string_value(a)
            if other is not None:
                return _number_score(other, b)
        return 0.0

    def array_similarity(
        self, a: Sequence[object], b: Sequence[object], depth: int = 0
    ) -> float:
        """
        Blend of positional, best-match and sorted-equality terms.

        Not symmetric when lengths differ: best matches are taken for the
        left elements only.
        """
        if depth > self.cfg.max_depth:
            return 0.0
        if not a and not b:
            return 1.0
        if not a or not b:
            return 0.0

        longest = max(len(a), len(b))
        child_depth = depth + 1

        positional = (
            sum(self.similarity(x, y, child_depth) for x, y in zip(a, b)) / longest
        )
        best_match = (
            sum(max(self.similarity(x, y, child_depth) for y in b) for x in a)
            / longest
        )
        sorted_match = 1.0 if _sorted_form(a) == _sorted_form(b) else 0.0

        blended = 0.5 * positional + 0.3 * best_match + 0.2 * sorted_match
        return max(sorted_match, blended)

    def object_similarity(self, a: object, b: object, depth: int = 0) -> float:
        # Limit is checked before anything else, identical subtrees included.
        if depth > self.cfg.max_depth:
            return 0.0
        if a is b:
            return 1.0
        if not isinstance(a, Mapping) or not isinstance(b, Mapping):
            return 0.0
        if not a and not b:
            return 1.0

        common = [k for k in a if k in b]
        structural = len(common) / max(len(a), len(b))

        value = 0.0
        if common:
            # Normalized by the common-key count even when some comparisons
            # are disabled and contribute 0.
            total = sum(self.similarity(a[k], b[k], depth + 1) for k in common)
            value = total / len(common)

        sw = self.cfg.structure_weight
        vw = self.cfg.value_weight
        return (sw * structural + vw * value) / (sw + vw)

    def compatible(self, a: object, b: object) -> bool:
        """Whether two catalogued values are worth scoring against each other."""
        kind_a = value_kind(a)
        kind_b = value_kind(b)
        if kind_a is kind_b:
            return True
        if not self.cfg.enable_number_comparison:
            return False
        pair = {kind_a, kind_b}
        if pair != {ValueKind.NUMBER, ValueKind.STRING}:
            return False
        text = a if kind_a is ValueKind.STRING else b
        return numeric_string_value(text) is not None
