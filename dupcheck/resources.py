"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

import yaml

from .config import ResourceConfig
from .contracts import DOCUMENT_LOCATOR
from .errors import ResourceParseError
from .fingerprint import pair_key, value_digest
from .registry import Category, DuplicateRegistry, Occurrence
from .similarity import SimilarityScorer, ValueKind, value_kind

RESOURCE_SUFFIXES = (".json", ".yml", ".yaml")


@dataclass(frozen=True, slots=True)
class ResourceLeaf:
    filepath: str
    key_path: str
    value: object
    kind: ValueKind
    digest: str


def is_resource_file(path: str) -> bool:
    return Path(path).suffix.lower() in RESOURCE_SUFFIXES


def load_resource(source: str, filepath: str) -> object:
    """Parse a JSON or YAML document into plain Python values."""
    try:
        if Path(filepath).suffix.lower() == ".json":
            return json.loads(source)
        return yaml.safe_load(source)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ResourceParseError(f"Failed to parse {filepath}: {e}") from e


def _leaf(filepath: str, key_path: str, value: object) -> ResourceLeaf:
    return ResourceLeaf(filepath, key_path, value, value_kind(value), value_digest(value))


def iter_leaves(document: object, filepath: str) -> Iterator[ResourceLeaf]:
    """
    Walk a document depth-first in key order.

    Nested mappings are yielded as object entries and then descended into.
    Arrays and scalars are leaves. Empty containers carry nothing worth
    comparing and are skipped. A document that is not a mapping is a single
    leaf at the document locator.
    """
    if not isinstance(document, Mapping):
        if document is not None and document != []:
            yield _leaf(filepath, DOCUMENT_LOCATOR, document)
        return

    stack: list[tuple[str, Iterator[tuple[object, object]]]] = [
        ("", iter(document.items()))
    ]
    while stack:
        prefix, items = stack[-1]
        try:
            key, value = next(items)
        except StopIteration:
            stack.pop()
            continue
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            if value:
                yield _leaf(filepath, path, value)
                stack.append((path, iter(value.items())))
        elif isinstance(value, (list, tuple)):
            if value:
                yield _leaf(filepath, path, value)
        else:
            yield _leaf(filepath, path, value)


class ResourceSimilarityEngine:
    """
    Finds near-identical documents and values across resource files.

    Each pass compares every entry against the entries catalogued before it
    and catalogues the entry whatever the outcome. Catalogues are reset at
    the start of each pass.
    """

    __slots__ = ("_cfg", "_registry", "_scorer")

    def __init__(
        self,
        cfg: ResourceConfig,
        scorer: SimilarityScorer,
        registry: DuplicateRegistry,
    ) -> None:
        self._cfg = cfg
        self._scorer = scorer
        self._registry = registry

    def threshold_for(self, a: ValueKind, b: ValueKind) -> float:
        kinds = {a, b}
        if ValueKind.NUMBER in kinds:
            return self._cfg.number_threshold
        if kinds == {ValueKind.STRING}:
            return self._cfg.string_threshold
        if kinds == {ValueKind.ARRAY}:
            return self._cfg.array_threshold
        return self._cfg.default_threshold

    def compare_documents(self, documents: Sequence[tuple[str, object]]) -> None:
        seen: list[tuple[str, Mapping[str, object], str]] = []
        for filepath, document in documents:
            if not isinstance(document, Mapping):
                continue
            digest = value_digest(document)
            for prior_path, prior, prior_digest in seen:
                similarity = self._scorer.object_similarity(prior, document)
                if similarity < self._cfg.default_threshold:
                    continue
                self._registry.record(
                    Category.RESOURCES,
                    pair_key(f"document:{prior_digest}", f"document:{digest}"),
                    representative=prior,
                    occurrences=(
                        Occurrence(prior_path, DOCUMENT_LOCATOR),
                        Occurrence(filepath, DOCUMENT_LOCATOR),
                    ),
                    similarity=min(1.0, similarity),
                )
            seen.append((filepath, document, digest))

    def compare_leaves(self, documents: Sequence[tuple[str, object]]) -> None:
        seen: list[ResourceLeaf] = []
        for filepath, document in documents:
            for leaf in iter_leaves(document, filepath):
                self._compare_leaf(leaf, seen)
                seen.append(leaf)

    def _compare_leaf(self, leaf: ResourceLeaf, seen: Sequence[ResourceLeaf]) -> None:
        for prior in seen:
            if not self._scorer.compatible(prior.value, leaf.value):
                continue
            similarity = self._scorer.similarity(prior.value, leaf.value)
            if similarity < self.threshold_for(prior.kind, leaf.kind):
                continue
            self._registry.record(
                Category.RESOURCES,
                pair_key(prior.digest, leaf.digest),
                representative=prior.value,
                occurrences=(
                    Occurrence(prior.filepath, prior.key_path),
                    Occurrence(leaf.filepath, leaf.key_path),
                ),
                similarity=min(1.0, similarity),
            )

    def run(self, documents: Sequence[tuple[str, object]]) -> None:
        if self._cfg.compare_documents:
            self.compare_documents(documents)
        if self._cfg.compare_leaves:
            self.compare_leaves(documents)
