"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from .contracts import REPORT_SCHEMA_VERSION
from .engine import AnalysisResult
from .fingerprint import canonical_json, plain_value
from .registry import DuplicateGroup
from .ui_messages import fmt_percent, tr

GroupRecord = dict[str, Any]

# Name of the locator field for each category in serialized occurrences.
LOCATOR_FIELDS: dict[str, str] = {
    "functions": "name",
    "modules": "scope",
    "resources": "key",
    "components": "name",
}


def _occurrences(group: DuplicateGroup, locator_field: str) -> list[dict[str, str]]:
    return [
        {"file": occ.filepath, locator_field: occ.locator} for occ in group.occurrences
    ]


def _function_record(group: DuplicateGroup) -> GroupRecord:
    return {
        "key": group.key,
        "function_name": group.representative,
        "similarity": group.similarity,
        "occurrences": _occurrences(group, LOCATOR_FIELDS["functions"]),
    }


def _module_record(group: DuplicateGroup) -> GroupRecord:
    return {
        "key": group.key,
        "similarity": fmt_percent(group.similarity),
        "similarity_ratio": group.similarity,
        "files": [occ.filepath for occ in group.occurrences],
    }


def _resource_record(group: DuplicateGroup) -> GroupRecord:
    return {
        "key": group.key,
        "value": plain_value(group.representative),
        "similarity": group.similarity,
        "occurrences": _occurrences(group, LOCATOR_FIELDS["resources"]),
    }


def _component_record(group: DuplicateGroup) -> GroupRecord:
    return {
        "key": group.key,
        "component_name": group.representative,
        "similarity": group.similarity,
        "occurrences": _occurrences(group, LOCATOR_FIELDS["components"]),
    }


def build_payload(
    result: AnalysisResult,
    meta: Mapping[str, object] | None = None,
) -> dict[str, object]:
    meta_payload = dict(meta or {})
    meta_payload["report_schema_version"] = REPORT_SCHEMA_VERSION
    meta_payload["files_found"] = result.files_found
    meta_payload["files_analyzed"] = result.files_analyzed
    meta_payload["files_skipped"] = result.files_skipped
    meta_payload["groups_counts"] = {
        "functions": len(result.functions),
        "modules": len(result.modules),
        "resources": len(result.resources),
        "components": len(result.components),
    }
    return {
        "meta": meta_payload,
        "functions": [_function_record(g) for g in result.functions],
        "modules": [_module_record(g) for g in result.modules],
        "resources": [_resource_record(g) for g in result.resources],
        "components": [_component_record(g) for g in result.components],
        "failures": [
            {"file": f.filepath, "kind": f.kind, "message": f.message}
            for f in result.failures
        ],
    }


def to_json_report(
    result: AnalysisResult,
    meta: Mapping[str, object] | None = None,
) -> str:
    # default=str: YAML resources may carry dates and other non-JSON scalars.
    return json.dumps(
        build_payload(result, meta),
        ensure_ascii=False,
        indent=2,
        default=str,
    )


def _format_meta_text_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "(none)"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value) or "(none)"
    text = str(value).strip()
    return text if text else "(none)"


def format_value(value: object, limit: int = 80) -> str:
    text = value if isinstance(value, str) else canonical_json(value)
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def group_heading(category: str, group: DuplicateGroup, lang: str) -> str:
    percent = fmt_percent(group.similarity)
    if category == "functions":
        return tr(lang, "function_group", name=group.representative)
    if category == "modules":
        return tr(lang, "module_group", percent=percent)
    if category == "resources":
        return tr(
            lang,
            "resource_group",
            value=format_value(group.representative),
            percent=percent,
        )
    return tr(lang, "component_group", name=group.representative, percent=percent)


def _section_lines(
    category: str, groups: Sequence[DuplicateGroup], lang: str
) -> list[str]:
    lines = [f"{tr(lang, category)} (groups={len(groups)})"]
    if not groups:
        lines.append("(none)")
        return lines
    for i, group in enumerate(groups):
        lines.append(f"\n=== #{i + 1} {group_heading(category, group, lang)} ===")
        lines.extend(
            tr(lang, "occurrence", file=occ.filepath, locator=occ.locator)
            for occ in group.occurrences
        )
    return lines


def to_text_report(
    *,
    result: AnalysisResult,
    meta: Mapping[str, object],
    lang: str = "en",
) -> str:
    lines = [
        "REPORT METADATA",
        "Report schema version: "
        f"{_format_meta_text_value(meta.get('report_schema_version'))}",
        f"DupCheck version: {_format_meta_text_value(meta.get('dupcheck_version'))}",
        f"Python version: {_format_meta_text_value(meta.get('python_version'))}",
        f"Root: {_format_meta_text_value(meta.get('root'))}",
        f"Config: {_format_meta_text_value(meta.get('config_path'))}",
        f"Checks: {_format_meta_text_value(meta.get('checks'))}",
        f"Files found: {result.files_found}",
        f"Files analyzed: {result.files_analyzed}",
        f"Files skipped: {result.files_skipped}",
    ]

    sections = (
        ("functions", result.functions),
        ("modules", result.modules),
        ("resources", result.resources),
        ("components", result.components),
    )
    for category, groups in sections:
        lines.append("")
        lines.extend(_section_lines(category, groups, lang))

    if result.failures:
        lines.append("")
        lines.append(f"FAILED FILES (count={len(result.failures)})")
        lines.extend(
            f"- {f.filepath} [{f.kind}]: {f.message}" for f in result.failures
        )

    return "\n".join(lines).rstrip() + "\n"
