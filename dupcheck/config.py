"""
DupCheck — duplicate function, module, resource and component detector
for JavaScript and TypeScript projects.

Copyright (c) 2026 Den Rozhnovskiy
Licensed under the MIT License.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigurationError

SUPPORTED_LANGUAGES = ("en", "ja")


@dataclass(frozen=True, slots=True)
class NormalizationConfig:
    min_statements: int = 3


@dataclass(frozen=True, slots=True)
class ScorerConfig:
    enable_string_comparison: bool = True
    enable_number_comparison: bool = True
    enable_array_comparison: bool = True
    enable_object_comparison: bool = True
    max_depth: int = 5
    structure_weight: float = 0.4
    value_weight: float = 0.6


@dataclass(frozen=True, slots=True)
class ResourceConfig:
    string_threshold: float = 0.8
    number_threshold: float = 0.9
    array_threshold: float = 0.7
    default_threshold: float = 0.8
    compare_documents: bool = True
    compare_leaves: bool = True


@dataclass(frozen=True, slots=True)
class ModuleConfig:
    duplicate_percent: float = 66.7


@dataclass(frozen=True, slots=True)
class ComponentConfig:
    props_weight: float = 0.5
    jsx_weight: float = 0.5
    structural_weight: float = 0.6
    hooks_weight: float = 0.2
    styles_weight: float = 0.2
    enable_hooks: bool = True
    enable_styles: bool = True
    state_hook_weight: float = 0.4
    effect_hook_weight: float = 0.4
    custom_hook_weight: float = 0.2
    inline_style_weight: float = 0.4
    class_name_weight: float = 0.4
    styled_component_weight: float = 0.2
    duplicate_threshold: float = 0.8


@dataclass(frozen=True, slots=True)
class DetectorConfig:
    normalization: NormalizationConfig = field(default_factory=NormalizationConfig)
    scorer: ScorerConfig = field(default_factory=ScorerConfig)
    resources: ResourceConfig = field(default_factory=ResourceConfig)
    modules: ModuleConfig = field(default_factory=ModuleConfig)
    components: ComponentConfig = field(default_factory=ComponentConfig)
    check_functions: bool = True
    check_modules: bool = True
    check_resources: bool = True
    check_components: bool = True
    memory_limit_mb: int = 2048
    processes: int = 4
    max_files: int = 100_000
    exclude_package_files: bool = True
    excludes: tuple[str, ...] = ()
    language: str = "en"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> DetectorConfig:
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )

        sections: dict[str, Any] = {}
        top: dict[str, Any] = {}
        for raw_key, value in data.items():
            key = _snake(str(raw_key))
            if key == "resource_comparison":
                # Legacy combined section: scorer toggles and per-type cutoffs.
                mapping = _require_mapping(key, value)
                sections.setdefault("scorer", {})
                sections.setdefault("resources", {})
                for sub_key, sub_value in mapping.items():
                    name = _snake(str(sub_key))
                    name = _LEGACY_RESOURCE_ALIASES.get(name, name)
                    if name in _field_names(ScorerConfig):
                        sections["scorer"][name] = sub_value
                    else:
                        sections["resources"][name] = sub_value
            elif key in _SECTIONS:
                mapping = _require_mapping(key, value)
                bucket = sections.setdefault(key, {})
                bucket.update({_snake(str(k)): v for k, v in mapping.items()})
            else:
                top[key] = value

        kwargs: dict[str, Any] = {}
        for name, section_cls in _SECTIONS.items():
            if name in sections:
                kwargs[_SECTION_ATTRS[name]] = _build_section(
                    name, section_cls, sections[name]
                )

        known_top = {f.name for f in fields(cls)} - set(_SECTION_ATTRS.values())
        defaults = cls()
        for key, value in top.items():
            if key not in known_top:
                raise ConfigurationError(f"Unknown configuration key: {key!r}")
            kwargs[key] = _coerce(key, value, getattr(defaults, key))

        config = cls(**kwargs)
        config.validate()
        return config

    def validate(self) -> None:
        for section in (
            self.normalization,
            self.scorer,
            self.resources,
            self.modules,
            self.components,
        ):
            for f in fields(section):
                _check_range(f.name, getattr(section, f.name))

        if self.normalization.min_statements < 1:
            raise ConfigurationError("functions.min_statements must be >= 1")
        if self.scorer.max_depth < 0:
            raise ConfigurationError("scorer.max_depth must be >= 0")
        if self.scorer.structure_weight + self.scorer.value_weight <= 0:
            raise ConfigurationError(
                "scorer.structure_weight + scorer.value_weight must be positive"
            )
        if not 0 <= self.modules.duplicate_percent <= 100:
            raise ConfigurationError("modules.duplicate_percent must be in [0, 100]")
        c = self.components
        if c.props_weight + c.jsx_weight <= 0:
            raise ConfigurationError(
                "components.props_weight + components.jsx_weight must be positive"
            )
        if c.structural_weight <= 0:
            raise ConfigurationError("components.structural_weight must be positive")
        if self.memory_limit_mb <= 0:
            raise ConfigurationError("memory_limit_mb must be a positive integer")
        if self.processes < 1:
            raise ConfigurationError("processes must be >= 1")
        if self.max_files < 1:
            raise ConfigurationError("max_files must be >= 1")
        if self.language not in SUPPORTED_LANGUAGES:
            raise ConfigurationError(
                f"language must be one of {', '.join(SUPPORTED_LANGUAGES)}"
            )

    @property
    def memory_limit_bytes(self) -> int:
        return self.memory_limit_mb * 1024 * 1024

    def with_overrides(self, **overrides: Any) -> DetectorConfig:
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        config = replace(self, **updates)
        config.validate()
        return config


_SECTIONS: dict[str, type] = {
    "functions": NormalizationConfig,
    "scorer": ScorerConfig,
    "resources": ResourceConfig,
    "modules": ModuleConfig,
    "components": ComponentConfig,
}

_SECTION_ATTRS = {
    "functions": "normalization",
    "scorer": "scorer",
    "resources": "resources",
    "modules": "modules",
    "components": "components",
}

# Older spellings accepted inside the `resourceComparison` section.
_LEGACY_RESOURCE_ALIASES = {
    "enable_array_order_check": "enable_array_comparison",
}

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL_RE.sub("_", key).lower()


def _field_names(cls: type) -> set[str]:
    return {f.name for f in fields(cls)}


def _require_mapping(name: str, value: object) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(
            f"Configuration section {name!r} must be a mapping, "
            f"got {type(value).__name__}"
        )
    return value


def _build_section(name: str, cls: type, values: Mapping[str, Any]) -> Any:
    defaults = cls()
    kwargs: dict[str, Any] = {}
    for key, value in values.items():
        if key not in _field_names(cls):
            raise ConfigurationError(f"Unknown key {key!r} in section {name!r}")
        kwargs[key] = _coerce(f"{name}.{key}", value, getattr(defaults, key))
    return cls(**kwargs)


def _coerce(name: str, value: object, default: object) -> Any:
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise ConfigurationError(f"{name} must be a boolean")
        return value
    if isinstance(default, int):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"{name} must be an integer")
        return value
    if isinstance(default, float):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigurationError(f"{name} must be a number")
        return float(value)
    if isinstance(default, tuple):
        if not isinstance(value, (list, tuple)) or not all(
            isinstance(v, str) for v in value
        ):
            raise ConfigurationError(f"{name} must be a list of strings")
        return tuple(value)
    if isinstance(default, str):
        if not isinstance(value, str):
            raise ConfigurationError(f"{name} must be a string")
        return value
    raise ConfigurationError(f"Unsupported configuration key: {name}")


def _check_range(name: str, value: object) -> None:
    if name.endswith("_weight") and isinstance(value, float) and value < 0:
        raise ConfigurationError(f"{name} must be non-negative")
    if name.endswith("_threshold") and isinstance(value, float):
        if not 0.0 <= value <= 1.0:
            raise ConfigurationError(f"{name} must be in [0, 1]")


def load_config(path: Path) -> DetectorConfig:
    try:
        text = path.read_text("utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

    try:
        if path.suffix.lower() in {".yml", ".yaml"}:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Malformed config file {path}: {e}") from e

    if data is None:
        data = {}
    return DetectorConfig.from_mapping(data)
