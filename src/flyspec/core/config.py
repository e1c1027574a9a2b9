# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Layered configuration: packaged defaults, YAML/TOML files, env vars, binding."""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

T = TypeVar("T")

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")
_ENV_PREFIX = "FLYSPEC_"
_MAX_PLACEHOLDER_DEPTH = 10

_CONFIG_PROPERTIES_ATTR = "__flyspec_config_prefix__"


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass or pydantic model as bindable to a configuration prefix.

    Usage::

        @config_properties(prefix="flyspec.specification")
        class SpecificationProperties(BaseModel):
            default_alias: str = "e"
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


class Config:
    """Nested configuration with dot-notation access.

    Lookup order (first hit wins):

    1. Environment variable (``flyspec.logging.format`` -> ``FLYSPEC_LOGGING_FORMAT``)
    2. Loaded file values merged over the packaged defaults
    3. The ``default`` passed to :meth:`get`
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load a YAML or TOML file, plus ``<stem>-<profile><suffix>`` overlays.

        Missing files are skipped, so an absent ``flyspec.yaml`` yields the
        packaged defaults alone.
        """
        path = Path(path)
        data = cls._load_defaults() if load_defaults else {}
        candidates = [path] + [path.with_name(f"{path.stem}-{p}{path.suffix}") for p in active_profiles or []]
        if path.is_file():
            for candidate in filter(Path.is_file, candidates):
                data = cls._deep_merge(data, cls._load_config_data(candidate))
        return cls(data)

    @staticmethod
    def _load_config_data(path: Path) -> dict[str, Any]:
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f) or {}
        with open(path) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _load_defaults() -> dict[str, Any]:
        defaults = importlib.resources.files("flyspec.resources").joinpath("flyspec-defaults.yaml")
        with importlib.resources.as_file(defaults) as p, open(p) as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        merged = dict(base)
        for key, value in override.items():
            if isinstance(merged.get(key), dict) and isinstance(value, dict):
                merged[key] = Config._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    @staticmethod
    def _env_key(key: str) -> str:
        base = key.removeprefix("flyspec.")
        return _ENV_PREFIX + base.upper().replace(".", "_").replace("-", "_")

    def _lookup(self, key: str) -> Any:
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(part)
            if current is None:
                return None
        return current

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, checking env vars first.

        String values may hold ``${ENV_VAR}``, ``${other.key}`` or
        ``${key:default}`` placeholders.
        """
        value = self._resolve(key, self._lookup(key))
        return default if value is None else value

    def _resolve(self, key: str, raw: Any) -> Any:
        env_val = os.environ.get(self._env_key(key))
        if env_val is not None:
            return env_val
        if isinstance(raw, str) and "${" in raw:
            return self._resolve_placeholders(raw)
        return raw

    def _resolve_placeholders(self, value: str, _depth: int = 0) -> str:
        if _depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(f"Placeholder nesting too deep in '{value}' (circular reference?)")

        def _replace(match: re.Match[str]) -> str:
            ref_key, sep, default_val = match.group(1).partition(":")

            env_val = os.environ.get(ref_key)
            if env_val is not None:
                return env_val

            found = self._lookup(ref_key)
            if found is not None:
                resolved = str(found)
                if "${" in resolved:
                    resolved = self._resolve_placeholders(resolved, _depth + 1)
                return resolved

            if sep:
                return default_val
            raise ValueError(f"Cannot resolve placeholder '${{{match.group(1)}}}'")

        return _PLACEHOLDER_RE.sub(_replace, value)

    def get_section(self, prefix: str, fields: Iterable[str] = ()) -> dict[str, Any]:
        """Return the section under *prefix* with env overrides and placeholders applied.

        Names in *fields* that the section lacks are still looked up in the
        environment, so ``FLYSPEC_*`` variables can supply values no file sets.
        """
        section = self._lookup(prefix)
        raw: dict[str, Any] = dict(section) if isinstance(section, dict) else {}
        for name in fields:
            raw.setdefault(name, None)

        resolved: dict[str, Any] = {}
        for key, value in raw.items():
            full_key = f"{prefix}.{key}"
            if isinstance(value, dict):
                resolved[key] = self.get_section(full_key)
                continue
            value = self._resolve(full_key, value)
            if value is not None:
                resolved[key] = value
        return resolved

    def bind(self, config_cls: type[T]) -> T:
        """Build a ``@config_properties`` dataclass or pydantic model from its section."""
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        if issubclass(config_cls, BaseModel):
            section = self.get_section(prefix, config_cls.model_fields)
            try:
                return config_cls.model_validate(section)
            except ValidationError as exc:
                raise ValueError(
                    f"Configuration validation failed for '{config_cls.__name__}' (prefix='{prefix}'):\n{exc}"
                ) from exc

        fields = dataclasses.fields(config_cls)  # type: ignore[arg-type]
        section = self.get_section(prefix, [f.name for f in fields])
        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in fields:
            if field.name not in section:
                continue
            value = section[field.name]
            expected = hints.get(field.name)
            if isinstance(value, str):
                if expected is int:
                    value = int(value)
                elif expected is float:
                    value = float(value)
                elif expected is bool:
                    value = value.lower() in ("true", "1", "yes")
            kwargs[field.name] = value
        return config_cls(**kwargs)
