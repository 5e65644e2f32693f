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
"""Weaver configuration: packaged defaults, a project YAML file, env overrides.

Only two sections exist today, ``pyweave.logging`` (read by
:class:`~pyweave.logging.StructlogAdapter`) and ``pyweave.aop.locator``
(bound to :class:`~pyweave.aop.properties.LocatorProperties`).
"""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, cast, get_type_hints

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

T = TypeVar("T")

_CONFIG_PROPERTIES_ATTR = "__pyweave_config_prefix__"

_ENV_PREFIX = "PYWEAVE_"

_PROJECT_FILE = "pyweave.yaml"

_TRUE_STRINGS = frozenset({"true", "1", "yes"})


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass or Pydantic model as bindable to a configuration prefix.

    Usage:
        @config_properties(prefix="pyweave.aop.locator")
        @dataclass
        class LocatorProperties:
            exclude_ancestor_methods: bool = False
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


class Config:
    """Nested configuration with dot-notation access.

    Priority (highest wins):
    1. Environment variables (``pyweave.aop.locator.x`` -> ``PYWEAVE_AOP_LOCATOR_X``)
    2. ``pyweave.yaml`` in the project directory
    3. Packaged ``pyweave-defaults.yaml``
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def from_sources(cls, base_dir: str | Path = ".", load_defaults: bool = True) -> Config:
        """Merge the packaged defaults with ``<base_dir>/pyweave.yaml`` if present."""
        data = cls._load_defaults() if load_defaults else {}
        project_file = Path(base_dir) / _PROJECT_FILE
        if project_file.is_file():
            with open(project_file) as f:
                data = cls._deep_merge(data, yaml.safe_load(f) or {})
        return cls(data)

    @staticmethod
    def _load_defaults() -> dict[str, Any]:
        defaults_file = importlib.resources.files("pyweave.resources").joinpath("pyweave-defaults.yaml")
        with importlib.resources.as_file(defaults_file) as p, open(p) as f:
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

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key; a matching env var wins."""
        env_key = _ENV_PREFIX + key.removeprefix("pyweave.").upper().replace(".", "_").replace("-", "_")
        env_val = os.environ.get(env_key)
        if env_val is not None:
            return env_val

        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or current.get(part) is None:
                return default
            current = current[part]
        return current

    def get_section(self, prefix: str) -> dict[str, Any]:
        """All values under *prefix*, with env overrides applied to its leaf keys."""
        section = self._data
        for part in prefix.split("."):
            section = section.get(part) if isinstance(section, dict) else None
        if not isinstance(section, dict):
            return {}
        return {name: self.get(f"{prefix}.{name}", value) for name, value in section.items()}

    def bind(self, config_cls: type[T]) -> T:
        """Bind the section named by ``@config_properties`` to *config_cls*."""
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{config_cls.__name__} is not decorated with @config_properties")

        if isinstance(config_cls, type) and issubclass(config_cls, BaseModel):
            section = self.get_section(prefix)
            for name in config_cls.model_fields:
                env_val = self.get(f"{prefix}.{name}")
                if env_val is not None:
                    section[name] = env_val
            try:
                return cast(T, config_cls.model_validate(section))
            except ValidationError as exc:
                raise ValueError(
                    f"Configuration validation failed for '{config_cls.__name__}' (prefix='{prefix}'):\n{exc}"
                ) from exc

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name}")
            if value is None:
                continue
            expected_type = hints.get(field.name)
            if isinstance(value, str) and expected_type in (int, float):
                value = expected_type(value)
            elif isinstance(value, str) and expected_type is bool:
                value = value.lower() in _TRUE_STRINGS
            kwargs[field.name] = value
        return config_cls(**kwargs)
