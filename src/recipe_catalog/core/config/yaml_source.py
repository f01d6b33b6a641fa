"""Settings source backed by the YAML files under ``config/``.

Every ``*.yaml`` in ``config/base`` is loaded in name order, then the files in
``config/environments/<APP_ENV>`` are merged over them key by key.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic_settings import PydanticBaseSettingsSource


if TYPE_CHECKING:
    from pydantic.fields import FieldInfo

# src/recipe_catalog/core/config/ is four levels below the project root.
_DEFAULT_CONFIG_DIR = Path(__file__).resolve().parents[4] / "config"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge nested mappings without mutating either argument."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = deep_merge(current, value)
        merged[key] = value
    return merged


def load_yaml_directory(directory: Path) -> dict[str, Any]:
    """Merge every YAML file in ``directory``; a missing directory yields ``{}``."""
    data: dict[str, Any] = {}
    if directory.is_dir():
        for path in sorted(directory.glob("*.yaml")):
            data = deep_merge(data, yaml.safe_load(path.read_text(encoding="utf-8")) or {})
    return data


class MultiYamlConfigSettingsSource(PydanticBaseSettingsSource):
    """``CONFIG_DIR`` relocates the config tree (used by the tests)."""

    def __init__(self, settings_cls: type[Any]) -> None:
        super().__init__(settings_cls)
        config_dir = Path(os.environ.get("CONFIG_DIR") or _DEFAULT_CONFIG_DIR)
        app_env = os.environ.get("APP_ENV", "development")
        self._data = deep_merge(
            load_yaml_directory(config_dir / "base"),
            load_yaml_directory(config_dir / "environments" / app_env),
        )

    def get_field_value(self, _field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, isinstance(value, dict | list)

    def __call__(self) -> dict[str, Any]:
        return self._data
