"""Location configuration — process properties and environment, with JSON overrides."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from loguru import logger

_instance: "LocationConfig | None" = None

# Environment variable naming a JSON file of extra properties
PROPERTIES_FILE_ENV = "ANDROID_LOCATION_PROPERTIES"


def get_config() -> LocationConfig:
    """Module-level factory — single global LocationConfig instance."""
    global _instance
    if _instance is None:
        properties_file = os.environ.get(PROPERTIES_FILE_ENV)
        _instance = LocationConfig(properties_file=Path(properties_file) if properties_file else None)
    return _instance


def reset_config() -> None:
    """Reset the global config instance (for testing)."""
    global _instance
    _instance = None


class LocationConfig:
    """
    Property table and environment the locator reads candidate paths from.

    Properties play the role of JVM system properties: ``user.home`` is
    always present unless explicitly overridden, and any other name
    (``ANDROID_SDK_HOME``, ``ANDROID_AVD_HOME``) may be supplied.
    """

    def __init__(
        self,
        properties: Mapping[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
        properties_file: Path | None = None,
    ) -> None:
        self._environ: Mapping[str, str] = os.environ if environ is None else environ
        self._path = properties_file
        self._data: dict[str, Any] = self._defaults()
        self._load()
        if properties:
            self._deep_merge(self._data, dict(properties))

    @staticmethod
    def _defaults() -> dict[str, Any]:
        return {"user.home": os.path.expanduser("~")}

    def _load(self) -> None:
        """Merge properties from the JSON file, if one was given."""
        if self._path is None or not self._path.exists():
            return
        try:
            with open(self._path, encoding="utf-8") as f:
                user_data = json.load(f)
            if not isinstance(user_data, dict):
                raise ValueError("top-level JSON value must be an object")
            self._deep_merge(self._data, user_data)
        except (json.JSONDecodeError, OSError, ValueError) as e:
            logger.warning(f"Failed to load properties from {self._path}, using defaults: {e}")

    def _deep_merge(self, base: dict, override: dict) -> None:
        """Recursively merge override into base."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    # ── Access ──

    def get_property(self, name: str) -> str | None:
        value = self._data.get(name)
        if value is None or isinstance(value, dict):
            return None
        return str(value)

    def get_env(self, name: str) -> str | None:
        return self._environ.get(name)

    def set(self, name: str, value: Any) -> None:
        """Set (or with ``None``, clear) a property."""
        if value is None:
            self._data.pop(name, None)
        else:
            self._data[name] = value

    @property
    def properties(self) -> dict[str, Any]:
        return dict(self._data)
