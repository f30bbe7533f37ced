"""Settings management for commonjs-resolver.

Simple, scope-aware YAML settings. Keys understood:

    extensions: [js, json]          # file extensions indexed by a scan
    core:                           # core module overrides, id -> path
      backbone: /alloy/backbone.js
    log_level: INFO
    log_file: ./commonjs-resolver.log.jsonl
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import Literal

import yaml

from .models import CoreModule
from .registry import DEFAULT_EXTENSIONS

logger = logging.getLogger(__name__)

Scope = Literal["local", "project", "global"]

SETTINGS_DIRNAME = ".commonjs-resolver"


@dataclass
class SettingsPaths:
    """Standard paths for settings files."""

    global_settings: Path
    project_settings: Path
    local_settings: Path

    @classmethod
    def default(cls) -> SettingsPaths:
        """Create default paths for the standard layout."""
        return cls(
            global_settings=Path.home() / SETTINGS_DIRNAME / "settings.yaml",
            project_settings=Path.cwd() / SETTINGS_DIRNAME / "settings.yaml",
            local_settings=Path.cwd() / SETTINGS_DIRNAME / "settings.local.yaml",
        )


class ResolverSettings:
    """Settings manager with scope-aware merging.

    Scope priority (most specific wins):
    1. local (.commonjs-resolver/settings.local.yaml) - gitignored, machine-specific
    2. project (.commonjs-resolver/settings.yaml) - committed, team-shared
    3. global (~/.commonjs-resolver/settings.yaml) - user defaults
    """

    def __init__(self, paths: SettingsPaths | None = None) -> None:
        self.paths = paths or SettingsPaths.default()

    def get_merged_settings(self) -> dict[str, Any]:
        """Load and merge settings from all scopes."""
        result: dict[str, Any] = {}
        for path in [self.paths.global_settings, self.paths.project_settings, self.paths.local_settings]:
            result = self._deep_merge(result, self._load(path))
        return result

    # ----- Scan settings -----

    def get_extensions(self) -> list[str]:
        """Extensions indexed by a scan (default: js, json)."""
        extensions = self.get_merged_settings().get("extensions")
        if not extensions:
            return list(DEFAULT_EXTENSIONS)
        return [str(ext).lstrip(".") for ext in extensions]

    # ----- Core module table -----

    def get_core_modules(self) -> list[CoreModule]:
        """Core module overrides from the merged settings, in file order."""
        core = self.get_merged_settings().get("core") or {}
        if not isinstance(core, dict):
            logger.warning(f"Ignoring 'core' setting: expected a mapping, got {type(core).__name__}")
            return []
        return [CoreModule(id=str(module_id), path=str(path)) for module_id, path in core.items()]

    def set_core_module(self, module_id: str, path: str, scope: Scope = "project") -> None:
        settings = self._read_scope(scope)
        core = settings.get("core") or {}
        core[module_id] = path
        settings["core"] = core
        self._write_scope(scope, settings)

    def remove_core_module(self, module_id: str, scope: Scope = "project") -> bool:
        """Remove a core module override. Returns False if it was not set at scope."""
        settings = self._read_scope(scope)
        core = settings.get("core") or {}
        if module_id not in core:
            return False
        del core[module_id]
        if core:
            settings["core"] = core
        else:
            settings.pop("core", None)
        self._write_scope(scope, settings)
        return True

    # ----- Logging -----

    def get_log_level(self) -> str | None:
        return self.get_merged_settings().get("log_level")

    def get_log_file(self) -> str | None:
        return self.get_merged_settings().get("log_file")

    # ----- Scope utilities -----

    def _get_scope_path(self, scope: Scope) -> Path:
        """Get settings file path for scope."""
        return {
            "local": self.paths.local_settings,
            "project": self.paths.project_settings,
            "global": self.paths.global_settings,
        }[scope]

    def _load(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path) as f:
                content = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Skipping unreadable settings file {path}: {e}")
            return {}
        if not isinstance(content, dict):
            logger.warning(f"Skipping settings file {path}: top level is not a mapping")
            return {}
        return content

    def _read_scope(self, scope: Scope) -> dict[str, Any]:
        """Read settings from a specific scope."""
        return self._load(self._get_scope_path(scope))

    def _write_scope(self, scope: Scope, settings: dict[str, Any]) -> None:
        """Write settings to a specific scope."""
        path = self._get_scope_path(scope)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(settings, f, default_flow_style=False, sort_keys=False)

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dicts, overlay wins."""
        result = base.copy()
        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result


def get_settings() -> ResolverSettings:
    """Get a settings instance with default paths."""
    return ResolverSettings()
