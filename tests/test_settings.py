"""Tests for scope-aware YAML settings."""

import logging
from pathlib import Path

import pytest
import yaml

from commonjs_resolver.models import CoreModule
from commonjs_resolver.settings import ResolverSettings
from commonjs_resolver.settings import SettingsPaths


@pytest.fixture
def settings_paths(tmp_path: Path) -> SettingsPaths:
    return SettingsPaths(
        global_settings=tmp_path / "home" / "settings.yaml",
        project_settings=tmp_path / "project" / "settings.yaml",
        local_settings=tmp_path / "project" / "settings.local.yaml",
    )


def _write(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data))


def test_defaults_without_files(settings_paths):
    settings = ResolverSettings(settings_paths)
    assert settings.get_extensions() == ["js", "json"]
    assert settings.get_core_modules() == []
    assert settings.get_log_level() is None
    assert settings.get_log_file() is None


def test_most_specific_scope_wins(settings_paths):
    _write(settings_paths.global_settings, {"extensions": ["js"], "log_level": "DEBUG"})
    _write(settings_paths.project_settings, {"extensions": ["js", "json", "node"]})
    _write(settings_paths.local_settings, {"log_level": "TRACE"})

    settings = ResolverSettings(settings_paths)

    assert settings.get_extensions() == ["js", "json", "node"]
    assert settings.get_log_level() == "TRACE"


def test_core_modules_deep_merge(settings_paths):
    _write(settings_paths.global_settings, {"core": {"backbone": "/alloy/backbone.js", "ti": "/ti.js"}})
    _write(settings_paths.project_settings, {"core": {"backbone": "/vendor/backbone.js"}})

    modules = ResolverSettings(settings_paths).get_core_modules()

    assert modules == [
        CoreModule(id="backbone", path="/vendor/backbone.js"),
        CoreModule(id="ti", path="/ti.js"),
    ]


def test_extensions_strip_leading_dot(settings_paths):
    _write(settings_paths.project_settings, {"extensions": [".js", ".tss"]})
    assert ResolverSettings(settings_paths).get_extensions() == ["js", "tss"]


def test_set_and_remove_core_module(settings_paths):
    settings = ResolverSettings(settings_paths)

    settings.set_core_module("backbone", "/alloy/backbone.js", scope="project")
    assert settings.get_core_modules() == [CoreModule(id="backbone", path="/alloy/backbone.js")]
    assert yaml.safe_load(settings_paths.project_settings.read_text()) == {
        "core": {"backbone": "/alloy/backbone.js"}
    }

    assert settings.remove_core_module("backbone", scope="project") is True
    assert settings.get_core_modules() == []
    assert settings.remove_core_module("backbone", scope="project") is False


def test_malformed_file_is_skipped(settings_paths, caplog):
    _write(settings_paths.global_settings, {"extensions": ["js"]})
    settings_paths.project_settings.parent.mkdir(parents=True, exist_ok=True)
    settings_paths.project_settings.write_text("extensions: [js\n")

    with caplog.at_level(logging.WARNING, logger="commonjs_resolver.settings"):
        extensions = ResolverSettings(settings_paths).get_extensions()

    assert extensions == ["js"]
    assert "Skipping unreadable settings file" in caplog.text


def test_non_mapping_core_is_ignored(settings_paths, caplog):
    _write(settings_paths.project_settings, {"core": ["backbone"]})

    with caplog.at_level(logging.WARNING, logger="commonjs_resolver.settings"):
        assert ResolverSettings(settings_paths).get_core_modules() == []

    assert "expected a mapping" in caplog.text
