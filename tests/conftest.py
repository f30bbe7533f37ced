"""Shared fixtures for commonjs-resolver tests."""

import json
from pathlib import Path

import pytest


class RecordingTraceLogger:
    """Trace sink that keeps every message for assertions."""

    def __init__(self):
        self.messages: list[str] = []

    def trace(self, message: str) -> None:
        self.messages.append(message)


def _write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create files (relative path -> content) below root."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


SAMPLE_APP = {
    "lib/util.js": "module.exports = {};",
    "lib/data.json": "{}",
    "lib/helpers/index.js": "module.exports = {};",
    "pkg/package.json": json.dumps({"name": "pkg", "main": "lib/entry.js"}),
    "pkg/lib/entry.js": "module.exports = {};",
    "pkg/index.js": "module.exports = {};",
    "node_modules/lodash/package.json": json.dumps({"name": "lodash", "main": "./lodash.js"}),
    "node_modules/lodash/lodash.js": "module.exports = {};",
    "node_modules/nomain/package.json": json.dumps({"name": "nomain"}),
    "node_modules/nomain/index.js": "module.exports = {};",
    "node_modules/x/index.js": "module.exports = 'far';",
    "project/node_modules/x/index.js": "module.exports = 'near';",
    "project/sub/app.js": "require('x');",
    "weird.js/inner.js": "module.exports = {};",
    "README.md": "# sample",
    "styles/app.tss": "'Label': {}",
}


@pytest.fixture
def sample_app(tmp_path: Path) -> Path:
    """A project tree with manifests, index files and two node_modules scopes."""
    return _write_tree(tmp_path / "app", SAMPLE_APP)


@pytest.fixture
def make_tree(tmp_path: Path):
    """Return a helper that writes {relative path: content} below a fresh root."""

    def make(files: dict[str, str], name: str = "project") -> Path:
        return _write_tree(tmp_path / name, files)

    return make


@pytest.fixture
def trace_logger() -> RecordingTraceLogger:
    return RecordingTraceLogger()


@pytest.fixture
def isolated_settings(tmp_path: Path, monkeypatch) -> Path:
    """Point global and project settings at empty temporary directories."""
    home = tmp_path / "home"
    workdir = tmp_path / "work"
    home.mkdir()
    workdir.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(workdir)
    return workdir
