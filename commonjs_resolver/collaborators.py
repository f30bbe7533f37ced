"""Collaborators injected into the registry builder and resolver.

The builder never walks the filesystem or parses JSON itself, and the
resolver never writes to a logger directly. Each concern sits behind a small
protocol so tests can substitute an in-memory implementation.
"""

import json
import logging
from collections.abc import Iterable
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from typing import Protocol

from .logging_setup import TRACE


class FileLister(Protocol):
    """Enumerates files below a root directory."""

    def list_files(self, root: Path) -> Iterable[str]:
        """Return root-relative paths of everything below root."""
        ...

    def exists(self, path: Path) -> bool: ...

    def is_directory(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> str: ...


class ManifestParser(Protocol):
    """Parses manifest text into a key/value mapping, raising on bad input."""

    def parse(self, text: str) -> Mapping[str, Any]: ...


class TraceLogger(Protocol):
    """Sink for resolution diagnostics."""

    def trace(self, message: str) -> None: ...


class PathlibFileLister:
    """File lister backed by the local filesystem."""

    def list_files(self, root: Path) -> Iterable[str]:
        for entry in sorted(root.rglob("*")):
            yield str(entry.relative_to(root))

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_directory(self, path: Path) -> bool:
        return path.is_dir()

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")


class JsonManifestParser:
    """Parses package.json text with the stdlib json module."""

    def parse(self, text: str) -> Mapping[str, Any]:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return data


class LoggingTraceLogger:
    """Adapts a stdlib logger to the trace() sink interface."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("commonjs_resolver.trace")

    def trace(self, message: str) -> None:
        self.logger.log(TRACE, message)
