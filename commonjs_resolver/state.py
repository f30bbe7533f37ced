"""Resolver session state: one registry, one cache, one lock."""

import json
import logging
import threading
from collections.abc import Iterable
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .cache import ResolutionCache
from .collaborators import FileLister
from .collaborators import LoggingTraceLogger
from .collaborators import ManifestParser
from .collaborators import TraceLogger
from .models import RegistrySnapshot
from .registry import Registry
from .registry import RegistryBuilder
from .resolver import RESOLVE_EXTENSIONS
from .resolver import Resolver
from .settings import ResolverSettings
from .settings import get_settings

logger = logging.getLogger(__name__)


class ResolverState:
    """Owns everything a build session resolves against.

    The builder is the only writer of the registry and the resolver the only
    writer of the cache. Both run under one lock, so a rescan can never
    interleave with a lookup on the same state.

    Usage:
        state = ResolverState(registry={"core": [{"id": "backbone", "path": "/alloy/backbone.js"}]})
        state.load_files("/path/to/app")
        state.resolve("./util", "/lib")   # -> "/lib/util"
        state.resolve("backbone")         # -> "/alloy/backbone"
    """

    def __init__(
        self,
        registry: RegistrySnapshot | Mapping[str, Any] | None = None,
        logger: TraceLogger | None = None,
        file_lister: FileLister | None = None,
        manifest_parser: ManifestParser | None = None,
        resolve_extensions: Iterable[str] = RESOLVE_EXTENSIONS,
    ):
        self.registry = Registry(registry)
        self.cache = ResolutionCache()
        self.trace_logger = logger or LoggingTraceLogger()
        self.builder = RegistryBuilder(self.registry, file_lister=file_lister, manifest_parser=manifest_parser)
        self.resolver = Resolver(
            self.registry,
            cache=self.cache,
            trace_logger=self.trace_logger,
            extensions=tuple(resolve_extensions),
        )
        self._lock = threading.RLock()

    @classmethod
    def from_snapshot_file(cls, path: str | Path, **kwargs: Any) -> "ResolverState":
        """Create a state seeded from a JSON snapshot written by export."""
        return cls(registry=read_snapshot(path), **kwargs)

    @property
    def generation(self) -> int:
        return self.registry.generation

    def load_files(self, root_path: str | Path, extensions: Iterable[str] | None = None) -> None:
        """Scan root_path and replace the registry's files and directories."""
        with self._lock:
            self.builder.load_files(root_path, extensions)

    def resolve(self, request: str, base_path: str | None = None) -> str:
        """Resolve request from base_path; returns request unchanged on a miss."""
        with self._lock:
            return self.resolver.resolve(request, base_path)

    def resolve_with_rule(self, request: str, base_path: str | None = None) -> tuple[str, str | None]:
        """Resolve request and report the matching rule (None on a miss)."""
        with self._lock:
            return self.resolver.resolve_with_rule(request, base_path)

    def export(self) -> RegistrySnapshot:
        """Independent deep copy of files, directories and core modules."""
        with self._lock:
            return self.registry.snapshot()


def read_snapshot(path: str | Path) -> RegistrySnapshot:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    logger.debug(f"Read registry snapshot {path}")
    return RegistrySnapshot.model_validate(data)


def create_resolver_state(
    settings: ResolverSettings | None = None, registry_file: str | Path | None = None
) -> ResolverState:
    """Create a ResolverState configured from settings.

    Core modules from settings are added to the seed. When registry_file is
    given, its files and directories are loaded too, and a settings entry
    replaces a snapshot core module with the same id.
    """
    settings = settings or get_settings()
    snapshot = read_snapshot(registry_file) if registry_file is not None else RegistrySnapshot()

    configured = settings.get_core_modules()
    configured_ids = {module.id for module in configured}
    snapshot.core = configured + [module for module in snapshot.core if module.id not in configured_ids]
    return ResolverState(registry=snapshot)
