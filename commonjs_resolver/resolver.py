"""CommonJS module resolution against a prebuilt registry.

require(X) from module at path Y, as Node defines it:
1. If X is a core module, return it
2. If X begins with '.' or '/':
   a. LOAD_AS_FILE(Y + X)
   b. LOAD_AS_DIRECTORY(Y + X)
3. LOAD_NODE_MODULES(X, Y)
4. Node throws "not found"; here X is returned unchanged instead

Nothing is read from disk. LOAD_AS_FILE and LOAD_AS_DIRECTORY are membership
tests against the registry built by RegistryBuilder.
"""

import logging
from collections.abc import Callable
from collections.abc import Sequence
from dataclasses import dataclass

from .cache import ResolutionCache
from .cache import cache_key
from .collaborators import LoggingTraceLogger
from .collaborators import TraceLogger
from .paths import has_extension
from .paths import node_modules_paths
from .paths import posix_resolve
from .paths import to_module_id
from .registry import Registry

logger = logging.getLogger(__name__)

# Tried in order when a request has no extension; the first hit wins
RESOLVE_EXTENSIONS = (".js", ".json")


def is_path_request(request: str) -> bool:
    """True for relative ('./x', '../x', '.') and absolute ('/x') requests."""
    return request.startswith((".", "/"))


@dataclass(frozen=True)
class ResolutionRule:
    """One step of the resolution order.

    Attributes:
        name: Label used in trace output
        applies: Whether the rule is tried for a request at all
        load: Returns the matched registry path, or None
        terminal: When the rule applies but finds nothing, stop and fall back
            instead of trying later rules
    """

    name: str
    applies: Callable[[str], bool]
    load: Callable[[str, str], str | None]
    terminal: bool = False


class Resolver:
    """Maps (request, base path) to an extension-free module id.

    Rules run top-down and the first hit wins:
    1. core - exact match on a core module id
    2. path - relative or absolute request, file then directory; a miss here
       never falls through to package lookup
    3. node_modules - ancestor modules directories, nearest first
    Anything left over is returned as given, for callers that pass through
    ids that are already resolved.

    Results are memoized per registry generation.
    """

    def __init__(
        self,
        registry: Registry,
        cache: ResolutionCache | None = None,
        trace_logger: TraceLogger | None = None,
        extensions: Sequence[str] = RESOLVE_EXTENSIONS,
    ):
        self.registry = registry
        self.cache = cache if cache is not None else ResolutionCache()
        self.trace_logger = trace_logger or LoggingTraceLogger()
        self.extensions = tuple(ext if ext.startswith(".") else f".{ext}" for ext in extensions)
        self.rules = (
            ResolutionRule("core", lambda request: True, self.load_core_module),
            ResolutionRule("path", is_path_request, self.load_path, terminal=True),
            ResolutionRule("node_modules", lambda request: True, self.load_node_modules),
        )

    def resolve(self, request: str, base_path: str | None = None) -> str:
        """Resolve a module request.

        Args:
            request: Module specifier as written in require()
            base_path: Directory of the requesting module (default: "/")

        Returns:
            Resolved module id without extension, or request unchanged when
            nothing matched
        """
        module_id, _rule = self.resolve_with_rule(request, base_path)
        return module_id

    def resolve_with_rule(self, request: str, base_path: str | None = None) -> tuple[str, str | None]:
        """Resolve a module request and report which rule matched.

        Returns:
            Tuple of (module_id, rule_name)
            rule_name is one of: core, path, node_modules, or None when the
            request fell through unchanged
        """
        base_path = base_path or "/"
        key = cache_key(request, base_path)
        generation = self.registry.generation

        cached = self.cache.get(key, generation)
        if cached is not None:
            return (cached.value, cached.rule)

        module_id, rule = self._resolve(request, base_path)
        logger.debug(f"[module:resolve] {request} (from {base_path}) -> {module_id} [{rule or 'fallback'}]")
        self.cache.put(key, module_id, rule, generation)
        return (module_id, rule)

    def _resolve(self, request: str, base_path: str) -> tuple[str, str | None]:
        for rule in self.rules:
            if not rule.applies(request):
                continue
            found = rule.load(request, base_path)
            if found:
                return (to_module_id(found), rule.name)
            if rule.terminal:
                break

        # Unresolved ids pass through unchanged for backwards compatibility
        self.trace_logger.trace(f"unresolved: {request} (from {base_path})")
        return (request, None)

    def load_core_module(self, request: str, base_path: str) -> str | None:
        path = self.registry.core_path(request)
        if path:
            self.trace_logger.trace(f"core module: {request} -> {path}")
        return path

    def load_path(self, request: str, base_path: str) -> str | None:
        return self.load_as_file(request, base_path) or self.load_as_directory(request, base_path)

    def load_as_file(self, request: str, start_path: str) -> str | None:
        """LOAD_AS_FILE: exact match, then X + ext for each extension in order."""
        resolved = posix_resolve(start_path, request)
        if self.registry.has_file(resolved):
            self.trace_logger.trace(f"file found: {resolved}")
            return resolved

        if has_extension(request):
            return None

        for ext in self.extensions:
            resolved = posix_resolve(start_path, request + ext)
            if self.registry.has_file(resolved):
                self.trace_logger.trace(f"file found: {resolved}")
                return resolved
        return None

    def load_as_directory(self, request: str, start_path: str) -> str | None:
        """LOAD_AS_DIRECTORY: the directory's manifest main or index file."""
        resolved = posix_resolve(start_path, request)
        main = self.registry.directory_main(resolved)
        if main:
            self.trace_logger.trace(f"directory found: {resolved} -> {main}")
        return main

    def load_node_modules(self, request: str, start_path: str) -> str | None:
        for directory in node_modules_paths(start_path):
            found = self.load_as_file(request, directory) or self.load_as_directory(request, directory)
            if found:
                return found
        return None
