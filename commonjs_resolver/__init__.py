"""CommonJS module resolution against a precomputed registry.

Scan a project once, then resolve require() specifiers without touching
the filesystem again.
"""

from .exceptions import ManifestParseError
from .exceptions import ResolverError
from .models import CoreModule
from .models import DirectoryEntry
from .models import RegistrySnapshot
from .registry import Registry
from .registry import RegistryBuilder
from .resolver import Resolver
from .state import ResolverState
from .state import create_resolver_state

__all__ = [
    "CoreModule",
    "DirectoryEntry",
    "ManifestParseError",
    "Registry",
    "RegistryBuilder",
    "RegistrySnapshot",
    "Resolver",
    "ResolverError",
    "ResolverState",
    "create_resolver_state",
]
