"""Exceptions raised by the resolver package."""

from pathlib import Path


class ResolverError(Exception):
    """Base class for resolver failures."""


class ManifestParseError(ResolverError):
    """A package manifest could not be parsed into a key/value mapping.

    Raised during a registry build. A corrupt manifest stops the build rather
    than letting load-as-directory pick the wrong main entry.
    """

    def __init__(self, manifest: str | Path, reason: str):
        self.manifest = str(manifest)
        self.reason = reason
        super().__init__(f"Malformed manifest {self.manifest}: {reason}")
