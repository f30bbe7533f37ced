"""Data models for the module registry."""

from pydantic import BaseModel
from pydantic import Field


class DirectoryEntry(BaseModel):
    """A directory that resolves as a unit.

    Attributes:
        id: Absolute directory path (e.g. /node_modules/lodash)
        path: Resolved main entry file for the directory
    """

    id: str
    path: str


class CoreModule(BaseModel):
    """Built-in module override, matched by exact id."""

    id: str
    path: str


class RegistrySnapshot(BaseModel):
    """Serializable view of a registry.

    Used to seed a registry at construction time and returned by export().
    """

    files: list[str] = Field(default_factory=list)
    directories: list[DirectoryEntry] = Field(default_factory=list)
    core: list[CoreModule] = Field(default_factory=list)
