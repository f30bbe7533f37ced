"""Module registry and the scan that populates it.

The registry is an in-memory index of everything a request can resolve to:
plain files, directories with a main entry, and core module overrides. It is
built once per scan and then only read by the resolver.
"""

import logging
import re
from collections.abc import Iterable
from collections.abc import Iterator
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .collaborators import FileLister
from .collaborators import JsonManifestParser
from .collaborators import ManifestParser
from .collaborators import PathlibFileLister
from .exceptions import ManifestParseError
from .models import CoreModule
from .models import DirectoryEntry
from .models import RegistrySnapshot
from .paths import posix_resolve
from .paths import replace_back_slashes

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ("js", "json")
MANIFEST_FILENAME = "package.json"
INDEX_FILENAME = "index.js"


class Registry:
    """Index of resolvable files, directory entry points and core modules.

    Directory ids are unique: the first record inserted for an id wins, which
    is how manifest-declared mains take precedence over inferred index files.
    Core modules are fixed at construction and survive every rebuild.

    The generation counter increases on every replace() so memoized lookups
    made against an older index can be recognized as stale.
    """

    def __init__(self, seed: RegistrySnapshot | Mapping[str, Any] | None = None):
        if seed is None:
            seed = RegistrySnapshot()
        elif not isinstance(seed, RegistrySnapshot):
            seed = RegistrySnapshot.model_validate(seed)

        self._files: dict[str, None] = dict.fromkeys(seed.files)
        self._directories: dict[str, DirectoryEntry] = {}
        for entry in seed.directories:
            self._directories.setdefault(entry.id, entry.model_copy())
        self._core: dict[str, CoreModule] = {}
        for module in seed.core:
            self._core.setdefault(module.id, module.model_copy())
        self.generation = 0

    def has_file(self, path: str) -> bool:
        return path in self._files

    def directory_main(self, directory_id: str) -> str | None:
        entry = self._directories.get(directory_id)
        return entry.path if entry else None

    def core_path(self, module_id: str) -> str | None:
        module = self._core.get(module_id)
        return module.path if module else None

    @property
    def file_count(self) -> int:
        return len(self._files)

    @property
    def directory_count(self) -> int:
        return len(self._directories)

    @property
    def core_count(self) -> int:
        return len(self._core)

    def replace(self, files: Iterable[str], directories: Iterable[DirectoryEntry]) -> None:
        """Swap in a freshly scanned file and directory index."""
        self._files = dict.fromkeys(files)
        self._directories = {}
        for entry in directories:
            self._directories.setdefault(entry.id, entry)
        self.generation += 1

    def snapshot(self) -> RegistrySnapshot:
        """Return a deep copy of the registry contents."""
        return RegistrySnapshot(
            files=list(self._files),
            directories=[entry.model_copy() for entry in self._directories.values()],
            core=[module.model_copy() for module in self._core.values()],
        )


class RegistryBuilder:
    """Scans a project root and replaces a registry's files and directories.

    Classification order:
    1. package.json files are manifest candidates, never plain files
    2. every other match is a plain file
    3. each manifest declaring "main" maps its directory to that entry
    4. each index.js maps its directory, unless a manifest already did
    """

    def __init__(
        self,
        registry: Registry,
        file_lister: FileLister | None = None,
        manifest_parser: ManifestParser | None = None,
    ):
        self.registry = registry
        self.file_lister = file_lister or PathlibFileLister()
        self.manifest_parser = manifest_parser or JsonManifestParser()

    def load_files(self, root_path: str | Path, extensions: Iterable[str] | None = None) -> None:
        """Rebuild the registry from every matching file under root_path.

        Args:
            root_path: Project root; becomes "/" in registry paths
            extensions: Extensions to index, with or without a leading dot
                (default: js, json)

        Raises:
            FileNotFoundError: root_path does not exist
            NotADirectoryError: root_path is not a directory
            ManifestParseError: A package.json is malformed. The registry
                keeps its previous contents.
        """
        root = Path(root_path)
        if not self.file_lister.exists(root):
            raise FileNotFoundError(f"Project root not found: {root}")
        if not self.file_lister.is_directory(root):
            raise NotADirectoryError(f"Project root is not a directory: {root}")

        matched = list(self.find_files(root, extensions))

        manifests = [p for p in matched if split_filename(p)[1] == MANIFEST_FILENAME]
        files = [p for p in matched if split_filename(p)[1] != MANIFEST_FILENAME]

        directories: dict[str, DirectoryEntry] = {}
        for manifest in manifests:
            main = self._read_main(root, manifest)
            if main:
                directory = split_filename(manifest)[0]
                directories.setdefault(directory, DirectoryEntry(id=directory, path=posix_resolve(directory, main)))

        for filepath in files:
            directory, filename = split_filename(filepath)
            if filename != INDEX_FILENAME:
                continue
            if directory not in directories:
                directories[directory] = DirectoryEntry(id=directory, path=filepath)

        self.registry.replace(files, directories.values())
        logger.info(
            f"Registry built from {root}: {len(files)} files, {len(directories)} directories "
            f"({len(manifests)} manifests, generation {self.registry.generation})"
        )

    def find_files(self, root: Path, extensions: Iterable[str] | None = None) -> Iterator[str]:
        """Yield registry paths ("/" + root-relative POSIX path) of matching files."""
        pattern = _extension_pattern(extensions or DEFAULT_EXTENSIONS)
        for relative in self.file_lister.list_files(root):
            filepath = "/" + replace_back_slashes(relative)
            if not pattern.match(filepath):
                continue
            if self.file_lister.is_directory(root / relative):
                continue
            yield filepath

    def _read_main(self, root: Path, manifest: str) -> str | None:
        try:
            text = self.file_lister.read_text(root / manifest.lstrip("/"))
            data = self.manifest_parser.parse(text)
        except (UnicodeDecodeError, ValueError, RecursionError) as e:
            raise ManifestParseError(manifest, str(e)) from e

        main = data.get("main")
        if isinstance(main, str) and main:
            return main
        if main is not None and not isinstance(main, str):
            logger.warning(f"Ignoring non-string main in {manifest}: {main!r}")
        return None


def _extension_pattern(extensions: Iterable[str]) -> re.Pattern[str]:
    names = "|".join(re.escape(ext.lstrip(".")) for ext in extensions)
    return re.compile(rf"^.+\.({names})$")


def split_filename(path: str) -> tuple[str, str]:
    """Split a registry path into (directory, filename) on either separator.

    Extended-length and non-ASCII paths keep their backslashes, so
    posixpath.split alone would miss their last component.
    """
    cut = max(path.rfind("/"), path.rfind("\\"))
    if cut < 0:
        return ("", path)
    return (path[:cut] or "/", path[cut + 1 :])
