"""POSIX path helpers for registry keys and resolution candidates.

Registry paths are always POSIX and rooted at "/", which stands for the
scanned project root. Nothing here touches the filesystem.
"""

import posixpath
import re

MODULES_DIRNAME = "node_modules"

_EXTENDED_LENGTH_PREFIX = re.compile(r"^\\\\\?\\")
_NON_ASCII = re.compile(r"[^\x00-\x80]+")


def replace_back_slashes(path: str) -> str:
    """Convert Windows separators to forward slashes.

    Extended-length paths (\\\\?\\C:\\...) and paths with non-ASCII characters
    are returned untouched; their backslashes may be literal.
    """
    if _EXTENDED_LENGTH_PREFIX.match(path) or _NON_ASCII.search(path):
        return path
    return path.replace("\\", "/")


def posix_resolve(*segments: str) -> str:
    """Resolve segments right-to-left into an absolute, normalized path.

    Behaves like Node's path.posix.resolve with the working directory pinned
    to "/": an absolute segment discards everything before it, and relative
    bases are taken relative to the registry root.

    Example:
        >>> posix_resolve("/project/sub", "../util")
        '/project/util'
    """
    resolved = "/"
    for segment in segments:
        if segment:
            resolved = posixpath.join(resolved, segment)

    normalized = posixpath.normpath(resolved)
    # normpath keeps a leading "//" (implementation-defined root on POSIX)
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


def has_extension(request: str) -> bool:
    return bool(posixpath.splitext(request)[1])


def to_module_id(resolved_path: str) -> str:
    """Strip the extension, leaving directory + name.

    Downstream compilers expect module ids without an extension, so every
    resolved path is reduced to this form.

    Example:
        >>> to_module_id("/node_modules/lodash/lodash.js")
        '/node_modules/lodash/lodash'
    """
    directory, filename = posixpath.split(resolved_path)
    stem = posixpath.splitext(filename)[0]
    return posixpath.join(directory, stem)


def node_modules_paths(start: str) -> list[str]:
    """Compute ancestor modules directories for a starting directory.

    Walks from the deepest segment out to the root, skipping segments that
    are themselves modules directories so no .../node_modules/node_modules
    candidate is produced.

    Args:
        start: Starting directory, absolute or relative to the registry root

    Returns:
        Candidate directories ordered nearest first

    Example:
        >>> node_modules_paths("/project/sub")
        ['/project/sub/node_modules', '/project/node_modules', '/node_modules']
    """
    start = posix_resolve(start)
    parts = [""] if start == "/" else start.split("/")

    paths = []
    for tip in range(len(parts) - 1, -1, -1):
        if parts[tip] == MODULES_DIRNAME:
            continue
        paths.append("/".join(parts[: tip + 1] + [MODULES_DIRNAME]))
    return paths
