"""Memoization for resolve() results."""

from dataclasses import dataclass


def cache_key(request: str, base_path: str) -> str:
    return f"{request}::{base_path}"


@dataclass(frozen=True)
class CacheEntry:
    value: str
    rule: str | None
    generation: int


class ResolutionCache:
    """Resolution results keyed on request + "::" + base path.

    Every entry records the registry generation it was computed under. A
    lookup made under a different generation is a miss, so a rescan never
    serves results from the previous index.
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: str, generation: int) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None or entry.generation != generation:
            self.misses += 1
            return None
        self.hits += 1
        return entry

    def put(self, key: str, value: str, rule: str | None, generation: int) -> None:
        self._entries[key] = CacheEntry(value=value, rule=rule, generation=generation)

    def __len__(self) -> int:
        return len(self._entries)
