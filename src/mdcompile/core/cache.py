"""Bounded LRU cache of compile results keyed on exact (source, file) input"""

import threading
from collections import OrderedDict
from typing import Optional

from mdcompile.core.models import CompileResult


DEFAULT_MAX_ENTRIES = 1024

CacheKey = tuple[str, str]


class CompileCache:
    """Thread-safe LRU map of (source, file_path) -> CompileResult.

    Keys hold the full source text, so two different inputs can never share an
    entry. Individual get/set calls are atomic; a miss is not locked, so two
    concurrent compiles of the same input may both run and the last write wins.
    Owned by one compiler for the length of a build or dev session.
    """

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self.max_entries = max_entries
        self._entries: "OrderedDict[CacheKey, CompileResult]" = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def key(source: str, file_path: str) -> CacheKey:
        return (source, file_path)

    def get(self, key: CacheKey) -> Optional[CompileResult]:
        with self._lock:
            result = self._entries.get(key)
            if result is not None:
                self._entries.move_to_end(key)
            return result

    def set(self, key: CacheKey, result: CompileResult) -> None:
        with self._lock:
            self._entries[key] = result
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
