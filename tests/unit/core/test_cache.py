"""Unit tests for core/cache.py"""

import threading

import pytest

from mdcompile.core.cache import CompileCache
from mdcompile.core.models import CompileResult, PageData


def _result(name: str) -> CompileResult:
    return CompileResult(
        unit_source=f"<template>{name}</template>",
        page_data=PageData(title=name, relative_path=f"{name}.md"),
    )


def test_get_miss_returns_none():
    assert CompileCache().get(CompileCache.key("src", "/a.md")) is None


def test_set_then_get():
    cache = CompileCache()
    key = CompileCache.key("# A", "/a.md")
    result = _result("a")
    cache.set(key, result)
    assert cache.get(key) is result
    assert key in cache


def test_key_distinguishes_source_and_file():
    """Different source under the same file never shares an entry."""
    cache = CompileCache()
    cache.set(CompileCache.key("# A", "/a.md"), _result("a"))
    assert cache.get(CompileCache.key("# A ", "/a.md")) is None
    assert cache.get(CompileCache.key("# A", "/b.md")) is None


def test_lru_eviction():
    cache = CompileCache(max_entries=2)
    k1, k2, k3 = (CompileCache.key(s, "/f.md") for s in ("1", "2", "3"))
    cache.set(k1, _result("one"))
    cache.set(k2, _result("two"))
    cache.get(k1)                      # k1 becomes most recent
    cache.set(k3, _result("three"))
    assert len(cache) == 2
    assert k1 in cache
    assert k2 not in cache
    assert k3 in cache


def test_clear():
    cache = CompileCache()
    cache.set(CompileCache.key("x", "/x.md"), _result("x"))
    cache.clear()
    assert len(cache) == 0


def test_invalid_size():
    with pytest.raises(ValueError):
        CompileCache(max_entries=0)


def test_concurrent_writes_stay_bounded():
    cache = CompileCache(max_entries=50)

    def _fill(offset: int) -> None:
        for i in range(200):
            key = CompileCache.key(str(offset * 1000 + i), "/t.md")
            cache.set(key, _result("t"))
            cache.get(key)

    threads = [threading.Thread(target=_fill, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(cache) == 50
