import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List
from unittest.mock import MagicMock

import pytest

from coreason_cipher.derivation import derive_key
from coreason_cipher.key_cache import KeyCache


def test_default_capacity() -> None:
    assert KeyCache().max_size == 100


def test_invalid_capacity() -> None:
    with pytest.raises(ValueError, match="at least 1"):
        KeyCache(max_size=0)


def test_miss_derives_and_hit_reuses(counting_derive: MagicMock) -> None:
    cache = KeyCache(derive=counting_derive)

    first = cache.get_or_derive("ctx")
    second = cache.get_or_derive("ctx")

    assert first == second == derive_key("ctx")
    assert counting_derive.call_count == 1
    assert "ctx" in cache
    assert len(cache) == 1


def test_evicts_oldest_inserted(counting_derive: MagicMock) -> None:
    cache = KeyCache(max_size=2, derive=counting_derive)

    cache.get_or_derive("1")
    cache.get_or_derive("2")
    cache.get_or_derive("3")  # Should evict "1"

    assert "1" not in cache
    assert "2" in cache
    assert "3" in cache
    assert len(cache) == 2


def test_eviction_ignores_access_recency(counting_derive: MagicMock) -> None:
    """Reading a key does not protect it: eviction is by insertion order only."""
    cache = KeyCache(max_size=2, derive=counting_derive)

    cache.get_or_derive("1")
    cache.get_or_derive("2")
    cache.get_or_derive("1")  # hit, does not refresh position
    cache.get_or_derive("3")

    assert "1" not in cache
    assert "2" in cache
    assert "3" in cache


def test_evicted_key_is_rederived(counting_derive: MagicMock) -> None:
    cache = KeyCache(max_size=1, derive=counting_derive)

    cache.get_or_derive("a")
    cache.get_or_derive("b")
    cache.get_or_derive("a")

    assert [call.args[0] for call in counting_derive.call_args_list] == ["a", "b", "a"]


def test_size_never_exceeds_capacity(counting_derive: MagicMock) -> None:
    cache = KeyCache(max_size=100, derive=counting_derive)
    for i in range(250):
        cache.get_or_derive(f"ctx-{i}")
        assert len(cache) <= 100
    assert len(cache) == 100
    assert "ctx-149" not in cache
    assert "ctx-150" in cache


def test_clear() -> None:
    cache = KeyCache()
    cache.get_or_derive("x")
    cache.clear()
    assert len(cache) == 0
    assert "x" not in cache


def test_eviction_logged(log_sink: List[str]) -> None:
    cache = KeyCache(max_size=1)
    cache.get_or_derive("secret-context-a")
    cache.get_or_derive("secret-context-b")

    assert any("Evicting oldest key" in message for message in log_sink)
    assert not any("secret-context" in message for message in log_sink)


def test_concurrent_get_or_derive_derives_once() -> None:
    calls: List[str] = []
    lock = threading.Lock()

    def slow_derive(canonical: str) -> bytes:
        with lock:
            calls.append(canonical)
        time.sleep(0.01)
        return derive_key(canonical)

    cache = KeyCache(derive=slow_derive)
    with ThreadPoolExecutor(max_workers=8) as pool:
        keys = list(pool.map(lambda _: cache.get_or_derive("shared"), range(32)))

    assert len(set(keys)) == 1
    assert calls == ["shared"]
    assert len(cache) == 1


def test_concurrent_inserts_respect_capacity() -> None:
    cache = KeyCache(max_size=10)
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda i: cache.get_or_derive(f"ctx-{i}"), range(200)))
    assert len(cache) == 10
