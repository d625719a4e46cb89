"""Tests for the per-conversation context cache."""

from __future__ import annotations

import random
import threading

from campaignforge.graph.memory import ContextCache


class FakeClock:
    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestContextCache:
    def test_put_then_get(self) -> None:
        cache = ContextCache(clock=FakeClock())
        cache.put("Acme_Snacks", "ctx")
        entry = cache.get("Acme_Snacks")
        assert entry is not None
        assert entry.system_context == "ctx"
        assert entry.created_at == entry.last_accessed_at

    def test_get_missing(self) -> None:
        assert ContextCache().get("nope") is None

    def test_get_returns_copy(self) -> None:
        cache = ContextCache(clock=FakeClock())
        cache.put("k", "ctx")
        cache.get("k").system_context = "mutated"
        assert cache.get("k").system_context == "ctx"

    def test_touch_updates_last_access_only(self) -> None:
        clock = FakeClock()
        cache = ContextCache(clock=clock)
        cache.put("k", "ctx")
        clock.now += 30
        assert cache.touch("k") is True
        entry = cache.get("k")
        assert entry.last_accessed_at == clock.now
        assert entry.created_at == clock.now - 30

    def test_touch_missing(self) -> None:
        assert ContextCache().touch("nope") is False

    def test_put_overwrites_same_key(self) -> None:
        cache = ContextCache()
        cache.put("k", "first")
        cache.put("k", "second")
        assert cache.get("k").system_context == "second"
        assert len(cache) == 1


class TestSweep:
    def test_stale_entry_removed(self) -> None:
        clock = FakeClock()
        cache = ContextCache(retention_seconds=3600, clock=clock)
        cache.put("k", "ctx")
        clock.now += 3601
        assert cache.sweep() == 1
        assert cache.get("k") is None

    def test_fresh_entry_kept(self) -> None:
        clock = FakeClock()
        cache = ContextCache(retention_seconds=3600, clock=clock)
        cache.put("k", "ctx")
        clock.now += 3599
        assert cache.sweep() == 0
        assert cache.get("k") is not None

    def test_touch_extends_retention(self) -> None:
        clock = FakeClock()
        cache = ContextCache(retention_seconds=3600, clock=clock)
        cache.put("k", "ctx")
        clock.now += 3000
        cache.touch("k")
        clock.now += 3000
        assert cache.sweep() == 0

    def test_explicit_now(self) -> None:
        clock = FakeClock()
        cache = ContextCache(retention_seconds=60, clock=clock)
        cache.put("old", "a")
        clock.now += 100
        cache.put("new", "b")
        assert cache.sweep(now=clock.now) == 1
        assert cache.get("old") is None
        assert cache.get("new") is not None

    def test_maybe_sweep_probability(self) -> None:
        clock = FakeClock()
        never = ContextCache(retention_seconds=1, sweep_probability=0.0, clock=clock)
        always = ContextCache(retention_seconds=1, sweep_probability=1.0, clock=clock)
        for cache in (never, always):
            cache.put("k", "ctx")
        clock.now += 10
        assert never.maybe_sweep() == 0
        assert always.maybe_sweep() == 1

    def test_maybe_sweep_draws_against_probability(self) -> None:
        class ScriptedRng(random.Random):
            def __init__(self, values) -> None:
                super().__init__()
                self.values = list(values)

            def random(self) -> float:
                return self.values.pop(0)

        clock = FakeClock()
        cache = ContextCache(retention_seconds=1, sweep_probability=0.1, clock=clock, rng=ScriptedRng([0.5, 0.05]))
        cache.put("k", "ctx")
        clock.now += 10
        assert cache.maybe_sweep() == 0
        assert cache.maybe_sweep() == 1


class TestConcurrency:
    def test_parallel_writers_and_sweeps(self) -> None:
        cache = ContextCache(retention_seconds=3600)
        errors = []

        def worker(n: int) -> None:
            try:
                for i in range(200):
                    key = f"brand{n}_{i % 5}"
                    cache.put(key, f"ctx{i}")
                    cache.touch(key)
                    cache.get(key)
                    cache.sweep()
            except Exception as e:  # pragma: no cover - surfaced by the assert below
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(cache) == 40
