"""Tests for ResultStore."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from sentinel_rollout import PollOutcome, ResultStore


class TestResultStore:
    """Test cases for ResultStore."""

    def test_record_and_get(self):
        store = ResultStore()
        store.record("dep1", PollOutcome.success())

        assert "dep1" in store
        assert store.get("dep1") == PollOutcome.success()
        assert store.get("missing") is None
        assert len(store) == 1

    def test_record_twice_rejected(self):
        store = ResultStore()
        store.record("dep1", PollOutcome.success())

        with pytest.raises(ValueError, match="already recorded"):
            store.record("dep1", PollOutcome.timed_out())

        assert store.get("dep1") == PollOutcome.success()

    def test_pending_rejected(self):
        store = ResultStore()

        with pytest.raises(ValueError, match="non-terminal"):
            store.record("dep1", PollOutcome.pending("Waiting"))

        assert len(store) == 0

    def test_snapshot_sorted_by_name(self):
        store = ResultStore()
        store.record("dep3", PollOutcome.success())
        store.record("dep1", PollOutcome.timed_out())
        store.record("dep2", PollOutcome.invocation_failure("ERROR"))

        assert list(store.snapshot()) == ["dep1", "dep2", "dep3"]

    def test_concurrent_writers(self):
        store = ResultStore()
        names = [f"dep{i}" for i in range(50)]

        with ThreadPoolExecutor(max_workers=10) as executor:
            list(executor.map(lambda n: store.record(n, PollOutcome.success()), names))

        assert len(store) == 50
        assert sorted(store.snapshot()) == sorted(names)
