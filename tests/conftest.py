"""Pytest configuration and fixtures for rollout status tests."""

from collections import defaultdict
from threading import Lock
from unittest.mock import MagicMock, Mock

import pytest
from kubernetes import client

from sentinel_rollout import ClusterConfig, Settings


class FakeClock:
    """Deterministic clock that only advances when slept on."""

    def __init__(self):
        self._now_ms = 0
        self._lock = Lock()
        self.sleeps = 0

    def __call__(self) -> float:
        with self._lock:
            return self._now_ms / 1000

    def sleep(self, seconds: float) -> None:
        with self._lock:
            self._now_ms += round(seconds * 1000)
            self.sleeps += 1


class ScriptedQuery:
    """
    Rollout query double with scripted responses per deployment.

    A list of responses is replayed in order and its last value repeats
    once exhausted. An exception instance is raised on every call.
    """

    def __init__(self, responses=None, deadlines="", deadline_error=None):
        self.responses = responses or {}
        self.deadlines = deadlines
        self.deadline_error = deadline_error
        self.calls: dict[str, int] = defaultdict(int)
        self.deadline_calls = 0
        self.selectors: list[str] = []
        self._lock = Lock()

    def rollout_status(self, name: str) -> str:
        with self._lock:
            index = self.calls[name]
            self.calls[name] += 1

        script = self.responses[name]
        if isinstance(script, Exception):
            raise script
        return script[min(index, len(script) - 1)]

    def get_deadlines(self, selector: str) -> str:
        self.deadline_calls += 1
        self.selectors.append(selector)
        if self.deadline_error:
            raise self.deadline_error
        return self.deadlines


@pytest.fixture
def fake_clock():
    """Fake monotonic clock with a matching sleep."""
    return FakeClock()


@pytest.fixture
def settings():
    """Settings isolated from the environment."""
    return Settings(
        _env_file=None,
        managed_by="sentinel",
        poll_interval_seconds=0.1,
        default_deadline_seconds=1.0,
    )


@pytest.fixture
def mock_cluster_connection():
    """Mock cluster connection for testing."""
    mock_conn = MagicMock()
    mock_conn.config = ClusterConfig(namespace="default")
    mock_conn.apps_v1 = MagicMock(spec=client.AppsV1Api)
    return mock_conn


def make_deployment(
    name="dep",
    generation=1,
    observed_generation=1,
    desired=3,
    replicas=3,
    updated=3,
    available=3,
    conditions=None,
    progress_deadline_seconds=600,
):
    """Build a mock Kubernetes Deployment object."""
    deployment = Mock(spec=client.V1Deployment)
    deployment.metadata = Mock()
    deployment.metadata.name = name
    deployment.metadata.generation = generation

    deployment.spec = Mock()
    deployment.spec.replicas = desired
    deployment.spec.progress_deadline_seconds = progress_deadline_seconds

    deployment.status = Mock()
    deployment.status.observed_generation = observed_generation
    deployment.status.replicas = replicas
    deployment.status.updated_replicas = updated
    deployment.status.available_replicas = available
    deployment.status.conditions = conditions or []
    return deployment
