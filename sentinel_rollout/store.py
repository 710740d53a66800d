"""Thread-safe store for terminal rollout outcomes."""

from threading import Lock
from typing import Optional

from .models import PollOutcome


class ResultStore:
    """
    Write-once mapping of deployment name to terminal poll outcome.

    Safe for concurrent writers. Each key may be written exactly once.
    """

    def __init__(self):
        """Initialize result store."""
        self._results: dict[str, PollOutcome] = {}
        self._lock = Lock()

    def record(self, name: str, outcome: PollOutcome) -> None:
        """
        Record the terminal outcome for a deployment.

        Args:
            name: Deployment name
            outcome: Terminal poll outcome

        Raises:
            ValueError: If the outcome is not terminal or name was already recorded
        """
        if not outcome.is_terminal:
            raise ValueError(f"Refusing to record non-terminal outcome for {name}")

        with self._lock:
            if name in self._results:
                raise ValueError(f"Outcome for {name} already recorded")
            self._results[name] = outcome

    def get(self, name: str) -> Optional[PollOutcome]:
        with self._lock:
            return self._results.get(name)

    def snapshot(self) -> dict[str, PollOutcome]:
        """Copy of all recorded outcomes, ordered by deployment name."""
        with self._lock:
            return {name: self._results[name] for name in sorted(self._results)}

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._results

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)
