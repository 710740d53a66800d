"""Interface between the status checker and the cluster."""

from typing import Protocol

MANAGED_BY_LABEL = "app.kubernetes.io/managed-by"


def managed_by_selector(tool: str) -> str:
    """Label selector matching workloads managed by ``tool``."""
    return f"{MANAGED_BY_LABEL}={tool}"


class RolloutQuery(Protocol):
    """
    Cluster queries used by the status checker.

    Implementations raise RolloutQueryError when a query cannot be
    executed at all. A rollout that is still in progress is not an error.
    """

    def rollout_status(self, name: str) -> str:
        """Return the current rollout status text for deployment ``name``."""
        ...

    def get_deadlines(self, selector: str) -> str:
        """Return ``name:progressDeadlineSeconds,`` pairs for matching deployments."""
        ...
