"""Aggregation of per-deployment outcomes into a single verdict."""

from .models import StatusCheckResult
from .store import ResultStore


def summarize(store: ResultStore) -> StatusCheckResult:
    """
    Summarize recorded outcomes.

    Failed deployments contribute one line each, ordered by name.

    Args:
        store: Populated result store

    Returns:
        StatusCheckResult, successful when no deployment failed
    """
    outcomes = store.snapshot()
    failures = [
        f"deployment {name} failed due to {outcome.cause}"
        for name, outcome in outcomes.items()
        if outcome.failed
    ]

    return StatusCheckResult(
        success=not failures,
        failures=failures,
        outcomes=outcomes,
    )
