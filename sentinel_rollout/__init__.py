"""Sentinel Rollout - Deployment rollout status checking."""

from .aggregate import summarize
from .api import ApiRolloutQuery, render_rollout_status
from .checker import StatusChecker, check_rollout_status
from .cluster import ClusterConnection
from .config import Settings, configure_logging, get_settings
from .deadlines import parse_deadlines, resolve_deadlines
from .exceptions import (
    DeadlineResolutionError,
    RolloutFailedError,
    RolloutQueryError,
    StatusCheckError,
)
from .kubectl import KubectlCLI
from .models import ClusterConfig, OutcomeKind, PollOutcome, StatusCheckResult
from .poller import ROLLOUT_COMPLETE_MARKER, RolloutPoller
from .query import RolloutQuery, managed_by_selector
from .store import ResultStore

__version__ = "0.1.0"

__all__ = [
    # Orchestration
    "StatusChecker",
    "check_rollout_status",
    # Components
    "RolloutPoller",
    "ResultStore",
    "summarize",
    "parse_deadlines",
    "resolve_deadlines",
    "ROLLOUT_COMPLETE_MARKER",
    # Cluster queries
    "RolloutQuery",
    "KubectlCLI",
    "ApiRolloutQuery",
    "ClusterConnection",
    "render_rollout_status",
    "managed_by_selector",
    # Configuration
    "Settings",
    "get_settings",
    "configure_logging",
    # Models
    "ClusterConfig",
    "OutcomeKind",
    "PollOutcome",
    "StatusCheckResult",
    # Errors
    "StatusCheckError",
    "RolloutQueryError",
    "DeadlineResolutionError",
    "RolloutFailedError",
]
