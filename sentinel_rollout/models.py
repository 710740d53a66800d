"""Rollout status models for Sentinel."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from .exceptions import RolloutFailedError

TIMEOUT_CAUSE = "did not stabilize within the given timeout"


class ClusterConfig(BaseModel):
    """Cluster configuration."""

    kubeconfig_path: Optional[str] = None
    kubeconfig_data: Optional[str] = None  # Base64 encoded kubeconfig
    context: Optional[str] = None  # Specific context to use
    namespace: str = "default"


class OutcomeKind(str, Enum):
    """Kind of a single rollout poll outcome."""

    SUCCESS = "success"
    PENDING = "pending"
    INVOCATION_FAILURE = "invocation_failure"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class PollOutcome:
    """Result of polling one workload's rollout status."""

    kind: OutcomeKind
    message: str = ""
    attempts: int = 0

    @classmethod
    def success(cls, message: str = "", attempts: int = 0) -> "PollOutcome":
        return cls(OutcomeKind.SUCCESS, message, attempts)

    @classmethod
    def pending(cls, message: str, attempts: int = 0) -> "PollOutcome":
        return cls(OutcomeKind.PENDING, message, attempts)

    @classmethod
    def invocation_failure(cls, cause: str, attempts: int = 0) -> "PollOutcome":
        return cls(OutcomeKind.INVOCATION_FAILURE, cause, attempts)

    @classmethod
    def timed_out(cls, last_status: str = "", attempts: int = 0) -> "PollOutcome":
        return cls(OutcomeKind.TIMED_OUT, last_status, attempts)

    @property
    def is_terminal(self) -> bool:
        """Whether polling stops after this outcome."""
        return self.kind is not OutcomeKind.PENDING

    @property
    def failed(self) -> bool:
        """Whether the deployment failed to roll out."""
        return self.kind in (OutcomeKind.INVOCATION_FAILURE, OutcomeKind.TIMED_OUT)

    @property
    def cause(self) -> Optional[str]:
        """
        Human-readable failure cause.

        Returns:
            The invocation error text, the fixed timeout message,
            or None for non-failures
        """
        if self.kind is OutcomeKind.INVOCATION_FAILURE:
            return self.message
        if self.kind is OutcomeKind.TIMED_OUT:
            return TIMEOUT_CAUSE
        return None


@dataclass
class StatusCheckResult:
    """Aggregate verdict of a status check."""

    success: bool
    failures: list[str] = field(default_factory=list)
    outcomes: dict[str, PollOutcome] = field(default_factory=dict)

    @property
    def message(self) -> str:
        """Failure lines joined by newlines."""
        return "\n".join(self.failures)

    def raise_for_status(self) -> None:
        """
        Raise if any workload failed to roll out.

        Raises:
            RolloutFailedError: If the verdict is a failure
        """
        if not self.success:
            raise RolloutFailedError(self.failures)
