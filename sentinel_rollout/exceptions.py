"""Exceptions raised by the rollout status checker."""


class StatusCheckError(Exception):
    """Base class for status check errors."""


class RolloutQueryError(StatusCheckError):
    """A cluster query could not be executed or returned an error."""


class DeadlineResolutionError(StatusCheckError):
    """Progress deadlines for the managed workloads could not be resolved."""


class RolloutFailedError(StatusCheckError):
    """One or more workloads did not roll out successfully."""

    def __init__(self, failures: list[str]):
        self.failures = list(failures)
        super().__init__("\n".join(self.failures))
