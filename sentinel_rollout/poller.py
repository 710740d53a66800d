"""Rollout status polling for a single deployment."""

import logging
import time
from typing import Callable

from .exceptions import RolloutQueryError
from .models import OutcomeKind, PollOutcome
from .query import RolloutQuery
from .store import ResultStore

logger = logging.getLogger(__name__)

ROLLOUT_COMPLETE_MARKER = "successfully rolled out"


class RolloutPoller:
    """
    Polls ``rollout status`` for one deployment until it settles.

    A query error ends polling immediately. Any status text without the
    completion marker is treated as pending and polled again until the
    time budget runs out.
    """

    def __init__(
        self,
        query: RolloutQuery,
        poll_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize rollout poller.

        Args:
            query: Cluster query mechanism
            poll_interval: Seconds to wait between status queries
            clock: Monotonic clock in seconds
            sleep: Sleep function taking seconds

        Raises:
            ValueError: If poll_interval is not positive
        """
        if poll_interval <= 0:
            raise ValueError(f"Poll interval must be positive, got {poll_interval}")

        self.query = query
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep

    def _query_once(self, name: str, attempts: int) -> PollOutcome:
        try:
            status = self.query.rollout_status(name)
        except RolloutQueryError as e:
            return PollOutcome.invocation_failure(str(e), attempts)
        except Exception as e:
            logger.error(f"Unexpected error querying {name}: {e}", exc_info=True)
            return PollOutcome.invocation_failure(
                f"unexpected error: {e.__class__.__name__}: {e}", attempts
            )

        if ROLLOUT_COMPLETE_MARKER in status:
            return PollOutcome.success(status.strip(), attempts)
        return PollOutcome.pending(status.strip(), attempts)

    def poll(self, name: str, budget: float) -> PollOutcome:
        """
        Poll a deployment until it rolls out, fails or runs out of time.

        Args:
            name: Deployment name
            budget: Seconds allowed for the rollout, counted from this call

        Returns:
            Terminal PollOutcome

        Raises:
            ValueError: If budget is not positive
        """
        if budget <= 0:
            raise ValueError(f"Time budget must be positive, got {budget}")

        start_time = self._clock()
        attempts = 0

        while True:
            attempts += 1
            outcome = self._query_once(name, attempts)

            if outcome.kind is OutcomeKind.SUCCESS:
                logger.info(f"Deployment {name} rolled out after {attempts} checks")
                return outcome

            if outcome.kind is OutcomeKind.INVOCATION_FAILURE:
                logger.warning(f"Could not get rollout status of {name}: {outcome.message}")
                return outcome

            logger.debug(f"Deployment {name} pending: {outcome.message}")

            if (self._clock() - start_time) >= budget:
                logger.warning(
                    f"Deployment {name} did not stabilize within {budget}s "
                    f"(last status: {outcome.message})"
                )
                return PollOutcome.timed_out(outcome.message, attempts)

            self._sleep(self.poll_interval)

    def poll_into(self, name: str, budget: float, store: ResultStore) -> PollOutcome:
        """Poll a deployment and record its terminal outcome in ``store``."""
        outcome = self.poll(name, budget)
        store.record(name, outcome)
        return outcome
