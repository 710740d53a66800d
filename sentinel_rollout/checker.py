"""Status check orchestration across all managed deployments."""

import logging
import time
from concurrent.futures import ALL_COMPLETED, ThreadPoolExecutor, wait
from typing import Callable, Optional

from .aggregate import summarize
from .config import Settings, get_settings
from .deadlines import resolve_deadlines
from .kubectl import KubectlCLI
from .models import StatusCheckResult
from .poller import RolloutPoller
from .query import RolloutQuery, managed_by_selector
from .store import ResultStore

logger = logging.getLogger(__name__)


class StatusChecker:
    """
    Checks that every managed deployment finished rolling out.

    Responsibilities:
    - Resolve progress deadlines of the managed deployments
    - Poll each deployment concurrently against its time budget
    - Wait for every poller and summarize the outcomes
    """

    def __init__(
        self,
        query: RolloutQuery,
        settings: Optional[Settings] = None,
        poll_interval: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize status checker.

        Args:
            query: Cluster query mechanism
            settings: Checker settings (cached settings when None)
            poll_interval: Seconds between status queries, overrides settings
            clock: Monotonic clock used by the pollers
            sleep: Sleep function used by the pollers
        """
        self.query = query
        self.settings = settings or get_settings()
        self.selector = managed_by_selector(self.settings.managed_by)
        self.poller = RolloutPoller(
            query,
            poll_interval=(
                poll_interval
                if poll_interval is not None
                else self.settings.poll_interval_seconds
            ),
            clock=clock,
            sleep=sleep,
        )

    def budget_for(
        self, name: str, deadlines: dict[str, float], timeout: Optional[float] = None
    ) -> float:
        """
        Time budget for one deployment.

        An explicit timeout wins over the declared progress deadline, which
        wins over the configured default.
        """
        if timeout is not None:
            return timeout
        return deadlines.get(name, self.settings.default_deadline_seconds)

    def check(self, timeout: Optional[float] = None) -> StatusCheckResult:
        """
        Run a status check over all managed deployments.

        Args:
            timeout: Seconds allowed per deployment, overriding declared deadlines

        Returns:
            StatusCheckResult with per-deployment failures

        Raises:
            DeadlineResolutionError: If the managed deployments cannot be listed
            ValueError: If timeout is not positive
        """
        if timeout is not None and timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {timeout}")

        deadlines = resolve_deadlines(self.query, self.selector)
        store = ResultStore()

        if not deadlines:
            logger.info("No managed deployments found, nothing to check")
            return summarize(store)

        max_workers = len(deadlines)
        if self.settings.max_concurrent_checks:
            max_workers = min(max_workers, self.settings.max_concurrent_checks)

        logger.info(f"Checking rollout status of {len(deadlines)} deployments")
        with ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="rollout-poller"
        ) as executor:
            futures = [
                executor.submit(
                    self.poller.poll_into,
                    name,
                    self.budget_for(name, deadlines, timeout),
                    store,
                )
                for name in deadlines
            ]
            wait(futures, return_when=ALL_COMPLETED)

        for future in futures:
            future.result()

        result = summarize(store)
        if result.success:
            logger.info("All deployments rolled out successfully")
        else:
            logger.error(f"Rollout status check failed:\n{result.message}")
        return result


def check_rollout_status(
    namespace: str = "default",
    context: Optional[str] = None,
    timeout: Optional[float] = None,
    settings: Optional[Settings] = None,
) -> StatusCheckResult:
    """
    Check rollout status of managed deployments using kubectl.

    Args:
        namespace: Kubernetes namespace
        context: kubeconfig context (current context when None)
        timeout: Seconds allowed per deployment, overriding declared deadlines
        settings: Checker settings (cached settings when None)

    Returns:
        StatusCheckResult

    Raises:
        DeadlineResolutionError: If the managed deployments cannot be listed
    """
    settings = settings or get_settings()
    cli = KubectlCLI(
        namespace=namespace,
        context=context,
        kubectl=settings.kubectl_binary,
        timeout=settings.query_timeout_seconds,
    )
    return StatusChecker(cli, settings=settings).check(timeout=timeout)
