"""Cluster queries backed by the kubectl command line."""

import logging
import subprocess
from typing import Optional

from .exceptions import RolloutQueryError

logger = logging.getLogger(__name__)

DEADLINE_TEMPLATE = (
    "{{range .items}}{{.metadata.name}}:{{.spec.progressDeadlineSeconds}},{{end}}"
)


class KubectlCLI:
    """Runs kubectl against a single namespace and context."""

    def __init__(
        self,
        namespace: str = "default",
        context: Optional[str] = None,
        kubectl: str = "kubectl",
        timeout: Optional[float] = None,
    ):
        """
        Initialize kubectl wrapper.

        Args:
            namespace: Kubernetes namespace
            context: kubeconfig context (current context when None)
            kubectl: kubectl executable
            timeout: Maximum seconds a single invocation may take
        """
        self.namespace = namespace
        self.context = context
        self.kubectl = kubectl
        self.timeout = timeout

    def command(self, *args: str) -> list[str]:
        """Build the full kubectl command line for ``args``."""
        cmd = [self.kubectl]
        if self.context:
            cmd += ["--context", self.context]
        cmd += ["--namespace", self.namespace]
        return cmd + list(args)

    def run_out(self, *args: str) -> str:
        """
        Run kubectl and return its standard output.

        Raises:
            RolloutQueryError: If kubectl cannot be run, times out or exits non-zero
        """
        cmd = self.command(*args)
        logger.debug(f"Running {' '.join(cmd)}")
        try:
            completed = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise RolloutQueryError(f"{self.kubectl} not found") from e
        except subprocess.TimeoutExpired as e:
            raise RolloutQueryError(
                f"{' '.join(args)} did not return within {self.timeout}s"
            ) from e
        except OSError as e:
            raise RolloutQueryError(f"Could not run {self.kubectl}: {e}") from e

        if completed.returncode != 0:
            stderr = completed.stderr.strip()
            raise RolloutQueryError(stderr or f"exit status {completed.returncode}")

        return completed.stdout

    def rollout_status(self, name: str) -> str:
        return self.run_out("rollout", "status", "deployment", name, "--watch=false")

    def get_deadlines(self, selector: str) -> str:
        return self.run_out(
            "get",
            "deployments",
            "-l",
            selector,
            "--output",
            f"go-template={DEADLINE_TEMPLATE}",
        )
