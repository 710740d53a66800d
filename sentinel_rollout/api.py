"""Cluster queries backed by the Kubernetes API client."""

import logging
from typing import Optional

from kubernetes.client import V1Deployment
from kubernetes.client.exceptions import ApiException

from .cluster import ClusterConnection
from .exceptions import RolloutQueryError

logger = logging.getLogger(__name__)

# apps/v1 default for spec.progressDeadlineSeconds
DEFAULT_PROGRESS_DEADLINE_SECONDS = 600


def render_rollout_status(deployment: V1Deployment) -> str:
    """
    Render rollout status text the way ``kubectl rollout status`` does.

    Args:
        deployment: Deployment read from the API server

    Returns:
        Status text, containing "successfully rolled out" once complete

    Raises:
        RolloutQueryError: If the deployment exceeded its progress deadline
    """
    name = deployment.metadata.name
    status = deployment.status
    if status is None:
        return "Waiting for deployment spec update to be observed...\n"

    generation = deployment.metadata.generation or 0
    observed_generation = status.observed_generation or 0

    if generation > observed_generation:
        return "Waiting for deployment spec update to be observed...\n"

    for condition in status.conditions or []:
        if condition.type == "Progressing" and condition.reason == "ProgressDeadlineExceeded":
            raise RolloutQueryError(f'deployment "{name}" exceeded its progress deadline')

    desired = deployment.spec.replicas
    replicas = status.replicas or 0
    updated = status.updated_replicas or 0
    available = status.available_replicas or 0

    if desired is not None and updated < desired:
        return (
            f'Waiting for deployment "{name}" rollout to finish: '
            f"{updated} out of {desired} new replicas have been updated...\n"
        )
    if replicas > updated:
        return (
            f'Waiting for deployment "{name}" rollout to finish: '
            f"{replicas - updated} old replicas are pending termination...\n"
        )
    if available < updated:
        return (
            f'Waiting for deployment "{name}" rollout to finish: '
            f"{available} of {updated} updated replicas are available...\n"
        )
    return f'deployment "{name}" successfully rolled out\n'


class ApiRolloutQuery:
    """Rollout queries against the Kubernetes API instead of kubectl."""

    def __init__(self, cluster: ClusterConnection, namespace: Optional[str] = None):
        """
        Initialize API query.

        Args:
            cluster: Cluster connection
            namespace: Kubernetes namespace (the cluster's namespace when None)
        """
        self.cluster = cluster
        self.apps_v1 = cluster.apps_v1
        self.namespace = namespace or cluster.config.namespace

    def rollout_status(self, name: str) -> str:
        try:
            deployment = self.apps_v1.read_namespaced_deployment(name, self.namespace)
        except ApiException as e:
            if e.status == 404:
                raise RolloutQueryError(f'deployments.apps "{name}" not found') from e
            raise RolloutQueryError(
                f"Error reading deployment {name}: {e.reason}"
            ) from e
        except Exception as e:
            raise RolloutQueryError(f"Error reading deployment {name}: {e}") from e

        return render_rollout_status(deployment)

    def get_deadlines(self, selector: str) -> str:
        try:
            result = self.apps_v1.list_namespaced_deployment(
                namespace=self.namespace,
                label_selector=selector,
            )
        except ApiException as e:
            raise RolloutQueryError(f"Error listing deployments: {e.reason}") from e
        except Exception as e:
            raise RolloutQueryError(f"Error listing deployments: {e}") from e

        pairs = []
        for deployment in result.items:
            deadline = deployment.spec.progress_deadline_seconds
            if deadline is None:
                deadline = DEFAULT_PROGRESS_DEADLINE_SECONDS
            pairs.append(f"{deployment.metadata.name}:{deadline},")

        logger.debug(f"Found {len(pairs)} deployments matching {selector}")
        return "".join(pairs)
