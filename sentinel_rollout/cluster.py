"""Kubernetes API connection used by ApiRolloutQuery."""

import base64
import logging
import os
import tempfile
from typing import Optional

from kubernetes import client, config
from kubernetes.client import ApiClient, AppsV1Api

from .models import ClusterConfig

logger = logging.getLogger(__name__)


def _write_kubeconfig(kubeconfig_data: str) -> str:
    """Write base64 encoded kubeconfig to a private temporary file."""
    fd, path = tempfile.mkstemp(prefix="sentinel-kubeconfig-")
    with os.fdopen(fd, "wb") as f:
        f.write(base64.b64decode(kubeconfig_data))
    return path


class ClusterConnection:
    """
    API client bound to one cluster and namespace.

    Each connection owns its ApiClient, so several connections with
    different kubeconfigs or contexts can be polled from the same process.
    """

    def __init__(self, cluster_config: ClusterConfig):
        """
        Initialize cluster connection.

        Args:
            cluster_config: Cluster configuration

        Raises:
            ValueError: If no usable kubeconfig or in-cluster config is found
        """
        self.config = cluster_config
        self._temp_kubeconfig: Optional[str] = None

        try:
            self._api_client: Optional[ApiClient] = self._create_api_client()
        except Exception as e:
            self._remove_temp_kubeconfig()
            raise ValueError(f"Failed to initialize cluster connection: {e}") from e

        self._apps_v1: Optional[AppsV1Api] = AppsV1Api(self._api_client)
        logger.debug(
            f"Connected to cluster (context={cluster_config.context}, "
            f"namespace={cluster_config.namespace})"
        )

    def _create_api_client(self) -> ApiClient:
        kubeconfig_path = self.config.kubeconfig_path
        if self.config.kubeconfig_data:
            self._temp_kubeconfig = _write_kubeconfig(self.config.kubeconfig_data)
            kubeconfig_path = self._temp_kubeconfig

        if kubeconfig_path:
            return config.new_client_from_config(
                config_file=os.path.expanduser(kubeconfig_path),
                context=self.config.context,
            )

        # Running inside the cluster
        configuration = client.Configuration()
        config.load_incluster_config(client_configuration=configuration)
        return ApiClient(configuration)

    def _remove_temp_kubeconfig(self) -> None:
        if self._temp_kubeconfig and os.path.exists(self._temp_kubeconfig):
            os.unlink(self._temp_kubeconfig)
        self._temp_kubeconfig = None

    @property
    def apps_v1(self) -> AppsV1Api:
        """Get AppsV1Api instance."""
        if not self._apps_v1:
            raise RuntimeError("Cluster connection is closed")
        return self._apps_v1

    def close(self):
        """Close the API client and remove any temporary kubeconfig."""
        if self._api_client:
            self._api_client.close()
            self._api_client = None
        self._apps_v1 = None
        self._remove_temp_kubeconfig()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
