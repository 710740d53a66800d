"""Tests for ClusterConnection."""

import base64
import os
from unittest.mock import MagicMock, patch

import pytest

from sentinel_rollout import ClusterConfig, ClusterConnection


@pytest.fixture
def mock_k8s_config():
    with patch("sentinel_rollout.cluster.config") as mock_config:
        mock_config.new_client_from_config.return_value = MagicMock()
        yield mock_config


class TestClusterConnection:
    """Test cases for ClusterConnection."""

    def test_kubeconfig_path(self, mock_k8s_config):
        cluster_config = ClusterConfig(
            kubeconfig_path="/etc/kube/config", context="prod", namespace="staging"
        )

        with ClusterConnection(cluster_config) as connection:
            assert connection.config.namespace == "staging"
            assert connection.apps_v1.api_client is (
                mock_k8s_config.new_client_from_config.return_value
            )

        mock_k8s_config.new_client_from_config.assert_called_once_with(
            config_file="/etc/kube/config", context="prod"
        )
        mock_k8s_config.load_incluster_config.assert_not_called()

    def test_kubeconfig_data_written_and_removed(self, mock_k8s_config):
        data = base64.b64encode(b"apiVersion: v1\nkind: Config\n").decode()

        connection = ClusterConnection(ClusterConfig(kubeconfig_data=data))
        path = mock_k8s_config.new_client_from_config.call_args.kwargs["config_file"]

        with open(path, "rb") as f:
            assert f.read() == b"apiVersion: v1\nkind: Config\n"

        connection.close()

        assert not os.path.exists(path)

    def test_in_cluster(self, mock_k8s_config):
        connection = ClusterConnection(ClusterConfig())

        mock_k8s_config.load_incluster_config.assert_called_once()
        mock_k8s_config.new_client_from_config.assert_not_called()
        assert connection.apps_v1 is not None

    def test_invalid_config(self, mock_k8s_config):
        mock_k8s_config.load_incluster_config.side_effect = Exception("not in a cluster")

        with pytest.raises(ValueError, match="not in a cluster"):
            ClusterConnection(ClusterConfig())

    def test_closed_connection(self, mock_k8s_config):
        connection = ClusterConnection(ClusterConfig(kubeconfig_path="/etc/kube/config"))
        connection.close()

        mock_k8s_config.new_client_from_config.return_value.close.assert_called_once()
        with pytest.raises(RuntimeError, match="closed"):
            connection.apps_v1
