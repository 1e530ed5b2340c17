from unittest.mock import Mock, patch

import pytest
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException

from conftest import make_controller, make_pod
from pod_restarter.errors import ConfigurationError, FetchError, UpdateConflict, WriteError
from pod_restarter.kubernetes_client import KubernetesClient


@pytest.fixture
def apis():
    return Mock(), Mock()


@pytest.fixture
def k8s_client(apis):
    core_v1, apps_v1 = apis
    return KubernetesClient(core_v1=core_v1, apps_v1=apps_v1)


def test_list_all_pods(apis, k8s_client):
    core_v1, _ = apis
    core_v1.list_pod_for_all_namespaces.return_value = Mock(items=[make_pod("database-0")])

    pods = k8s_client.list_all_pods()

    assert [p.metadata.name for p in pods] == ["database-0"]
    core_v1.list_pod_for_all_namespaces.assert_called_once_with(watch=False)


def test_list_failure_raises_fetch_error(apis, k8s_client):
    core_v1, _ = apis
    core_v1.list_pod_for_all_namespaces.side_effect = ApiException(status=403, reason="Forbidden")

    with pytest.raises(FetchError):
        k8s_client.list_all_pods()


def test_get_deployment_not_found(apis, k8s_client):
    _, apps_v1 = apis
    apps_v1.read_namespaced_deployment.side_effect = ApiException(status=404, reason="Not Found")

    with pytest.raises(FetchError) as exc_info:
        k8s_client.get_deployment("db", "prod")

    assert exc_info.value.status == 404
    assert exc_info.value.kind == "Deployment"


def test_update_conflict(apis, k8s_client):
    _, apps_v1 = apis
    apps_v1.replace_namespaced_stateful_set.side_effect = ApiException(status=409, reason="Conflict")

    with pytest.raises(UpdateConflict):
        k8s_client.update_stateful_set(make_controller("db", "prod"))


def test_update_uses_resource_identity(apis, k8s_client):
    _, apps_v1 = apis
    daemon_set = make_controller("agent", "prod")

    k8s_client.update_daemon_set(daemon_set)

    apps_v1.replace_namespaced_daemon_set.assert_called_once_with(
        name="agent", namespace="prod", body=daemon_set
    )


def test_delete_failure_raises_write_error(apis, k8s_client):
    core_v1, _ = apis
    core_v1.delete_namespaced_pod.side_effect = ApiException(status=500, reason="Internal")

    with pytest.raises(WriteError) as exc_info:
        k8s_client.delete_pod("database", "prod")

    assert not isinstance(exc_info.value, UpdateConflict)


def test_create_pod_uses_pod_namespace(apis, k8s_client):
    core_v1, _ = apis
    pod = make_pod("database-x2k4", "prod")

    k8s_client.create_pod(pod)

    core_v1.create_namespaced_pod.assert_called_once_with(namespace="prod", body=pod)


def test_missing_kubeconfig_file():
    with pytest.raises(ConfigurationError):
        KubernetesClient(kubeconfig_path="/nonexistent/kubeconfig")


def test_bad_kubeconfig(tmp_path):
    kubeconfig = tmp_path / "config"
    kubeconfig.write_text("apiVersion: v1\n")

    with patch("pod_restarter.kubernetes_client.config.load_kube_config",
               side_effect=ConfigException("Invalid kube-config file")):
        with pytest.raises(ConfigurationError):
            KubernetesClient(kubeconfig_path=str(kubeconfig))
