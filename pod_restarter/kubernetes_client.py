import os
import logging
from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException

from pod_restarter.errors import ConfigurationError, FetchError, UpdateConflict, WriteError

logger = logging.getLogger(__name__)


def _fetch_error(kind, name, namespace, e):
    return FetchError(
        f"failed to get {kind} {namespace}/{name}: {e}",
        kind=kind, name=name, namespace=namespace, status=getattr(e, "status", None)
    )


def _write_error(verb, kind, name, namespace, e):
    status = getattr(e, "status", None)
    error_class = UpdateConflict if status == 409 else WriteError
    return error_class(
        f"failed to {verb} {kind} {namespace}/{name}: {e}",
        kind=kind, name=name, namespace=namespace, status=status
    )


class KubernetesClient:
    """Thin wrapper over CoreV1Api/AppsV1Api that raises Pod Restarter errors"""

    def __init__(self, kubeconfig_path=None, core_v1=None, apps_v1=None):
        if core_v1 is not None and apps_v1 is not None:
            self.v1 = core_v1
            self.apps_v1 = apps_v1
            return

        try:
            if kubeconfig_path and os.path.exists(kubeconfig_path):
                logger.info(f"Loading kubeconfig from: {kubeconfig_path}")
                config.load_kube_config(config_file=kubeconfig_path)
            elif kubeconfig_path:
                raise ConfigurationError(f"kubeconfig file not found: {kubeconfig_path}")
            else:
                # No path resolvable, fall back to the service account
                config.load_incluster_config()
                logger.info("Loaded in-cluster Kubernetes configuration")

            self.v1 = core_v1 or client.CoreV1Api()
            self.apps_v1 = apps_v1 or client.AppsV1Api()
            logger.info("Kubernetes client initialized successfully")

        except ConfigException as e:
            logger.error(f"Failed to initialize Kubernetes client: {e}")
            raise ConfigurationError(f"could not load Kubernetes configuration: {e}") from e

    def list_all_pods(self):
        """List all pods from all namespaces"""
        try:
            pods = self.v1.list_pod_for_all_namespaces(watch=False)
            return pods.items
        except ApiException as e:
            logger.error(f"Failed to list pods: {e}")
            raise FetchError(f"failed to list pods: {e}", kind="Pod", status=e.status) from e

    # Pods

    def get_pod(self, name, namespace):
        try:
            return self.v1.read_namespaced_pod(name=name, namespace=namespace)
        except ApiException as e:
            raise _fetch_error("Pod", name, namespace, e) from e

    def create_pod(self, pod):
        namespace = pod.metadata.namespace
        try:
            return self.v1.create_namespaced_pod(namespace=namespace, body=pod)
        except ApiException as e:
            raise _write_error("create", "Pod", pod.metadata.name, namespace, e) from e

    def delete_pod(self, name, namespace):
        try:
            self.v1.delete_namespaced_pod(
                name=name,
                namespace=namespace,
                body=client.V1DeleteOptions()
            )
            logger.info(f"Successfully deleted pod {namespace}/{name}")
        except ApiException as e:
            raise _write_error("delete", "Pod", name, namespace, e) from e

    # Controllers

    def get_deployment(self, name, namespace):
        try:
            return self.apps_v1.read_namespaced_deployment(name=name, namespace=namespace)
        except ApiException as e:
            raise _fetch_error("Deployment", name, namespace, e) from e

    def update_deployment(self, deployment):
        name, namespace = deployment.metadata.name, deployment.metadata.namespace
        try:
            return self.apps_v1.replace_namespaced_deployment(name=name, namespace=namespace, body=deployment)
        except ApiException as e:
            raise _write_error("update", "Deployment", name, namespace, e) from e

    def get_daemon_set(self, name, namespace):
        try:
            return self.apps_v1.read_namespaced_daemon_set(name=name, namespace=namespace)
        except ApiException as e:
            raise _fetch_error("DaemonSet", name, namespace, e) from e

    def update_daemon_set(self, daemon_set):
        name, namespace = daemon_set.metadata.name, daemon_set.metadata.namespace
        try:
            return self.apps_v1.replace_namespaced_daemon_set(name=name, namespace=namespace, body=daemon_set)
        except ApiException as e:
            raise _write_error("update", "DaemonSet", name, namespace, e) from e

    def get_stateful_set(self, name, namespace):
        try:
            return self.apps_v1.read_namespaced_stateful_set(name=name, namespace=namespace)
        except ApiException as e:
            raise _fetch_error("StatefulSet", name, namespace, e) from e

    def update_stateful_set(self, stateful_set):
        name, namespace = stateful_set.metadata.name, stateful_set.metadata.namespace
        try:
            return self.apps_v1.replace_namespaced_stateful_set(name=name, namespace=namespace, body=stateful_set)
        except ApiException as e:
            raise _write_error("update", "StatefulSet", name, namespace, e) from e

    def get_replica_set(self, name, namespace):
        try:
            return self.apps_v1.read_namespaced_replica_set(name=name, namespace=namespace)
        except ApiException as e:
            raise _fetch_error("ReplicaSet", name, namespace, e) from e

