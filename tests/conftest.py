"""
Shared fixtures: an in-memory cluster client that records every call
"""

import os
import sys

import pytest
from kubernetes import client

# Add the project root to Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from pod_restarter.errors import FetchError, WriteError  # noqa: E402


def make_pod(name, namespace="default", owners=None, phase="Running", labels=None):
    """Build a V1Pod; owners is a list of (kind, name) pairs"""
    owner_refs = None
    if owners:
        owner_refs = [
            client.V1OwnerReference(api_version="apps/v1", kind=kind, name=owner_name, uid=f"uid-{owner_name}")
            for kind, owner_name in owners
        ]
    return client.V1Pod(
        metadata=client.V1ObjectMeta(
            name=name,
            namespace=namespace,
            labels=labels if labels is not None else {"app": name},
            owner_references=owner_refs,
        ),
        spec=client.V1PodSpec(containers=[client.V1Container(name="main", image="nginx:latest")]),
        status=client.V1PodStatus(phase=phase),
    )


def make_controller(name, namespace="default", owners=None, annotations=None):
    """Build an object shaped like a Deployment/DaemonSet/StatefulSet/ReplicaSet"""
    owner_refs = None
    if owners:
        owner_refs = [
            client.V1OwnerReference(api_version="apps/v1", kind=kind, name=owner_name, uid=f"uid-{owner_name}")
            for kind, owner_name in owners
        ]
    template = client.V1PodTemplateSpec(
        metadata=client.V1ObjectMeta(labels={"app": name}, annotations=annotations),
        spec=client.V1PodSpec(containers=[client.V1Container(name="main", image="nginx:latest")]),
    )
    return client.V1Deployment(
        metadata=client.V1ObjectMeta(name=name, namespace=namespace, owner_references=owner_refs),
        spec=client.V1DeploymentSpec(
            selector=client.V1LabelSelector(match_labels={"app": name}),
            template=template,
        ),
    )


class FakeKubernetesClient:
    """Stands in for KubernetesClient; resources live in dicts keyed by (kind, namespace, name)"""

    def __init__(self, pods=None):
        self.pods = list(pods or [])
        self.resources = {}
        self.calls = []
        # (method, name) -> exception raised on the next matching call
        self.failures = {}
        # phase reported by get_pod for created pods
        self.created_phase = "Running"

    def add(self, kind, resource):
        self.resources[(kind, resource.metadata.namespace, resource.metadata.name)] = resource
        return resource

    def fail_next(self, method, name, error=None):
        self.failures[(method, name)] = error or WriteError(f"{method} {name} failed")

    def _call(self, method, name, *args):
        self.calls.append((method, name) + args)
        error = self.failures.pop((method, name), None)
        if error is not None:
            raise error

    def calls_to(self, method, name=None):
        return [c for c in self.calls if c[0] == method and (name is None or c[1] == name)]

    def mutating_calls(self):
        return [c for c in self.calls if c[0].startswith(("update_", "create_", "delete_"))]

    def list_all_pods(self):
        self._call("list_all_pods", None)
        return list(self.pods)

    def _get(self, kind, name, namespace):
        self._call(f"get_{kind}", name, namespace)
        try:
            return self.resources[(kind, namespace, name)]
        except KeyError:
            raise FetchError(f"{kind} {namespace}/{name} not found", kind=kind, name=name,
                             namespace=namespace, status=404)

    def _update(self, kind, resource):
        self._call(f"update_{kind}", resource.metadata.name, resource.metadata.namespace)
        self.resources[(kind, resource.metadata.namespace, resource.metadata.name)] = resource
        return resource

    def get_deployment(self, name, namespace):
        return self._get("deployment", name, namespace)

    def update_deployment(self, deployment):
        return self._update("deployment", deployment)

    def get_daemon_set(self, name, namespace):
        return self._get("daemon_set", name, namespace)

    def update_daemon_set(self, daemon_set):
        return self._update("daemon_set", daemon_set)

    def get_stateful_set(self, name, namespace):
        return self._get("stateful_set", name, namespace)

    def update_stateful_set(self, stateful_set):
        return self._update("stateful_set", stateful_set)

    def get_replica_set(self, name, namespace):
        return self._get("replica_set", name, namespace)

    def get_pod(self, name, namespace):
        self._call("get_pod", name, namespace)
        for pod in self.pods:
            if pod.metadata.name == name and pod.metadata.namespace == namespace:
                return pod
        raise FetchError(f"pod {namespace}/{name} not found", kind="Pod", name=name,
                         namespace=namespace, status=404)

    def create_pod(self, pod):
        self._call("create_pod", pod.metadata.name, pod.metadata.namespace)
        pod.status = client.V1PodStatus(phase=self.created_phase)
        self.pods.append(pod)
        return pod

    def delete_pod(self, name, namespace):
        self._call("delete_pod", name, namespace)
        self.pods = [
            p for p in self.pods
            if not (p.metadata.name == name and p.metadata.namespace == namespace)
        ]


class FakeClock:
    """Monotonic clock advanced only by the fake sleep"""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class ImmediateWaiter:
    def __init__(self, ready=True):
        self.ready = ready
        self.waited = []

    def wait_running(self, name, namespace, timeout=None, poll_interval=None):
        self.waited.append((name, namespace))
        return self.ready


@pytest.fixture
def fake_client():
    return FakeKubernetesClient()


@pytest.fixture
def fake_clock():
    return FakeClock()
