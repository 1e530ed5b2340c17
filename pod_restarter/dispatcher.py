"""
Kind-specific restart actions.

Template controllers are restarted the way ``kubectl rollout restart`` does
it: the pod template gets a fresh ``kubectl.kubernetes.io/restartedAt``
annotation and the platform's own controller rolls the pods. ReplicaSets
are escalated to their Deployment. Ownerless pods are replaced by a copy
and only deleted once the copy is running.
"""

import copy
import random
import logging
from datetime import datetime, timezone
from enum import Enum

from kubernetes import client

from pod_restarter.ownership import ResourceKind, TEMPLATE_KINDS, classify

logger = logging.getLogger(__name__)

RESTARTED_AT_ANNOTATION = "kubectl.kubernetes.io/restartedAt"

# Same alphabet as the API machinery's random suffixes: no vowels, no 0/1/3
SUFFIX_ALPHABET = "bcdfghjklmnpqrstvwxz2456789"


class RestartOutcome(str, Enum):
    RESTARTED = "restarted"
    # ReplicaSet without a Deployment owner
    SKIPPED = "skipped"
    # Replacement never ran; both pods were left in place
    REPLACEMENT_TIMED_OUT = "replacement_timed_out"


def restarted_at_timestamp(now=None):
    now = now or datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%SZ")


def random_suffix(length, rng=random):
    return "".join(rng.choice(SUFFIX_ALPHABET) for _ in range(length))


def replacement_pod_name(name, max_length=255, suffix_length=5, rng=random):
    """Build ``<name>-<token>`` for a replacement pod.

    ``suffix_length`` counts the hyphen, so the token has suffix_length - 1
    characters. A name already over max_length loses its last
    suffix_length characters first, so the result keeps its length.
    """
    token = random_suffix(suffix_length - 1, rng)
    if len(name) > max_length:
        name = name[:len(name) - suffix_length]
    return f"{name}-{token}"


class RestartDispatcher:
    def __init__(self, k8s_client, waiter, name_max_length=255, name_suffix_length=5, rng=random):
        self.k8s_client = k8s_client
        self.waiter = waiter
        self.name_max_length = name_max_length
        self.name_suffix_length = name_suffix_length
        self.rng = rng

        self._template_ops = {
            ResourceKind.DEPLOYMENT: (k8s_client.get_deployment, k8s_client.update_deployment),
            ResourceKind.DAEMON_SET: (k8s_client.get_daemon_set, k8s_client.update_daemon_set),
            ResourceKind.STATEFUL_SET: (k8s_client.get_stateful_set, k8s_client.update_stateful_set),
        }

    def restart(self, kind, name, pod):
        """Restart the resource of ``kind`` called ``name`` in the pod's namespace.

        Raises a RestartError subclass when an API call fails.
        """
        namespace = pod.metadata.namespace
        if kind in TEMPLATE_KINDS:
            return self.restart_template(kind, name, namespace)
        if kind == ResourceKind.REPLICA_SET:
            return self.restart_replica_set(name, namespace)
        if kind == ResourceKind.POD:
            return self.replace_pod(pod)
        raise ValueError(f"cannot restart resource kind {kind}")

    def restart_template(self, kind, name, namespace):
        get, update = self._template_ops[kind]
        resource = get(name, namespace)

        template_meta = resource.spec.template.metadata
        if template_meta is None:
            template_meta = resource.spec.template.metadata = client.V1ObjectMeta()
        if template_meta.annotations is None:
            template_meta.annotations = {}
        template_meta.annotations[RESTARTED_AT_ANNOTATION] = restarted_at_timestamp()

        update(resource)
        logger.info(f"Triggered rollout restart of {kind.value} {namespace}/{name}")
        return RestartOutcome.RESTARTED

    def escalate(self, name, namespace):
        """Name of the Deployment owning ReplicaSet namespace/name, or None"""
        replica_set = self.k8s_client.get_replica_set(name, namespace)
        for owner in replica_set.metadata.owner_references or []:
            if classify(owner.kind) == ResourceKind.DEPLOYMENT:
                return owner.name
        return None

    def restart_replica_set(self, name, namespace):
        deployment = self.escalate(name, namespace)
        if deployment is None:
            logger.info(f"ReplicaSet {namespace}/{name} has no Deployment owner, nothing to restart")
            return RestartOutcome.SKIPPED
        return self.restart_template(ResourceKind.DEPLOYMENT, deployment, namespace)

    def replace_pod(self, pod):
        """Create a copy of an ownerless pod and delete the original once the copy runs"""
        namespace = pod.metadata.namespace
        new_name = replacement_pod_name(
            pod.metadata.name, self.name_max_length, self.name_suffix_length, self.rng
        )
        new_pod = client.V1Pod(
            api_version="v1",
            kind="Pod",
            metadata=client.V1ObjectMeta(
                name=new_name,
                namespace=namespace,
                labels=dict(pod.metadata.labels or {}),
            ),
            spec=copy.deepcopy(pod.spec),
        )

        created = self.k8s_client.create_pod(new_pod)
        created_name = created.metadata.name if created is not None else new_name
        logger.info(f"Created replacement pod {namespace}/{created_name} for {pod.metadata.name}")

        if not self.waiter.wait_running(created_name, namespace):
            # The original stays until its copy is confirmed running
            logger.warning(
                f"Replacement pod {namespace}/{created_name} did not start, "
                f"keeping original pod {pod.metadata.name}"
            )
            return RestartOutcome.REPLACEMENT_TIMED_OUT

        logger.info(f"Replacing pod {pod.metadata.name} with {created_name} in namespace {namespace}")
        self.k8s_client.delete_pod(pod.metadata.name, namespace)
        return RestartOutcome.RESTARTED
