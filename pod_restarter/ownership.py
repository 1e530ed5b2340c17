"""
Classification of owner-reference kinds into restartable resource kinds
"""

from enum import Enum


class ResourceKind(str, Enum):
    POD = "Pod"
    REPLICA_SET = "ReplicaSet"
    DEPLOYMENT = "Deployment"
    STATEFUL_SET = "StatefulSet"
    DAEMON_SET = "DaemonSet"
    UNSUPPORTED = "unsupported"


# Controllers whose pod template carries the restart annotation
TEMPLATE_KINDS = (ResourceKind.DEPLOYMENT, ResourceKind.DAEMON_SET, ResourceKind.STATEFUL_SET)

_KINDS_BY_LABEL = {
    kind.value: kind
    for kind in ResourceKind
    if kind is not ResourceKind.UNSUPPORTED
}


def classify(kind_label):
    """Map an owner-reference kind to a ResourceKind.

    A missing or empty label means the pod owns itself. Labels are matched
    exactly, so anything outside the known set is UNSUPPORTED.
    """
    if not kind_label:
        return ResourceKind.POD
    return _KINDS_BY_LABEL.get(kind_label, ResourceKind.UNSUPPORTED)
