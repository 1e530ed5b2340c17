import logging

from pod_restarter.ledger import ControllerKey, PodKey
from pod_restarter.ownership import ResourceKind, classify

logger = logging.getLogger(__name__)


class OwnershipResolver:
    """Finds the controller that owns a pod and restarts it once per run"""

    def __init__(self, dispatcher, report):
        self.dispatcher = dispatcher
        self.report = report

    @property
    def ledger(self):
        return self.report.ledger

    def resolve_and_restart(self, pod):
        """Restart whatever owns ``pod``.

        A pod without owner references is replaced in place. Otherwise each
        owner reference is tried in order; the first RestartError is raised
        and the remaining owners of this pod are left alone. Keys only enter
        the ledger after the restart call returned, so a failed restart can
        be retried by a later pod.
        """
        name, namespace = pod.metadata.name, pod.metadata.namespace
        owners = pod.metadata.owner_references or []

        if not owners:
            key = PodKey(name, namespace)
            if self.ledger.contains(key):
                logger.info(f"Skipping already replaced pod: {key}")
                return
            self.dispatcher.restart(ResourceKind.POD, name, pod)
            self.ledger.record(key)
            return

        for owner in owners:
            kind = classify(owner.kind)
            if kind == ResourceKind.UNSUPPORTED:
                logger.info(f"Skipping restart of unsupported resource type {owner.kind} for pod: {name}")
                continue
            if kind == ResourceKind.POD:
                logger.info(f"Skipping pod owner {owner.name} of pod: {name}")
                continue

            owner_name = owner.name
            if kind == ResourceKind.REPLICA_SET:
                owner_name = self.dispatcher.escalate(owner.name, namespace)
                if owner_name is None:
                    logger.info(f"ReplicaSet {namespace}/{owner.name} has no Deployment owner, skipping")
                    continue
                kind = ResourceKind.DEPLOYMENT

            key = ControllerKey(owner_name, kind.value, namespace)
            if self.ledger.contains(key):
                logger.info(f"Skipping already restarted resource: {key}")
                continue

            self.dispatcher.restart(kind, owner_name, pod)
            self.ledger.record(key)
