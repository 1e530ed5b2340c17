"""
Run-scoped record of controllers and pods that have already been restarted
"""

from collections import namedtuple


class ControllerKey(namedtuple("ControllerKey", ["name", "kind", "namespace"])):
    """A restarted controller, reported as name|kind|namespace"""

    __slots__ = ()

    def __str__(self):
        return f"{self.name}|{self.kind}|{self.namespace}"


class PodKey(namedtuple("PodKey", ["name", "namespace"])):
    """A replaced ownerless pod, reported by its bare name"""

    __slots__ = ()

    def __str__(self):
        return self.name


class RestartLedger:
    """Insertion-ordered set of restart keys.

    Controller and pod keys are distinct types, so a controller whose name
    happens to render like a pod name never shadows it.
    """

    def __init__(self):
        self._keys = {}

    def contains(self, key):
        return key in self._keys

    def record(self, key):
        self._keys.setdefault(key, None)

    def __contains__(self, key):
        return self.contains(key)

    def __len__(self):
        return len(self._keys)

    def __iter__(self):
        return iter(self._keys)

    def identifiers(self):
        """Restarted identifiers in the order they were recorded"""
        return [str(key) for key in self._keys]
