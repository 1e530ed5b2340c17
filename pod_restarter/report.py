"""
Per-run state shared by the resolver and the run loop
"""

from dataclasses import dataclass, field
from typing import List

from pod_restarter.ledger import RestartLedger


@dataclass
class PodError:
    pod_name: str
    error: Exception

    def __str__(self):
        return f"{self.pod_name}: {self.error}"


@dataclass
class RestartReport:
    """Restart ledger plus the per-pod errors collected during one run"""

    ledger: RestartLedger = field(default_factory=RestartLedger)
    errors: List[PodError] = field(default_factory=list)

    def add_error(self, pod_name, error):
        self.errors.append(PodError(pod_name, error))

    @property
    def restarted(self):
        return self.ledger.identifiers()

    @property
    def ok(self):
        return not self.errors
