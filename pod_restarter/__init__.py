"""
Pod Restarter - Kubernetes graceful restart of matching workloads

A Python application that finds pods whose name matches a pattern and
restarts the highest-level controller that owns each of them, replacing
ownerless pods in place.
"""

__version__ = "1.0.0"
__author__ = "Pod Restarter Team"
