"""
Exceptions raised by Pod Restarter
"""


class PodRestarterError(Exception):
    """Base class for all Pod Restarter errors"""


class ConfigurationError(PodRestarterError):
    """Kubernetes credentials could not be loaded or the client built"""


class RestartError(PodRestarterError):
    """A restart action against the cluster failed"""

    def __init__(self, message, kind=None, name=None, namespace=None, status=None):
        super().__init__(message)
        self.kind = kind
        self.name = name
        self.namespace = namespace
        self.status = status


class FetchError(RestartError):
    """Reading a resource from the API failed"""


class WriteError(RestartError):
    """Creating, updating or deleting a resource failed"""


class UpdateConflict(WriteError):
    """The resource changed between read and write (HTTP 409)"""
