"""
Configuration management for Pod Restarter
"""

import os
from typing import Optional
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def default_kubeconfig_path() -> str:
    """Return ~/.kube/config when a home directory resolves, else ''"""
    home = os.path.expanduser("~")
    if not home or home == "~":
        return ""
    return os.path.join(home, ".kube", "config")


@dataclass
class Config:
    """Configuration class for Pod Restarter"""

    # Kubernetes configuration
    kube_config_path: Optional[str] = None

    # Target selection
    pod_match: str = "database"

    # Ownerless pod replacement
    name_max_length: int = 255
    name_suffix_length: int = 5
    wait_timeout_seconds: float = 300
    poll_interval_seconds: float = 2

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"

    # Prometheus notifications
    pushgateway_url: Optional[str] = None
    prometheus_job_name: str = "kubernetes_pod_restarter"
    cluster_name: str = "Unknown"

    def __post_init__(self):
        """Initialize default values after dataclass creation"""
        if self.kube_config_path is None:
            self.kube_config_path = default_kubeconfig_path()

        # Override with environment variables if present
        self.kube_config_path = os.getenv("KUBECONFIG", self.kube_config_path)
        self.pod_match = os.getenv("POD_MATCH", self.pod_match)
        self.name_max_length = int(os.getenv("NAME_MAX_LENGTH", self.name_max_length))
        self.name_suffix_length = int(os.getenv("NAME_SUFFIX_LENGTH", self.name_suffix_length))
        self.wait_timeout_seconds = float(os.getenv("WAIT_TIMEOUT_SECONDS", self.wait_timeout_seconds))
        self.poll_interval_seconds = float(os.getenv("POLL_INTERVAL_SECONDS", self.poll_interval_seconds))
        self.log_level = os.getenv("LOG_LEVEL", self.log_level)
        self.log_format = os.getenv("LOG_FORMAT", self.log_format)
        self.pushgateway_url = os.getenv("PROMETHEUS_PUSHGATEWAY_URL", self.pushgateway_url)
        self.prometheus_job_name = os.getenv("PROMETHEUS_JOB_NAME", self.prometheus_job_name)
        self.cluster_name = os.getenv("CLUSTER_NAME", self.cluster_name)

        if not self.pod_match:
            raise ValueError("POD_MATCH must not be empty")
        if self.name_suffix_length < 2:
            raise ValueError("NAME_SUFFIX_LENGTH must be at least 2")
        if self.name_max_length <= self.name_suffix_length:
            raise ValueError("NAME_MAX_LENGTH must be greater than NAME_SUFFIX_LENGTH")


# Global configuration instance
config = Config()
