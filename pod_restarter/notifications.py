"""
Restart failure notifications - Prometheus only
"""

import logging
import time

import requests
from prometheus_client import CollectorRegistry, Counter, Gauge, generate_latest

logger = logging.getLogger(__name__)


class NotificationManager:
    def __init__(self, pushgateway_url=None, job_name="kubernetes_pod_restarter",
                 cluster_name="Unknown", registry=None):
        self.pushgateway_url = pushgateway_url
        self.job_name = job_name
        self.cluster_name = cluster_name
        self.registry = registry or CollectorRegistry()

        self.restart_failures = Counter(
            'pod_restarter_restart_failures_total',
            'Total number of pod restart failures',
            ['cluster', 'namespace', 'pod_name', 'error_type'],
            registry=self.registry
        )
        self.last_failure_timestamp = Gauge(
            'pod_restarter_last_failure_timestamp',
            'Timestamp of the last pod restart failure',
            ['cluster', 'namespace', 'pod_name'],
            registry=self.registry
        )
        self.restarted_resources = Gauge(
            'pod_restarter_restarted_resources',
            'Number of resources restarted in the last run',
            ['cluster'],
            registry=self.registry
        )

    def notify_restart_failure(self, namespace, pod_name, error):
        """Record a failed restart. Never raises."""
        try:
            self.restart_failures.labels(
                cluster=self.cluster_name,
                namespace=namespace,
                pod_name=pod_name,
                error_type=type(error).__name__
            ).inc()
            self.last_failure_timestamp.labels(
                cluster=self.cluster_name,
                namespace=namespace,
                pod_name=pod_name
            ).set(time.time())
            logger.debug(f"Updated Prometheus metrics for {namespace}/{pod_name}")
        except ValueError as e:
            logger.error(f"Failed to update Prometheus metrics: {e}")

    def record_run(self, restarted_count):
        self.restarted_resources.labels(cluster=self.cluster_name).set(restarted_count)

    def push(self):
        """Push the registry to the Pushgateway, if one is configured"""
        if not self.pushgateway_url:
            logger.debug("No Pushgateway configured, metrics kept in process")
            return False

        url = f"{self.pushgateway_url.rstrip('/')}/metrics/job/{self.job_name}"
        try:
            response = requests.put(url, data=generate_latest(self.registry), timeout=10)
            response.raise_for_status()
            logger.info(f"Pushed restart metrics to Pushgateway {self.pushgateway_url}")
            return True
        except requests.RequestException as e:
            logger.error(f"Failed to push to Pushgateway: {e}")
            return False
