import time
import uuid
import logging
from threading import Lock

from pod_restarter.config import config as default_config
from pod_restarter.dispatcher import RestartDispatcher
from pod_restarter.errors import RestartError
from pod_restarter.kubernetes_client import KubernetesClient
from pod_restarter.logger import RestartLogger
from pod_restarter.notifications import NotificationManager
from pod_restarter.report import RestartReport
from pod_restarter.resolver import OwnershipResolver
from pod_restarter.selector import select_targets
from pod_restarter.waiter import ReadinessWaiter

logger = logging.getLogger(__name__)


class PodRestarter:
    def __init__(self, config=None, k8s_client=None, notification_manager=None, waiter=None):
        self.config = config or default_config
        self.k8s_client = k8s_client or KubernetesClient(kubeconfig_path=self.config.kube_config_path)
        self.notification_manager = notification_manager or NotificationManager(
            pushgateway_url=self.config.pushgateway_url,
            job_name=self.config.prometheus_job_name,
            cluster_name=self.config.cluster_name,
        )
        self.waiter = waiter or ReadinessWaiter(
            self.k8s_client,
            timeout=self.config.wait_timeout_seconds,
            poll_interval=self.config.poll_interval_seconds,
        )
        self.restart_logger = RestartLogger()
        self.lock = Lock()
        self.is_running = False

    def run_restart(self):
        """Run one graceful restart pass over the cluster.

        Listing the pods is the only step allowed to fail the run; it raises
        FetchError. Per-pod failures are collected in the returned report.
        """
        with self.lock:
            if self.is_running:
                logger.info("Previous run still in progress, skipping...")
                return None
            self.is_running = True

        try:
            run_id = uuid.uuid4().hex[:8]
            start_time = time.time()
            self.restart_logger.log_run_start(run_id, self.config.pod_match)

            pods = self.k8s_client.list_all_pods()
            logger.info(f"Found {len(pods)} total pods")

            candidates = select_targets(pods, self.config.pod_match)
            logger.info(f"Matched {len(candidates)} pods containing '{self.config.pod_match}'")

            report = RestartReport()
            resolver = OwnershipResolver(self._new_dispatcher(), report)
            for pod in candidates:
                self.restart_logger.log_candidate(pod.metadata.namespace, pod.metadata.name)
                try:
                    resolver.resolve_and_restart(pod)
                except RestartError as e:
                    report.add_error(pod.metadata.name, e)
                    self.restart_logger.log_restart_failed(pod.metadata.namespace, pod.metadata.name, e)
                    self.notification_manager.notify_restart_failure(pod.metadata.namespace, pod.metadata.name, e)

            execution_time = time.time() - start_time
            self.restart_logger.log_run_end(
                run_id, report.restarted, len(report.errors), len(pods), execution_time
            )
            self.log_results(report)

            self.notification_manager.record_run(len(report.restarted))
            self.notification_manager.push()
            return report

        finally:
            with self.lock:
                self.is_running = False

    def _new_dispatcher(self):
        return RestartDispatcher(
            self.k8s_client,
            self.waiter,
            name_max_length=self.config.name_max_length,
            name_suffix_length=self.config.name_suffix_length,
        )

    def log_results(self, report):
        """Log the failures and restarted resources at the end of the run"""
        logger.info("=== RESTART SUMMARY ===")

        if not report.ok:
            logger.info(f"{len(report.errors)} pods failed to restart:")
            for pod_error in report.errors:
                logger.info(f"  - {pod_error}")

        restarted = report.restarted
        logger.info(f"Finished restarting {len(restarted)} resources: {restarted}")

        logger.info("=== END SUMMARY ===")
