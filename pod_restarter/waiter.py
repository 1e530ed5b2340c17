import time
import logging

from pod_restarter.errors import FetchError

logger = logging.getLogger(__name__)

RUNNING_PHASE = "Running"
TERMINAL_PHASES = ("Succeeded", "Failed")


class ReadinessWaiter:
    """Polls a pod until it reports the Running phase or a deadline passes"""

    def __init__(self, k8s_client, timeout=300, poll_interval=2, clock=time.monotonic, sleep=time.sleep):
        self.k8s_client = k8s_client
        self.timeout = timeout
        self.poll_interval = poll_interval
        self._clock = clock
        self._sleep = sleep

    def wait_running(self, name, namespace, timeout=None, poll_interval=None):
        """Block until pod namespace/name is Running.

        Returns True on the first poll that sees the Running phase and False
        once more than ``timeout`` seconds have elapsed. A failed read counts
        as not running yet; a pod that has already Failed or Succeeded will
        never run, so it returns False straight away.
        """
        timeout = self.timeout if timeout is None else timeout
        poll_interval = self.poll_interval if poll_interval is None else poll_interval

        start = self._clock()
        check_count = 0
        while True:
            elapsed = self._clock() - start
            if elapsed > timeout:
                logger.warning(
                    f"Timed out waiting for pod {namespace}/{name} to run "
                    f"after {check_count} checks over {elapsed:.0f} seconds"
                )
                return False

            check_count += 1
            phase = self._get_phase(name, namespace)
            if phase == RUNNING_PHASE:
                logger.info(f"Pod {namespace}/{name} is running (check {check_count})")
                return True
            if phase in TERMINAL_PHASES:
                logger.warning(f"Pod {namespace}/{name} reached terminal phase {phase}")
                return False

            logger.debug(f"Pod {namespace}/{name} not running yet (phase: {phase}, check {check_count})")
            self._sleep(poll_interval)

    def _get_phase(self, name, namespace):
        try:
            pod = self.k8s_client.get_pod(name, namespace)
        except FetchError as e:
            logger.debug(f"Could not read pod {namespace}/{name}: {e}")
            return None
        if pod.status is None:
            return None
        return pod.status.phase
