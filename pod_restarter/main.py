#!/usr/bin/env python3
"""
Kubernetes Pod Restarter - Main Application
"""

import argparse
import logging
import sys

from pod_restarter.config import config
from pod_restarter.errors import PodRestarterError
from pod_restarter.logger import RestartLogger, setup_logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="pod-restarter",
        description="Gracefully restart the controllers owning matching pods",
    )
    if config.kube_config_path:
        parser.add_argument(
            "--kubeconfig",
            default=config.kube_config_path,
            help="(optional) absolute path to the kubeconfig file",
        )
    else:
        parser.add_argument("--kubeconfig", default="", help="absolute path to the kubeconfig file")
    return parser.parse_args(argv)


def main(argv=None):
    """Main application entry point"""
    args = parse_args(argv)
    config.kube_config_path = args.kubeconfig

    setup_logging()
    logger = logging.getLogger("main")
    restart_logger = RestartLogger()
    restart_logger.log_startup({
        "kubeconfig": config.kube_config_path,
        "pod_match": config.pod_match,
        "wait_timeout_seconds": config.wait_timeout_seconds,
    })

    try:
        from pod_restarter.restarter import PodRestarter

        restarter = PodRestarter(config)
        restarter.run_restart()

    except KeyboardInterrupt:
        logger.info("Received interrupt signal, shutting down...")
        return 130
    except PodRestarterError as e:
        restart_logger.log_error(e, context="setup")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
