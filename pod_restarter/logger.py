"""
Logging configuration for Pod Restarter
"""

import logging
import sys
from typing import Any, Dict, List, Optional
import structlog
from colorama import init as colorama_init
from pod_restarter import __version__
from pod_restarter.config import config

# Initialize colorama for cross-platform colored output
colorama_init()


def setup_logging(log_level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """Setup structured logging for the application"""
    log_level = log_level or config.log_level
    log_format = log_format or config.log_format

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if log_format == "json"
            else structlog.dev.ConsoleRenderer(colors=True)
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    # Suppress verbose kubernetes client logs
    logging.getLogger("kubernetes").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance"""
    return structlog.get_logger(name)


class RestartLogger:
    """Specialized logger for Pod Restarter runs"""

    def __init__(self):
        self.logger = get_logger("pod-restarter")

    def log_startup(self, config_dict: Dict[str, Any]) -> None:
        self.logger.info(
            "Pod Restarter starting up",
            version=__version__,
            config=config_dict
        )

    def log_run_start(self, run_id: str, match: str) -> None:
        self.logger.info(
            "Starting graceful restart run",
            run_id=run_id,
            match=match
        )

    def log_candidate(self, namespace: str, pod_name: str) -> None:
        self.logger.info(
            "Executing graceful restart on pod",
            namespace=namespace,
            pod_name=pod_name
        )

    def log_run_end(self, run_id: str, restarted: List[str], error_count: int,
                    total_checked: int, execution_time: float) -> None:
        self.logger.info(
            "Graceful restart run completed",
            run_id=run_id,
            restarted_count=len(restarted),
            restarted=restarted,
            error_count=error_count,
            total_pods_checked=total_checked,
            execution_time=round(execution_time, 2)
        )

    def log_restart_failed(self, namespace: str, pod_name: str, error: Exception) -> None:
        """Log a per-pod failure; the run continues"""
        self.logger.error(
            "Restart failed",
            namespace=namespace,
            pod_name=pod_name,
            error=str(error),
            error_type=type(error).__name__
        )

    def log_error(self, error: Exception, context: str = None) -> None:
        """Log errors with context"""
        self.logger.error(
            "Error occurred",
            error=str(error),
            error_type=type(error).__name__,
            context=context,
            exc_info=True
        )
