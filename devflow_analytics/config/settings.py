"""
Application Settings

Environment configuration for the worker host. The analysis functions
themselves take no configuration from the environment.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Settings:
    """Worker host settings from environment."""

    # Worker pool
    worker_count: int = 1
    task_timeout: Optional[float] = 30.0
    shutdown_timeout: float = 10.0

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        task_timeout = os.getenv("DEVFLOW_TASK_TIMEOUT", "30")
        return cls(
            worker_count=int(os.getenv("DEVFLOW_WORKERS", "1")),
            task_timeout=float(task_timeout) if float(task_timeout) > 0 else None,
            shutdown_timeout=float(os.getenv("DEVFLOW_SHUTDOWN_TIMEOUT", "10")),
            log_level=os.getenv("DEVFLOW_LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Apply the project log format to the root logger."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
