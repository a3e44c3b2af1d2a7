"""
Configuration Package

Dependency injection container and environment settings.
"""

from .container import Container
from .settings import Settings, configure_logging

__all__ = [
    "Container",
    "Settings",
    "configure_logging",
]
