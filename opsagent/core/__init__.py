"""
Core utilities for OpsAgent.

This package provides shared functionality such as logging configuration.
"""

from opsagent.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
