"""
Logging Configuration Module.

Configures the standard ``logging`` tree for OpsAgent from ``LoggingConfig``.

The console handler filters at the configured level. When a log directory is
set, every record (DEBUG and up) is also written to ``opsagent.log`` there,
which includes the operator log lines mirrored by
``opsagent.agent_core.log_sink``.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from opsagent.server.core.config import LoggingConfig

LOG_FILE_NAME = "opsagent.log"

LOG_FORMATS: Dict[str, str] = {
    "simple": "%(levelname)s - %(name)s - %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
}

MODULE_LOG_LEVELS: Dict[str, str] = {
    "opsagent.agent_core.runtime": "DEBUG",
    "opsagent.agent_core.log_sink": "INFO",
    "httpx": "WARNING",
    "uvicorn.access": "WARNING",
}


def setup_logging(config: Optional[LoggingConfig] = None, *, log_level: Optional[str] = None) -> Optional[Path]:
    """
    Configure logging for the application.

    Args:
        config: Logging configuration, defaults to ``LoggingConfig()``
        log_level: Overrides ``config.level`` for the console handler

    Returns:
        The log file path when file logging is enabled, otherwise ``None``
    """
    config = config or LoggingConfig()
    level = (log_level or config.level).upper()
    formatter = logging.Formatter(LOG_FORMATS[config.format], datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # filter at handler level
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    log_file: Optional[Path] = None
    if config.file_dir:
        log_dir = Path(config.file_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / LOG_FILE_NAME
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info(f"Logging configured: level={level}, format={config.format}, log_file={log_file}")
    return log_file


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module (typically ``__name__``)."""
    return logging.getLogger(name)
