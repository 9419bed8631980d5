"""
MCP Remote Logging Configuration

Configures logging based on environment variables:
- MCP_REMOTE_DEBUG: Enable debug logging (default: false)
- MCP_REMOTE_LOG_FILE: Optional extra log file (default: none)

stdout carries protocol bytes, so log output only ever goes to stderr
and the optional file.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "mcp_remote"


def setup_logging(
    debug: Optional[bool] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure logging for the bridge.

    Args:
        debug: Enable debug level. Defaults to MCP_REMOTE_DEBUG env var.
        log_file: Extra log file path. Defaults to MCP_REMOTE_LOG_FILE env var.

    Returns:
        Root logger for mcp_remote
    """
    # Read from env if not provided
    if debug is None:
        debug = os.environ.get("MCP_REMOTE_DEBUG", "").lower() in ("true", "1", "yes")
    if log_file is None:
        log_file = os.environ.get("MCP_REMOTE_LOG_FILE") or None

    level = logging.DEBUG if debug else logging.INFO

    # Create formatter with component tags
    formatter = logging.Formatter(
        "%(asctime)s %(levelname)-5s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(formatter)
    stderr_handler.setLevel(level)
    logger.addHandler(stderr_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)
        logger.debug(f"Logging to file: {log_path}")

    return logger


def get_logger(component: str) -> logging.Logger:
    """
    Get a logger for a specific component.

    Args:
        component: Component name (e.g., "bridge", "rpc", "dispatch")

    Returns:
        Logger instance for the component
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")
