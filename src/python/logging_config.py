"""
Logging configuration for the horizontal pager host.

This module provides centralized logging configuration with support for:
- Console output (development)
- Rotating file logs
- Configurable log levels, including a separate level for the pager core
- Structured log format
"""

import logging
import logging.handlers
from pathlib import Path

from config_manager import ConfigManager, config

# Loggers of the pager core; they log every gesture state change at DEBUG
CORE_LOGGERS = (
    'horizontal_pager',
    'gesture_classifier',
    'scroller',
    'snap_policy',
    'velocity_tracker',
    'platform_metrics',
)


class ErrorRaisingHandler(logging.Handler):
    """Handler that raises an exception on ERROR or CRITICAL logs."""

    def emit(self, record):
        if record.levelno >= logging.ERROR:
            raise RuntimeError(f"Logger error: {record.getMessage()}")


def setup_logging(raise_on_error: bool = None, cfg: ConfigManager | None = None) -> logging.Logger:
    """
    Initialize logging configuration for the pager host.

    Reads the 'logging' section of config.json and sets up:
    - Root logger with configured level
    - Console handler for development output
    - Rotating file handler for persistent logs
    - Level of the pager core loggers ('coreLevel', defaults to the root level)

    Args:
        raise_on_error: Add a handler that raises on ERROR records
            (defaults to the 'raiseOnError' setting)
        cfg: Configuration to read (defaults to the module singleton)

    Returns:
        logging.Logger: The configured root logger
    """
    settings = (cfg or config).get_logging_config()

    log_level_str = settings.get("level", "INFO")
    log_file = settings.get("file", "logs/pager.log")
    max_bytes = settings.get("maxBytes", 10485760)  # 10MB default
    backup_count = settings.get("backupCount", 3)
    console_enabled = settings.get("console", True)
    console_level_str = settings.get("consoleLevel", "WARNING")
    core_level_str = settings.get("coreLevel", log_level_str)

    if raise_on_error is None:
        raise_on_error = settings.get("raiseOnError", False)

    # Convert log level strings to logging constants
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)
    console_level = getattr(logging, console_level_str.upper(), logging.WARNING)
    core_level = getattr(logging, core_level_str.upper(), log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding='utf-8'
            )
            file_handler.setLevel(min(log_level, core_level))
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

            root_logger.info("=" * 70)
            root_logger.info("Horizontal Pager Started")
            root_logger.info("=" * 70)
            root_logger.info("Logging initialized - Level: %s, File: %s", log_level_str, log_file)

        except OSError as e:
            # If file handler fails, continue without file logging
            root_logger.warning("Could not initialize file logging: %s", e)

    for logger_name in CORE_LOGGERS:
        logging.getLogger(logger_name).setLevel(core_level)

    # Add error-raising handler if requested (crashes the host on logger.error)
    if raise_on_error:
        root_logger.addHandler(ErrorRaisingHandler())

    return root_logger

