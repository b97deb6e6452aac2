"""
Pager Error Handler Module

This module provides the pager exception types and the error reporting
helper the Qt host uses. Failures inside the pager core propagate as
exceptions; the host logs them here before deciding whether to carry on.
"""

import logging

logger = logging.getLogger("pager.error_handler")


class PagerError(Exception):
    """Base class for pager failures."""


class InvalidLayoutModeError(PagerError, RuntimeError):
    """Raised when the pager is measured with non-exact size constraints."""

    def __init__(self, axis: str, mode: str) -> None:
        self.axis = axis
        self.mode = mode
        super().__init__(
            f"HorizontalPager can only be measured in EXACTLY mode ({axis} was {mode})"
        )


class ErrorHandler:
    """Error reporting for the pager host."""

    @staticmethod
    def log_exception(e: Exception, context: str = "") -> str:
        """Log an exception together with its traceback.

        Returns:
            The one-line summary that was logged
        """
        summary = f"{type(e).__name__}: {e}"
        if context:
            logger.error("%s: %s", context, summary, exc_info=e)
        else:
            logger.error("%s", summary, exc_info=e)
        return summary

    @staticmethod
    def show_error(message: str, title: str = "Error") -> None:
        logger.error("[%s] %s", title, message)

    @staticmethod
    def show_warning(message: str, title: str = "Warning") -> None:
        logger.warning("[%s] %s", title, message)

    @staticmethod
    def show_info(message: str, title: str = "Info") -> None:
        logger.info("[%s] %s", title, message)
