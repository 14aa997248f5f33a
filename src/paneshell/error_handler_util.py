"""
Error handling helpers for PaneShell.

Everything that can fail before the interface starts (reading and
validating the config) logs through a component logger and then raises a
PaneShellError subclass, so the CLI has a single exception family to turn
into an exit status. Work that may fail without consequence (listing the
working directory for completions, a crash inside the urwid loop once the
terminal is being restored) is logged and the caller carries on.
"""

import logging
from pathlib import Path
from typing import Any, Callable, NoReturn, Optional, Union

logger = logging.getLogger('PaneShell.ErrorHandler')


class PaneShellError(Exception):
    """Base class for PaneShell errors."""


class ConfigError(PaneShellError):
    """The launcher configuration could not be loaded."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = path


class ErrorHandlerUtil:
    """Static helpers that pair a log record with a raise, a fallback or nothing."""

    @staticmethod
    def log_and_raise_config_error(
        message: str,
        path: Optional[Union[str, Path]] = None,
        logger_instance: Optional[logging.Logger] = None,
        cause: Optional[Exception] = None
    ) -> NoReturn:
        """Log and raise a ConfigError that remembers which file was being read."""
        (logger_instance or logger).error(message)
        error = ConfigError(message, path=path)
        if cause is not None:
            raise error from cause
        raise error

    @staticmethod
    def handle_with_fallback(
        operation_callable: Callable[[], Any],
        fallback_value: Any = None,
        error_message: str = "Operation failed",
        logger_instance: Optional[logging.Logger] = None,
        log_level: int = logging.WARNING
    ) -> Any:
        """
        Return `operation_callable()`, or `fallback_value` if it raises.

        The failure is logged as "<error_message>: <exception>".
        """
        try:
            return operation_callable()
        except Exception as e:
            (logger_instance or logger).log(log_level, f"{error_message}: {e}")
            return fallback_value

    @staticmethod
    def log_and_continue(
        error: Exception,
        context: str = "Operation",
        logger_instance: Optional[logging.Logger] = None,
        log_level: int = logging.ERROR
    ) -> None:
        (logger_instance or logger).log(log_level, f"{context} failed: {error}")

    @staticmethod
    def create_error_context(component_name: str, logger_name: Optional[str] = None) -> 'ErrorContext':
        """Bind the helpers to the `PaneShell.<component_name>` logger (or `logger_name`)."""
        component_logger = logging.getLogger(logger_name or f'PaneShell.{component_name}')
        return ErrorContext(component_name, component_logger)


class ErrorContext:
    """The ErrorHandlerUtil helpers bound to one component's logger."""

    def __init__(self, component_name: str, logger_instance: logging.Logger):
        self.component_name = component_name
        self.logger = logger_instance

    def config_error(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        cause: Optional[Exception] = None
    ) -> NoReturn:
        ErrorHandlerUtil.log_and_raise_config_error(
            message, path=path, logger_instance=self.logger, cause=cause
        )

    def handle_with_fallback(
        self,
        operation_callable: Callable[[], Any],
        fallback_value: Any = None,
        error_message: str = "Operation failed"
    ) -> Any:
        return ErrorHandlerUtil.handle_with_fallback(
            operation_callable, fallback_value, error_message, logger_instance=self.logger
        )

    def log_and_continue(self, error: Exception, context: str = "Operation") -> None:
        ErrorHandlerUtil.log_and_continue(error, context, logger_instance=self.logger)
