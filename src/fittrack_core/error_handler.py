"""
Centralized error handling and logging infrastructure for FitTrack Pro.

This module provides a singleton ErrorHandler that captures, logs, and translates
exceptions into user-friendly messages while maintaining full diagnostic information.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
import threading
import traceback
from typing import Any, ClassVar

from PySide6.QtCore import QObject, Signal

from .config import SERVICE_NAME, get_logs_dir
from .errors import BaseAppError, from_exception

# Context keys whose values never reach the log
SENSITIVE_KEYS = ("password", "token", "key", "secret")


class ErrorHandler(QObject):
    """
    Centralized error handler with logging and user message translation.

    Every component funnels caught exceptions through handle(), which logs
    them once with their error code and re-emits them on errorOccurred.
    """

    errorOccurred = Signal(object)  # BaseAppError

    _instance: ClassVar[ErrorHandler | None] = None
    _logger: ClassVar[logging.Logger | None] = None

    def __new__(cls) -> ErrorHandler:
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize the error handler (called only once due to singleton)."""
        if hasattr(self, "_initialized"):
            return

        super().__init__()
        self._initialized = True
        self._original_excepthook = sys.excepthook
        self._original_threading_excepthook = getattr(threading, "excepthook", None)

        self._setup_logging()

    def capture(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Capture and normalize an exception into a BaseAppError.

        Args:
            exception: The exception to capture
            context: Optional context information

        Returns:
            BaseAppError with normalized metadata
        """
        safe_context = self._sanitize_context(context or {})
        app_error = from_exception(exception, safe_context)
        if app_error is exception:
            app_error.context.update(safe_context)

        if not app_error.technical_message:
            app_error.technical_message = f"{type(exception).__name__}: {exception}"

        if "traceback" not in app_error.context:
            tb_str = traceback.format_exc()
            if tb_str == "NoneType: None\n":
                # Not in exception context
                tb_str = f"{type(exception).__name__}: {exception}\n"
            app_error.context["traceback"] = tb_str

        return app_error

    def handle(self, exception: Exception, context: dict[str, Any] | None = None) -> BaseAppError:
        """
        Handle an exception by capturing, logging, and emitting signals.

        Args:
            exception: The exception to handle
            context: Optional context information

        Returns:
            BaseAppError for further processing
        """
        if isinstance(exception, SystemExit | KeyboardInterrupt):
            raise exception

        app_error = self.capture(exception, context)

        if self._logger:
            level = logging.WARNING if app_error.type.value == "validation" else logging.ERROR
            self._logger.log(
                level,
                f"[{app_error.code.value}] {app_error.user_message}",
                extra={
                    "app_code": app_error.code.value,
                    "error_type": app_error.type.value,
                    "severity": app_error.severity.value,
                    "retriable": app_error.retriable,
                },
                exc_info=exception if level >= logging.ERROR else None,
            )

        self.errorOccurred.emit(app_error)

        return app_error

    def to_user_message(self, app_error: BaseAppError) -> str:
        """
        Generate a concise, user-friendly message from a BaseAppError.

        Args:
            app_error: The error to convert

        Returns:
            User-friendly message string
        """
        message = app_error.user_message

        if app_error.retriable:
            message += " You can try again."

        return message

    def _setup_logging(self) -> None:
        """Set up rotating file logging in the app data directory."""
        try:
            logs_dir = get_logs_dir()
            logs_dir.mkdir(parents=True, exist_ok=True)

            ErrorHandler._logger = logging.getLogger("fittrack.errors")
            ErrorHandler._logger.setLevel(logging.DEBUG)
            ErrorHandler._logger.propagate = False

            # Avoid duplicate handlers
            if not ErrorHandler._logger.handlers:
                file_handler = logging.handlers.RotatingFileHandler(
                    logs_dir / "app.log",
                    maxBytes=5_242_880,  # 5MB
                    backupCount=5,
                    encoding="utf-8",
                )

                formatter = logging.Formatter(
                    f"%(asctime)s | %(levelname)s | {SERVICE_NAME} | %(name)s | code=%(app_code)s | %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
                file_handler.setFormatter(formatter)
                ErrorHandler._logger.addHandler(file_handler)

                if __debug__:
                    console_handler = logging.StreamHandler()
                    console_handler.setFormatter(formatter)
                    console_handler.setLevel(logging.WARNING)
                    ErrorHandler._logger.addHandler(console_handler)

        except Exception as e:
            # Fallback to basic logging if setup fails
            logging.basicConfig(level=logging.ERROR)
            logging.error(f"Failed to setup error logging: {e}")

    def _sanitize_context(self, context: dict[str, Any]) -> dict[str, Any]:
        """
        Sanitize context to prevent sensitive data leakage.

        Args:
            context: Raw context dictionary

        Returns:
            Sanitized context dictionary
        """
        safe_context: dict[str, Any] = {}
        max_items = 20

        for item_count, (key, value) in enumerate(context.items()):
            if item_count >= max_items:
                safe_context["..."] = f"({len(context) - max_items} more items truncated)"
                break

            if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
                safe_context[key] = "[REDACTED]"
            elif isinstance(value, dict):
                safe_context[key] = self._sanitize_context(value)
            elif isinstance(value, str) and len(value) > 200:
                safe_context[key] = value[:200] + "..."
            elif isinstance(value, str | int | float | bool) or value is None:
                safe_context[key] = value
            else:
                try:
                    safe_context[key] = repr(value)[:200]
                except Exception:
                    safe_context[key] = "[REPR_FAILED]"

        return safe_context

    def install_hooks(self) -> None:
        """Install exception hooks for unhandled exceptions."""

        def exception_hook(exc_type: type[BaseException], exc_value: BaseException, exc_traceback: Any) -> None:
            if issubclass(exc_type, KeyboardInterrupt):
                self._original_excepthook(exc_type, exc_value, exc_traceback)
                return

            try:
                if isinstance(exc_value, Exception):
                    self.handle(exc_value, {"source": "sys.excepthook"})
            except Exception:
                self._original_excepthook(exc_type, exc_value, exc_traceback)

        sys.excepthook = exception_hook

        def threading_exception_hook(args: threading.ExceptHookArgs) -> None:
            try:
                if isinstance(args.exc_value, Exception):
                    self.handle(
                        args.exc_value,
                        {
                            "source": "threading.excepthook",
                            "thread": args.thread.name if args.thread else "unknown",
                        },
                    )
            except Exception:
                if self._original_threading_excepthook:
                    self._original_threading_excepthook(args)

        threading.excepthook = threading_exception_hook

    def restore_hooks(self) -> None:
        """Restore original exception hooks."""
        sys.excepthook = self._original_excepthook
        if self._original_threading_excepthook:
            threading.excepthook = self._original_threading_excepthook


def get_error_handler() -> ErrorHandler:
    """Get the singleton ErrorHandler instance."""
    return ErrorHandler()


def setup_error_handling() -> ErrorHandler:
    """
    Set up global error handling for the application.

    This should be called once during application startup.
    """
    handler = get_error_handler()
    handler.install_hooks()
    return handler


def init_logging(level: str = "INFO") -> None:
    """
    Initialize logging configuration.

    Sets up the error handler's file log and a basic console format for
    every other module.
    """
    get_error_handler()

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
