"""
Unified error handling for decisiondash.

Dashboard synthesis has two kinds of failure: fatal ones that abort the
current call (bad template, unserializable document, registry defect) and
per-decision skips, which are only logged. This module defines the fatal
ones and the exit codes the CLI maps them to.

Exit Codes:
- 0: Success
- 1: Warning (dashboards written, some decisions skipped)
- 10: Configuration error (template missing or unparseable)
- 12: Validation error (bad command-line input)
- 13: Serialization error
- 127: Unknown/internal error (including registry inconsistencies)
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands."""

    SUCCESS = 0
    WARNING = 1
    CONFIG_ERROR = 10
    VALIDATION_ERROR = 12
    SERIALIZATION_ERROR = 13
    UNKNOWN_ERROR = 127


class DecisionDashError(Exception):
    """Base exception for decisiondash errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(DecisionDashError):
    """Raised when a dashboard template or decision file cannot be used."""

    exit_code = ExitCode.CONFIG_ERROR


class ValidationError(DecisionDashError):
    """Raised for invalid command input."""

    exit_code = ExitCode.VALIDATION_ERROR


class SerializationError(DecisionDashError):
    """Raised when a dashboard document cannot be written back to JSON."""

    exit_code = ExitCode.SERIALIZATION_ERROR


class RegistryInconsistencyError(DecisionDashError):
    """Raised when the decision type registry contradicts itself.

    A type reported as supported must have both a query function and a
    Y-axis label. Hitting this is a defect in the registry, not bad input.
    """

    exit_code = ExitCode.UNKNOWN_ERROR
    show_traceback = True


# Type variable for decorated functions
F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for CLI command functions that provides unified error handling.

    Args:
        show_traceback: If True, show full traceback for unexpected errors
        log_errors: If True, log errors to structlog

    DecisionDashError messages are also printed to stderr for the user.

    Exit codes:
        - DecisionDashError subclasses: Uses the error's exit_code
        - KeyboardInterrupt: Returns 130 (standard for SIGINT)
        - Other exceptions: Returns 127 (unknown error)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except DecisionDashError as e:
                if log_errors:
                    logger.error(
                        "command_error",
                        error_type=type(e).__name__,
                        message=e.message,
                        exit_code=e.exit_code,
                        **e.details,
                    )
                from decisiondash.cli.ux import error as print_error

                print_error(format_error_message(e))
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return 130
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=ExitCode.UNKNOWN_ERROR,
                    )
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: DecisionDashError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg
