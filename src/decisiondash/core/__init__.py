"""Core modules for decisiondash - error types and exit codes."""

from decisiondash.core.errors import (
    ConfigurationError,
    DecisionDashError,
    ExitCode,
    RegistryInconsistencyError,
    SerializationError,
    ValidationError,
    format_error_message,
    main_with_error_handling,
)

__all__ = [
    "ExitCode",
    "DecisionDashError",
    "ConfigurationError",
    "ValidationError",
    "SerializationError",
    "RegistryInconsistencyError",
    "main_with_error_handling",
    "format_error_message",
]
