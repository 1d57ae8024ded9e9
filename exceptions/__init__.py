# SauceDemo suite exception hierarchy
# Structured errors with classification, correlation ids and recovery hints

from .base import (
    SauceDemoTestError,
    DriverSessionError,
    ConfigurationError,
    UnsupportedPlatformError,
    ValidationError,
    ErrorMessageMissingError,
    ErrorMessageMismatchError,
    ErrorClassification,
    ErrorContext,
)

from .classification import (
    classify_error,
    is_retryable_error,
    get_recovery_strategy,
    create_error_context,
    convert_to_framework_exception,
    RecoveryStrategy,
)

from .logging import (
    StructuredErrorLogger,
    JSONFormatter,
    log_error_with_context,
    get_error_correlation_id,
    configure_error_logging,
)

__all__ = [
    # Base exceptions
    "SauceDemoTestError",
    "DriverSessionError",
    "ConfigurationError",
    "UnsupportedPlatformError",
    "ValidationError",
    "ErrorMessageMissingError",
    "ErrorMessageMismatchError",

    # Error classification
    "ErrorClassification",
    "ErrorContext",
    "classify_error",
    "is_retryable_error",
    "get_recovery_strategy",
    "create_error_context",
    "convert_to_framework_exception",
    "RecoveryStrategy",

    # Structured logging
    "StructuredErrorLogger",
    "JSONFormatter",
    "log_error_with_context",
    "get_error_correlation_id",
    "configure_error_logging",
]
