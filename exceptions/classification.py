import traceback
import uuid
from typing import Dict, Any, Optional
from enum import Enum

from selenium.common.exceptions import (
    InvalidArgumentException,
    NoSuchElementException,
    SessionNotCreatedException,
    StaleElementReferenceException,
    TimeoutException,
    WebDriverException,
)

from .base import (
    SauceDemoTestError,
    DriverSessionError,
    ConfigurationError,
    ValidationError,
    ErrorClassification,
    ErrorContext,
)


class RecoveryStrategy(Enum):
    # What the suite does next after an error of a given class
    RETRY_WITH_BACKOFF = "retry_with_backoff"
    SESSION_RESTART = "session_restart"
    FAIL_FAST = "fail_fast"


def create_error_context(
    correlation_id: Optional[str] = None,
    component: str = "",
    operation: str = "",
    platform: Optional[str] = None,
    retry_count: int = 0,
    **metadata
) -> ErrorContext:
    # Factory function to create error context with correlation ID
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())[:8]

    stack_trace = traceback.format_exc()
    return ErrorContext(
        correlation_id=correlation_id,
        component=component,
        operation=operation,
        platform=platform,
        retry_count=retry_count,
        metadata=metadata,
        stack_trace=stack_trace if stack_trace.strip() != "NoneType: None" else None
    )


def classify_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None
) -> ErrorClassification:
    context = context or {}

    # Already classified suite exceptions
    if isinstance(exception, SauceDemoTestError):
        return exception.classification

    if isinstance(exception, AssertionError):
        return ErrorClassification.VALIDATION

    if isinstance(exception, WebDriverException):
        return _classify_driver_error(exception, context)

    if _is_network_error(exception):
        return ErrorClassification.TRANSIENT

    if _is_configuration_error(exception):
        return ErrorClassification.CONFIGURATION

    return ErrorClassification.TERMINAL


def is_retryable_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None
) -> bool:
    # Determine if an error should trigger automatic retry
    classification = classify_error(exception, context)

    return classification in (
        ErrorClassification.RETRYABLE,
        ErrorClassification.TRANSIENT
    )


def get_recovery_strategy(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None
) -> RecoveryStrategy:
    classification = classify_error(exception, context)

    if isinstance(exception, DriverSessionError):
        if "timeout" in exception.message.lower():
            return RecoveryStrategy.RETRY_WITH_BACKOFF
        return RecoveryStrategy.SESSION_RESTART

    if classification in (ErrorClassification.TRANSIENT, ErrorClassification.RETRYABLE):
        return RecoveryStrategy.RETRY_WITH_BACKOFF

    return RecoveryStrategy.FAIL_FAST


def convert_to_framework_exception(
    exception: Exception,
    context: Optional[ErrorContext] = None,
    component: str = "Unknown",
    operation: str = "Unknown"
) -> SauceDemoTestError:
    # Wrap third-party exceptions so every log entry carries a classification

    if isinstance(exception, SauceDemoTestError):
        return exception

    if context is None:
        context = create_error_context(
            component=component,
            operation=operation
        )

    error_message = str(exception)
    classification = classify_error(exception)

    if isinstance(exception, SessionNotCreatedException) or (
        classification == ErrorClassification.TRANSIENT
    ):
        return DriverSessionError(
            message=error_message,
            platform=context.platform,
            error_context=context,
            cause=exception
        )

    elif classification == ErrorClassification.CONFIGURATION:
        return ConfigurationError(
            message=error_message,
            error_context=context,
            cause=exception
        )

    elif classification == ErrorClassification.VALIDATION:
        return ValidationError(
            message=error_message,
            error_context=context,
            cause=exception
        )

    return SauceDemoTestError(
        message=error_message,
        error_context=context,
        classification=classification,
        cause=exception
    )


# Private helper functions for error classification

def _classify_driver_error(exception: WebDriverException, context: Dict[str, Any]) -> ErrorClassification:
    error_str = str(exception).lower()

    # Element lookups time out or go stale while a screen is still loading
    if isinstance(exception, (TimeoutException, NoSuchElementException, StaleElementReferenceException)):
        return ErrorClassification.RETRYABLE

    if isinstance(exception, InvalidArgumentException):
        return ErrorClassification.CONFIGURATION

    if isinstance(exception, SessionNotCreatedException):
        # Capabilities the server rejects will be rejected again
        if any(indicator in error_str for indicator in ["capabilit", "app ", "does not exist", "invalid"]):
            return ErrorClassification.CONFIGURATION
        return ErrorClassification.RETRYABLE

    if _is_network_error(exception):
        return ErrorClassification.TRANSIENT

    return ErrorClassification.RETRYABLE


def _is_configuration_error(exception: Exception) -> bool:
    error_str = str(exception).lower()
    exception_types = ("configerror", "keyerror", "valueerror")

    config_indicators = [
        "config", "environment", "capabilit", "platform", ".env"
    ]

    return (any(exc_type in type(exception).__name__.lower() for exc_type in exception_types) or
            any(indicator in error_str for indicator in config_indicators))


def _is_network_error(exception: Exception) -> bool:
    # urllib3's MaxRetryError/NewConnectionError surface here when the server is down
    error_str = str(exception).lower()
    exception_types = ("connectionerror", "timeouterror", "maxretryerror", "newconnectionerror",
                       "protocolerror", "urlerror")

    network_indicators = [
        "connection refused", "connection reset", "max retries exceeded",
        "failed to establish", "timed out", "econnrefused", "socket"
    ]

    return (isinstance(exception, (ConnectionError, TimeoutError)) or
            any(exc_type in type(exception).__name__.lower() for exc_type in exception_types) or
            any(indicator in error_str for indicator in network_indicators))
