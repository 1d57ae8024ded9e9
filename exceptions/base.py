import time
from enum import Enum
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, field


class ErrorClassification(Enum):
    # How an error should be treated by the retry policy and the report
    RETRYABLE = "retryable"          # Can be automatically retried
    TERMINAL = "terminal"            # Should fail fast, no retry
    CONFIGURATION = "configuration" # Environment/capability related
    TRANSIENT = "transient"         # Automation server unreachable or slow
    VALIDATION = "validation"       # UI state did not match the expectation


@dataclass
class ErrorContext:
    # Everything needed to trace a failure back to its scenario and device
    correlation_id: str
    timestamp: float = field(default_factory=time.time)
    component: str = ""
    operation: str = ""
    platform: Optional[str] = None
    retry_count: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)
    stack_trace: Optional[str] = None
    recovery_suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "correlation_id": self.correlation_id,
            "timestamp": self.timestamp,
            "component": self.component,
            "operation": self.operation,
            "platform": self.platform,
            "retry_count": self.retry_count,
            "metadata": self.metadata,
            "stack_trace": self.stack_trace,
            "recovery_suggestions": self.recovery_suggestions,
        }


class SauceDemoTestError(Exception):
    # Base exception for all suite errors
    # Carries a correlation id and recovery guidance for the report

    def __init__(
        self,
        message: str,
        error_context: Optional[ErrorContext] = None,
        classification: ErrorClassification = ErrorClassification.TERMINAL,
        cause: Optional[Exception] = None,
        recovery_suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_context = error_context or ErrorContext(correlation_id="unknown")
        self.classification = classification
        self.cause = cause
        self.recovery_suggestions = recovery_suggestions or []

        if recovery_suggestions:
            self.error_context.recovery_suggestions.extend(recovery_suggestions)

    def is_retryable(self) -> bool:
        return self.classification in (
            ErrorClassification.RETRYABLE,
            ErrorClassification.TRANSIENT
        )

    def get_actionable_message(self) -> str:
        # Error message followed by recovery suggestions
        base_message = f"{self.message}"

        if self.recovery_suggestions:
            suggestions = "\n".join(f"  - {suggestion}" for suggestion in self.recovery_suggestions)
            base_message += f"\n\nRecovery suggestions:\n{suggestions}"

        if self.error_context.platform:
            base_message += f"\n\nPlatform: {self.error_context.platform}"

        if self.error_context.correlation_id != "unknown":
            base_message += f"\nCorrelation ID: {self.error_context.correlation_id}"

        return base_message

    def __str__(self) -> str:
        return self.get_actionable_message()


class DriverSessionError(SauceDemoTestError):
    # The automation server refused or failed to open a session

    def __init__(
        self,
        message: str,
        platform: Optional[str] = None,
        server_url: Optional[str] = None,
        error_context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None
    ):
        self.platform = platform
        self.server_url = server_url

        recovery_suggestions = [
            "Check that the Appium server is running and reachable",
            "Verify the emulator or simulator is booted and listed by the server",
            "Verify the app path and package/activity capabilities",
            "Check that the platform driver (UiAutomator2/XCUITest) is installed on the server"
        ]

        classification = ErrorClassification.RETRYABLE

        if "timeout" in message.lower() or "timed out" in message.lower():
            recovery_suggestions.insert(0, "Increase newCommandTimeout or the session attempts")

        if server_url:
            recovery_suggestions.insert(0, f"Automation server: {server_url}")

        if error_context:
            error_context.component = "Driver Session"
            error_context.platform = platform
            if server_url:
                error_context.metadata["server_url"] = server_url

        super().__init__(
            message=f"Driver Session Error: {message}",
            error_context=error_context,
            classification=classification,
            cause=cause,
            recovery_suggestions=recovery_suggestions
        )


class ConfigurationError(SauceDemoTestError):
    # Exception for configuration issues - terminal, should fail fast

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_file: Optional[str] = None,
        expected_format: Optional[str] = None,
        error_context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None
    ):
        self.config_key = config_key
        self.config_file = config_file
        self.expected_format = expected_format

        recovery_suggestions = [
            "Review environment variables and the .env file",
            "Check .env file exists and contains required values",
        ]

        if config_key:
            recovery_suggestions.insert(0, f"Set required configuration: {config_key}")

        if config_file:
            recovery_suggestions.insert(0, f"Check configuration file: {config_file}")

        if expected_format:
            recovery_suggestions.insert(0, f"Expected format: {expected_format}")

        if error_context:
            error_context.component = "Configuration"
            if config_key:
                error_context.metadata["config_key"] = config_key
            if config_file:
                error_context.metadata["config_file"] = config_file

        super().__init__(
            message=f"Configuration Error: {message}",
            error_context=error_context,
            classification=ErrorClassification.CONFIGURATION,
            cause=cause,
            recovery_suggestions=recovery_suggestions
        )


class UnsupportedPlatformError(ConfigurationError, ValueError):
    # Raised before any session attempt when the platform has no capability set

    def __init__(self, platform: str, supported: Optional[List[str]] = None):
        self.platform = platform
        self.supported = supported or []
        super().__init__(
            message=f"Plataforma no soportada: {platform}",
            config_key="PLATFORM_NAME",
            expected_format=" | ".join(self.supported) if self.supported else None,
        )


class ValidationError(SauceDemoTestError, AssertionError):
    # UI state did not match the expectation - terminal, fails the scenario

    def __init__(
        self,
        message: str,
        expected_value: Optional[str] = None,
        actual_value: Optional[str] = None,
        validation_type: str = "content",
        error_context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None
    ):
        self.expected_value = expected_value
        self.actual_value = actual_value
        self.validation_type = validation_type

        recovery_suggestions = [
            "Review the expected text in the feature file",
            "Check if the app screen or its copy has changed",
        ]

        if expected_value is not None and actual_value is not None:
            recovery_suggestions.insert(0,
                f"Expected: '{expected_value}' but got: '{actual_value}'")

        if error_context:
            error_context.component = "Validation"
            error_context.operation = validation_type
            error_context.metadata.update({
                "expected_value": expected_value,
                "actual_value": actual_value,
                "validation_type": validation_type,
            })

        super().__init__(
            message=message,
            error_context=error_context,
            classification=ErrorClassification.VALIDATION,
            cause=cause,
            recovery_suggestions=recovery_suggestions
        )


class ErrorMessageMissingError(ValidationError):
    # The validation message element never showed up

    def __init__(self, expected_value: str, actual_value: str = "",
                 error_context: Optional[ErrorContext] = None):
        super().__init__(
            message=(
                f"El mensaje de error '{expected_value}' no apareció. "
                f"Mensaje actual: '{actual_value}'"
            ),
            expected_value=expected_value,
            actual_value=actual_value,
            validation_type="error_message_presence",
            error_context=error_context,
        )


class ErrorMessageMismatchError(ValidationError):
    # The validation message is shown but does not contain the expected text

    def __init__(self, expected_value: str, actual_value: str,
                 error_context: Optional[ErrorContext] = None):
        super().__init__(
            message=(
                "El mensaje de error no contiene el texto esperado. "
                f"Esperado: '{expected_value}', Actual: '{actual_value}'"
            ),
            expected_value=expected_value,
            actual_value=actual_value,
            validation_type="error_message_content",
            error_context=error_context,
        )
