import json
import logging
import time
import uuid
from typing import Dict, Any, Optional

from core.security import mask_sensitive_data, SecureLogHandler, setup_secure_logging

from .base import SauceDemoTestError, ErrorContext
from .classification import (
    classify_error,
    convert_to_framework_exception,
    create_error_context,
    get_recovery_strategy,
)

ERROR_LOGGER_NAME = "saucedemo.errors"


class StructuredErrorLogger:
    # JSON-structured error logger with correlation ID tracking

    def __init__(self, logger_name: str = __name__):
        self.logger = logging.getLogger(logger_name)

        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def log_error(
        self,
        exception: Exception,
        context: Optional[ErrorContext] = None,
        level: str = "error",
        additional_fields: Optional[Dict[str, Any]] = None
    ) -> str:
        # Log error with structured JSON format and return correlation ID
        correlation_id = get_error_correlation_id()

        if context is None:
            context = create_error_context(correlation_id=correlation_id)

        if not context.correlation_id or context.correlation_id == "unknown":
            context.correlation_id = correlation_id

        if not isinstance(exception, SauceDemoTestError):
            framework_exception = convert_to_framework_exception(exception, context)
        else:
            framework_exception = exception

        log_entry = {
            "timestamp": time.time(),
            "level": level.upper(),
            "correlation_id": context.correlation_id,
            "error": {
                "type": type(exception).__name__,
                "message": str(exception),
                "classification": classify_error(exception).value,
                "is_retryable": framework_exception.is_retryable(),
                "recovery_strategy": get_recovery_strategy(exception).value,
                "recovery_suggestions": framework_exception.recovery_suggestions
            },
            "context": context.to_dict(),
        }

        if additional_fields:
            log_entry.update(additional_fields)

        cause = exception.__cause__ or getattr(exception, "cause", None)
        if cause:
            log_entry["error"]["cause"] = {
                "type": type(cause).__name__,
                "message": str(cause)
            }

        log_entry = mask_sensitive_data(log_entry)

        log_method = getattr(self.logger, level.lower(), self.logger.error)
        log_method(json.dumps(log_entry, default=str, indent=2))

        return context.correlation_id


class JSONFormatter(logging.Formatter):
    # One JSON object per record; pre-built JSON messages are passed through

    def format(self, record: logging.LogRecord) -> str:
        try:
            message = json.loads(record.getMessage())
            if isinstance(message, dict):
                return json.dumps(message, default=str)
        except (json.JSONDecodeError, TypeError):
            pass

        log_entry = {
            "timestamp": record.created,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


_structured_logger = StructuredErrorLogger(ERROR_LOGGER_NAME)


def log_error_with_context(
    exception: Exception,
    context: Optional[ErrorContext] = None,
    level: str = "error",
    **additional_fields
) -> str:
    return _structured_logger.log_error(
        exception=exception,
        context=context,
        level=level,
        additional_fields=additional_fields
    )


def get_error_correlation_id() -> str:
    return str(uuid.uuid4())[:8]


def _build_formatter(format_type: str) -> logging.Formatter:
    if format_type.lower() == "json":
        return JSONFormatter()
    return logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')


def configure_error_logging(
    level: str = "INFO",
    format_type: str = "json",
    log_file: Optional[str] = None,
    enable_security: bool = True
):
    # Configure the error logger and, optionally, masking on the root logger
    logger = logging.getLogger(ERROR_LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    logger.handlers.clear()

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(_build_formatter(format_type))
        if enable_security:
            handler = SecureLogHandler(handler)
        logger.addHandler(handler)

    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))
    if enable_security:
        setup_secure_logging(_build_formatter(format_type))
        logger.info("Secure logging configured - sensitive data will be masked")
