"""
Masking helpers for the suite's logs and Allure attachments.

Login journeys type real account passwords; anything that reaches a log
record or a report attachment goes through these helpers first.
"""

import re
import logging
from typing import Any, Optional


# Common patterns for sensitive data
SENSITIVE_PATTERNS = {
    'password': [
        r'password["\']?\s*[:=]\s*["\']?([^"\';\s]+)',
        r'passwd["\']?\s*[:=]\s*["\']?([^"\';\s]+)',
        r'pwd["\']?\s*[:=]\s*["\']?([^"\';\s]+)',
        r'contraseña["\']?\s*[:=]\s*["\']?([^"\';\s]+)',
    ],
    'token': [
        r'token["\']?\s*[:=]\s*["\']?([^"\';\s]+)',
        r'bearer\s+([a-zA-Z0-9\-._~+/]+=*)',
    ],
    'auth': [
        r'authorization["\']?\s*[:=]\s*["\']?([^"\';\s]+)',
    ]
}

SENSITIVE_KEYS = ('password', 'passwd', 'contraseña', 'token', 'secret', 'credential', 'api_key')


def mask_credential(value: str, mask_char: str = "*", reveal_chars: int = 4) -> str:
    """
    Mask a credential string, revealing only the first and last few characters.

    Args:
        value: The credential string to mask
        mask_char: Character to use for masking (default: "*")
        reveal_chars: Number of characters to reveal at start and end (default: 4)

    Returns:
        Masked credential string
    """
    if not value or len(value) <= reveal_chars * 2:
        return mask_char * 8  # Standard masked length for short values

    start = value[:reveal_chars]
    end = value[-reveal_chars:]
    mask_length = max(8, len(value) - (reveal_chars * 2))

    return f"{start}{mask_char * mask_length}{end}"


def mask_sensitive_data(data: Any, deep_copy: bool = True) -> Any:
    """
    Recursively mask sensitive data in dicts, lists and strings.

    Dict values are masked when their key looks sensitive; strings are
    scanned with SENSITIVE_PATTERNS.
    """
    if isinstance(data, dict):
        result = {} if deep_copy else data
        for key, value in data.items():
            key_lower = key.lower() if isinstance(key, str) else str(key).lower()

            is_sensitive = any(sensitive in key_lower for sensitive in SENSITIVE_KEYS)

            if is_sensitive and isinstance(value, str):
                result[key] = mask_credential(value)
            else:
                result[key] = mask_sensitive_data(value, deep_copy)
        return result

    elif isinstance(data, list):
        return [mask_sensitive_data(item, deep_copy) for item in data]

    elif isinstance(data, str):
        masked_data = data
        for patterns in SENSITIVE_PATTERNS.values():
            for pattern in patterns:
                masked_data = re.sub(pattern, lambda m: mask_credential(m.group(0)),
                                     masked_data, flags=re.IGNORECASE)
        return masked_data

    else:
        return data


def secure_log_formatter(record: logging.LogRecord) -> logging.LogRecord:
    # Mask the message and its arguments in place
    if isinstance(record.msg, str):
        record.msg = mask_sensitive_data(record.msg, deep_copy=False)

    if record.args:
        if isinstance(record.args, (list, tuple)):
            record.args = tuple(mask_sensitive_data(list(record.args)))
        elif isinstance(record.args, dict):
            record.args = mask_sensitive_data(record.args)

    return record


class SecureLogHandler(logging.Handler):
    """
    Log handler that masks sensitive data before delegating to another handler.
    """

    def __init__(self, base_handler: logging.Handler):
        super().__init__()
        self.base_handler = base_handler
        self.setLevel(base_handler.level)
        self.setFormatter(base_handler.formatter)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            # Copy so other handlers still see the original record
            secure_record = logging.LogRecord(
                name=record.name,
                level=record.levelno,
                pathname=record.pathname,
                lineno=record.lineno,
                msg=record.msg,
                args=record.args,
                exc_info=record.exc_info,
                func=record.funcName,
                sinfo=record.stack_info
            )

            secure_record = secure_log_formatter(secure_record)

            self.base_handler.emit(secure_record)
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        self.base_handler.close()
        super().close()


def sanitize_for_allure(data: Any) -> str:
    """
    Sanitize data for safe inclusion in Allure reports.

    Args:
        data: Data to sanitize

    Returns:
        String representation safe for reporting
    """
    if isinstance(data, (dict, list)):
        sanitized = mask_sensitive_data(data)
        return str(sanitized)
    elif isinstance(data, str):
        return mask_sensitive_data(data)
    else:
        return str(data)


def setup_secure_logging(formatter: Optional[logging.Formatter] = None):
    # Add a masking console handler to the root logger once
    root_logger = logging.getLogger()

    if any(isinstance(handler, SecureLogHandler) for handler in root_logger.handlers):
        return

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        formatter or logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )
    root_logger.addHandler(SecureLogHandler(console_handler))

    logging.info("Secure logging initialized - sensitive data will be masked")
