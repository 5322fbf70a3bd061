# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Logging utilities for keystretch.

Provides specialized logging functions for:
- Operational events (hash computations and comparisons)
- Security events (malformed results, unsupported hash functions)

Assumptions:
- All logs use structlog for structured output
- Passwords, salts and encoded results are never logged
"""
from typing import Any, Dict

from keystretch.logging_config import get_logger

app_logger = get_logger("keystretch.application")
security_logger = get_logger("keystretch.security")

SENSITIVE_FIELDS = frozenset({"password", "salt", "computed_result", "secret", "symbols"})


def log_application_event(event: str, **kwargs: Any) -> None:
    """Log an operational event at debug level.

    Args:
        event: Event name (e.g., "password_computed")
        **kwargs: Additional context (hash_function, hash_iterations, etc.)
    """
    app_logger.debug(event, **_sanitize_data(kwargs))


def log_security_event(event: str, reason: str = "", **kwargs: Any) -> None:
    """Log a security event.

    Args:
        event: Security event type (computed_result_malformed, etc.)
        reason: Reason for security event
        **kwargs: Additional context

    Assumptions:
    - Used when externally supplied data is rejected
    - Helps detect tampered or corrupted stored credentials
    """
    security_logger.warning(event, reason=reason, **_sanitize_data(kwargs))


def _sanitize_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Sanitize sensitive data from log entries.

    Args:
        data: Dictionary that may contain sensitive data

    Returns:
        Dict: Sanitized dictionary with sensitive fields redacted
    """
    if not data:
        return data

    sanitized = {}
    for key, value in data.items():
        if key.lower() in SENSITIVE_FIELDS:
            sanitized[key] = "[REDACTED]"
        elif isinstance(value, dict):
            sanitized[key] = _sanitize_data(value)
        else:
            sanitized[key] = value

    return sanitized
