# Elastic License 2.0
# Copyright (c) 2025 sliptonic
# SPDX-License-Identifier: Elastic-2.0

"""
Logging configuration for keystretch using structlog.

This module configures structured logging with JSON output by default
and pretty-printed output on request.

Assumptions:
- structlog routes through the standard library, so the host application's
  logging levels decide what is emitted
- Importing the package only installs the structlog processor chain; the
  standard library handlers are configured by configure_logging (the CLI)
- Log output goes to stderr so command output on stdout stays clean
"""
import logging
import sys
from typing import Optional

import structlog
from structlog.types import EventDict, Processor

DEFAULT_LOG_LEVEL = "INFO"


def add_log_level(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add log level to event dict.

    Args:
        logger: Logger instance
        method_name: Name of the logging method
        event_dict: Event dictionary

    Returns:
        EventDict: Updated event dictionary with level
    """
    event_dict["level"] = method_name.upper()
    return event_dict


def _configure_structlog(json_output: bool) -> None:
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(
    log_level: Optional[str] = None,
    json_output: Optional[bool] = None
) -> None:
    """Configure logging for an application embedding keystretch.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: If True, output JSON; if False, pretty print

    Raises:
        ValueError: If log_level is not a standard level name

    Assumptions:
    - Defaults to INFO level
    - Defaults to JSON output
    - Replaces handlers on the root logger, so only applications call this
    """
    level_name = (log_level or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    use_json = json_output if json_output is not None else True

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )
    _configure_structlog(use_json)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name (typically module name)

    Returns:
        BoundLogger: Configured structlog logger
    """
    return structlog.get_logger(name)


_configure_structlog(json_output=True)
