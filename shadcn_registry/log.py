"""
Structured logging configuration using structlog
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
	logging.basicConfig(
		format="%(message)s",
		stream=sys.stderr,
		level=getattr(logging, level.upper(), logging.INFO),
	)

	processors = [
		structlog.contextvars.merge_contextvars,
		structlog.stdlib.add_logger_name,
		structlog.stdlib.add_log_level,
		structlog.processors.TimeStamper(fmt="iso"),
		structlog.processors.StackInfoRenderer(),
		structlog.processors.format_exc_info,
	]
	if fmt == "json":
		processors.append(structlog.processors.JSONRenderer())
	else:
		processors.append(structlog.dev.ConsoleRenderer())

	structlog.configure(
		processors=processors,
		context_class=dict,
		logger_factory=structlog.stdlib.LoggerFactory(),
		wrapper_class=structlog.stdlib.BoundLogger,
		cache_logger_on_first_use=True,
	)
