"""Logging configuration using loguru.

Intercepts stdlib logging so that uvicorn and httpx flow through loguru with
one format, and masks n8n credentials before any sink sees a record.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import TYPE_CHECKING

from loguru import logger

if TYPE_CHECKING:
    from loguru import Record

MASK = "***"

# Group 1 survives; the rest of each match is masked
_SECRET_PATTERNS: list[re.Pattern[str]] = [
    # X-N8N-API-KEY: abc / 'x-n8n-api-key': 'abc'
    re.compile(r"""(x-n8n-api-key['"]?\s*[:=]\s*['"]?)[^\s'",}]+""", re.IGNORECASE),
    re.compile(r"(Bearer\s+)[A-Za-z0-9\-._~+/]+=*"),
    # N8N_TOKEN_PROD=abc, N8N_API_KEY=abc, N8NHUB_AUTH_TOKEN=abc
    re.compile(r"((?:N8N_TOKEN_\w*|N8N_API_KEY|N8NHUB_AUTH_TOKEN)=)\S+"),
]


def redact(text: str) -> str:
    """Replace credential values in ``text`` with ``***``."""
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(lambda m: m.group(1) + MASK, text)
    return text


def _redact_record(record: Record) -> None:
    record["message"] = redact(record["message"])


class _InterceptHandler(logging.Handler):
    """Bridge stdlib logging records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO") -> None:
    """Route everything to a single stderr sink at ``level``.

    Call once at startup, before uvicorn starts or at the top of a CLI command.
    """
    level = level.upper()

    logger.remove()
    logger.configure(patcher=_redact_record)
    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
            "<level>{message}</level>"
        ),
    )

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)

    # Request lines carry workflow ids and webhook paths; keep them out of INFO
    for name in ("uvicorn.access", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.info("Logging initialised (level={})", level)
