"""
Structured JSON logging configuration.

Every log line is one JSON object on stdout with a channel (scan, directory,
dedup, storage, ledger, http), the id of the request being served and the
business context of the scan (card id, outcome, slot).
"""

from __future__ import annotations

import json
import logging
import os
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

CHANNELS = ("scan", "directory", "dedup", "storage", "ledger", "http")


class StructuredJsonFormatter(logging.Formatter):
    """
    Formatter producing one JSON object per record:

    - timestamp: ISO 8601, UTC
    - level: severity name
    - message: human readable message
    - channel: source category
    - context: request id plus business context
    - extra: additional metadata
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "message": record.getMessage(),
            "channel": getattr(record, "channel", record.name.split(".")[-1] if "." in record.name else "app"),
            "context": {
                "request_id": request_id_var.get(""),
                **(getattr(record, "context", {}) or {}),
            },
            "extra": getattr(record, "extra_data", {}) or {},
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure the root logger and the channel loggers (stdout, JSON)."""

    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredJsonFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [handler]

    for channel in CHANNELS:
        logging.getLogger(f"app.{channel}").setLevel(log_level)

    return root_logger


def get_logger(channel: str) -> logging.Logger:
    return logging.getLogger(f"app.{channel}")


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    context: dict | None = None,
    extra_data: dict | None = None,
    exc_info: bool = False,
) -> None:
    """
    Emit a structured log entry.

    Args:
        logger: channel logger
        level: level name (DEBUG, INFO, WARNING, ERROR)
        message: human readable message
        context: business context (card_id, outcome, subject, ...)
        extra_data: additional metadata (duration_ms, remote_addr, ...)
        exc_info: attach the current exception traceback
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.log(
        log_level,
        message,
        exc_info=exc_info,
        extra={
            "context": context or {},
            "extra_data": extra_data or {},
            "channel": logger.name.split(".")[-1],
        },
    )


def generate_request_id() -> str:
    return str(uuid.uuid4())
