"""Structured logging helpers for blazesql."""

from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar
from typing import Optional

_correlation_id: ContextVar[str | None] = ContextVar("blazesql_correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger("blazesql")
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(correlation_id)s | %(name)s | %(message)s"
    )
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())
    logger.addHandler(handler)
    logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(f"blazesql.{name}")


def set_correlation_id(value: Optional[str] = None) -> str:
    token = value or uuid.uuid4().hex
    _correlation_id.set(token)
    return token


def get_correlation_id() -> str:
    cid = _correlation_id.get()
    if cid is None:
        cid = set_correlation_id()
    return cid


class RenderTimer:
    """
    Context manager logging how long a render took.

    Callers may set ``statement`` inside the block so slow renders name the SQL.
    """

    def __init__(self, name: str, logger: logging.Logger, threshold_ms: int) -> None:
        self.name = name
        self.logger = logger
        self.threshold_ms = threshold_ms
        self.statement: str | None = None
        self.elapsed_ms = 0.0
        self._start = 0.0

    def __enter__(self) -> "RenderTimer":
        self._start = time.monotonic()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed_ms = (time.monotonic() - self._start) * 1000
        level = logging.WARNING if self.elapsed_ms >= self.threshold_ms else logging.DEBUG
        extra = {"sql": self.statement, "elapsed_ms": self.elapsed_ms}
        self.logger.log(level, "%s took %.2fms", self.name, self.elapsed_ms, extra=extra)


def time_call(name: str, logger: logging.Logger, *, threshold_ms: int = 100) -> RenderTimer:
    return RenderTimer(name, logger, threshold_ms)
