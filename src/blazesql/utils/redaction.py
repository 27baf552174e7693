"""Masking of bound arguments before they reach log records."""

from __future__ import annotations

from typing import Any, Iterable, List

REDACTED_VALUE = "***"
MAX_LOGGED_LENGTH = 64

_SENSITIVE_TOKENS = (
    "password",
    "passwd",
    "secret",
    "token",
    "apikey",
    "api_key",
    "bearer",
    "authorization",
)


def is_sensitive(value: str) -> bool:
    normalized = value.lower()
    return any(token in normalized for token in _SENSITIVE_TOKENS)


def redact_arg(value: Any) -> Any:
    if isinstance(value, bytes):
        return f"<{len(value)} bytes>"
    if isinstance(value, str):
        if is_sensitive(value):
            return REDACTED_VALUE
        if len(value) > MAX_LOGGED_LENGTH:
            return value[: MAX_LOGGED_LENGTH - 3] + "..."
        return value
    if isinstance(value, (list, tuple)):
        return type(value)(redact_arg(item) for item in value)
    return value


def redact_args(args: Iterable[Any]) -> List[Any]:
    return [redact_arg(value) for value in args]


def describe_args(args: List[Any], *, include_values: bool) -> Any:
    """
    Summarize arguments for a log record; values are only included on request.
    """

    if include_values:
        return redact_args(args)
    return f"<{len(args)} args>"
