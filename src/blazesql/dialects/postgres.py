"""
PostgreSQL dialect implementation.
"""

from __future__ import annotations

from typing import Final

from .base import DialectName, LimitOffsetDialect


class PostgresDialect(LimitOffsetDialect):
    """
    PostgreSQL dialect using percent positional parameters.
    """

    name: Final[DialectName] = DialectName.POSTGRES
    param_style: Final[str] = "format"

    def parameter_placeholder(self, position: int | None = None) -> str:
        return "%s"
