"""
SQLite dialect implementation.
"""

from __future__ import annotations

from typing import Final

from .base import DialectName, LimitOffsetDialect


class SQLiteDialect(LimitOffsetDialect):
    """
    SQLite dialect using qmark placeholders.
    """

    name: Final[DialectName] = DialectName.SQLITE
    param_style: Final[str] = "qmark"

    def parameter_placeholder(self, position: int | None = None) -> str:
        return "?"
