"""
MySQL dialect implementation.
"""

from __future__ import annotations

from typing import Final

from .base import DialectName, LimitOffsetDialect


class MySQLDialect(LimitOffsetDialect):
    """
    MySQL dialect using percent-style placeholders.
    """

    name: Final[DialectName] = DialectName.MYSQL
    param_style: Final[str] = "format"

    def parameter_placeholder(self, position: int | None = None) -> str:
        return "%s"
