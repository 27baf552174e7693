"""
Dialect strategy registry.
"""

from .base import (
    Dialect,
    DialectName,
    LimitOffsetDialect,
    canonical_dialect_name,
    output_column_name,
    parse_dialect_name,
)
from .mssql import MSSQLDialect
from .mysql import MySQLDialect
from .oracle import OracleDialect
from .postgres import PostgresDialect
from .registry import find_dialect, get_dialect
from .sqlite import SQLiteDialect

__all__ = [
    "Dialect",
    "DialectName",
    "LimitOffsetDialect",
    "MSSQLDialect",
    "MySQLDialect",
    "OracleDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "canonical_dialect_name",
    "find_dialect",
    "get_dialect",
    "output_column_name",
    "parse_dialect_name",
]
