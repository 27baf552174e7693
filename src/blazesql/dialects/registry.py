"""
Lookup of dialect strategies by name.
"""

from __future__ import annotations

from typing import Dict, Optional

from ..errors import UnknownDialectError
from .base import Dialect, DialectName, parse_dialect_name
from .mssql import MSSQLDialect
from .mysql import MySQLDialect
from .oracle import OracleDialect
from .postgres import PostgresDialect
from .sqlite import SQLiteDialect

_STRATEGIES: Dict[DialectName, Dialect] = {
    DialectName.SQLITE: SQLiteDialect(),
    DialectName.MYSQL: MySQLDialect(),
    DialectName.POSTGRES: PostgresDialect(),
    DialectName.ORACLE: OracleDialect(),
    DialectName.MSSQL: MSSQLDialect(),
}


def find_dialect(token: Optional[str]) -> Optional[Dialect]:
    name = parse_dialect_name(token)
    if name is None:
        return None
    return _STRATEGIES[name]


def get_dialect(token: Optional[str]) -> Dialect:
    dialect = find_dialect(token)
    if dialect is None:
        available = ", ".join(name.value for name in DialectName)
        raise UnknownDialectError(f"Unknown dialect {token!r}. Available: {available}")
    return dialect
