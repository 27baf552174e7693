"""
Dialect strategy interfaces and the closed set of supported engines.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Protocol

from ..writer import Writer

if TYPE_CHECKING:
    from ..builder import Builder
    from ..pagination import Pagination


class DialectName(str, Enum):
    SQLITE = "sqlite"
    MYSQL = "mysql"
    POSTGRES = "postgres"
    ORACLE = "oracle"
    MSSQL = "mssql"


_ALIASES = {
    "sqlite3": DialectName.SQLITE,
    "postgresql": DialectName.POSTGRES,
    "pgsql": DialectName.POSTGRES,
    "sqlserver": DialectName.MSSQL,
}


def normalize_dialect(token: str) -> str:
    return token.strip().lower()


def parse_dialect_name(token: Optional[str]) -> Optional[DialectName]:
    """
    Resolve a user supplied dialect token, ignoring case and surrounding whitespace.
    """

    if not token:
        return None
    normalized = normalize_dialect(token)
    if normalized in _ALIASES:
        return _ALIASES[normalized]
    try:
        return DialectName(normalized)
    except ValueError:
        return None


def canonical_dialect_name(token: str) -> str:
    name = parse_dialect_name(token)
    return name.value if name is not None else normalize_dialect(token)


_IDENTIFIER = r'(?:[A-Za-z_][\w$#]*|"[^"]+")'
_ALIASED_COLUMN = re.compile(rf"\s+AS\s+({_IDENTIFIER})$", re.IGNORECASE)
_QUALIFIED_COLUMN = re.compile(rf"(?:{_IDENTIFIER}\.)+({_IDENTIFIER})")


def output_column_name(column: str) -> str:
    """
    Name under which ``column`` is visible to a query wrapping its statement.

    ``u.id`` becomes ``id`` and ``COUNT(*) AS n`` becomes ``n``; other
    expressions are returned unchanged.
    """

    column = column.strip()
    aliased = _ALIASED_COLUMN.search(column)
    if aliased:
        return aliased.group(1)
    qualified = _QUALIFIED_COLUMN.fullmatch(column)
    if qualified:
        return qualified.group(1)
    return column


class Statement(Protocol):
    def write_to(self, writer: Writer) -> None: ...


class Dialect(Protocol):
    """
    Strategy interface consumed by the pagination engine and placeholder conversion.
    """

    @property
    def name(self) -> DialectName: ...

    @property
    def param_style(self) -> str: ...

    def parameter_placeholder(self, position: int | None = None) -> str: ...

    def paginate(self, query: "Builder", pagination: "Pagination") -> Statement: ...


@dataclass(frozen=True)
class LimitedQuery:
    """
    A query followed by a literal row limiting clause.
    """

    query: "Builder"
    clause: str

    def write_to(self, writer: Writer) -> None:
        self.query.write_to(writer)
        writer.write(f" {self.clause}")


class LimitOffsetDialect:
    """
    Shared pagination for engines with native ``LIMIT``/``OFFSET``.
    """

    def limit_clause(self, count: int, offset: int) -> str:
        if offset == 0:
            return f"LIMIT {count}"
        return f"LIMIT {count} OFFSET {offset}"

    def paginate(self, query: "Builder", pagination: "Pagination") -> Statement:
        return LimitedQuery(query, self.limit_clause(pagination.count, pagination.offset))
