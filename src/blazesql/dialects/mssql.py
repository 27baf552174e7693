"""
SQL Server dialect: pagination through TOP and a primary key anti-join.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from ..conditions import NotIn
from ..errors import MissingPrimaryKeyError, UnsupportedPaginationError
from ..utils.logging import get_logger
from .base import DialectName, Statement, output_column_name

if TYPE_CHECKING:
    from ..builder import Builder
    from ..pagination import Pagination

logger = get_logger("dialects.mssql")

DERIVED_TABLE_ALIAS = "src"


def _top(count: int, columns: list[str]) -> str:
    return f"TOP {count} {', '.join(columns) if columns else '*'}"


class MSSQLDialect:
    """
    SQL Server engines without OFFSET/FETCH.

    The outer query takes ``TOP count`` rows whose primary key is not among
    the keys of an inner ``TOP offset+count`` read of the same source, filter
    and ordering.
    """

    name: Final[DialectName] = DialectName.MSSQL
    param_style: Final[str] = "named"

    def parameter_placeholder(self, position: int | None = None) -> str:
        return f"@p{position or 1}"

    def paginate(self, query: "Builder", pagination: "Pagination") -> Statement:
        count, offset = pagination.count, pagination.offset

        base = query
        columns = list(query.selects)
        if query.unions:
            # The union becomes a derived table; its ordering moves to the wrappers.
            columns = [output_column_name(column) for column in query.selects]
            base = query.without_order_by().wrap(*columns, alias="at").order_by(*query.order_by_items)

        if offset == 0:
            return base.select(_top(count, columns))

        primary_key = (pagination.primary_key or "").strip()
        if not primary_key:
            raise MissingPrimaryKeyError(self.name.value)
        if not columns:
            raise UnsupportedPaginationError(
                "mssql pagination with a non-zero offset requires an explicit select list"
            )

        if base.subquery is not None and not base.alias:
            # The anti-join filters the outer query, which needs a named source.
            base = base.from_(base.subquery, DERIVED_TABLE_ALIAS)

        inner_columns = columns if primary_key in columns else columns + [primary_key]
        leading = base.select(_top(offset + count, inner_columns))
        skipped = leading.wrap(primary_key, alias="at")
        logger.debug("Rewriting query into TOP %s anti-join on %s", count, primary_key)
        return base.select(_top(count, columns)).where(NotIn(primary_key, skipped))
