"""
Oracle dialect: pagination through ROWNUM filtered nested selects.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from ..conditions import Expr
from ..errors import UnsupportedPaginationError
from ..utils.logging import get_logger
from .base import DialectName, Statement, output_column_name

if TYPE_CHECKING:
    from ..builder import Builder
    from ..pagination import Pagination

logger = get_logger("dialects.oracle")

ROW_NUMBER_COLUMN = "RN"


class OracleDialect:
    """
    Oracle has no OFFSET; rows are numbered with ROWNUM in a derived table and
    the window is cut out by filtering on that number.

    The wrapping selects refer to the output names of the select list, so
    qualifiers are dropped (``u.id`` is re-selected as ``id``) and aliased
    expressions are re-selected by alias. Two columns with the same output
    name, or an unaliased expression, cannot be re-selected and must be
    aliased by the caller.
    """

    name: Final[DialectName] = DialectName.ORACLE
    param_style: Final[str] = "numeric"

    def parameter_placeholder(self, position: int | None = None) -> str:
        return f":{position or 1}"

    def paginate(self, query: "Builder", pagination: "Pagination") -> Statement:
        columns = [output_column_name(column) for column in query.selects]
        count, offset = pagination.count, pagination.offset

        if offset == 0:
            if not columns:
                return query.wrap(alias="at").where(Expr(f"ROWNUM<={count}"))
            numbered = self._number_rows(query, columns)
            return numbered.wrap(*columns, alias="at").where(
                Expr(f"at.{ROW_NUMBER_COLUMN}<={count}")
            )

        if not columns:
            # A wildcard cannot be re-selected without also returning RN.
            raise UnsupportedPaginationError(
                "oracle pagination with a non-zero offset requires an explicit select list"
            )

        logger.debug("Rewriting query into ROWNUM window (%s, %s]", offset, offset + count)
        numbered = self._number_rows(query, columns)
        window = numbered.wrap(*columns, ROW_NUMBER_COLUMN, alias="at").where(
            Expr(f"at.{ROW_NUMBER_COLUMN}<={offset + count}")
        )
        return window.wrap(*columns, alias="att").where(Expr(f"att.{ROW_NUMBER_COLUMN}>{offset}"))

    @staticmethod
    def _number_rows(query: "Builder", columns: list[str]) -> "Builder":
        return query.wrap(*columns, f"ROWNUM AS {ROW_NUMBER_COLUMN}")
