"""
Pagination engine translating offset/count windows into dialect specific SQL.

A paginated statement is modelled as a separate value, :class:`PaginatedQuery`,
holding the unpaginated query and the requested window. Rendering it asks the
dialect strategy for a rewritten statement and renders that; the original
builder is never modified, so no pagination can be applied twice.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from .config import get_settings
from .dialects.base import Dialect, Statement
from .dialects.registry import find_dialect
from .errors import InvalidPaginationError, UnsupportedPaginationError
from .utils.logging import get_logger
from .writer import SQLWriter, Writer

if TYPE_CHECKING:
    from .builder import Builder

logger = get_logger("pagination")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Pagination:
    """
    Row window request: skip ``offset`` rows, then return at most ``count``.

    ``style`` names the dialect used for the rewrite and defaults to the
    builder's dialect. ``primary_key`` is required by TOP based dialects
    when ``offset`` is non-zero.
    """

    count: int
    offset: int = 0
    style: Optional[str] = None
    primary_key: Optional[str] = None

    def validate(self) -> None:
        if not _is_int(self.count) or not _is_int(self.offset):
            raise InvalidPaginationError(
                f"Pagination count and offset must be integers, got {self.count!r}/{self.offset!r}"
            )
        if self.count <= 0:
            raise InvalidPaginationError(f"Pagination count must be positive, got {self.count}")
        if self.offset < 0:
            raise InvalidPaginationError(f"Pagination offset must not be negative, got {self.offset}")


@dataclass(frozen=True)
class PaginatedQuery:
    """
    An unpaginated query paired with the window to cut out of it.
    """

    query: "Builder"
    pagination: Pagination

    def resolve_dialect(self) -> Dialect:
        token = self.pagination.style or self.query.dialect or get_settings().default_dialect
        if not token:
            raise UnsupportedPaginationError("Pagination requires a dialect; none is configured")
        dialect = find_dialect(token)
        if dialect is None:
            raise UnsupportedPaginationError(f"Pagination is not supported for dialect {token!r}")
        return dialect

    def rewrite(self) -> Statement:
        """
        Return the statement expressing this window in the resolved dialect.
        """

        if not self.query.can_be_subquery():
            raise InvalidPaginationError("LIMIT is only supported for SELECT and UNION statements")
        self.pagination.validate()
        dialect = self.resolve_dialect()
        logger.debug(
            "Applying %s pagination (offset=%s, count=%s)",
            dialect.name.value,
            self.pagination.offset,
            self.pagination.count,
        )
        return dialect.paginate(self.query.without_pagination(), self.pagination)

    def write_to(self, writer: Writer) -> None:
        statement = self.rewrite()
        # Render into a scoped writer so a failure leaves the caller's writer untouched.
        scoped = SQLWriter()
        statement.write_to(scoped)
        writer.write(scoped.text)
        writer.extend(scoped.args)


def paginate(query: "Builder", pagination: Pagination) -> Tuple[str, List[Any]]:
    """
    Render ``query`` restricted to ``pagination`` and return ``(sql, args)``.
    """

    writer = SQLWriter()
    PaginatedQuery(query.without_pagination(), pagination).write_to(writer)
    return writer.text, writer.args
