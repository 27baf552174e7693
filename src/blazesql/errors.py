"""
Error hierarchy raised while composing and rendering statements.
"""

from __future__ import annotations


class BuilderError(ValueError):
    """Base error for statement composition and rendering failures."""


class NoTableNameError(BuilderError):
    """Raised when a statement has no table or derived table to operate on."""

    def __init__(self, message: str = "No table name configured for statement") -> None:
        super().__init__(message)


class UnnamedDerivedTableError(BuilderError):
    """Raised when a filtered statement selects from a derived table without an alias."""

    def __init__(
        self, message: str = "Derived table must be aliased when the outer query is filtered"
    ) -> None:
        super().__init__(message)


class UnexpectedSubQueryError(BuilderError):
    """Raised when a non-SELECT statement is used where a subquery is expected."""

    def __init__(self, kind: str | None = None) -> None:
        detail = f" ({kind})" if kind else ""
        super().__init__(f"Only SELECT and UNION statements can be used as subqueries{detail}")


class InconsistentDialectError(BuilderError):
    """Raised when nested statements declare different dialects."""

    def __init__(self, outer: str | None = None, inner: str | None = None) -> None:
        if outer and inner:
            message = f"Inconsistent dialects: outer '{outer}' vs nested '{inner}'"
        else:
            message = "Inconsistent dialects between outer and nested statements"
        super().__init__(message)


class InvalidPaginationError(BuilderError):
    """Raised for bad offset/count values or pagination on non-SELECT statements."""


class UnsupportedPaginationError(BuilderError):
    """Raised when a dialect cannot express the requested pagination."""


class MissingPrimaryKeyError(BuilderError):
    """Raised when TOP based pagination with an offset lacks a primary key column."""

    def __init__(self, dialect: str = "mssql") -> None:
        super().__init__(
            f"{dialect} pagination with a non-zero offset requires a primary key; "
            "pass primary_key= to limit()"
        )


class NoColumnToInsertError(BuilderError):
    """Raised when an INSERT has no column/value pairs."""

    def __init__(self) -> None:
        super().__init__("INSERT statement has no columns to insert")


class NoColumnToUpdateError(BuilderError):
    """Raised when an UPDATE has no assignments."""

    def __init__(self) -> None:
        super().__init__("UPDATE statement has no columns to update")


class UnsupportedUnionMembersError(BuilderError):
    """Raised when a UNION member is not a SELECT statement."""

    def __init__(self) -> None:
        super().__init__("UNION members must be SELECT statements")


class ConfigurationError(ValueError):
    """Raised when environment configuration values are invalid."""


class UnknownDialectError(BuilderError):
    """Raised when a dialect token does not name a supported engine."""
