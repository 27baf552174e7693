"""
blazesql public package initialization.

Compose statements with the factories below and call ``to_sql()`` to obtain
parameterized SQL text plus its ordered arguments.
"""

from .builder import (  # noqa: F401
    Builder,
    BuilderFactory,
    StatementKind,
    delete,
    for_dialect,
    insert,
    select,
    update,
)
from .conditions import (  # noqa: F401
    And,
    Between,
    Condition,
    Eq,
    Expr,
    Gt,
    Gte,
    In,
    IsNull,
    Like,
    Lt,
    Lte,
    Neq,
    Not,
    NotIn,
    NotNull,
    Or,
)
from .config import Settings, configure, get_settings  # noqa: F401
from .errors import (  # noqa: F401
    BuilderError,
    ConfigurationError,
    InconsistentDialectError,
    InvalidPaginationError,
    MissingPrimaryKeyError,
    NoColumnToInsertError,
    NoColumnToUpdateError,
    NoTableNameError,
    UnexpectedSubQueryError,
    UnknownDialectError,
    UnnamedDerivedTableError,
    UnsupportedPaginationError,
    UnsupportedUnionMembersError,
)
from .pagination import PaginatedQuery, Pagination, paginate  # noqa: F401
from .placeholders import convert_placeholders  # noqa: F401
from .writer import SQLWriter, Writer  # noqa: F401

__all__ = [
    "Builder",
    "BuilderFactory",
    "StatementKind",
    "select",
    "insert",
    "update",
    "delete",
    "for_dialect",
    "Condition",
    "Expr",
    "Eq",
    "Neq",
    "Lt",
    "Lte",
    "Gt",
    "Gte",
    "Like",
    "Between",
    "In",
    "NotIn",
    "IsNull",
    "NotNull",
    "And",
    "Or",
    "Not",
    "Pagination",
    "PaginatedQuery",
    "paginate",
    "convert_placeholders",
    "SQLWriter",
    "Writer",
    "Settings",
    "configure",
    "get_settings",
    "BuilderError",
    "ConfigurationError",
    "InconsistentDialectError",
    "InvalidPaginationError",
    "MissingPrimaryKeyError",
    "NoColumnToInsertError",
    "NoColumnToUpdateError",
    "NoTableNameError",
    "UnexpectedSubQueryError",
    "UnknownDialectError",
    "UnnamedDerivedTableError",
    "UnsupportedPaginationError",
    "UnsupportedUnionMembersError",
]
