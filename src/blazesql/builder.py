"""
Chainable statement builder rendering SELECT, INSERT, UPDATE, DELETE and UNION.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from .conditions import And, Condition, Eq, Expr, as_condition, write_subquery
from .config import get_settings
from .dialects.base import canonical_dialect_name
from .errors import (
    BuilderError,
    InconsistentDialectError,
    NoColumnToInsertError,
    NoColumnToUpdateError,
    NoTableNameError,
    UnnamedDerivedTableError,
    UnsupportedUnionMembersError,
)
from .pagination import PaginatedQuery, Pagination
from .placeholders import convert_placeholders
from .utils.logging import get_logger, time_call
from .utils.redaction import describe_args
from .writer import SQLWriter, Writer

logger = get_logger("builder")


class StatementKind(str, Enum):
    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    UNION = "union"


SUBQUERY_KINDS = frozenset({StatementKind.SELECT, StatementKind.UNION})

Source = Union[str, "Builder"]


@dataclass(frozen=True)
class Join:
    join_type: str
    source: Source
    on: Condition
    alias: str = ""


@dataclass(frozen=True)
class UnionMember:
    union_type: str
    query: "Builder"


def _assignment_pairs(items: Iterable[Any], columns: Mapping[str, Any]) -> Tuple[Tuple[str, Any], ...]:
    pairs: List[Tuple[str, Any]] = []
    for item in items:
        if isinstance(item, Mapping):
            pairs.extend(item.items())
        elif isinstance(item, Eq):
            pairs.extend(item.items)
        else:
            raise TypeError(f"Expected a mapping or Eq condition, got {type(item).__name__}")
    pairs.extend(columns.items())
    return tuple(pairs)


class Builder:
    """
    Immutable description of one SQL statement.

    Every configuration method returns a derived builder; the receiver is
    left untouched, so a builder may be rendered any number of times.
    """

    def __init__(
        self,
        kind: StatementKind,
        *,
        selects: Tuple[str, ...] = (),
        table: Optional[str] = None,
        subquery: Optional["Builder"] = None,
        alias: str = "",
        joins: Tuple[Join, ...] = (),
        cond: Optional[Condition] = None,
        group_by: str = "",
        having: Optional[Condition] = None,
        order_by: Tuple[Union[str, Expr], ...] = (),
        dialect: Optional[str] = None,
        pagination: Optional[Pagination] = None,
        values: Tuple[Tuple[str, Any], ...] = (),
        unions: Tuple[UnionMember, ...] = (),
    ) -> None:
        self.kind = kind
        self.selects = tuple(selects)
        self.table = table
        self.subquery = subquery
        self.alias = alias
        self.joins = joins
        self.cond = cond if cond is not None else Condition()
        self.group_by_clause = group_by
        self.having_cond = having
        self.order_by_items = order_by
        self.dialect = dialect
        self.pagination = pagination
        self.values = values
        self.unions = unions

    # Composition -------------------------------------------------------
    def select(self, *columns: str) -> "Builder":
        return self._clone(selects=columns)

    def from_(self, source: Source, alias: str = "") -> "Builder":
        if isinstance(source, Builder):
            return self._clone(table=None, subquery=source, alias=alias)
        return self._clone(table=source, subquery=None, alias=alias)

    def into(self, table: str) -> "Builder":
        return self._clone(table=table, subquery=None, alias="")

    def wrap(self, *columns: str, alias: str = "") -> "Builder":
        """
        Return a SELECT of ``columns`` reading from this statement as a derived table.
        """

        return Builder(
            StatementKind.SELECT,
            selects=columns,
            subquery=self,
            alias=alias,
            dialect=self.dialect,
        )

    def join(self, join_type: str, source: Source, on: Any = None, alias: str = "") -> "Builder":
        join = Join(join_type.strip().upper(), source, as_condition(on), alias)
        return self._clone(joins=self.joins + (join,))

    def inner_join(self, source: Source, on: Any, alias: str = "") -> "Builder":
        return self.join("INNER", source, on, alias)

    def left_join(self, source: Source, on: Any, alias: str = "") -> "Builder":
        return self.join("LEFT", source, on, alias)

    def right_join(self, source: Source, on: Any, alias: str = "") -> "Builder":
        return self.join("RIGHT", source, on, alias)

    def full_join(self, source: Source, on: Any, alias: str = "") -> "Builder":
        return self.join("FULL", source, on, alias)

    def cross_join(self, source: Source, alias: str = "") -> "Builder":
        return self.join("CROSS", source, None, alias)

    def where(self, *conds: Any) -> "Builder":
        return self._clone(cond=And(self.cond, *(as_condition(cond) for cond in conds)))

    and_where = where

    def or_where(self, cond: Any) -> "Builder":
        return self._clone(cond=self.cond | as_condition(cond))

    def group_by(self, clause: str) -> "Builder":
        return self._clone(group_by=clause)

    def having(self, clause: Union[str, Condition]) -> "Builder":
        if not isinstance(clause, (str, Condition)):
            raise TypeError("having() accepts a SQL string or a Condition")
        return self._clone(having=as_condition(clause))

    def order_by(self, *orders: Union[str, Expr]) -> "Builder":
        for order in orders:
            if not isinstance(order, (str, Expr)):
                raise TypeError("order_by() accepts SQL strings or Expr fragments")
        return self._clone(order_by=self.order_by_items + tuple(orders))

    def limit(
        self,
        count: int,
        offset: int = 0,
        *,
        primary_key: Optional[str] = None,
        style: Optional[str] = None,
    ) -> "Builder":
        pagination = Pagination(count=count, offset=offset, style=style, primary_key=primary_key)
        return self._clone(pagination=pagination)

    def without_pagination(self) -> "Builder":
        return self._clone(pagination=None)

    def without_order_by(self) -> "Builder":
        return self._clone(order_by=())

    def union(self, union_type: str, other: "Builder") -> "Builder":
        if self.kind is StatementKind.UNION:
            return self._clone(unions=self.unions + (UnionMember(union_type, other),))
        members = (UnionMember("", self), UnionMember(union_type, other))
        return Builder(
            StatementKind.UNION,
            selects=self.selects,
            unions=members,
            dialect=self.dialect,
        )

    def with_dialect(self, dialect: Optional[str]) -> "Builder":
        return self._clone(dialect=dialect)

    def can_be_subquery(self) -> bool:
        return self.kind in SUBQUERY_KINDS

    # Rendering ---------------------------------------------------------
    def write_to(self, writer: Writer) -> None:
        if self.pagination is not None:
            PaginatedQuery(self.without_pagination(), self.pagination).write_to(writer)
            return
        if self.kind is StatementKind.SELECT:
            self._write_select(writer)
        elif self.kind is StatementKind.UNION:
            self._write_union(writer)
        elif self.kind is StatementKind.INSERT:
            self._write_insert(writer)
        elif self.kind is StatementKind.UPDATE:
            self._write_update(writer)
        elif self.kind is StatementKind.DELETE:
            self._write_delete(writer)
        else:
            raise BuilderError(f"Unknown statement kind '{self.kind}'")

    def to_sql(self, *, native_placeholders: bool = False) -> Tuple[str, List[Any]]:
        """
        Render into a fresh writer and return ``(sql, args)``.

        With ``native_placeholders`` the ``?`` markers are rewritten into the
        placeholder style of the builder's dialect.
        """

        settings = get_settings()
        writer = SQLWriter()
        with time_call(f"to_sql[{self.kind.value}]", logger, threshold_ms=settings.slow_render_ms) as timer:
            try:
                self.write_to(writer)
            except BuilderError as exc:
                writer.reset()
                logger.debug("Rendering %s statement failed: %s", self.kind.value, exc)
                raise
            sql, args = writer.text, writer.args
            timer.statement = sql
        if native_placeholders:
            sql = convert_placeholders(sql, self.dialect)
        logger.debug(
            "Rendered %s statement: %s",
            self.kind.value,
            sql,
            extra={"sql": sql, "params": describe_args(args, include_values=settings.log_params)},
        )
        return sql, args

    def _write_select(self, writer: Writer) -> None:
        writer.write("SELECT ")
        writer.write(", ".join(self.selects) if self.selects else "*")
        self._write_source(writer)
        for join in self.joins:
            self._write_join(writer, join)
        self._write_where(writer)
        if self.group_by_clause:
            writer.write(f" GROUP BY {self.group_by_clause}")
        if self.having_cond is not None and self.having_cond.is_valid():
            writer.write(" HAVING ")
            self.having_cond.write_to(writer)
        self._write_order_by(writer)

    def _write_source(self, writer: Writer) -> None:
        if self.subquery is None:
            if not self.table:
                raise NoTableNameError()
            writer.write(f" FROM {self.table}")
            if self.alias:
                writer.write(f" {self.alias}")
            return
        if self.cond.is_valid() and not self.alias:
            raise UnnamedDerivedTableError()
        writer.write(" FROM ")
        write_subquery(writer, self._adopt(self.subquery))
        if self.alias:
            writer.write(f" {self.alias}")

    def _write_join(self, writer: Writer, join: Join) -> None:
        writer.write(f" {join.join_type} JOIN ")
        if isinstance(join.source, Builder):
            if not join.alias:
                raise UnnamedDerivedTableError("Joined derived table must be aliased")
            write_subquery(writer, self._adopt(join.source))
        else:
            writer.write(join.source)
        if join.alias:
            writer.write(f" {join.alias}")
        if join.on.is_valid():
            writer.write(" ON ")
            join.on.write_to(writer)

    def _write_where(self, writer: Writer) -> None:
        if self.cond.is_valid():
            writer.write(" WHERE ")
            self.cond.write_to(writer)

    def _write_order_by(self, writer: Writer) -> None:
        if not self.order_by_items:
            return
        writer.write(" ORDER BY ")
        for idx, order in enumerate(self.order_by_items):
            if idx:
                writer.write(", ")
            if isinstance(order, Expr):
                order.write_to(writer)
            else:
                writer.write(order)

    def _write_union(self, writer: Writer) -> None:
        for idx, member in enumerate(self.unions):
            query = member.query
            if query.kind is not StatementKind.SELECT:
                raise UnsupportedUnionMembersError()
            query = self._adopt(query)
            if len(self.unions) == 1:
                query.write_to(writer)
                break
            if idx:
                keyword = f"UNION {member.union_type.strip().upper()}".rstrip()
                writer.write(f" {keyword} ")
            inner = SQLWriter()
            query.write_to(inner)
            writer.write(f"({inner.text})")
            writer.extend(inner.args)
        self._write_order_by(writer)

    def _require_table(self) -> str:
        if self.subquery is not None or not self.table:
            raise NoTableNameError()
        return self.table

    def _write_insert(self, writer: Writer) -> None:
        table = self._require_table()
        if not self.values:
            raise NoColumnToInsertError()
        columns = ", ".join(column for column, _ in self.values)
        writer.write(f"INSERT INTO {table} ({columns}) VALUES (")
        for idx, (_, value) in enumerate(self.values):
            if idx:
                writer.write(", ")
            self._write_assigned_value(writer, value)
        writer.write(")")

    def _write_update(self, writer: Writer) -> None:
        table = self._require_table()
        if not self.values:
            raise NoColumnToUpdateError()
        writer.write(f"UPDATE {table} SET ")
        for idx, (column, value) in enumerate(self.values):
            if idx:
                writer.write(", ")
            writer.write(f"{column}=")
            self._write_assigned_value(writer, value)
        self._write_where(writer)

    def _write_delete(self, writer: Writer) -> None:
        table = self._require_table()
        writer.write(f"DELETE FROM {table}")
        self._write_where(writer)

    def _write_assigned_value(self, writer: Writer, value: Any) -> None:
        if isinstance(value, Expr):
            value.write_to(writer)
        elif isinstance(value, Builder):
            write_subquery(writer, self._adopt(value))
        else:
            writer.write("?")
            writer.append(value)

    # Internal helpers --------------------------------------------------
    def _adopt(self, nested: "Builder") -> "Builder":
        """
        Check dialect agreement with a nested statement; an unset nested
        dialect inherits ours.
        """

        if self.dialect and nested.dialect:
            outer = canonical_dialect_name(self.dialect)
            inner = canonical_dialect_name(nested.dialect)
            if outer != inner:
                raise InconsistentDialectError(outer, inner)
            return nested
        if self.dialect and not nested.dialect:
            return nested.with_dialect(self.dialect)
        return nested

    def _clone(self, **overrides: Any) -> "Builder":
        params = {
            "selects": overrides.get("selects", self.selects),
            "table": overrides.get("table", self.table),
            "subquery": overrides.get("subquery", self.subquery),
            "alias": overrides.get("alias", self.alias),
            "joins": overrides.get("joins", self.joins),
            "cond": overrides.get("cond", self.cond),
            "group_by": overrides.get("group_by", self.group_by_clause),
            "having": overrides.get("having", self.having_cond),
            "order_by": overrides.get("order_by", self.order_by_items),
            "dialect": overrides.get("dialect", self.dialect),
            "pagination": overrides.get("pagination", self.pagination),
            "values": overrides.get("values", self.values),
            "unions": overrides.get("unions", self.unions),
        }
        return Builder(self.kind, **params)

    def __repr__(self) -> str:
        source = self.table if self.subquery is None else f"<{self.subquery.kind.value}>"
        return f"Builder(kind={self.kind.value!r}, source={source!r}, dialect={self.dialect!r})"


class BuilderFactory:
    """
    Statement factories bound to a dialect tag.
    """

    def __init__(self, dialect: Optional[str] = None) -> None:
        self.dialect = dialect

    def select(self, *columns: str) -> Builder:
        return Builder(StatementKind.SELECT, selects=columns, dialect=self.dialect)

    def insert(self, *values: Any, **columns: Any) -> Builder:
        pairs = _assignment_pairs(values, columns)
        return Builder(StatementKind.INSERT, values=pairs, dialect=self.dialect)

    def update(self, *assignments: Any, **columns: Any) -> Builder:
        pairs = _assignment_pairs(assignments, columns)
        return Builder(StatementKind.UPDATE, values=pairs, dialect=self.dialect)

    def delete(self, *conds: Any) -> Builder:
        builder = Builder(StatementKind.DELETE, dialect=self.dialect)
        return builder.where(*conds) if conds else builder


_default_factory = BuilderFactory()

select = _default_factory.select
insert = _default_factory.insert
update = _default_factory.update
delete = _default_factory.delete


def for_dialect(dialect: str) -> BuilderFactory:
    return BuilderFactory(dialect)
