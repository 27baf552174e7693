"""
Boolean condition tree rendering itself into a writer as text plus arguments.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Tuple

from .errors import UnexpectedSubQueryError
from .writer import SQLWriter, Writer

if TYPE_CHECKING:
    from .builder import Builder


AND = "AND"
OR = "OR"
RAW = "RAW"


class Condition:
    """
    Base class for renderable predicates.

    A bare ``Condition()`` is the empty predicate: it renders nothing and
    ``is_valid()`` reports ``False`` so statements can omit their WHERE clause.
    """

    # Connector joining the rendered parts; ``None`` for atomic predicates.
    connector: Optional[str] = None

    def write_to(self, writer: Writer) -> None:
        return None

    def is_valid(self) -> bool:
        return False

    def and_(self, *others: "Condition") -> "Condition":
        return And(self, *others)

    def or_(self, *others: "Condition") -> "Condition":
        return Or(self, *others)

    def __and__(self, other: "Condition") -> "Condition":
        return And(self, other)

    def __or__(self, other: "Condition") -> "Condition":
        return Or(self, other)

    def __invert__(self) -> "Condition":
        return Not(self)

    def to_sql(self) -> Tuple[str, List[Any]]:
        writer = SQLWriter()
        self.write_to(writer)
        return writer.text, writer.args

    def __repr__(self) -> str:
        sql, args = self.to_sql()
        return f"{type(self).__name__}({sql!r}, {args!r})"


def _is_statement(value: Any) -> bool:
    from .builder import Builder

    return isinstance(value, Builder)


def write_subquery(writer: Writer, query: "Builder") -> None:
    """
    Render ``query`` parenthesized, splicing its arguments in text order.
    """

    if not query.can_be_subquery():
        raise UnexpectedSubQueryError(query.kind.value)
    inner = SQLWriter()
    query.write_to(inner)
    writer.write(f"({inner.text})")
    writer.extend(inner.args)


def _write_member(writer: Writer, cond: Condition, parent: Optional[str]) -> None:
    wrap = cond.connector is not None and cond.connector != parent
    if wrap:
        writer.write("(")
    cond.write_to(writer)
    if wrap:
        writer.write(")")


class Expr(Condition):
    """
    Raw SQL fragment carrying its own positional arguments.
    """

    connector = RAW

    def __init__(self, sql: str, *args: Any) -> None:
        self.sql = sql
        self.args = list(args)

    def write_to(self, writer: Writer) -> None:
        writer.write(self.sql)
        writer.extend(self.args)

    def is_valid(self) -> bool:
        return bool(self.sql)


def _write_value(writer: Writer, value: Any) -> None:
    if isinstance(value, Expr):
        writer.write("(")
        value.write_to(writer)
        writer.write(")")
    elif _is_statement(value):
        write_subquery(writer, value)
    else:
        writer.write("?")
        writer.append(value)


class _Comparison(Condition):
    operator = "="
    null_sql: Optional[str] = None

    def __init__(self, mapping: Optional[Mapping[str, Any]] = None, **columns: Any) -> None:
        items: List[Tuple[str, Any]] = []
        if mapping:
            items.extend(mapping.items())
        items.extend(columns.items())
        self.items = items

    @property
    def connector(self) -> Optional[str]:  # type: ignore[override]
        return AND if len(self.items) > 1 else None

    def is_valid(self) -> bool:
        return bool(self.items)

    def write_to(self, writer: Writer) -> None:
        for idx, (column, value) in enumerate(self.items):
            if idx:
                writer.write(" AND ")
            if value is None and self.null_sql is not None:
                writer.write(f"{column} {self.null_sql}")
                continue
            writer.write(f"{column}{self.operator}")
            _write_value(writer, value)


class Eq(_Comparison):
    """``column=value`` for each pair; ``None`` renders ``IS NULL``."""

    operator = "="
    null_sql = "IS NULL"


class Neq(_Comparison):
    operator = "<>"
    null_sql = "IS NOT NULL"


class Lt(_Comparison):
    operator = "<"


class Lte(_Comparison):
    operator = "<="


class Gt(_Comparison):
    operator = ">"


class Gte(_Comparison):
    operator = ">="


class Like(Condition):
    def __init__(self, column: str, pattern: str) -> None:
        self.column = column
        self.pattern = pattern

    def is_valid(self) -> bool:
        return bool(self.column)

    def write_to(self, writer: Writer) -> None:
        writer.write(f"{self.column} LIKE ?")
        writer.append(self.pattern)


class Between(Condition):
    def __init__(self, column: str, low: Any, high: Any) -> None:
        self.column = column
        self.low = low
        self.high = high

    def is_valid(self) -> bool:
        return bool(self.column)

    def write_to(self, writer: Writer) -> None:
        writer.write(f"{self.column} BETWEEN ")
        _write_value(writer, self.low)
        writer.write(" AND ")
        _write_value(writer, self.high)


class IsNull(Condition):
    suffix = "IS NULL"

    def __init__(self, *columns: str) -> None:
        self.columns = list(columns)

    @property
    def connector(self) -> Optional[str]:  # type: ignore[override]
        return AND if len(self.columns) > 1 else None

    def is_valid(self) -> bool:
        return bool(self.columns)

    def write_to(self, writer: Writer) -> None:
        writer.write(" AND ".join(f"{column} {self.suffix}" for column in self.columns))


class NotNull(IsNull):
    suffix = "IS NOT NULL"


class In(Condition):
    """
    Membership test against literal values or a subquery.

    An empty value list can never match and renders ``0=1``.
    """

    keyword = "IN"
    empty_sql = "0=1"

    def __init__(self, column: str, *values: Any) -> None:
        self.column = column
        if len(values) == 1 and isinstance(values[0], (list, tuple, set, frozenset)):
            values = tuple(values[0])
        self.values = values

    def is_valid(self) -> bool:
        return bool(self.column)

    def write_to(self, writer: Writer) -> None:
        if len(self.values) == 1 and _is_statement(self.values[0]):
            writer.write(f"{self.column} {self.keyword} ")
            write_subquery(writer, self.values[0])
            return
        if len(self.values) == 1 and isinstance(self.values[0], Expr):
            writer.write(f"{self.column} {self.keyword} ")
            _write_value(writer, self.values[0])
            return
        if not self.values:
            writer.write(self.empty_sql)
            return
        placeholders = ",".join("?" for _ in self.values)
        writer.write(f"{self.column} {self.keyword} ({placeholders})")
        writer.extend(self.values)


class NotIn(In):
    keyword = "NOT IN"
    empty_sql = "0=0"


class _Compound(Condition):
    joiner = AND

    def __init__(self, *conds: Condition) -> None:
        flattened: List[Condition] = []
        for cond in conds:
            # Same-connector children are merged so rendering stays flat.
            if type(cond) is type(self):
                flattened.extend(cond.conds)  # type: ignore[attr-defined]
            else:
                flattened.append(cond)
        self.conds = flattened

    def _valid(self) -> List[Condition]:
        return [cond for cond in self.conds if cond.is_valid()]

    @property
    def connector(self) -> Optional[str]:  # type: ignore[override]
        valid = self._valid()
        if len(valid) == 1:
            return valid[0].connector
        return self.joiner if valid else None

    def is_valid(self) -> bool:
        return bool(self._valid())

    def write_to(self, writer: Writer) -> None:
        valid = self._valid()
        if len(valid) == 1:
            valid[0].write_to(writer)
            return
        for idx, cond in enumerate(valid):
            if idx:
                writer.write(f" {self.joiner} ")
            _write_member(writer, cond, self.joiner)


class And(_Compound):
    joiner = AND


class Or(_Compound):
    joiner = OR


class Not(Condition):
    def __init__(self, cond: Condition) -> None:
        self.cond = cond

    def is_valid(self) -> bool:
        return self.cond.is_valid()

    def write_to(self, writer: Writer) -> None:
        writer.write("NOT ")
        _write_member(writer, self.cond, None)


def as_condition(value: Any) -> Condition:
    """
    Coerce ``value`` to a condition: strings become :class:`Expr`, mappings :class:`Eq`.
    """

    if value is None:
        return Condition()
    if isinstance(value, Condition):
        return value
    if isinstance(value, str):
        return Expr(value)
    if isinstance(value, Mapping):
        return Eq(value)
    raise TypeError(f"Unsupported condition type: {type(value).__name__}")
