import pytest

from blazesql import (
    Eq,
    InvalidPaginationError,
    Pagination,
    Settings,
    SQLWriter,
    UnsupportedPaginationError,
    configure,
    for_dialect,
    insert,
    paginate,
    select,
)
from blazesql.config import reset_settings

DIALECTS = ["sqlite", "mysql", "postgres", "oracle", "mssql", "unknown-db"]


@pytest.fixture(autouse=True)
def isolated_settings():
    configure(Settings())
    yield
    reset_settings()


@pytest.mark.parametrize("dialect", ["sqlite", "mysql", "postgres"])
def test_native_limit_without_offset(dialect):
    query = for_dialect(dialect).select("a", "b").from_("t").where(Eq(x=1)).limit(10)
    sql, args = query.to_sql()
    assert sql == "SELECT a, b FROM t WHERE x=? LIMIT 10"
    assert sql.count("LIMIT") == 1
    assert args == [1]


@pytest.mark.parametrize("dialect", ["sqlite", "mysql", "postgres"])
def test_native_limit_with_offset(dialect):
    query = for_dialect(dialect).select("a").from_("t").order_by("a").limit(10, 20)
    sql, args = query.to_sql()
    assert sql == "SELECT a FROM t ORDER BY a LIMIT 10 OFFSET 20"
    assert args == []


@pytest.mark.parametrize("style", [" PostgreSQL ", "SQLITE3", "MySQL"])
def test_style_tokens_are_normalized(style):
    sql, _ = select("a").from_("t").limit(5, style=style).to_sql()
    assert sql == "SELECT a FROM t LIMIT 5"


def test_explicit_style_overrides_builder_dialect():
    sql, _ = for_dialect("oracle").select("a").from_("t").limit(5, style="sqlite").to_sql()
    assert sql == "SELECT a FROM t LIMIT 5"


def test_limit_on_union():
    query = (
        for_dialect("sqlite")
        .select("id")
        .from_("a")
        .where(Eq(k=1))
        .union("all", select("id").from_("b").where(Eq(k=2)))
        .limit(3)
    )
    sql, args = query.to_sql()
    assert sql == "(SELECT id FROM a WHERE k=?) UNION ALL (SELECT id FROM b WHERE k=?) LIMIT 3"
    assert args == [1, 2]


def test_limited_union_member():
    query = (
        for_dialect("mysql")
        .select("id")
        .from_("a")
        .limit(2)
        .union("all", select("id").from_("b"))
    )
    sql, _ = query.to_sql()
    assert sql == "(SELECT id FROM a LIMIT 2) UNION ALL (SELECT id FROM b)"


@pytest.mark.parametrize("dialect", DIALECTS)
@pytest.mark.parametrize("count, offset", [(0, 0), (-1, 0), (5, -1), (0, 3)])
def test_invalid_window_raises_for_every_dialect(dialect, count, offset):
    query = for_dialect(dialect).select("a").from_("t").limit(count, offset, primary_key="id")
    with pytest.raises(InvalidPaginationError):
        query.to_sql()


@pytest.mark.parametrize("count, offset", [(True, 0), (2.5, 0), (5, "1")])
def test_non_integer_window_raises(count, offset):
    with pytest.raises(InvalidPaginationError):
        for_dialect("sqlite").select("a").from_("t").limit(count, offset).to_sql()


def test_limit_on_non_select_raises():
    with pytest.raises(InvalidPaginationError):
        for_dialect("sqlite").insert(a=1).into("t").limit(5).to_sql()
    with pytest.raises(InvalidPaginationError):
        insert(a=1).into("t").limit(5).to_sql()


def test_unknown_dialect_raises():
    with pytest.raises(UnsupportedPaginationError):
        for_dialect("db2").select("a").from_("t").limit(5).to_sql()


def test_unknown_dialect_only_matters_for_pagination():
    sql, _ = for_dialect("db2").select("a").from_("t").to_sql()
    assert sql == "SELECT a FROM t"


def test_missing_dialect_raises():
    with pytest.raises(UnsupportedPaginationError):
        select("a").from_("t").limit(5).to_sql()


def test_default_dialect_from_settings():
    configure(Settings(default_dialect="postgres"))
    sql, _ = select("a").from_("t").limit(5, 5).to_sql()
    assert sql == "SELECT a FROM t LIMIT 5 OFFSET 5"


def test_paginated_subquery():
    inner = for_dialect("mysql").select("a").from_("t").where(Eq(x=1)).limit(5)
    sql, args = select("sub.a").from_(inner, "sub").where(Eq(y=2)).to_sql()
    assert sql == "SELECT sub.a FROM (SELECT a FROM t WHERE x=? LIMIT 5) sub WHERE y=?"
    assert args == [1, 2]


def test_paginated_subquery_inherits_outer_dialect():
    inner = select("a").from_("t").limit(5)
    sql, _ = for_dialect("sqlite").select("sub.a").from_(inner, "sub").to_sql()
    assert sql == "SELECT sub.a FROM (SELECT a FROM t LIMIT 5) sub"


def test_rendering_does_not_consume_pagination():
    query = for_dialect("postgres").select("a").from_("t").where(Eq(x=1)).limit(10, 5)
    first = query.to_sql()
    second = query.to_sql()
    assert first == second
    assert query.pagination == Pagination(count=10, offset=5)


def test_failed_pagination_leaves_writer_empty():
    writer = SQLWriter()
    with pytest.raises(InvalidPaginationError):
        for_dialect("sqlite").select("a").from_("t").where(Eq(x=1)).limit(0).write_to(writer)
    assert writer.text == ""
    assert writer.args == []


def test_paginate_function():
    query = for_dialect("mysql").select("a").from_("t").where(Eq(x=1))
    assert paginate(query, Pagination(count=3, offset=6)) == ("SELECT a FROM t WHERE x=? LIMIT 3 OFFSET 6", [1])
    assert query.to_sql() == ("SELECT a FROM t WHERE x=?", [1])


def test_pagination_validate():
    Pagination(count=1).validate()
    with pytest.raises(InvalidPaginationError):
        Pagination(count=1, offset=-5).validate()
