import pytest

from blazesql import (
    Eq,
    Expr,
    InconsistentDialectError,
    NoColumnToInsertError,
    NoColumnToUpdateError,
    NoTableNameError,
    UnsupportedUnionMembersError,
    delete,
    for_dialect,
    insert,
    select,
    update,
)


def test_insert_from_condition():
    sql, args = insert(Eq(a=1, b="x")).into("table1").to_sql()
    assert sql == "INSERT INTO table1 (a, b) VALUES (?, ?)"
    assert args == [1, "x"]


def test_insert_mixes_mappings_keywords_and_expressions():
    sql, args = insert({"a": 1}, c=Expr("now()"), d=None).into("t").to_sql()
    assert sql == "INSERT INTO t (a, c, d) VALUES (?, now(), ?)"
    assert args == [1, None]


def test_insert_rejects_non_mapping_values():
    with pytest.raises(TypeError):
        insert(["a", 1])


def test_insert_without_columns_raises():
    with pytest.raises(NoColumnToInsertError):
        insert().into("t").to_sql()


def test_insert_without_table_raises():
    with pytest.raises(NoTableNameError):
        insert(a=1).to_sql()


def test_update_with_condition():
    sql, args = update(Eq(a=2)).from_("table1").where(Eq(a=1)).to_sql()
    assert sql == "UPDATE table1 SET a=? WHERE a=?"
    assert args == [2, 1]


def test_update_with_expression_and_subquery():
    latest = select("max(id)").from_("events").where(Eq(kind="x"))
    sql, args = update(hits=Expr("hits+?", 1), last_id=latest).from_("stats").to_sql()
    assert sql == "UPDATE stats SET hits=hits+?, last_id=(SELECT max(id) FROM events WHERE kind=?)"
    assert args == [1, "x"]


def test_update_without_assignments_raises():
    with pytest.raises(NoColumnToUpdateError):
        update().from_("t").to_sql()


def test_delete():
    sql, args = delete(Eq(a=1)).from_("table1").to_sql()
    assert sql == "DELETE FROM table1 WHERE a=?"
    assert args == [1]

    sql, args = delete().from_("table1").to_sql()
    assert sql == "DELETE FROM table1"
    assert args == []


def test_delete_without_table_raises():
    with pytest.raises(NoTableNameError):
        delete(Eq(a=1)).to_sql()


def test_delete_from_subquery_raises():
    with pytest.raises(NoTableNameError):
        delete().from_(select("id").from_("t"), "x").to_sql()


def test_union_chain_with_ordering():
    query = (
        select("id")
        .from_("t1")
        .where(Eq(a=1))
        .union("all", select("id").from_("t2").where(Eq(a=2)))
        .union("distinct", select("id").from_("t3"))
        .union("", select("id").from_("t4"))
        .order_by("id")
    )
    sql, args = query.to_sql()
    assert sql == (
        "(SELECT id FROM t1 WHERE a=?) UNION ALL (SELECT id FROM t2 WHERE a=?) "
        "UNION DISTINCT (SELECT id FROM t3) UNION (SELECT id FROM t4) ORDER BY id"
    )
    assert args == [1, 2]


def test_union_rejects_non_select_members():
    query = select("id").from_("t1").union("all", delete().from_("t2"))
    with pytest.raises(UnsupportedUnionMembersError):
        query.to_sql()


def test_union_members_must_share_dialect():
    query = (
        for_dialect("mysql")
        .select("id")
        .from_("a")
        .union("all", for_dialect("oracle").select("id").from_("b"))
    )
    with pytest.raises(InconsistentDialectError):
        query.to_sql()


def test_union_keeps_member_builders_untouched():
    first = select("id").from_("t1")
    first.union("all", select("id").from_("t2"))
    assert first.to_sql() == ("SELECT id FROM t1", [])
