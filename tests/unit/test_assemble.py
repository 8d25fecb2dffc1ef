"""Tests for statement assembly.

Assembly is pure, so these tests need no connection at all.
"""

import pytest

from pgfluent.exceptions import (
    PlaceholderMismatchError,
    TooManyArgumentsError,
    UnknownActionError,
)
from pgfluent.query.assemble import Statement, assemble, build_statement
from pgfluent.query.state import Action, BuilderState


class TestAssembleSelect:
    """SELECT shapes"""

    def test_star_without_alias(self):
        state = BuilderState(action=Action.SELECT, table="users")

        assert assemble(state).sql == "SELECT *\nFROM users"

    def test_alias_star_without_columns(self):
        state = BuilderState(action=Action.SELECT, table="users", alias="u")

        assert assemble(state).sql == "SELECT u.*\nFROM users AS u"

    def test_explicit_columns(self):
        state = BuilderState(
            action=Action.SELECT, table="users", alias="u", columns=["u.id", "u.name"]
        )

        assert assemble(state).sql.startswith("SELECT u.id, u.name\nFROM users AS u")

    def test_clause_order(self):
        state = BuilderState(
            action=Action.SELECT,
            table="orders",
            alias="o",
            columns=["o.user_id", "SUM(o.total) AS spent"],
            joins=["INNER JOIN users AS u ON u.id = o.user_id"],
            where="o.status = $1",
            group_by="GROUP BY o.user_id",
            having="SUM(o.total) > $2",
            order_by=["spent DESC"],
            offset=20,
            limit=10,
            params=["paid", 100],
        )

        assert assemble(state).sql == (
            "SELECT o.user_id, SUM(o.total) AS spent\n"
            "FROM orders AS o\n"
            "INNER JOIN users AS u ON u.id = o.user_id\n"
            "WHERE o.status = $1\n"
            "GROUP BY o.user_id\n"
            "HAVING SUM(o.total) > $2\n"
            "ORDER BY spent DESC\n"
            "OFFSET 20\n"
            "LIMIT 10"
        )

    def test_zero_limit_and_offset_are_omitted(self):
        state = BuilderState(action=Action.SELECT, table="users", limit=0, offset=0)
        sql = assemble(state).sql

        assert "LIMIT" not in sql
        assert "OFFSET" not in sql

    def test_multiple_sort_keys_render_one_clause(self):
        state = BuilderState(
            action=Action.SELECT, table="users", order_by=["last_name ASC", "first_name DESC"]
        )

        assert assemble(state).sql.endswith("ORDER BY last_name ASC, first_name DESC")

    def test_params_are_copied_into_statement(self):
        state = BuilderState(action=Action.SELECT, table="users", where="id = $1", params=[7])
        statement = assemble(state)

        assert statement.params == (7,)
        state.params.append(8)
        assert statement.params == (7,)


class TestAssembleInsert:
    """INSERT shapes"""

    def test_single_values_tuple(self):
        state = BuilderState(
            action=Action.INSERT,
            table="users",
            columns=["name", "email"],
            params=["jv", "jv@example.com"],
        )

        assert assemble(state).sql == (
            "INSERT INTO users\n(name, email)\nVALUES\n($1, $2)"
        )

    def test_alias_qualifies_columns(self):
        state = BuilderState(
            action=Action.INSERT, table="users", alias="u", columns=["name"], params=["jv"]
        )

        assert assemble(state).sql == "INSERT INTO users AS u\n(u.name)\nVALUES\n($1)"

    def test_values_tuple_sized_by_params(self):
        state = BuilderState(
            action=Action.INSERT, table="t", columns=["a"], params=[1, 2, 3]
        )

        assert assemble(state).sql.endswith("($1, $2, $3)")


class TestAssembleUpdate:
    """UPDATE shapes"""

    def test_set_pairs_and_where(self):
        state = BuilderState(
            action=Action.UPDATE,
            table="users",
            columns=["name", "email"],
            params=["jv", "jv@example.com", "old"],
            where="name = $3",
        )

        assert assemble(state).sql == (
            "UPDATE users\nSET\nname=$1,\nemail=$2\nWHERE name = $3"
        )

    def test_alias_qualifies_set_columns(self):
        state = BuilderState(
            action=Action.UPDATE, table="users", alias="u", columns=["name"], params=["jv"]
        )

        assert assemble(state).sql == "UPDATE users AS u\nSET\nu.name=$1"

    def test_too_many_columns_raises(self):
        state = BuilderState(
            action=Action.UPDATE, table="users", columns=["name", "email"], params=["jv"]
        )

        with pytest.raises(TooManyArgumentsError, match="too many arguments"):
            assemble(state)

    def test_set_numbering_ignores_where_position(self):
        # SET always counts from $1, even when WHERE values were bound first
        state = BuilderState(
            action=Action.UPDATE,
            table="users",
            columns=["name"],
            params=[5, "jv"],
            where="id = $1",
        )

        assert "name=$1" in assemble(state).sql


class TestAssembleDelete:
    """DELETE shapes"""

    def test_with_where(self):
        state = BuilderState(action=Action.DELETE, table="users", where="name = $1", params=["jv"])

        assert assemble(state).sql == "DELETE FROM users\nWHERE name = $1"

    def test_without_where(self):
        state = BuilderState(action=Action.DELETE, table="users", alias="u")

        assert assemble(state).sql == "DELETE FROM users"


class TestAssembleErrors:
    """Dispatch failures"""

    def test_unset_action_raises(self):
        with pytest.raises(UnknownActionError, match="unknown action"):
            assemble(BuilderState(table="users"))

    def test_unrecognized_action_raises(self):
        state = BuilderState(table="users")
        state.action = "MERGE"  # type: ignore[assignment]

        with pytest.raises(UnknownActionError):
            assemble(state)


class TestBuildStatement:
    """Raw SQL bypass and deferred placeholder errors"""

    def test_raw_sql_skips_assembly(self):
        state = BuilderState(raw_sql="SELECT now() WHERE $1", params=[True])

        assert build_statement(state) == Statement("SELECT now() WHERE $1", (True,))

    def test_raw_sql_wins_over_action(self):
        state = BuilderState(action=Action.DELETE, table="users", raw_sql="SELECT 1")

        assert build_statement(state).sql == "SELECT 1"

    def test_empty_raw_sql_is_still_raw(self):
        state = BuilderState(action=Action.SELECT, table="users", raw_sql="")

        assert state.is_raw
        assert not BuilderState().is_raw
        assert build_statement(state) == Statement("", ())

    def test_placeholder_errors_raise(self):
        state = BuilderState(
            action=Action.SELECT, table="users", placeholder_errors=["too many values"]
        )

        with pytest.raises(PlaceholderMismatchError, match="too many values"):
            build_statement(state)


class TestStatement:
    """Statement value object"""

    def test_returning_appends_clause(self):
        statement = Statement("INSERT INTO users\n(name)\nVALUES\n($1)", ("jv",))
        returning = statement.returning("id")

        assert returning.sql.endswith("\nRETURNING id")
        assert returning.params == ("jv",)
        assert statement.sql.endswith("($1)")
