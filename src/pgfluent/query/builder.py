"""Fluent builder for parameterized PostgreSQL statements"""

from typing import Any, Mapping, Union

import pandas as pd

from pgfluent.context import PostgresContext
from pgfluent.exceptions import NotFoundError
from pgfluent.primitives.execution import Executor
from pgfluent.query.assemble import Statement, build_statement
from pgfluent.query.placeholders import rewrite_placeholders
from pgfluent.query.state import Action, BuilderState
from pgfluent.records import Record


class QueryBuilder:
    """Accumulate one statement through chained calls, then run it once.

    Configuration calls return the builder itself and never validate.
    Mistakes surface when a terminal call (``row``, ``rows``,
    ``exec_return_id``, ``exec``, ``to_df``) assembles the statement.
    The builder is single-use and not thread-safe: every terminal call
    assembles and executes again.

    ``?`` markers in ``where``, ``having`` and ``sql`` fragments become
    ``$N`` placeholders numbered by how many parameters the builder already
    holds, so fragments must be added in the order their values bind.

    Example:
        >>> (QueryBuilder(conn)
        ...     .select("users").alias("u")
        ...     .columns("u.id", "u.name")
        ...     .where("u.age > ?", 18)
        ...     .order_by("u.name", "ASC")
        ...     .limit(10)
        ...     .rows())

        >>> QueryBuilder(conn).insert("users").columns("name", "email") \\
        ...     .parameters("jv", "jv@example.com").exec_return_id("id")
    """

    def __init__(self, db: Union[PostgresContext, Any]):
        """Bind to a PostgresContext or an open connection; neither is closed here"""
        self._executor = Executor(db)
        self._state = BuilderState()

    @property
    def state(self) -> BuilderState:
        return self._state

    def _rewrite(self, fragment: str, values: tuple[Any, ...]) -> str:
        text, surplus = rewrite_placeholders(fragment, values, self._state.params)
        if surplus:
            self._state.placeholder_errors.append(
                f"fragment {fragment!r} was given {surplus} more value(s) than '?' markers"
            )
        return text

    # Statement kind

    def sql(self, sql: str, *args: Any) -> "QueryBuilder":
        """Use literal SQL instead of assembling; ``?`` markers are still rewritten"""
        self._state.raw_sql = self._rewrite(sql, args)
        return self

    def _action(self, action: Action, table: str) -> "QueryBuilder":
        self._state.action = action
        self._state.table = table
        return self

    def select(self, table: str) -> "QueryBuilder":
        return self._action(Action.SELECT, table)

    def insert(self, table: str) -> "QueryBuilder":
        return self._action(Action.INSERT, table)

    def update(self, table: str) -> "QueryBuilder":
        return self._action(Action.UPDATE, table)

    def delete(self, table: str) -> "QueryBuilder":
        return self._action(Action.DELETE, table)

    def alias(self, alias: str) -> "QueryBuilder":
        self._state.alias = alias
        return self

    # Columns and values

    def columns(self, *columns: str) -> "QueryBuilder":
        """Replace the column list; for INSERT/UPDATE the i-th column binds $i"""
        self._state.columns = list(columns)
        return self

    def parameters(self, *params: Any) -> "QueryBuilder":
        """Replace the parameter list, including values bound by earlier fragments"""
        self._state.params = list(params)
        return self

    def cols_with_params(self, values: Mapping[str, Any]) -> "QueryBuilder":
        """Append columns and their values from one mapping, in iteration order"""
        for key, value in values.items():
            self._state.columns.append(key)
            self._state.params.append(value)
        return self

    # Filtering

    def where(self, where: str, *args: Any) -> "QueryBuilder":
        self._state.where = self._rewrite(where, args)
        return self

    def having(self, having: str, *args: Any) -> "QueryBuilder":
        self._state.having = self._rewrite(having, args)
        return self

    # Joins

    def join(self, join: str, table: str, alias: str, condition: str) -> "QueryBuilder":
        """Add ``<join> JOIN <table> AS <alias> ON <condition>``"""
        self._state.joins.append(f"{join} JOIN {table} AS {alias} ON {condition}")
        return self

    def inner_join(self, table: str, alias: str, condition: str) -> "QueryBuilder":
        return self.join("INNER", table, alias, condition)

    def left_join(self, table: str, alias: str, condition: str) -> "QueryBuilder":
        return self.join("LEFT", table, alias, condition)

    def right_join(self, table: str, alias: str, condition: str) -> "QueryBuilder":
        return self.join("RIGHT", table, alias, condition)

    # Ordering, grouping, paging

    def order_by(self, column: str, direction: str = "ASC") -> "QueryBuilder":
        """Append a sort key; repeated calls add keys in call order"""
        self._state.order_by.append(f"{column} {direction}")
        return self

    def group_by(self, *columns: str) -> "QueryBuilder":
        """Set the GROUP BY clause, replacing any earlier one"""
        self._state.group_by = "GROUP BY " + ", ".join(columns)
        return self

    def limit(self, limit: int) -> "QueryBuilder":
        self._state.limit = limit
        return self

    def offset(self, offset: int) -> "QueryBuilder":
        self._state.offset = offset
        return self

    # Terminal calls

    def build(self) -> Statement:
        """Statement text and bindings, without touching the connection"""
        return build_statement(self._state)

    def row(self) -> Record:
        """First row of the result keyed by column name.

        Raises:
            NotFoundError: If the query returned no rows
        """
        statement = self.build()
        with self._executor.run(statement.sql, statement.params) as result:
            record = result.fetch_record()
        if record is None:
            raise NotFoundError(f"not found: no rows from {self._state.table or 'statement'}")
        return record

    def rows(self) -> list[Record]:
        """Every row of the result, an empty list when there are none"""
        statement = self.build()
        with self._executor.run(statement.sql, statement.params) as result:
            return result.fetch_records()

    def exec_return_id(self, column: str) -> Any:
        """Execute with ``RETURNING <column>`` and return that single value as-is.

        Raises:
            NotFoundError: If no row came back
        """
        statement = self.build().returning(column)
        with self._executor.run(statement.sql, statement.params) as result:
            return result.fetch_scalar()

    def exec(self) -> None:
        """Execute and discard any result set"""
        statement = self.build()
        with self._executor.run(statement.sql, statement.params):
            pass

    def to_df(self, lowercase_columns: bool = False) -> pd.DataFrame:
        """Every row of the result as a DataFrame"""
        statement = self.build()
        with self._executor.run(statement.sql, statement.params) as result:
            return result.to_df(lowercase_columns=lowercase_columns)

    def __repr__(self) -> str:
        action = self._state.action.value if self._state.action else None
        return f"QueryBuilder(action={action}, table='{self._state.table}')"


def new(db: Union[PostgresContext, Any]) -> QueryBuilder:
    """Create a QueryBuilder bound to a context or connection"""
    return QueryBuilder(db)
