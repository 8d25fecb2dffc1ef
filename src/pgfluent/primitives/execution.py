"""SQL execution primitives.

Plain functions and a small Executor for running SQL with positional
``$N`` bindings. These are thin wrappers around DB-API cursor operations.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence, Union

import pandas as pd

from pgfluent.context import PostgresContext
from pgfluent.primitives.result import QueryResult
from pgfluent.records import Record

logger = logging.getLogger(__name__)


def _as_context(source: Any, **overrides: Any) -> PostgresContext:
    """Accept a profile name, a PostgresContext or a bare connection"""
    if isinstance(source, str):
        return PostgresContext(profile=source, **overrides)
    if isinstance(source, PostgresContext):
        return source
    return PostgresContext(connection=source)


class Executor:
    """Run statements against one context, one fresh cursor per statement"""

    def __init__(self, context: Union[str, PostgresContext, Any], **overrides: Any):
        """Initialize with a profile name, a PostgresContext or an open connection"""
        self.context = _as_context(context, **overrides)
        self._owns_context = isinstance(context, str)

    def run(
        self,
        sql: str,
        bindings: Optional[Sequence[Any]] = None,
    ) -> QueryResult:
        """Execute SQL and return a QueryResult owning the cursor.

        The cursor is closed here if execution fails, otherwise the caller
        releases it through the QueryResult.
        """
        cursor = self.context.cursor()
        logger.debug("Executing statement with %d bindings", len(bindings or ()))
        try:
            if bindings is None:
                cursor.execute(sql)
            else:
                cursor.execute(sql, list(bindings))
        except BaseException:
            cursor.close()
            raise
        return QueryResult(_cursor=cursor, statement=sql)

    def close(self) -> None:
        """Close the context if it was created from a profile name here"""
        if self._owns_context:
            self.context.close()


@contextmanager
def _run(
    sql: str,
    context: Union[str, PostgresContext],
    bindings: Optional[Sequence[Any]],
    overrides: dict[str, Any],
) -> Iterator[QueryResult]:
    executor = Executor(context, **overrides)
    try:
        with executor.run(sql, bindings) as result:
            yield result
    finally:
        executor.close()


def execute_sql(
    sql: str,
    context: Union[str, PostgresContext],
    bindings: Optional[Sequence[Any]] = None,
    **overrides: Any
) -> int:
    """Execute a statement and return the affected row count.

    Use for: DDL (CREATE/DROP/ALTER), DML (INSERT/UPDATE/DELETE)

    Example:
        >>> execute_sql("DELETE FROM sessions WHERE expires_at < now()", context="main")
        12

    Raises:
        psycopg.Error: Any driver error, unchanged
    """
    with _run(sql, context, bindings, overrides) as result:
        return result.rowcount


def fetch_one(
    sql: str,
    context: Union[str, PostgresContext],
    bindings: Optional[Sequence[Any]] = None,
    **overrides: Any
) -> Optional[tuple[Any, ...]]:
    """Execute query and return first row as tuple, or None if no results

    Example:
        >>> fetch_one("SELECT count(*) FROM users WHERE age > $1", "main", [18])
        (42,)
    """
    with _run(sql, context, bindings, overrides) as result:
        return result.fetch_one()


def fetch_all(
    sql: str,
    context: Union[str, PostgresContext],
    bindings: Optional[Sequence[Any]] = None,
    **overrides: Any
) -> list[tuple[Any, ...]]:
    """Execute query and return all rows as list of tuples.

    Warning:
        Loads all results into memory.
    """
    with _run(sql, context, bindings, overrides) as result:
        return result.fetch_all()


def fetch_records(
    sql: str,
    context: Union[str, PostgresContext],
    bindings: Optional[Sequence[Any]] = None,
    **overrides: Any
) -> list[Record]:
    """Execute query and return all rows as Records keyed by column name"""
    with _run(sql, context, bindings, overrides) as result:
        return result.fetch_records()


def fetch_df(
    sql: str,
    context: Union[str, PostgresContext],
    bindings: Optional[Sequence[Any]] = None,
    lowercase_columns: bool = False,
    **overrides: Any
) -> pd.DataFrame:
    """Execute query and return a pandas DataFrame.

    Example:
        >>> df = fetch_df("SELECT * FROM sales WHERE day > $1", "main", ["2025-01-01"])
        >>> df.shape
        (1500, 8)
    """
    with _run(sql, context, bindings, overrides) as result:
        return result.to_df(lowercase_columns=lowercase_columns)
