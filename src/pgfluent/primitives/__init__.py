"""Primitive operations to wrap direct PostgreSQL cursor calls"""

from pgfluent.primitives.result import QueryResult

from pgfluent.primitives.execution import (
    Executor,
    execute_sql,
    fetch_one,
    fetch_all,
    fetch_records,
    fetch_df,
)

__all__ = [
    "QueryResult",
    # Execution
    "Executor",
    "execute_sql",
    "fetch_one",
    "fetch_all",
    "fetch_records",
    "fetch_df",
]
