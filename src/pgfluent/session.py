"""Context-bound session for pgfluent operations"""

from typing import Any, Optional, Sequence

import pandas as pd

from pgfluent.context import PostgresContext
from pgfluent.primitives import Executor
from pgfluent.query import QueryBuilder


class Session:
    """Context-bound wrapper providing convenient access to pgfluent operations"""

    def __init__(
        self,
        profile: Optional[str] = None,
        context: Optional[PostgresContext] = None,
        **overrides: Any,
    ):
        """Initialize session with a profile name or existing context"""
        if profile is None and context is None:
            raise ValueError("Session requires either 'profile' or 'context'")
        if profile is not None and context is not None:
            raise ValueError("Provide either 'profile' or 'context', not both")

        if context is not None:
            self._context = context
            self._owns_context = False
        else:
            self._context = PostgresContext(profile=profile, **overrides)
            self._owns_context = True

    @property
    def context(self) -> PostgresContext:
        """Access the underlying PostgresContext"""
        return self._context

    def query(self) -> QueryBuilder:
        """A fresh single-use QueryBuilder on this session's connection"""
        return QueryBuilder(self._context)

    def execute_sql(self, sql: str, bindings: Optional[Sequence[Any]] = None) -> int:
        """Execute SQL and return the affected row count"""
        with Executor(self._context).run(sql, bindings=bindings) as result:
            return result.rowcount

    def fetch_df(self, sql: str, bindings: Optional[Sequence[Any]] = None) -> pd.DataFrame:
        """Execute SQL and return results as a DataFrame"""
        with Executor(self._context).run(sql, bindings=bindings) as result:
            return result.to_df()

    # Lifecycle

    def close(self) -> None:
        """Close the session and underlying context if owned"""
        if self._owns_context:
            self._context.close()

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


def create_session(
    profile: Optional[str] = None,
    context: Optional[PostgresContext] = None,
    **overrides: Any,
) -> Session:
    """Create a context-bound session for pgfluent operations"""
    return Session(profile=profile, context=context, **overrides)
