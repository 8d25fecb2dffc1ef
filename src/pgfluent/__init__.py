"""
pgfluent - fluent PostgreSQL statement builder

Code is organized in layers
- config/ and connection/ as the interface to profiles and psycopg
- primitives/ wraps cursors in low-level execute/fetch functions
- query/ is the fluent builder that assembles and runs one statement
"""

# Layer 1: Core connectivity
from pgfluent.config import load_profile, list_profiles
from pgfluent.connection import PostgresConnector
from pgfluent.context import PostgresContext

# Layer 2: Primitives
from pgfluent.primitives import (
    QueryResult,
    Executor,
    execute_sql,
    fetch_one,
    fetch_all,
    fetch_records,
    fetch_df,
)

# Layer 3: Statement builder
from pgfluent.query import QueryBuilder, Statement, Action, new
from pgfluent.records import Record, RecordList, ValueKind, kind_of
from pgfluent.exceptions import (
    PgFluentError,
    BadTypeError,
    NotFoundError,
    UnknownActionError,
    TooManyArgumentsError,
    PlaceholderMismatchError,
)
from pgfluent.session import Session, create_session

__version__ = "0.1.0"
__all__ = [
    # Layer 1: Configuration & Connection
    "load_profile",
    "list_profiles",
    "PostgresConnector",
    "PostgresContext",
    # Layer 2: Execution
    "QueryResult",
    "Executor",
    "execute_sql",
    "fetch_one",
    "fetch_all",
    "fetch_records",
    "fetch_df",
    # Layer 3: Builder
    "QueryBuilder",
    "Statement",
    "Action",
    "new",
    "Record",
    "RecordList",
    "ValueKind",
    "kind_of",
    "Session",
    "create_session",
    # Errors
    "PgFluentError",
    "BadTypeError",
    "NotFoundError",
    "UnknownActionError",
    "TooManyArgumentsError",
    "PlaceholderMismatchError",
]
