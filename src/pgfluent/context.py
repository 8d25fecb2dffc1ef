"""PostgreSQL connection context management"""

import logging
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from pgfluent.connection import PostgresConnector

logger = logging.getLogger(__name__)


class PostgresContext:
    """Manages a PostgreSQL connection lifecycle with lazy initialization.

    You can:
    - Pass a profile name (creates the connection on first use)
    - Pass an existing connection (reused as-is, never closed here)

    Example:
        >>> ctx = PostgresContext(profile="dev")
        >>> QueryBuilder(ctx).select("users").rows()

        >>> with psycopg.connect(dsn, cursor_factory=psycopg.RawCursor) as conn:
        ...     ctx = PostgresContext(connection=conn)
    """

    def __init__(
        self,
        profile: Optional[str] = None,
        connection: Optional[Any] = None,
        **overrides: Any,
    ):
        if profile is None and connection is None:
            raise ValueError(
                "PostgresContext requires either 'profile' or 'connection'. " +
                "Cannot create context without a connection source."
            )
        if profile is not None and connection is not None:
            raise ValueError(
                "PostgresContext: provide either 'profile' or 'connection', not both. " +
                "Use profile for lazy connection creation, or connection for reuse."
            )

        self._profile = profile
        self._connection = connection
        self._overrides = overrides
        self._connector: Optional["PostgresConnector"] = None
        self._owns_connector = False

    @property
    def connection(self) -> Any:
        """Get the PostgreSQL connection, creating it from the profile if needed"""
        if self._connection is None:
            from pgfluent.connection import PostgresConnector

            assert self._profile is not None
            self._connector = PostgresConnector(
                profile=self._profile, **self._overrides
            )
            self._connection = self._connector.connect()
            self._owns_connector = True

        return self._connection

    def cursor(self) -> Any:
        """Open a new cursor on the connection"""
        return self.connection.cursor()

    def close(self) -> None:
        """Close the connection if this context created it.

        Externally provided connections are left open.
        """
        if self._owns_connector and self._connector is not None:
            self._connector.close()
            self._connector = None
            self._connection = None
            self._owns_connector = False

    def __enter__(self) -> "PostgresContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _show(self, sql: str) -> str:
        cur = self.cursor()
        try:
            cur.execute(sql)
            row = cur.fetchone()
        finally:
            cur.close()
        return str(row[0]) if row and row[0] else ""

    @property
    def server_version(self) -> str:
        """Server version as reported by ``SHOW server_version``"""
        return self._show("SHOW server_version")

    @property
    def current_database(self) -> str:
        return self._show("SELECT current_database()")

    @property
    def current_user(self) -> str:
        return self._show("SELECT current_user")

    def __repr__(self) -> str:
        if self._connection is not None:
            return "PostgresContext(connection=<active>)"
        else:
            return f"PostgresContext(profile='{self._profile}')"
