"""PostgreSQL connection management with profile support."""

import logging
from typing import Optional, Any, Literal

import psycopg

from .base import BaseConnector

logger = logging.getLogger(__name__)


class PostgresConnector(BaseConnector):
    """
    PostgreSQL connection manager with TOML profile support and context manager protocol.

    Connections use ``psycopg.RawCursor`` so statements carry the server's
    native ``$1, $2, ...`` placeholders, which is what QueryBuilder emits.

    Args:
        profile: Name of the profile to load from connections.toml
        **kwargs: Additional connection parameters to override profile settings

    Example:
        >>> with PostgresConnector(profile="dev") as conn:
        ...     QueryBuilder(conn).select("users").rows()

        >>> # Override database from profile
        >>> with PostgresConnector(profile="dev", dbname="reporting") as conn:
        ...     ...
    """

    def __init__(self, profile: str, **kwargs: Any) -> None:
        super().__init__(profile, **kwargs)

        # Connection initialized lazily
        self._connection: Optional[psycopg.Connection] = None

    def connect(self) -> psycopg.Connection:
        """
        Establish the connection if not already connected.

        Statements commit as they run unless the profile sets
        ``autocommit = false``, in which case the caller commits.

        Returns:
            The open psycopg connection
        """
        if self._connection is None:
            kwargs = self.connect_kwargs()
            kwargs.setdefault("autocommit", True)
            self._connection = psycopg.connect(**kwargs, cursor_factory=psycopg.RawCursor)
            logger.info("Connected to PostgreSQL using profile '%s'", self._profile)

        return self._connection

    def close(self) -> None:
        """Close the connection, releasing resources."""
        if self._connection:
            self._connection.close()
            self._connection = None
            logger.info("Closed PostgreSQL connection for profile '%s'", self._profile)

    def __enter__(self) -> psycopg.Connection:
        return self.connect()

    def __exit__(
        self,
        exc_type: Any,
        exc_val: Any,
        exc_tb: Any
    ) -> Literal[False]:
        """
        Context manager exit: close connection.

        Always returns False to propagate any exceptions.
        """
        self.close()
        return False

    def __repr__(self) -> str:
        status = "connected" if self._connection else "not connected"
        return f"PostgresConnector(profile='{self._profile}', {status})"
