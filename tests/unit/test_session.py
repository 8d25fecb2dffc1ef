"""Unit tests for Session class"""

import pandas as pd
import pytest
from unittest.mock import MagicMock, patch

from pgfluent.context import PostgresContext
from pgfluent.query import QueryBuilder
from pgfluent.session import Session, create_session


class TestSessionInit:
    """Test Session construction"""

    def test_requires_profile_or_context(self):
        with pytest.raises(ValueError, match="requires either 'profile' or 'context'"):
            Session()

    def test_rejects_both(self):
        with pytest.raises(ValueError, match="not both"):
            Session(profile="dev", context=MagicMock(spec=PostgresContext))

    @patch("pgfluent.session.PostgresContext")
    def test_profile_creates_owned_context(self, mock_ctx_class):
        session = Session(profile="dev", dbname="other")

        mock_ctx_class.assert_called_once_with(profile="dev", dbname="other")
        assert session.context is mock_ctx_class.return_value

    def test_create_session_factory(self):
        ctx = PostgresContext(connection=MagicMock())

        assert create_session(context=ctx).context is ctx


class TestSessionOperations:
    """Test operations bound to the session context"""

    def test_query_returns_fresh_builders(self):
        session = Session(context=PostgresContext(connection=MagicMock()))

        first, second = session.query(), session.query()

        assert isinstance(first, QueryBuilder)
        assert first is not second

    def test_query_runs_on_session_connection(self, users_cursor, connection_factory):
        session = Session(context=PostgresContext(connection=connection_factory(users_cursor)))

        record = session.query().select("users").where("id = ?", 1).row()

        assert record["name"] == "jv"

    def test_execute_sql(self, cursor_factory, connection_factory):
        cursor = cursor_factory(rowcount=3)
        session = Session(context=PostgresContext(connection=connection_factory(cursor)))

        assert session.execute_sql("UPDATE t SET a = $1", [1]) == 3
        cursor.execute.assert_called_once_with("UPDATE t SET a = $1", [1])
        cursor.close.assert_called_once()

    def test_fetch_df(self, users_cursor, connection_factory):
        session = Session(context=PostgresContext(connection=connection_factory(users_cursor)))

        df = session.fetch_df("SELECT * FROM users")

        assert isinstance(df, pd.DataFrame)
        assert len(df) == 2


class TestSessionLifecycle:
    """Test closing behaviour"""

    @patch("pgfluent.session.PostgresContext")
    def test_close_owned_context(self, mock_ctx_class):
        with Session(profile="dev"):
            pass

        mock_ctx_class.return_value.close.assert_called_once()

    def test_external_context_left_open(self):
        ctx = MagicMock(spec=PostgresContext)

        Session(context=ctx).close()

        ctx.close.assert_not_called()
