"""A unified, simplified interface for PostgreSQL query results"""
from typing import Any, Optional
from dataclasses import dataclass
import pandas as pd

from pgfluent.exceptions import NotFoundError
from pgfluent.records import Record


@dataclass
class QueryResult:
    """One executed statement and the cursor holding its rows.

    The cursor is released by ``close()`` or by leaving a ``with`` block.
    """
    _cursor: Any
    statement: str = ""

    @property
    def rowcount(self) -> int:
        """The number of rows affected or returned"""
        return self._cursor.rowcount if self._cursor.rowcount is not None else -1

    @property
    def sql(self) -> str:
        """The SQL statement that was executed"""
        return self.statement

    @property
    def description(self) -> Optional[list[Any]]:
        """A description of the result columns, None for statements without rows"""
        return self._cursor.description

    @property
    def columns(self) -> list[str]:
        """Result column names in select-list order"""
        if not self._cursor.description:
            return []
        return [desc[0] for desc in self._cursor.description]

    def fetch_one(self) -> Optional[tuple[Any, ...]]:
        """Fetch the next row of a query result set"""
        return self._cursor.fetchone()

    def fetch_all(self) -> list[tuple[Any, ...]]:
        """Fetch all remaining rows of a query result set"""
        result = self._cursor.fetchall()
        return result if result else []

    def fetch_record(self) -> Optional[Record]:
        """Fetch the next row keyed by column name, None when exhausted"""
        row = self._cursor.fetchone()
        if row is None:
            return None
        return Record.from_row(self.columns, row)

    def fetch_records(self) -> list[Record]:
        """Fetch all remaining rows keyed by column name"""
        columns = self.columns
        return [Record.from_row(columns, row) for row in self.fetch_all()]

    def fetch_scalar(self) -> Any:
        """First column of the next row.

        Raises:
            NotFoundError: If the statement produced no row
        """
        row = self._cursor.fetchone()
        if row is None:
            raise NotFoundError("not found: statement returned no row")
        return row[0]

    def to_df(self, lowercase_columns: bool = False) -> pd.DataFrame:
        """Fetch all results as a single DataFrame with optional column casing"""
        if self._cursor.description:
            df = pd.DataFrame(self.fetch_all(), columns=self.columns)
        else:
            df = pd.DataFrame()

        if lowercase_columns and len(df.columns) > 0:
            df.columns = df.columns.str.lower()

        return df

    def close(self) -> None:
        self._cursor.close()

    def __enter__(self) -> "QueryResult":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"QueryResult(rowcount={self.rowcount}, columns={self.columns})"
