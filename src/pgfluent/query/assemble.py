"""Rendering of builder state into PostgreSQL statement text.

Everything here is pure: no connection is needed, which keeps statement
shapes testable on their own.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from pgfluent.exceptions import (
    PlaceholderMismatchError,
    TooManyArgumentsError,
    UnknownActionError,
)
from pgfluent.query.placeholders import positional
from pgfluent.query.state import Action, BuilderState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Statement:
    """Statement text plus the values bound to its ``$N`` placeholders"""

    sql: str
    params: tuple[Any, ...] = ()

    def returning(self, column: str) -> "Statement":
        """Copy of the statement with a trailing RETURNING clause"""
        return Statement(f"{self.sql}\nRETURNING {column}", self.params)


def _table_clause(state: BuilderState) -> str:
    if state.alias:
        return f"{state.table} AS {state.alias}"
    return state.table


def _qualify(state: BuilderState, column: str) -> str:
    if state.alias:
        return f"{state.alias}.{column}"
    return column


def _select_list(state: BuilderState) -> str:
    if state.columns:
        return ", ".join(state.columns)
    if state.alias:
        return f"{state.alias}.*"
    return "*"


def assemble_select(state: BuilderState) -> str:
    lines = [
        f"SELECT {_select_list(state)}",
        f"FROM {_table_clause(state)}",
    ]
    lines.extend(state.joins)
    if state.where:
        lines.append(f"WHERE {state.where}")
    if state.group_by:
        lines.append(state.group_by)
    if state.having:
        lines.append(f"HAVING {state.having}")
    if state.order_by:
        lines.append("ORDER BY " + ", ".join(state.order_by))
    if state.offset > 0:
        lines.append(f"OFFSET {state.offset}")
    if state.limit > 0:
        lines.append(f"LIMIT {state.limit}")
    return "\n".join(lines)


def assemble_insert(state: BuilderState) -> str:
    columns = ", ".join(_qualify(state, c) for c in state.columns)
    values = ", ".join(positional(i + 1) for i in range(len(state.params)))
    return "\n".join([
        f"INSERT INTO {_table_clause(state)}",
        f"({columns})",
        "VALUES",
        f"({values})",
    ])


def assemble_update(state: BuilderState) -> str:
    if len(state.columns) > len(state.params):
        raise TooManyArgumentsError(
            f"too many arguments: {len(state.columns)} columns "
            f"but only {len(state.params)} parameters"
        )
    # SET placeholders count from $1 regardless of where the WHERE values sit
    sets = ",\n".join(
        f"{_qualify(state, column)}={positional(i + 1)}"
        for i, column in enumerate(state.columns)
    )
    lines = [f"UPDATE {_table_clause(state)}", "SET", sets]
    if state.where:
        lines.append(f"WHERE {state.where}")
    return "\n".join(lines)


def assemble_delete(state: BuilderState) -> str:
    lines = [f"DELETE FROM {state.table}"]
    if state.where:
        lines.append(f"WHERE {state.where}")
    return "\n".join(lines)


_ASSEMBLERS: dict[Action, Callable[[BuilderState], str]] = {
    Action.SELECT: assemble_select,
    Action.INSERT: assemble_insert,
    Action.UPDATE: assemble_update,
    Action.DELETE: assemble_delete,
}


def assemble(state: BuilderState) -> Statement:
    """Render the configured action into a Statement.

    Raises:
        UnknownActionError: If no action (or an unrecognized one) is set
        TooManyArgumentsError: If an UPDATE has more columns than parameters
    """
    assembler = _ASSEMBLERS.get(state.action) if state.action is not None else None
    if assembler is None:
        raise UnknownActionError(f"unknown action: {state.action!r}")
    sql = assembler(state)
    logger.debug("Assembled %s on %s with %d parameters", sql.split(None, 1)[0], state.table, len(state.params))
    return Statement(sql, tuple(state.params))


def build_statement(state: BuilderState) -> Statement:
    """Statement for a terminal call: raw SQL verbatim, otherwise assembled.

    Raises:
        PlaceholderMismatchError: If any fragment was given more values than markers
    """
    if state.placeholder_errors:
        raise PlaceholderMismatchError("; ".join(state.placeholder_errors))
    if state.is_raw:
        return Statement(state.raw_sql, tuple(state.params))
    return assemble(state)
