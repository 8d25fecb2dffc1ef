"""Accumulated configuration of one statement"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Action(str, Enum):
    """Statement kinds the builder can assemble"""

    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass
class BuilderState:
    """Everything a QueryBuilder has been told so far.

    ``params`` is shared by every fragment: its length decides the number of
    the next ``$N`` placeholder. ``joins``, ``order_by``, ``group_by`` and
    ``having`` hold rendered SQL text.
    """

    action: Optional[Action] = None
    table: str = ""
    alias: str = ""
    columns: list[str] = field(default_factory=list)
    params: list[Any] = field(default_factory=list)
    where: str = ""
    having: str = ""
    joins: list[str] = field(default_factory=list)
    order_by: list[str] = field(default_factory=list)
    group_by: str = ""
    limit: int = 0
    offset: int = 0
    raw_sql: Optional[str] = None
    placeholder_errors: list[str] = field(default_factory=list)

    @property
    def is_raw(self) -> bool:
        return self.raw_sql is not None
