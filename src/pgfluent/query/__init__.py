"""Fluent statement builder for the PostgreSQL ``$N`` parameter dialect"""

from .assemble import Statement, assemble, build_statement
from .builder import QueryBuilder, new
from .placeholders import rewrite_placeholders
from .state import Action, BuilderState

__all__ = [
    "QueryBuilder",
    "new",
    "Statement",
    "assemble",
    "build_statement",
    "rewrite_placeholders",
    "Action",
    "BuilderState",
]
