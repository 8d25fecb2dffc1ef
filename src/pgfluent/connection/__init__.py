"""Connection module exports."""

from .base import BaseConnector
from .connection import PostgresConnector

__all__ = [
    "BaseConnector",
    "PostgresConnector",
]
