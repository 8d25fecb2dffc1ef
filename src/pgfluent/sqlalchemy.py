"""Optional SQLAlchemy integration for pgfluent profiles"""

from typing import Any
from sqlalchemy import URL, create_engine, Engine
from pgfluent.connection.base import BaseConnector

# Profile keys that map onto URL components rather than connect_args
_URL_KEYS = ("host", "port", "dbname", "user", "password")


def create_engine_from_profile(
    profile: str = "default",
    pool_size: int = 5,
    max_overflow: int = 10,
    **engine_kwargs: Any
) -> Engine:
    """Create a SQLAlchemy engine (psycopg dialect) from a pgfluent profile"""
    connector = BaseConnector(profile)
    cfg = connector.connect_kwargs()

    url = URL.create(
        "postgresql+psycopg",
        username=cfg.get("user"),
        password=connector.password,
        host=cfg.get("host"),
        port=int(cfg["port"]) if "port" in cfg else None,
        database=cfg.get("dbname"),
    )

    connect_args = {k: v for k, v in cfg.items() if k not in _URL_KEYS}

    return create_engine(
        url,
        connect_args=connect_args,
        pool_size=pool_size,
        max_overflow=max_overflow,
        **engine_kwargs
    )
