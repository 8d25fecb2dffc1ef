"""Profiles for PostgreSQL connections, one TOML table per profile.

A profile holds ``psycopg.connect`` keywords (``host``, ``port``, ``dbname``,
``user``, ``sslmode``, ``application_name``, ``autocommit``, ...) plus the
password helpers understood by BaseConnector: ``password``, ``password_env``,
``use_keyring``, ``keyring_service`` and ``keyring_username``.

    [dev]
    host = "localhost"
    dbname = "app"
    user = "app_user"
    password_env = "APP_DB_PASSWORD"
"""

import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .paths import resolve_config_path

PathLike = Union[str, Path]


def _profile_tables(config_file: Path) -> Dict[str, Dict[str, Any]]:
    """Top-level tables of the file; scalar keys are not profiles"""
    with open(config_file, "rb") as f:
        document = tomllib.load(f)
    return {name: value for name, value in document.items() if isinstance(value, dict)}


def load_profile(profile: str, path: Optional[PathLike] = None) -> Dict[str, Any]:
    """Connection keywords of ``profile``, as a fresh dict the caller may modify.

    Raises:
        FileNotFoundError: If there is no connections.toml
        KeyError: If the file has no such profile (the message lists the ones it has)
    """
    config_file = resolve_config_path(path)
    if not config_file.exists():
        raise FileNotFoundError(
            f"pgfluent configuration file not found at {config_file}. "
            "Create a connections.toml with one [profile] table per connection."
        )

    profiles = _profile_tables(config_file)
    try:
        return dict(profiles[profile])
    except KeyError:
        raise KeyError(
            f"Profile '{profile}' not found in {config_file}. "
            f"Available profiles: {', '.join(profiles)}"
        ) from None


def list_profiles(path: Optional[PathLike] = None) -> list[str]:
    """Profile names in file order, or [] when there is no configuration file"""
    try:
        config_file = resolve_config_path(path)
    except FileNotFoundError:
        return []
    if not config_file.exists():
        return []
    return list(_profile_tables(config_file))
