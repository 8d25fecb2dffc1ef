"""Path resolution for pgfluent configuration files."""

from pathlib import Path
from typing import Optional, Union

from pgfluent.env import env_str


def _get_config_directory() -> Path:
    """
    Get the configuration directory for pgfluent.

    Priority order:
    1. PGFLUENT_CONFIG_DIR environment variable (override)
    2. ~/.pgfluent/ (dotfile directory in user home)

    Returns:
        Path: Configuration directory path
    """
    env_config_dir = env_str("PGFLUENT_CONFIG_DIR", "")
    if env_config_dir:
        return Path(env_config_dir)

    return Path.home() / ".pgfluent"


# Configuration directory (resolved at import)
CONF_DIR = _get_config_directory()


def get_default_config_path() -> Path:
    """
    Get the path to the connections.toml configuration file.

    Returns:
        Path: The path to connections.toml

    Raises:
        FileNotFoundError: If connections.toml doesn't exist
    """
    config_path = _get_config_directory() / "connections.toml"

    if not config_path.exists():
        error_msg = (
            f"Configuration file 'connections.toml' not found at: {config_path}\n\n"
            f"Create it with one table per profile, for example:\n"
            f"  [default]\n"
            f"  host = \"localhost\"\n"
            f"  dbname = \"app\"\n"
            f"  user = \"app\"\n\n"
            f"Configuration directory priority:\n"
            f"  1. PGFLUENT_CONFIG_DIR environment variable (if set)\n"
            f"  2. ~/.pgfluent/ (dotfile directory)\n"
        )

        raise FileNotFoundError(error_msg)

    return config_path


def resolve_config_path(path: Optional[Union[str, Path]] = None) -> Path:
    """
    Resolve the configuration file path.

    Args:
        path: Optional explicit path to connections.toml file.
              If None, uses default resolution logic.

    Returns:
        Path: Resolved path object
    """
    if path:
        return Path(path)
    return get_default_config_path()
