"""Base connector class with shared profile and password handling logic."""

import os
from typing import Optional, Any, Dict
from pydantic import SecretStr
import keyring

from pgfluent.config import load_profile

# Profile keys consumed here and never passed to the driver
HELPER_KEYS = ("password", "password_env", "use_keyring", "keyring_service", "keyring_username")


class BaseConnector:
    """Base class for PostgreSQL connectors with TOML profile support and password handling"""

    def __init__(self, profile: str, **kwargs: Any) -> None:
        """Initialize the connector with a configuration profile and optional parameter overrides"""
        self._password: Optional[SecretStr] = None

        self._cfg: Dict[str, Any] = load_profile(profile)
        self._cfg.update(kwargs)
        self._profile = profile
        self._process_auth()

    @property
    def password(self) -> Optional[str]:
        return self._password.get_secret_value() if self._password else None

    def _process_auth(self) -> None:
        """Resolve the password from the profile, an environment variable or the system keyring"""
        if self._cfg.get("password"):
            self._password = SecretStr(str(self._cfg["password"]))
            return

        password_env_var = self._cfg.get("password_env")
        if password_env_var:
            env_pass = os.environ.get(password_env_var)
            if env_pass:
                self._password = SecretStr(env_pass)
                return

        if self._cfg.get("use_keyring", False):
            keyring_service = self._cfg.get("keyring_service", f"pgfluent.{self._profile}")
            keyring_username = self._cfg.get("keyring_username", self._cfg.get("user"))
            if not keyring_username:
                raise ValueError(
                    "Keyring usage requires 'user' in profile or 'keyring_username' override."
                )

            keyring_pass = keyring.get_password(keyring_service, keyring_username)
            if keyring_pass:
                self._password = SecretStr(keyring_pass)

    def connect_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for the driver's connect(), password included"""
        kwargs = {k: v for k, v in self._cfg.items() if k not in HELPER_KEYS}
        if self._password is not None:
            kwargs["password"] = self._password.get_secret_value()
        return kwargs
