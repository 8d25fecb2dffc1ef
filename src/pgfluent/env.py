"""Typed environment variable lookups with fallback defaults.

Each helper returns ``default`` when the variable is unset or does not parse
as the requested type. Parsing runs through pydantic adapters:

- integers accept base prefixes (``0x1f``, ``0o17``, ``0b101``) and must fit
  in 64 bits
- booleans accept ``true/false/t/f/1/0/yes/no/on/off``
- datetimes must be RFC 3339 with an offset (``2006-01-02T15:04:05Z``)
- durations accept unit strings (``300ms``, ``-1.5h``, ``2h45m``) as well as
  ISO 8601 (``PT5M``) and ``HH:MM:SS``
"""

import os
import re
from datetime import datetime, timedelta
from typing import Annotated, Any, TypeVar

from pydantic import AwareDatetime, BeforeValidator, Field, TypeAdapter, ValidationError

T = TypeVar("T")

_RFC3339 = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})"
)

# Seconds per duration unit; "µs" (micro sign) and "μs" (Greek mu) both mean microseconds
_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_UNIT = "|".join(sorted(map(re.escape, _UNIT_SECONDS), key=len, reverse=True))
_DURATION_PART = re.compile(rf"(\d+\.?\d*|\.\d+)({_UNIT})")
_DURATION = re.compile(rf"[-+]?(?:(?:\d+\.?\d*|\.\d+)(?:{_UNIT}))+")


def _prefixed_int(value: Any) -> Any:
    if isinstance(value, str):
        return int(value, 0)
    return value


def _rfc3339(value: Any) -> Any:
    if isinstance(value, str) and not _RFC3339.fullmatch(value):
        raise ValueError(f"{value!r} is not an RFC 3339 timestamp")
    return value


def _unit_duration(value: Any) -> Any:
    """Turn ``2h45m``-style strings into a timedelta, pass anything else through"""
    if not isinstance(value, str):
        return value
    if value in ("0", "+0", "-0"):
        return timedelta(0)
    if not _DURATION.fullmatch(value):
        return value
    seconds = sum(float(number) * _UNIT_SECONDS[unit] for number, unit in _DURATION_PART.findall(value))
    return timedelta(seconds=-seconds if value.startswith("-") else seconds)


_INT = TypeAdapter(
    Annotated[int, BeforeValidator(_prefixed_int), Field(ge=-(2**63), le=2**63 - 1)]
)
_FLOAT = TypeAdapter(float)
_BOOL = TypeAdapter(bool)
_DATETIME = TypeAdapter(Annotated[AwareDatetime, BeforeValidator(_rfc3339)])
_DURATION_ADAPTER = TypeAdapter(Annotated[timedelta, BeforeValidator(_unit_duration)])


def _parse(key: str, adapter: TypeAdapter, default: T) -> T:
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return adapter.validate_python(raw.strip())
    except ValidationError:
        return default


def env_str(key: str, default: str) -> str:
    value = os.environ.get(key)
    return default if value is None else value


def env_int(key: str, default: int) -> int:
    return _parse(key, _INT, default)


def env_float(key: str, default: float) -> float:
    return _parse(key, _FLOAT, default)


def env_bool(key: str, default: bool) -> bool:
    return _parse(key, _BOOL, default)


def env_datetime(key: str, default: datetime) -> datetime:
    return _parse(key, _DATETIME, default)


def env_duration(key: str, default: timedelta) -> timedelta:
    return _parse(key, _DURATION_ADAPTER, default)
