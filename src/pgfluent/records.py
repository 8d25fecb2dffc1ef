"""Generic JSON-compatible key/value rows returned by the statement builder"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from psycopg.types.json import Jsonb
from pydantic.alias_generators import to_camel, to_snake
from pydantic_core import from_json, to_json, to_jsonable_python

from pgfluent.exceptions import BadTypeError

JsonValue = Union[None, bool, int, float, str, Dict[str, "JsonValue"], List["JsonValue"]]


class ValueKind(str, Enum):
    """Tag for each shape a JsonValue can take"""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    MAP = "map"
    SEQUENCE = "sequence"


def kind_of(value: Any) -> ValueKind:
    """Classify a decoded value, raising BadTypeError for non-JSON shapes"""
    if value is None:
        return ValueKind.NULL
    # bool is a subclass of int, so it has to be checked first
    if isinstance(value, bool):
        return ValueKind.BOOL
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, dict):
        return ValueKind.MAP
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    raise BadTypeError(f"bad type error: {type(value).__name__} is not a JSON value")


def _decode_json(value: Any) -> Any:
    if isinstance(value, memoryview):
        value = value.tobytes()
    if not isinstance(value, (bytes, bytearray, str)):
        raise BadTypeError(f"bad type error: cannot decode {type(value).__name__}")
    try:
        return from_json(value)
    except ValueError as e:
        raise BadTypeError(f"bad type error: {e}") from e


class Record(dict):
    """A result row or JSON object keyed by column name.

    Values keep whatever type the driver produced. Use ``to_json_compatible``
    when only plain JSON values are wanted.
    """

    @classmethod
    def from_row(cls, columns: Sequence[str], values: Iterable[Any]) -> "Record":
        """Pair column names with one row of values"""
        return cls(zip(columns, values))

    @classmethod
    def scan(cls, value: Any) -> "Record":
        """Decode a JSON object column value into a Record.

        ``None`` becomes an empty Record. Already-decoded dicts (psycopg
        decodes json/jsonb on its own) are wrapped as-is. Any other value
        that is not JSON text raises BadTypeError.
        """
        if value is None:
            return cls()
        if isinstance(value, dict):
            return cls(value)
        decoded = _decode_json(value)
        if not isinstance(decoded, dict):
            raise BadTypeError("bad type error: JSON value is not an object")
        return cls(decoded)

    def to_sql_value(self) -> Optional[Jsonb]:
        """Adapt for binding as a json/jsonb parameter; empty maps bind NULL"""
        if not self:
            return None
        return Jsonb(dict(self), dumps=lambda obj: to_json(obj).decode())

    def to_bytes(self) -> bytes:
        return to_json(dict(self))

    def as_string(self) -> str:
        """JSON text of the record, or an empty string when encoding fails"""
        try:
            return self.to_bytes().decode()
        except ValueError:
            return ""

    def to_json_compatible(self) -> Dict[str, JsonValue]:
        """Convert driver-native values (datetime, Decimal, UUID, ...) to JSON values"""
        return to_jsonable_python(dict(self))

    def keys_list(self) -> list[str]:
        return list(self.keys())

    def values_list(self) -> list[Any]:
        return list(self.values())

    def values_of(self, *keys: str) -> list[Any]:
        """Values for the listed keys, None where a key is missing"""
        return [self.get(key) for key in keys]

    def copy(self) -> "Record":
        return Record(self)

    def copy_exclude(self, *fields: str) -> "Record":
        excluded = set(fields)
        return Record((k, v) for k, v in self.items() if k not in excluded)

    def snake_keys(self) -> "Record":
        return Record((to_snake(k), v) for k, v in self.items())

    def camel_keys(self) -> "Record":
        return Record((to_camel(k), v) for k, v in self.items())

    def value_of(self, path: str) -> Any:
        """Look up a dotted path such as ``"profile.address.city"``"""
        current: Any = self
        for item in path.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(item)
            if current is None:
                return None
        return current


class RecordList(list):
    """A JSON array column value"""

    @classmethod
    def scan(cls, value: Any) -> "RecordList":
        if value is None:
            return cls()
        if isinstance(value, (list, tuple)):
            return cls(value)
        decoded = _decode_json(value)
        if not isinstance(decoded, list):
            raise BadTypeError("bad type error: JSON value is not an array")
        return cls(decoded)

    def to_sql_value(self) -> Optional[Jsonb]:
        if not self:
            return None
        return Jsonb(list(self), dumps=lambda obj: to_json(obj).decode())
