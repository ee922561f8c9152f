"""Structural decoding of a single JSON object.

:class:`Fields` is what every ``from_dict`` classmethod reads through. It
only ever looks up the keys a type declares, so keys added by newer lexicon
revisions are ignored without any per-type code. A JSON ``null`` is treated
the same as an absent key.
"""

from __future__ import annotations

import base64
import binascii
import re
from datetime import datetime
from typing import Any, Callable, TypeVar

from .._exceptions import FieldTypeError, MissingFieldError, StructuralError
from ._context import DecodeContext, json_type
from ._registry import UnionSpec
from ._union import resolve_union

T = TypeVar("T")

_DATETIME_RE = re.compile(
    r"(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<tz>[Zz]|[+-]\d{2}:\d{2})?"
)


def parse_datetime(value: str) -> datetime:
    """Parse a lexicon ``datetime`` string into an aware ``datetime``.

    Accepts any number of fractional-second digits (truncated to
    microseconds) and a ``Z`` suffix. A missing offset is read as UTC.

    Raises:
        ValueError: If the string is not an RFC 3339 timestamp.

    Examples:
        >>> parse_datetime("2024-11-03T18:04:12.9Z").isoformat()
        '2024-11-03T18:04:12.900000+00:00'
    """
    m = _DATETIME_RE.fullmatch(value)
    if m is None:
        raise ValueError(f"not an RFC 3339 datetime: {value!r}")
    frac = (m["frac"] or "")[:6].ljust(6, "0")
    tz = m["tz"]
    if tz is None or tz in ("Z", "z"):
        tz = "+00:00"
    return datetime.fromisoformat(f"{m['base']}.{frac}{tz}")


class Fields:
    """Typed, path-aware read access to one JSON object.

    Args:
        d: The parsed JSON value; must be an object.
        ctx: Context for ``d`` itself.
        type_name: Name of the type being decoded, for error messages.

    Raises:
        FieldTypeError: If ``d`` is not a JSON object.
    """

    __slots__ = ("_d", "ctx", "type_name")

    def __init__(self, d: Any, ctx: DecodeContext, type_name: str) -> None:
        if not isinstance(d, dict):
            raise FieldTypeError(ctx.path, "object", json_type(d))
        self._d: dict[str, Any] = d
        self.ctx = ctx
        self.type_name = type_name

    def has(self, key: str) -> bool:
        return self._d.get(key) is not None

    def raw(self, key: str) -> Any:
        return self._d.get(key)

    # -- internals -----------------------------------------------------------

    def _require(self, key: str) -> Any:
        value = self._d.get(key)
        if value is None:
            raise MissingFieldError(
                self.ctx.at(key).path, key, self.type_name, list(self._d)
            )
        return value

    def _check(self, key: str, value: Any, py_type: type, expected: str) -> Any:
        if not isinstance(value, py_type) or (
            isinstance(value, bool) and py_type is not bool
        ):
            raise FieldTypeError(self.ctx.at(key).path, expected, json_type(value))
        return value

    def _datetime(self, key: str, value: Any) -> datetime:
        self._check(key, value, str, "string")
        try:
            return parse_datetime(value)
        except ValueError as e:
            raise StructuralError(self.ctx.at(key).path, str(e)) from None

    def _array(self, key: str, value: Any) -> list[Any]:
        return self._check(key, value, list, "array")

    # -- scalars -------------------------------------------------------------

    def required_str(self, key: str) -> str:
        return self._check(key, self._require(key), str, "string")

    def optional_str(self, key: str) -> str | None:
        value = self._d.get(key)
        if value is None:
            return None
        return self._check(key, value, str, "string")

    def required_int(self, key: str) -> int:
        return self._check(key, self._require(key), int, "integer")

    def optional_int(self, key: str) -> int | None:
        value = self._d.get(key)
        if value is None:
            return None
        return self._check(key, value, int, "integer")

    def required_bool(self, key: str) -> bool:
        return self._check(key, self._require(key), bool, "boolean")

    def optional_bool(self, key: str) -> bool | None:
        value = self._d.get(key)
        if value is None:
            return None
        return self._check(key, value, bool, "boolean")

    def required_datetime(self, key: str) -> datetime:
        return self._datetime(key, self._require(key))

    def optional_datetime(self, key: str) -> datetime | None:
        value = self._d.get(key)
        if value is None:
            return None
        return self._datetime(key, value)

    def optional_bytes(self, key: str) -> bytes | None:
        """Decode a ``{"$bytes": "<base64>"}`` envelope."""
        value = self._d.get(key)
        if value is None:
            return None
        self._check(key, value, dict, "object")
        encoded = value.get("$bytes")
        if not isinstance(encoded, str):
            raise FieldTypeError(
                f"{self.ctx.at(key).path}.$bytes", "string", json_type(encoded)
            )
        # The data model uses unpadded base64; restore padding before decoding.
        padded = encoded + "=" * (-len(encoded) % 4)
        try:
            return base64.b64decode(padded, validate=True)
        except binascii.Error as e:
            raise StructuralError(self.ctx.at(key).path, f"invalid base64: {e}") from None

    def optional_str_list(self, key: str) -> tuple[str, ...] | None:
        value = self._d.get(key)
        if value is None:
            return None
        items = self._array(key, value)
        for i, item in enumerate(items):
            if not isinstance(item, str):
                raise FieldTypeError(
                    f"{self.ctx.at(key).path}[{i}]", "string", json_type(item)
                )
        return tuple(items)

    # -- nested objects ------------------------------------------------------

    def required_object(
        self, key: str, decoder: Callable[[Any, DecodeContext], T]
    ) -> T:
        return decoder(self._require(key), self.ctx.child(key))

    def optional_object(
        self, key: str, decoder: Callable[[Any, DecodeContext], T]
    ) -> T | None:
        value = self._d.get(key)
        if value is None:
            return None
        return decoder(value, self.ctx.child(key))

    def required_list(
        self, key: str, decoder: Callable[[Any, DecodeContext], T]
    ) -> tuple[T, ...]:
        items = self._array(key, self._require(key))
        return tuple(decoder(item, self.ctx.item(key, i)) for i, item in enumerate(items))

    def optional_list(
        self, key: str, decoder: Callable[[Any, DecodeContext], T]
    ) -> tuple[T, ...] | None:
        value = self._d.get(key)
        if value is None:
            return None
        items = self._array(key, value)
        return tuple(decoder(item, self.ctx.item(key, i)) for i, item in enumerate(items))

    # -- unions --------------------------------------------------------------

    def required_union(self, key: str, union: UnionSpec) -> Any:
        return resolve_union(self._require(key), union, self.ctx.child(key))

    def optional_union(self, key: str, union: UnionSpec) -> Any | None:
        value = self._d.get(key)
        if value is None:
            return None
        return resolve_union(value, union, self.ctx.child(key))

    def optional_union_list(self, key: str, union: UnionSpec) -> tuple[Any, ...] | None:
        value = self._d.get(key)
        if value is None:
            return None
        items = self._array(key, value)
        return tuple(
            resolve_union(item, union, self.ctx.item(key, i))
            for i, item in enumerate(items)
        )
