"""Defaulting of absent optional fields.

Decoders report an absent optional field as ``None``. Fields declared with
:func:`empty`, :func:`flag` or :func:`count` then have that ``None``
replaced by a fixed default when :func:`normalize` runs over the decoded
graph, so callers can iterate ``labels`` or test ``viewer.muted`` without a
``None`` check. Fields declared with a plain ``None`` default are
deliberately tri-state and are left alone.
"""

from __future__ import annotations

import dataclasses
from typing import Any, TypeVar

from ._registry import UnknownVariant

T = TypeVar("T")

_ABSENT_DEFAULT = "atviews.absent_default"


def empty() -> Any:
    """A collection field; absent means ``()``."""
    return dataclasses.field(default=(), metadata={_ABSENT_DEFAULT: ()})


def flag(default: bool = False) -> Any:
    """A boolean field; absent means ``default``."""
    return dataclasses.field(default=default, metadata={_ABSENT_DEFAULT: default})


def count() -> Any:
    """An aggregate counter; absent means ``0``."""
    return dataclasses.field(default=0, metadata={_ABSENT_DEFAULT: 0})


def normalize(value: T) -> T:
    """Fill absent-field defaults throughout a decoded value.

    Walks dataclasses and tuples recursively. Returns the same object when
    nothing changes, otherwise a copy built with :func:`dataclasses.replace`.
    ``UnknownVariant`` values are returned as-is.

    Examples:
        >>> label_free = normalize(StarterPackView.from_dict(d, ctx))
        >>> label_free.labels
        ()
    """
    if isinstance(value, UnknownVariant):
        return value
    if isinstance(value, tuple):
        items = [normalize(v) for v in value]
        if any(new is not old for new, old in zip(items, value)):
            return tuple(items)  # type: ignore[return-value]
        return value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        changes: dict[str, Any] = {}
        for f in dataclasses.fields(value):
            if not f.init:
                continue
            current = getattr(value, f.name)
            if current is None and _ABSENT_DEFAULT in f.metadata:
                changes[f.name] = f.metadata[_ABSENT_DEFAULT]
                continue
            updated = normalize(current)
            if updated is not current:
                changes[f.name] = updated
        if changes:
            return dataclasses.replace(value, **changes)
    return value
