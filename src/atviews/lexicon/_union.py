"""Union resolution: pick a concrete decoder from the ``$type`` tag."""

from __future__ import annotations

from typing import Any

from .._exceptions import FieldTypeError, MissingFieldError
from .._logging import get_logger
from ._context import DecodeContext, json_type
from ._registry import TYPE_FIELD, UnionSpec, UnknownVariant, normalize_tag


def resolve_union(obj: Any, union: UnionSpec, ctx: DecodeContext) -> Any:
    """Decode a union-typed JSON object.

    The tag must be a member of ``union`` *and* registered in
    ``ctx.registry`` for the typed decoder to run. A tag that fails either
    test is not an error: the object comes back as an :class:`UnknownVariant`
    so newer servers don't break older clients.

    Args:
        obj: The parsed JSON value at this position.
        union: The tags valid at this position.
        ctx: Context for ``obj`` itself.

    Returns:
        The decoded concrete value, or an ``UnknownVariant``.

    Raises:
        FieldTypeError: If ``obj`` is not an object or ``$type`` is not a string.
        MissingFieldError: If ``obj`` carries no ``$type`` at all.
    """
    if not isinstance(obj, dict):
        raise FieldTypeError(ctx.path, "object", json_type(obj))

    tag = obj.get(TYPE_FIELD)
    if tag is None:
        raise MissingFieldError(ctx.path, TYPE_FIELD, f"union {union.name!r}", list(obj))
    if not isinstance(tag, str):
        raise FieldTypeError(ctx.at(TYPE_FIELD).path, "string", json_type(tag))

    key = normalize_tag(tag)
    decoder = ctx.registry.lookup(key) if key in union.members else None
    if decoder is None:
        if ctx.config.log_unknown_variants:
            get_logger().debug(
                "unknown variant %r for union %r at %s", tag, union.name, ctx.path
            )
        return UnknownVariant(type=tag, raw=obj)

    return decoder(obj, ctx)
