"""Record/view pair decoding.

Most hydrated entities arrive as a *view*: server-computed fields (counts,
viewer state, labels) wrapped around the author's signed *record*. The
record is always a ``$type``-tagged union member and may be missing when
the server could not hydrate it.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from ._context import DecodeContext
from ._fields import Fields
from ._registry import UnionSpec

V = TypeVar("V")


def decode_view(
    d: Any,
    ctx: DecodeContext,
    build: Callable[..., V],
    record_union: UnionSpec,
    enrich: Callable[[Fields], dict[str, Any]],
    *,
    record_key: str = "record",
    type_name: str | None = None,
) -> V:
    """Decode a view object and the record nested inside it.

    Args:
        d: The parsed view object.
        ctx: Context for ``d``.
        build: Constructor for the view type; called with ``record=`` plus
            everything ``enrich`` returns.
        record_union: Record types accepted under ``record_key``.
        enrich: Reads the view's own fields and returns constructor kwargs.
        record_key: Wire name of the nested record.
        type_name: Name used in error messages. Defaults to ``build.__name__``.

    Returns:
        The view, with ``record=None`` if the server omitted the record.

    Raises:
        StructuralError: If the view or its record is malformed.
    """
    fields = Fields(d, ctx, type_name or getattr(build, "__name__", "view"))
    record = fields.optional_union(record_key, record_union)
    return build(record=record, **enrich(fields))
