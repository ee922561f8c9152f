"""Blob references.

A blob is a content-addressed pointer to binary data stored on a PDS. This
module decodes the pointer only; it never fetches or caches the data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .._exceptions import FieldTypeError, StructuralError
from ._context import DecodeContext, json_type
from ._fields import Fields
from ._registry import TYPE_FIELD


@dataclass(frozen=True)
class Blob:
    """Mirrors the lexicon ``blob`` type.

    Wire shape::

        {"$type": "blob", "ref": {"$link": "bafkrei..."}, "mimeType": "image/jpeg", "size": 550217}

    The legacy untyped form ``{"cid": "bafkrei...", "mimeType": "image/jpeg"}``
    is also accepted; it carries no size.
    """

    ref: str
    """CID of the blob content (the ``$link`` value)."""

    mime_type: str

    size: int | None = None
    """Size in bytes; ``None`` only for legacy blobs."""

    @property
    def is_legacy(self) -> bool:
        return self.size is None

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> Blob:
        """Deserialize from a lexicon blob object."""
        f = Fields(d, ctx, "Blob")

        tag = f.raw(TYPE_FIELD)
        if tag is None and f.has("cid"):
            return cls(ref=f.required_str("cid"), mime_type=f.required_str("mimeType"))
        if tag != "blob":
            raise StructuralError(
                ctx.at(TYPE_FIELD).path, f"expected blob $type 'blob', got {tag!r}"
            )

        ref = f.raw("ref")
        if not isinstance(ref, dict):
            raise FieldTypeError(ctx.at("ref").path, "object", json_type(ref))
        link = ref.get("$link")
        if not isinstance(link, str):
            raise FieldTypeError(f"{ctx.path}.ref.$link", "string", json_type(link))

        return cls(
            ref=link,
            mime_type=f.required_str("mimeType"),
            size=f.required_int("size"),
        )
