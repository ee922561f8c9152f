"""Rich-text facets (``app.bsky.richtext.facet``).

A facet annotates a byte range of a UTF-8 string with one or more features:
a mention, a link or a hashtag. Features are a union, so a facet from a
newer server can carry features this client only knows as
``UnknownVariant``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ._context import DecodeContext
from ._fields import Fields
from ._normalize import empty
from ._types import FACET_FEATURE_UNION


@dataclass(frozen=True)
class ByteSlice:
    """Half-open byte range ``[byte_start, byte_end)`` into the UTF-8 text."""

    byte_start: int
    byte_end: int

    def extract(self, text: str) -> str:
        """Return the annotated substring of ``text``."""
        return text.encode("utf-8")[self.byte_start : self.byte_end].decode(
            "utf-8", errors="replace"
        )

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> ByteSlice:
        f = Fields(d, ctx, "ByteSlice")
        return cls(byte_start=f.required_int("byteStart"), byte_end=f.required_int("byteEnd"))


@dataclass(frozen=True)
class Mention:
    did: str

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> Mention:
        return cls(did=Fields(d, ctx, "Mention").required_str("did"))


@dataclass(frozen=True)
class Link:
    uri: str

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> Link:
        return cls(uri=Fields(d, ctx, "Link").required_str("uri"))


@dataclass(frozen=True)
class Tag:
    """A hashtag, without the leading ``#``."""

    tag: str

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> Tag:
        return cls(tag=Fields(d, ctx, "Tag").required_str("tag"))


@dataclass(frozen=True)
class Facet:
    index: ByteSlice
    features: tuple[Any, ...] = empty()
    """``Mention``, ``Link``, ``Tag`` or ``UnknownVariant`` values."""

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> Facet:
        f = Fields(d, ctx, "Facet")
        return cls(
            index=f.required_object("index", ByteSlice.from_dict),
            features=f.optional_union_list("features", FACET_FEATURE_UNION),  # type: ignore[arg-type]
        )
