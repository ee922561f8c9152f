"""Record types: the author-signed payloads nested inside views.

Records are union members; each carries its collection NSID as ``$type``.
Only the fields every client needs are typed here. Anything else in the
record is ignored by the structural decoder, and record types this module
does not know come back as ``UnknownVariant``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ._context import DecodeContext
from ._fields import Fields
from ._normalize import empty
from ._types import RECORD_EMBED_UNION, SELF_LABELS_UNION, StrongRef
from .richtext import Facet


@dataclass(frozen=True)
class FeedItem:
    """A feed generator referenced from a starter pack record."""

    uri: str

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> FeedItem:
        return cls(uri=Fields(d, ctx, "FeedItem").required_str("uri"))


@dataclass(frozen=True)
class StarterPackRecord:
    """Mirrors ``app.bsky.graph.starterpack``.

    A starter pack bundles a list of accounts and up to three feeds for
    onboarding new users.
    """

    name: str
    list: str
    """AT-URI of the ``app.bsky.graph.list`` holding the pack's members."""
    created_at: datetime
    description: str | None = None
    description_facets: tuple[Facet, ...] = empty()
    feeds: tuple[FeedItem, ...] = empty()
    updated_at: datetime | None = None

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> StarterPackRecord:
        f = Fields(d, ctx, "StarterPackRecord")
        return cls(
            name=f.required_str("name"),
            list=f.required_str("list"),
            created_at=f.required_datetime("createdAt"),
            description=f.optional_str("description"),
            description_facets=f.optional_list("descriptionFacets", Facet.from_dict),  # type: ignore[arg-type]
            feeds=f.optional_list("feeds", FeedItem.from_dict),  # type: ignore[arg-type]
            updated_at=f.optional_datetime("updatedAt"),
        )


@dataclass(frozen=True)
class ReplyRef:
    root: StrongRef
    parent: StrongRef

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> ReplyRef:
        f = Fields(d, ctx, "ReplyRef")
        return cls(
            root=f.required_object("root", StrongRef.from_dict),
            parent=f.required_object("parent", StrongRef.from_dict),
        )


@dataclass(frozen=True)
class PostRecord:
    """Mirrors ``app.bsky.feed.post``."""

    text: str
    created_at: datetime
    langs: tuple[str, ...] = empty()
    facets: tuple[Facet, ...] = empty()
    reply: ReplyRef | None = None
    embed: Any = None
    """Record-side embed (``EmbedImages``, ``EmbedExternal``, ``EmbedRecord``)."""
    labels: Any = None
    """``SelfLabels`` or ``UnknownVariant``."""
    tags: tuple[str, ...] = empty()

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> PostRecord:
        f = Fields(d, ctx, "PostRecord")
        return cls(
            text=f.required_str("text"),
            created_at=f.required_datetime("createdAt"),
            langs=f.optional_str_list("langs"),  # type: ignore[arg-type]
            facets=f.optional_list("facets", Facet.from_dict),  # type: ignore[arg-type]
            reply=f.optional_object("reply", ReplyRef.from_dict),
            embed=f.optional_union("embed", RECORD_EMBED_UNION),
            labels=f.optional_union("labels", SELF_LABELS_UNION),
            tags=f.optional_str_list("tags"),  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class StatusRecord:
    """Mirrors ``app.bsky.actor.status``."""

    status: str
    created_at: datetime
    embed: Any = None
    duration_minutes: int | None = None

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> StatusRecord:
        f = Fields(d, ctx, "StatusRecord")
        return cls(
            status=f.required_str("status"),
            created_at=f.required_datetime("createdAt"),
            embed=f.optional_union("embed", RECORD_EMBED_UNION),
            duration_minutes=f.optional_int("durationMinutes"),
        )
