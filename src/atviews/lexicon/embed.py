"""Embeds (``app.bsky.embed.*``).

Every embed exists twice: the record-side form an author writes (blobs and
strong references) and the ``#view`` form a server hydrates (CDN URLs and
nested views). ``app.bsky.embed.record#view`` is where views nest inside
views: it can wrap a post, a feed generator, a list or a starter pack, each
of which can embed further views in turn.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ._context import DecodeContext
from ._fields import Fields
from ._normalize import count, empty, flag
from ._types import (
    EMBED_VIEW_UNION,
    EMBEDDED_RECORD_VIEW_UNION,
    MEDIA_VIEW_UNION,
    RECORD_MEDIA_UNION,
    RECORD_UNION,
    StrongRef,
)
from ._views import decode_view
from .actor import ActorViewerState, ProfileView
from .blob import Blob
from .labels import Label


@dataclass(frozen=True)
class AspectRatio:
    width: int
    height: int

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> AspectRatio:
        f = Fields(d, ctx, "AspectRatio")
        return cls(width=f.required_int("width"), height=f.required_int("height"))


# ---------------------------------------------------------------------------
# Record-side embeds
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EmbedImage:
    image: Blob
    alt: str
    aspect_ratio: AspectRatio | None = None

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> EmbedImage:
        f = Fields(d, ctx, "EmbedImage")
        return cls(
            image=f.required_object("image", Blob.from_dict),
            # alt text is required by the lexicon but may be the empty string
            alt=f.optional_str("alt") or "",
            aspect_ratio=f.optional_object("aspectRatio", AspectRatio.from_dict),
        )


@dataclass(frozen=True)
class EmbedImages:
    """Mirrors ``app.bsky.embed.images``."""

    images: tuple[EmbedImage, ...] = empty()

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> EmbedImages:
        f = Fields(d, ctx, "EmbedImages")
        return cls(images=f.optional_list("images", EmbedImage.from_dict))  # type: ignore[arg-type]


@dataclass(frozen=True)
class ExternalLink:
    uri: str
    title: str
    description: str
    thumb: Blob | None = None

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> ExternalLink:
        f = Fields(d, ctx, "ExternalLink")
        return cls(
            uri=f.required_str("uri"),
            title=f.optional_str("title") or "",
            description=f.optional_str("description") or "",
            thumb=f.optional_object("thumb", Blob.from_dict),
        )


@dataclass(frozen=True)
class EmbedExternal:
    """Mirrors ``app.bsky.embed.external``."""

    external: ExternalLink

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> EmbedExternal:
        f = Fields(d, ctx, "EmbedExternal")
        return cls(external=f.required_object("external", ExternalLink.from_dict))


@dataclass(frozen=True)
class EmbedRecord:
    """Mirrors ``app.bsky.embed.record``: a quote of another record."""

    record: StrongRef

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> EmbedRecord:
        f = Fields(d, ctx, "EmbedRecord")
        return cls(record=f.required_object("record", StrongRef.from_dict))


@dataclass(frozen=True)
class Caption:
    lang: str
    file: Blob
    """A WebVTT captions file."""

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> Caption:
        f = Fields(d, ctx, "Caption")
        return cls(lang=f.required_str("lang"), file=f.required_object("file", Blob.from_dict))


@dataclass(frozen=True)
class EmbedVideo:
    """Mirrors ``app.bsky.embed.video``."""

    video: Blob
    captions: tuple[Caption, ...] = empty()
    alt: str | None = None
    aspect_ratio: AspectRatio | None = None

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> EmbedVideo:
        f = Fields(d, ctx, "EmbedVideo")
        return cls(
            video=f.required_object("video", Blob.from_dict),
            captions=f.optional_list("captions", Caption.from_dict),  # type: ignore[arg-type]
            alt=f.optional_str("alt"),
            aspect_ratio=f.optional_object("aspectRatio", AspectRatio.from_dict),
        )


@dataclass(frozen=True)
class EmbedRecordWithMedia:
    """Mirrors ``app.bsky.embed.recordWithMedia``: a quote plus media."""

    record: EmbedRecord
    media: Any
    """``EmbedImages``, ``EmbedVideo``, ``EmbedExternal`` or ``UnknownVariant``."""

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> EmbedRecordWithMedia:
        f = Fields(d, ctx, "EmbedRecordWithMedia")
        return cls(
            record=f.required_object("record", EmbedRecord.from_dict),
            media=f.required_union("media", RECORD_MEDIA_UNION),
        )


# ---------------------------------------------------------------------------
# Hydrated embed views
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ImageView:
    thumb: str
    fullsize: str
    alt: str
    aspect_ratio: AspectRatio | None = None

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> ImageView:
        f = Fields(d, ctx, "ImageView")
        return cls(
            thumb=f.required_str("thumb"),
            fullsize=f.required_str("fullsize"),
            alt=f.optional_str("alt") or "",
            aspect_ratio=f.optional_object("aspectRatio", AspectRatio.from_dict),
        )


@dataclass(frozen=True)
class EmbedImagesView:
    """Mirrors ``app.bsky.embed.images#view``."""

    images: tuple[ImageView, ...] = empty()

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> EmbedImagesView:
        f = Fields(d, ctx, "EmbedImagesView")
        return cls(images=f.optional_list("images", ImageView.from_dict))  # type: ignore[arg-type]


@dataclass(frozen=True)
class ExternalView:
    uri: str
    title: str
    description: str
    thumb: str | None = None
    """CDN URL of the thumbnail."""

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> ExternalView:
        f = Fields(d, ctx, "ExternalView")
        return cls(
            uri=f.required_str("uri"),
            title=f.optional_str("title") or "",
            description=f.optional_str("description") or "",
            thumb=f.optional_str("thumb"),
        )


@dataclass(frozen=True)
class EmbedExternalView:
    """Mirrors ``app.bsky.embed.external#view``."""

    external: ExternalView

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> EmbedExternalView:
        f = Fields(d, ctx, "EmbedExternalView")
        return cls(external=f.required_object("external", ExternalView.from_dict))


@dataclass(frozen=True)
class EmbedRecordView:
    """Mirrors ``app.bsky.embed.record#view``."""

    record: Any
    """``ViewRecord``, ``ViewNotFound``, ``ViewBlocked``, ``ViewDetached``,
    ``GeneratorView``, ``ListView``, ``StarterPackView``, ``LabelerView`` or
    ``UnknownVariant``."""

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> EmbedRecordView:
        f = Fields(d, ctx, "EmbedRecordView")
        return cls(record=f.required_union("record", EMBEDDED_RECORD_VIEW_UNION))


@dataclass(frozen=True)
class EmbedVideoView:
    """Mirrors ``app.bsky.embed.video#view``."""

    cid: str
    playlist: str
    """HLS playlist URL."""
    thumbnail: str | None = None
    alt: str | None = None
    aspect_ratio: AspectRatio | None = None
    presentation: str | None = None
    """``"default"`` or ``"gif"``; other values may appear."""

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> EmbedVideoView:
        f = Fields(d, ctx, "EmbedVideoView")
        return cls(
            cid=f.required_str("cid"),
            playlist=f.required_str("playlist"),
            thumbnail=f.optional_str("thumbnail"),
            alt=f.optional_str("alt"),
            aspect_ratio=f.optional_object("aspectRatio", AspectRatio.from_dict),
            presentation=f.optional_str("presentation"),
        )


@dataclass(frozen=True)
class EmbedRecordWithMediaView:
    """Mirrors ``app.bsky.embed.recordWithMedia#view``.

    Unlike the record-side form, ``record`` here is untagged: it is always an
    ``app.bsky.embed.record#view``.
    """

    record: EmbedRecordView
    media: Any
    """``EmbedImagesView``, ``EmbedVideoView``, ``EmbedExternalView`` or
    ``UnknownVariant``."""

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> EmbedRecordWithMediaView:
        f = Fields(d, ctx, "EmbedRecordWithMediaView")
        return cls(
            record=f.required_object("record", EmbedRecordView.from_dict),
            media=f.required_union("media", MEDIA_VIEW_UNION),
        )


@dataclass(frozen=True)
class ViewRecord:
    """A quoted record, hydrated.

    Mirrors ``app.bsky.embed.record#viewRecord``. The record itself arrives
    under ``value`` rather than ``record``.
    """

    uri: str
    cid: str
    author: ProfileView
    indexed_at: datetime
    value: Any = None
    """The quoted record (usually ``PostRecord``), or ``None`` if omitted."""
    labels: tuple[Label, ...] = empty()
    reply_count: int = count()
    repost_count: int = count()
    like_count: int = count()
    quote_count: int = count()
    embeds: tuple[Any, ...] = empty()

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> ViewRecord:
        return decode_view(
            d,
            ctx,
            lambda record, **kw: cls(value=record, **kw),
            RECORD_UNION,
            _view_record_enrichment,
            record_key="value",
            type_name="ViewRecord",
        )


def _view_record_enrichment(f: Fields) -> dict[str, Any]:
    return {
        "uri": f.required_str("uri"),
        "cid": f.required_str("cid"),
        "author": f.required_object("author", ProfileView.from_dict),
        "indexed_at": f.required_datetime("indexedAt"),
        "labels": f.optional_list("labels", Label.from_dict),
        "reply_count": f.optional_int("replyCount"),
        "repost_count": f.optional_int("repostCount"),
        "like_count": f.optional_int("likeCount"),
        "quote_count": f.optional_int("quoteCount"),
        "embeds": f.optional_union_list("embeds", EMBED_VIEW_UNION),
    }


@dataclass(frozen=True)
class ViewNotFound:
    uri: str
    not_found: bool = flag(True)

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> ViewNotFound:
        f = Fields(d, ctx, "ViewNotFound")
        return cls(uri=f.required_str("uri"), not_found=f.optional_bool("notFound"))  # type: ignore[arg-type]


@dataclass(frozen=True)
class BlockedAuthor:
    did: str
    viewer: ActorViewerState | None = None

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> BlockedAuthor:
        f = Fields(d, ctx, "BlockedAuthor")
        return cls(
            did=f.required_str("did"),
            viewer=f.optional_object("viewer", ActorViewerState.from_dict),
        )


@dataclass(frozen=True)
class ViewBlocked:
    uri: str
    author: BlockedAuthor
    blocked: bool = flag(True)

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> ViewBlocked:
        f = Fields(d, ctx, "ViewBlocked")
        return cls(
            uri=f.required_str("uri"),
            author=f.required_object("author", BlockedAuthor.from_dict),
            blocked=f.optional_bool("blocked"),  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class ViewDetached:
    """The quoted author detached their post from this quote."""

    uri: str
    detached: bool = flag(True)

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> ViewDetached:
        f = Fields(d, ctx, "ViewDetached")
        return cls(uri=f.required_str("uri"), detached=f.optional_bool("detached"))  # type: ignore[arg-type]
