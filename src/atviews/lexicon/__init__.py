"""Typed Python mirrors of the Bluesky / AT Protocol lexicon views.

Every type has a ``from_dict(d, ctx)`` classmethod that decodes one parsed
JSON object. :func:`decode_value` wraps that call with a fresh
:class:`DecodeContext` and the optional-field normalizer, which is what most
callers want::

    >>> from atviews.lexicon import StarterPackView, decode_value
    >>> pack = decode_value(payload, StarterPackView.from_dict)
    >>> pack.labels
    ()

Union-typed fields (``record``, ``embed``, facet ``features``...) hold
either a typed value or an :class:`UnknownVariant` that keeps the raw tag
and fields of a type this library does not recognize.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from .._config import DecoderConfig
from .._exceptions import DepthLimitError
from ._catalog import CATALOG, DEFAULT_REGISTRY, build_registry
from ._context import DecodeContext
from ._fields import Fields, parse_datetime
from ._normalize import count, empty, flag, normalize
from ._registry import TYPE_FIELD, TypeRegistry, UnionSpec, UnknownVariant, normalize_tag
from ._types import (
    EMBED_VIEW_UNION,
    EMBEDDED_RECORD_VIEW_UNION,
    FACET_FEATURE_UNION,
    MEDIA_VIEW_UNION,
    RECORD_EMBED_UNION,
    RECORD_MEDIA_UNION,
    RECORD_UNION,
    SELF_LABELS_UNION,
    AtUri,
    StrongRef,
)
from ._union import resolve_union
from ._views import decode_view
from .actor import (
    ActorViewerState,
    KnownFollowers,
    ProfileAssociated,
    ProfileView,
    StatusView,
    VerificationState,
    VerificationView,
)
from .blob import Blob
from .embed import (
    AspectRatio,
    BlockedAuthor,
    Caption,
    EmbedExternal,
    EmbedExternalView,
    EmbedImage,
    EmbedImages,
    EmbedImagesView,
    EmbedRecord,
    EmbedRecordView,
    EmbedRecordWithMedia,
    EmbedRecordWithMediaView,
    EmbedVideo,
    EmbedVideoView,
    ExternalLink,
    ExternalView,
    ImageView,
    ViewBlocked,
    ViewDetached,
    ViewNotFound,
    ViewRecord,
)
from .feed import GeneratorView, GeneratorViewerState
from .graph import ListItemView, ListView, ListViewerState, StarterPackView
from .labeler import LabelerView, LabelerViewerState
from .labels import Label, SelfLabel, SelfLabels
from .records import FeedItem, PostRecord, ReplyRef, StarterPackRecord, StatusRecord
from .richtext import ByteSlice, Facet, Link, Mention, Tag

T = TypeVar("T")


def decode_value(
    obj: Any,
    decoder: Callable[[Any, DecodeContext], T],
    *,
    registry: TypeRegistry | None = None,
    config: DecoderConfig | None = None,
) -> T:
    """Decode one parsed JSON value and normalize the result.

    Args:
        obj: Parsed JSON (a ``dict`` for every lexicon object type).
        decoder: A ``from_dict`` classmethod or any compatible callable.
        registry: Discriminator registry; defaults to :data:`DEFAULT_REGISTRY`.
        config: Decoder tunables; defaults to ``DecoderConfig()``.

    Returns:
        The decoded, normalized value.

    Raises:
        StructuralError: If the value is malformed or nested too deeply.
    """
    config = config or DecoderConfig()
    ctx = DecodeContext(registry or DEFAULT_REGISTRY, config)
    try:
        return normalize(decoder(obj, ctx))
    except RecursionError:
        raise DepthLimitError(ctx.path, config.max_depth) from None


__all__ = [
    # machinery
    "TYPE_FIELD",
    "CATALOG",
    "DEFAULT_REGISTRY",
    "build_registry",
    "DecodeContext",
    "Fields",
    "TypeRegistry",
    "UnionSpec",
    "UnknownVariant",
    "normalize_tag",
    "resolve_union",
    "decode_view",
    "decode_value",
    "normalize",
    "empty",
    "flag",
    "count",
    "parse_datetime",
    # unions
    "RECORD_UNION",
    "RECORD_EMBED_UNION",
    "EMBED_VIEW_UNION",
    "EMBEDDED_RECORD_VIEW_UNION",
    "RECORD_MEDIA_UNION",
    "MEDIA_VIEW_UNION",
    "FACET_FEATURE_UNION",
    "SELF_LABELS_UNION",
    # identifiers
    "AtUri",
    "StrongRef",
    # types
    "Blob",
    "Label",
    "SelfLabel",
    "SelfLabels",
    "ByteSlice",
    "Facet",
    "Mention",
    "Link",
    "Tag",
    "ProfileView",
    "ActorViewerState",
    "KnownFollowers",
    "ProfileAssociated",
    "VerificationState",
    "VerificationView",
    "StatusView",
    "GeneratorView",
    "GeneratorViewerState",
    "ListView",
    "ListViewerState",
    "ListItemView",
    "StarterPackView",
    "StarterPackRecord",
    "FeedItem",
    "PostRecord",
    "ReplyRef",
    "StatusRecord",
    "AspectRatio",
    "EmbedImage",
    "EmbedImages",
    "EmbedExternal",
    "ExternalLink",
    "EmbedRecord",
    "ImageView",
    "EmbedImagesView",
    "ExternalView",
    "EmbedExternalView",
    "EmbedRecordView",
    "ViewRecord",
    "ViewNotFound",
    "ViewBlocked",
    "ViewDetached",
    "BlockedAuthor",
    "Caption",
    "EmbedVideo",
    "EmbedVideoView",
    "EmbedRecordWithMedia",
    "EmbedRecordWithMediaView",
    "LabelerView",
    "LabelerViewerState",
]
