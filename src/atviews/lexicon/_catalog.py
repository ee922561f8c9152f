"""The static discriminator table and the default registry built from it."""

from __future__ import annotations

from ._registry import Decoder, TypeRegistry
from ._types import (
    ACTOR_STATUS,
    EMBED_EXTERNAL,
    EMBED_EXTERNAL_VIEW,
    EMBED_IMAGES,
    EMBED_IMAGES_VIEW,
    EMBED_RECORD,
    EMBED_RECORD_VIEW,
    EMBED_RECORD_WITH_MEDIA,
    EMBED_RECORD_WITH_MEDIA_VIEW,
    EMBED_VIDEO,
    EMBED_VIDEO_VIEW,
    FACET_LINK,
    FACET_MENTION,
    FACET_TAG,
    GENERATOR_VIEW,
    LABELER_VIEW,
    LIST_VIEW,
    LIST_VIEW_BASIC,
    POST,
    SELF_LABELS,
    STARTER_PACK,
    STARTER_PACK_VIEW,
    STARTER_PACK_VIEW_BASIC,
    VIEW_BLOCKED,
    VIEW_DETACHED,
    VIEW_NOT_FOUND,
    VIEW_RECORD,
)
from .embed import (
    EmbedExternal,
    EmbedExternalView,
    EmbedImages,
    EmbedImagesView,
    EmbedRecord,
    EmbedRecordView,
    EmbedRecordWithMedia,
    EmbedRecordWithMediaView,
    EmbedVideo,
    EmbedVideoView,
    ViewBlocked,
    ViewDetached,
    ViewNotFound,
    ViewRecord,
)
from .feed import GeneratorView
from .graph import ListView, StarterPackView
from .labeler import LabelerView
from .labels import SelfLabels
from .records import PostRecord, StarterPackRecord, StatusRecord
from .richtext import Link, Mention, Tag

CATALOG: dict[str, Decoder] = {
    # records
    STARTER_PACK: StarterPackRecord.from_dict,
    POST: PostRecord.from_dict,
    ACTOR_STATUS: StatusRecord.from_dict,
    # labels
    SELF_LABELS: SelfLabels.from_dict,
    # rich text
    FACET_MENTION: Mention.from_dict,
    FACET_LINK: Link.from_dict,
    FACET_TAG: Tag.from_dict,
    # record-side embeds
    EMBED_IMAGES: EmbedImages.from_dict,
    EMBED_EXTERNAL: EmbedExternal.from_dict,
    EMBED_RECORD: EmbedRecord.from_dict,
    EMBED_VIDEO: EmbedVideo.from_dict,
    EMBED_RECORD_WITH_MEDIA: EmbedRecordWithMedia.from_dict,
    # embed views
    EMBED_IMAGES_VIEW: EmbedImagesView.from_dict,
    EMBED_EXTERNAL_VIEW: EmbedExternalView.from_dict,
    EMBED_RECORD_VIEW: EmbedRecordView.from_dict,
    EMBED_VIDEO_VIEW: EmbedVideoView.from_dict,
    EMBED_RECORD_WITH_MEDIA_VIEW: EmbedRecordWithMediaView.from_dict,
    VIEW_RECORD: ViewRecord.from_dict,
    VIEW_NOT_FOUND: ViewNotFound.from_dict,
    VIEW_BLOCKED: ViewBlocked.from_dict,
    VIEW_DETACHED: ViewDetached.from_dict,
    # embeddable views
    GENERATOR_VIEW: GeneratorView.from_dict,
    LIST_VIEW: ListView.from_dict,
    LIST_VIEW_BASIC: ListView.from_dict,
    STARTER_PACK_VIEW: StarterPackView.from_dict,
    STARTER_PACK_VIEW_BASIC: StarterPackView.from_dict,
    LABELER_VIEW: LabelerView.from_dict,
}


def build_registry(extra: dict[str, Decoder] | None = None) -> TypeRegistry:
    """Build a frozen registry from :data:`CATALOG` plus optional extras.

    Args:
        extra: Additional tag-to-decoder entries, e.g. for a custom lexicon.
            Tags must not collide with the catalog.

    Returns:
        A frozen :class:`TypeRegistry`.
    """
    registry = TypeRegistry()
    for tag, decoder in CATALOG.items():
        registry.register(tag, decoder)
    for tag, decoder in (extra or {}).items():
        registry.register(tag, decoder)
    return registry.freeze()


DEFAULT_REGISTRY = build_registry()
