"""Identifiers, NSIDs and union declarations shared by the lexicon types.

Decoded values keep every identifier (DID, handle, CID, AT-URI) as an opaque
``str``. ``AtUri`` is offered for callers who want to pick a URI apart; the
decoders never parse one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ._context import DecodeContext
from ._fields import Fields
from ._registry import UnionSpec


@dataclass(frozen=True)
class AtUri:
    """Parsed AT Protocol URI.

    AT URIs follow the format: at://<authority>/<collection>/<rkey>

    Examples:
        >>> uri = AtUri.parse("at://did:plc:abc123/app.bsky.graph.starterpack/3m6kcxavbn623")
        >>> uri.authority
        'did:plc:abc123'
        >>> uri.collection
        'app.bsky.graph.starterpack'
        >>> uri.rkey
        '3m6kcxavbn623'
    """

    authority: str
    """The DID or handle of the repository owner."""

    collection: str
    """The NSID of the record collection."""

    rkey: str
    """The record key within the collection."""

    @classmethod
    def parse(cls, uri: str) -> AtUri:
        """Parse an AT URI string into components.

        Args:
            uri: AT URI string in format ``at://<authority>/<collection>/<rkey>``

        Returns:
            Parsed AtUri instance.

        Raises:
            ValueError: If the URI format is invalid.
        """
        if not uri.startswith("at://"):
            raise ValueError(f"Invalid AT URI: must start with 'at://': {uri}")

        parts = uri[5:].split("/")
        if len(parts) < 3 or not all(parts[:3]):
            raise ValueError(
                f"Invalid AT URI: expected authority/collection/rkey: {uri}"
            )

        return cls(
            authority=parts[0],
            collection=parts[1],
            rkey="/".join(parts[2:]),
        )

    def __str__(self) -> str:
        return f"at://{self.authority}/{self.collection}/{self.rkey}"


@dataclass(frozen=True)
class StrongRef:
    """A URI plus the CID of the exact record version it points at.

    Mirrors ``com.atproto.repo.strongRef``.
    """

    uri: str
    cid: str

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> StrongRef:
        f = Fields(d, ctx, "StrongRef")
        return cls(uri=f.required_str("uri"), cid=f.required_str("cid"))


# ---------------------------------------------------------------------------
# NSIDs
# ---------------------------------------------------------------------------

STARTER_PACK = "app.bsky.graph.starterpack"
POST = "app.bsky.feed.post"
ACTOR_STATUS = "app.bsky.actor.status"

SELF_LABELS = "com.atproto.label.defs#selfLabels"

FACET_MENTION = "app.bsky.richtext.facet#mention"
FACET_LINK = "app.bsky.richtext.facet#link"
FACET_TAG = "app.bsky.richtext.facet#tag"

EMBED_IMAGES = "app.bsky.embed.images"
EMBED_EXTERNAL = "app.bsky.embed.external"
EMBED_RECORD = "app.bsky.embed.record"
EMBED_VIDEO = "app.bsky.embed.video"
EMBED_RECORD_WITH_MEDIA = "app.bsky.embed.recordWithMedia"
EMBED_IMAGES_VIEW = "app.bsky.embed.images#view"
EMBED_EXTERNAL_VIEW = "app.bsky.embed.external#view"
EMBED_RECORD_VIEW = "app.bsky.embed.record#view"
EMBED_VIDEO_VIEW = "app.bsky.embed.video#view"
EMBED_RECORD_WITH_MEDIA_VIEW = "app.bsky.embed.recordWithMedia#view"

VIEW_RECORD = "app.bsky.embed.record#viewRecord"
VIEW_NOT_FOUND = "app.bsky.embed.record#viewNotFound"
VIEW_BLOCKED = "app.bsky.embed.record#viewBlocked"
VIEW_DETACHED = "app.bsky.embed.record#viewDetached"

GENERATOR_VIEW = "app.bsky.feed.defs#generatorView"
LIST_VIEW = "app.bsky.graph.defs#listView"
LIST_VIEW_BASIC = "app.bsky.graph.defs#listViewBasic"
STARTER_PACK_VIEW = "app.bsky.graph.defs#starterPackView"
STARTER_PACK_VIEW_BASIC = "app.bsky.graph.defs#starterPackViewBasic"
LABELER_VIEW = "app.bsky.labeler.defs#labelerView"

# ---------------------------------------------------------------------------
# Unions
# ---------------------------------------------------------------------------

RECORD_UNION = UnionSpec.of("record", STARTER_PACK, POST, ACTOR_STATUS)
"""Record types that can appear under a view's ``record``/``value``."""

RECORD_EMBED_UNION = UnionSpec.of(
    "embed",
    EMBED_IMAGES,
    EMBED_EXTERNAL,
    EMBED_RECORD,
    EMBED_VIDEO,
    EMBED_RECORD_WITH_MEDIA,
)
"""Embeds inside a record, as the author wrote them."""

EMBED_VIEW_UNION = UnionSpec.of(
    "embed view",
    EMBED_IMAGES_VIEW,
    EMBED_EXTERNAL_VIEW,
    EMBED_RECORD_VIEW,
    EMBED_VIDEO_VIEW,
    EMBED_RECORD_WITH_MEDIA_VIEW,
)
"""Hydrated embeds inside a view."""

EMBEDDED_RECORD_VIEW_UNION = UnionSpec.of(
    "embedded record",
    VIEW_RECORD,
    VIEW_NOT_FOUND,
    VIEW_BLOCKED,
    VIEW_DETACHED,
    GENERATOR_VIEW,
    LIST_VIEW,
    STARTER_PACK_VIEW_BASIC,
    LABELER_VIEW,
)
"""What an ``app.bsky.embed.record#view`` can point at."""

RECORD_MEDIA_UNION = UnionSpec.of("media", EMBED_IMAGES, EMBED_VIDEO, EMBED_EXTERNAL)
"""The media half of an ``app.bsky.embed.recordWithMedia``."""

MEDIA_VIEW_UNION = UnionSpec.of(
    "media view", EMBED_IMAGES_VIEW, EMBED_VIDEO_VIEW, EMBED_EXTERNAL_VIEW
)
"""The media half of an ``app.bsky.embed.recordWithMedia#view``."""

FACET_FEATURE_UNION = UnionSpec.of("facet feature", FACET_MENTION, FACET_LINK, FACET_TAG)

SELF_LABELS_UNION = UnionSpec.of("self labels", SELF_LABELS)
