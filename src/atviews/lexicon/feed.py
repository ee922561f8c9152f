"""Feed generator views (``app.bsky.feed.defs#generatorView``)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ._context import DecodeContext
from ._fields import Fields
from ._normalize import count, empty, flag
from .actor import ProfileView
from .labels import Label
from .richtext import Facet


@dataclass(frozen=True)
class GeneratorViewerState:
    like: str | None = None
    """AT-URI of the viewer's like record, if the viewer liked the feed."""

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> GeneratorViewerState:
        return cls(like=Fields(d, ctx, "GeneratorViewerState").optional_str("like"))


@dataclass(frozen=True)
class GeneratorView:
    """A feed generator, as fully or as partially hydrated as the server sent it.

    Starter packs list their feeds either as complete generator views or as
    bare ``{"uri": ...}`` references. Both decode into this type: only
    ``uri`` is mandatory and :attr:`is_hydrated` tells the two apart.
    """

    uri: str
    cid: str | None = None
    did: str | None = None
    """DID of the feed generator service."""
    creator: ProfileView | None = None
    display_name: str | None = None
    description: str | None = None
    description_facets: tuple[Facet, ...] = empty()
    avatar: str | None = None
    like_count: int = count()
    accepts_interactions: bool = flag(False)
    labels: tuple[Label, ...] = empty()
    viewer: GeneratorViewerState | None = None
    content_mode: str | None = None
    """Content-mode token, e.g. ``"app.bsky.feed.defs#contentModeVideo"``."""
    indexed_at: datetime | None = None

    @property
    def is_hydrated(self) -> bool:
        """``False`` for a URI-only reference."""
        return self.cid is not None

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> GeneratorView:
        f = Fields(d, ctx, "GeneratorView")
        return cls(
            uri=f.required_str("uri"),
            cid=f.optional_str("cid"),
            did=f.optional_str("did"),
            creator=f.optional_object("creator", ProfileView.from_dict),
            display_name=f.optional_str("displayName"),
            description=f.optional_str("description"),
            description_facets=f.optional_list("descriptionFacets", Facet.from_dict),  # type: ignore[arg-type]
            avatar=f.optional_str("avatar"),
            like_count=f.optional_int("likeCount"),  # type: ignore[arg-type]
            accepts_interactions=f.optional_bool("acceptsInteractions"),  # type: ignore[arg-type]
            labels=f.optional_list("labels", Label.from_dict),  # type: ignore[arg-type]
            viewer=f.optional_object("viewer", GeneratorViewerState.from_dict),
            content_mode=f.optional_str("contentMode"),
            indexed_at=f.optional_datetime("indexedAt"),
        )
