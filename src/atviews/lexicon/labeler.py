"""Labeler service views (``app.bsky.labeler.defs``)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ._context import DecodeContext
from ._fields import Fields
from ._normalize import count, empty
from .actor import ProfileView
from .labels import Label


@dataclass(frozen=True)
class LabelerViewerState:
    like: str | None = None

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> LabelerViewerState:
        return cls(like=Fields(d, ctx, "LabelerViewerState").optional_str("like"))


@dataclass(frozen=True)
class LabelerView:
    """A moderation labeler, as it appears inside a quote embed."""

    uri: str
    cid: str
    creator: ProfileView
    indexed_at: datetime
    like_count: int = count()
    viewer: LabelerViewerState | None = None
    labels: tuple[Label, ...] = empty()

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> LabelerView:
        f = Fields(d, ctx, "LabelerView")
        return cls(
            uri=f.required_str("uri"),
            cid=f.required_str("cid"),
            creator=f.required_object("creator", ProfileView.from_dict),
            indexed_at=f.required_datetime("indexedAt"),
            like_count=f.optional_int("likeCount"),  # type: ignore[arg-type]
            viewer=f.optional_object("viewer", LabelerViewerState.from_dict),
            labels=f.optional_list("labels", Label.from_dict),  # type: ignore[arg-type]
        )
