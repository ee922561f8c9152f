"""Lists and starter packs (``app.bsky.graph.defs``)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ._context import DecodeContext
from ._fields import Fields
from ._normalize import count, empty, flag
from ._types import RECORD_UNION
from ._views import decode_view
from .actor import ProfileView
from .feed import GeneratorView
from .labels import Label
from .richtext import Facet

CURATE_LIST = "app.bsky.graph.defs#curatelist"
MOD_LIST = "app.bsky.graph.defs#modlist"
REFERENCE_LIST = "app.bsky.graph.defs#referencelist"


@dataclass(frozen=True)
class ListViewerState:
    muted: bool = flag(False)
    blocked: str | None = None
    """AT-URI of the viewer's list-block record, if blocking the list."""

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> ListViewerState:
        f = Fields(d, ctx, "ListViewerState")
        return cls(muted=f.optional_bool("muted"), blocked=f.optional_str("blocked"))  # type: ignore[arg-type]


@dataclass(frozen=True)
class ListView:
    """A list of accounts.

    Decodes both ``#listViewBasic`` and ``#listView``; the fields only the
    full view carries (``creator``, ``description``) are optional.
    """

    uri: str
    cid: str
    name: str
    purpose: str
    """Open token; see ``CURATE_LIST``, ``MOD_LIST``, ``REFERENCE_LIST``."""
    avatar: str | None = None
    list_item_count: int = count()
    labels: tuple[Label, ...] = empty()
    viewer: ListViewerState | None = None
    indexed_at: datetime | None = None
    creator: ProfileView | None = None
    description: str | None = None
    description_facets: tuple[Facet, ...] = empty()

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> ListView:
        f = Fields(d, ctx, "ListView")
        return cls(
            uri=f.required_str("uri"),
            cid=f.required_str("cid"),
            name=f.required_str("name"),
            purpose=f.required_str("purpose"),
            avatar=f.optional_str("avatar"),
            list_item_count=f.optional_int("listItemCount"),  # type: ignore[arg-type]
            labels=f.optional_list("labels", Label.from_dict),  # type: ignore[arg-type]
            viewer=f.optional_object("viewer", ListViewerState.from_dict),
            indexed_at=f.optional_datetime("indexedAt"),
            creator=f.optional_object("creator", ProfileView.from_dict),
            description=f.optional_str("description"),
            description_facets=f.optional_list("descriptionFacets", Facet.from_dict),  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class ListItemView:
    uri: str
    subject: ProfileView

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> ListItemView:
        f = Fields(d, ctx, "ListItemView")
        return cls(
            uri=f.required_str("uri"),
            subject=f.required_object("subject", ProfileView.from_dict),
        )


@dataclass(frozen=True)
class StarterPackView:
    """A starter pack, hydrated for the requesting viewer.

    Decodes both ``#starterPackViewBasic`` (what list endpoints return) and
    ``#starterPackView`` (what ``getStarterPack`` returns). ``list``,
    ``list_items_sample`` and ``feeds`` are only present in the full view.

    ``record`` is normally a :class:`~atviews.lexicon.records.StarterPackRecord`;
    it is ``None`` when the server could not hydrate it, and an
    ``UnknownVariant`` if it carries an unfamiliar ``$type``.
    """

    uri: str
    cid: str
    creator: ProfileView
    indexed_at: datetime
    record: Any = None
    list_item_count: int = count()
    joined_week_count: int = count()
    joined_all_time_count: int = count()
    labels: tuple[Label, ...] = empty()
    list: ListView | None = None
    list_items_sample: tuple[ListItemView, ...] = empty()
    feeds: tuple[GeneratorView, ...] = empty()

    @property
    def name(self) -> str | None:
        """The pack name from the record, if the record was decoded."""
        return getattr(self.record, "name", None)

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> StarterPackView:
        return decode_view(d, ctx, cls, RECORD_UNION, _starter_pack_enrichment)


def _starter_pack_enrichment(f: Fields) -> dict[str, Any]:
    return {
        "uri": f.required_str("uri"),
        "cid": f.required_str("cid"),
        "creator": f.required_object("creator", ProfileView.from_dict),
        "indexed_at": f.required_datetime("indexedAt"),
        "list_item_count": f.optional_int("listItemCount"),
        "joined_week_count": f.optional_int("joinedWeekCount"),
        "joined_all_time_count": f.optional_int("joinedAllTimeCount"),
        "labels": f.optional_list("labels", Label.from_dict),
        "list": f.optional_object("list", ListView.from_dict),
        "list_items_sample": f.optional_list("listItemsSample", ListItemView.from_dict),
        "feeds": f.optional_list("feeds", GeneratorView.from_dict),
    }
