"""Decoders for whole XRPC response bodies.

List endpoints wrap their results in an envelope of the form
``{"<items-key>": [...], "cursor": "<opaque>"}``. :func:`decode_envelope`
turns that into a :class:`Page`; the ``decode_*`` functions below bind it to
the item key and item type of one endpoint each.

Decoding is all-or-nothing: one malformed item fails the whole page with a
:class:`~atviews.StructuralError` instead of returning a partial list.

Examples:
    >>> page = decode_actor_starter_packs(response_bytes)
    >>> for pack in page:
    ...     print(pack.name, pack.joined_all_time_count)
    >>> next_request_params = {"cursor": page.cursor} if page.has_more else None
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, TypeVar, Union, overload

from ._config import DecoderConfig
from ._exceptions import DepthLimitError, StructuralError
from ._logging import log_operation
from .lexicon import (
    DEFAULT_REGISTRY,
    DecodeContext,
    Fields,
    GeneratorView,
    ListItemView,
    StarterPackView,
    TypeRegistry,
    normalize,
)

T = TypeVar("T")

RawResponse = Union[bytes, bytearray, str, dict]
"""Anything a ``decode_*`` function accepts: JSON text or an already-parsed object."""


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a paginated listing.

    Attributes:
        items: The decoded items, in the order the server sent them.
        cursor: Opaque continuation token, passed back verbatim to fetch the
            next page; ``None`` when there are no more pages.
    """

    items: tuple[T, ...]
    cursor: str | None = None

    @property
    def has_more(self) -> bool:
        return self.cursor is not None

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @overload
    def __getitem__(self, index: int) -> T: ...
    @overload
    def __getitem__(self, index: slice) -> tuple[T, ...]: ...
    def __getitem__(self, index):
        return self.items[index]


def load_json(raw: RawResponse) -> Any:
    """Parse a response body, mapping every parse failure to ``StructuralError``."""
    if isinstance(raw, dict):
        return raw
    try:
        return json.loads(raw)
    except RecursionError:
        raise StructuralError("$", "JSON nesting too deep to parse") from None
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise StructuralError("$", f"invalid JSON: {e}") from None


def decode_envelope(
    raw: RawResponse,
    items_key: str,
    item_decoder: Callable[[Any, DecodeContext], T],
    *,
    paginated: bool = True,
    registry: TypeRegistry | None = None,
    config: DecoderConfig | None = None,
) -> Page[T]:
    """Decode a list envelope into a :class:`Page`.

    Args:
        raw: Response body.
        items_key: Wire name of the item array (e.g. ``"starterPacks"``).
        item_decoder: Decoder for a single item.
        paginated: Whether the endpoint returns a cursor at all.
        registry: Discriminator registry; defaults to the built-in catalog.
        config: Decoder tunables.

    Returns:
        The page, normalized.

    Raises:
        StructuralError: If the body is not valid JSON, the item array is
            missing, or any single item is malformed.
    """
    config = config or DecoderConfig()
    ctx = DecodeContext(registry or DEFAULT_REGISTRY, config)

    with log_operation("decode_envelope", items_key=items_key) as outcome:
        doc = load_json(raw)
        fields = Fields(doc, ctx, f"{items_key} envelope")
        try:
            items = fields.required_list(items_key, item_decoder)
        except RecursionError:
            raise DepthLimitError(ctx.at(items_key).path, config.max_depth) from None
        cursor = fields.optional_str("cursor") if paginated else None
        outcome["items"] = len(items)
        outcome["cursor"] = cursor is not None
        return normalize(Page(items=items, cursor=cursor))


def _decode_single(
    raw: RawResponse,
    key: str,
    decoder: Callable[[Any, DecodeContext], T],
    *,
    registry: TypeRegistry | None,
    config: DecoderConfig | None,
) -> T:
    config = config or DecoderConfig()
    ctx = DecodeContext(registry or DEFAULT_REGISTRY, config)

    with log_operation("decode_single", key=key):
        doc = load_json(raw)
        try:
            value = Fields(doc, ctx, f"{key} response").required_object(key, decoder)
        except RecursionError:
            raise DepthLimitError(ctx.at(key).path, config.max_depth) from None
        return normalize(value)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


def decode_actor_starter_packs(
    raw: RawResponse,
    *,
    registry: TypeRegistry | None = None,
    config: DecoderConfig | None = None,
) -> Page[StarterPackView]:
    """Decode an ``app.bsky.graph.getActorStarterPacks`` response."""
    return decode_envelope(
        raw, "starterPacks", StarterPackView.from_dict, registry=registry, config=config
    )


def decode_starter_packs(
    raw: RawResponse,
    *,
    registry: TypeRegistry | None = None,
    config: DecoderConfig | None = None,
) -> Page[StarterPackView]:
    """Decode an ``app.bsky.graph.getStarterPacks`` response.

    That endpoint is not paginated, so the page's cursor is always ``None``.
    """
    return decode_envelope(
        raw,
        "starterPacks",
        StarterPackView.from_dict,
        paginated=False,
        registry=registry,
        config=config,
    )


def decode_starter_pack(
    raw: RawResponse,
    *,
    registry: TypeRegistry | None = None,
    config: DecoderConfig | None = None,
) -> StarterPackView:
    """Decode an ``app.bsky.graph.getStarterPack`` response."""
    return _decode_single(
        raw, "starterPack", StarterPackView.from_dict, registry=registry, config=config
    )


def decode_actor_feeds(
    raw: RawResponse,
    *,
    registry: TypeRegistry | None = None,
    config: DecoderConfig | None = None,
) -> Page[GeneratorView]:
    """Decode an ``app.bsky.feed.getActorFeeds`` response."""
    return decode_envelope(
        raw, "feeds", GeneratorView.from_dict, registry=registry, config=config
    )


def decode_list_items(
    raw: RawResponse,
    *,
    registry: TypeRegistry | None = None,
    config: DecoderConfig | None = None,
) -> Page[ListItemView]:
    """Decode the ``items`` page of an ``app.bsky.graph.getList`` response."""
    return decode_envelope(
        raw, "items", ListItemView.from_dict, registry=registry, config=config
    )


ENDPOINTS: dict[str, Callable[..., Any]] = {
    "actor-starter-packs": decode_actor_starter_packs,
    "starter-packs": decode_starter_packs,
    "starter-pack": decode_starter_pack,
    "actor-feeds": decode_actor_feeds,
    "list-items": decode_list_items,
}
"""CLI names for the per-endpoint decoders."""
