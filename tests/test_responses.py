"""Tests for whole-response decoding.

The reference workload is an ``app.bsky.graph.getActorStarterPacks`` page:
40 starter-pack views and an opaque cursor.
"""

import copy
import json
from concurrent.futures import ThreadPoolExecutor

import pytest

import atviews
from atviews import (
    DecoderConfig,
    DepthLimitError,
    FieldTypeError,
    MissingFieldError,
    Page,
    StructuralError,
)
from atviews.lexicon import (
    AtUri,
    EmbedExternalView,
    GeneratorView,
    ListItemView,
    ListView,
    StarterPackRecord,
    StarterPackView,
    StatusRecord,
    UnknownVariant,
)
from atviews.responses import decode_envelope, load_json

from conftest import (
    CURSOR,
    FIRST_RKEY,
    RKEYS,
    make_generator_view,
    make_profile,
    quote_chain,
)


# =============================================================================
# Reference listing
# =============================================================================


class TestActorStarterPacks:
    """The 40-item reference page."""

    def test_item_count_and_cursor(self, starter_packs_bytes):
        page = atviews.decode_actor_starter_packs(starter_packs_bytes)

        assert isinstance(page, Page)
        assert len(page) == 40
        assert page.cursor == CURSOR
        assert page.has_more

    def test_first_item(self, starter_packs_bytes):
        page = atviews.decode_actor_starter_packs(starter_packs_bytes)

        first = page[0]
        assert isinstance(first, StarterPackView)
        assert first.uri.endswith(f"/app.bsky.graph.starterpack/{FIRST_RKEY}")
        assert isinstance(first.record, StarterPackRecord)

    def test_wire_order_preserved(self, starter_packs_bytes):
        page = atviews.decode_actor_starter_packs(starter_packs_bytes)
        assert [AtUri.parse(pack.uri).rkey for pack in page] == RKEYS

    @pytest.mark.parametrize("form", ["bytes", "str", "dict"])
    def test_input_forms_agree(self, starter_packs_payload, form):
        text = json.dumps(starter_packs_payload)
        raw = {"bytes": text.encode(), "str": text, "dict": starter_packs_payload}[form]
        expected = atviews.decode_actor_starter_packs(text)
        assert atviews.decode_actor_starter_packs(raw) == expected

    def test_slice_returns_tuple(self, starter_packs_bytes):
        page = atviews.decode_actor_starter_packs(starter_packs_bytes)
        assert len(page[:5]) == 5
        assert isinstance(page[:5], tuple)

    def test_absent_cursor(self, starter_packs_payload):
        del starter_packs_payload["cursor"]
        page = atviews.decode_actor_starter_packs(starter_packs_payload)
        assert page.cursor is None
        assert not page.has_more

    def test_empty_page(self):
        page = atviews.decode_actor_starter_packs(b'{"starterPacks": []}')
        assert len(page) == 0
        assert page.items == ()

    def test_unknown_envelope_fields_ignored(self, starter_packs_payload):
        starter_packs_payload["someFutureField"] = {"x": 1}
        assert len(atviews.decode_actor_starter_packs(starter_packs_payload)) == 40

    def test_unknown_record_tag_tolerated(self, starter_packs_payload):
        starter_packs_payload["starterPacks"][3]["record"]["$type"] = "app.bsky.graph.starterpackV2"
        page = atviews.decode_actor_starter_packs(starter_packs_payload)

        assert isinstance(page[3].record, UnknownVariant)
        assert page[3].record.type == "app.bsky.graph.starterpackV2"
        assert page[3].record.get("name") == f"Pack {RKEYS[3]}"
        assert isinstance(page[4].record, StarterPackRecord)


# =============================================================================
# All-or-nothing failure
# =============================================================================


class TestMalformedEnvelope:
    """One malformed element fails the whole page."""

    def test_wrong_type_in_one_item(self, starter_packs_payload):
        starter_packs_payload["starterPacks"][17]["cid"] = 42
        with pytest.raises(FieldTypeError) as exc_info:
            atviews.decode_actor_starter_packs(starter_packs_payload)
        assert exc_info.value.path == "$.starterPacks[17].cid"

    def test_missing_mandatory_field_in_one_item(self, starter_packs_payload):
        del starter_packs_payload["starterPacks"][5]["creator"]
        with pytest.raises(MissingFieldError) as exc_info:
            atviews.decode_actor_starter_packs(starter_packs_payload)
        assert exc_info.value.path == "$.starterPacks[5].creator"

    def test_non_object_item(self, starter_packs_payload):
        starter_packs_payload["starterPacks"][39] = "at://not-a-view"
        with pytest.raises(StructuralError, match=r"\$\.starterPacks\[39\]"):
            atviews.decode_actor_starter_packs(starter_packs_payload)

    def test_bad_timestamp_in_one_item(self, starter_packs_payload):
        starter_packs_payload["starterPacks"][0]["indexedAt"] = "last tuesday"
        with pytest.raises(StructuralError):
            atviews.decode_actor_starter_packs(starter_packs_payload)

    def test_invalid_json(self):
        with pytest.raises(StructuralError, match="invalid JSON") as exc_info:
            atviews.decode_actor_starter_packs(b'{"starterPacks": [')
        assert exc_info.value.path == "$"

    def test_top_level_not_an_object(self):
        with pytest.raises(FieldTypeError, match="expected object, got array"):
            atviews.decode_actor_starter_packs(b"[]")

    def test_missing_items_key(self):
        with pytest.raises(MissingFieldError) as exc_info:
            atviews.decode_actor_starter_packs(b'{"cursor": "abc"}')
        assert exc_info.value.field_name == "starterPacks"

    def test_items_not_an_array(self):
        with pytest.raises(FieldTypeError, match="expected array"):
            atviews.decode_actor_starter_packs(b'{"starterPacks": {}}')

    def test_cursor_must_be_string(self, starter_packs_payload):
        starter_packs_payload["cursor"] = 12345
        with pytest.raises(FieldTypeError) as exc_info:
            atviews.decode_actor_starter_packs(starter_packs_payload)
        assert exc_info.value.path == "$.cursor"

    def test_depth_limit_inside_item(self, starter_packs_payload):
        creator = starter_packs_payload["starterPacks"][2]["creator"]
        creator["status"] = {"status": "app.bsky.actor.status#live", "embed": quote_chain(80)}
        with pytest.raises(DepthLimitError) as exc_info:
            atviews.decode_actor_starter_packs(starter_packs_payload)
        assert exc_info.value.path.startswith("$.starterPacks[2].creator.status.embed")

    def test_depth_limit_is_configurable(self, starter_packs_payload):
        with pytest.raises(DepthLimitError):
            atviews.decode_actor_starter_packs(
                starter_packs_payload, config=DecoderConfig(max_depth=1)
            )


class TestLoadJson:
    def test_dict_passes_through(self):
        d = {"a": 1}
        assert load_json(d) is d

    def test_deeply_nested_text(self):
        """Nesting too deep for the JSON parser itself is still a decode error."""
        text = "[" * 100_000 + "]" * 100_000
        with pytest.raises(StructuralError):
            load_json(text)


# =============================================================================
# Other endpoints
# =============================================================================


class TestStarterPack:
    """``getStarterPack`` returns one fully hydrated view."""

    @pytest.fixture
    def pack(self, hydrated_starter_pack_bytes):
        return atviews.decode_starter_pack(hydrated_starter_pack_bytes)

    def test_full_view(self, pack):
        assert pack.uri.endswith(FIRST_RKEY)
        assert pack.name == "Python people"
        assert pack.joined_all_time_count == 311
        assert isinstance(pack.list, ListView)
        assert pack.list.list_item_count == 57
        assert pack.list.creator is None

    def test_record_facets(self, pack):
        facets = pack.record.description_facets
        assert facets[0].index.extract(pack.record.description) == "@pycon.bsky.social"
        assert isinstance(facets[1].features[1], UnknownVariant)
        assert [f.uri.rsplit("/", 1)[-1] for f in pack.record.feeds] == ["pythonista", "whats-hot"]

    def test_list_items_sample(self, pack):
        first, second = pack.list_items_sample
        assert isinstance(first, ListItemView)
        assert str(first.subject) == "Ada (ada.example.com)"
        assert second.subject.viewer.muted is True
        assert second.subject.viewer.following is None

    def test_feeds_minimal_and_hydrated(self, pack):
        hydrated, stub = pack.feeds
        assert type(hydrated) is type(stub) is GeneratorView
        assert hydrated.like_count == 418
        assert hydrated.accepts_interactions is True
        assert hydrated.viewer.like.endswith("3kxyz")
        assert stub.uri.endswith("/whats-hot")
        assert not stub.is_hydrated
        assert stub.accepts_interactions is False

    def test_creator(self, pack):
        creator = pack.creator
        assert creator.associated.feed_generators == 1
        assert creator.associated.chat_allow_incoming == "following"
        assert creator.viewer.known_followers.count == 12
        assert creator.verification.is_verified
        assert creator.labels[0].signature == b"sig!"
        assert creator.labels[0].created_at.microsecond == 0

    def test_creator_status(self, pack):
        status = pack.creator.status
        assert status.is_active is True
        assert isinstance(status.record, StatusRecord)
        assert status.record.duration_minutes == 90
        assert status.record.embed.external.thumb.size == 48213
        assert isinstance(status.embed, EmbedExternalView)
        assert status.embed.external.title == "PyCon live"

    def test_missing_starter_pack_key(self):
        with pytest.raises(MissingFieldError, match="'starterPack'"):
            atviews.decode_starter_pack(b"{}")


class TestStarterPacks:
    def test_not_paginated(self, starter_packs_payload):
        page = atviews.decode_starter_packs(starter_packs_payload)
        assert len(page) == 40
        assert page.cursor is None


class TestActorFeeds:
    def test_feeds(self):
        payload = {
            "feeds": [make_generator_view("one"), make_generator_view("two", likeCount=None)],
            "cursor": "next",
        }
        page = atviews.decode_actor_feeds(payload)
        assert [f.display_name for f in page] == ["One", "Two"]
        assert page[1].like_count == 0
        assert page.cursor == "next"


class TestListItems:
    def test_items(self):
        payload = {
            "items": [
                {"uri": f"at://did:plc:a/app.bsky.graph.listitem/{i}", "subject": make_profile(f"m{i}.bsky.social")}
                for i in range(3)
            ],
        }
        page = atviews.decode_list_items(payload)
        assert [item.subject.handle for item in page] == [
            "m0.bsky.social", "m1.bsky.social", "m2.bsky.social",
        ]


class TestDecodeEnvelope:
    """The generic envelope decoder with a caller-supplied item decoder."""

    def test_custom_item_key_and_decoder(self):
        page = decode_envelope(
            {"things": [{"uri": "at://a/b/1"}], "cursor": "c"},
            "things",
            GeneratorView.from_dict,
        )
        assert page[0].uri == "at://a/b/1"
        assert page.cursor == "c"

    def test_result_is_normalized(self):
        page = decode_envelope({"things": [{"uri": "u"}]}, "things", GeneratorView.from_dict)
        assert page[0].labels == ()


# =============================================================================
# Concurrency
# =============================================================================


class TestConcurrentDecoding:
    """The default registry is shared read-only state."""

    def test_parallel_matches_sequential(self, starter_packs_payload):
        payloads = []
        for i in range(16):
            p = copy.deepcopy(starter_packs_payload)
            p["cursor"] = f"{CURSOR}-{i}"
            payloads.append(json.dumps(p).encode())

        sequential = [atviews.decode_actor_starter_packs(p) for p in payloads]
        with ThreadPoolExecutor(max_workers=8) as pool:
            parallel = list(pool.map(atviews.decode_actor_starter_packs, payloads))

        assert parallel == sequential
        assert [page.cursor for page in parallel] == [f"{CURSOR}-{i}" for i in range(16)]
