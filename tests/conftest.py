"""Pytest configuration for atviews tests."""

import json
import logging
from pathlib import Path

import pytest

from atviews import configure_logging
from atviews.lexicon import DEFAULT_REGISTRY, DecodeContext


FIXTURES = Path(__file__).parent / "fixtures"

CREATOR_DID = "did:plc:5rw2on4i56btlcajojaxwcat"
FIRST_RKEY = "3m6kcxavbn623"
CURSOR = "3lep6hpx7qq2c"

RKEYS = [FIRST_RKEY] + [f"3l{chr(97 + i % 26)}{i:010d}" for i in range(1, 40)]
"""Record keys of the 40 packs in the reference listing, in wire order."""


# =============================================================================
# Payload builders
# =============================================================================


def make_profile(handle: str = "guido.example.com", **extra) -> dict:
    """A ``profileViewBasic`` object."""
    return {"did": CREATOR_DID, "handle": handle, **extra}


def make_starter_pack_record(name: str = "Python people", **extra) -> dict:
    return {
        "$type": "app.bsky.graph.starterpack",
        "name": name,
        "list": f"at://{CREATOR_DID}/app.bsky.graph.list/3m6kcxaq5qd2t",
        "createdAt": "2025-11-28T16:20:11.482Z",
        **extra,
    }


def make_starter_pack_view(rkey: str = FIRST_RKEY, **extra) -> dict:
    """A ``starterPackViewBasic`` object with a hydrated record."""
    view = {
        "$type": "app.bsky.graph.defs#starterPackViewBasic",
        "uri": f"at://{CREATOR_DID}/app.bsky.graph.starterpack/{rkey}",
        "cid": f"bafyrei{rkey}",
        "record": make_starter_pack_record(name=f"Pack {rkey}"),
        "creator": make_profile(displayName="Guido"),
        "listItemCount": 25,
        "joinedWeekCount": 1,
        "joinedAllTimeCount": 40,
        "labels": [],
        "indexedAt": "2025-11-28T16:20:12.314Z",
    }
    view.update(extra)
    return view


def make_generator_view(name: str = "pythonista", **extra) -> dict:
    """A fully hydrated ``generatorView`` object."""
    return {
        "uri": f"at://{CREATOR_DID}/app.bsky.feed.generator/{name}",
        "cid": f"bafyreifeed{name}",
        "did": "did:web:feeds.example.com",
        "creator": make_profile(),
        "displayName": name.title(),
        "likeCount": 7,
        "indexedAt": "2024-06-01T00:00:00.000Z",
        **extra,
    }


def quote_chain(levels: int) -> dict:
    """An ``app.bsky.embed.record#view`` quoting itself ``levels`` times.

    Every level adds two objects of nesting: the embed view and the quoted
    ``#viewRecord`` inside it.
    """
    node = {
        "$type": "app.bsky.embed.record#view",
        "record": {
            "$type": "app.bsky.embed.record#viewNotFound",
            "uri": f"at://{CREATOR_DID}/app.bsky.feed.post/gone",
            "notFound": True,
        },
    }
    for i in range(levels):
        node = {
            "$type": "app.bsky.embed.record#view",
            "record": {
                "$type": "app.bsky.embed.record#viewRecord",
                "uri": f"at://{CREATOR_DID}/app.bsky.feed.post/q{i}",
                "cid": f"bafyreiquote{i}",
                "author": make_profile(),
                "indexedAt": "2025-01-01T00:00:00.000Z",
                "embeds": [node],
            },
        }
    return node


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def ctx():
    """A root decode context over the default registry."""
    return DecodeContext(DEFAULT_REGISTRY)


@pytest.fixture
def starter_packs_payload():
    """The reference ``getActorStarterPacks`` response: 40 packs and a cursor."""
    return {
        "starterPacks": [make_starter_pack_view(rkey) for rkey in RKEYS],
        "cursor": CURSOR,
    }


@pytest.fixture
def starter_packs_bytes(starter_packs_payload):
    return json.dumps(starter_packs_payload).encode("utf-8")


@pytest.fixture
def hydrated_starter_pack_bytes():
    """A ``getStarterPack`` response exercising most nested view types."""
    return (FIXTURES / "get_starter_pack.json").read_bytes()


@pytest.fixture
def capture_log():
    """Swap in a capturing logger; yields the list of ``(level, message)`` calls."""
    calls: list[tuple[str, str]] = []

    class CapturingLogger:
        def debug(self, msg, *a, **kw):
            calls.append(("debug", msg % a if a else msg))

        def info(self, msg, *a, **kw):
            calls.append(("info", msg % a if a else msg))

        def warning(self, msg, *a, **kw):
            calls.append(("warning", msg % a if a else msg))

        def error(self, msg, *a, **kw):
            calls.append(("error", msg % a if a else msg))

    configure_logging(CapturingLogger())
    try:
        yield calls
    finally:
        configure_logging(logging.getLogger("atviews"))
