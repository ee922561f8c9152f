"""Actor views (``app.bsky.actor.defs``).

The lexicon defines ``profileViewBasic``, ``profileView`` and
``profileViewDetailed`` as successively larger projections of one account.
They are decoded into a single :class:`ProfileView` whose extra fields are
simply optional, so a field typed ``ProfileView`` accepts whichever
projection the server chose to send.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from ._context import DecodeContext
from ._fields import Fields
from ._normalize import count, empty, flag
from ._types import EMBED_VIEW_UNION, RECORD_UNION
from ._views import decode_view
from .labels import Label

if TYPE_CHECKING:
    from .graph import ListView


# ---------------------------------------------------------------------------
# Viewer state
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KnownFollowers:
    """Accounts the viewer follows that also follow this actor."""

    count: int
    followers: tuple[ProfileView, ...] = empty()

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> KnownFollowers:
        f = Fields(d, ctx, "KnownFollowers")
        return cls(
            count=f.required_int("count"),
            followers=f.optional_list("followers", ProfileView.from_dict),  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class ActorViewerState:
    """The requesting account's relationship to an actor.

    Mirrors ``app.bsky.actor.defs#viewerState``. ``muted`` and ``blocked_by``
    are plain booleans defaulting to ``False``. The relationship URIs are
    tri-state on purpose: ``None`` means "no such relationship" only when the
    viewer state itself was present; a missing ``viewer`` means unknown.
    """

    muted: bool = flag(False)
    blocked_by: bool = flag(False)
    muted_by_list: ListView | None = None
    blocking: str | None = None
    """AT-URI of the viewer's block record, if blocking."""
    blocking_by_list: ListView | None = None
    following: str | None = None
    """AT-URI of the viewer's follow record, if following."""
    followed_by: str | None = None
    known_followers: KnownFollowers | None = None

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> ActorViewerState:
        from .graph import ListView

        f = Fields(d, ctx, "ActorViewerState")
        return cls(
            muted=f.optional_bool("muted"),  # type: ignore[arg-type]
            blocked_by=f.optional_bool("blockedBy"),  # type: ignore[arg-type]
            muted_by_list=f.optional_object("mutedByList", ListView.from_dict),
            blocking=f.optional_str("blocking"),
            blocking_by_list=f.optional_object("blockingByList", ListView.from_dict),
            following=f.optional_str("following"),
            followed_by=f.optional_str("followedBy"),
            known_followers=f.optional_object("knownFollowers", KnownFollowers.from_dict),
        )


# ---------------------------------------------------------------------------
# Associated counts and verification
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProfileAssociated:
    """Counts of things the actor has created, plus chat settings."""

    lists: int = count()
    feed_generators: int = count()
    starter_packs: int = count()
    labeler: bool = flag(False)
    chat_allow_incoming: str | None = None
    """``"all"``, ``"none"`` or ``"following"``; ``None`` if not disclosed."""
    activity_subscription: str | None = None

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> ProfileAssociated:
        f = Fields(d, ctx, "ProfileAssociated")

        chat = f.optional_object(
            "chat", lambda v, c: Fields(v, c, "ProfileAssociatedChat").optional_str("allowIncoming")
        )
        activity = f.optional_object(
            "activitySubscription",
            lambda v, c: Fields(v, c, "ProfileAssociatedActivitySubscription").optional_str(
                "allowSubscriptions"
            ),
        )
        return cls(
            lists=f.optional_int("lists"),  # type: ignore[arg-type]
            feed_generators=f.optional_int("feedgens"),  # type: ignore[arg-type]
            starter_packs=f.optional_int("starterPacks"),  # type: ignore[arg-type]
            labeler=f.optional_bool("labeler"),  # type: ignore[arg-type]
            chat_allow_incoming=chat,
            activity_subscription=activity,
        )


@dataclass(frozen=True)
class VerificationView:
    issuer: str
    uri: str
    is_valid: bool
    created_at: datetime

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> VerificationView:
        f = Fields(d, ctx, "VerificationView")
        return cls(
            issuer=f.required_str("issuer"),
            uri=f.required_str("uri"),
            is_valid=f.required_bool("isValid"),
            created_at=f.required_datetime("createdAt"),
        )


@dataclass(frozen=True)
class VerificationState:
    """Verification status of an account.

    The status strings are an open set (``"valid"``, ``"invalid"``,
    ``"none"`` today); they are kept verbatim rather than mapped to an enum.
    """

    verified_status: str
    trusted_verifier_status: str
    verifications: tuple[VerificationView, ...] = empty()

    @property
    def is_verified(self) -> bool:
        return self.verified_status == "valid"

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> VerificationState:
        f = Fields(d, ctx, "VerificationState")
        return cls(
            verified_status=f.required_str("verifiedStatus"),
            trusted_verifier_status=f.required_str("trustedVerifierStatus"),
            verifications=f.optional_list("verifications", VerificationView.from_dict),  # type: ignore[arg-type]
        )


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StatusView:
    """An actor's current status, e.g. live streaming.

    Mirrors ``app.bsky.actor.defs#statusView``: the ``app.bsky.actor.status``
    record plus a hydrated embed.
    """

    status: str
    """Status token, e.g. ``"app.bsky.actor.status#live"``."""

    record: Any = None
    """``StatusRecord``, ``UnknownVariant`` or ``None`` if not hydrated."""

    embed: Any = None
    """Hydrated embed view, usually an ``EmbedExternalView``."""

    expires_at: datetime | None = None
    is_active: bool = flag(False)

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> StatusView:
        return decode_view(d, ctx, cls, RECORD_UNION, _status_enrichment)


def _status_enrichment(f: Fields) -> dict[str, Any]:
    return {
        "status": f.required_str("status"),
        "embed": f.optional_union("embed", EMBED_VIEW_UNION),
        "expires_at": f.optional_datetime("expiresAt"),
        "is_active": f.optional_bool("isActive"),
    }


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProfileView:
    """An account as seen by the requesting viewer.

    Only ``did`` and ``handle`` are mandatory; every other field depends on
    which projection the server returned.
    """

    did: str
    handle: str
    display_name: str | None = None
    description: str | None = None
    pronouns: str | None = None
    avatar: str | None = None
    """CDN URL of the avatar image."""
    associated: ProfileAssociated | None = None
    viewer: ActorViewerState | None = None
    labels: tuple[Label, ...] = empty()
    created_at: datetime | None = None
    indexed_at: datetime | None = None
    verification: VerificationState | None = None
    status: StatusView | None = None

    def __str__(self) -> str:
        if self.display_name and self.display_name.strip():
            return f"{self.display_name} ({self.handle})"
        return self.handle

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> ProfileView:
        f = Fields(d, ctx, "ProfileView")
        return cls(
            did=f.required_str("did"),
            handle=f.required_str("handle"),
            display_name=f.optional_str("displayName"),
            description=f.optional_str("description"),
            pronouns=f.optional_str("pronouns"),
            avatar=f.optional_str("avatar"),
            associated=f.optional_object("associated", ProfileAssociated.from_dict),
            viewer=f.optional_object("viewer", ActorViewerState.from_dict),
            labels=f.optional_list("labels", Label.from_dict),  # type: ignore[arg-type]
            created_at=f.optional_datetime("createdAt"),
            indexed_at=f.optional_datetime("indexedAt"),
            verification=f.optional_object("verification", VerificationState.from_dict),
            status=f.optional_object("status", StatusView.from_dict),
        )
