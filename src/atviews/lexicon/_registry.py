"""Discriminator registry and union declarations.

A lexicon union is an open set of ``$type`` tags. :class:`UnionSpec` names
the tags this library understands at one position in the schema, and
:class:`TypeRegistry` maps each tag to the decoder for its concrete type.
Anything outside either set decodes to :class:`UnknownVariant`.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Iterator, Mapping

if TYPE_CHECKING:
    from ._context import DecodeContext

Decoder = Callable[[Any, "DecodeContext"], Any]
"""Signature shared by every ``from_dict`` classmethod."""

TYPE_FIELD = "$type"
"""Wire name of the discriminator field."""


def normalize_tag(tag: str) -> str:
    """Return the canonical form of a ``$type`` tag.

    A ``#main`` fragment refers to the lexicon's main definition, so
    ``app.bsky.embed.images#main`` and ``app.bsky.embed.images`` are the
    same type.

    Examples:
        >>> normalize_tag("app.bsky.embed.images#main")
        'app.bsky.embed.images'
        >>> normalize_tag("app.bsky.embed.images#view")
        'app.bsky.embed.images#view'
    """
    if tag.endswith("#main"):
        return tag[: -len("#main")]
    return tag


@dataclass(frozen=True)
class UnknownVariant:
    """A union member whose ``$type`` is well-formed but not understood.

    Keeps the literal tag and the raw field map so nothing is lost when a
    server introduces a type this client has never seen.

    Examples:
        >>> v = UnknownVariant("app.example.future", {"$type": "app.example.future", "x": 1})
        >>> v.get("x")
        1
    """

    type: str
    """The ``$type`` tag exactly as it appeared on the wire."""

    raw: Mapping[str, Any] = field(hash=False)
    """All fields of the object, including ``$type``.

    Stored as a read-only deep copy, so neither the caller's input nor this
    value can change the other.
    """

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw", MappingProxyType(copy.deepcopy(dict(self.raw))))

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a raw field."""
        return self.raw.get(key, default)


@dataclass(frozen=True)
class UnionSpec:
    """The tags accepted at one union-typed position.

    Examples:
        >>> embeds = UnionSpec.of("embed", "app.bsky.embed.images#main")
        >>> "app.bsky.embed.images" in embeds
        True
    """

    name: str
    members: frozenset[str]

    @classmethod
    def of(cls, name: str, *tags: str) -> UnionSpec:
        """Build a union from tags, normalizing each one."""
        return cls(name=name, members=frozenset(normalize_tag(t) for t in tags))

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and normalize_tag(tag) in self.members


class TypeRegistry:
    """Maps discriminator tags to decoders.

    Built once, then frozen. A frozen registry is read-only and safe to share
    between threads without locking.

    Examples:
        >>> registry = TypeRegistry()
        >>> registry.register("app.bsky.feed.post", PostRecord.from_dict)
        >>> registry.freeze()
        >>> registry.lookup("app.bsky.feed.post#main") == PostRecord.from_dict
        True
    """

    def __init__(self) -> None:
        self._decoders: Mapping[str, Decoder] = {}
        self._frozen = False

    def register(self, tag: str, decoder: Decoder) -> None:
        """Register the decoder for a tag.

        Raises:
            RuntimeError: If the registry has been frozen.
            ValueError: If the tag is already registered.
        """
        if self._frozen:
            raise RuntimeError(f"Cannot register {tag!r}: registry is frozen")
        key = normalize_tag(tag)
        if key in self._decoders:
            raise ValueError(f"Tag {tag!r} is already registered")
        self._decoders[key] = decoder  # type: ignore[index]

    def lookup(self, tag: str) -> Decoder | None:
        """Return the decoder for a tag, or ``None`` if it is unregistered."""
        return self._decoders.get(normalize_tag(tag))

    def freeze(self) -> TypeRegistry:
        """Make the registry immutable and return it."""
        if not self._frozen:
            self._decoders = MappingProxyType(dict(self._decoders))
            self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def tags(self) -> frozenset[str]:
        return frozenset(self._decoders)

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and normalize_tag(tag) in self._decoders

    def __len__(self) -> int:
        return len(self._decoders)

    def __iter__(self) -> Iterator[str]:
        return iter(self._decoders)
