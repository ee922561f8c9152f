"""Moderation labels (``com.atproto.label.defs``)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ._context import DecodeContext
from ._fields import Fields
from ._normalize import empty, flag


@dataclass(frozen=True)
class Label:
    """A moderation label applied to an account or record.

    Mirrors ``com.atproto.label.defs#label``. Wire names are abbreviated
    (``src``, ``val``, ``cts``); the attributes here spell them out.
    """

    source: str
    """DID of the labeler (``src``)."""

    uri: str
    """AT-URI of the labeled record, or a DID for account labels."""

    value: str
    """The label value, e.g. ``"porn"`` or ``"!hide"`` (``val``)."""

    created_at: datetime
    """When the label was created (``cts``)."""

    cid: str | None = None
    """Pins the label to one version of the record."""

    negated: bool = flag(False)
    """``True`` if this label retracts an earlier one (``neg``)."""

    version: int | None = None
    """Label format version (``ver``)."""

    expires_at: datetime | None = None
    """When the label stops applying (``exp``)."""

    signature: bytes | None = None
    """Labeler signature (``sig``)."""

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> Label:
        f = Fields(d, ctx, "Label")
        return cls(
            source=f.required_str("src"),
            uri=f.required_str("uri"),
            value=f.required_str("val"),
            created_at=f.required_datetime("cts"),
            cid=f.optional_str("cid"),
            negated=f.optional_bool("neg"),  # type: ignore[arg-type]
            version=f.optional_int("ver"),
            expires_at=f.optional_datetime("exp"),
            signature=f.optional_bytes("sig"),
        )


@dataclass(frozen=True)
class SelfLabel:
    value: str

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> SelfLabel:
        return cls(value=Fields(d, ctx, "SelfLabel").required_str("val"))


@dataclass(frozen=True)
class SelfLabels:
    """Labels an author applies to their own record.

    Mirrors ``com.atproto.label.defs#selfLabels``.
    """

    values: tuple[SelfLabel, ...] = empty()

    def __contains__(self, value: object) -> bool:
        return any(label.value == value for label in self.values)

    @classmethod
    def from_dict(cls, d: Any, ctx: DecodeContext) -> SelfLabels:
        f = Fields(d, ctx, "SelfLabels")
        return cls(values=f.optional_list("values", SelfLabel.from_dict))  # type: ignore[arg-type]
