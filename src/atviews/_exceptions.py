"""Custom exception hierarchy for atviews.

Every decode failure is a :class:`StructuralError` carrying the JSON path of
the offending value, so a caller can tell exactly which element of a large
response broke. Unrecognized union members are *not* errors; they decode to
:class:`~atviews.lexicon.UnknownVariant` values instead.
"""

from __future__ import annotations


class AtviewsError(Exception):
    """Base exception for all atviews errors."""


class StructuralError(AtviewsError):
    """The payload does not have the shape its lexicon type requires.

    Raised for invalid JSON, a mandatory field with the wrong JSON type, a
    union member without a ``$type`` tag, and similar malformed input. Always
    fatal to the current decode call.

    Attributes:
        path: JSON path of the offending value, e.g. ``$.starterPacks[3].cid``.
        reason: Human-readable description of what went wrong.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed payload at {path}: {reason}")


SchemaError = StructuralError
"""Alias used by callers that think in terms of schema violations."""


class MissingFieldError(StructuralError):
    """A field the lexicon type treats as mandatory is absent.

    Attributes:
        field_name: Wire name of the missing field.
        type_name: Name of the type being decoded.
        present: Keys that were present on the object.
    """

    def __init__(
        self,
        path: str,
        field_name: str,
        type_name: str,
        present: list[str] | None = None,
    ) -> None:
        self.field_name = field_name
        self.type_name = type_name
        self.present = sorted(present or [])

        lines = [f"missing required field '{field_name}' for {type_name}"]
        if self.present:
            lines.append(f"  Present fields: {', '.join(self.present)}")
        super().__init__(path, "\n".join(lines))


class FieldTypeError(StructuralError):
    """A value has the wrong JSON type.

    Attributes:
        expected: Expected JSON type name (``"string"``, ``"object"``, ...).
        actual: JSON type name that was found.
    """

    def __init__(self, path: str, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(path, f"expected {expected}, got {actual}")


class DepthLimitError(StructuralError):
    """Nested views exceed the configured maximum depth.

    Attributes:
        limit: The depth limit that was exceeded.
    """

    def __init__(self, path: str, limit: int) -> None:
        self.limit = limit
        super().__init__(
            path,
            f"nesting exceeds the maximum depth of {limit} "
            f"(raise DecoderConfig.max_depth if the payload is legitimate)",
        )
