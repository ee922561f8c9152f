"""Per-call decode state: registry, config, JSON path and nesting depth."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .._config import DecoderConfig
from .._exceptions import DepthLimitError
from ._registry import TypeRegistry


def json_type(value: Any) -> str:
    """Name the JSON type of a parsed value, for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


@dataclass(frozen=True)
class DecodeContext:
    """Where a decoder is in the document.

    Contexts are immutable; descending into a child returns a new one, so a
    single decode never shares mutable state with another.
    """

    registry: TypeRegistry
    config: DecoderConfig = field(default_factory=DecoderConfig)
    path: str = "$"
    depth: int = 0

    def at(self, key: str) -> DecodeContext:
        """Context for a scalar member; same depth."""
        return DecodeContext(self.registry, self.config, f"{self.path}.{key}", self.depth)

    def child(self, key: str) -> DecodeContext:
        """Context for a nested object member.

        Raises:
            DepthLimitError: If the new depth exceeds ``config.max_depth``.
        """
        return self._descend(f"{self.path}.{key}")

    def item(self, key: str, index: int) -> DecodeContext:
        """Context for element ``index`` of the array member ``key``."""
        return self._descend(f"{self.path}.{key}[{index}]")

    def _descend(self, path: str) -> DecodeContext:
        depth = self.depth + 1
        if depth > self.config.max_depth:
            raise DepthLimitError(path, self.config.max_depth)
        return DecodeContext(self.registry, self.config, path, depth)
