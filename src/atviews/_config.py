"""Decoder configuration.

Settings can be given directly, read from the process environment, or read
from a dotenv file::

    ATVIEWS_MAX_DEPTH=64
    ATVIEWS_LOG_UNKNOWN=false
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import dotenv_values

DEFAULT_MAX_DEPTH = 100

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class DecoderConfig:
    """Tunables for a decode call.

    Examples:
        >>> DecoderConfig(max_depth=32).max_depth
        32
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    """Maximum number of nested JSON objects a decode will descend into."""

    log_unknown_variants: bool = True
    """Emit a ``debug`` line whenever a union falls back to ``UnknownVariant``."""

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")

    @classmethod
    def from_env(cls, path: str | Path | None = None) -> DecoderConfig:
        """Build a config from ``ATVIEWS_*`` variables.

        Args:
            path: Optional dotenv file. When omitted, ``os.environ`` is used.

        Returns:
            A config with defaults for every variable that is not set.

        Raises:
            ValueError: If a variable is set to an unparseable value.
        """
        if path is not None:
            values: Mapping[str, str | None] = dotenv_values(Path(path))
        else:
            values = os.environ

        kwargs: dict[str, object] = {}

        raw_depth = values.get("ATVIEWS_MAX_DEPTH")
        if raw_depth:
            try:
                kwargs["max_depth"] = int(raw_depth)
            except ValueError:
                raise ValueError(
                    f"ATVIEWS_MAX_DEPTH must be an integer, got {raw_depth!r}"
                ) from None

        raw_log = values.get("ATVIEWS_LOG_UNKNOWN")
        if raw_log:
            lowered = raw_log.strip().lower()
            if lowered in _TRUE:
                kwargs["log_unknown_variants"] = True
            elif lowered in _FALSE:
                kwargs["log_unknown_variants"] = False
            else:
                raise ValueError(
                    f"ATVIEWS_LOG_UNKNOWN must be a boolean, got {raw_log!r}"
                )

        return cls(**kwargs)  # type: ignore[arg-type]
