"""Typed decoding of Bluesky / AT Protocol view responses.

atviews maps lexicon JSON (open, versioned and ``$type``-discriminated)
onto frozen Python dataclasses. Fields a newer server adds are ignored,
union members this library does not know decode to ``UnknownVariant``, and
absent optional collections come back as empty tuples.

Examples:
    >>> import atviews
    >>> page = atviews.decode_actor_starter_packs(response_bytes)
    >>> page[0].record.name
    'Tech folks'
    >>> page.cursor
    '3lep6hpx7qq2c'
"""

__version__ = "0.3.0"

from ._config import DecoderConfig
from ._exceptions import (
    AtviewsError,
    DepthLimitError,
    FieldTypeError,
    MissingFieldError,
    SchemaError,
    StructuralError,
)
from ._logging import LoggerProtocol, configure_logging, get_logger, log_operation
from .lexicon import (
    DEFAULT_REGISTRY,
    AtUri,
    TypeRegistry,
    UnionSpec,
    UnknownVariant,
    build_registry,
    decode_value,
)
from .responses import (
    Page,
    decode_actor_feeds,
    decode_actor_starter_packs,
    decode_envelope,
    decode_list_items,
    decode_starter_pack,
    decode_starter_packs,
)

__all__ = [
    "__version__",
    "DecoderConfig",
    "AtviewsError",
    "StructuralError",
    "SchemaError",
    "MissingFieldError",
    "FieldTypeError",
    "DepthLimitError",
    "LoggerProtocol",
    "configure_logging",
    "get_logger",
    "log_operation",
    "DEFAULT_REGISTRY",
    "AtUri",
    "TypeRegistry",
    "UnionSpec",
    "UnknownVariant",
    "build_registry",
    "decode_value",
    "Page",
    "decode_envelope",
    "decode_actor_starter_packs",
    "decode_starter_packs",
    "decode_starter_pack",
    "decode_actor_feeds",
    "decode_list_items",
]
