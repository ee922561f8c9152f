"""Logging for atviews.

Decoders log through whatever :func:`get_logger` returns: the stdlib
``logging.getLogger("atviews")`` unless an application installs its own
logger with :func:`configure_logging`. Anything with ``debug``/``info``/
``warning``/``error`` methods taking printf-style arguments will do, e.g. a
``structlog`` bound logger::

    import structlog
    import atviews
    atviews.configure_logging(structlog.get_logger())

Each response decode is bracketed by :func:`log_operation`, which emits a
``started`` line, then either ``completed`` with the page shape (item count,
whether a cursor came back) or ``failed`` with the JSON path of the
offending value.
"""

from __future__ import annotations

import contextlib
import logging
import time
from collections.abc import Generator
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LoggerProtocol(Protocol):
    """What :func:`configure_logging` accepts."""

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


_logger: LoggerProtocol = logging.getLogger("atviews")


def configure_logging(logger: LoggerProtocol) -> None:
    """Route all atviews log output to ``logger``.

    Args:
        logger: Any object implementing :class:`LoggerProtocol`.
    """
    global _logger
    _logger = logger


def get_logger() -> LoggerProtocol:
    """Return the logger installed by :func:`configure_logging`, or the default."""
    return _logger


def _suffix(pairs: dict[str, Any]) -> str:
    if not pairs:
        return ""
    return " (" + ", ".join(f"{k}={v}" for k, v in pairs.items()) + ")"


@contextlib.contextmanager
def log_operation(op_name: str, **context: Any) -> Generator[dict[str, Any], None, None]:
    """Bracket one decode with ``started``/``completed``/``failed`` log lines.

    The body receives a dict it may fill with facts only known at the end,
    such as how many items a page held. Those are appended to the
    ``completed`` line after ``context``. ``started`` and ``completed`` go to
    ``debug``; ``failed`` goes to ``error`` and the exception propagates.

    Args:
        op_name: Short label for the operation (e.g. ``"decode_envelope"``).
        **context: Key-value pairs known up front, included in every line.

    Yields:
        The outcome dict.

    Examples:
        >>> with log_operation("decode_envelope", items_key="starterPacks") as outcome:
        ...     page = decode(...)
        ...     outcome["items"] = len(page)
    """
    log = get_logger()
    log.debug("%s: started%s", op_name, _suffix(context))
    outcome: dict[str, Any] = {}
    t0 = time.monotonic()
    try:
        yield outcome
    except Exception as exc:
        failure = dict(context, error=type(exc).__name__)
        # StructuralError and subclasses carry the JSON path
        path = getattr(exc, "path", None)
        if path is not None:
            failure["path"] = path
        log.error(
            "%s: failed after %.3fs%s", op_name, time.monotonic() - t0, _suffix(failure)
        )
        raise
    log.debug(
        "%s: completed in %.3fs%s",
        op_name,
        time.monotonic() - t0,
        _suffix({**context, **outcome}),
    )
