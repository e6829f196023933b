"""Structured logging for load, include and save events.

Purpose
    Every log record the package writes carries a ``context`` mapping with the
    active trace identifier plus event fields, so host applications can route
    parser activity through their own handlers and formatters.

Contents
    - ``TRACE_ID``: context variable holding the trace identifier.
    - ``get_logger`` / ``bind_trace_id``: public hooks re-exported by the package.
    - ``log_debug`` / ``log_info`` / ``log_warning`` / ``log_error``: level wrappers.
    - ``make_event``: ``stage``/``path`` payload shared by the composition root.

System Integration
    The composition root logs loads, includes, saves and value updates; the file
    adapters log I/O failures; the default diagnostic sink logs each diagnostic
    at WARNING. The logger stays silent until the application adds a handler.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("lib_cfg_parser_trace_id", default=None)
"""Trace identifier copied into every record's ``context``."""

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_cfg_parser")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Return the ``lib_cfg_parser`` logger so applications can attach handlers."""

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> None:
    """Bind *trace_id* to subsequent records; ``None`` clears it.

    Examples
    --------
    >>> bind_trace_id('load-42')
    >>> TRACE_ID.get()
    'load-42'
    >>> bind_trace_id(None)
    >>> TRACE_ID.get() is None
    True
    """

    TRACE_ID.set(trace_id)


def log_debug(message: str, **fields: Any) -> None:
    _log(logging.DEBUG, message, fields)


def log_info(message: str, **fields: Any) -> None:
    _log(logging.INFO, message, fields)


def log_warning(message: str, **fields: Any) -> None:
    _log(logging.WARNING, message, fields)


def log_error(message: str, **fields: Any) -> None:
    _log(logging.ERROR, message, fields)


def make_event(stage: str, path: str | None, payload: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Return the fields for a parser event.

    *stage* is one of ``"load"``, ``"include"``, ``"save"`` or ``"set"``;
    *payload* entries are added after ``stage`` and ``path``.

    Examples
    --------
    >>> make_event('include', 'extra.cfg', {'depth': 2})
    {'stage': 'include', 'path': 'extra.cfg', 'depth': 2}
    """

    event: dict[str, Any] = {"stage": stage, "path": path}
    if payload:
        event.update(payload)
    return event


def _log(level: int, message: str, fields: Mapping[str, Any]) -> None:
    _LOGGER.log(level, message, extra={"context": {"trace_id": TRACE_ID.get(), **fields}})
