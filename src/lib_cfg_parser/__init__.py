"""Public package surface for the sectioned configuration parser.

Applications normally need only :class:`CfgParser` (or :func:`load_config`)
plus the error types; the remaining exports support custom sinks, structured
logging and read-only inspection of a loaded model.
"""

from __future__ import annotations

from .adapters.diagnostics.default import CollectingSink, logging_sink
from .adapters.env.default import load_settings
from .core import CfgParser, load_config
from .domain.errors import CfgError, CoercionError, InvalidFormat, NotFound
from .domain.model import Diagnostic, Section
from .domain.settings import ParserSettings
from .domain.snapshot import ModelSnapshot, SectionView
from .observability import bind_trace_id, get_logger

__all__ = [
    "CfgParser",
    "load_config",
    "load_settings",
    "ParserSettings",
    "Diagnostic",
    "Section",
    "ModelSnapshot",
    "SectionView",
    "CfgError",
    "NotFound",
    "InvalidFormat",
    "CoercionError",
    "CollectingSink",
    "logging_sink",
    "bind_trace_id",
    "get_logger",
]
