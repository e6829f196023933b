"""Environment variable adapter for parser settings.

Key behaviours
--------------
* Reads only variables carrying the ``LIB_CFG_PARSER_`` prefix.
* Recognises ``BASE_PATH``, ``ENCODING`` and ``MAX_INCLUDE_DEPTH``; unknown
  suffixes are ignored.
* Emits structured logging via :mod:`lib_cfg_parser.observability`.
"""

from __future__ import annotations

import os
from dataclasses import replace
from typing import Final, Mapping

from ...domain.errors import CfgError
from ...domain.settings import ParserSettings
from ...observability import log_debug

ENV_PREFIX: Final[str] = "LIB_CFG_PARSER"


def load_settings(
    *,
    environ: Mapping[str, str] | None = None,
    base: ParserSettings | None = None,
    prefix: str = ENV_PREFIX,
) -> ParserSettings:
    """Return *base* (or defaults) with overrides taken from the environment.

    Raises
    ------
    CfgError
        When ``<PREFIX>_MAX_INCLUDE_DEPTH`` is not a positive integer.

    Examples
    --------
    >>> env = {'LIB_CFG_PARSER_BASE_PATH': 'conf/', 'LIB_CFG_PARSER_MAX_INCLUDE_DEPTH': '4'}
    >>> settings = load_settings(environ=env)
    >>> settings.base_path, settings.max_include_depth, settings.encoding
    ('conf/', 4, 'utf-8')
    """

    source = os.environ if environ is None else environ
    settings = base or ParserSettings()
    overrides: dict[str, object] = {}

    base_path = source.get(f"{prefix}_BASE_PATH")
    if base_path is not None:
        overrides["base_path"] = base_path
    encoding = source.get(f"{prefix}_ENCODING")
    if encoding:
        overrides["encoding"] = encoding
    depth = source.get(f"{prefix}_MAX_INCLUDE_DEPTH")
    if depth is not None:
        overrides["max_include_depth"] = _parse_depth(prefix, depth)

    log_debug("settings_loaded", stage="settings", path=None, keys=sorted(overrides))
    return replace(settings, **overrides) if overrides else settings


def _parse_depth(prefix: str, raw: str) -> int:
    try:
        depth = int(raw)
    except ValueError as exc:
        raise CfgError(f"{prefix}_MAX_INCLUDE_DEPTH must be an integer, got {raw!r}") from exc
    if depth < 1:
        raise CfgError(f"{prefix}_MAX_INCLUDE_DEPTH must be positive, got {depth}")
    return depth
