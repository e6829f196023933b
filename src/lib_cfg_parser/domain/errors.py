"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by adapters, the composition root, and
consuming applications. Most parse problems never surface as exceptions: they
are reported to the diagnostic sink and the parser carries on. The classes
below cover the cases that cross a layer boundary.

Contents
--------
* :class:`CfgError` – umbrella base class for all library failures.
* :class:`NotFound` – a configuration file could not be opened.
* :class:`InvalidFormat` – a file could not be decoded into text.
* :class:`CoercionError` – a raw value could not be converted to the requested
  type.

System Role
-----------
Adapters raise :class:`NotFound` / :class:`InvalidFormat`; the parser turns
them into diagnostics so ``load`` never raises for I/O problems.
:class:`CoercionError` is the only error that propagates to callers of the
value APIs.
"""

from __future__ import annotations


class CfgError(Exception):
    """Base type for all exceptions emitted by ``lib_cfg_parser``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class NotFound(CfgError):
    """Raised when a configuration file cannot be opened for reading.

    Why
    ----
    The parser reports missing primary and included files through the
    diagnostic sink instead of aborting, so the reader adapter needs a
    distinct signal it can catch.
    """


class InvalidFormat(CfgError):
    """Raised when a file exists but cannot be decoded with the configured encoding."""


class CoercionError(CfgError, ValueError):
    """Raised when a stored raw value cannot be converted to the requested type.

    Why
    ----
    Numeric conversion failures are fatal for the caller. Subclassing
    :class:`ValueError` keeps them on the interpreter's own numeric-parse error
    channel while still allowing ``except CfgError``.

    Examples
    --------
    >>> issubclass(CoercionError, ValueError)
    True
    """
