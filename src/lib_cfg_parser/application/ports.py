"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the parser consumes from its peripheral
collaborators so the composition root can swap I/O backends and diagnostic
sinks without touching the state machine.

Contents
--------
* :class:`SourceReader` – returns the decoded text of a configuration file.
* :class:`SourceWriter` – persists serialised text to a path.
* :data:`DiagnosticSink` – callable receiving formatted diagnostic messages.

System Role
-----------
These protocols enforce Dependency Inversion. The default implementations
live in :mod:`lib_cfg_parser.adapters`.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

DiagnosticSink = Callable[[str], None]
"""Consumer of human-readable diagnostic messages (see :class:`Diagnostic`)."""


@runtime_checkable
class SourceReader(Protocol):
    """Read a configuration file into text.

    Why
    ----
    Keep file-handle lifetime, encoding and error translation out of the
    parser. Implementations raise :class:`~lib_cfg_parser.domain.errors.NotFound`
    when the file cannot be opened and
    :class:`~lib_cfg_parser.domain.errors.InvalidFormat` when it cannot be
    decoded.
    """

    def read(self, path: str) -> str:
        """Return the full decoded contents of *path*."""


@runtime_checkable
class SourceWriter(Protocol):
    """Persist serialised configuration text."""

    def write(self, path: str, text: str) -> None:
        """Replace the contents of *path* with *text*."""
