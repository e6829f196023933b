"""Diagnostic sinks.

Purpose
-------
Provide ready-made consumers for the formatted diagnostic messages the parser
emits. Applications can pass any ``Callable[[str], None]`` instead.

Contents
--------
* :func:`logging_sink` – forwards each message to the package logger.
* :class:`CollectingSink` – keeps messages in a list (tests, the CLI ``check``
  command).
"""

from __future__ import annotations

from ...observability import log_warning


def logging_sink(message: str) -> None:
    """Forward *message* to the ``lib_cfg_parser`` logger at WARNING level.

    The package logger carries a ``NullHandler``, so nothing is printed unless
    the host application configures logging.
    """

    log_warning("cfg_diagnostic", diagnostic=message)


class CollectingSink:
    """Accumulate diagnostic messages in :attr:`messages`.

    Examples
    --------
    >>> sink = CollectingSink()
    >>> sink('first'); sink('second')
    >>> sink.messages
    ['first', 'second']
    >>> len(sink)
    2
    """

    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)

    def __len__(self) -> int:
        return len(self.messages)

    def clear(self) -> None:
        self.messages.clear()
