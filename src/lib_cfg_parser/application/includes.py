"""Include stack used to resolve ``#include <PATH>`` directives.

Purpose
-------
Track which files are currently being parsed so recursive includes compose
paths consistently, restore the current file on return, and stop before a
self-including file recurses forever.

Contents
--------
* :data:`DEFAULT_MAX_INCLUDE_DEPTH` – default nesting limit.
* :class:`IncludeStack` – push/pop bookkeeping with cycle and depth checks.
* :func:`resolve_include` – compose ``base_path + relative``.
"""

from __future__ import annotations

from ..domain.settings import DEFAULT_MAX_INCLUDE_DEPTH


def resolve_include(base_path: str, relative: str) -> str:
    """Return the path an include directive refers to.

    The two parts are concatenated verbatim; callers who want a directory
    prefix supply the trailing separator themselves.

    Examples
    --------
    >>> resolve_include('conf/', 'units.cfg')
    'conf/units.cfg'
    >>> resolve_include('', 'units.cfg')
    'units.cfg'
    """

    return base_path + relative


class IncludeStack:
    """Stack of files currently being parsed, outermost first.

    Examples
    --------
    >>> stack = IncludeStack(max_depth=2)
    >>> stack.push('main.cfg')
    >>> stack.rejection('main.cfg')
    'Include cycle detected for "main.cfg"'
    >>> stack.rejection('other.cfg') is None
    True
    >>> stack.push('other.cfg')
    >>> stack.rejection('third.cfg')
    'Include depth limit 2 exceeded for "third.cfg"'
    >>> stack.pop(), stack.current
    ('other.cfg', 'main.cfg')
    """

    def __init__(self, *, max_depth: int = DEFAULT_MAX_INCLUDE_DEPTH) -> None:
        self.max_depth = max_depth
        self._frames: list[str] = []

    @property
    def current(self) -> str | None:
        """Path of the innermost file being parsed, if any."""

        return self._frames[-1] if self._frames else None

    @property
    def depth(self) -> int:
        return len(self._frames)

    def rejection(self, path: str) -> str | None:
        """Return why *path* may not be entered, or ``None`` when it may."""

        if path in self._frames:
            return f'Include cycle detected for "{path}"'
        if len(self._frames) >= self.max_depth:
            return f'Include depth limit {self.max_depth} exceeded for "{path}"'
        return None

    def push(self, path: str) -> None:
        self._frames.append(path)

    def pop(self) -> str:
        return self._frames.pop()
