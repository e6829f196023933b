"""Typed views over raw value strings.

Purpose
-------
Convert the raw strings stored by the parser into ``bool``, ``int``, ``float``
or ``str`` results, either as a single scalar or as an array split on literal
commas.

Contents
--------
* :data:`TRUE_WORDS` – spellings that read as ``True``.
* :func:`to_bool` / :func:`coerce` – scalar conversion.
* :func:`split_array` / :func:`coerce_array` – array conversion.

System Role
-----------
Layered on top of :mod:`lib_cfg_parser.application.lookup` by
:class:`lib_cfg_parser.core.CfgParser`. Numeric failures raise
:class:`~lib_cfg_parser.domain.errors.CoercionError`, a ``ValueError``.
"""

from __future__ import annotations

from typing import Callable, Final, TypeVar

from ..domain.errors import CoercionError

T = TypeVar("T", bool, int, float, str)

TRUE_WORDS: Final[frozenset[str]] = frozenset({"true", "on", "yes"})
"""Case-sensitive spellings of a true boolean; every other string is false."""


def to_bool(raw: str) -> bool:
    """Return ``True`` only for ``true``, ``on`` or ``yes``.

    Examples
    --------
    >>> to_bool('yes'), to_bool('True'), to_bool('1')
    (True, False, False)
    """

    return raw in TRUE_WORDS


def _to_int(raw: str) -> int:
    return int(raw)


def _to_float(raw: str) -> float:
    return float(raw)


def _to_str(raw: str) -> str:
    return raw


_CONVERTERS: Final[dict[type, Callable[[str], object]]] = {
    bool: to_bool,
    int: _to_int,
    float: _to_float,
    str: _to_str,
}


def coerce(raw: str, type_: type[T]) -> T:
    """Convert *raw* to *type_*.

    Raises
    ------
    CoercionError
        When *raw* is not a valid literal for a numeric *type_*.
    TypeError
        When *type_* is not one of ``bool``, ``int``, ``float``, ``str``.

    Examples
    --------
    >>> coerce('42', int), coerce('2.5', float), coerce('on', bool)
    (42, 2.5, True)
    >>> coerce('x', int)
    Traceback (most recent call last):
    ...
    lib_cfg_parser.domain.errors.CoercionError: Cannot convert 'x' to int
    """

    converter = _CONVERTERS.get(type_)
    if converter is None:
        raise TypeError(f"Unsupported value type: {type_!r}")
    try:
        return converter(raw)  # type: ignore[return-value]
    except ValueError as exc:
        raise CoercionError(f"Cannot convert {raw!r} to {type_.__name__}") from exc


def split_array(raw: str) -> list[str]:
    """Split *raw* on every comma; the last segment is always included.

    Segments are not stripped.

    Examples
    --------
    >>> split_array('1,2,3')
    ['1', '2', '3']
    >>> split_array('a,')
    ['a', '']
    """

    return raw.split(",")


def coerce_array(raw: str, type_: type[T]) -> list[T]:
    """Return every segment of *raw* converted to *type_*; empty input gives ``[]``.

    Examples
    --------
    >>> coerce_array('1,2,3', int)
    [1, 2, 3]
    >>> coerce_array('', int)
    []
    """

    if not raw:
        return []
    return [coerce(segment, type_) for segment in split_array(raw)]
