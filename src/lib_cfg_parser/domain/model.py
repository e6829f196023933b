"""In-memory model of a parsed configuration.

Purpose
-------
Hold the mapping from section name to its inheritance list, attribute list and
key/value map, and enforce the uniqueness rules the parser relies on. The
module contains no I/O.

Contents
--------
* :class:`Section` – one named block of the configuration.
* :class:`Diagnostic` – structured, human-readable parse or usage problem.
* :class:`SectionStore` – insert-if-absent store owned by one parser instance.
* :func:`is_identifier_char` – membership test for ``[A-Za-z0-9_]``.

System Role
-----------
The state machine in :mod:`lib_cfg_parser.application.parser` mutates a
:class:`SectionStore`; lookups, the serializer and the snapshot read from it.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Final, Iterator

IDENTIFIER_CHARS: Final[frozenset[str]] = frozenset(string.ascii_letters + string.digits + "_")
"""Characters allowed in section names, inheritance bases, attributes and keys."""


def is_identifier_char(character: str) -> bool:
    """Return ``True`` when *character* may appear inside an identifier.

    Examples
    --------
    >>> is_identifier_char('a'), is_identifier_char('_'), is_identifier_char('-')
    (True, True, False)
    """

    return character in IDENTIFIER_CHARS


@dataclass(slots=True)
class Section:
    """A named group of key/value pairs.

    Attributes
    ----------
    inheritances:
        Base section names in priority order (earlier wins).
    attributes:
        Free-form identifier tokens attached to the header.
    values:
        Raw value strings keyed by identifier. Insertion order is kept so the
        serializer writes keys in the order they were first seen.
    """

    inheritances: list[str] = field(default_factory=list)
    attributes: list[str] = field(default_factory=list)
    values: dict[str, str] = field(default_factory=dict)

    def as_dict(self) -> dict[str, object]:
        """Return a plain, mutable copy of the record.

        Examples
        --------
        >>> Section(["base"], ["flag"], {"k": "v"}).as_dict()
        {'inheritances': ['base'], 'attributes': ['flag'], 'values': {'k': 'v'}}
        """

        return {
            "inheritances": list(self.inheritances),
            "attributes": list(self.attributes),
            "values": dict(self.values),
        }


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A problem reported to the diagnostic sink.

    ``line`` and ``column`` are ``None`` for problems that have no source
    position (a file that cannot be opened, a setter on a missing key).

    Examples
    --------
    >>> str(Diagnostic('Space in wrong place', line=3, column=7))
    'Error at line 3, character at 7 : Space in wrong place'
    >>> str(Diagnostic('Cannot open file "a.cfg".'))
    'Cannot open file "a.cfg".'
    """

    message: str
    line: int | None = None
    column: int | None = None
    path: str | None = None

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"Error at line {self.line}, character at {self.column} : {self.message}"


class SectionStore:
    """Mapping from section name to :class:`Section` with insert-if-absent semantics."""

    def __init__(self) -> None:
        self._sections: dict[str, Section] = {}

    def insert(self, name: str) -> Section | None:
        """Create an empty section called *name*.

        Returns the new record, or ``None`` when *name* already exists; the
        existing record is left untouched.

        Examples
        --------
        >>> store = SectionStore()
        >>> store.insert('a') is not None, store.insert('a') is None
        (True, True)
        """

        if name in self._sections:
            return None
        section = Section()
        self._sections[name] = section
        return section

    def get(self, name: str) -> Section | None:
        return self._sections.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._sections

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[str]:
        return iter(self._sections)

    def items(self) -> Iterator[tuple[str, Section]]:
        return iter(self._sections.items())
