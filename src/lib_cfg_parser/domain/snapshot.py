"""Read-only snapshot of the configuration model.

Purpose
-------
Give callers a full view of every section without handing out the live
records the parser owns. This module belongs to the domain layer and contains
no I/O.

Contents
--------
* :class:`ModelSnapshot` – ``Mapping`` from section name to a frozen copy of
  its :class:`~lib_cfg_parser.domain.model.Section`.
* :func:`_freeze_section` – internal helper cloning one record.

System Role
-----------
Returned by :meth:`lib_cfg_parser.core.CfgParser.section_data` and used by the
CLI ``dump`` command.
"""

from __future__ import annotations

import json
from collections.abc import Mapping as MappingABC
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from .model import Section, SectionStore


@dataclass(frozen=True, slots=True)
class SectionView:
    """Immutable copy of one section record."""

    inheritances: tuple[str, ...]
    attributes: tuple[str, ...]
    values: Mapping[str, str]

    def as_dict(self) -> dict[str, Any]:
        """Return a mutable ``dict`` copy suitable for serialisation."""

        return {
            "inheritances": list(self.inheritances),
            "attributes": list(self.attributes),
            "values": dict(self.values),
        }


@dataclass(frozen=True, slots=True)
class ModelSnapshot(MappingABC[str, SectionView]):
    """Immutable mapping of section names to :class:`SectionView` records.

    Why
    ----
    Callers that want to walk the whole model (tooling, the CLI, tests) need a
    structure that cannot be used to smuggle new keys or sections into the
    parser after load.

    Examples
    --------
    >>> store = SectionStore()
    >>> store.insert('base').values['k'] = 'v'
    >>> snapshot = ModelSnapshot.from_store(store)
    >>> snapshot['base'].values['k']
    'v'
    >>> snapshot.to_json()
    '{"base":{"inheritances":[],"attributes":[],"values":{"k":"v"}}}'
    """

    _sections: Mapping[str, SectionView]

    @classmethod
    def from_store(cls, store: SectionStore) -> ModelSnapshot:
        """Copy every record of *store* into a new snapshot."""

        return cls(MappingProxyType({name: _freeze_section(section) for name, section in store.items()}))

    def __getitem__(self, key: str) -> SectionView:
        return self._sections[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def as_dict(self) -> dict[str, dict[str, Any]]:
        """Construct a deep (mutable) ``dict`` copy of the model.

        Examples
        --------
        >>> store = SectionStore()
        >>> store.insert('a').attributes.append('flag')
        >>> exported = ModelSnapshot.from_store(store).as_dict()
        >>> exported['a']['attributes'].append('other')
        >>> exported['a']['attributes']
        ['flag', 'other']
        """

        return {name: view.as_dict() for name, view in self._sections.items()}

    def to_json(self, *, indent: int | None = None) -> str:
        """Serialise the model to JSON using :meth:`as_dict` under the hood."""

        return json.dumps(self.as_dict(), indent=indent, separators=(",", ":"), ensure_ascii=False)


def _freeze_section(section: Section) -> SectionView:
    """Return an immutable copy of *section*."""

    return SectionView(
        inheritances=tuple(section.inheritances),
        attributes=tuple(section.attributes),
        values=MappingProxyType(dict(section.values)),
    )
