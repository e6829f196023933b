"""Inheritance-aware value lookup.

Purpose
-------
Resolve ``(section, key)`` queries against a
:class:`~lib_cfg_parser.domain.model.SectionStore`. A section's own values
always win; otherwise its direct bases are consulted left to right and the
first one binding the key supplies the value. Bases of bases are never
visited, which keeps a lookup linear in the length of one inheritance list.

Contents
--------
* :func:`resolve_value` – raw value or ``None``.
* :func:`get_string` – raw value or a caller default.
* :func:`resolving_section` – name of the section that supplies a value.
"""

from __future__ import annotations

from ..domain.model import SectionStore


def resolving_section(store: SectionStore, section: str, key: str) -> str | None:
    """Return the name of the section whose binding answers ``(section, key)``.

    Examples
    --------
    >>> store = SectionStore()
    >>> store.insert('a').values['x'] = '1'
    >>> store.insert('b').inheritances.append('a')
    >>> resolving_section(store, 'b', 'x'), resolving_section(store, 'b', 'y')
    ('a', None)
    """

    record = store.get(section)
    if record is None:
        return None
    if key in record.values:
        return section
    for base_name in record.inheritances:
        base = store.get(base_name)
        if base is not None and key in base.values:
            return base_name
    return None


def resolve_value(store: SectionStore, section: str, key: str) -> str | None:
    """Return the raw value bound to *key* for *section*, or ``None``."""

    owner = resolving_section(store, section, key)
    if owner is None:
        return None
    return store.get(owner).values[key]  # type: ignore[union-attr]


def get_string(store: SectionStore, section: str, key: str, default: str = "") -> str:
    """Return the raw value for ``(section, key)`` or *default*.

    Examples
    --------
    >>> store = SectionStore()
    >>> store.insert('a').values['x'] = '1'
    >>> get_string(store, 'a', 'x', '_'), get_string(store, 'a', 'z', '_'), get_string(store, 'nope', 'x', '_')
    ('1', '_', '_')
    """

    value = resolve_value(store, section, key)
    return default if value is None else value
