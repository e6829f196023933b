"""Canonical textual form of the configuration model.

Raw values are written verbatim. Nothing is re-quoted or re-escaped, so only
models whose values carry no structural characters (newlines, quotes, comment
characters, commas that are not array separators, surrounding whitespace)
survive a save/load round trip unchanged.
"""

from __future__ import annotations

from typing import Iterable

from ..domain.model import Section, SectionStore


def render_section(name: str, section: Section) -> str:
    """Return the text of one section, header line first.

    Examples
    --------
    >>> print(render_section('derived', Section(['base'], ['flagA', 'flagB'], {'k': 'v'})), end='')
    [derived] : base = flagA, flagB
    k = v
    """

    header = f"[{name}]"
    if section.inheritances:
        header += " : " + ", ".join(section.inheritances)
    if section.attributes:
        header += " = " + ", ".join(section.attributes)
    lines = [header]
    lines.extend(f"{key} = {value}" for key, value in section.values.items())
    return "\n".join(lines) + "\n"


def render(store: SectionStore) -> str:
    """Return the whole model, one blank line after each section.

    Sections are written in insertion order, which is also a valid parse
    order: a base is always inserted before any section that inherits it.
    """

    return "".join(_blocks(store.items()))


def _blocks(sections: Iterable[tuple[str, Section]]) -> Iterable[str]:
    for name, section in sections:
        yield render_section(name, section)
        yield "\n"
