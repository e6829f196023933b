"""Parser settings value object."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Final

DEFAULT_MAX_INCLUDE_DEPTH: Final[int] = 16


@dataclass(frozen=True, slots=True)
class ParserSettings:
    """Knobs that shape how files are located, decoded and included.

    Attributes
    ----------
    base_path:
        Prefix prepended verbatim to every ``#include`` target.
    encoding:
        Text encoding used to read and write files.
    max_include_depth:
        Maximum number of files open on the include stack at once, the primary
        file included.

    Examples
    --------
    >>> ParserSettings().with_base_path('conf/').base_path
    'conf/'
    """

    base_path: str = ""
    encoding: str = "utf-8"
    max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH

    def with_base_path(self, base_path: str) -> ParserSettings:
        return replace(self, base_path=base_path)
