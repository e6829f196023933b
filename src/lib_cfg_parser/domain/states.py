"""Parse states and character classes for the configuration state machine.

Purpose
-------
Name the closed set of states the parser can be in and the classes of input
characters that drive transitions between them. Both are plain enumerations;
the transition rules live in :mod:`lib_cfg_parser.application.parser`.

Contents
--------
* :class:`ParseState` – current parse state.
* :class:`CharClass` – category of the next input character.
* :func:`classify` – map one character to its :class:`CharClass`.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Final


class ParseState(Enum):
    """State of the parser between two input characters."""

    NEW_LINE = auto()
    SECTION = auto()
    INHERITANCE = auto()
    ATTRIBUTE = auto()
    KEY = auto()
    VALUE = auto()
    VALUE_ARRAY = auto()
    STRING_VALUE = auto()
    COMMENT = auto()
    MULTILINE_COMMENT = auto()
    PREPROCESSOR = auto()
    INCLUDE = auto()
    ERROR = auto()


class CharClass(Enum):
    """Category of an input character as seen by the transition table."""

    COMMENT = auto()  # ;
    MULTILINE_COMMENT = auto()  # |
    SPACE = auto()
    ESCAPE = auto()  # backslash
    QUOTE = auto()  # "
    PREPROCESSOR = auto()  # #
    NEWLINE = auto()
    INCLUDE_OPEN = auto()  # <
    INCLUDE_CLOSE = auto()  # >
    SECTION_OPEN = auto()  # [
    SECTION_CLOSE = auto()  # ]
    SEPARATOR = auto()  # ,
    INHERIT = auto()  # :
    ASSIGN = auto()  # =
    OTHER = auto()


#: States whose scratch buffer only accepts identifier characters.
IDENTIFIER_STATES: Final[frozenset[ParseState]] = frozenset(
    {ParseState.SECTION, ParseState.INHERITANCE, ParseState.ATTRIBUTE, ParseState.KEY}
)

#: States in which a space ends the token being accumulated.
SPACE_SENSITIVE_STATES: Final[frozenset[ParseState]] = IDENTIFIER_STATES | {ParseState.VALUE, ParseState.VALUE_ARRAY}

#: States that swallow every structural character until they are closed.
COMMENT_STATES: Final[frozenset[ParseState]] = frozenset({ParseState.COMMENT, ParseState.MULTILINE_COMMENT})

_CLASSES: Final[dict[str, CharClass]] = {
    ";": CharClass.COMMENT,
    "|": CharClass.MULTILINE_COMMENT,
    " ": CharClass.SPACE,
    "\t": CharClass.SPACE,
    "\\": CharClass.ESCAPE,
    '"': CharClass.QUOTE,
    "#": CharClass.PREPROCESSOR,
    "\n": CharClass.NEWLINE,
    "<": CharClass.INCLUDE_OPEN,
    ">": CharClass.INCLUDE_CLOSE,
    "[": CharClass.SECTION_OPEN,
    "]": CharClass.SECTION_CLOSE,
    ",": CharClass.SEPARATOR,
    ":": CharClass.INHERIT,
    "=": CharClass.ASSIGN,
}


def classify(character: str) -> CharClass:
    """Return the :class:`CharClass` of *character*.

    Examples
    --------
    >>> classify('['), classify('a')
    (<CharClass.SECTION_OPEN: 10>, <CharClass.OTHER: 15>)
    """

    return _CLASSES.get(character, CharClass.OTHER)
