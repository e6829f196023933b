"""Character-driven state machine for the configuration format.

Purpose
-------
Turn configuration text into mutations of a
:class:`~lib_cfg_parser.domain.model.SectionStore` in a single pass. Every
character is classified (:func:`~lib_cfg_parser.domain.states.classify`) and
handed to the handler for its class, which decides what to do from the current
:class:`~lib_cfg_parser.domain.states.ParseState`.

Contents
--------
* :func:`parse_text` – public entry point used by the composition root.
* :class:`_ParseRun` – scratch buffers and transition handlers for one file.
* :data:`ESCAPES` – escape sequences understood inside quoted values.

System Role
-----------
Problems are never raised: they are handed to the ``report`` callback as
:class:`~lib_cfg_parser.domain.model.Diagnostic` objects and the offending
line is abandoned through the ``ERROR`` state. ``#include`` directives are
delegated to the ``include`` callback, which parses the target into the same
store before this run continues.
"""

from __future__ import annotations

from typing import Callable, Final

from ..domain.model import Diagnostic, Section, SectionStore, is_identifier_char
from ..domain.states import (
    COMMENT_STATES,
    IDENTIFIER_STATES,
    SPACE_SENSITIVE_STATES,
    CharClass,
    ParseState,
    classify,
)

ESCAPES: Final[dict[str, str]] = {"\\": "\\", "n": "\n", '"': '"', "'": "'"}
"""Character following a backslash inside a quoted value -> decoded text."""

#: Punctuation accepted in unquoted values on top of identifier characters.
_BARE_VALUE_EXTRAS: Final[frozenset[str]] = frozenset(".-+")

ReportFn = Callable[[Diagnostic], None]
IncludeFn = Callable[[str], str | None]


def parse_text(
    text: str,
    store: SectionStore,
    *,
    report: ReportFn,
    include: IncludeFn,
    path: str | None = None,
) -> None:
    """Parse *text* into *store*.

    Parameters
    ----------
    text:
        Full contents of one configuration file. ``\\r\\n`` and lone ``\\r``
        line endings are treated as ``\\n``.
    store:
        Model receiving new sections, bases, attributes and values.
    report:
        Called once per diagnostic.
    include:
        Called with the raw argument of each ``#include <...>`` directive;
        a returned string is reported as a diagnostic at the closing ``>``.
    path:
        Source path attached to diagnostics.

    Examples
    --------
    >>> store = SectionStore()
    >>> parse_text('[a]\\nx = 1\\n[b] : a\\n', store, report=print, include=print)
    >>> store.get('b').inheritances, store.get('a').values
    (['a'], {'x': '1'})
    >>> parse_text('[a]\\n', store, report=print, include=print)
    Error at line 1, character at 3 : Section "a" already exist.
    """

    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    _ParseRun(store, report, include, path).run(normalized)


class _ParseRun:
    """State and scratch buffers for parsing one file."""

    def __init__(self, store: SectionStore, report: ReportFn, include: IncludeFn, path: str | None) -> None:
        self._store = store
        self._report_fn = report
        self._include_fn = include
        self._path = path

        self.state = ParseState.NEW_LINE
        self.line = 1
        self.column = 0
        # Spaces are free while armed; once a token character is consumed a
        # space closes the token and any further token character is an error.
        self.ignore_spaces = True
        self.token_closed = False

        self.section_name = ""
        self.header_closed = False
        # header tokens wait here until the line commits cleanly
        self.header_pending = False
        self.bases: list[str] = []
        self.attributes: list[str] = []
        self.inheritance = ""
        self.attribute = ""
        self.key = ""
        self.key_accepted = False
        self.value = ""
        self.directive = ""
        self.argument = ""
        self.include_opened = False
        self.include_done = False

        self.active: Section | None = None
        self._escape_pending = False
        self._resume_state = ParseState.NEW_LINE

        self._handlers: dict[CharClass, Callable[[str], None]] = {
            CharClass.COMMENT: self._on_comment,
            CharClass.MULTILINE_COMMENT: self._on_multiline_comment,
            CharClass.SPACE: self._on_space,
            CharClass.ESCAPE: self._on_escape,
            CharClass.QUOTE: self._on_quote,
            CharClass.PREPROCESSOR: self._on_preprocessor,
            CharClass.NEWLINE: self._on_newline,
            CharClass.INCLUDE_OPEN: self._on_include_open,
            CharClass.INCLUDE_CLOSE: self._on_include_close,
            CharClass.SECTION_OPEN: self._on_section_open,
            CharClass.SECTION_CLOSE: self._on_section_close,
            CharClass.SEPARATOR: self._on_separator,
            CharClass.INHERIT: self._on_inherit,
            CharClass.ASSIGN: self._on_assign,
            CharClass.OTHER: self._on_other,
        }

    def run(self, text: str) -> None:
        for character in text:
            self.column += 1
            if self._escape_pending:
                self._decode_escape(character)
                continue
            # an abandoned line still honours newlines and block comments
            if self.state is ParseState.ERROR and character not in "\n|":
                continue
            self._handlers[classify(character)](character)
        self._finish()

    # ----- reporting -----------------------------------------------------

    def _report(self, message: str) -> None:
        self._report_fn(Diagnostic(message, line=self.line, column=self.column, path=self._path))

    def _error(self, message: str) -> None:
        self.state = ParseState.ERROR
        self._report(message)

    # ----- commits -------------------------------------------------------

    def _push_inheritance(self) -> None:
        name, self.inheritance = self.inheritance, ""
        if not name or not self.header_pending:
            return
        if name == self.section_name:
            self._report(f'Section "{name}" cannot inherit from itself')
        elif name in self._store:
            self.bases.append(name)
        else:
            self._report(f'Inherited section "{name}" is not exist!')

    def _push_attribute(self) -> None:
        attribute, self.attribute = self.attribute, ""
        if attribute and self.header_pending:
            self.attributes.append(attribute)

    def _commit_header(self) -> None:
        if not self.header_pending:
            return
        self.header_pending = False
        self.active = self._store.insert(self.section_name)
        if self.active is not None:
            self.active.inheritances.extend(self.bases)
            self.active.attributes.extend(self.attributes)
        self.bases = []
        self.attributes = []

    def _accept_key(self) -> None:
        self.key_accepted = False
        if self.active is None:
            return
        if self.key in self.active.values:
            self._report(f'Section "{self.section_name}" key "{self.key}" already exist.')
            return
        self.key_accepted = True

    def _commit_value(self) -> None:
        if self.active is not None and self.key_accepted:
            self.active.values[self.key] = self.value
        self.key = ""
        self.value = ""
        self.key_accepted = False

    def _commit_line(self) -> None:
        """Commit whatever the current line left pending."""

        state = self.state
        if state is ParseState.INHERITANCE:
            self._push_inheritance()
            self._commit_header()
        elif state is ParseState.ATTRIBUTE:
            self._push_attribute()
            self._commit_header()
        elif state is ParseState.SECTION and self.header_closed:
            self._commit_header()
        elif state in (ParseState.VALUE, ParseState.VALUE_ARRAY):
            self._commit_value()
        elif state is ParseState.KEY:
            self._report("New line parse error")
        elif state is ParseState.SECTION and not self.header_closed:
            self._report("Unterminated section header")
        elif state is ParseState.PREPROCESSOR:
            if self.directive == "include":
                self._report("Unterminated include directive")
            elif self.directive:
                self._report(f'Unknown preprocessor directive "{self.directive}"')
            else:
                self._report("Preprocessor parse error")
        elif state is ParseState.INCLUDE and not self.include_done:
            self._report("Unterminated include directive")

    def _rearm_spaces(self) -> None:
        self.ignore_spaces = True
        self.token_closed = False

    def _take_token_char(self) -> bool:
        """Account for one token character; ``False`` when a space split the token."""

        if self.token_closed:
            self._error("Space in wrong place")
            return False
        self.ignore_spaces = False
        return True

    def _reset_line(self) -> None:
        self.state = ParseState.NEW_LINE
        self._rearm_spaces()
        self.inheritance = ""
        self.attribute = ""
        self.key = ""
        self.value = ""
        self.key_accepted = False
        self.header_pending = False
        self.bases = []
        self.attributes = []
        self.directive = ""
        self.argument = ""
        self.include_opened = False
        self.include_done = False

    def _finish(self) -> None:
        if self._escape_pending:
            self._escape_pending = False
            self._report("Unknown escape-sequence symbol")
        if self.state is ParseState.STRING_VALUE:
            self._report("Unterminated string value")
        elif self.state is ParseState.MULTILINE_COMMENT:
            self._report("Unterminated comment block")
        else:
            self._commit_line()
        self._reset_line()

    # ----- handlers ------------------------------------------------------

    def _on_comment(self, character: str) -> None:
        if self.state is ParseState.STRING_VALUE:
            self.value += character
        elif self.state not in COMMENT_STATES:
            self._commit_line()
            self.state = ParseState.COMMENT

    def _on_multiline_comment(self, character: str) -> None:
        if self.state is ParseState.STRING_VALUE:
            self.value += character
        elif self.state is ParseState.MULTILINE_COMMENT:
            self.state = self._resume_state
        else:
            self._resume_state = self.state
            self.state = ParseState.MULTILINE_COMMENT

    def _on_space(self, character: str) -> None:
        state = self.state
        if state is ParseState.STRING_VALUE:
            self.value += character
        elif state is ParseState.PREPROCESSOR:
            if self.directive == "include":
                self.state = ParseState.INCLUDE
            elif self.directive:
                self._error(f'Unknown preprocessor directive "{self.directive}"')
        elif state is ParseState.INCLUDE:
            if self.include_opened and not self.include_done:
                self.argument += character
        elif state in SPACE_SENSITIVE_STATES and not self.ignore_spaces:
            if state is ParseState.SECTION and not self.header_closed:
                self._error("Space in wrong place")
            else:
                self.token_closed = True

    def _on_escape(self, character: str) -> None:
        if self.state is ParseState.STRING_VALUE:
            self._escape_pending = True
        elif self.state not in COMMENT_STATES:
            self._error("Unexpected escape-symbol")

    def _decode_escape(self, character: str) -> None:
        self._escape_pending = False
        decoded = ESCAPES.get(character)
        if decoded is not None:
            self.value += decoded
            return
        self._report("Unknown escape-sequence symbol")
        if character == "\n":
            self._on_newline(character)

    def _on_quote(self, character: str) -> None:
        state = self.state
        if state is ParseState.STRING_VALUE:
            self.state = ParseState.VALUE
        elif state in (ParseState.VALUE, ParseState.VALUE_ARRAY):
            if self._take_token_char():
                self.state = ParseState.STRING_VALUE
        elif state in (ParseState.PREPROCESSOR, ParseState.INCLUDE):
            self._error("Preprocessor parse error")
        elif state not in COMMENT_STATES:
            self._error("Invalid character error")

    def _on_preprocessor(self, character: str) -> None:
        if self.state is ParseState.NEW_LINE:
            self.state = ParseState.PREPROCESSOR
            self.directive = ""
        elif self.state is ParseState.STRING_VALUE:
            self.value += character
        elif self.state not in COMMENT_STATES:
            self._error("Preprocessor parse error")

    def _on_newline(self, character: str) -> None:
        # raw newlines inside quotes are dropped; only the \n escape adds one
        if self.state not in (ParseState.STRING_VALUE, ParseState.MULTILINE_COMMENT):
            self._commit_line()
            self._reset_line()
        self.line += 1
        self.column = 0

    def _on_include_open(self, character: str) -> None:
        state = self.state
        if state is ParseState.STRING_VALUE:
            self.value += character
        elif state is ParseState.INCLUDE:
            if self.include_opened:
                self._error("Preprocessor parse error")
            else:
                self.include_opened = True
        elif state in IDENTIFIER_STATES or state in (ParseState.NEW_LINE, ParseState.PREPROCESSOR):
            self._error("Invalid character error")

    def _on_include_close(self, character: str) -> None:
        state = self.state
        if state is ParseState.STRING_VALUE:
            self.value += character
        elif state is ParseState.INCLUDE:
            if not self.include_opened or self.include_done:
                self._error("Preprocessor parse error")
                return
            self.include_done = True
            target, self.argument = self.argument, ""
            if target:
                rejection = self._include_fn(target)
                if rejection is not None:
                    self._report(rejection)
            else:
                self._report("Empty include path")
        elif state in IDENTIFIER_STATES or state in (ParseState.NEW_LINE, ParseState.PREPROCESSOR):
            self._error("Invalid character error")

    def _on_section_open(self, character: str) -> None:
        if self.state is ParseState.NEW_LINE:
            self.state = ParseState.SECTION
            self.section_name = ""
            self.header_closed = False
            self.header_pending = False
            self.active = None
            self.ignore_spaces = False
        elif self.state is ParseState.STRING_VALUE:
            self.value += character
        elif self.state not in COMMENT_STATES:
            self._error("Section naming parse error")

    def _on_section_close(self, character: str) -> None:
        if self.state is ParseState.SECTION and not self.header_closed:
            if not self.section_name:
                self._error("Empty section name")
                return
            self.header_closed = True
            self._rearm_spaces()
            if self.section_name in self._store:
                self._report(f'Section "{self.section_name}" already exist.')
            else:
                self.header_pending = True
        elif self.state is ParseState.STRING_VALUE:
            self.value += character
        elif self.state not in COMMENT_STATES:
            self._error("Section naming parse error")

    def _on_separator(self, character: str) -> None:
        state = self.state
        if state is ParseState.INHERITANCE:
            self._push_inheritance()
            self._rearm_spaces()
        elif state is ParseState.ATTRIBUTE:
            self._push_attribute()
            self._rearm_spaces()
        elif state in (ParseState.VALUE, ParseState.VALUE_ARRAY):
            # commas stay in the raw value; the coercion layer splits on them
            self.state = ParseState.VALUE_ARRAY
            self.value += character
            self._rearm_spaces()
        elif state is ParseState.STRING_VALUE:
            self.value += character
        elif state not in COMMENT_STATES:
            self._error("Enumeration error")

    def _on_inherit(self, character: str) -> None:
        if self.state is ParseState.SECTION and self.header_closed:
            self.state = ParseState.INHERITANCE
            self._rearm_spaces()
        elif self.state is ParseState.STRING_VALUE:
            self.value += character
        elif self.state not in COMMENT_STATES:
            self._error("Inheritance error")

    def _on_assign(self, character: str) -> None:
        state = self.state
        if state is ParseState.SECTION and self.header_closed:
            self.state = ParseState.ATTRIBUTE
            self._rearm_spaces()
        elif state is ParseState.INHERITANCE:
            self._push_inheritance()
            self.state = ParseState.ATTRIBUTE
            self._rearm_spaces()
        elif state is ParseState.KEY:
            self._accept_key()
            self.state = ParseState.VALUE
            self._rearm_spaces()
        elif state is ParseState.STRING_VALUE:
            self.value += character
        elif state not in COMMENT_STATES:
            self._error("Set value error")

    def _on_other(self, character: str) -> None:
        state = self.state
        if state in COMMENT_STATES:
            return
        if state is ParseState.STRING_VALUE:
            self.value += character
        elif state is ParseState.INCLUDE:
            if self.include_opened and not self.include_done:
                self.argument += character
            else:
                self._error("Preprocessor parse error")
        elif state in (ParseState.VALUE, ParseState.VALUE_ARRAY):
            if not (is_identifier_char(character) or character in _BARE_VALUE_EXTRAS or not character.isascii()):
                self._error("Invalid character error")
            elif self._take_token_char():
                self.value += character
        elif not is_identifier_char(character):
            self._error("Invalid character error")
        elif state is ParseState.PREPROCESSOR:
            self.directive += character
        elif state is ParseState.SECTION and self.header_closed:
            self._error("Section naming parse error")
        elif self._take_token_char():
            self._append_identifier(state, character)

    def _append_identifier(self, state: ParseState, character: str) -> None:
        if state is ParseState.NEW_LINE:
            self.state = ParseState.KEY
            self.key = character
        elif state is ParseState.KEY:
            self.key += character
        elif state is ParseState.SECTION:
            self.section_name += character
        elif state is ParseState.INHERITANCE:
            self.inheritance += character
        elif state is ParseState.ATTRIBUTE:
            self.attribute += character
