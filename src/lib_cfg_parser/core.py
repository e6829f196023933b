"""Composition root for ``lib_cfg_parser``.

Purpose
-------
Provide the configuration instance applications hold on to: it wires the file
adapters, the diagnostic sink, the include stack and the state machine
together, and answers typed ``(section, key)`` queries once loading is done.

Contents
--------
* :class:`CfgParser` – load/save, introspection, lookup and the value setter.
* :func:`load_config` – one-call convenience wrapper.

System Role
-----------
The only module that knows about every layer. Parse problems, missing files
and rejected includes are turned into
:class:`~lib_cfg_parser.domain.model.Diagnostic` objects here and delivered to
the registered sink; numeric conversion failures are the only errors that
propagate to callers.

Thread safety
-------------
An instance is not synchronised. Reading it from several threads is safe once
:meth:`CfgParser.load` has returned and nobody calls :meth:`CfgParser.load`,
:meth:`CfgParser.set` or :meth:`CfgParser.set_base_path` concurrently.
"""

from __future__ import annotations

from typing import Any, Sequence, TypeVar

from .adapters.diagnostics.default import logging_sink
from .adapters.file_io.local import LocalFileReader, LocalFileWriter
from .application.coercion import coerce, coerce_array
from .application.includes import IncludeStack, resolve_include
from .application.lookup import get_string, resolving_section
from .application.parser import parse_text
from .application.ports import DiagnosticSink, SourceReader, SourceWriter
from .application.serializer import render
from .domain.errors import CfgError, InvalidFormat, NotFound
from .domain.model import Diagnostic, SectionStore
from .domain.settings import ParserSettings
from .domain.snapshot import ModelSnapshot
from .observability import log_debug, log_info, make_event

T = TypeVar("T", bool, int, float, str)


class CfgParser:
    """A configuration loaded from one or more files.

    Parameters
    ----------
    path:
        Optional file loaded immediately.
    settings:
        Base path, encoding and include depth limit.
    sink:
        Receives every formatted diagnostic. Defaults to
        :func:`~lib_cfg_parser.adapters.diagnostics.default.logging_sink`;
        ``None`` discards diagnostics (they are still kept in
        :attr:`diagnostics`).
    reader / writer:
        I/O backends; default to the local filesystem with
        ``settings.encoding``.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> from pathlib import Path
    >>> tmp = TemporaryDirectory()
    >>> target = Path(tmp.name) / 'game.cfg'
    >>> _ = target.write_text('[a]\\nx = 1\\n[b] : a\\ny = 2\\n', encoding='utf-8')
    >>> cfg = CfgParser(str(target))
    >>> cfg.get_string('b', 'x', '_'), cfg.get_int('b', 'y'), cfg.is_inherited_from('b', 'a')
    ('1', 2, True)
    >>> tmp.cleanup()
    """

    def __init__(
        self,
        path: str | None = None,
        *,
        settings: ParserSettings | None = None,
        sink: DiagnosticSink | None = logging_sink,
        reader: SourceReader | None = None,
        writer: SourceWriter | None = None,
    ) -> None:
        self._settings = settings or ParserSettings()
        self._sink = sink
        self._reader = reader or LocalFileReader(encoding=self._settings.encoding)
        self._writer = writer or LocalFileWriter(encoding=self._settings.encoding)
        self._store = SectionStore()
        self._includes = IncludeStack(max_depth=self._settings.max_include_depth)
        self._current_file = ""
        self._diagnostics: list[Diagnostic] = []
        if path is not None:
            self.load(path)

    # ===== Configuration =====

    @property
    def settings(self) -> ParserSettings:
        return self._settings

    @property
    def base_path(self) -> str:
        """Prefix prepended to every ``#include`` target."""

        return self._settings.base_path

    def set_base_path(self, path: str) -> None:
        self._settings = self._settings.with_base_path(path)

    def set_message_sink(self, sink: DiagnosticSink | None) -> None:
        """Replace the diagnostic sink; ``None`` silences diagnostics."""

        self._sink = sink

    @property
    def current_file(self) -> str:
        """Path of the most recently loaded top-level file (``""`` before any load)."""

        return self._current_file

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Diagnostics emitted since the most recent :meth:`load` started."""

        return list(self._diagnostics)

    # ===== Loading and saving =====

    def load(self, path: str) -> None:
        """Parse *path* (and everything it includes) into this configuration.

        Sections already present stay in place; a file that redefines one of
        them gets a duplicate-section diagnostic. I/O problems are reported to
        the sink and leave the model unchanged.
        """

        self._diagnostics = []
        self._load_file(path)
        log_info(
            "cfg_loaded",
            **make_event("load", path, {"sections": len(self._store), "diagnostics": len(self._diagnostics)}),
        )

    def load_text(self, text: str, *, name: str = "<string>") -> None:
        """Parse *text* as if it were the contents of a file called *name*.

        Include directives inside *text* are resolved against :attr:`base_path`
        like those of any other file. *name* only labels diagnostics;
        :attr:`current_file` is left as it was, so :meth:`save_current` never
        targets it.
        """

        self._diagnostics = []
        self._parse(text, name)
        log_info("cfg_loaded", **make_event("load", name, {"sections": len(self._store)}))

    def save(self, path: str) -> None:
        """Write the model to *path* in canonical form.

        A write failure is reported to the sink instead of being raised.
        """

        try:
            self._writer.write(path, render(self._store))
        except CfgError as exc:
            self._emit(Diagnostic(str(exc), path=path))
            return
        log_info("cfg_saved", **make_event("save", path, {"sections": len(self._store)}))

    def save_current(self) -> None:
        """Write the model back to :attr:`current_file`."""

        if not self._current_file:
            self._emit(Diagnostic("No file has been loaded yet."))
            return
        self.save(self._current_file)

    def _load_file(self, path: str) -> None:
        self._current_file = path
        try:
            text = self._reader.read(path)
        except (NotFound, InvalidFormat) as exc:
            log_debug("cfg_file_missing", **make_event("load", path, {"error": str(exc)}))
            self._emit(Diagnostic(str(exc), path=path))
            return
        self._parse(text, path)

    def _parse(self, text: str, path: str) -> None:
        self._includes.push(path)
        try:
            parse_text(text, self._store, report=self._emit, include=self._include, path=path)
        finally:
            self._includes.pop()
        log_debug("cfg_file_loaded", **make_event("load", path, {"depth": self._includes.depth}))

    def _include(self, relative: str) -> str | None:
        target = resolve_include(self._settings.base_path, relative)
        rejection = self._includes.rejection(target)
        if rejection is not None:
            log_debug("cfg_include_rejected", **make_event("include", target, {"reason": rejection}))
            return rejection
        log_debug("cfg_include_enter", **make_event("include", target, {"depth": self._includes.depth}))
        saved = self._current_file
        try:
            self._load_file(target)
        finally:
            self._current_file = saved
        return None

    def _emit(self, diagnostic: Diagnostic) -> None:
        self._diagnostics.append(diagnostic)
        if self._sink is not None:
            self._sink(str(diagnostic))

    def _missing_section(self, section: str) -> None:
        self._emit(Diagnostic(f'Section "{section}" is not exist!'))

    # ===== Introspection =====

    @property
    def section_count(self) -> int:
        return len(self._store)

    def has_section(self, section: str) -> bool:
        return section in self._store

    def has_key(self, section: str, key: str) -> bool:
        """Return whether *section* itself binds *key* (bases are not consulted)."""

        record = self._store.get(section)
        if record is None:
            self._missing_section(section)
            return False
        return key in record.values

    def section_data(self) -> ModelSnapshot:
        """Return an immutable snapshot of every section."""

        return ModelSnapshot.from_store(self._store)

    def get_inheritances(self, section: str) -> list[str]:
        record = self._store.get(section)
        if record is None:
            self._missing_section(section)
            return []
        return list(record.inheritances)

    def has_inheritances(self, section: str) -> bool:
        record = self._store.get(section)
        if record is None:
            self._missing_section(section)
            return False
        return bool(record.inheritances)

    def is_inherited_from(self, section: str, base_section: str) -> bool:
        record = self._store.get(section)
        return record is not None and base_section in record.inheritances

    def get_attributes(self, section: str) -> list[str]:
        record = self._store.get(section)
        if record is None:
            self._missing_section(section)
            return []
        return list(record.attributes)

    def has_attributes(self, section: str) -> bool:
        record = self._store.get(section)
        if record is None:
            self._missing_section(section)
            return False
        return bool(record.attributes)

    def has_attribute(self, section: str, attribute: str) -> bool:
        record = self._store.get(section)
        return record is not None and attribute in record.attributes

    # ===== Values =====

    def get_string(self, section: str, key: str, default: str = "") -> str:
        """Return the raw value for ``(section, key)``, consulting direct bases in order."""

        return get_string(self._store, section, key, default)

    def value_origin(self, section: str, key: str) -> str | None:
        """Return the name of the section that supplies ``(section, key)``, if any."""

        return resolving_section(self._store, section, key)

    def get(self, section: str, key: str, type_: type[T], default: T | None = None) -> T | None:
        """Return the value converted to *type_*; *default* when missing or empty.

        Raises
        ------
        CoercionError
            When the stored text is not a valid literal for *type_*.
        """

        raw = self.get_string(section, key)
        if not raw:
            return default
        return coerce(raw, type_)

    def get_bool(self, section: str, key: str, default: bool = False) -> bool:
        return self.get(section, key, bool, default)  # type: ignore[return-value]

    def get_int(self, section: str, key: str, default: int = 0) -> int:
        return self.get(section, key, int, default)  # type: ignore[return-value]

    def get_float(self, section: str, key: str, default: float = 0.0) -> float:
        return self.get(section, key, float, default)  # type: ignore[return-value]

    def get_array(self, section: str, key: str, type_: type[T] = str) -> list[T]:  # type: ignore[assignment]
        """Return the comma-separated value converted element-wise; ``[]`` when missing."""

        return coerce_array(self.get_string(section, key), type_)

    def set(self, section: str, key: str, value: Any) -> None:
        """Replace the raw value of an existing ``(section, key)`` pair.

        Booleans are stored as ``true``/``false``, sequences as comma-joined
        text, anything else through :class:`str`. Missing sections or keys are
        reported to the sink and nothing changes.
        """

        record = self._store.get(section)
        if record is None:
            self._missing_section(section)
            return
        if key not in record.values:
            self._emit(Diagnostic(f'Section "{section}" key "{key}" is not exist!'))
            return
        record.values[key] = _render_value(value)
        log_debug("cfg_value_set", **make_event("set", None, {"section": section, "key": key}))


def _render_value(value: Any) -> str:
    """Return the raw text stored for *value*.

    Examples
    --------
    >>> _render_value(True), _render_value(24), _render_value([1, 2, 3])
    ('true', '24', '1,2,3')
    """

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, Sequence):
        return ",".join(_render_value(item) for item in value)
    return str(value)


def load_config(
    path: str,
    *,
    base_path: str | None = None,
    sink: DiagnosticSink | None = logging_sink,
    settings: ParserSettings | None = None,
) -> CfgParser:
    """Load *path* into a new :class:`CfgParser` and return it.

    Examples
    --------
    >>> from lib_cfg_parser.adapters.diagnostics.default import CollectingSink
    >>> sink = CollectingSink()
    >>> cfg = load_config('does-not-exist.cfg', sink=sink)
    >>> sink.messages
    ['Cannot open file "does-not-exist.cfg".']
    >>> cfg.section_count
    0
    """

    resolved = settings or ParserSettings()
    if base_path is not None:
        resolved = resolved.with_base_path(base_path)
    return CfgParser(path, settings=resolved, sink=sink)


__all__ = [
    "CfgParser",
    "load_config",
]
