"""Local filesystem adapters for reading and writing configuration files.

Purpose
-------
Implement :class:`lib_cfg_parser.application.ports.SourceReader` and
:class:`lib_cfg_parser.application.ports.SourceWriter` on top of
:mod:`pathlib`, so encoding, handle lifetime and error translation live in one
place.

Contents
--------
* :class:`LocalFileReader` – reads and decodes a file, raising
  :class:`NotFound` / :class:`InvalidFormat`.
* :class:`LocalFileWriter` – writes text with ``\\n`` line endings.

System Role
-----------
Default collaborators wired by :class:`lib_cfg_parser.core.CfgParser`. Every
handle is opened and closed within a single call, so a parse error in the
middle of a file never leaks a descriptor.
"""

from __future__ import annotations

from pathlib import Path

from ...domain.errors import CfgError, InvalidFormat, NotFound
from ...observability import log_debug, log_error


class LocalFileReader:
    """Read configuration files from the local filesystem."""

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def read(self, path: str) -> str:
        """Return the decoded contents of *path*.

        Raises
        ------
        NotFound
            When *path* is not a readable file.
        InvalidFormat
            When the bytes cannot be decoded with :attr:`encoding`.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile(delete=False, suffix='.cfg')
        >>> _ = tmp.write(b"[a]\\nx = 1\\n")
        >>> tmp.close()
        >>> LocalFileReader().read(tmp.name)[:3]
        '[a]'
        >>> Path(tmp.name).unlink()
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f'Cannot open file "{path}".')
        try:
            payload = file_path.read_bytes()
        except OSError as exc:
            raise NotFound(f'Cannot open file "{path}".') from exc
        log_debug("cfg_file_read", stage="load", path=path, size=len(payload))
        try:
            return payload.decode(self.encoding)
        except UnicodeDecodeError as exc:
            log_error("cfg_file_invalid", stage="load", path=path, encoding=self.encoding, error=str(exc))
            raise InvalidFormat(f'Cannot decode file "{path}" as {self.encoding}.') from exc


class LocalFileWriter:
    """Write configuration text to the local filesystem."""

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def write(self, path: str, text: str) -> None:
        """Replace the contents of *path* with *text*.

        Raises
        ------
        CfgError
            When the file cannot be created or written.
        """

        try:
            with open(path, "w", encoding=self.encoding, newline="\n") as handle:
                handle.write(text)
        except OSError as exc:
            log_error("cfg_file_write_failed", stage="save", path=path, error=str(exc))
            raise CfgError(f'Cannot write file "{path}".') from exc
        log_debug("cfg_saved", stage="save", path=path, size=len(text))
