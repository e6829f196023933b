"""Shared fixtures for the configuration parser test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from lib_cfg_parser import CfgParser, CollectingSink


@pytest.fixture()
def sink() -> CollectingSink:
    """Fresh diagnostic collector per test."""

    return CollectingSink()


@pytest.fixture()
def write_cfg(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing ``body`` to ``tmp_path / relative`` (parents created)."""

    def _write(relative: str, body: str) -> Path:
        target = tmp_path / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(body, encoding="utf-8")
        return target

    return _write


@pytest.fixture()
def parse_cfg(sink: CollectingSink) -> Callable[[str], CfgParser]:
    """Return a helper loading literal text into a new :class:`CfgParser` wired to ``sink``."""

    def _parse(text: str) -> CfgParser:
        config = CfgParser(sink=sink)
        config.load_text(text)
        return config

    return _parse


