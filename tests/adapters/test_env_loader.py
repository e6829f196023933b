"""Environment settings adapter tests.

The scenarios cover prefix naming, partial overrides and invalid depth values.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_cfg_parser.adapters.env.default import ENV_PREFIX, load_settings
from lib_cfg_parser.domain.errors import CfgError
from lib_cfg_parser.domain.settings import ParserSettings


def test_no_variables_returns_defaults() -> None:
    assert load_settings(environ={"OTHER": "ignored"}) == ParserSettings()


def test_all_overrides() -> None:
    environ = {
        f"{ENV_PREFIX}_BASE_PATH": "conf/",
        f"{ENV_PREFIX}_ENCODING": "latin-1",
        f"{ENV_PREFIX}_MAX_INCLUDE_DEPTH": "3",
        f"{ENV_PREFIX}_UNKNOWN": "ignored",
    }
    assert load_settings(environ=environ) == ParserSettings(base_path="conf/", encoding="latin-1", max_include_depth=3)


def test_overrides_apply_on_top_of_base() -> None:
    base = ParserSettings(base_path="data/", max_include_depth=5)
    settings = load_settings(environ={f"{ENV_PREFIX}_ENCODING": "utf-16"}, base=base)
    assert settings == ParserSettings(base_path="data/", encoding="utf-16", max_include_depth=5)


def test_empty_base_path_is_an_override() -> None:
    base = ParserSettings(base_path="data/")
    assert load_settings(environ={f"{ENV_PREFIX}_BASE_PATH": ""}, base=base).base_path == ""


def test_custom_prefix() -> None:
    settings = load_settings(environ={"GAME_BASE_PATH": "game/"}, prefix="GAME")
    assert settings.base_path == "game/"


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(f"{ENV_PREFIX}_BASE_PATH", "from-env/")
    assert load_settings().base_path == "from-env/"


@pytest.mark.parametrize("raw", ["abc", "1.5", "0", "-2"])
def test_invalid_depth(raw: str) -> None:
    with pytest.raises(CfgError, match="MAX_INCLUDE_DEPTH"):
        load_settings(environ={f"{ENV_PREFIX}_MAX_INCLUDE_DEPTH": raw})


@given(st.integers(min_value=1, max_value=10_000))
def test_positive_depths_round_trip(depth: int) -> None:
    settings = load_settings(environ={f"{ENV_PREFIX}_MAX_INCLUDE_DEPTH": str(depth)})
    assert settings.max_include_depth == depth
