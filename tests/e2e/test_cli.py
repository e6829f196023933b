"""End-to-end CLI coverage for the commands exposed by lib_cfg_parser.

Each test writes real configuration files under ``tmp_path`` and drives the
Click group through :class:`click.testing.CliRunner`.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import lib_cli_exit_tools
from click.testing import CliRunner

from lib_cfg_parser import cli

GAME = "[base]\nspeed = 10\nflying = yes\n[unit] : base = armored\nhp = 5\nloot = 1,2,3\n"


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


def test_cli_dump_outputs_json(write_cfg) -> None:
    path = write_cfg("game.cfg", GAME)
    result = _runner().invoke(cli.cli, ["dump", str(path), "--indent", "2"])
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["unit"] == {"inheritances": ["base"], "attributes": ["armored"], "values": {"hp": "5", "loot": "1,2,3"}}


def test_cli_dump_follows_includes_with_base_path(tmp_path: Path, write_cfg) -> None:
    write_cfg("lib/base.cfg", "[base]\nspeed = 3\n")
    path = write_cfg("main.cfg", "#include <base.cfg>\n[unit] : base\n")
    result = _runner().invoke(cli.cli, ["dump", str(path), "--base-path", str(tmp_path / "lib") + os.sep])
    assert result.exit_code == 0
    assert list(json.loads(result.output)) == ["base", "unit"]


def test_cli_get_inherited_value(write_cfg) -> None:
    path = write_cfg("game.cfg", GAME)
    result = _runner().invoke(cli.cli, ["get", str(path), "unit", "speed", "--type", "int"])
    assert result.exit_code == 0
    assert result.output.strip() == "10"


def test_cli_get_bool_and_array(write_cfg) -> None:
    path = write_cfg("game.cfg", GAME)
    runner = _runner()
    flag = runner.invoke(cli.cli, ["get", str(path), "unit", "flying", "--type", "bool"])
    loot = runner.invoke(cli.cli, ["get", str(path), "unit", "loot", "--type", "int", "--array"])
    assert flag.output.strip() == "true"
    assert json.loads(loot.output) == [1, 2, 3]


def test_cli_get_missing_key(write_cfg) -> None:
    path = write_cfg("game.cfg", GAME)
    runner = _runner()
    missing = runner.invoke(cli.cli, ["get", str(path), "unit", "mana"])
    defaulted = runner.invoke(cli.cli, ["get", str(path), "unit", "mana", "--default", "0"])
    assert missing.exit_code == 1
    assert 'Key "mana" not found in section "unit"' in missing.output
    assert defaulted.exit_code == 0
    assert defaulted.output.strip() == "0"


def test_cli_get_conversion_failure(write_cfg) -> None:
    path = write_cfg("game.cfg", "[a]\nname = hawk\n")
    result = _runner().invoke(cli.cli, ["get", str(path), "a", "name", "--type", "int"])
    assert result.exit_code == 1
    assert "Cannot convert 'hawk' to int" in result.output


def test_cli_check_clean_file(write_cfg) -> None:
    path = write_cfg("game.cfg", GAME)
    result = _runner().invoke(cli.cli, ["check", str(path)])
    assert result.exit_code == 0
    assert "2 section(s), no problems found" in result.output


def test_cli_check_reports_problems(write_cfg) -> None:
    path = write_cfg("broken.cfg", "[a]\nk-ey = 1\n[b] : ghost\n")
    result = _runner().invoke(cli.cli, ["check", str(path)])
    assert result.exit_code == 1
    lines = result.output.strip().splitlines()
    assert lines == [
        "Error at line 2, character at 2 : Invalid character error",
        'Error at line 3, character at 12 : Inherited section "ghost" is not exist!',
    ]


def test_cli_check_missing_file(tmp_path: Path) -> None:
    missing = str(tmp_path / "missing.cfg")
    result = _runner().invoke(cli.cli, ["check", missing])
    assert result.exit_code == 1
    assert f'Cannot open file "{missing}".' in result.output


def test_cli_format_rewrites_in_canonical_form(tmp_path: Path, write_cfg) -> None:
    path = write_cfg("game.cfg", "; units\n[base]   ; root\nspeed=10\n[unit]:base=armored\nhp = 5\n")
    target = tmp_path / "formatted.cfg"
    result = _runner().invoke(cli.cli, ["format", str(path), "--output", str(target)])
    assert result.exit_code == 0
    assert result.output.strip() == str(target)
    assert target.read_text(encoding="utf-8") == "[base]\nspeed = 10\n\n[unit] : base = armored\nhp = 5\n\n"


def test_cli_format_refuses_broken_input(write_cfg) -> None:
    original = "[a]\nk-ey = 1\n"
    path = write_cfg("broken.cfg", original)
    result = _runner().invoke(cli.cli, ["format", str(path)])
    assert result.exit_code == 1
    assert path.read_text(encoding="utf-8") == original


def test_cli_base_path_from_environment(tmp_path: Path, write_cfg) -> None:
    write_cfg("lib/base.cfg", "[base]\n")
    path = write_cfg("main.cfg", "#include <base.cfg>\n")
    env = {"LIB_CFG_PARSER_BASE_PATH": str(tmp_path / "lib") + os.sep}
    result = _runner().invoke(cli.cli, ["check", str(path)], env=env)
    assert result.exit_code == 0


def test_cli_info_handles_missing_metadata(monkeypatch) -> None:
    """`cli info` must degrade gracefully when package metadata is unavailable."""

    def _raise_pkg_not_found(*_args, **_kwargs):
        raise cli.metadata.PackageNotFoundError()

    monkeypatch.setattr(cli.metadata, "metadata", _raise_pkg_not_found)
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "metadata unavailable" in result.output


def test_cli_main_restores_traceback_flag(write_cfg) -> None:
    """`cli main` should restore lib_cli_exit_tools tracebacks after execution."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    path = write_cfg("game.cfg", GAME)
    exit_code = cli.main(["--traceback", "dump", str(path)], restore_traceback=True)
    assert exit_code == 0
    assert getattr(lib_cli_exit_tools.config, "traceback", False) == previous_traceback
