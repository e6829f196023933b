"""CLI adapter for ``lib_cfg_parser`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators inspect, query, validate and reformat configuration files
without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_dump` – prints the loaded model as JSON.
* :func:`cli_get` – prints one typed value (or array).
* :func:`cli_check` – lists diagnostics and fails when there are any.
* :func:`cli_format` – rewrites a file in canonical form.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It drives
:class:`lib_cfg_parser.core.CfgParser` and never reaches into the parser or
adapters directly. ``lib_cli_exit_tools`` centralises the exit code strategy
so all commands behave consistently across shells and CI.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.diagnostics.default import CollectingSink
from .adapters.env.default import load_settings
from .core import CfgParser
from .domain.errors import CoercionError

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

VALUE_TYPES: Final[dict[str, type]] = {"str": str, "bool": bool, "int": int, "float": float}


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when not installed."""

    try:
        return metadata.version("lib_cfg_parser")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _open(path: str, base_path: Optional[str], sink: CollectingSink) -> CfgParser:
    """Load *path* with settings from the environment and an optional base path override."""

    settings = load_settings()
    if base_path is not None:
        settings = settings.with_base_path(base_path)
    return CfgParser(path, settings=settings, sink=sink)


def _echo_diagnostics(sink: CollectingSink) -> None:
    for message in sink.messages:
        click.echo(message, err=True)


base_path_option = click.option(
    "--base-path",
    default=None,
    help="Prefix prepended to #include targets (overrides LIB_CFG_PARSER_BASE_PATH)",
)


@click.group(
    help="Sectioned configuration file parser",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_cfg_parser",
    message="lib_cfg_parser version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_cfg_parser")
    except metadata.PackageNotFoundError:
        click.echo("lib_cfg_parser (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_cfg_parser')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("dump", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("path")
@base_path_option
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
def cli_dump(path: str, base_path: Optional[str], indent: Optional[int]) -> None:
    """Load PATH and print every section as JSON.

    Diagnostics go to stderr; the JSON on stdout reflects whatever loaded.
    """

    sink = CollectingSink()
    config = _open(path, base_path, sink)
    _echo_diagnostics(sink)
    click.echo(config.section_data().to_json(indent=indent))


@cli.command("get", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("path")
@click.argument("section")
@click.argument("key")
@base_path_option
@click.option("--default", "default", default=None, help="Printed when the key is missing or empty")
@click.option(
    "--type",
    "type_name",
    type=click.Choice(tuple(VALUE_TYPES), case_sensitive=False),
    default="str",
    show_default=True,
    help="Convert the raw value before printing",
)
@click.option("--array/--no-array", default=False, help="Split the value on commas and print a JSON array")
def cli_get(
    path: str,
    section: str,
    key: str,
    base_path: Optional[str],
    default: Optional[str],
    type_name: str,
    array: bool,
) -> None:
    """Print the value of KEY as seen from SECTION (base sections included).

    Examples
    --------
    >>> from pathlib import Path
    >>> from click.testing import CliRunner
    >>> runner = CliRunner()
    >>> with runner.isolated_filesystem():
    ...     _ = Path('a.cfg').write_text('[a]\\nn = 1, 2\\n', encoding='utf-8')
    ...     result = runner.invoke(cli, ['get', 'a.cfg', 'a', 'n', '--type', 'int', '--array'])
    >>> result.output.strip()
    '[1,2]'
    """

    sink = CollectingSink()
    config = _open(path, base_path, sink)
    _echo_diagnostics(sink)
    value_type = VALUE_TYPES[type_name.lower()]
    try:
        if array:
            click.echo(json.dumps(config.get_array(section, key, value_type), separators=(",", ":")))
            return
        value = config.get(section, key, value_type)
    except CoercionError as exc:
        raise click.ClickException(str(exc)) from exc
    if value is None:
        if default is None:
            raise click.ClickException(f'Key "{key}" not found in section "{section}"')
        click.echo(default)
        return
    click.echo(json.dumps(value) if isinstance(value, bool) else value)


@cli.command("check", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("path")
@base_path_option
@click.pass_context
def cli_check(ctx: click.Context, path: str, base_path: Optional[str]) -> None:
    """Load PATH and list every diagnostic; exit with status 1 when there are any."""

    sink = CollectingSink()
    config = _open(path, base_path, sink)
    for message in sink.messages:
        click.echo(message)
    if sink.messages:
        ctx.exit(1)
    click.echo(f"{config.current_file}: {config.section_count} section(s), no problems found")


@cli.command("format", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("path")
@base_path_option
@click.option("--output", default=None, help="Write here instead of overwriting PATH")
@click.pass_context
def cli_format(ctx: click.Context, path: str, base_path: Optional[str], output: Optional[str]) -> None:
    """Rewrite PATH (or write OUTPUT) in canonical form.

    Comments are dropped and included files are inlined.
    """

    sink = CollectingSink()
    config = _open(path, base_path, sink)
    _echo_diagnostics(sink)
    if sink.messages:
        raise click.ClickException(f"Refusing to format {path}: it has {len(sink.messages)} problem(s)")
    target = output or path
    config.save(target)
    if sink.messages:
        _echo_diagnostics(sink)
        ctx.exit(1)
    click.echo(target)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_cfg_parser",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
