"""CLI adapter for ``lib_mapping_literal`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose formatting, merging, and filtering of structured files via a command
line interface so operators can produce mapping-literal files without writing
Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_format` – renders a JSON/TOML/YAML file as a mapping literal.
* :func:`cli_merge` – merges override files onto a base file.
* :func:`cli_filter` – removes entries by value, kind, or key.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It calls the composition root
(:mod:`lib_mapping_literal.core`) and never reaches into adapter details.
``lib_cli_exit_tools`` centralises the exit code strategy so all commands
behave consistently across shells and CI.
"""

from __future__ import annotations

import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Final, Mapping, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .core import load_mapping, merge_mappings, read_mappings, remove_entries, save_mapping
from .domain.values import ValueKind
from .formatting.literal import format_literal

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

KIND_CHOICES: Final[tuple[str, ...]] = tuple(kind.value for kind in ValueKind)

_SOURCE_PATH = click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True)
_OUTPUT_PATH = click.Path(path_type=Path, file_okay=True, dir_okay=False, writable=True)


def _resolve_version() -> str:
    """Return the installed package version, or ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version("lib_mapping_literal")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Convert, filter, merge, and format nested mappings as literals",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_mapping_literal",
    message="lib_mapping_literal version %(version)s",
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
        meta = metadata.metadata("lib_mapping_literal")
    except metadata.PackageNotFoundError:
        click.echo("lib_mapping_literal (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_mapping_literal')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("format", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("source", type=_SOURCE_PATH)
@click.option(
    "--indent-level",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Indentation level of the outermost entries",
)
@click.option("--align-keys/--no-align-keys", default=False, help="Pad keys so '=' signs line up")
@click.option(
    "--nest-sequences/--flatten-sequences",
    default=False,
    help="Render nested sequences as nested blocks instead of splicing them",
)
@click.option("--output", type=_OUTPUT_PATH, default=None, help="Write to this file (format chosen by suffix)")
def cli_format(
    source: Path,
    indent_level: int,
    align_keys: bool,
    nest_sequences: bool,
    output: Optional[Path],
) -> None:
    """Render SOURCE (JSON, TOML, or YAML) as a mapping literal.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> runner = CliRunner()
    >>> with runner.isolated_filesystem():
    ...     _ = Path("demo.json").write_text('{"Name": "demo"}', encoding="utf-8")
    ...     result = runner.invoke(cli, ["format", "demo.json"])
    >>> print(result.output, end="")
    @{
        Name = 'demo'
    }
    """

    options = {"indent_level": indent_level, "align_keys": align_keys, "flatten_sequences": not nest_sequences}
    _emit(load_mapping(source), output, options)


@cli.command("merge", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("base", type=_SOURCE_PATH)
@click.argument("overrides", nargs=-1, type=_SOURCE_PATH)
@click.option(
    "--force/--no-force",
    default=False,
    show_default=True,
    help="Let empty override values replace existing values",
)
@click.option("--output", type=_OUTPUT_PATH, default=None, help="Write to this file (format chosen by suffix)")
def cli_merge(base: Path, overrides: Sequence[Path], force: bool, output: Optional[Path]) -> None:
    """Merge OVERRIDES onto BASE in order; the last non-empty value wins."""

    base_mapping, *override_mappings = read_mappings([base, *overrides])
    _emit(merge_mappings(base_mapping, override_mappings, force=force), output, {})


@cli.command("filter", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("source", type=_SOURCE_PATH)
@click.option("--null-or-empty", is_flag=True, default=False, help="Remove entries whose value is null or ''")
@click.option("--keep-null-or-empty", is_flag=True, default=False, help="Never remove null or '' entries")
@click.option("--remove-all", is_flag=True, default=False, help="Remove every entry not protected by a keep rule")
@click.option(
    "--remove-type",
    "remove_types",
    multiple=True,
    type=click.Choice(KIND_CHOICES, case_sensitive=False),
    help="Remove entries whose value has this kind (repeatable)",
)
@click.option("--remove-key", "remove_keys", multiple=True, help="Remove this key (repeatable)")
@click.option(
    "--keep-type",
    "keep_types",
    multiple=True,
    type=click.Choice(KIND_CHOICES, case_sensitive=False),
    help="Keep entries whose value has this kind (repeatable)",
)
@click.option("--keep-key", "keep_keys", multiple=True, help="Keep this key (repeatable)")
@click.option("--output", type=_OUTPUT_PATH, default=None, help="Write to this file (format chosen by suffix)")
def cli_filter(
    source: Path,
    null_or_empty: bool,
    keep_null_or_empty: bool,
    remove_all: bool,
    remove_types: Sequence[str],
    remove_keys: Sequence[str],
    keep_types: Sequence[str],
    keep_keys: Sequence[str],
    output: Optional[Path],
) -> None:
    """Remove top-level entries of SOURCE; keep rules win over remove rules."""

    mapping = remove_entries(
        load_mapping(source),
        null_or_empty=null_or_empty,
        remove_types=_normalize_kinds(remove_types),
        remove_keys=remove_keys,
        keep_types=_normalize_kinds(keep_types),
        keep_keys=keep_keys,
        remove_all=remove_all,
        keep_null_or_empty=keep_null_or_empty,
    )
    _emit(mapping, output, {})


def _emit(mapping: Mapping[str, Any], output: Optional[Path], options: Mapping[str, Any]) -> None:
    """Print *mapping* as a literal, or save it to *output* and print the path."""

    if output is None:
        click.echo(format_literal(mapping, **options))
        return
    click.echo(str(save_mapping(mapping, output, **options)))


def _normalize_kinds(values: Sequence[str]) -> tuple[ValueKind, ...]:
    """Translate CLI kind names into :class:`ValueKind` members preserving order."""

    return tuple(ValueKind.parse(value) for value in values)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_mapping_literal",
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
