"""
Builds a single self-contained HTML document from gendoc markup files.
The output format follows the output file extension (``.json`` records the
rendering events instead).
"""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__
from .config import ConfigError, apply_overrides, build_config
from .exceptions import EmptyTocError, OutputWriteError, RuleSetError
from .filesystem import get_max_file_size, write_output
from .highlight import RuleRegistry
from .session import Session
from .writers import create_writer, writer_for_path

__all__ = ["cli"]

INCOMPLETE_NOTICE = (
    "gendoc: there were errors during generation, your documentation is saved, "
    "but it is probably incomplete!"
)


class OutputFailure(click.ClickException):
    """The output document could not be written."""

    exit_code = 2


class EmptyDocument(click.ClickException):
    """The inputs did not produce a single heading or caption."""

    exit_code = 3


def _echo_err(message: str) -> None:
    click.echo(message, err=True)


@click.command()
@click.version_option(version=__version__, prog_name="gendoc")
@click.option(
    "--rules-dir",
    "rules_dirs",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Extra directory of <language>.toml highlight rules (repeatable)",
)
@click.option("--strict/--no-strict", default=None, help="Exit with status 1 when errors were reported")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("inputs", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def cli(
    output: Path,
    inputs: tuple[str, ...],
    rules_dirs: tuple[Path, ...] = (),
    strict: bool | None = None,
):
    """
    Entry point for building a document.

    Args:
        output: Path of the document to write.
        inputs: Markup files, parsed in order into one document.
        rules_dirs: Extra highlight rule directories.
        strict: Override for the `strict` setting.

    Returns:
        None.

    Raises:
        click.BadParameter: If the configuration or a highlight rule file is
            invalid.
        click.ClickException: If the size limit from the environment is
            invalid, the output cannot be written (exit status 2) or no table
            of contents was found (exit status 3).

    Examples:
        gendoc manual.html manual.xml --rules-dir rules/
    """
    try:
        config = build_config(
            Path(inputs[0]).parent,
            strict=strict,
            rules_dirs=list(rules_dirs) or None,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = apply_overrides(config, max_file_size=get_max_file_size(default=config.max_file_size))
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        rules = RuleRegistry.with_bundled()
        for directory in config.rules_dirs:
            rules.load_directory(directory)
    except RuleSetError as error:
        raise click.BadParameter(str(error), param_hint="--rules-dir") from error

    labels = config.resolved_labels()
    writer = create_writer(writer_for_path(output), labels, config.line_numbers)
    session = Session(config, writer=writer, rules=rules, sink=_echo_err)

    for filepath in inputs:
        session.include(filepath)

    try:
        session.finish()
    except EmptyTocError as error:
        raise EmptyDocument(str(error)) from error

    try:
        write_output(output, session.render())
    except OutputWriteError as error:
        raise OutputFailure(str(error)) from error

    if session.error_count:
        _echo_err(INCOMPLETE_NOTICE)
        if config.strict:
            raise click.exceptions.Exit(1)


if __name__ == "__main__":
    cli()
