"""
Normalizes whitespace around Markdown emphasis markers.
Rewrites files in place unless asked to only check, print, or list hints.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import ProcessFileError
from .filesystem import (
    collect_file_stat,
    enforce_file_size,
    ensure_file_unchanged,
    get_max_file_size,
    normalize_filepath,
    write_atomically,
)
from .hints import find_spacing_hints
from .processor import process_file

__all__ = ["cli"]

# Option names accepted by --enable/--disable, mapped to config attributes.
TOGGLES = {
    "remove-internal-spaces": "remove_internal_bold_spaces",
    "chinese-bold": "space_between_chinese_and_bold",
    "english-bold": "space_between_english_and_bold",
    "chinese-italic": "space_between_chinese_and_italic",
    "skip-code-blocks": "skip_code_blocks",
    "skip-inline-code": "skip_inline_code",
}


def _collect_overrides(enable: tuple[str, ...], disable: tuple[str, ...]) -> dict[str, bool]:
    both = set(enable) & set(disable)
    if both:
        raise click.BadParameter(
            f"Options both enabled and disabled: {', '.join(sorted(both))}"
        )
    overrides = {TOGGLES[name]: True for name in enable}
    overrides.update({TOGGLES[name]: False for name in disable})
    return overrides


@click.command()
@click.version_option()
@click.option(
    "--enable",
    multiple=True,
    type=click.Choice(sorted(TOGGLES)),
    help="Turn an option on (repeatable).",
)
@click.option(
    "--disable",
    multiple=True,
    type=click.Choice(sorted(TOGGLES)),
    help="Turn an option off (repeatable).",
)
@click.option(
    "--settings",
    "settings_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON settings record to use instead of TOML configuration.",
)
@click.option("--check", is_flag=True, help="Report files that would change without writing.")
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the result instead of writing.")
@click.option("--hints", "show_hints", is_flag=True, help="List spacing hints without writing.")
@click.option("--quiet", is_flag=True, help="Do not report per-file results.")
@click.option("--verbose", is_flag=True, help="Log processing details to stderr.")
@click.argument("filepaths", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
def cli(
    filepaths: tuple[str, ...],
    enable: tuple[str, ...] = (),
    disable: tuple[str, ...] = (),
    settings_file: Path | None = None,
    check: bool = False,
    to_stdout: bool = False,
    show_hints: bool = False,
    quiet: bool = False,
    verbose: bool = False,
):
    """
    Fix spacing around bold and italic markers in Markdown files.

    Args:
        filepaths: Paths to the Markdown files to process.
        enable: Options to turn on, overriding configuration.
        disable: Options to turn off, overriding configuration.
        settings_file: Persisted JSON settings replacing TOML discovery.
        check: Only report files that would change; exit with status 1 if any.
        to_stdout: Print transformed content instead of rewriting files.
        show_hints: Print spacing hints instead of rewriting files.
        quiet: Suppress per-file notifications.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If paths are invalid or configuration is invalid.
        click.ClickException: If reading or writing a file fails.

    Examples:
        emphasis-spacing README.md --enable english-bold
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    overrides = _collect_overrides(enable, disable)
    base_dir = Path.cwd().resolve()

    try:
        max_file_size = get_max_file_size()
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    would_change = []
    for raw_path in filepaths:
        try:
            filepath = normalize_filepath(raw_path, base_dir)
        except ValueError as error:
            raise click.BadParameter(str(error)) from error
        try:
            config = build_config(filepath.parent, settings_file=settings_file, **overrides)
        except ConfigError as error:
            raise click.BadParameter(str(error)) from error

        try:
            initial_stat = collect_file_stat(filepath)
            enforce_file_size(initial_stat, max_file_size, filepath)
        except IOError as error:
            raise click.ClickException(str(error)) from error

        try:
            result = process_file(filepath, config)
        except ProcessFileError as error:
            raise click.ClickException(str(error)) from error

        if show_hints:
            for hint in find_spacing_hints(result.original, config):
                click.echo(
                    f"{raw_path}:{hint.line + 1}:{hint.column + 1}: "
                    f"space {hint.side.value} {hint.marker}"
                )
            continue

        if to_stdout:
            click.echo(result.text, nl=False)
            continue

        if check:
            if result.changed:
                would_change.append(raw_path)
                if not quiet:
                    click.echo(f"Would fix spacing: {raw_path}")
            continue

        if not result.changed:
            if not quiet:
                click.echo(f"No changes needed: {raw_path}")
            continue

        try:
            post_read_stat = collect_file_stat(filepath)
            ensure_file_unchanged(initial_stat, post_read_stat, filepath)
            write_atomically(
                filepath,
                result.text,
                post_read_stat,
                initial_stat,
                warn=lambda message: click.echo(message, err=True),
            )
        except IOError as error:
            raise click.ClickException(str(error)) from error

        if not quiet:
            click.echo(f"Bold/Italic spacing fixed: {raw_path}")

    if would_change:
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
