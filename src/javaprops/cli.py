"""CLI entry point for the properties tools."""

import json
import logging
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import PropertiesConfig
from .diff import DiffDetector, ChangeType
from .properties import ParseError, PropertiesParser, to_dict


def _load(parser: PropertiesParser, file: Path):
    """Parse a file, exiting with a readable message on bad input."""
    try:
        return parser.parse_file(file)
    except ParseError as e:
        click.secho(f"Error: {file}: {e}", fg='red', err=True)
        raise SystemExit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def cli(verbose: bool):
    """Read, normalize and compare Java .properties files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--json', 'as_json', is_flag=True, help='Print entries as a JSON array')
def parse(file: Path, as_json: bool):
    """Parse and display entries from a .properties file.

    FILE is the path to the .properties file to parse.
    """
    entries = _load(PropertiesParser(), file)

    if as_json:
        click.echo(json.dumps(
            [{"key": e.key, "value": e.value, "line": e.line_number} for e in entries],
            ensure_ascii=False,
            indent=2
        ))
        return

    if not entries:
        click.secho("No entries found.", fg='yellow')
        return

    click.echo(f"Entries ({len(entries)} total):\n")

    for entry in entries:
        click.secho(f"{entry.line_number}: ", fg='cyan', nl=False)
        click.echo(f"{entry.key!r} = {entry.value!r}")


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('key')
def get(file: Path, key: str):
    """Print the value of KEY in FILE.

    When a key repeats, the last occurrence wins.
    """
    properties = to_dict(_load(PropertiesParser(), file))

    if key not in properties:
        click.secho(f"Key not found: {key}", fg='red', err=True)
        raise SystemExit(1)

    click.echo(properties[key])


@cli.command(name='format')
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Write to this file instead of stdout')
@click.option('--escape-unicode', is_flag=True, help='Write non-ASCII characters as \\uXXXX escapes')
@click.option('--header', default=None, help='Comment to place at the top of the output')
def format_(file: Path, output: Optional[Path], escape_unicode: bool, header: Optional[str]):
    """Rewrite a .properties file in normalized form.

    FILE is the path to the .properties file to normalize.
    """
    config = PropertiesConfig(escape_unicode=escape_unicode, header=header)
    parser = PropertiesParser(config)
    entries = _load(parser, file)

    if output:
        parser.write(entries, output)
        click.secho(f"Wrote {len(entries)} entries to {output}", fg='green')
    else:
        click.echo(parser.format(entries), nl=False)


@cli.command()
@click.argument('base', type=click.Path(dir_okay=False, path_type=Path))
@click.argument('head', type=click.Path(dir_okay=False, path_type=Path))
def diff(base: Path, head: Path):
    """Show changes between two .properties files.

    BASE is the old version, HEAD the new one. A missing file counts as empty.
    """
    detector = DiffDetector()
    try:
        changes = detector.detect_changes(base, head)
    except ParseError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        raise SystemExit(1)

    if not changes:
        click.secho("No changes detected.", fg='yellow')
        return

    click.echo(f"Changes detected ({len(changes)} total):\n")

    added = [c for c in changes if c.change_type == ChangeType.ADDED]
    modified = [c for c in changes if c.change_type == ChangeType.MODIFIED]
    removed = [c for c in changes if c.change_type == ChangeType.REMOVED]

    if added:
        click.secho(f"Added ({len(added)}):", fg='green', bold=True)
        for change in added:
            click.echo(f"  + {change.key}")
            click.echo(f"    \"{change.new_value}\"")
        click.echo()

    if modified:
        click.secho(f"Modified ({len(modified)}):", fg='yellow', bold=True)
        for change in modified:
            click.echo(f"  ~ {change.key}")
            click.echo(f"    - \"{change.old_value}\"")
            click.echo(f"    + \"{change.new_value}\"")
        click.echo()

    if removed:
        click.secho(f"Removed ({len(removed)}):", fg='red', bold=True)
        for change in removed:
            click.echo(f"  - {change.key}")
            click.echo(f"    \"{change.old_value}\"")


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
def check(file: Path):
    """Check that a .properties file parses.

    FILE is the path to the .properties file to validate.
    """
    entries = _load(PropertiesParser(), file)
    keys = [e.key for e in entries]
    duplicates = len(keys) - len(set(keys))

    click.secho(f"{file}: OK ({len(entries)} entries)", fg='green')
    if duplicates:
        click.secho(f"  {duplicates} duplicate key(s); the last occurrence wins", fg='yellow')


if __name__ == '__main__':
    cli()
