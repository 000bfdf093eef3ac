# SPDX-FileCopyrightText: 2025 Sequent Tech Inc <legal@sequentech.io>
#
# SPDX-License-Identifier: MIT

"""Main CLI for bump-migrations."""

import sys
import logging
from pathlib import Path
from typing import Optional, Tuple
import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from .bumper import MigrationBumper
from .config import DEFAULT_CONFIG_FILE, load_config, render_config_template
from .filesystem import LocalFileSystem
from .models import BumpResult, BumpStatus
from .stems import StemReplaceMode

console = Console()

INCORRECT_USAGE_MESSAGE = (
    "Incorrect usage of bump-migrations, please see bump-migrations --help for more details"
)

PUNCHES = "🤜 " * 10

HELP_MESSAGE = """Bump migrations in proper order so that merge migrations can be avoided.

\b
Each MIGRATION_NAME in DIR_PATH gets the id following the current last
migration, its dependency is pointed at that last migration and the file
is renamed. Migrations are bumped left to right.

\b
Example:
    bump-migrations app/migrations 0002_add_field.py
"""


def _print_result(result: BumpResult, debug: bool = False) -> None:
    for name in result.skipped:
        console.print(f"[dim]Not a migration file, carry on: ({escape(name)})[/dim]")

    if result.bumped_name:
        line = f"Bumping migration: '{result.migration}'   {PUNCHES}  '{result.bumped_name}'"
    else:
        line = f"Bumping migration: '{result.migration}'"

    if result.status == BumpStatus.BUMPED:
        console.print(f"{escape(line)} ✅")
    elif result.status == BumpStatus.PLANNED:
        console.print(f"{escape(line)} [yellow](dry run)[/yellow]")
    else:
        console.print(f"{escape(line)} ❌")
        console.print(f"[red]{escape(result.error or '')}[/red]")

    if debug and result.dependency:
        dep = result.dependency
        console.print(
            f"[dim]  dependency {escape(dep.old_reference)} -> {escape(dep.new_reference)} "
            f"({dep.occurrences} occurrences)[/dim]"
        )


def _init_config(assume_yes: bool) -> None:
    config_path = Path(DEFAULT_CONFIG_FILE)
    if config_path.exists():
        console.print(f"[yellow]Configuration file already exists at {config_path}[/yellow]")
        if not assume_yes and not click.confirm("Overwrite?"):
            return

    config_path.write_text(render_config_template(), encoding='utf-8')
    console.print(f"[green]Created configuration file: {config_path}[/green]")


@click.command(help=HELP_MESSAGE, context_settings={'help_option_names': ['-h', '--help']})
@click.argument('dir_path', required=False)
@click.argument('migration_names', nargs=-1)
@click.option(
    '--config',
    '-c',
    type=click.Path(exists=True),
    envvar='BUMP_MIGRATIONS_CONFIG',
    help='Path to configuration file'
)
@click.option('--extension', help='Migration file extension (default: .py)')
@click.option(
    '--stem-replace',
    type=click.Choice([mode.value for mode in StemReplaceMode]),
    help="Replace the 'first' occurrence of the id in the filename or the whole 'prefix'"
)
@click.option('--dry-run', is_flag=True, help='Show what would be bumped without changing any file')
@click.option('--init-config', is_flag=True, help=f'Write an example {DEFAULT_CONFIG_FILE} and exit')
@click.option('-y', '--assume-yes', is_flag=True, help='Assume "yes" for confirmation prompts')
@click.option('--debug', is_flag=True, help='Show detailed debug output')
def cli(
    dir_path: Optional[str],
    migration_names: Tuple[str, ...],
    config: Optional[str],
    extension: Optional[str],
    stem_replace: Optional[str],
    dry_run: bool,
    init_config: bool,
    assume_yes: bool,
    debug: bool
):
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s"
        )

    if init_config:
        _init_config(assume_yes)
        return

    if not dir_path or not migration_names:
        console.print(INCORRECT_USAGE_MESSAGE)
        sys.exit(1)

    try:
        settings = load_config(config).with_overrides(
            extension=extension,
            stem_replace=stem_replace
        )
    except (FileNotFoundError, ValueError, ValidationError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    if debug:
        console.print(f"[dim]Directory: {escape(dir_path)}[/dim]")
        console.print(f"[dim]Settings: {escape(repr(settings.model_dump(mode='json')))}[/dim]")

    bumper = MigrationBumper(LocalFileSystem(dir_path), settings=settings, dry_run=dry_run)

    failures = 0
    for name in migration_names:
        result = bumper.bump_migration(name)
        _print_result(result, debug=debug)
        if result.failed:
            failures += 1

    if failures and settings.strict_exit_code:
        sys.exit(1)


def main():
    cli()


if __name__ == "__main__":
    main()
