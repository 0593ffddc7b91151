"""
The ``release-changelog`` command promotes the "Unreleased" section of a changelog
into a new, dated release.

.. code-block::

    $ release-changelog --help

    Usage: release-changelog [OPTIONS] CHANGE_LOG_FILE_PATH NEW_VERSION

      Update the changelog when releasing a new version.

    Options:
      --version                       Show the version and exit.
      --keep-unreleased-changes       Keep unreleased changes in the changelog.
      --print-changes-to-stdout / --no-print-changes-to-stdout
                                      Print the released changes to stdout instead of the
                                      updated changelog.
      --dry-run                       Run without modifying the changelog file.
      --repo-url TEXT                 Base URL of the repository used for comparison links.
      --date [%Y-%m-%d]               The release date. Defaults to today.
      --settings FILE                 Path to a release-changelog.yml settings file.
      --log-level [debug|info|warning|error]
                                      Set the global log level.
      --help                          Show this message and exit.

For example, to release version 1.2.0 and save the release notes:

.. code-block::

    $ release-changelog CHANGELOG.md 1.2.0 > release-notes.md

"""
from datetime import datetime
from typing import Optional

import click
from click_help_colors import HelpColorsCommand
from rich.markup import escape

from changelog_release.cli import (
    cleanup_cli,
    finish_release,
    initialize_cli,
    load_settings,
    prepare_release,
)
from changelog_release.common.aliases import EnvVarNames
from changelog_release.common.logging import cli_logger
from changelog_release.version import VERSION

_CLICK_COMMAND_DEFAULTS = {
    "cls": HelpColorsCommand,
    "help_options_color": "green",
    "help_headers_color": "yellow",
    "context_settings": {"max_content_width": 115},
}


@click.command(**_CLICK_COMMAND_DEFAULTS)
@click.version_option(version=VERSION)
@click.argument(
    "change_log_file_path",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
)
@click.argument(
    "new_version",
    type=str,
)
@click.option(
    "--keep-unreleased-changes",
    is_flag=True,
    default=False,
    help="Keep unreleased changes in the changelog.",
)
@click.option(
    "--print-changes-to-stdout/--no-print-changes-to-stdout",
    default=True,
    help="Print the released changes to stdout instead of the updated changelog.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Run without modifying the changelog file.",
)
@click.option(
    "--repo-url",
    type=str,
    envvar=EnvVarNames.REPO_URL.value,
    help="Base URL of the repository used for comparison links.",
)
@click.option(
    "--date",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="The release date. Defaults to today.",
)
@click.option(
    "--settings",
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="Path to a release-changelog.yml settings file.",
)
@click.option(
    "--log-level",
    help="Set the global log level.",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    show_choices=True,
)
def main(
    change_log_file_path: str,
    new_version: str,
    keep_unreleased_changes: bool = False,
    print_changes_to_stdout: bool = True,
    dry_run: bool = False,
    repo_url: Optional[str] = None,
    date: Optional[datetime] = None,
    settings: Optional[str] = None,
    log_level: Optional[str] = None,
):
    """
    Update the changelog when releasing a new version.

    CHANGE_LOG_FILE_PATH is the path to the CHANGELOG.md file and
    NEW_VERSION is the version to release, e.g. 1.2.0.
    """
    release_settings = load_settings(settings)
    if log_level is not None:
        release_settings.log_level = log_level

    initialize_cli(settings=release_settings)

    result = prepare_release(
        change_log_file_path,
        new_version,
        date=date.date() if date is not None else None,
        repo_url=repo_url,
        keep_unreleased_changes=keep_unreleased_changes,
        settings=release_settings,
    )
    cli_logger.info(
        "[green]\N{check mark} Released version [bold]%s[/bold][/green]", escape(new_version)
    )

    if print_changes_to_stdout:
        click.echo(result.changes, nl=False)
    else:
        click.echo(result.changelog, nl=False)

    finish_release(change_log_file_path, result, dry_run=dry_run)
    if dry_run:
        cli_logger.info("[yellow]Dry run, %s was not modified[/]", escape(change_log_file_path))

    # Skipped on errors so the excepthook can still log them.
    cleanup_cli()


if __name__ == "__main__":
    main()
