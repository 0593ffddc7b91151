import logging
import sys
import warnings
from contextlib import contextmanager
from datetime import date as _date
from pathlib import Path
from typing import Optional, Union

from changelog_release.changelog import ReleaseResult, release
from changelog_release.common.aliases import PathOrStr
from changelog_release.common.logging import initialize_logging, teardown_logging
from changelog_release.settings import ReleaseSettings

logger = logging.getLogger(__name__)


def load_settings(settings: Union[str, dict, None] = None) -> ReleaseSettings:
    return (
        ReleaseSettings.from_file(settings)
        if isinstance(settings, str)
        else ReleaseSettings.from_dict(settings)
        if isinstance(settings, dict)
        else ReleaseSettings.default()
    )


@contextmanager
def release_changelog_cli(settings: Union[ReleaseSettings, str, dict, None] = None):
    if not isinstance(settings, ReleaseSettings):
        settings = load_settings(settings)

    try:
        initialize_cli(settings=settings)
        yield settings
    finally:
        cleanup_cli()


def initialize_cli(settings: Optional[ReleaseSettings] = None):
    if settings is None:
        settings = ReleaseSettings.default()

    if not sys.warnoptions:
        warnings.simplefilter("default", category=DeprecationWarning)

    initialize_logging(
        log_level=settings.log_level,
        file_friendly_logging=settings.file_friendly_logging,
        enable_cli_logs=True,
    )


def cleanup_cli():
    teardown_logging()


def read_changelog(path: PathOrStr) -> str:
    """
    Read the whole changelog. A leading byte order mark is dropped and line endings
    are left untouched.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(path)
    with path.open(encoding="utf-8-sig", newline="") as changelog_file:
        return changelog_file.read()


def write_changelog(path: PathOrStr, text: str) -> None:
    # NOTE: This is not atomic, a crash mid-write can leave a truncated file.
    with Path(path).open("w", encoding="utf-8", newline="") as changelog_file:
        changelog_file.write(text)


def release_changelog_file(
    path: PathOrStr,
    new_version: str,
    date: Optional[_date] = None,
    repo_url: Optional[str] = None,
    keep_unreleased_changes: bool = False,
    dry_run: bool = False,
    settings: Optional[ReleaseSettings] = None,
) -> ReleaseResult:
    """
    Release ``new_version`` in the changelog at ``path`` and write it back, unless ``dry_run``.
    """
    if settings is None:
        settings = ReleaseSettings.default()
    result = prepare_release(
        path,
        new_version,
        date=date,
        repo_url=repo_url,
        keep_unreleased_changes=keep_unreleased_changes,
        settings=settings,
    )
    finish_release(path, result, dry_run=dry_run)
    return result


def prepare_release(
    path: PathOrStr,
    new_version: str,
    date: Optional[_date] = None,
    repo_url: Optional[str] = None,
    keep_unreleased_changes: bool = False,
    settings: Optional[ReleaseSettings] = None,
) -> ReleaseResult:
    if settings is None:
        settings = ReleaseSettings.default()
    if date is None:
        date = _date.today()
    if repo_url is None:
        repo_url = settings.resolved_repo_url

    logger.info("Reading changelog from %s", path)
    text = read_changelog(path)

    return release(
        text,
        new_version,
        date,
        repo_url,
        keep_unreleased=keep_unreleased_changes,
        tag_prefix=settings.tag_prefix,
    )


def finish_release(path: PathOrStr, result: ReleaseResult, dry_run: bool = False) -> None:
    if dry_run:
        logger.info("Dry run, leaving %s unchanged", path)
        return
    write_changelog(path, result.changelog)
    logger.info("Wrote updated changelog to %s", path)
