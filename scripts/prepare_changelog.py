"""
Cut a release of this project's own CHANGELOG.md at the current version.

The repository URL comes from a release-changelog.yml settings file or
the RELEASE_CHANGELOG_REPO_URL environment variable.
"""
import os
from datetime import datetime
from pathlib import Path

from changelog_release.cli import finish_release, prepare_release, release_changelog_cli
from changelog_release.common.aliases import EnvVarNames
from changelog_release.version import VERSION


def main():
    changelog = Path("CHANGELOG.md")

    with release_changelog_cli() as settings:
        result = prepare_release(
            changelog,
            VERSION,
            date=datetime.now().date(),
            repo_url=os.environ.get(EnvVarNames.REPO_URL.value),
            settings=settings,
        )
        finish_release(changelog, result)


if __name__ == "__main__":
    main()
