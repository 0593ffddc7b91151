import logging
import os
import pathlib
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

from changelog_release.common.aliases import EnvVarNames
from changelog_release.common.logging import teardown_logging


class ChangelogReleaseTestCase:
    """
    A custom testing class that

    * disables some of the more verbose logging,
    * creates and destroys a temp directory as a test fixture, and
    * restores the exception hook and environment variables touched by the CLI.

    """

    PROJECT_ROOT = (Path(__file__).parent / ".." / "..").resolve()
    """
    Root of the git repository.
    """

    # to run test suite with finished package, which does not contain
    # tests & fixtures, we must be able to look them up somewhere else
    PROJECT_ROOT_FALLBACK = (
        # users wanting to run test suite for installed package
        pathlib.Path(os.environ["RELEASE_CHANGELOG_SRC_DIR"])
        if "RELEASE_CHANGELOG_SRC_DIR" in os.environ
        # stay in-tree
        else PROJECT_ROOT
    )

    MODULE_ROOT = PROJECT_ROOT_FALLBACK / "changelog_release"
    """
    Root of the changelog_release module.
    """

    TESTS_ROOT = PROJECT_ROOT_FALLBACK / "tests"
    """
    Root of the tests directory.
    """

    FIXTURES_ROOT = PROJECT_ROOT_FALLBACK / "test_fixtures"
    """
    Root of the test fixtures directory.
    """

    def setup_method(self):
        logging.basicConfig(
            format="%(asctime)s - %(levelname)s - %(name)s - %(message)s", level=logging.DEBUG
        )

        # Create a temporary scratch directory.
        self.TEST_DIR = Path(tempfile.mkdtemp(prefix="release_changelog_tests"))
        os.makedirs(self.TEST_DIR, exist_ok=True)

        self._saved_environ = {name: os.environ.get(name) for name in EnvVarNames.values()}

        # Set an artificial console width so logs are not mangled.
        os.environ[EnvVarNames.CONSOLE_WIDTH.value] = str(300)

    def teardown_method(self):
        shutil.rmtree(self.TEST_DIR)
        teardown_logging()
        for name, value in self._saved_environ.items():
            if value is None:
                os.environ.pop(name, None)
            else:
                os.environ[name] = value

    def copy_fixture(self, name: str, destination: str = "CHANGELOG.md") -> Path:
        """
        Copy a changelog from ``test_fixtures/changelogs/`` into :attr:`TEST_DIR`.
        """
        path = self.TEST_DIR / destination
        shutil.copyfile(self.FIXTURES_ROOT / "changelogs" / name, path)
        return path

    def write_changelog(self, text: str, destination: str = "CHANGELOG.md") -> Path:
        path = self.TEST_DIR / destination
        path.write_bytes(text.encode("utf-8"))
        return path

    def cli_command(self, *args: str) -> List[str]:
        """
        The command line for running the CLI in a subprocess.
        """
        return [sys.executable, "-m", "changelog_release", *args]

    def cli_env(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        env = dict(os.environ)
        python_path = [str(self.PROJECT_ROOT)]
        if env.get("PYTHONPATH"):
            python_path.append(env["PYTHONPATH"])
        env["PYTHONPATH"] = os.pathsep.join(python_path)
        env.pop(EnvVarNames.REPO_URL.value, None)
        env.update(extra or {})
        return env
