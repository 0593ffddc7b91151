from enum import Enum, unique
from os import PathLike
from typing import Set, Union

PathOrStr = Union[str, PathLike]


@unique
class EnvVarNames(Enum):
    FILE_FRIENDLY_LOGGING = "FILE_FRIENDLY_LOGGING"
    LOG_LEVEL = "RELEASE_CHANGELOG_LOG_LEVEL"
    CLI_LOGGER_ENABLED = "RELEASE_CHANGELOG_CLI_LOGGER_ENABLED"
    CONSOLE_WIDTH = "RELEASE_CHANGELOG_CONSOLE_WIDTH"
    REPO_URL = "RELEASE_CHANGELOG_REPO_URL"

    @classmethod
    def values(cls) -> Set[str]:
        return set(e.value for e in cls)
