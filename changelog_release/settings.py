from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, ClassVar, Dict, Optional

import yaml

from .changelog import DEFAULT_TAG_PREFIX
from .common.aliases import PathOrStr
from .common.exceptions import ConfigurationError

DEFAULT_REPO_URL = "https://github.com/olivierlacan/keep-a-changelog"


@dataclass
class ReleaseSettings:
    """
    Defines settings for release-changelog.
    """

    repo_url: Optional[str] = None
    """
    The base URL of the repository that comparison and release links point to,
    e.g. ``https://github.com/owner/repo``.
    """

    tag_prefix: str = DEFAULT_TAG_PREFIX
    """
    What goes in front of a version to make the name of its git tag. Default is "v".
    """

    log_level: Optional[str] = None
    """
    The log level to use. Options are "debug", "info", "warning", and "error".

    .. note::
        This does not affect the :data:`~changelog_release.common.logging.cli_logger`.

    """

    file_friendly_logging: Optional[bool] = None
    """
    If this flag is set to ``True``, log messages are written without styling.
    """

    _path: Optional[Path] = None

    _FILE_NAME: ClassVar[str] = "release-changelog"
    _DEFAULT_LOCATION: ClassVar[Path] = Path.home() / ".config" / "release-changelog.yml"

    @classmethod
    def default(cls) -> "ReleaseSettings":
        """
        Initialize the settings from files by checking the default locations
        in order, or just return the default if none of the files can be found.
        """
        for directory in (Path("."), cls._DEFAULT_LOCATION.parent):
            for extension in ("yml", "yaml"):
                path = directory / f"{cls._FILE_NAME}.{extension}"
                if path.is_file():
                    return cls.from_file(path)
        return cls()

    @classmethod
    def find_or_default(cls, path: Optional[PathOrStr] = None) -> "ReleaseSettings":
        """
        Initialize the settings from a given file, or fall back to returning
        the default settings if no file is given.
        """
        if path is not None:
            path = Path(path)
            if not path.is_file():
                raise FileNotFoundError(path)
            return cls.from_file(path)
        else:
            return cls.default()

    @property
    def path(self) -> Optional[Path]:
        """
        The path to the file the settings were read from.
        """
        return self._path

    @property
    def resolved_repo_url(self) -> str:
        return self.repo_url or DEFAULT_REPO_URL

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReleaseSettings":
        allowed = {f.name for f in fields(cls) if not f.name.startswith("_")}
        unknown = set(data) - allowed
        if unknown:
            raise ConfigurationError(
                f"Unknown settings {sorted(unknown)}, expected some of {sorted(allowed)}"
            )
        return cls(**data)

    @classmethod
    def from_file(cls, path: PathOrStr) -> "ReleaseSettings":
        """
        Read settings from a file.
        """
        with open(path) as settings_file:
            data = yaml.safe_load(settings_file)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file {path} should contain a mapping")
        settings = cls.from_dict(data)
        settings._path = Path(path).resolve()
        return settings

    def to_file(self, path: PathOrStr) -> None:
        """
        Save the settings to a file.
        """
        data = {k: v for k, v in asdict(self).items() if not k.startswith("_") and v is not None}
        with open(path, "w") as settings_file:
            yaml.safe_dump(data, settings_file)
