from .aliases import PathOrStr
from .exceptions import (
    ChangelogReleaseError,
    ConfigurationError,
    MissingArgumentError,
    StructureError,
)

__all__ = [
    "PathOrStr",
    "ChangelogReleaseError",
    "ConfigurationError",
    "MissingArgumentError",
    "StructureError",
]
