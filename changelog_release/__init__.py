"""
A tool for promoting the "Unreleased" section of a
`Keep a Changelog <https://keepachangelog.com>`_ style changelog into a new release.
"""

__all__ = [
    "ReleaseResult",
    "ReleaseSettings",
    "extract_unreleased_changes",
    "get_latest_version",
    "release",
]

from .changelog import (
    ReleaseResult,
    extract_unreleased_changes,
    get_latest_version,
    release,
)
from .settings import ReleaseSettings
