from typing import Any, Tuple, Union


class ChangelogReleaseError(Exception):
    """
    Base class for release-changelog exceptions.
    """


class ConfigurationError(ChangelogReleaseError):
    """
    The exception raised when a settings file is misconfigured
    (e.g. unknown fields, or a document that isn't a mapping).
    """

    def __reduce__(self) -> Union[str, Tuple[Any, ...]]:
        return type(self), (self.message,)

    def __init__(self, message: str):
        super().__init__()
        self.message = message

    def __str__(self):
        return self.message


class StructureError(ChangelogReleaseError):
    """
    Raised when a changelog doesn't have the structure needed to cut a release,
    like a missing ``## [Unreleased]`` heading or ``[unreleased]: ...`` link.
    """


class MissingArgumentError(ChangelogReleaseError, ValueError):
    """
    Raised when a required argument is ``None`` or empty.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"'{name}' is required but was not given")
