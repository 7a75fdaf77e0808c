class RobotPrefsError(Exception):
    """Base class for robotprefs errors."""


class CodecError(RobotPrefsError, ValueError):
    """Raised when user-entered text is not valid for the chosen type."""

    title = "Bad Value"


class InvalidKeyError(RobotPrefsError, ValueError):
    """Raised when a new entry is submitted with an unusable key."""

    title = "Bad Key"


class DuplicateKeyError(RobotPrefsError):
    """Raised when adding a key that is already present."""

    title = "Duplicate Key"


class SourceMismatchError(RobotPrefsError):
    """Raised when the bound data source does not support deletion."""


class ReconcilerInvariantError(RobotPrefsError):
    """Raised when the binding registry disagrees with the reconciler."""


class BackendLoadError(RobotPrefsError):
    """Raised when a seed file cannot be parsed."""


class TableUnavailableError(RobotPrefsError):
    """Raised when the remote table client library cannot be used."""
