"""claudesync exception hierarchy.

All public exceptions inherit from ClaudeSyncError, giving callers a single
base class to catch when they want to handle any claudesync-specific failure
without swallowing unrelated errors.
"""


class ClaudeSyncError(Exception):
    """Base exception for all claudesync errors."""


class EnvironmentNotFoundError(ClaudeSyncError):
    """Raised when a required environment is not present on disk.

    The code environment needs its root directory and settings file; the
    desktop environment needs its root directory.
    """


class ScanError(ClaudeSyncError):
    """Raised when an environment cannot be scanned at all.

    Missing or malformed settings files are not scan errors: those are
    treated as empty sections.
    """


class ManifestError(ClaudeSyncError):
    """Raised when the sync manifest cannot be written to disk."""


class SettingsError(ClaudeSyncError):
    """Raised when a settings file exists but cannot be read or rewritten.

    Writes refuse to replace an unparsable settings file, since doing so
    would discard whatever the user had in it.
    """


class BackupError(ClaudeSyncError):
    """Raised when a pre-sync backup cannot be created.

    A sync never proceeds past a failed backup.
    """


class RestoreError(ClaudeSyncError):
    """Raised when a backup cannot be restored."""
