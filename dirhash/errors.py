"""Exception hierarchy for fingerprint builds and path comparison."""

from __future__ import annotations


class FingerprintError(Exception):
    """Base class for failures while building a fingerprint set.

    Parameters
    ----------
    message:
        Human-readable description.
    path:
        The file or directory the failure refers to, if known.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class TraversalError(FingerprintError):
    """Raised when the root or an entry below it cannot be stat'd or listed."""


class HashError(FingerprintError):
    """Raised when a regular file cannot be fully read."""


class PathError(FingerprintError):
    """Raised when a file's path cannot be made relative to the root."""


class BuildCancelled(FingerprintError):
    """Raised when a build is cancelled before it completes."""


class ComparisonError(Exception):
    """Raised when two paths cannot be compared with each other."""
