"""Compare two files or two directory trees by content."""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from pydantic import BaseModel, Field

from dirhash.diff.differ import DiffResult, SetDiffer
from dirhash.errors import ComparisonError, HashError, TraversalError
from dirhash.hashing.builder import FingerprintBuilder
from dirhash.hashing.hasher import Hasher

logger = logging.getLogger(__name__)


class FileComparison(BaseModel):
    """Digests of two single files."""

    first: str
    second: str
    first_digest: str
    second_digest: str

    @property
    def identical(self) -> bool:
        return self.first_digest == self.second_digest


class DirectoryComparison(BaseModel):
    """File counts and differences of two directory trees."""

    first: str
    second: str
    first_count: int = 0
    second_count: int = 0
    diff: DiffResult = Field(default_factory=DiffResult)

    @property
    def identical(self) -> bool:
        return self.diff.is_identical


def validate_paths(first: str | Path, second: str | Path) -> bool:
    """Check that both paths exist and are of the same kind.

    Returns *True* when both are directories, *False* when both are files.
    """
    infos = []
    for label, path in (("first", first), ("second", second)):
        if not os.fspath(path):
            raise TraversalError(f"{label} path is empty")
        try:
            infos.append(os.stat(path))
        except OSError as exc:
            raise TraversalError(
                f"cannot access {label} path '{path}': {exc}", path=os.fspath(path),
            ) from exc

    first_is_dir = stat.S_ISDIR(infos[0].st_mode)
    second_is_dir = stat.S_ISDIR(infos[1].st_mode)
    if first_is_dir != second_is_dir:
        raise ComparisonError(
            f"'{first}' and '{second}' must both be files or both be directories"
        )
    return first_is_dir


def compare_files(
    first: str | Path,
    second: str | Path,
    hasher: Hasher | None = None,
) -> FileComparison:
    """Hash two files and report whether their contents match."""
    hasher = hasher or Hasher()
    digests = []
    for path in (first, second):
        try:
            digests.append(hasher.hash_file(path))
        except OSError as exc:
            raise HashError(f"cannot hash file '{path}': {exc}", path=os.fspath(path)) from exc

    result = FileComparison(
        first=os.fspath(first),
        second=os.fspath(second),
        first_digest=digests[0],
        second_digest=digests[1],
    )
    logger.info("Compared files '%s' and '%s': identical=%s", first, second, result.identical)
    return result


def compare_directories(
    first: str | Path,
    second: str | Path,
    builder: FingerprintBuilder | None = None,
) -> DirectoryComparison:
    """Fingerprint both trees and diff them.

    A failure while fingerprinting either tree propagates before any diff
    is computed.
    """
    builder = builder or FingerprintBuilder()
    first_set = builder.build(first)
    second_set = builder.build(second)

    return DirectoryComparison(
        first=os.fspath(first),
        second=os.fspath(second),
        first_count=len(first_set),
        second_count=len(second_set),
        diff=SetDiffer().diff(first_set, second_set),
    )


def compare_paths(
    first: str | Path,
    second: str | Path,
    builder: FingerprintBuilder | None = None,
) -> FileComparison | DirectoryComparison:
    """Validate *first* and *second*, then compare them as files or directories."""
    if validate_paths(first, second):
        return compare_directories(first, second, builder=builder)
    return compare_files(first, second)
