"""SetDiffer — compares two fingerprint sets and partitions the changed paths."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class DiffResult(BaseModel):
    """Result of diffing two fingerprint sets.

    Each list is sorted ascending and the three lists are pairwise disjoint.
    Paths whose digests match on both sides appear in none of them.
    """

    model_config = ConfigDict(frozen=True)

    modified: list[str] = Field(default_factory=list)
    """Paths present on both sides with different digests."""

    only_in_first: list[str] = Field(default_factory=list)
    only_in_second: list[str] = Field(default_factory=list)

    @property
    def is_identical(self) -> bool:
        return not (self.modified or self.only_in_first or self.only_in_second)

    @property
    def total_changes(self) -> int:
        return len(self.modified) + len(self.only_in_first) + len(self.only_in_second)

    def summary(self) -> str:
        return (
            f"Modified: {len(self.modified)}, "
            f"Only in first: {len(self.only_in_first)}, "
            f"Only in second: {len(self.only_in_second)}"
        )

    def to_json(self) -> str:
        return json.dumps(self.model_dump(), indent=2)


class SetDiffer:
    """Compare two path-to-digest mappings.

    There is no rename detection: a path that exists on one side only is
    always reported as ``only_in_first`` or ``only_in_second``.
    """

    def diff(
        self,
        first: Mapping[str, str],
        second: Mapping[str, str],
    ) -> DiffResult:
        """Partition the keys of *first* and *second*.

        Parameters
        ----------
        first, second:
            Path-to-digest mappings, typically :class:`FingerprintSet` values.

        Returns
        -------
        DiffResult
            ``modified``, ``only_in_first`` and ``only_in_second``, each sorted.
        """
        modified: list[str] = []
        only_in_first: list[str] = []
        only_in_second: list[str] = []

        for path, digest in first.items():
            if path not in second:
                only_in_first.append(path)
            elif second[path] != digest:
                modified.append(path)

        for path in second:
            if path not in first:
                only_in_second.append(path)

        modified.sort()
        only_in_first.sort()
        only_in_second.sort()

        result = DiffResult(
            modified=modified,
            only_in_first=only_in_first,
            only_in_second=only_in_second,
        )

        logger.info("Fingerprint diff: %s", result.summary())
        return result


def diff(first: Mapping[str, str], second: Mapping[str, str]) -> DiffResult:
    """Module-level shortcut for :meth:`SetDiffer.diff`."""
    return SetDiffer().diff(first, second)
