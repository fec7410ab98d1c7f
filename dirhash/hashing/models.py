"""Fingerprint value types produced by the builder."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict


class Fingerprint(BaseModel):
    """A file's root-relative path paired with its content digest."""

    model_config = ConfigDict(frozen=True)

    path: str
    """Path relative to the scanned root, ``/``-separated."""

    digest: str
    """Lowercase hex SHA-256 of the file's bytes."""


class FingerprintSet(Mapping[str, str]):
    """Read-only mapping of relative path to digest for one root.

    Parameters
    ----------
    root:
        The path the set was built from.
    entries:
        Path-to-digest pairs.  The mapping is copied; later changes to
        *entries* do not affect the set.
    """

    __slots__ = ("_root", "_entries")

    def __init__(self, root: str, entries: Mapping[str, str] | None = None) -> None:
        self._root = root
        self._entries = MappingProxyType(dict(entries or {}))

    @property
    def root(self) -> str:
        return self._root

    def __getitem__(self, path: str) -> str:
        return self._entries[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"FingerprintSet(root={self._root!r}, files={len(self._entries)})"

    def fingerprints(self) -> Iterator[Fingerprint]:
        """Yield a :class:`Fingerprint` per entry in ascending path order."""
        for path in sorted(self._entries):
            yield Fingerprint(path=path, digest=self._entries[path])
