"""Streaming SHA-256 of single files."""

from __future__ import annotations

import hashlib
from pathlib import Path

from dirhash.config import CHUNK_SIZE


class Hasher:
    """Digest file contents without loading them whole.

    Parameters
    ----------
    chunk_size:
        Bytes read per call; memory use stays bounded by this value
        regardless of file size.
    """

    def __init__(self, chunk_size: int = CHUNK_SIZE) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        self.chunk_size = chunk_size

    def hash_file(self, path: str | Path) -> str:
        """Return the lowercase hex SHA-256 of the file at *path*.

        ``OSError`` from open or read propagates to the caller.
        """
        digest = hashlib.sha256()
        with open(path, "rb") as stream:
            for block in iter(lambda: stream.read(self.chunk_size), b""):
                digest.update(block)
        return digest.hexdigest()
