"""Set differencing of fingerprint sets."""

from dirhash.diff.differ import DiffResult, SetDiffer, diff

__all__ = ["DiffResult", "SetDiffer", "diff"]
