"""Content fingerprinting.

Streams files through SHA-256 and builds path-to-digest sets for a file
or a whole directory tree using a bounded worker pool.
"""

from dirhash.hashing.builder import FingerprintBuilder, build_fingerprints
from dirhash.hashing.hasher import Hasher
from dirhash.hashing.models import Fingerprint, FingerprintSet

__all__ = [
    "Fingerprint",
    "FingerprintBuilder",
    "FingerprintSet",
    "Hasher",
    "build_fingerprints",
]
