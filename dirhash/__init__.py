"""dirhash — compare files and directory trees by SHA-256 content fingerprints."""

__version__ = "1.0.0"

from dirhash.compare import (
    DirectoryComparison,
    FileComparison,
    compare_directories,
    compare_files,
    compare_paths,
    validate_paths,
)
from dirhash.diff.differ import DiffResult, SetDiffer, diff
from dirhash.errors import (
    BuildCancelled,
    ComparisonError,
    FingerprintError,
    HashError,
    PathError,
    TraversalError,
)
from dirhash.hashing.builder import FingerprintBuilder, build_fingerprints
from dirhash.hashing.hasher import Hasher
from dirhash.hashing.models import Fingerprint, FingerprintSet

__all__ = [
    "__version__",
    # Fingerprinting
    "Fingerprint",
    "FingerprintBuilder",
    "FingerprintSet",
    "Hasher",
    "build_fingerprints",
    # Differencing
    "DiffResult",
    "SetDiffer",
    "diff",
    # Comparison
    "DirectoryComparison",
    "FileComparison",
    "compare_directories",
    "compare_files",
    "compare_paths",
    "validate_paths",
    # Errors
    "BuildCancelled",
    "ComparisonError",
    "FingerprintError",
    "HashError",
    "PathError",
    "TraversalError",
]
