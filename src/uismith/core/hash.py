"""Fast hashing for fingerprints and cache keys.

xxhash by default: specification fingerprints and export cache keys only
need to be stable across runs. SHA256 is available for callers that want
a cryptographic digest.
"""

from enum import Enum
import hashlib

import xxhash


class Algorithm(str, Enum):
    """Supported hash algorithms."""

    XXHASH64 = "xxhash64"  # Fast, non-cryptographic (cache keys)
    SHA256 = "sha256"


def hash_bytes(data: bytes, algorithm: Algorithm = Algorithm.XXHASH64, truncate: int | None = None) -> str:
    """
    Hash bytes to hex digest.

    Args:
        data: Bytes to hash
        algorithm: Hash algorithm
        truncate: Optional length to truncate digest

    Returns:
        Hex digest string
    """
    match algorithm:
        case Algorithm.XXHASH64:
            digest = xxhash.xxh64(data).hexdigest()
        case Algorithm.SHA256:
            digest = hashlib.sha256(data).hexdigest()
        case _:
            raise ValueError(f"Unknown algorithm: {algorithm}")

    return digest[:truncate] if truncate else digest


def hash_string(text: str, algorithm: Algorithm = Algorithm.XXHASH64, truncate: int | None = None) -> str:
    """
    Hash string to hex digest.

    Examples:
        >>> len(hash_string("pricing", truncate=16))
        16
    """
    return hash_bytes(text.encode("utf-8"), algorithm, truncate)


def hash_fields(*fields: str, algorithm: Algorithm = Algorithm.XXHASH64) -> str:
    """Hash multiple fields together (deterministic, order-sensitive)."""
    combined = "\x00".join(fields)  # Null byte separator
    return hash_string(combined, algorithm)


__all__ = [
    "Algorithm",
    "hash_string",
    "hash_bytes",
    "hash_fields",
]
