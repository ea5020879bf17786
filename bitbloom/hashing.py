"""64-bit digests and double-hashing probe generation.

A single 64-bit digest of the member is split into two 32-bit halves ``a``
and ``b``; the ``i``-th probe is ``(a + b * i) % bit_count``. This is the
Kirsch-Mitzenmacher construction: one hash call yields every probe position.

Three digest algorithms are registered:

* ``xxh64``: xxHash64 with seed 0 (default).
* ``murmur3``: the first 64-bit half of MurmurHash3 x64-128 with seed 0.
* ``fnv1a``: FNV-1a 64-bit.
"""
from __future__ import annotations

from typing import Callable, Dict, Iterator, Tuple

import mmh3
import xxhash

from .errors import InvalidParameterError

Digest = Callable[[bytes], int]

DEFAULT_HASH = "xxh64"

_MASK32 = 0xFFFFFFFF
_MASK64 = (1 << 64) - 1
_FNV64_OFFSET = 0xCBF29CE484222325
_FNV64_PRIME = 0x100000001B3


def xxh64_digest(data: bytes) -> int:
    return xxhash.xxh64(data, seed=0).intdigest()


def murmur3_digest(data: bytes) -> int:
    return mmh3.hash64(data, 0, signed=False)[0]


def fnv1a_digest(data: bytes) -> int:
    h = _FNV64_OFFSET
    for byte in data:
        h ^= byte
        h = (h * _FNV64_PRIME) & _MASK64
    return h


DIGESTS: Dict[str, Digest] = {
    "xxh64": xxh64_digest,
    "murmur3": murmur3_digest,
    "fnv1a": fnv1a_digest,
}


def get_digest(name: str) -> Digest:
    """Look up a registered digest function by name."""
    try:
        return DIGESTS[name]
    except KeyError:
        choices = ", ".join(sorted(DIGESTS))
        raise InvalidParameterError(f"unknown hash {name!r}, expected one of: {choices}") from None


def split_digest(digest: int) -> Tuple[int, int]:
    """Split a 64-bit digest into its (high, low) 32-bit halves."""
    return (digest >> 32) & _MASK32, digest & _MASK32


def probe_indices(a: int, b: int, hash_count: int, bit_count: int) -> Iterator[int]:
    """Yield ``hash_count`` bit positions in ``[0, bit_count)``."""
    for i in range(hash_count):
        yield (a + b * i) % bit_count
