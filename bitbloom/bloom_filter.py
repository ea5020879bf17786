"""Bloom filter sized from a target capacity and false-positive rate.

The filter picks its bit count ``m`` and probe count ``k`` from the expected
number of members ``n`` and the acceptable false-positive rate ``p``::

    m = -n * ln(p) / ln(2)^2
    k = (m / n) * ln(2)

Each ``add``/``has`` computes a single 64-bit digest of the member and derives
all ``k`` probe positions from its two 32-bit halves (see
:mod:`bitbloom.hashing`).

Instances are not thread-safe: ``add`` mutates the bit vector in place
without locking. Share a filter across threads only behind a lock.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable, Iterator, Union

from . import params
from .bit_vector import BitVector
from .errors import InvalidParameterError
from .hashing import DEFAULT_HASH, get_digest, probe_indices, split_digest

logger = logging.getLogger(__name__)

Member = Union[bytes, bytearray, memoryview, str]


class BloomFilter:
    """Probabilistic set: no false negatives, bounded false positives."""

    def __init__(
        self,
        expected_elements: int,
        false_positive_rate: float,
        *,
        hash_name: str = DEFAULT_HASH,
    ) -> None:
        """Initialize a Bloom filter.

        Args:
            expected_elements: Number of members the filter is sized for.
            false_positive_rate: Target false-positive rate, in (0, 1).
            hash_name: Digest algorithm, one of ``bitbloom.hashing.DIGESTS``.

        Raises:
            InvalidParameterError: If ``expected_elements`` is not positive,
                ``false_positive_rate`` is outside (0, 1), or ``hash_name`` is
                unknown.
        """
        params.validate(expected_elements, false_positive_rate)

        self._digest = get_digest(hash_name)
        self.hash_name = hash_name
        self._n = expected_elements
        self._p = false_positive_rate
        self._m = params.optimal_bit_count(expected_elements, false_positive_rate)
        self._k = params.optimal_hash_count(self._m, expected_elements)
        self._bits = BitVector(self.bit_count)

        logger.debug(
            "BloomFilter n=%d p=%g -> m=%d bits, k=%d hashes (%s)",
            self._n,
            self._p,
            self.bit_count,
            self.hash_count,
            hash_name,
        )

    def add(self, member: Member) -> None:
        """Insert ``member`` into the filter."""
        for index in self._probes(member):
            self._bits.set(index)

    def update(self, members: Iterable[Member]) -> None:
        """Insert all ``members`` into the filter."""
        for member in members:
            self.add(member)

    def has(self, member: Member) -> bool:
        """Return False if ``member`` is definitely absent, True if it may be present."""
        for index in self._probes(member):
            if not self._bits.get(index):
                return False
        return True

    def __contains__(self, member: Member) -> bool:
        return self.has(member)

    def clear(self) -> None:
        """Drop every member by swapping in an all-zero bit vector."""
        self._bits = BitVector(self.bit_count)
        logger.debug("BloomFilter cleared: m=%d bits, k=%d hashes", self.bit_count, self.hash_count)

    def set_hash_count(self, hash_count: int) -> None:
        """Pin the number of probes per member.

        This empties the filter, so call it before inserting anything.
        """
        self._k = float(_positive_int("hash_count", hash_count))
        self.clear()

    def set_bit_count(self, bit_count: int) -> None:
        """Pin the size of the bit vector.

        This empties the filter, so call it before inserting anything.
        """
        self._m = float(_positive_int("bit_count", bit_count))
        self.clear()

    def estimated_false_positive_rate(self) -> float:
        """Theoretical false-positive rate for the current parameters at capacity."""
        return params.false_positive_probability(self.bit_count, self.hash_count, self._n)

    @property
    def bit_count(self) -> int:
        """Number of bits probed, ``ceil(m)``."""
        return math.ceil(self._m)

    @property
    def hash_count(self) -> int:
        """Number of probes per member, ``ceil(k)``."""
        return math.ceil(self._k)

    @property
    def false_positive_rate(self) -> float:
        """The false-positive rate the filter was configured with."""
        return self._p

    @property
    def expected_elements(self) -> int:
        return self._n

    @property
    def bit_array(self) -> bytearray:
        """Expose the underlying bit array for inspection."""
        return self._bits.buffer

    def _probes(self, member: Member) -> Iterator[int]:
        a, b = split_digest(self._digest(_as_bytes(member)))
        return probe_indices(a, b, self.hash_count, self.bit_count)

    def __repr__(self) -> str:
        return (
            f"BloomFilter(expected_elements={self._n}, false_positive_rate={self._p}, "
            f"bit_count={self.bit_count}, hash_count={self.hash_count}, hash_name={self.hash_name!r})"
        )


def _as_bytes(member: Member) -> bytes:
    if isinstance(member, str):
        return member.encode("utf-8")
    if isinstance(member, (bytes, bytearray, memoryview)):
        return bytes(member)
    raise TypeError(
        f"member must be bytes-like or str, got {type(member).__name__}; "
        "convert it first, e.g. with bitbloom.to_bytes()"
    )


def _positive_int(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidParameterError(f"{name} must be a positive integer, got {value!r}")
    return value
