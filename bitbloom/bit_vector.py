"""Packed bit storage backed by a bytearray."""
from __future__ import annotations

from .errors import InvalidParameterError


class BitVector:
    """Fixed-length, zero-initialised array of bits."""

    __slots__ = ("_bits", "_size")

    def __init__(self, size: int) -> None:
        if size < 0:
            raise InvalidParameterError(f"size must be non-negative, got {size}")

        self._bits = bytearray((size + 7) // 8)
        self._size = len(self._bits) * 8  # rounded up to whole bytes

    def set(self, index: int) -> None:
        """Set the bit at ``index`` to 1."""
        self._check(index)
        self._bits[index >> 3] |= 1 << (index & 7)

    def get(self, index: int) -> bool:
        """Return True if the bit at ``index`` is 1."""
        self._check(index)
        mask = 1 << (index & 7)
        return self._bits[index >> 3] & mask == mask

    def count(self) -> int:
        """Number of bits currently set."""
        return sum(bin(byte).count("1") for byte in self._bits)

    def _check(self, index: int) -> None:
        if not 0 <= index < self._size:
            raise IndexError(f"bit index {index} out of range for {self._size} bits")

    def __len__(self) -> int:
        return self._size

    @property
    def buffer(self) -> bytearray:
        """Expose the underlying bytes for inspection."""
        return self._bits
