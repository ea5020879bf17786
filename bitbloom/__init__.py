"""Space-efficient probabilistic set membership."""
from __future__ import annotations

from .bit_vector import BitVector
from .bloom_filter import BloomFilter
from .errors import InvalidParameterError
from .helpers import to_bytes
from .params import BloomParams

__all__ = [
    "BitVector",
    "BloomFilter",
    "BloomParams",
    "InvalidParameterError",
    "to_bytes",
]
