"""Bloom filter sizing math."""
from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import InvalidParameterError

LN2 = math.log(2.0)


def validate(expected_elements: int, false_positive_rate: float) -> None:
    """Reject capacities and error rates the sizing formulas cannot handle."""
    if isinstance(expected_elements, bool) or not isinstance(expected_elements, int):
        raise InvalidParameterError(
            f"expected_elements must be an integer, got {expected_elements!r}"
        )
    if expected_elements <= 0:
        raise InvalidParameterError(
            f"expected_elements must be positive, got {expected_elements}"
        )
    if not 0.0 < false_positive_rate < 1.0:
        raise InvalidParameterError(
            f"false_positive_rate must be in (0, 1), got {false_positive_rate!r}"
        )


def optimal_bit_count(expected_elements: int, false_positive_rate: float) -> float:
    """Bits needed to hold ``expected_elements`` at ``false_positive_rate``."""
    return -expected_elements * math.log(false_positive_rate) / LN2 ** 2


def optimal_hash_count(bit_count: float, expected_elements: int) -> float:
    """Probe count minimising the false-positive rate for ``bit_count`` bits."""
    return bit_count / expected_elements * LN2


def false_positive_probability(bit_count: float, hash_count: float, expected_elements: int) -> float:
    """Theoretical false-positive rate: ``(1 - e^(-k*n/m))^k``."""
    return (1.0 - math.exp(-hash_count * expected_elements / bit_count)) ** hash_count


@dataclass(frozen=True)
class BloomParams:
    bit_count: int
    hash_count: int

    @staticmethod
    def for_capacity(expected_elements: int, false_positive_rate: float) -> "BloomParams":
        """Rounded bit and hash counts for the given capacity and error rate."""
        validate(expected_elements, false_positive_rate)
        m = optimal_bit_count(expected_elements, false_positive_rate)
        k = optimal_hash_count(m, expected_elements)
        return BloomParams(bit_count=math.ceil(m), hash_count=math.ceil(k))
