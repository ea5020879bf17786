"""Conversion helpers for callers without their own byte encoding."""
from __future__ import annotations

from typing import Any


def to_bytes(value: Any) -> bytes:
    """Encode ``value`` via its ``str()`` form.

    A low-fidelity fallback: values of different types that print the same
    (``1`` and ``"1"``, ``1.0`` and ``"1.0"``) map to the same bytes and
    therefore to the same filter bits. Prefer an explicit encoding such as
    ``int.to_bytes`` or ``struct.pack`` where that matters.
    """
    return str(value).encode("utf-8")
