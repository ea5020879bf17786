"""Exceptions raised by bitbloom."""
from __future__ import annotations


class InvalidParameterError(ValueError):
    """A sizing parameter or configuration value is out of range."""
