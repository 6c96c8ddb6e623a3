"""Exception types raised by bacpower."""

from __future__ import annotations


class InvalidArchitecture(ValueError):
    """Genetic architecture parameters violate a shape or range constraint."""


class ShapeMismatch(ValueError):
    """Vectors passed to a simulator or scorer have inconsistent lengths."""
