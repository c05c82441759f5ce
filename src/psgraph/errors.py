"""Exception types raised by layout, rendering and chart building."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Invalid or contradictory numeric options (zero range, negative plot area, ...)."""


class ResourceError(RuntimeError):
    """A required collaborator (document, graph paper) is not available."""


class DataShapeError(ValueError):
    """Malformed chart input data, e.g. ragged rows or non-numeric values."""
