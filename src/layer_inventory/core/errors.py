"""
Exception hierarchy for layer-inventory.

Malformed package metadata is never an exception here: detectors log and
skip it. These errors cover the layer and registry plumbing around them.
"""


class InventoryError(Exception):
    """Base exception for all layer-inventory errors."""


class LayerError(InventoryError):
    """Raised when a layer path is neither a directory nor a readable tar archive."""


class DetectorRegistrationError(InventoryError):
    """Raised when a different detector is registered under a taken name."""


class UnknownDetectorError(InventoryError, KeyError):
    """Raised when looking up a detector name that was never registered."""
