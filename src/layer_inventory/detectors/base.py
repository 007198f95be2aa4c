"""
Detector Protocol — Base interface for all package-database detectors.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol, runtime_checkable

from layer_inventory.models.package import Package


@runtime_checkable
class PackagesDetector(Protocol):
    """
    Protocol that all detectors must implement.

    A detector receives the files of one layer as a mapping of relative path
    (no leading ``/``) to raw bytes and returns the packages it recognizes.
    It must not mutate the mapping, and must return an empty list rather
    than fail when its files are absent.
    """

    name: str

    def detect(self, data: Mapping[str, bytes]) -> list[Package]:
        """Return the packages found in ``data``, unique by ``Package.key()``."""
        ...

    def required_files(self) -> list[str]:
        """Relative paths this detector reads."""
        ...
