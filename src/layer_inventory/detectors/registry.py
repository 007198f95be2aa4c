"""Detector registry — name → detector directory used by the scanner."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

from layer_inventory.core.errors import DetectorRegistrationError, UnknownDetectorError
from layer_inventory.detectors.base import PackagesDetector
from layer_inventory.models.package import Package

logger = logging.getLogger(__name__)


class DetectorRegistry:
    """
    Holds the detectors that run against every layer.

    Registration is explicit: build a registry with ``default_registry()`` or
    call ``register()`` for each detector you want active.
    """

    def __init__(self) -> None:
        self._detectors: dict[str, PackagesDetector] = {}

    def register(self, detector: PackagesDetector) -> None:
        """Register a detector under its ``name``. Re-registering the same instance is a no-op."""
        existing = self._detectors.get(detector.name)
        if existing is detector:
            return
        if existing is not None:
            raise DetectorRegistrationError(f"a different detector is already registered as {detector.name!r}")
        self._detectors[detector.name] = detector
        logger.debug(f"Registered detector {detector.name!r}")

    def get(self, name: str) -> PackagesDetector:
        try:
            return self._detectors[name]
        except KeyError:
            raise UnknownDetectorError(name) from None

    def names(self) -> list[str]:
        return sorted(self._detectors)

    def subset(self, names: list[str]) -> "DetectorRegistry":
        """Return a new registry holding only the named detectors."""
        registry = DetectorRegistry()
        for name in names:
            registry.register(self.get(name))
        return registry

    def required_files(self) -> list[str]:
        """Sorted union of the paths every registered detector reads."""
        paths: set[str] = set()
        for detector in self._detectors.values():
            paths.update(detector.required_files())
        return sorted(paths)

    def detect(self, data: Mapping[str, bytes]) -> list[Package]:
        """
        Run every detector whose files are present in ``data``.

        Results are merged and de-duplicated by ``Package.key()``.
        """
        packages: dict[str, Package] = {}
        for name in self.names():
            detector = self._detectors[name]
            if not any(path in data for path in detector.required_files()):
                continue
            found = detector.detect(data)
            logger.debug(f"[{name}] {len(found)} packages")
            for package in found:
                packages.setdefault(package.key(), package)
        return list(packages.values())

    def __contains__(self, name: object) -> bool:
        return name in self._detectors

    def __len__(self) -> int:
        return len(self._detectors)

    def __iter__(self) -> Iterator[PackagesDetector]:
        return iter(self._detectors[name] for name in self.names())


def default_registry(logger: logging.Logger | None = None) -> DetectorRegistry:
    """Build a registry with every known detector."""
    from layer_inventory.detectors.dpkg import DpkgPackagesDetector

    registry = DetectorRegistry()
    registry.register(DpkgPackagesDetector(logger=logger))
    return registry
