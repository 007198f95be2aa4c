"""
Debian dpkg status file detector.

Reads ``var/lib/dpkg/status`` and extracts one package per paragraph from
its ``Package``, ``Source`` and ``Version`` fields. Parsing is best effort:
a paragraph whose version cannot be parsed is dropped with a warning and the
scan carries on.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import NamedTuple

from layer_inventory.models.package import Package
from layer_inventory.models.version import Version, VersionError

DPKG_STATUS_PATH = "var/lib/dpkg/status"

PACKAGE_PREFIX = "Package: "
SOURCE_PREFIX = "Source: "
VERSION_PREFIX = "Version: "

# Source: <name>[ (<version>)]
SOURCE_RE = re.compile(r"Source: (?P<name>\S*)( \((?P<version>.*)\))?")


class SourceFields(NamedTuple):
    name: str
    version: str | None


def parse_source_line(line: str) -> SourceFields:
    """
    Split a ``Source:`` line into the source package name and optional version.

    ``Source: glibc (2.36-9)`` gives ``("glibc", "2.36-9")``;
    ``Source: glibc`` gives ``("glibc", None)``.

    Raises:
        ValueError: If the line does not contain a ``Source: `` field.
    """
    match = SOURCE_RE.search(line)
    if match is None:
        raise ValueError(f"not a Source line: {line!r}")
    version = (match.group("version") or "").strip()
    return SourceFields(name=match.group("name").strip(), version=version or None)


class DpkgPackagesDetector:
    """
    Detects packages installed with dpkg.

    The version from a ``Source:`` line wins over the ``Version:`` field:
    vulnerability data for Debian is keyed on source versions, which carry
    the epoch and lack binary-only ``+bN`` rebuild suffixes.
    """

    name = "dpkg"

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def required_files(self) -> list[str]:
        return [DPKG_STATUS_PATH]

    def detect(self, data: Mapping[str, bytes]) -> list[Package]:
        content = data.get(DPKG_STATUS_PATH)
        if content is None:
            return []
        return self.parse_status(content.decode("utf-8", errors="replace"))

    def parse_status(self, text: str) -> list[Package]:
        """Extract packages from the text of a dpkg status file."""
        packages: dict[str, Package] = {}
        current: Package | None = None

        for line in text.split("\n"):
            line = line.removesuffix("\r")
            if line.startswith(PACKAGE_PREFIX):
                current = Package(name=line[len(PACKAGE_PREFIX):].strip())

            elif current is not None and line.startswith(SOURCE_PREFIX):
                source = parse_source_line(line)
                current.name = source.name
                if source.version is not None:
                    current.version = self._parse_version(source.version, current.name)

            elif current is not None and line.startswith(VERSION_PREFIX) and current.version is None:
                current.version = self._parse_version(line[len(VERSION_PREFIX):], current.name)

            if current is not None and current.is_complete():
                packages[current.key()] = current
                current = None

        return list(packages.values())

    def _parse_version(self, raw: str, package_name: str) -> Version | None:
        try:
            return Version.parse(raw)
        except VersionError as e:
            self.logger.warning(f"could not parse version '{raw.strip()}' of package '{package_name}': {e}. skipping")
            return None
