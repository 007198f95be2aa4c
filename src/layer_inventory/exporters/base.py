"""
Exporter Protocol — Base interface for all export backends.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from layer_inventory.models.package import Package


@runtime_checkable
class Exporter(Protocol):
    """
    Protocol that all exporters must implement.

    Exporters receive the merged, de-duplicated packages of a scan one at a
    time and persist them in their respective format (JSON, SQLite).
    """

    async def export(self, package: Package) -> None:
        """Export a single package to the target format."""
        ...

    async def finalize(self) -> None:
        """Called after all packages have been exported. Use for cleanup."""
        ...
