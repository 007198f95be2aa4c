"""
Layer Inventory - installed-package extraction for filesystem layers.

Detects the software packages installed in a container image layer by
parsing package-manager databases, and produces a normalized, de-duplicated
(name, version) inventory for vulnerability matching.
"""

__version__ = "1.0.0"


def __getattr__(name: str):
    """Lazy import for heavy dependencies."""
    if name == "LayerScanner":
        from layer_inventory.core.scanner import LayerScanner

        return LayerScanner
    if name == "Package":
        from layer_inventory.models.package import Package

        return Package
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["LayerScanner", "Package", "__version__"]
