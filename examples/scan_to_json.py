"""
Example: Scan image layers and export the inventory as JSON.

Usage:
    python examples/scan_to_json.py layer1.tar layer2.tar.gz ./unpacked-rootfs
"""

import asyncio
import sys
from pathlib import Path

from layer_inventory import LayerScanner
from layer_inventory.detectors.registry import default_registry
from layer_inventory.exporters.json_export import JSONExporter


async def main(layers: list[str]):
    output_path = Path("./inventory_output/inventory.json")
    exporter = JSONExporter(output_path=output_path)

    scanner = LayerScanner(registry=default_registry(), exporters=[exporter])
    result = await scanner.run([Path(p) for p in layers])

    print(f"\n{len(result.packages)} packages exported to: {output_path.absolute()}")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:]))
