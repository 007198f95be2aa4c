"""
Layer loading.

Turns a layer on local disk, either an unpacked directory or a (possibly
compressed) tar archive, into the read-only path → bytes mapping that
detectors consume. Only the files the detectors ask for are read.
"""

import asyncio
import logging
import tarfile
import zlib
from pathlib import Path
from types import MappingProxyType

import aiofiles

from layer_inventory.core.errors import LayerError

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """
    Make a layer path relative: ``/var/lib/dpkg/status`` and
    ``./var/lib/dpkg/status`` both become ``var/lib/dpkg/status``.
    """
    while True:
        if path.startswith("./"):
            path = path[2:]
        elif path.startswith("/"):
            path = path[1:]
        else:
            return path


async def load_layer(path: Path, required_files: list[str]) -> MappingProxyType:
    """
    Read the required files out of a layer.

    Args:
        path: Directory holding the unpacked layer, or a tar archive of it.
        required_files: Relative paths to extract; absent ones are skipped.

    Returns:
        Read-only mapping of relative path to file content.

    Raises:
        LayerError: If ``path`` is neither a directory nor a tar archive.
    """
    path = Path(path)
    wanted = {normalize_path(p) for p in required_files}

    if path.is_dir():
        data = await _load_directory(path, wanted)
    elif path.is_file() and tarfile.is_tarfile(path):
        data = await asyncio.to_thread(_load_tarball, path, wanted)
    else:
        raise LayerError(f"{path} is not a directory or tar archive")

    logger.debug(f"Loaded {len(data)}/{len(wanted)} required files from {path}")
    return MappingProxyType(data)


async def _load_directory(root: Path, wanted: set[str]) -> dict[str, bytes]:
    data: dict[str, bytes] = {}
    real_root = root.resolve()
    for rel_path in sorted(wanted):
        file_path = root / rel_path
        if not file_path.is_file():
            continue
        # Symlinks may only point inside the layer
        if not file_path.resolve().is_relative_to(real_root):
            logger.warning(f"Skipping {rel_path} in {root}: resolves outside the layer")
            continue
        async with aiofiles.open(file_path, "rb") as f:
            data[rel_path] = await f.read()
    return data


def _load_tarball(archive: Path, wanted: set[str]) -> dict[str, bytes]:
    data: dict[str, bytes] = {}
    try:
        with tarfile.open(archive, "r:*") as tar:
            for member in tar:
                name = normalize_path(member.name)
                if name not in wanted or not member.isfile():
                    continue
                f = tar.extractfile(member)
                if f is not None:
                    data[name] = f.read()
    except (tarfile.TarError, EOFError, zlib.error) as e:
        raise LayerError(f"could not read {archive}: {e}") from e
    return data
