"""Shared fixtures: layers on disk with dpkg status files."""

import pytest


def make_layer(root, status_text):
    status = root / "var" / "lib" / "dpkg" / "status"
    status.parent.mkdir(parents=True)
    status.write_text(status_text)
    return root


@pytest.fixture
def base_layer(tmp_path):
    return make_layer(
        tmp_path / "base",
        "Package: libc6\nSource: glibc\nVersion: 2.36-9\n\nPackage: bash\nVersion: 5.2.15-2\n",
    )


@pytest.fixture
def app_layer(tmp_path):
    return make_layer(
        tmp_path / "app",
        "Package: libc6\nSource: glibc\nVersion: 2.36-9\n\nPackage: curl\nVersion: 7.88.1-10\n",
    )


@pytest.fixture
def truncated_layer(tmp_path):
    """A gzip layer cut off halfway through its second member."""
    import io
    import os
    import tarfile

    archive = tmp_path / "truncated.tar.gz"
    with tarfile.open(archive, "w:gz") as tar:
        for name, content in [("var/lib/dpkg/status", b"Package: foo\nVersion: 1.0\n"), ("blob", os.urandom(200_000))]:
            info = tarfile.TarInfo(name)
            info.size = len(content)
            tar.addfile(info, io.BytesIO(content))
    raw = archive.read_bytes()
    archive.write_bytes(raw[: len(raw) // 2])
    return archive
