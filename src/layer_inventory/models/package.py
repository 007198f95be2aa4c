"""
Package Record — the normalized output unit of every detector.

A record is a (name, version) pair identified by ``key()``. The version is
``None`` until a value has been parsed successfully, which keeps "unset"
distinct from any real version.
"""

from dataclasses import dataclass

from layer_inventory.models.version import Version


@dataclass
class Package:
    """An installed package found in a filesystem layer."""

    name: str = ""
    version: Version | None = None

    def key(self) -> str:
        """Identity used for de-duplication: ``name|version``."""
        return f"{self.name}|{self.version_string}"

    @property
    def version_string(self) -> str:
        return str(self.version) if self.version is not None else ""

    def is_complete(self) -> bool:
        """True once both a name and a parsed version are known."""
        return bool(self.name) and self.version is not None

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dictionary."""
        return {
            "name": self.name,
            "version": str(self.version) if self.version is not None else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Package":
        """Deserialize from dictionary."""
        raw_version = data.get("version")
        return cls(
            name=data["name"],
            version=Version.parse(raw_version) if raw_version else None,
        )
