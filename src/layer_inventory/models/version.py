"""
Debian Version Value.

Parses and orders version strings of the form
``[epoch:]upstream_version[-debian_revision]`` using the same comparison
rules as dpkg, so that versions read from a status file can later be matched
against vulnerability ranges.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

UPSTREAM_RE = re.compile(r"^[0-9][A-Za-z0-9.+~:-]*$")
REVISION_RE = re.compile(r"^[A-Za-z0-9.+~]+$")


class VersionError(ValueError):
    """Raised when a version string is malformed."""


def _order(char: str) -> int:
    """Sort weight of a single non-digit character, as dpkg defines it."""
    if char == "~":
        return -1
    if char.isdigit():
        return 0
    if char.isalpha():
        return ord(char)
    return ord(char) + 256


def _verrevcmp(a: str, b: str) -> int:
    """
    Compare two upstream versions (or two revisions) the dpkg way.

    Strings are walked as alternating runs of non-digits, compared
    character by character with ``_order``, and digits, compared numerically.
    A missing character weighs 0, which is why ``~`` sorts before the end of
    the string.
    """
    i = j = 0
    while i < len(a) or j < len(b):
        while (i < len(a) and not a[i].isdigit()) or (j < len(b) and not b[j].isdigit()):
            ac = _order(a[i]) if i < len(a) else 0
            bc = _order(b[j]) if j < len(b) else 0
            if ac != bc:
                return ac - bc
            i += 1
            j += 1

        while i < len(a) and a[i] == "0":
            i += 1
        while j < len(b) and b[j] == "0":
            j += 1

        first_diff = 0
        while i < len(a) and a[i].isdigit() and j < len(b) and b[j].isdigit():
            if not first_diff:
                first_diff = ord(a[i]) - ord(b[j])
            i += 1
            j += 1

        if i < len(a) and a[i].isdigit():
            return 1
        if j < len(b) and b[j].isdigit():
            return -1
        if first_diff:
            return first_diff
    return 0


def _normalized(part: str) -> tuple:
    """
    Reduce a version part to a hashable form that is equal exactly when
    ``_verrevcmp`` reports equality ("1.00" and "1.0" and "1." collapse).
    """
    tokens = [(text, int(digits) if digits else 0) for text, digits in re.findall(r"(\D*)(\d*)", part)]
    while tokens and tokens[-1] == ("", 0):
        tokens.pop()
    return tuple(tokens)


@total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """
    A parsed Debian package version.

    Instances are immutable and ordered; ``str()`` returns the canonical
    form, which omits a zero epoch.
    """

    epoch: int
    upstream: str
    revision: str = ""

    @classmethod
    def parse(cls, text: str) -> "Version":
        """
        Parse a version string.

        Args:
            text: Raw version, e.g. ``1:2.30-1ubuntu4``.

        Returns:
            The parsed Version.

        Raises:
            VersionError: If the string is not a valid Debian version.
        """
        if not isinstance(text, str):
            raise VersionError(f"version must be a string, not {type(text).__name__}")

        value = text.strip()
        if not value:
            raise VersionError("version string is empty")
        if any(c.isspace() for c in value):
            raise VersionError(f"version {value!r} contains whitespace")

        epoch = 0
        upstream = value
        if ":" in value:
            raw_epoch, upstream = value.split(":", 1)
            if not raw_epoch.isascii() or not raw_epoch.isdigit():
                raise VersionError(f"epoch in version {value!r} is not a number")
            epoch = int(raw_epoch)

        revision = ""
        if "-" in upstream:
            upstream, revision = upstream.rsplit("-", 1)
            if not revision:
                raise VersionError(f"revision in version {value!r} is empty")
            if not REVISION_RE.match(revision):
                raise VersionError(f"invalid character in revision of version {value!r}")

        if not upstream:
            raise VersionError(f"upstream part of version {value!r} is empty")
        if not upstream[0].isdigit():
            raise VersionError(f"version {value!r} does not start with a digit")
        if not upstream.isascii() or not UPSTREAM_RE.match(upstream):
            raise VersionError(f"invalid character in version {value!r}")

        return cls(epoch=epoch, upstream=upstream, revision=revision)

    def compare(self, other: "Version") -> int:
        """Return a negative, zero or positive number like ``cmp``."""
        if self.epoch != other.epoch:
            return self.epoch - other.epoch
        result = _verrevcmp(self.upstream, other.upstream)
        if result:
            return result
        return _verrevcmp(self.revision, other.revision)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash((self.epoch, _normalized(self.upstream), _normalized(self.revision)))

    def __str__(self) -> str:
        text = self.upstream
        if self.epoch:
            text = f"{self.epoch}:{text}"
        if self.revision:
            text = f"{text}-{self.revision}"
        return text
