"""Tests for the Version value and Package record."""

import pytest

from layer_inventory.models.package import Package
from layer_inventory.models.version import Version, VersionError


# ═══════════════════════════════════════════
# Version Parsing
# ═══════════════════════════════════════════


class TestVersionParse:
    def test_upstream_only(self):
        v = Version.parse("1.0")
        assert v.epoch == 0
        assert v.upstream == "1.0"
        assert v.revision == ""

    def test_full_version(self):
        v = Version.parse("1:2.30-1ubuntu4")
        assert v.epoch == 1
        assert v.upstream == "2.30"
        assert v.revision == "1ubuntu4"

    def test_revision_split_on_last_hyphen(self):
        v = Version.parse("1.2-beta-3")
        assert v.upstream == "1.2-beta"
        assert v.revision == "3"

    def test_surrounding_whitespace_stripped(self):
        assert str(Version.parse("  3.0-1 \r")) == "3.0-1"

    @pytest.mark.parametrize(
        "raw",
        ["", "   ", "1.0 beta", "a1.0", "x:1.0", "1.0-", ":1.0", "1.0-a_b", "1.0$", "-1"],
    )
    def test_malformed(self, raw):
        with pytest.raises(VersionError):
            Version.parse(raw)

    def test_version_error_is_value_error(self):
        with pytest.raises(ValueError):
            Version.parse("not-a-version")


# ═══════════════════════════════════════════
# Version Ordering & Canonical Form
# ═══════════════════════════════════════════


class TestVersionOrdering:
    def test_canonical_string_drops_zero_epoch(self):
        assert str(Version.parse("0:1.0-1")) == "1.0-1"
        assert str(Version.parse("2:1.0")) == "2:1.0"

    def test_numeric_comparison(self):
        assert Version.parse("1.10") > Version.parse("1.9")

    def test_epoch_dominates(self):
        assert Version.parse("1:0.1") > Version.parse("9.9")

    def test_tilde_sorts_before_release(self):
        assert Version.parse("1.0~rc1") < Version.parse("1.0")
        assert Version.parse("1.0~~") < Version.parse("1.0~")

    def test_letters_before_symbols(self):
        assert Version.parse("1.0a") < Version.parse("1.0+")

    def test_revision_compared_last(self):
        assert Version.parse("2.36-9") < Version.parse("2.36-10")
        assert Version.parse("2.36-9+deb12u1") > Version.parse("2.36-9")

    def test_equal_forms_hash_alike(self):
        a = Version.parse("0:1.0")
        b = Version.parse("1.00")
        assert a == b
        assert hash(a) == hash(b)

    def test_sorting(self):
        raw = ["1.0-1", "1.0~beta", "1:0.5", "0.9", "1.0"]
        ordered = [str(v) for v in sorted(Version.parse(r) for r in raw)]
        assert ordered == ["0.9", "1.0~beta", "1.0", "1.0-1", "1:0.5"]


# ═══════════════════════════════════════════
# Package Record
# ═══════════════════════════════════════════


class TestPackage:
    def test_key(self):
        pkg = Package(name="bash", version=Version.parse("5.2.15-2"))
        assert pkg.key() == "bash|5.2.15-2"

    def test_key_with_unset_version(self):
        assert Package(name="bash").key() == "bash|"

    def test_is_complete(self):
        assert Package(name="bash", version=Version.parse("5.2")).is_complete()
        assert not Package(name="bash").is_complete()
        assert not Package(version=Version.parse("5.2")).is_complete()

    def test_to_dict(self):
        pkg = Package(name="libc6", version=Version.parse("2.36-9"))
        assert pkg.to_dict() == {"name": "libc6", "version": "2.36-9"}

    def test_from_dict(self):
        pkg = Package.from_dict({"name": "libc6", "version": "2.36-9"})
        assert pkg.name == "libc6"
        assert pkg.version == Version.parse("2.36-9")

    def test_from_dict_without_version(self):
        pkg = Package.from_dict({"name": "libc6"})
        assert pkg.version is None
