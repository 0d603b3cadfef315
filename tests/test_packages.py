"""
Tests for the package catalog and size flag validation.
"""

import pytest

from infrakit.errors import ValidationError
from infrakit.models import SizingTier
from infrakit.packages import LARGE, MEDIUM, PACKAGES, SMALL, select_package


class TestCatalog:
    """Test the fixed package table."""

    def test_three_packages(self):
        assert set(PACKAGES) == {"small", "medium", "large"}

    def test_small_package(self):
        assert (SMALL.cpu_count, SMALL.memory_mb, SMALL.app_disk_gb) == (2, 8096, 10)

    def test_medium_package(self):
        assert (MEDIUM.cpu_count, MEDIUM.memory_mb, MEDIUM.app_disk_gb) == (4, 16384, 20)

    def test_large_package(self):
        assert (LARGE.cpu_count, LARGE.memory_mb, LARGE.app_disk_gb) == (8, 32768, 40)

    def test_packages_are_immutable(self):
        """Packages cannot be changed at runtime."""
        with pytest.raises(Exception):
            SMALL.cpu_count = 64

    def test_description(self):
        assert SMALL.describe() == "Deploy a server with 2 CPUs, 8GB Memory, 10GB application disk"
        assert LARGE.describe() == "Deploy a server with 8 CPUs, 32GB Memory, 40GB application disk"

    def test_disk_bytes(self):
        """Disk size is converted with decimal gigabytes."""
        assert SMALL.app_disk_bytes == 10_000_000_000

    def test_invalid_tier(self):
        with pytest.raises(ValueError):
            SizingTier(name="tiny", cpu_count=0, memory_mb=512, app_disk_gb=1)


class TestSelectPackage:
    """Test exactly-one flag selection."""

    @pytest.mark.parametrize("flags,expected", [
        ({"small": True}, SMALL),
        ({"medium": True}, MEDIUM),
        ({"large": True}, LARGE),
    ])
    def test_single_flag(self, flags, expected):
        assert select_package(**flags) is expected

    def test_no_flag(self):
        """No flag set is rejected."""
        with pytest.raises(ValidationError, match="must be set"):
            select_package()

    @pytest.mark.parametrize("flags", [
        {"small": True, "medium": True},
        {"small": True, "large": True},
        {"medium": True, "large": True},
        {"small": True, "medium": True, "large": True},
    ])
    def test_multiple_flags(self, flags):
        """More than one flag set is rejected."""
        with pytest.raises(ValidationError, match="only one package size"):
            select_package(**flags)

    def test_mapping_of_flags(self):
        """Flags may be passed as a name to flag mapping."""
        assert select_package({"small": False, "medium": True, "large": False}) is MEDIUM

    @pytest.mark.parametrize("flags,match", [
        ({"small": False, "medium": True, "large": True}, "only one package size"),
        ({"small": False, "medium": False, "large": False}, "must be set"),
        ({}, "must be set"),
    ])
    def test_mapping_validated(self, flags, match):
        with pytest.raises(ValidationError, match=match):
            select_package(flags)
