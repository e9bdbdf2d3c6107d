"""Tests for data models."""

import pytest
from pydantic import ValidationError

from depsize.models import PackageRecord


class TestPackageRecord:
    def test_defaults(self):
        record = PackageRecord(name="react", path="node_modules/react")
        assert record.size_bytes == 0
        assert record.file_count == 0
        assert record.file_types == []
        assert record.version is None
        assert record.dependency_count is None
        assert record.last_updated is None

    def test_immutable(self):
        record = PackageRecord(name="react", path="node_modules/react")
        with pytest.raises(ValidationError):
            record.size_bytes = 10

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            PackageRecord(name="react", path="node_modules/react", size_bytes=-1)

    def test_has_manifest(self):
        assert PackageRecord(name="a", path="a", dependency_count=0).has_manifest is True
        assert PackageRecord(name="a", path="a").has_manifest is False

    def test_empty_string_is_not_absent(self):
        record = PackageRecord(name="a", path="a", description="")
        assert record.description == ""
        assert record.description is not None

    def test_file_types_are_pairs(self):
        record = PackageRecord(name="a", path="a", file_types=[("js", 2), ("md", 1)])
        assert record.file_types == [("js", 2), ("md", 1)]
