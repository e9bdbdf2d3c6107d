"""Tests for display module."""

from io import StringIO
from unittest.mock import patch

import pytest
from rich.console import Console

from depsize.display import (
    MAX_FILE_TYPES,
    build_detail_panel,
    build_package_table,
    format_size,
    render_frame,
    scroll_indicator,
    show_report,
)
from depsize.models import PackageRecord
from depsize.navigation import NavigationState, ViewMode


def make_package(name="pkg", size=1000, **kwargs):
    return PackageRecord(name=name, path=f"/tmp/node_modules/{name}", size_bytes=size, **kwargs)


def render_text(renderable, width=80):
    console = Console(file=StringIO(), width=width, color_system=None, legacy_windows=False)
    console.print(renderable)
    return console.file.getvalue()


class TestFormatSize:
    @pytest.mark.parametrize(
        "size,expected",
        [
            (0, "0 B"),
            (500, "500 B"),
            (1023, "1023 B"),
            (1024, "1.00 KB"),
            (1500, "1.46 KB"),
            (1024 * 1024, "1.00 MB"),
            (1024 * 1024 * 2 + 1024 * 100, "2.10 MB"),
            (1024**3, "1.00 GB"),
        ],
    )
    def test_format(self, size, expected):
        assert format_size(size) == expected


class TestScrollIndicator:
    def test_hidden_when_everything_fits(self):
        assert scroll_indicator(0, 5, 5, 10) == ""

    def test_shows_range(self):
        assert scroll_indicator(10, 20, 120, 20) == " [11-30/120]"

    def test_last_page(self):
        assert scroll_indicator(100, 20, 120, 20) == " [101-120/120]"


class TestPackageTable:
    def test_shows_visible_window(self):
        packages = [make_package(f"pkg-{i:02d}", size=1000 - i) for i in range(30)]
        state = NavigationState(scroll_offset=5)

        output = render_text(build_package_table(packages, state, 14))

        assert "pkg-05" in output
        assert "pkg-14" in output
        assert "pkg-04" not in output
        assert "pkg-15" not in output
        assert "[6-15/30]" in output

    def test_headers_and_title(self):
        output = render_text(build_package_table([make_package("react")], NavigationState(), 24))
        assert "Node Modules Size" in output
        assert "Module" in output
        assert "Size" in output
        assert "react" in output
        assert "[" not in output.split("Node Modules Size")[1].split("\n")[0]

    def test_empty_collection(self):
        output = render_text(build_package_table([], NavigationState(), 24))
        assert "Node Modules Size" in output

    def test_help_line(self):
        output = render_text(build_package_table([make_package()], NavigationState(), 24))
        assert "Quit" in output


class TestDetailPanel:
    def test_full_record(self):
        package = make_package(
            "test-module",
            size=2048,
            version="1.0.0",
            license="MIT",
            dependency_count=3,
            file_count=3,
            file_types=[("js", 1), ("ts", 1), ("json", 1)],
            last_updated="2 days ago",
            description="A test module",
            author="Test Author",
            homepage="https://example.com",
            repository="https://github.com/test/test-module",
        )

        output = render_text(build_detail_panel(package), width=120)

        assert "Module Details: test-module" in output
        assert "Size: 2.00 KB" in output
        assert "Version: 1.0.0" in output
        assert "License: MIT" in output
        assert "Dependencies: 3" in output
        assert "Files: 3" in output
        assert "Last Updated: 2 days ago" in output
        assert "Description: A test module" in output
        assert "js: 1 files" in output
        assert "ESC" in output

    def test_absent_fields_not_shown(self):
        output = render_text(build_detail_panel(make_package("bare")), width=120)
        assert "Version" not in output
        assert "Dependencies" not in output
        assert "No file type information available" in output

    def test_path_and_declared_name(self):
        package = make_package("lodash-es", declared_name="lodash", dependency_count=0)

        output = render_text(build_detail_panel(package), width=120)

        assert "Name: lodash" in output
        assert "Path: /tmp/node_modules/lodash-es" in output
        assert "No usable package.json" not in output

    def test_missing_manifest_noted(self):
        output = render_text(build_detail_panel(make_package("bare")), width=120)
        assert "No usable package.json found" in output

    def test_zero_dependencies_shown(self):
        output = render_text(build_detail_panel(make_package(dependency_count=0)), width=120)
        assert "Dependencies: 0" in output

    def test_truncates_file_types(self):
        file_types = [(f"ext{i}", 20 - i) for i in range(MAX_FILE_TYPES + 2)]
        package = make_package(file_types=file_types, file_count=sum(c for _, c in file_types))

        output = render_text(build_detail_panel(package), width=120)

        assert "ext9:" in output
        assert "ext10:" not in output
        assert "(and more...)" in output


class TestRenderFrame:
    def test_list_mode(self):
        packages = [make_package("alpha")]
        output = render_text(render_frame(packages, NavigationState(selected_index=0), 24))
        assert "Node Modules Size" in output

    def test_detail_mode(self):
        packages = [make_package("alpha"), make_package("beta")]
        state = NavigationState(mode=ViewMode.DETAIL, selected_index=1)
        output = render_text(render_frame(packages, state, 24))
        assert "Module Details: beta" in output


class TestShowReport:
    def test_prints_table_and_total(self):
        packages = [make_package("big", 2048), make_package("small", 1024)]
        console = Console(file=StringIO(), width=100, color_system=None)
        with patch("depsize.display.console", console):
            show_report(packages)
        output = console.file.getvalue()
        assert "big" in output
        assert "small" in output
        assert "2 packages" in output
        assert "3.00 KB" in output

    def test_top(self):
        packages = [make_package(f"pkg{i}", 100 - i) for i in range(5)]
        console = Console(file=StringIO(), width=100, color_system=None)
        with patch("depsize.display.console", console):
            show_report(packages, top=2)
        output = console.file.getvalue()
        assert "pkg1" in output
        assert "pkg2" not in output
        assert "...and 3 more" in output
