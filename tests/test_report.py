"""Unit tests for HTML coverage reports."""

from pathlib import Path

import pytest

from cata_tilecov.coverage import CoverageReport, TilesetCoverage
from cata_tilecov.coverage.report import coverage_color, format_percent
from cata_tilecov.game_data import JsonFileTree


def build_coverage(game_dir: Path, tileset: str) -> TilesetCoverage:
    json_dir = game_dir / "data" / "json"
    builder = TilesetCoverage.Builder.create(game_dir / "gfx" / tileset).exclude_overlays()
    for path, records in JsonFileTree(json_dir, "items"):
        builder.with_objects(json_dir / path, records)
    return builder.build()


@pytest.fixture
def report(game_dir: Path) -> CoverageReport:
    coverages = [build_coverage(game_dir, name) for name in ("red_tileset", "sample_tileset")]
    return CoverageReport(coverages, game_dir)


class TestFormatting:
    """Test percent text and bar colors."""

    @pytest.mark.parametrize(
        "percent,color",
        [(0.0, "red"), (32.9, "red"), (33.0, "blue"), (65.9, "blue"), (66.0, "green"), (100.0, "green")],
    )
    def test_coverage_color(self, percent: float, color: str) -> None:
        """Test color thresholds."""
        assert coverage_color(percent) == color

    def test_format_percent(self) -> None:
        """Test one decimal place."""
        assert format_percent(83.33333) == "83.3%"
        assert format_percent(0) == "0.0%"
        assert format_percent(100) == "100.0%"


class TestCoverageReport:
    """Test rendering and writing reports."""

    def test_one_document_per_tileset(self, report: CoverageReport) -> None:
        """Test documents are keyed by tileset name."""
        assert list(report.documents) == ["red_tileset", "sample_tileset"]

    def test_page_header(self, report: CoverageReport) -> None:
        """Test the page title and heading use the display name."""
        page = report.render("red_tileset")
        assert page.startswith("<!DOCTYPE html>")
        assert "<title>RedTileset - Tileset Coverage Report</title>" in page
        assert "<h1>RedTileset</h1>" in page
        assert 'href="coverage.css"' in page

    def test_rows(self, report: CoverageReport) -> None:
        """Test rows show relative paths, counts and the coverage bar."""
        page = report.render("red_tileset")
        assert ">data/json/items/guns.json</a>" in page
        assert "83.3%" in page
        assert 'color="green"' in page
        assert 'style="flex: 0 0 83.3%"' in page
        assert "50.0%" in page
        assert 'color="blue"' in page

    def test_low_coverage_colors(self, report: CoverageReport) -> None:
        """Test lower coverage is shown in blue and red."""
        page = report.render("sample_tileset")
        assert "33.3%" in page
        assert "25.0%" in page
        assert 'color="red"' in page

    def test_links_are_file_uris(self, report: CoverageReport, game_dir: Path) -> None:
        """Test each file name links to the source file."""
        guns = game_dir / "data" / "json" / "items" / "guns.json"
        assert f'href="{guns.resolve().as_uri()}"' in report.render("red_tileset")

    def test_unknown_tileset(self, report: CoverageReport) -> None:
        """Test rendering a tileset without coverage."""
        with pytest.raises(KeyError):
            report.render("pseudo_tileset")

    def test_write_to_file(self, report: CoverageReport, tmp_path: Path) -> None:
        """Test pages and stylesheet are written to a new directory."""
        output_dir = tmp_path / "out" / "reports"
        written = report.write_to_file(output_dir)
        assert written == [output_dir / "red_tileset.html", output_dir / "sample_tileset.html"]
        assert (output_dir / "coverage.css").is_file()
        assert ".coverage-bar" in (output_dir / "coverage.css").read_text(encoding="utf-8")
        assert "RedTileset" in written[0].read_text(encoding="utf-8")

    def test_empty_report(self, tmp_path: Path) -> None:
        """Test no coverages writes only the stylesheet."""
        assert CoverageReport([], tmp_path).write_to_file(tmp_path / "out") == []
        assert (tmp_path / "out" / "coverage.css").is_file()
