"""
HTML coverage report.

Renders one static HTML page per tileset listing every source file with its
object counts and a coverage bar, styled by the packaged ``coverage.css``.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, Optional

from ..resources import STYLESHEET, copy_stylesheet
from .classifier import TilesetCoverage
from .models import CoverageStats

DOCTYPE = "<!DOCTYPE html>"

# Column headers of the report table
COLUMNS = ("Files", "Total", "Inherited", "No coverage", "Coverage")


def coverage_color(percent: float) -> str:
    """Return the coverage bar color for a coverage percentage."""
    if percent < 33:
        return "red"
    if percent < 66:
        return "blue"
    return "green"


def format_percent(percent: float) -> str:
    return f"{percent:.1f}%"


def _div(parent: ET.Element, css_class: Optional[str] = None, text: Optional[str] = None, **attrib: str) -> ET.Element:
    if css_class:
        attrib["class"] = css_class
    element = ET.SubElement(parent, "div", attrib)
    if text is not None:
        element.text = text
    return element


class CoverageReport:
    """HTML reports for a collection of tileset coverages.

    Args:
        coverages: Coverage of each tileset to report on
        game_dir: Game directory, file paths are shown relative to it
    """

    def __init__(self, coverages: Iterable[TilesetCoverage], game_dir: str | Path):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.game_dir = Path(game_dir)
        self.documents: dict[str, ET.Element] = {}

        for coverage in sorted(coverages, key=lambda c: c.tileset.name):
            self.documents[coverage.tileset.name] = self._render(coverage)

    def _display_path(self, path: Path) -> str:
        try:
            return path.relative_to(self.game_dir).as_posix()
        except ValueError:
            return path.as_posix()

    def _render(self, coverage: TilesetCoverage) -> ET.Element:
        title = coverage.tileset.display_name

        html = ET.Element("html", {"lang": "en"})
        head = ET.SubElement(html, "head")
        ET.SubElement(head, "meta", {"charset": "utf-8"})
        ET.SubElement(head, "link", {"rel": "stylesheet", "href": STYLESHEET})
        ET.SubElement(head, "title").text = f"{title} - Tileset Coverage Report"

        body = ET.SubElement(html, "body")
        ET.SubElement(body, "h1").text = title
        ET.SubElement(body, "hr")

        table = _div(body, "flex-table")
        header = _div(table, "flex-row")
        for column in COLUMNS:
            cell = _div(header, "flex-column")
            _div(cell, "indented-text", column)

        for path, stats in coverage.stats.items():
            self._render_row(table, path, stats)

        return html

    def _render_row(self, table: ET.Element, path: Path, stats: CoverageStats) -> None:
        percent = stats.percent
        percent_text = format_percent(percent)

        row = _div(table, "flex-row")

        link_cell = _div(_div(row), "indented-text")
        link = ET.SubElement(link_cell, "a", {"href": path.resolve().as_uri(), "target": "_blank"})
        link.text = self._display_path(path)

        _div(row, text=str(stats.total))
        _div(row, text=str(stats.inherited))
        _div(row, text=str(stats.no_coverage))

        bar_cell = _div(row)
        _div(bar_cell, "coverage-bar", color=coverage_color(percent), style=f"flex: 0 0 {percent_text}")
        _div(bar_cell, "coverage-text", percent_text)

    def render(self, tileset_name: str) -> str:
        """Return the HTML document of one tileset.

        Raises:
            KeyError: if no coverage was given for `tileset_name`.
        """
        document = ET.tostring(self.documents[tileset_name], encoding="unicode", method="html")
        return f"{DOCTYPE}\n{document}\n"

    def write_to_file(self, output_dir: str | Path) -> list[Path]:
        """Write every report and the stylesheet into `output_dir`.

        The directory is created if needed. Each tileset is written to
        ``<tileset name>.html``.

        Returns:
            Paths of the written HTML files
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        copy_stylesheet(output_dir)

        written: list[Path] = []
        for name in self.documents:
            report_path = output_dir / f"{name}.html"
            report_path.write_text(self.render(name), encoding="utf-8")
            written.append(report_path)
            self.logger.info(f"Wrote coverage report: {report_path}")
        return written
