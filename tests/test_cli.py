"""Tests for the command-line entry point."""

import shutil
from pathlib import Path

import pytest

from cata_tilecov.__main__ import build_parser, generate_reports, main


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GAME_DIR", raising=False)
    monkeypatch.delenv("OUTPUT_DIR", raising=False)


class TestGenerateReports:
    """Test the report generation flow."""

    def test_writes_report_per_tileset(self, game_dir: Path, tmp_path: Path) -> None:
        """Test every gfx subdirectory gets a report."""
        output_dir = tmp_path / "reports"
        written = generate_reports(game_dir, output_dir)
        assert [p.name for p in written] == ["blue_tileset.html", "red_tileset.html", "sample_tileset.html"]
        assert (output_dir / "coverage.css").is_file()

    def test_reports_items_and_monsters(self, game_dir: Path, tmp_path: Path) -> None:
        """Test only items and monsters files are listed."""
        generate_reports(game_dir, tmp_path / "reports")
        page = (tmp_path / "reports" / "red_tileset.html").read_text(encoding="utf-8")
        assert "data/json/items/guns.json" in page
        assert "data/json/monsters/slugs.json" in page
        assert "furniture.json" not in page
        assert "monster_goals.json" not in page

    def test_missing_json_directory(self, game_dir: Path, tmp_path: Path) -> None:
        """Test a game directory without data/json."""
        shutil.rmtree(game_dir / "data")
        with pytest.raises(FileNotFoundError):
            generate_reports(game_dir, tmp_path / "reports")

    def test_missing_gfx_directory(self, game_dir: Path, tmp_path: Path) -> None:
        """Test a game directory without gfx."""
        shutil.rmtree(game_dir / "gfx")
        with pytest.raises(FileNotFoundError):
            generate_reports(game_dir, tmp_path / "reports")


@pytest.mark.usefixtures("restore_logging")
class TestMain:
    """Test the entry point with configuration, arguments and environment."""

    def test_arguments(self, game_dir: Path, tmp_path: Path) -> None:
        """Test directories given as arguments."""
        output_dir = tmp_path / "out"
        code = main([
            "--config-dir", str(tmp_path / "config"),
            "--game-dir", str(game_dir),
            "--output-dir", str(output_dir),
        ])
        assert code == 0
        assert (output_dir / "red_tileset.html").is_file()
        assert (tmp_path / "config" / "tilecov.ini").is_file()

    def test_environment_beats_arguments(
        self, game_dir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test GAME_DIR and OUTPUT_DIR variables override arguments."""
        monkeypatch.setenv("GAME_DIR", str(game_dir))
        monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "from_env"))
        code = main([
            "--config-dir", str(tmp_path / "config"),
            "--game-dir", str(tmp_path / "missing"),
            "--output-dir", str(tmp_path / "from_args"),
        ])
        assert code == 0
        assert (tmp_path / "from_env" / "blue_tileset.html").is_file()
        assert not (tmp_path / "from_args").exists()

    def test_invalid_game_dir(self, tmp_path: Path) -> None:
        """Test a missing game directory fails."""
        code = main(["--config-dir", str(tmp_path / "config"), "--game-dir", str(tmp_path / "missing")])
        assert code == 1

    def test_missing_gfx(self, game_dir: Path, tmp_path: Path) -> None:
        """Test a game directory without gfx fails after validation."""
        shutil.rmtree(game_dir / "gfx")
        code = main([
            "--config-dir", str(tmp_path / "config"),
            "--game-dir", str(game_dir),
            "--output-dir", str(tmp_path / "out"),
        ])
        assert code == 1
        assert not (tmp_path / "out").exists()

    def test_broken_tileset(self, game_dir: Path, tmp_path: Path) -> None:
        """Test a tileset without metadata fails the run."""
        (game_dir / "gfx" / "broken").mkdir()
        code = main([
            "--config-dir", str(tmp_path / "config"),
            "--game-dir", str(game_dir),
            "--output-dir", str(tmp_path / "out"),
        ])
        assert code == 1

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test --version prints the program version."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--version"])
        assert "cata-tilecov 0.1.0" in capsys.readouterr().out
