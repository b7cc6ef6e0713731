"""
Main entry point for Cata-Tilecov.
Usage: python -m cata_tilecov [--game-dir DIR] [--output-dir DIR] [--config-dir DIR]
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Optional, Sequence

from . import __version__
from .coverage import CoverageReport, TilesetCoverage
from .game_data import JsonFileTree
from .settings import GAME_DIR, OUTPUT_DIR, AppSettings
from .utils.logging_config import setup_logging

# Directories of data/json whose objects are reported
JSON_DIRECTORIES = ("items", "monsters")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cata-tilecov",
        description="Generate tileset coverage reports for Cataclysm: Dark Days Ahead",
    )
    parser.add_argument("--game-dir", help="Cataclysm game directory (overrides GAME_DIR in tilecov.ini)")
    parser.add_argument("--output-dir", help="report output directory (overrides OUTPUT_DIR in tilecov.ini)")
    parser.add_argument("--config-dir", help="directory holding tilecov.ini (default: current directory)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def apply_overrides(
    settings: AppSettings,
    args: argparse.Namespace,
    environ: Mapping[str, str],
) -> None:
    """Override configured directories from arguments and environment.

    Environment variables ``GAME_DIR`` and ``OUTPUT_DIR`` take precedence
    over command-line arguments, which take precedence over the file.
    """
    for key, arg_value in ((GAME_DIR, args.game_dir), (OUTPUT_DIR, args.output_dir)):
        value = environ.get(key) or arg_value
        if value:
            settings.override(key, value)


def generate_reports(game_dir: Path, output_dir: Path) -> list[Path]:
    """Compute coverage of every tileset in the game and write the reports.

    Args:
        game_dir: Cataclysm game directory
        output_dir: Directory where reports are written

    Returns:
        Paths of the written report files

    Raises:
        FileNotFoundError: if ``data/json`` or ``gfx`` is missing in `game_dir`
    """
    logger = logging.getLogger(f"{__name__}.generate_reports")

    json_dir = game_dir / "data" / "json"
    if not json_dir.exists():
        raise FileNotFoundError(f"Unable to find 'data/json' in game root directory: {game_dir}")
    gfx_dir = game_dir / "gfx"
    if not gfx_dir.exists():
        raise FileNotFoundError(f"Unable to find 'gfx' directory in: {game_dir}")

    trees = [JsonFileTree(json_dir, directory) for directory in JSON_DIRECTORIES]
    logger.info(f"Loaded {sum(len(tree) for tree in trees)} JSON files from {json_dir}")

    coverages: list[TilesetCoverage] = []
    for tileset_dir in sorted(p for p in gfx_dir.iterdir() if p.is_dir()):
        builder = TilesetCoverage.Builder.create(tileset_dir).exclude_overlays()
        for tree in trees:
            for relative, records in tree:
                builder.with_objects(json_dir / relative, records)
        coverage = builder.build()
        logger.info(f"{coverage.tileset.display_name}: {coverage.totals()}")
        coverages.append(coverage)

    return CoverageReport(coverages, game_dir).write_to_file(output_dir)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)
    logger = logging.getLogger(f"{__name__}.main")
    try:
        # Load configuration first
        settings = AppSettings(args.config_dir)
        apply_overrides(settings, args, os.environ)

        setup_logging(settings)
        logger.info(f"Starting Cata-Tilecov {__version__}")
        logger.info(f"Configuration loaded from {settings.config_path}")

        validation = settings.validate()
        if validation.warnings:
            logger.warning("Configuration warnings detected:")
            for warning in validation.warnings:
                logger.warning(f"  {warning}")
        if not validation.is_valid:
            logger.error("Configuration validation failed:")
            for error in validation.errors:
                logger.error(f"  {error}")
        settings.require_valid()

        reports = generate_reports(settings.game_dir, settings.output_dir)
        logger.info(f"Wrote {len(reports)} coverage reports to {settings.output_dir}")
        return 0

    except Exception:
        logger.exception("Unable to generate coverage reports")
        return 1


if __name__ == "__main__":
    sys.exit(main())
