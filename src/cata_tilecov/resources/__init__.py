"""
Resources for Cata-Tilecov.

Provides helpers to access packaged assets such as the report stylesheet.
"""

from importlib import resources as importlib_resources
from pathlib import Path

STYLESHEET = "coverage.css"


def copy_stylesheet(output_dir: Path) -> Path:
    """Copy the packaged report stylesheet into `output_dir`.

    Returns:
        Path of the written file
    """
    target = output_dir / STYLESHEET
    target.write_bytes(importlib_resources.files(__name__).joinpath(STYLESHEET).read_bytes())
    return target
