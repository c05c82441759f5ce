"""Configuration: default paper and output directory from environment."""

import os
from pathlib import Path

from psgraph.constants import DEFAULT_PAPER, PAPER_SIZES

DEFAULT_OUTPUT_DIR = '.'


def get_paper_name() -> str:
    """Return the default paper name (PSGRAPH_PAPER env var or A4).

    Unknown names fall back to the default.

    Returns:
        Key into PAPER_SIZES.
    """
    name = os.environ.get('PSGRAPH_PAPER', '').strip()
    for known in PAPER_SIZES:
        if known.lower() == name.lower():
            return known
    return DEFAULT_PAPER


def get_output_dir() -> Path:
    """Return the directory for CLI output files (PSGRAPH_OUTPUT_DIR env var or cwd).

    Returns:
        Directory path (not created here).
    """
    return Path(os.environ.get('PSGRAPH_OUTPUT_DIR', DEFAULT_OUTPUT_DIR))
