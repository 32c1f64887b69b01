"""Lightweight logging setup for the CLI and TUI."""

import logging
import sys


def parse_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {name}")
    return level


def configure_logging(level: int = logging.INFO) -> None:
    # Configure root logger once; stderr keeps stdout free for the report.
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
