"""Utilities shared by sigillum tools."""

from __future__ import annotations

import logging
from pathlib import Path

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def set_verbosity(verbose: bool) -> None:
    """Lower the ``sigillum`` logger to DEBUG when *verbose* is set."""

    logger = get_logger("sigillum")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def resolve_path(path: str | Path | None) -> Path:
    if path is None:
        raise ValueError("Path must not be None")
    return Path(path).expanduser().resolve()


def ensure_parent_dir(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    return path
