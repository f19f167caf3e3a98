"""Global loguru configuration.

Call ``setup_logger`` once at application start; modules then log through
``from loguru import logger`` directly::

    logger.info("Round {} started", match_state.current_round)
"""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

_FMT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level:8}</level> | "
    "<cyan>{name}:{line}</cyan> | "
    "{message}"
)


def setup_logger(
    level: str = "INFO",
    log_dir: Path | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Configure the loguru sinks.

    Args:
        level: Minimum level for the console sink.
        log_dir: Directory for a rotating DEBUG file sink. None means console only.
        rotation: Max size or period of a single log file.
        retention: How long old log files are kept.
    """
    logger.remove()
    logger.add(sys.stderr, level=level, format=_FMT)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_dir / "arena_{time:YYYY-MM-DD}.log",
            level="DEBUG",
            rotation=rotation,
            retention=retention,
            encoding="utf-8",
            format=_FMT,
        )
