"""Root logger configuration for skillhost entry points."""

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "WARNING", log_file: Path | str | None = None) -> int:
    """Configure the root logger.

    Unknown level names fall back to INFO. Any existing root handlers are
    replaced.

    Args:
        level: Log level name (case-insensitive)
        log_file: Append to this file instead of writing to stderr

    Returns:
        The numeric level that was applied
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            level=numeric_level,
            format=LOG_FORMAT,
            filename=str(log_file),
            filemode="a",
            force=True,
        )
    else:
        logging.basicConfig(level=numeric_level, format=LOG_FORMAT, force=True)

    return numeric_level
