"""Logging configuration for the projectile record tools.

Console shows INFO+ with concise timestamps; an optional log file captures
DEBUG+ with full timestamps and logger names.
"""

import logging
from pathlib import Path


def setup_logging(
    console_level: int = logging.INFO, log_file: str | Path | None = None
) -> Path | None:
    """Configure logging with a console handler and an optional file handler.

    Existing handlers on the root logger are cleared first so that calling
    this function multiple times (e.g. in tests) does not produce duplicate
    output.

    Args:
        console_level: Minimum level for console output.
        log_file: If given, DEBUG+ records are also written here. Parent
            directories are created.

    Returns:
        Path to the log file, or None when logging to console only.
    """
    # Root logger -- capture everything; handlers decide what to emit.
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)-5s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(console)

    if log_file is None:
        return None

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(str(log_path), encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-5s [%(name)s] %(message)s")
    )
    root.addHandler(file_handler)
    return log_path
