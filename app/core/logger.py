"""Logger configuration for the trip planner backend.

Services log a constant message with keyword context, for example
``logger.info("Regeneration lock acquired", trip_id=7, lock_until=...)``.
Loguru stores the keywords in ``record["extra"]``; the patcher below renders
them as ``key=value`` pairs so console lines stay greppable by trip or user.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>{extra[context_text]}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}{extra[context_text]}"


def render_context(extra: dict) -> str:
    """Render structured log context as ' | key=value key=value', sorted by key."""
    pairs = [f"{key}={value}" for key, value in sorted(extra.items()) if key != "context_text"]
    if not pairs:
        return ""
    return " | " + " ".join(pairs)


def _add_context_text(record) -> None:
    record["extra"]["context_text"] = render_context(record["extra"])


def setup_logger(
    level: str = "INFO",
    log_file: str | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
    serialize: bool = False,
) -> None:
    """Configure loguru with a console sink and an optional file sink.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file. If None, only console logging.
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
        serialize: Write the file sink as JSON lines (one record per line,
            context under record.extra) instead of formatted text
    """
    logger.remove()
    logger.configure(patcher=_add_context_text)

    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_options = {"serialize": True} if serialize else {"format": FILE_FORMAT}
        logger.add(
            log_path,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            backtrace=True,
            diagnose=False,
            **file_options,
        )

    logger.info("Logger initialized", level=level, log_file=log_file, serialize=serialize)
