"""Structured logging for colorogram runs.

One JSON object per line in ``~/.colorogram/logs/colorogram.log``. The batch
runner attaches a ``job`` mapping (input, output, status, mode, timing and
image size) to every per-file record, so a run can be audited from the log
alone.
"""

import datetime
import json
import logging
import logging.handlers
import os
from pathlib import Path


logger = logging.getLogger(__name__)

APP_DIR = Path("~/.colorogram")
LOG_FILENAME = "colorogram.log"
LOG_MAX_BYTES = 5_000_000
LOG_BACKUPS = 3


def resolve_log_dir(requested: str | None = None) -> Path:
    """Directory for log files.

    ``requested`` (or ``COLOROGRAM_LOG_DIR``) must stay under ``~/.colorogram``;
    anything else falls back to ``~/.colorogram/logs``.
    """
    base = APP_DIR.expanduser().resolve()
    default = base / "logs"
    requested = requested or os.environ.get("COLOROGRAM_LOG_DIR")
    if not requested:
        return default

    candidate = Path(requested).expanduser().resolve()
    if candidate != base and base not in candidate.parents:
        logger.warning("Log directory %s is outside %s, using default", candidate, base)
        return default
    return candidate


class JSONFormatter(logging.Formatter):
    """One JSON object per record; a ``job`` extra is kept as a nested object."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.datetime.fromtimestamp(
                record.created, tz=datetime.timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        job = getattr(record, "job", None)
        if job:
            entry["job"] = job
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = {
                "type": type(record.exc_info[1]).__name__,
                "traceback": self.formatException(record.exc_info),
            }
        return json.dumps(entry, default=str)


def setup_structured_logging(log_dir: str | None = None, level: str | None = None) -> Path:
    """Attach a rotating JSON-lines handler to the root logger.

    Args:
        log_dir: Override ``COLOROGRAM_LOG_DIR``.
        level: Override ``COLOROGRAM_LOG_LEVEL`` (default INFO).

    Returns:
        The directory logs are written to.
    """
    directory = resolve_log_dir(log_dir)
    directory.mkdir(mode=0o700, parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        directory / LOG_FILENAME,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUPS,
    )
    handler.setFormatter(JSONFormatter())

    level_name = (level or os.environ.get("COLOROGRAM_LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.addHandler(handler)
    return directory


def init_diagnostics(level: str | None = None) -> Path:
    """Set up logging for one CLI run. Call from main.py."""
    log_dir = setup_structured_logging(level=level)
    logger.info("Logging to %s", log_dir)
    return log_dir
