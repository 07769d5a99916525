from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from taskquest.config import PROJECT_ROOT, Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _log_dir(settings: Settings) -> Path:
    path = Path(settings.log_dir)
    return path if path.is_absolute() else PROJECT_ROOT / path


def setup_logging(settings: Settings) -> Path:
    log_dir = _log_dir(settings)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "taskquest.log"

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    file_handler = RotatingFileHandler(log_file, maxBytes=2_000_000, backupCount=3, encoding="utf-8")
    console_handler = logging.StreamHandler()
    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)

    level = settings.log_level.upper()
    logging.basicConfig(level=level, handlers=[file_handler, console_handler])
    logging.captureWarnings(True)
    # SQL echo only when explicitly debugging.
    if level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return log_file
