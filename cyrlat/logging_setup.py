from __future__ import annotations
import logging, logging.handlers
import structlog
from pathlib import Path
from typing import Optional
from .paths import get_dirs


def configure_structlog(level: str = "WARNING"):
    """Route structlog through stdlib logging, dropping events below level."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper())),
        cache_logger_on_first_use=False,
    )


def setup_logging(level: str = "INFO", log_dir: Optional[Path] = None):
    level = level.upper()
    if log_dir is None:
        log_dir = get_dirs()["logs"]
    logfile = log_dir / "cyrlat.log"

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    # file only; the console gets rich output from the renamer and CLI
    rot = logging.handlers.RotatingFileHandler(
        logfile, maxBytes=5_000_000, backupCount=3, encoding="utf-8"
    )
    rot.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(rot)

    configure_structlog(level)
    return structlog.get_logger()
