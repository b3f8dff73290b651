import logging
import logging.handlers

import pytest

from cyrlat.logging_setup import configure_structlog


@pytest.fixture(autouse=True)
def _isolated_dirs(tmp_path, monkeypatch):
    """Keep logs/journals out of the real platform dirs and undo setup_logging."""
    dirs = {
        "config": tmp_path / "_cfg",
        "state": tmp_path / "_state",
        "logs": tmp_path / "_logs",
    }
    for p in dirs.values():
        p.mkdir()
    monkeypatch.setattr("cyrlat.paths.get_dirs", lambda: dirs)
    monkeypatch.setattr("cyrlat.logging_setup.get_dirs", lambda: dirs)
    monkeypatch.setattr("cyrlat.cli.get_dirs", lambda: dirs)
    for key in ("CYRLAT_CONFIG", "CYRLAT_EXTENSIONS", "CYRLAT_DRY_RUN",
                "CYRLAT_SKIP_CONVERTED", "CYRLAT_JOURNAL", "CYRLAT_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger()
    level = root.level
    yield dirs
    for h in root.handlers[:]:
        if type(h) in (logging.StreamHandler, logging.handlers.RotatingFileHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    configure_structlog()
