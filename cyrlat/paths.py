from __future__ import annotations
from pathlib import Path
from platformdirs import PlatformDirs

APP = "cyrlat"


def get_dirs() -> dict[str, Path]:
    """Per-user directories cyrlat writes to; created on first use."""
    d = PlatformDirs(appname=APP, appauthor=False)
    paths = {
        "config": Path(d.user_config_dir),  # cyrlat.yaml used when the working dir has none
        "state": Path(d.user_state_dir),    # rename_<timestamp>.toml journals
        "logs": Path(d.user_log_dir),       # cyrlat.log (rotating, JSON lines)
    }
    for p in paths.values():
        p.mkdir(parents=True, exist_ok=True)
    return paths
