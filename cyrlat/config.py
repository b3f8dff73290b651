"""
config — Loads cyrlat.yaml with env var overrides.

Precedence: env vars > cyrlat.yaml (working dir, else user config dir) > defaults
"""
from __future__ import annotations
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Any, List
import yaml

from . import paths
from .errors import ConfigError

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class Config:
    # Files renamed inside album folders (tracks and cover art)
    extensions: List[str] = field(default_factory=lambda: [".mp3", ".jpg", ".jpeg", ".png"])

    # Only report what would change
    dry_run: bool = False

    # Leave names that already read "Latin (Cyrillic)" alone
    skip_converted: bool = True

    # Write rename_<timestamp>.toml into the state dir after a run
    journal: bool = True

    log_level: str = "INFO"


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"{key}: expected a boolean, got {value!r}")


def _to_extensions(value: Any) -> List[str]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        raise ConfigError(f"extensions: expected a list, got {value!r}")
    exts = []
    for item in value:
        ext = str(item).strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        exts.append(ext)
    if not exts:
        raise ConfigError("extensions must not be empty")
    return exts


def _apply(cfg: Config, key: str, value: Any) -> None:
    if key == "extensions":
        cfg.extensions = _to_extensions(value)
    elif key in ("dry_run", "skip_converted", "journal"):
        setattr(cfg, key, _to_bool(key, value))
    elif key == "log_level":
        level = str(value).upper()
        if level not in VALID_LEVELS:
            raise ConfigError(f"log_level must be one of {', '.join(VALID_LEVELS)}")
        cfg.log_level = level


def load_config(config_path: str | Path | None = None) -> Config:
    """Load config from YAML file, then override with env vars."""
    cfg = Config()

    # 1. Load from YAML if available
    if config_path is None:
        config_path = os.environ.get("CYRLAT_CONFIG", "cyrlat.yaml")
        if not Path(config_path).exists():
            config_path = paths.get_dirs()["config"] / "cyrlat.yaml"
    path = Path(config_path)
    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: top level must be a mapping")
        for key, value in data.items():
            key_norm = str(key).replace("-", "_")
            if hasattr(cfg, key_norm) and value is not None:
                _apply(cfg, key_norm, value)

    # 2. Override with env vars (CYRLAT_ prefix)
    env_map = {
        "CYRLAT_EXTENSIONS": "extensions",
        "CYRLAT_DRY_RUN": "dry_run",
        "CYRLAT_SKIP_CONVERTED": "skip_converted",
        "CYRLAT_JOURNAL": "journal",
        "CYRLAT_LOG_LEVEL": "log_level",
    }
    for env_key, attr in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            _apply(cfg, attr, val)

    return cfg
