"""
cyrlat — Transliterated Latin names for Cyrillic album folders and tracks.

Public API:
    transliterate(text) -> str
    has_cyrillic(text) -> bool
    extract_top_level_parens(text) -> ParsedTitle
    decide_cover(title) -> Cover | None
    build_cover_title(number, title) -> str | None
    build_plain_name(title, prefix="", suffix="") -> str | None
    compute_album_name(folder_name) -> str | None
    compute_file_name(stem, extension) -> str | None
    Renamer(...).run(root) -> RenameReport
"""
import structlog

from .translit import transliterate, has_cyrillic
from .brackets import ParsedTitle, extract_top_level_parens
from .cover import Cover, decide_cover, build_cover_title
from .naming import (
    ALBUM_PATTERN,
    TRACK_PATTERN,
    build_plain_name,
    compute_album_name,
    compute_file_name,
    is_already_converted,
)
from .renamer import Renamer, RenameReport, RenameResult
from .logging_setup import configure_structlog

# quiet, stdlib-backed logging until setup_logging() is called
if not structlog.is_configured():
    configure_structlog()

__version__ = "0.1.0"

__all__ = [
    "transliterate",
    "has_cyrillic",
    "ParsedTitle",
    "extract_top_level_parens",
    "Cover",
    "decide_cover",
    "build_cover_title",
    "ALBUM_PATTERN",
    "TRACK_PATTERN",
    "build_plain_name",
    "compute_album_name",
    "compute_file_name",
    "is_already_converted",
    "Renamer",
    "RenameReport",
    "RenameResult",
]
