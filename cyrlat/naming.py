"""
naming — New names for album folders and track/cover files.

    2001 - Тень          ->  2001 - Ten’ (Тень)
    03 - Песня.mp3       ->  03 - Pesnya (Песня).mp3
    Обложка.jpg          ->  Oblozhka (Обложка).jpg

Every function returns None when there is nothing to rename.
"""
from __future__ import annotations
import re
from typing import Optional

from .brackets import extract_top_level_parens, outside_text
from .cover import build_cover_title
from .translit import has_cyrillic, transliterate

# "YYYY - Title" folders and "NN - Title" tracks
ALBUM_PATTERN = re.compile(r"^(\d{4})\s-\s(.+)$")
TRACK_PATTERN = re.compile(r"^(\d{2})\s-\s(.+)$")


def build_plain_name(title: str, prefix: str = "", suffix: str = "") -> Optional[str]:
    """"{prefix}{latin} ({title}){suffix}" or None when title has nothing to transliterate."""
    latin = transliterate(title)
    if latin == title:
        return None
    return f"{prefix}{latin} ({title}){suffix}"


def compute_album_name(folder_name: str) -> Optional[str]:
    m = ALBUM_PATTERN.fullmatch(folder_name)
    if not m:
        return None
    year, title = m.group(1), m.group(2)
    return build_plain_name(title, prefix=f"{year} - ")


def compute_file_name(stem: str, extension: str) -> Optional[str]:
    """
    New file name for stem + extension.

    Tracks ("NN - Title") go through the cover rule first and fall back to the
    plain rule; other files (covers, scans) get the plain rule on the whole stem.
    """
    m = TRACK_PATTERN.fullmatch(stem)
    if not m:
        return build_plain_name(stem, suffix=extension)

    number, title = m.group(1), m.group(2)
    special = build_cover_title(number, title)
    if special is not None:
        return special + extension
    return build_plain_name(title, prefix=f"{number} - ", suffix=extension)


def split_title(name: str) -> str:
    """Title part of an album/track name (numeric prefix removed)."""
    for pattern in (ALBUM_PATTERN, TRACK_PATTERN):
        m = pattern.fullmatch(name)
        if m:
            return m.group(2)
    return name


def is_already_converted(title: str) -> bool:
    """
    True when title already reads "Latin (Cyrillic ...)".

    The Latin lead must equal the transliteration of the first Cyrillic group,
    cut at that group's own first '(', and no Cyrillic may be left outside the
    groups. Covers both the plain and the cover layouts this module produces,
    so a second run leaves names alone.
    """
    before, groups = extract_top_level_parens(title)
    if not before or has_cyrillic(outside_text(title)):
        return False
    cyr_group = next((g for g in groups if has_cyrillic(g)), None)
    if cyr_group is None:
        return False
    base = cyr_group.split("(", 1)[0].strip()
    return transliterate(base) == before
