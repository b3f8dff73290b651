"""
cover — Special naming for cover-version track titles.

A cover title carries the word "cover" inside a parenthetical group, e.g.
"Группа - Песня (cover)" or "Song (Песня) (Кино cover)". The Cyrillic title is
kept next to its Latin form and the cover credit gets its own group:

    NN - Latin (Cyrillic) (Band cover)
    NN - Latin (Band Latin cover) (Cyrillic (Band Cyrillic cover))

Anything that does not fit returns None so the caller falls back to the plain
rule in naming.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Iterable, Optional

import structlog

from .brackets import extract_top_level_parens
from .translit import has_cyrillic, transliterate

log = structlog.get_logger()

# "Title (Some Band cover)" at the very end of a title
_TRAILING_COVER_RE = re.compile(
    r"^(?P<base>.*?)(\s*\((?P<inner>[^()]*cover[^()]*)\))\s*$",
    re.IGNORECASE,
)


def _mentions_cover(text: str) -> bool:
    return "cover" in text.lower()


def _first(items: Iterable[str], predicate) -> Optional[str]:
    return next((item for item in items if predicate(item)), None)


@dataclass(frozen=True)
class Cover:
    title_base: str
    cover_text: str
    cover_has_cyrillic: bool

    @property
    def latin_title(self) -> str:
        return transliterate(self.title_base)

    def render(self, number: str) -> str:
        """Build the new name (without extension) for track number."""
        if not self.cover_has_cyrillic:
            return f"{number} - {self.latin_title} ({self.title_base}) ({self.cover_text})"
        cover_lat = transliterate(self.cover_text)
        return (
            f"{number} - {self.latin_title} ({cover_lat}) "
            f"({self.title_base} ({self.cover_text}))"
        )


def decide_cover(raw_title: str) -> Optional[Cover]:
    """Return a Cover when raw_title is a Cyrillic cover title, else None."""
    if not raw_title or not raw_title.strip():
        return None
    if not _mentions_cover(raw_title):
        return None

    before, groups = extract_top_level_parens(raw_title)
    if not groups:
        return None

    cover_text = _first(groups, _mentions_cover)
    if cover_text is None:
        return None

    if has_cyrillic(before):
        cyr_title = before.strip()
    else:
        cyr_title = _first(groups, has_cyrillic)
    if cyr_title is None:
        return None

    title_base = cyr_title
    m = _TRAILING_COVER_RE.match(cyr_title)
    if m:
        title_base = m.group("base").rstrip()
        # cover_text is always set by now; kept for titles that only carry
        # the credit inside the Cyrillic part
        if not cover_text:
            cover_text = m.group("inner").strip()

    if transliterate(title_base) == title_base:
        return None

    return Cover(
        title_base=title_base,
        cover_text=cover_text,
        cover_has_cyrillic=has_cyrillic(cover_text),
    )


def build_cover_title(number: str, raw_title: str) -> Optional[str]:
    """New track name (no extension) for a cover title, or None."""
    cover = decide_cover(raw_title)
    if cover is None:
        return None
    log.debug("cover_title_detected", title=raw_title, cover=cover.cover_text)
    return cover.render(number)
