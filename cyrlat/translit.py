"""
translit — Cyrillic to Latin transliteration (Russian, Ukrainian, Belarusian letters).
"""
from __future__ import annotations
import re

# Fixed substitution table, one code point to one Latin string
_CYRILLIC_MAP = {
    # uppercase
    'А': 'A', 'Б': 'B', 'В': 'V', 'Г': 'G', 'Д': 'D', 'Е': 'E', 'Ё': 'Yo',
    'Ж': 'Zh', 'З': 'Z', 'И': 'I', 'Й': 'I', 'К': 'K', 'Л': 'L', 'М': 'M',
    'Н': 'N', 'О': 'O', 'П': 'P', 'Р': 'R', 'С': 'S', 'Т': 'T', 'У': 'U',
    'Ф': 'F', 'Х': 'Kh', 'Ц': 'Ts', 'Ч': 'Ch', 'Ш': 'Sh', 'Щ': 'Shch',
    'Ъ': '', 'Ы': 'Y', 'Ь': '’', 'Э': 'E', 'Ю': 'Yu', 'Я': 'Ya',
    # lowercase
    'а': 'a', 'б': 'b', 'в': 'v', 'г': 'g', 'д': 'd', 'е': 'e', 'ё': 'yo',
    'ж': 'zh', 'з': 'z', 'и': 'i', 'й': 'i', 'к': 'k', 'л': 'l', 'м': 'm',
    'н': 'n', 'о': 'o', 'п': 'p', 'р': 'r', 'с': 's', 'т': 't', 'у': 'u',
    'ф': 'f', 'х': 'kh', 'ц': 'ts', 'ч': 'ch', 'ш': 'sh', 'щ': 'shch',
    'ъ': '', 'ы': 'y', 'ь': '’', 'э': 'e', 'ю': 'yu', 'я': 'ya',
    # Ukrainian
    'І': 'I', 'Ї': 'Yi', 'Є': 'Ye', 'Ґ': 'G',
    'і': 'i', 'ї': 'yi', 'є': 'ye', 'ґ': 'g',
    # Belarusian
    'Ў': 'U', 'ў': 'u',
}

# str.translate wants ordinals as keys
_TRANSLATION = str.maketrans(_CYRILLIC_MAP)

# Basic Cyrillic block only (U+0400..U+04FF)
_CYRILLIC_RE = re.compile('[\u0400-\u04FF]')


def transliterate(text: str) -> str:
    """Transliterate Cyrillic letters to Latin; everything else passes through."""
    if not text:
        return text
    return text.translate(_TRANSLATION)


def has_cyrillic(text: str) -> bool:
    """True if any character of text lies in the Cyrillic block."""
    if not text:
        return False
    return _CYRILLIC_RE.search(text) is not None
