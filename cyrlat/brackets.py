"""
brackets — Split a title into its leading text and top-level parenthetical groups.

    >>> extract_top_level_parens("A (B) (C(D))")
    ParsedTitle(before='A', groups=('B', 'C(D'))

Inner closing parentheses of nested groups are dropped, stray ')' outside any
group is ignored and unbalanced input never raises.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class ParsedTitle:
    before: str
    groups: Tuple[str, ...] = ()

    def __iter__(self) -> Iterator:
        # allows: before, groups = extract_top_level_parens(...)
        yield self.before
        yield self.groups


def extract_top_level_parens(text: str) -> ParsedTitle:
    groups: List[str] = []
    outside: List[str] = []
    current: List[str] = []
    before: Optional[str] = None
    depth = 0

    for ch in text or "":
        if ch == '(':
            if depth == 0:
                before = "".join(outside).rstrip()
                current = []
            depth += 1
            if depth == 1:
                continue
        elif ch == ')':
            if depth == 1:
                groups.append("".join(current).strip())
                current = []
                depth = 0
                continue
            if depth > 1:
                depth -= 1
                continue
            # unmatched ')' at top level
            continue

        if depth == 0:
            outside.append(ch)
        else:
            current.append(ch)

    if before is None:
        # None, not "", means no group was seen: "(cover) Песня" keeps
        # before == "" instead of taking the trailing " Песня".
        before = "".join(outside).rstrip()

    return ParsedTitle(before=before, groups=tuple(groups))


def outside_text(text: str) -> str:
    """All text at nesting depth 0, parenthetical groups removed."""
    outside: List[str] = []
    depth = 0
    for ch in text or "":
        if ch == '(':
            depth += 1
        elif ch == ')':
            depth = max(depth - 1, 0)
        elif depth == 0:
            outside.append(ch)
    return "".join(outside)
