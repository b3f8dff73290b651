"""
renamer — Walks a music tree and renames album folders and their files.

Album folders are found anywhere below the root ("YYYY - Title"), deepest
first, so a rename never invalidates a folder still waiting its turn. Files are
renamed recursively inside each album, except inside nested album folders,
which are handled on their own turn. A failed rename is reported and the run
goes on.
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

import structlog
from rich.console import Console
from rich.markup import escape

from .naming import (
    ALBUM_PATTERN,
    compute_album_name,
    compute_file_name,
    is_already_converted,
    split_title,
)

log = structlog.get_logger()

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)

DEFAULT_EXTENSIONS = (".mp3", ".jpg", ".jpeg", ".png")


@dataclass
class RenameResult:
    kind: str           # "album" or "file"
    old: Path
    new: Path
    ok: bool = True
    error: str = ""


@dataclass
class RenameReport:
    root: Path
    dry_run: bool = False
    albums_found: int = 0
    results: List[RenameResult] = field(default_factory=list)
    skipped: int = 0
    journal_path: Optional[Path] = None

    @property
    def renamed(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.ok)


def is_supported_file(path: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> bool:
    return path.suffix.lower() in {e.lower() for e in extensions}


def find_album_dirs(root: Path) -> List[Path]:
    """All "YYYY - Title" folders below root (root excluded), deepest first."""
    found = [p for p in Path(root).rglob("*") if p.is_dir() and ALBUM_PATTERN.fullmatch(p.name)]
    found.sort(key=lambda p: (-len(p.parts), str(p)))
    return found


def _log_walk_error(err: OSError) -> None:
    log.error("listing_failed", path=str(err.filename), error=str(err))
    err_console.print(f"[red]✗[/red] Cannot list {escape(str(err.filename))}: {escape(str(err))}")


def iter_album_files(album_dir: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> Iterator[Path]:
    """Supported files below album_dir, skipping nested album folders."""
    exts = tuple(extensions)
    for dirpath, dirnames, filenames in os.walk(album_dir, onerror=_log_walk_error):
        dirnames[:] = sorted(d for d in dirnames if not ALBUM_PATTERN.fullmatch(d))
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if is_supported_file(path, exts):
                yield path


class Renamer:
    def __init__(
        self,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        dry_run: bool = False,
        skip_converted: bool = True,
        journal_dir: Optional[Path] = None,
    ):
        self.extensions = tuple(e.lower() for e in extensions)
        self.dry_run = dry_run
        self.skip_converted = skip_converted
        self.journal_dir = journal_dir

    # ------------------------------------------------------------------
    # Single items
    # ------------------------------------------------------------------

    def _already_converted(self, name: str) -> bool:
        return self.skip_converted and is_already_converted(split_title(name))

    def _move(self, kind: str, old: Path, new: Path, report: RenameReport) -> bool:
        tag = "[ALBUM]" if kind == "album" else "[FILE]"
        if self.dry_run:
            report.results.append(RenameResult(kind, old, new))
            console.print(f"[dim](dry run)[/dim] {escape(tag)} {escape(old.name)} → {escape(new.name)}")
            return False
        try:
            old.rename(new)
        except OSError as e:
            report.results.append(RenameResult(kind, old, new, ok=False, error=str(e)))
            log.error(f"{kind}_rename_failed", old=str(old), new=str(new), error=str(e))
            err_console.print(f"[red]✗[/red] Failed to rename {escape(str(old))} → {escape(new.name)}: {escape(str(e))}")
            return False
        report.results.append(RenameResult(kind, old, new))
        log.info(f"{kind}_renamed", old=str(old), new=str(new))
        console.print(f"[green]{escape(tag)}[/green] {escape(old.name)} → {escape(new.name)}")
        return True

    def rename_album_folder(self, album_dir: Path, report: RenameReport) -> Path:
        """Rename one album folder; returns the path to keep working with."""
        if self._already_converted(album_dir.name):
            report.skipped += 1
            log.debug("album_already_converted", path=str(album_dir))
            return album_dir
        new_name = compute_album_name(album_dir.name)
        if new_name is None or new_name == album_dir.name:
            return album_dir
        new_path = album_dir.parent / new_name
        if self._move("album", album_dir, new_path, report):
            return new_path
        return album_dir

    def rename_file(self, path: Path, report: RenameReport) -> None:
        if self._already_converted(path.stem):
            report.skipped += 1
            log.debug("file_already_converted", path=str(path))
            return
        new_name = compute_file_name(path.stem, path.suffix)
        if new_name is None or new_name == path.name:
            return
        self._move("file", path, path.parent / new_name, report)

    def rename_files(self, album_dir: Path, report: RenameReport) -> None:
        for path in list(iter_album_files(album_dir, self.extensions)):
            self.rename_file(path, report)

    # ------------------------------------------------------------------
    # Whole tree
    # ------------------------------------------------------------------

    def run(self, root: Path) -> RenameReport:
        root = Path(root)
        report = RenameReport(root=root, dry_run=self.dry_run)
        album_dirs = find_album_dirs(root)
        report.albums_found = len(album_dirs)
        log.info("albums_found", root=str(root), count=len(album_dirs))
        console.print(f"Found {len(album_dirs)} album folder(s) under {escape(str(root))}")

        for album_dir in album_dirs:
            current = self.rename_album_folder(album_dir, report)
            self.rename_files(current, report)

        if not self.dry_run and self.journal_dir is not None and report.renamed:
            report.journal_path = write_journal(report, self.journal_dir)

        verb = "would be renamed" if self.dry_run else "renamed"
        console.print(
            f"\n[bold]Summary:[/bold] {report.renamed} item(s) {verb}, "
            f"{report.failed} failed, {report.skipped} already converted"
        )
        log.info("run_finished", renamed=report.renamed, failed=report.failed,
                 skipped=report.skipped, dry_run=self.dry_run)
        return report


# ---------------------------------------------------------------------------
# Journal
# ---------------------------------------------------------------------------

def _toml_str(value: str) -> str:
    out = []
    for ch in value:
        if ch in ('\\', '"'):
            out.append('\\' + ch)
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\u{ord(ch):04X}")
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def write_journal(report: RenameReport, journal_dir: Path) -> Path:
    """Write the successful renames of a run as TOML; returns the file path."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    journal_dir = Path(journal_dir)
    journal_dir.mkdir(parents=True, exist_ok=True)
    path = journal_dir / f"rename_{timestamp}.toml"

    lines = [
        f"# cyrlat rename journal - {timestamp}",
        f"timestamp = {_toml_str(timestamp)}",
        f"root = {_toml_str(str(report.root))}",
        "",
    ]
    for r in report.results:
        if not r.ok:
            continue
        lines.extend([
            "[[renames]]",
            f"kind = {_toml_str(r.kind)}",
            f"old = {_toml_str(str(r.old))}",
            f"new = {_toml_str(str(r.new))}",
            "",
        ])
    path.write_text("\n".join(lines), encoding="utf-8")
    log.info("journal_written", path=str(path))
    return path
