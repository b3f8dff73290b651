from __future__ import annotations
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import VALID_LEVELS, load_config
from .errors import ConfigError
from .logging_setup import setup_logging
from .naming import compute_album_name, compute_file_name
from .paths import get_dirs
from .renamer import Renamer
from .translit import transliterate

app = typer.Typer(no_args_is_help=True)
console = Console(highlight=False)


def _force_utf8() -> None:
    # Windows consoles default to a legacy code page
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            try:
                stream.reconfigure(encoding="utf-8")
            except ValueError:
                pass


@app.command()
def rename(
    root: Path = typer.Argument(Path("."), help="Top of the music tree (genre/band/album)"),
    dry_run: Optional[bool] = typer.Option(None, "--dry-run/--execute", help="Only show what would be renamed"),
    force: bool = typer.Option(False, "--force", help="Also rename names that already look converted"),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to cyrlat.yaml"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ..."),
):
    """Rename album folders and their tracks/covers below ROOT."""
    _force_utf8()
    try:
        cfg = load_config(config)
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {escape(str(e))}")
        raise typer.Exit(code=2)

    level = (log_level or cfg.log_level).upper()
    if level not in VALID_LEVELS:
        console.print(f"[red]Unknown log level:[/red] {escape(level)}")
        raise typer.Exit(code=2)
    setup_logging(level)

    root = root.resolve()
    if not root.is_dir():
        console.print(f"[red]Not a directory:[/red] {escape(str(root))}")
        raise typer.Exit(code=1)

    renamer = Renamer(
        extensions=cfg.extensions,
        dry_run=cfg.dry_run if dry_run is None else dry_run,
        skip_converted=cfg.skip_converted and not force,
        journal_dir=get_dirs()["state"] if cfg.journal else None,
    )
    report = renamer.run(root)
    if report.journal_path:
        console.print(f"[green]✓ Rename journal saved: {escape(str(report.journal_path))}[/green]")
    if report.failed:
        raise typer.Exit(code=1)


@app.command("name")
def show_name(
    text: str = typer.Argument(..., help='Folder name ("2001 - Тень") or file name ("03 - Песня.mp3")'),
    file: bool = typer.Option(False, "--file", help="Treat TEXT as a file name"),
):
    """Print the name cyrlat would give to one folder or file."""
    _force_utf8()
    if file:
        p = Path(text)
        new = compute_file_name(p.stem, p.suffix)
    else:
        new = compute_album_name(text)
    console.print(escape(new) if new is not None else "[dim]unchanged[/dim]")


@app.command("translit")
def show_translit(text: str = typer.Argument(..., help="Any text")):
    """Print the Latin transliteration of TEXT."""
    _force_utf8()
    console.print(escape(transliterate(text)))


@app.command("paths")
def show_paths():
    """Show where cyrlat keeps its config, logs and rename journals."""
    t = Table(title="cyrlat paths")
    t.add_column("Kind"); t.add_column("Location")
    for k, p in get_dirs().items():
        t.add_row(k, str(p))
    console.print(t)


if __name__ == "__main__":
    app()
