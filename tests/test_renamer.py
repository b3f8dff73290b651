from pathlib import Path

import pytest

from cyrlat.logging_setup import setup_logging
from cyrlat.renamer import (
    RenameReport,
    RenameResult,
    Renamer,
    find_album_dirs,
    is_supported_file,
    iter_album_files,
    write_journal,
)


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    return path


@pytest.fixture
def library(tmp_path):
    root = tmp_path / "music"
    album = root / "Rock" / "Кино" / "1988 - Группа крови"
    _touch(album / "01 - Группа крови.mp3")
    _touch(album / "02 - Звезда (cover).mp3")
    _touch(album / "Обложка.jpg")
    _touch(album / "заметки.txt")
    _touch(album / "Scans" / "Буклет.png")
    _touch(root / "Rock" / "Кино" / "Разное.mp3")   # not inside an album
    return root


def _names(directory: Path):
    return sorted(p.name for p in directory.iterdir())


def test_is_supported_file():
    assert is_supported_file(Path("a.mp3"))
    assert is_supported_file(Path("a.JPG"))
    assert not is_supported_file(Path("a.flac"))
    assert is_supported_file(Path("a.flac"), [".flac"])


def test_find_album_dirs_deepest_first(tmp_path):
    (tmp_path / "2000 - Outer" / "2001 - Inner").mkdir(parents=True)
    (tmp_path / "Band" / "1999 - Other").mkdir(parents=True)
    (tmp_path / "Band" / "Not an album").mkdir()
    found = [p.relative_to(tmp_path).as_posix() for p in find_album_dirs(tmp_path)]
    assert found == ["2000 - Outer/2001 - Inner", "Band/1999 - Other", "2000 - Outer"]


def test_iter_album_files_skips_nested_albums(tmp_path):
    outer = tmp_path / "2000 - Outer"
    _touch(outer / "01 - a.mp3")
    _touch(outer / "CD2" / "01 - b.mp3")
    _touch(outer / "2001 - Inner" / "01 - c.mp3")
    _touch(outer / "notes.txt")
    names = [p.name for p in iter_album_files(outer)]
    assert names == ["01 - a.mp3", "01 - b.mp3"]


def test_run_renames_album_and_files(library):
    report = Renamer().run(library)

    band = library / "Rock" / "Кино"
    assert _names(band) == ["1988 - Gruppa krovi (Группа крови)", "Разное.mp3"]
    album = band / "1988 - Gruppa krovi (Группа крови)"
    assert _names(album) == [
        "01 - Gruppa krovi (Группа крови).mp3",
        "02 - Zvezda (Звезда) (cover).mp3",
        "Oblozhka (Обложка).jpg",
        "Scans",
        "заметки.txt",
    ]
    assert _names(album / "Scans") == ["Buklet (Буклет).png"]

    assert report.albums_found == 1
    assert report.renamed == 5
    assert report.failed == 0
    assert [r.kind for r in report.results][0] == "album"


def test_second_run_changes_nothing(library):
    Renamer().run(library)
    report = Renamer().run(library)
    assert report.renamed == 0
    assert report.skipped == 5
    assert _names(library / "Rock" / "Кино") == ["1988 - Gruppa krovi (Группа крови)", "Разное.mp3"]


def test_without_skip_converted_names_are_wrapped_again(library):
    Renamer().run(library)
    report = Renamer(skip_converted=False).run(library)
    # the cover track already has its final shape and is left as is
    assert report.renamed == 4
    band = library / "Rock" / "Кино"
    assert _names(band)[0] == "1988 - Gruppa krovi (Gruppa krovi) (Gruppa krovi (Группа крови))"


def test_dry_run_touches_nothing(library):
    before = sorted(p.relative_to(library) for p in library.rglob("*"))
    report = Renamer(dry_run=True).run(library)
    after = sorted(p.relative_to(library) for p in library.rglob("*"))
    assert before == after
    assert report.dry_run
    assert report.renamed == 5
    assert report.journal_path is None


def test_nested_albums(tmp_path):
    outer = tmp_path / "2000 - Альбом"
    _touch(outer / "01 - Песня.mp3")
    _touch(outer / "2001 - Тень" / "01 - Тень.mp3")

    report = Renamer().run(tmp_path)

    new_outer = tmp_path / "2000 - Al’bom (Альбом)"
    assert _names(new_outer) == ["01 - Pesnya (Песня).mp3", "2001 - Ten’ (Тень)"]
    assert _names(new_outer / "2001 - Ten’ (Тень)") == ["01 - Ten’ (Тень).mp3"]
    assert report.renamed == 4


def test_failure_is_reported_and_run_continues(library, monkeypatch):
    original = Path.rename

    def flaky_rename(self, target):
        if self.name.startswith("01 - "):
            raise PermissionError(13, "Permission denied", str(self))
        return original(self, target)

    monkeypatch.setattr(Path, "rename", flaky_rename)
    report = Renamer().run(library)

    assert report.failed == 1
    assert report.renamed == 4
    failed = [r for r in report.results if not r.ok][0]
    assert failed.kind == "file"
    assert "Permission denied" in failed.error
    album = library / "Rock" / "Кино" / "1988 - Gruppa krovi (Группа крови)"
    assert "01 - Группа крови.mp3" in _names(album)
    assert "Oblozhka (Обложка).jpg" in _names(album)


def test_album_failure_keeps_original_path(library, monkeypatch):
    original = Path.rename

    def no_dirs(self, target):
        if self.is_dir():
            raise OSError("busy")
        return original(self, target)

    monkeypatch.setattr(Path, "rename", no_dirs)
    report = Renamer().run(library)

    album = library / "Rock" / "Кино" / "1988 - Группа крови"
    assert album.is_dir()
    assert "01 - Gruppa krovi (Группа крови).mp3" in _names(album)
    assert report.failed == 1


def test_journal_written(library, tmp_path):
    journal_dir = tmp_path / "journals"
    report = Renamer(journal_dir=journal_dir).run(library)

    assert report.journal_path is not None
    assert report.journal_path.parent == journal_dir
    text = report.journal_path.read_text(encoding="utf-8")
    assert text.count("[[renames]]") == 5
    assert 'kind = "album"' in text
    assert "1988 - Gruppa krovi (Группа крови)" in text


def test_no_journal_when_nothing_renamed(tmp_path):
    (tmp_path / "2001 - Shadow").mkdir()
    report = Renamer(journal_dir=tmp_path / "journals").run(tmp_path)
    assert report.journal_path is None
    assert not (tmp_path / "journals").exists()


def test_cyrillic_after_converted_group_is_renamed(tmp_path):
    album = tmp_path / "2001 - Shadow"
    _touch(album / "01 - Kino (Кино) - Группа крови.mp3")

    report = Renamer().run(tmp_path)

    assert report.skipped == 0
    assert report.renamed == 1
    assert _names(album) == ["01 - Kino (Kino) - Gruppa krovi (Kino (Кино) - Группа крови).mp3"]


def test_failure_reported_once_on_stderr(library, monkeypatch, tmp_path, capsys):
    setup_logging("INFO", log_dir=tmp_path)
    original = Path.rename

    def flaky_rename(self, target):
        if self.name.startswith("01 - "):
            raise PermissionError(13, "Permission denied", str(self))
        return original(self, target)

    monkeypatch.setattr(Path, "rename", flaky_rename)
    Renamer().run(library)

    err = capsys.readouterr().err
    assert err.count("Failed to rename") == 1
    assert "file_rename_failed" not in err
    assert "file_rename_failed" in (tmp_path / "cyrlat.log").read_text(encoding="utf-8")


def test_journal_escapes_control_characters(tmp_path):
    report = RenameReport(root=tmp_path)
    report.results.append(RenameResult(
        "file", tmp_path / "01 - a\tb\n.mp3", tmp_path / 'Say "hi" \\ \x7f.mp3'))

    path = write_journal(report, tmp_path / "journals")

    text = path.read_text(encoding="utf-8")
    assert "\t" not in text
    assert "\\u0009" in text and "\\u000A" in text and "\\u007F" in text
    tomllib = pytest.importorskip("tomllib")
    entry = tomllib.loads(text)["renames"][0]
    assert entry["old"] == str(tmp_path / "01 - a\tb\n.mp3")
    assert entry["new"] == str(tmp_path / 'Say "hi" \\ \x7f.mp3')
