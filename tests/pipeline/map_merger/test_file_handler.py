"""Tests for map merger file helpers."""

from pathlib import Path

import pytest

from mapmerge.exceptions import UserInputError
from mapmerge.pipeline.map_merger import file_handler as fh


def test_read_missing_file_raises(tmp_path: Path):
    with pytest.raises(UserInputError) as excinfo:
        fh.read_text_file(tmp_path / "missing.svg")
    assert "missing.svg" in excinfo.value.context["path"]


def test_read_drops_bom_and_keeps_line_endings(tmp_path: Path):
    p = tmp_path / "t.csv"
    p.write_bytes("\ufeffid,label\r\np1,Ñorte\r\n".encode("utf-8"))
    assert fh.read_text_file(p) == "id,label\r\np1,Ñorte\r\n"


def test_write_creates_parents_and_keeps_bytes(tmp_path: Path):
    out = tmp_path / "a" / "b" / "map.svg"
    fh.write_text_file("<svg>\r\n</svg>", out)
    assert out.read_bytes() == b"<svg>\r\n</svg>"


def test_default_output_path(tmp_path: Path):
    svg = tmp_path / "maps" / "brasil.svg"
    assert fh.default_output_path(svg, "mapa_editado.svg") == (
        tmp_path / "maps" / "mapa_editado.svg"
    )


def test_write_text_files_commits_all(tmp_path: Path):
    first = tmp_path / "map.svg"
    second = tmp_path / "out" / "report.csv"
    fh.write_text_files([("<svg/>", first), ("a,b\n", second)])
    assert first.read_text(encoding="utf-8") == "<svg/>"
    assert second.read_text(encoding="utf-8") == "a,b\n"
    assert not list(tmp_path.glob(".*.partial"))


def test_write_text_files_rejects_directory_before_writing(tmp_path: Path):
    first = tmp_path / "map.svg"
    target_dir = tmp_path / "report.csv"
    target_dir.mkdir()
    with pytest.raises(UserInputError):
        fh.write_text_files([("<svg/>", first), ("a,b\n", target_dir)])
    assert not first.exists()


def test_write_text_files_failure_leaves_nothing(tmp_path: Path):
    first = tmp_path / "map.svg"
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(OSError):
        fh.write_text_files([("<svg/>", first), ("a,b\n", blocker / "r.csv")])
    assert sorted(p.name for p in tmp_path.iterdir()) == ["blocker"]


def test_write_text_files_rolls_back_on_failed_rename(tmp_path: Path, monkeypatch):
    first = tmp_path / "map.svg"
    second = tmp_path / "report.csv"
    real_replace = Path.replace

    def failing_replace(self, target):
        if Path(target) == second:
            raise PermissionError("read-only")
        return real_replace(self, target)

    monkeypatch.setattr(Path, "replace", failing_replace)
    with pytest.raises(PermissionError):
        fh.write_text_files([("<svg/>", first), ("a,b\n", second)])
    assert list(tmp_path.iterdir()) == []
