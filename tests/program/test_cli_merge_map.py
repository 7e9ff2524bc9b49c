"""CLI tests for the mapmerge program."""

from pathlib import Path

import pytest

import mapmerge.program_merge_map as prog


@pytest.fixture
def inputs(tmp_path: Path, monkeypatch) -> tuple[Path, Path]:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DISABLE_FILE_LOGS", "1")
    monkeypatch.delenv("MAPMERGE_CSV_DELIMITER", raising=False)
    svg = tmp_path / "map.svg"
    svg.write_text('<svg><path id="p1"/></svg>', encoding="utf-8")
    csv_path = tmp_path / "regions.csv"
    csv_path.write_text("id,label,value,region\np1,North,7,2\n", encoding="utf-8")
    return svg, csv_path


def test_main_happy_path(inputs, tmp_path: Path, capsys):
    svg, csv_path = inputs
    assert prog.main(["--svg", str(svg), "--csv", str(csv_path)]) == 0
    out_file = tmp_path / "mapa_editado.svg"
    assert 'value="7"' in out_file.read_text(encoding="utf-8")
    out = capsys.readouterr().out
    assert "Reading files" in out
    assert "total" in out
    assert "Done" in out


def test_main_with_report_and_preview(inputs, tmp_path: Path, capsys):
    svg, csv_path = inputs
    report = tmp_path / "report.csv"
    code = prog.main(
        [
            "--svg",
            str(svg),
            "--csv",
            str(csv_path),
            "--output",
            str(tmp_path / "edited.svg"),
            "--report",
            str(report),
            "--preview",
        ]
    )
    assert code == 0
    assert report.exists()
    assert '<path id="p1"/>' in capsys.readouterr().out


def test_main_missing_csv_returns_error(inputs, tmp_path: Path, capsys):
    svg, _ = inputs
    code = prog.main(["--svg", str(svg), "--csv", str(tmp_path / "nope.csv")])
    assert code == 1
    assert not (tmp_path / "mapa_editado.svg").exists()
    assert "Error" in capsys.readouterr().out


def test_main_strict_flag(inputs, tmp_path: Path):
    svg, csv_path = inputs
    csv_path.write_text('id,label\np1,"open\n', encoding="utf-8")
    assert prog.main(["--svg", str(svg), "--csv", str(csv_path), "--strict"]) == 1
    assert prog.main(["--svg", str(svg), "--csv", str(csv_path)]) == 0


def test_main_invalid_env_delimiter(inputs, monkeypatch):
    svg, csv_path = inputs
    monkeypatch.setenv("MAPMERGE_CSV_DELIMITER", ";;")
    assert prog.main(["--svg", str(svg), "--csv", str(csv_path)]) == 1


def test_parse_arguments_uses_settings_defaults(monkeypatch):
    monkeypatch.setenv("MAPMERGE_CSV_DELIMITER", ";")
    monkeypatch.setenv("MAPMERGE_STRICT_CSV", "on")
    settings = prog.MergeSettings(env_file=None)
    args = prog.parse_arguments(["--svg", "a.svg", "--csv", "b.csv"], settings)
    assert args.delimiter == ";"
    assert args.strict is True
    assert args.output is None


def test_build_summary_table_rows():
    table = prog.build_summary_table({"total": 3, "id": 1, "label": 1, "default": 1})
    assert table.row_count == 4


def test_main_report_failure_leaves_no_output(inputs, tmp_path: Path, capsys):
    svg, csv_path = inputs
    report_dir = tmp_path / "reports"
    report_dir.mkdir()
    code = prog.main(
        ["--svg", str(svg), "--csv", str(csv_path), "--report", str(report_dir)]
    )
    assert code == 1
    assert not (tmp_path / "mapa_editado.svg").exists()
    assert "Error" in capsys.readouterr().out
