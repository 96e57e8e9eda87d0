import json

import pytest

from bible_cli import main, resolve_file_path
from serializer import read_binary


@pytest.fixture
def sample_file(tmp_path, sample_text):
    path = tmp_path / "pg10.txt"
    path.write_text(sample_text, encoding="utf-8")
    return path


def test_parse_and_write(tmp_path, sample_file, sample_bible, capsys):
    out_dir = tmp_path / "out"
    code = main([str(sample_file), "-o", str(out_dir), "--format", "json", "bin", "--no-progress"])

    assert code == 0
    assert read_binary(str(out_dir / "bible.bin")) == sample_bible
    data = json.loads((out_dir / "bible.json").read_text(encoding="utf-8"))
    assert [book["name"] for book in data["nt"]] == ["John"]

    output = capsys.readouterr().out
    assert "Parsed 5 OT books:" in output
    assert "Parsed 1 NT books:" in output


def test_load_validate_and_stats(tmp_path, sample_file, capsys):
    main([str(sample_file), "-o", str(tmp_path), "--format", "bin", "--no-progress"])
    capsys.readouterr()

    code = main(["--load", str(tmp_path / "bible.bin"), "--validate", "--stats"])

    output = capsys.readouterr().out
    assert code == 0
    assert "Shortest: John 11:35 (11)" in output
    assert "[error] Genesis: has 2 chapters (expected 50)" in output


def test_strict_fails_on_validation_errors(tmp_path, sample_file):
    assert main([str(sample_file), "-o", str(tmp_path), "--format", "csv", "--no-progress", "--strict"]) == 1


def test_trace_prints_events(tmp_path, sample_file, capsys):
    main([str(sample_file), "-o", str(tmp_path), "--format", "csv", "--no-progress", "--trace"])
    err = capsys.readouterr().err
    assert "book_accepted [Genesis]" in err
    assert "book_suppressed [1 Samuel]" in err


def test_missing_input(tmp_path, capsys):
    assert main([str(tmp_path / "nope.txt"), "--no-progress"]) == 1
    assert "Error: File not found" in capsys.readouterr().err


def test_corrupt_binary(tmp_path, capsys):
    bad = tmp_path / "bad.bin"
    bad.write_bytes(b"nope")
    assert main(["--load", str(bad)]) == 1
    assert "Error:" in capsys.readouterr().err


def test_resolve_file_path_checks_default_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "documents").mkdir()
    (tmp_path / "documents" / "kjv.txt").write_text("x", encoding="utf-8")
    assert resolve_file_path("kjv.txt", tmp_path / "documents") == tmp_path / "documents" / "kjv.txt"
    with pytest.raises(FileNotFoundError):
        resolve_file_path("other.txt", tmp_path / "documents")
