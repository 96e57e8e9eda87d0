from config import Config


def test_env_file_does_not_override_environment(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n"
        "BIBLE_TEXT_FILE=kjv.txt\n"
        "OUTPUT_DIR = build\n",
        encoding="utf-8",
    )
    monkeypatch.delenv("BIBLE_TEXT_FILE", raising=False)
    monkeypatch.setenv("OUTPUT_DIR", "elsewhere")

    cfg = Config(str(env_file))

    assert cfg.bible_text_file == "kjv.txt"
    assert cfg.output_dir == "elsewhere"


def test_defaults(tmp_path, monkeypatch):
    for key in ("OUTPUT_FORMATS", "LOG_LEVEL", "SHOW_PROGRESS", "TRACE_EVENTS"):
        monkeypatch.delenv(key, raising=False)

    cfg = Config(str(tmp_path / "missing.env"))

    assert cfg.output_formats == ["json", "bin"]
    assert cfg.log_level == "WARNING"
    assert cfg.show_progress is True
    assert cfg.trace_events is False


def test_typed_values(tmp_path, monkeypatch):
    monkeypatch.setenv("OUTPUT_FORMATS", " csv, ,keyed ")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("SHOW_PROGRESS", "off")
    monkeypatch.setenv("TRACE_EVENTS", "yes")

    cfg = Config(str(tmp_path / "missing.env"))

    assert cfg.output_formats == ["csv", "keyed"]
    assert cfg.log_level == "DEBUG"
    assert cfg.show_progress is False
    assert cfg.trace_events is True


def test_export_prefix_and_quotes(tmp_path, monkeypatch):
    monkeypatch.delenv("BIBLE_TEXT_FILE", raising=False)
    monkeypatch.delenv("OUTPUT_DIR", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text(
        "export BIBLE_TEXT_FILE=\"my bible.txt\"\n"
        "OUTPUT_DIR='out dir'\n",
        encoding="utf-8",
    )

    cfg = Config(str(env_file))

    assert cfg.bible_text_file == "my bible.txt"
    assert cfg.output_dir == "out dir"
