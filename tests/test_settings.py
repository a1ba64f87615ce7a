import logging
from pathlib import Path

import pytest

from routegeo.log import configure_logging
from routegeo.settings import DEFAULT_SETTINGS, load_settings
from routegeo.spatial.candidates import build_ranking_config


def _write_config(root: Path, text: str) -> Path:
    config_dir = root / "config"
    config_dir.mkdir()
    path = config_dir / "default.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_load_settings_merges_yaml_over_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ROUTEGEO_LOG_LEVEL", raising=False)
    path = _write_config(tmp_path, "ranking:\n  max_candidates: 3\n")

    settings = load_settings(path)

    assert settings["ranking"]["max_candidates"] == 3
    assert settings["ranking"]["id_col"] == DEFAULT_SETTINGS["ranking"]["id_col"]
    assert settings["paths"]["root"] == str(tmp_path.resolve())
    assert (tmp_path / "logs").is_dir()
    assert build_ranking_config(settings).max_candidates == 3
    # Defaults are never mutated by a merge.
    assert DEFAULT_SETTINGS["ranking"]["max_candidates"] == 10


def test_load_settings_rejects_non_mapping(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "- just\n- a list\n")
    with pytest.raises(ValueError):
        load_settings(path)


def test_environment_wins_over_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROUTEGEO_LOG_LEVEL", "WARNING")
    path = _write_config(tmp_path, "project:\n  log_level: DEBUG\n")
    (tmp_path / ".env").write_text("ROUTEGEO_LOG_LEVEL=ERROR\n", encoding="utf-8")

    load_settings(path)

    assert logging.getLogger("routegeo").level == logging.WARNING


def test_configure_logging_is_idempotent(tmp_path: Path) -> None:
    logger = configure_logging(tmp_path / "logs", level="debug")
    count = len(logger.handlers)
    configure_logging(tmp_path / "logs", level="debug")
    assert logger.name == "routegeo"
    assert logger.propagate is False
    assert len(logger.handlers) == count
    assert logger.level == logging.DEBUG


def _file_handlers(logger: logging.Logger) -> list[logging.FileHandler]:
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


def test_configure_logging_without_directory_is_stream_only(tmp_path: Path) -> None:
    logger = configure_logging(tmp_path / "first", level="info")
    file_handler = _file_handlers(logger)[0]
    logger.removeHandler(file_handler)
    file_handler.close()

    configure_logging(None, level="warning")

    assert _file_handlers(logger) == []
    assert [type(h) for h in logger.handlers] == [logging.StreamHandler]
    assert logger.handlers[0].level == logging.WARNING


def test_configure_logging_updates_levels_and_switches_file(tmp_path: Path) -> None:
    logger = configure_logging(tmp_path / "a", level="info", filename="kernel.log")
    configure_logging(tmp_path / "b", level="debug", filename="kernel.log")

    files = _file_handlers(logger)
    assert len(files) == 1
    assert Path(files[0].baseFilename).resolve() == (tmp_path / "b" / "kernel.log").resolve()
    assert all(h.level == logging.DEBUG for h in logger.handlers)

    logger.debug("switched")
    files[0].flush()
    assert "switched" in (tmp_path / "b" / "kernel.log").read_text(encoding="utf-8")
