import logging

from app.logging_config import setup_logging


def test_level_comes_from_env(monkeypatch, tmp_path):
    root = logging.getLogger()
    old_level = root.level
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    try:
        setup_logging()
        assert root.level == logging.WARNING
    finally:
        root.setLevel(old_level)
