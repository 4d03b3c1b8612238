"""
Tests for settings and logging configuration.
"""

import logging

from neurotrade.core.config import Settings
from neurotrade.shared.logging import LOG_FORMAT, configure_logging


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("ANN_BASE_PATH", "FEED_TOPIC", "BUY_AMOUNT", "MODEL_SEED", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        cfg = Settings(_env_file=None)

        assert cfg.ann_base_path == "."
        assert cfg.feed_topic == "ADD_PRICE"
        assert cfg.buy_amount == 10
        assert cfg.model_seed is None
        assert cfg.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ANN_BASE_PATH", str(tmp_path))
        monkeypatch.setenv("BUY_AMOUNT", "25")
        monkeypatch.setenv("MODEL_SEED", "42")
        cfg = Settings(_env_file=None)

        assert cfg.ann_base_path == str(tmp_path)
        assert cfg.buy_amount == 25
        assert cfg.model_seed == 42


class TestLogging:
    def test_configure_logging(self, monkeypatch):
        captured = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

        configure_logging("debug")

        assert captured["level"] == logging.DEBUG
        assert captured["format"] == LOG_FORMAT
        assert captured["force"] is True
        for name in ("sqlalchemy.engine", "redis"):
            assert logging.getLogger(name).level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        captured = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))

        configure_logging("chatty")

        assert captured["level"] == logging.INFO
