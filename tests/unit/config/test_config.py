"""Tests for Config sources and logging setup."""

import logging

from ht6.config import Config, LoggingConfig, configure_logging


class TestConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("HT6_SERVER__ENV", raising=False)
        monkeypatch.delenv("HT6_DATABASE__URL", raising=False)

        config = Config()

        assert config.server.env == "production"
        assert config.dev is False
        assert config.database.url.startswith("sqlite+aiosqlite")
        assert config.auth.role_check_timeout == 5.0

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("HT6_SERVER__ENV", "dev")
        monkeypatch.setenv("HT6_AUTH__ROLE_CHECK_TIMEOUT", "0.5")

        config = Config()

        assert config.dev is True
        assert config.auth.role_check_timeout == 0.5

    def test_yaml_file(self, monkeypatch, tmp_path):
        config_file = tmp_path / "ht6.yaml"
        config_file.write_text(
            "server:\n  name: Test API\ndatabase:\n  url: postgresql+asyncpg://ht6@localhost/ht6\n"
        )
        monkeypatch.delenv("HT6_DATABASE__URL", raising=False)
        monkeypatch.setenv("HT6_CONFIG_FILE", str(config_file))

        config = Config()

        assert config.server.name == "Test API"
        assert config.database.url == "postgresql+asyncpg://ht6@localhost/ht6"

    def test_env_beats_yaml(self, monkeypatch, tmp_path):
        config_file = tmp_path / "ht6.yaml"
        config_file.write_text("server:\n  env: dev\n")
        monkeypatch.setenv("HT6_CONFIG_FILE", str(config_file))
        monkeypatch.setenv("HT6_SERVER__ENV", "production")

        assert Config().dev is False

    def test_missing_yaml_file_is_ignored(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HT6_CONFIG_FILE", str(tmp_path / "absent.yaml"))

        assert Config().server.name == "HT6 API"


class TestConfigureLogging:
    def test_file_handler(self, monkeypatch, tmp_path):
        log_file = tmp_path / "logs" / "ht6.log"
        monkeypatch.setenv("HT6_LOG_FILE", str(log_file))

        configure_logging(LoggingConfig(level="DEBUG"))
        logging.getLogger("ht6.test").debug("hello")

        root = logging.getLogger()
        handler = root.handlers[0]
        assert root.level == logging.DEBUG
        assert isinstance(handler, logging.FileHandler)
        handler.flush()
        assert "hello" in log_file.read_text()
        assert logging.getLogger("aiosqlite").level == logging.WARNING

        root.removeHandler(handler)
        handler.close()
