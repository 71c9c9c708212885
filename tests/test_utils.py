"""Tests for logging and configuration helpers."""

import logging
from unittest.mock import patch


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults(self, clean_env):
        """Test the values used when nothing is configured."""
        from feedwriter.utils.config import load_settings

        settings = load_settings()
        assert settings.log_level == "INFO"
        assert settings.log_file is None
        assert settings.pretty is True

    def test_environment(self, clean_env, monkeypatch):
        """Test that environment variables are read."""
        from feedwriter.utils.config import load_settings

        monkeypatch.setenv("FEEDWRITER_LOG_LEVEL", "debug")
        monkeypatch.setenv("FEEDWRITER_LOG_FILE", "/tmp/feedwriter.log")
        monkeypatch.setenv("FEEDWRITER_PRETTY", "no")

        settings = load_settings()
        assert settings.log_level == "DEBUG"
        assert settings.log_file == "/tmp/feedwriter.log"
        assert settings.pretty is False

    def test_env_file(self, clean_env, monkeypatch):
        """Test that values come from a .env file."""
        from feedwriter.utils.config import load_settings

        env_file = clean_env / "custom.env"
        env_file.write_text("FEEDWRITER_LOG_LEVEL=WARNING\nFEEDWRITER_PRETTY=false\n")

        with patch.dict("os.environ", {}, clear=False):
            settings = load_settings(env_file)
            assert settings.log_level == "WARNING"
            assert settings.pretty is False

    def test_environment_wins_over_env_file(self, clean_env, monkeypatch):
        """Test that set variables are not overridden by .env."""
        from feedwriter.utils.config import load_settings

        (clean_env / ".env").write_text("FEEDWRITER_LOG_LEVEL=ERROR\n")
        monkeypatch.setenv("FEEDWRITER_LOG_LEVEL", "DEBUG")

        assert load_settings().log_level == "DEBUG"


class TestSetupLogger:
    """Tests for setup_logger."""

    def test_console_only(self):
        """Test the default handler set."""
        from feedwriter.utils.logger import setup_logger

        logger = setup_logger(name="feedwriter.test.console")
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1

    def test_level_name(self):
        """Test that level names are accepted."""
        from feedwriter.utils.logger import setup_logger

        assert setup_logger(name="feedwriter.test.level", level="debug").level == logging.DEBUG
        assert setup_logger(name="feedwriter.test.level", level="bogus").level == logging.INFO

    def test_file_handler(self, tmp_path):
        """Test that a rotating file handler writes to the log file."""
        from logging.handlers import RotatingFileHandler
        from feedwriter.utils.logger import setup_logger

        log_file = tmp_path / "logs" / "feedwriter.log"
        logger = setup_logger(name="feedwriter.test.file", log_file=str(log_file))
        logger.info("hello")

        assert any(isinstance(h, RotatingFileHandler) for h in logger.handlers)
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")

        setup_logger(name="feedwriter.test.file")

    def test_repeated_setup_replaces_handlers(self):
        """Test that calling setup twice does not duplicate handlers."""
        from feedwriter.utils.logger import setup_logger

        setup_logger(name="feedwriter.test.repeat")
        logger = setup_logger(name="feedwriter.test.repeat")
        assert len(logger.handlers) == 1


class TestVersion:
    """Tests for the package version lookup."""

    def test_source_checkout_reads_version_file(self):
        """Test that the VERSION file at the project root is used when present."""
        from pathlib import Path
        import feedwriter

        version_file = Path(feedwriter.__file__).parent.parent.parent / "VERSION"
        assert feedwriter._read_version() == version_file.read_text().strip()

    def test_installed_package_uses_metadata(self):
        """Test that an install without VERSION reports the distribution version."""
        import feedwriter

        with patch("feedwriter.Path.exists", return_value=False), \
                patch("feedwriter.metadata.version", return_value="1.2.3") as mock_version:
            assert feedwriter._read_version() == "1.2.3"
        mock_version.assert_called_once_with("feedwriter")

    def test_unknown_package(self):
        """Test the fallback when neither VERSION nor metadata exist."""
        from importlib import metadata
        import feedwriter

        with patch("feedwriter.Path.exists", return_value=False), \
                patch("feedwriter.metadata.version", side_effect=metadata.PackageNotFoundError("feedwriter")):
            assert feedwriter._read_version() == "0.0.0"
