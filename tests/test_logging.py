"""Unit tests for the logging configuration module."""

import io
import json

import pytest
import structlog

from git_pr_release.log_config import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def reset_logging():
    clear_context()
    yield
    clear_context()
    structlog.reset_defaults()


class TestLoggingConfiguration:
    """Test cases for logging configuration."""

    def test_configure_logging_returns_stdlib_logger(self):
        """Test logging configuration with INFO level."""
        configure_logging(level="INFO")
        logger = get_logger("test")
        assert logger is not None

    def test_configure_logging_invalid_level(self):
        """Test logging configuration with invalid level."""
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging(level="INVALID")

    def test_json_records_written_to_stream(self):
        """Test JSON rendering goes to the configured stream."""
        stream = io.StringIO()
        configure_logging(level="INFO", json_logs=True, stream=stream)

        get_logger("test").info("to_be_released", number=12)

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "to_be_released"
        assert record["number"] == 12  # noqa: PLR2004
        assert record["level"] == "info"

    def test_level_filters_records(self):
        """Test records below the configured level are dropped."""
        stream = io.StringIO()
        configure_logging(level="WARNING", json_logs=True, stream=stream)

        get_logger("test").info("hidden")
        get_logger("test").warning("shown")

        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()


class TestContextBinding:
    """Test cases for context binding functionality."""

    def test_bound_context_in_records(self):
        """Test bound context appears in every record until cleared."""
        stream = io.StringIO()
        configure_logging(level="INFO", json_logs=True, stream=stream)
        logger = get_logger("test")

        bind_context(repository="org/repo", staging_branch="staging")
        logger.info("first")
        clear_context()
        logger.info("second")

        first, second = (json.loads(line) for line in stream.getvalue().strip().splitlines())
        assert first["repository"] == "org/repo"
        assert first["staging_branch"] == "staging"
        assert "repository" not in second
        assert "staging_branch" not in second
