"""Tests for configuration, logging and the error taxonomy."""

import json
import logging

import pytest

from densemat import ConfigurationError, DenseMatError, DimensionError, Matrix
from densemat.core import config
from densemat.core.config import Settings
from densemat.core.errors import format_shape
from densemat.core.logging import (
    StructuredFormatter,
    TextFormatter,
    get_context_logger,
    setup_logging,
)


@pytest.fixture
def package_logger():
    """Restore the densemat logger after setup_logging() reconfigures it."""
    logger = logging.getLogger("densemat")
    handlers, level = logger.handlers[:], logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestSettings:
    """Test environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        """Test built-in defaults."""
        for name in ("LOG_LEVEL", "PRINT_WIDTH", "PRINT_PRECISION", "COMPARE_TOLERANCE"):
            monkeypatch.delenv(f"DENSEMAT_{name}", raising=False)
        settings = Settings(_env_file=None)
        assert settings.LOG_LEVEL == "WARNING"
        assert settings.PRINT_WIDTH == 7
        assert settings.PRINT_PRECISION == 2
        assert settings.COMPARE_TOLERANCE == 1e-5

    def test_environment_override(self, monkeypatch):
        """Test DENSEMAT_* variables override defaults."""
        monkeypatch.setenv("DENSEMAT_PRINT_WIDTH", "10")
        monkeypatch.setenv("DENSEMAT_LOG_FORMAT", "json")
        settings = Settings(_env_file=None)
        assert settings.PRINT_WIDTH == 10
        assert settings.LOG_FORMAT == "json"

    def test_get_settings_is_cached(self):
        """Test get_settings returns the shared instance."""
        assert config.get_settings() is config.get_settings()


class TestErrors:
    """Test the exception taxonomy."""

    def test_hierarchy(self):
        """Test every library error derives from DenseMatError and ValueError."""
        assert issubclass(DimensionError, DenseMatError)
        assert issubclass(DimensionError, ValueError)
        assert issubclass(ConfigurationError, DenseMatError)

    def test_mismatch_message_and_details(self):
        """Test mismatch errors render both shapes."""
        error = DimensionError.mismatch("add", (2, 3), (3, 2))
        assert error.message == "Cannot add 2x3 and 3x2 matrices"
        assert error.details == {"left": (2, 3), "right": (3, 2)}

    def test_configuration_error_details(self):
        """Test ConfigurationError lists the conflicting inputs."""
        with pytest.raises(ConfigurationError) as exc_info:
            Matrix(1, 1, data=[0.0], generator=lambda i, j: 0.0)
        assert exc_info.value.details == {"inputs": ["data", "generator"]}

    def test_format_shape(self):
        """Test RxC rendering."""
        assert format_shape((4, 1)) == "4x1"


class TestLogging:
    """Test logging helpers."""

    def test_setup_logging_level(self, package_logger, override_settings):
        """Test setup_logging configures the package logger only."""
        override_settings(LOG_FORMAT="text", LOG_FILE=None)
        root_handlers = logging.getLogger().handlers[:]
        assert setup_logging("DEBUG") is package_logger
        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1
        assert isinstance(package_logger.handlers[0].formatter, TextFormatter)
        assert logging.getLogger().handlers == root_handlers

    def test_setup_logging_replaces_handlers(self, package_logger, override_settings):
        """Test calling setup_logging twice does not stack handlers."""
        override_settings(LOG_FILE=None)
        setup_logging("INFO")
        setup_logging("INFO")
        assert len(package_logger.handlers) == 1

    def test_setup_logging_defaults_to_settings_level(self, package_logger, override_settings):
        """Test the level falls back to LOG_LEVEL."""
        override_settings(LOG_LEVEL="error", LOG_FILE=None)
        setup_logging()
        assert package_logger.level == logging.ERROR

    def test_setup_logging_json(self, package_logger, override_settings):
        """Test LOG_FORMAT=json installs the structured formatter."""
        override_settings(LOG_FORMAT="json", LOG_FILE=None)
        setup_logging("INFO")
        assert isinstance(package_logger.handlers[0].formatter, StructuredFormatter)

    def test_setup_logging_file(self, package_logger, override_settings, tmp_path):
        """Test LOG_FILE adds a file handler."""
        log_file = tmp_path / "logs" / "densemat.log"
        override_settings(LOG_FILE=str(log_file))
        setup_logging("INFO")
        assert any(isinstance(h, logging.FileHandler) for h in package_logger.handlers)
        assert log_file.parent.exists()

    def test_text_formatter_renders_context(self):
        """Test text output appends extra_data as key=value pairs."""
        record = logging.LogRecord("densemat.matrix", logging.DEBUG, __file__, 1, "Constructed matrix", None, None)
        record.extra_data = {"shape": (2, 3), "mode": "zeros"}
        assert TextFormatter().format(record) == (
            "DEBUG densemat.matrix: Constructed matrix shape=(2, 3) mode=zeros"
        )

    def test_structured_formatter_includes_extra_data(self):
        """Test JSON output merges extra_data."""
        record = logging.LogRecord("densemat.test", logging.INFO, __file__, 1, "hello", None, None)
        record.extra_data = {"shape": (2, 2)}
        payload = json.loads(StructuredFormatter().format(record))
        assert payload["message"] == "hello"
        assert payload["shape"] == [2, 2]

    def test_context_logger_attaches_context(self, caplog):
        """Test context loggers add their context to each record."""
        logger = get_context_logger("densemat.test", component="unit")
        with caplog.at_level(logging.DEBUG, logger="densemat.test"):
            logger.debug("event", extra_data={"operands": 3})
        record = caplog.records[-1]
        assert record.extra_data == {"component": "unit", "operands": 3}

    def test_library_logs_products(self, caplog, square_matrix):
        """Test matrix products emit a debug record."""
        from densemat import matmul

        with caplog.at_level(logging.DEBUG, logger="densemat.operators"):
            matmul(square_matrix, square_matrix)
        assert any(r.getMessage() == "Matrix product" for r in caplog.records)
