"""
Tests for logger functionality.
"""

import pytest

from retailtransform.logger import StructuredLogger, get_logger, reset_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self, tmp_path):
        """Logger should be created with default settings."""
        logger = StructuredLogger(
            name="test",
            level="INFO",
            log_dir=tmp_path,
            enable_console=False,
        )

        assert logger.logger.name == "test"
        assert logger.metrics["records_emitted"] == 0

    def test_no_file_by_default(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        logger = StructuredLogger(name="test", enable_console=False)
        logger.info("Nothing on disk")

        assert not (tmp_path / "logs").exists()

    def test_log_methods(self, tmp_path):
        """All log level methods should work."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_console=False,
        )

        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")
        logger.error("Error message")
        logger.critical("Critical message")

    def test_console_writes_to_stderr(self, capsys):
        """stdout is reserved for the exported JSON."""
        logger = StructuredLogger(name="test-console", level="INFO")

        logger.info("Loaded products", count=3)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Loaded products" in captured.err
        assert '"count": 3' in captured.err

    def test_log_file_creation(self, tmp_path):
        """Log file should be created in specified directory."""
        logger = StructuredLogger(
            name="test",
            log_dir=tmp_path,
            enable_file=True,
            enable_console=False,
        )

        logger.info("Test message", title="小王子")

        log_files = list(tmp_path.glob("retailtransform_*.log"))
        assert len(log_files) == 1

        log_content = log_files[0].read_text(encoding="utf-8")
        assert "Test message" in log_content
        assert "小王子" in log_content

    def test_metrics_tracking(self, tmp_path):
        """Metrics should be tracked correctly."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        logger.record_products_loaded(3)
        logger.record_author(True)
        logger.record_author(False)
        logger.record_author(False)
        for _ in range(3):
            logger.record_emitted()
        logger.record_error("StoreQueryError")

        metrics = logger.get_metrics()

        assert metrics["products_loaded"] == 3
        assert metrics["authors_resolved"] == 1
        assert metrics["authors_missing"] == 2
        assert metrics["records_emitted"] == 3
        assert metrics["errors_by_type"]["StoreQueryError"] == 1
        assert metrics["author_coverage"] == pytest.approx(0.333, rel=0.01)

    def test_coverage_with_nothing_emitted(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        assert logger.get_metrics()["author_coverage"] == 0.0

    def test_get_metrics_returns_copy(self, tmp_path):
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        logger.get_metrics()["errors_by_type"]["Bogus"] = 1

        assert logger.metrics["errors_by_type"] == {}

    def test_metrics_summary(self, capsys):
        logger = StructuredLogger(name="test-summary", level="INFO")
        logger.record_products_loaded(2)
        logger.record_author(True)
        logger.record_author(False)
        logger.record_emitted()
        logger.record_emitted()

        logger.log_metrics_summary()

        err = capsys.readouterr().err
        assert "Records emitted: 2" in err
        assert "1 resolved, 1 missing (50.0% coverage)" in err


class TestGlobalLogger:
    """Test global logger singleton."""

    def test_get_logger_singleton(self, tmp_path):
        """get_logger should return same instance."""
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger2 = get_logger()

        assert logger1 is logger2

    def test_reset_logger(self, tmp_path):
        """reset_logger should create new instance."""
        reset_logger()

        logger1 = get_logger(log_dir=tmp_path, enable_console=False)
        logger1.record_emitted()

        reset_logger()

        logger2 = get_logger(log_dir=tmp_path, enable_console=False)

        assert logger2 is not logger1
        assert logger2.metrics["records_emitted"] == 0
