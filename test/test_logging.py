"""Unit tests for fusion_debug.utils.logging.

Run with: pytest test/test_logging.py -v
"""

import logging

import pytest

from fusion_debug.render import render_ascii
from fusion_debug.stream import StreamSnapshot
from fusion_debug.utils.logging import MultilineFormatter, setup_logging


def _log_record(msg: str, level: int = logging.INFO, name: str = "fusion_debug.test") -> logging.LogRecord:
    return logging.LogRecord(name=name, level=level, pathname="", lineno=0, msg=msg, args=(), exc_info=None)


@pytest.fixture
def log_file(tmp_path):
    """Log file path; handlers pointing at it are removed after the test."""
    path = tmp_path / "debug.log"
    loggers = [logging.root, logging.getLogger("fusion_debug")]
    levels = [logger.level for logger in loggers]
    yield str(path)
    for logger, level in zip(loggers, levels):
        for handler in list(logger.handlers):
            if isinstance(handler, logging.FileHandler) and handler.baseFilename == str(path):
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(level)


class TestMultilineFormatter:
    """Tests for MultilineFormatter."""

    def test_single_line_with_metadata(self) -> None:
        """The message is padded to msg_width before level and logger name."""
        result = MultilineFormatter(msg_width=50).format(_log_record("short", level=logging.WARNING))
        assert result.startswith("short" + " " * 45)
        assert result.endswith(" - WARNING - fusion_debug.test")

    def test_single_line_without_metadata(self) -> None:
        """Without metadata the message is returned as is."""
        assert MultilineFormatter(msg_width=50, show_metadata=False).format(_log_record("short")) == "short"

    def test_report_layout_preserved(self, chain_snapshot: StreamSnapshot) -> None:
        """A multi-line report keeps every continuation line verbatim."""
        report = render_ascii(chain_snapshot)
        result = MultilineFormatter(msg_width=40).format(_log_record(report))
        lines = result.split("\n")
        expected = report.split("\n")
        assert lines[0].startswith(expected[0])
        assert "INFO" in lines[0]
        assert lines[1:] == expected[1:]

    def test_report_without_metadata_is_unchanged(self, chain_snapshot: StreamSnapshot) -> None:
        """Without metadata a report is emitted byte for byte."""
        report = render_ascii(chain_snapshot)
        assert MultilineFormatter(msg_width=40, show_metadata=False).format(_log_record(report)) == report


class TestSetupLogging:
    """Tests for setup_logging()."""

    def test_defaults(self, log_file: str) -> None:
        """The package logger gets a DEBUG-level file handler without metadata."""
        root_handlers = list(logging.root.handlers)
        handler = setup_logging(log_file)
        package_logger = logging.getLogger("fusion_debug")
        assert handler in package_logger.handlers
        assert logging.root.handlers == root_handlers
        assert package_logger.level == logging.DEBUG
        assert isinstance(handler.formatter, MultilineFormatter)
        assert handler.formatter.msg_width == 120
        assert handler.formatter.show_metadata is False

    def test_root_logger(self, log_file: str) -> None:
        """An empty logger name configures the root logger."""
        handler = setup_logging(log_file, level=logging.WARNING, logger_name="")
        assert handler in logging.root.handlers
        assert logging.root.level == logging.WARNING

    def test_overwrites_and_writes_reports(self, log_file: str, chain_snapshot: StreamSnapshot) -> None:
        """The file is truncated and a report logged under the package lands intact."""
        with open(log_file, "w") as f:
            f.write("old content\n")
        handler = setup_logging(log_file)
        report = render_ascii(chain_snapshot)
        logging.getLogger("fusion_debug.test").debug(report)
        handler.flush()
        with open(log_file) as f:
            content = f.read()
        assert "old content" not in content
        assert report in content
