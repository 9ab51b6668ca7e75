"""Log configuration for graph reports.

Reports are logged as a single multi-line message; the formatter keeps their
layout and only tags the first line.
"""

import logging

__all__ = ["setup_logging", "MultilineFormatter"]


class MultilineFormatter(logging.Formatter):
    """Pad the first line to ``msg_width`` and append metadata; leave the rest of the message as is."""

    def __init__(self, msg_width: int, show_metadata: bool = True) -> None:
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")
        self.msg_width = msg_width
        self.show_metadata = show_metadata

    def format(self, record: logging.LogRecord) -> str:
        first, sep, rest = record.getMessage().partition("\n")
        if self.show_metadata:
            first = f"{first:<{self.msg_width}}{self.formatTime(record)} - {record.levelname} - {record.name}"
        return first + sep + rest


def setup_logging(
    log_file: str,
    level: int = logging.DEBUG,
    msg_width: int = 120,
    show_metadata: bool = False,
    logger_name: str = "fusion_debug",
) -> logging.FileHandler:
    """Send a logger's records to a fresh file.

    Only the ``fusion_debug`` logger tree is configured by default, so the
    host application's root logging is left alone.

    Args:
        log_file: Path to the log file, overwritten on each call.
        level: Level set on the configured logger.
        msg_width: Width the first line is padded to when metadata is shown.
        show_metadata: Whether to append timestamp/level/name metadata.
        logger_name: Logger to attach the handler to; ``""`` is the root logger.

    Returns:
        The installed handler, for removal by the caller.
    """
    handler = logging.FileHandler(log_file, mode="w")
    handler.setFormatter(MultilineFormatter(msg_width=msg_width, show_metadata=show_metadata))
    logger = logging.getLogger(logger_name)
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
