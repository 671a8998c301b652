"""
Colourful logging setup shared by the app and the tests.
"""
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


class ColorfulFormatter(logging.Formatter):
    """ANSI formatter for plain stream output."""

    COLORS = {
        'DEBUG': '\033[36m',      # cyan
        'INFO': '\033[32m',       # green
        'WARNING': '\033[33m',    # yellow
        'ERROR': '\033[31m',      # red
        'CRITICAL': '\033[35m',   # magenta
    }
    TIME_COLOR = '\033[34m'
    RESET = '\033[0m'

    def format(self, record):
        message = super().format(record)

        if self._fmt and '%(asctime)s' in self._fmt:
            time_str = self.formatTime(record, self.datefmt)
            message = message.replace(time_str, f"{self.TIME_COLOR}{time_str}{self.RESET}", 1)

        level_name = record.levelname
        if level_name in self.COLORS:
            colored_level = f"{self.COLORS[level_name]}{level_name}{self.RESET}"
            message = message.replace(level_name, colored_level, 1)

        return message


def _rich_handler(level: int) -> logging.Handler:
    console = Console()
    handler = RichHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=False,
        enable_link_path=False,
        markup=False,
        rich_tracebacks=True,
        tracebacks_width=console.width,
        tracebacks_show_locals=False,
    )
    handler.setLevel(level)
    # RichHandler renders time and level itself
    handler.setFormatter(logging.Formatter('%(message)s', datefmt='%Y-%m-%d %H:%M:%S'))
    return handler


def _stream_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ColorfulFormatter(
        '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    return handler


def setup_colorful_logging(level: int = logging.INFO, name: Optional[str] = None, use_rich: bool = True) -> logging.Logger:
    """
    Configure a logger with a single colourful handler.

    Args:
        level: log level for the logger and its handler
        name: logger name, root logger when None
        use_rich: RichHandler when True, StreamHandler + ColorfulFormatter otherwise

    Returns:
        the configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    logger.addHandler(_rich_handler(level) if use_rich else _stream_handler(level))
    return logger


def get_colorful_logger(name: Optional[str] = None, use_rich: bool = True) -> logging.Logger:
    return setup_colorful_logging(name=name, use_rich=use_rich)
