"""
Logging configuration for ifdefault.

Provides structured logging throughout the application with configurable
verbosity levels. Table output goes to stdout; log records go to stderr so
they never mix with exported JSON/CSV.

Behavior:
- Default mode shows WARNING+ only
- Verbose mode (-v) shows DEBUG+ including third-party libraries
- Third-party library noise (urllib3, requests) suppressed in default mode

Security:
    Log messages carrying interface names or command output should use
    sanitize_for_log() from utils.system.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


class VerboseFilter(logging.Filter):
    """
    Console filter: warnings and errors always, progress only with -v.

    The step-by-step transition log ("[3/6] add IPv4 address") is INFO and
    therefore hidden unless verbose.
    """

    def __init__(self, verbose: bool = False):
        super().__init__()
        self.verbose = verbose

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.WARNING or self.verbose


class ColoredFormatter(logging.Formatter):
    """
    Formatter that adds ANSI color codes to the level name.

    Color scheme:
        DEBUG: Cyan
        INFO: Green
        WARNING: Yellow
        ERROR: Red
        CRITICAL: Magenta
    """

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        """
        Format log record with color codes.

        The record is copied so handlers sharing it (e.g. the plain file
        handler) never see the escape sequences.
        """
        colored = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, '')
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def setup_logging(
    verbose: bool = False,
    log_file: Optional[Path] = None,
    use_colors: bool = True
) -> None:
    """
    Configure application-wide logging.

    Sets up a console handler on stderr and an optional file handler.
    Console output uses colored formatting, file output uses plain text
    and always records DEBUG and above.

    Args:
        verbose: If True, enable DEBUG level logging on the console
        log_file: Optional file path to write logs to
        use_colors: If True, use colored output for console (--no-color disables)

    Examples:
        >>> setup_logging(verbose=False)
        >>> # Only warnings/errors shown

        >>> setup_logging(verbose=True, log_file=Path("ifdefault.log"))
        >>> # Everything on console and in the file
    """
    level = logging.DEBUG if verbose else logging.WARNING

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.addFilter(VerboseFilter(verbose))

    console_formatter: logging.Formatter
    if use_colors:
        console_formatter = ColoredFormatter('%(levelname)s: %(message)s')
    else:
        console_formatter = logging.Formatter('%(levelname)s: %(message)s')

    console_handler.setFormatter(console_formatter)

    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        handlers.append(file_handler)

    # Root level is DEBUG, handlers filter
    logging.basicConfig(
        level=logging.DEBUG,
        handlers=handlers,
        force=True
    )

    # Connection chatter from the egress lookup, e.g.
    #   DEBUG: Starting new HTTPS connection (1): ipinfo.io:443
    for name in ('urllib3', 'requests'):
        logging.getLogger(name).setLevel(logging.NOTSET if verbose else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Module logger; call once at import time with __name__.

    Log with %-style arguments and pass interface names or command output
    through sanitize_for_log:

        logger.debug("Default route via %s", sanitize_for_log(alias))
    """
    return logging.getLogger(name)
