"""Console logging for bucketpull.

Download progress (``File ... bytes downloaded``, ``Total ... files``) is
logged at INFO and printed as a bare line so it reads like plain tool
output; warnings and errors carry a coloured ``[LEVEL]`` tag. ``--verbose``
switches to DEBUG and prefixes every line with a timestamp and the
emitting module, ``--quiet`` keeps only warnings and errors.

Usage::

    from bucketpull.utils.logger import get_logger

    log = get_logger(__name__)
    log.info("File %s of size %d bytes downloaded", path, size)
    log.warning("Could not clear %s: %s", path, err)
    log.debug("Skipping key %s", key)  # only shown with --verbose
"""
import logging
import sys

from colorama import Fore, Style

__all__ = ["get_logger", "setup_logging"]

_ROOT_LOGGER_NAME = "bucketpull"

_LEVEL_COLOURS = {
    logging.DEBUG: Style.DIM,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}

_PLAIN_FORMAT = "%(message)s"
_VERBOSE_FORMAT = "%(asctime)s %(shortname)-24s %(message)s"


class ProgressFormatter(logging.Formatter):
    """Colours log lines; INFO lines go out without a level tag."""

    def format(self, record: logging.LogRecord) -> str:
        # bucketpull.services.s3.sync_engine -> s3.sync_engine
        record.shortname = record.name.split(".", 2)[-1] if record.name.count(".") >= 2 \
            else record.name
        msg = super().format(record)
        colour = _LEVEL_COLOURS.get(record.levelno, "")
        if record.levelno == logging.INFO:
            return f"{colour}{msg}{Style.RESET_ALL}"
        return f"{colour}[{record.levelname}]{Style.RESET_ALL} {msg}"


_configured = False


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure the *bucketpull* logger.

    Safe to call repeatedly; the single stderr handler is reused and its
    format follows the latest *verbose* setting.

    Args:
        verbose: DEBUG level with timestamps and module names.
        quiet: WARNING level (overrides *verbose*).
    """
    global _configured  # noqa: PLW0603

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    formatter = ProgressFormatter(
        _VERBOSE_FORMAT if verbose and not quiet else _PLAIN_FORMAT,
        datefmt="%H:%M:%S",
    )

    root = logging.getLogger(_ROOT_LOGGER_NAME)
    root.setLevel(level)

    if not root.handlers:
        root.addHandler(logging.StreamHandler(sys.stderr))
    for handler in root.handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the *bucketpull* namespace.

    Applies the default INFO configuration on first use.
    """
    if not _configured:
        setup_logging()

    if not name.startswith(_ROOT_LOGGER_NAME):
        name = f"{_ROOT_LOGGER_NAME}.{name}"

    return logging.getLogger(name)
