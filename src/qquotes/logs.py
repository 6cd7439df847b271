import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .errors import ConfigError

LOGGER_NAME = "qquotes"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H-%M-%S"


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def verbosity_level(verbose: int) -> int:
    """Map the number of -v flags to the terminal log level."""
    if verbose <= 0:
        return logging.ERROR
    if verbose == 1:
        return logging.WARNING
    return TRACE


def setup_logging(verbose: int, log_path: str | Path) -> logging.Logger:
    """
    Configure the process-wide qquotes logger with two sinks:
      - terminal (stderr, via rich) at the level chosen by -v
      - log file, appended to, INFO and above with timestamps
    Calling it again replaces the previous sinks.
    """
    logger = get_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    term = RichHandler(
        console=Console(stderr=True),
        level=verbosity_level(verbose),
        show_time=False,
        show_path=False,
        markup=False,
    )
    term.setFormatter(logging.Formatter("%(message)s"))

    path = Path(log_path).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot open log file {path}: {exc}") from exc
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))

    logger.addHandler(term)
    logger.addHandler(file_handler)
    logger.setLevel(TRACE)
    logger.propagate = False
    return logger
