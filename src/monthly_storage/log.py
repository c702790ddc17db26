import logging
import sys
from typing import TextIO


def setup_logging(level: str = "WARNING", stream: TextIO | None = None) -> None:
    """Send monthly_storage logs to ``stream`` (stderr by default).

    Stdout is left to the command output so it can be piped.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger("monthly_storage")
    logger.setLevel(log_level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(console_handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
