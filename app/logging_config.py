"""
Logging setup shared by the Streamlit app and the CLI.
"""
from __future__ import annotations

import logging
import sys
from typing import TextIO

LOGGER_NAMES = ("app", "calc_core", "tools")

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: int | str = logging.INFO,
    log_file: str | None = None,
    stream: TextIO | None = None,
) -> None:
    """
    Configure the project loggers (stdout unless another stream is given,
    plus an optional file).

    Handlers are replaced on every call: Streamlit re-executes the script on
    each interaction and would otherwise stack duplicate handlers.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    formatter = logging.Formatter(_FORMAT, datefmt="%H:%M:%S")
    handlers: list[logging.Handler] = []

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        for old in list(logger.handlers):
            logger.removeHandler(old)
            old.close()
        for handler in handlers:
            logger.addHandler(handler)

    logging.getLogger("app").debug("Logging initialized (level=%s)", logging.getLevelName(level))
