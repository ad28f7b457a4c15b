import logging
from typing import Optional, Union

from rich.logging import RichHandler


LOGGER_NAME = "lanetruth"


def get_logger(name: str = LOGGER_NAME, level: int = logging.INFO) -> logging.Logger:
    """Get the package logger, attaching a rich handler the first time"""
    logger = logging.getLogger(name)
    if name == LOGGER_NAME and not logger.handlers:
        handler = RichHandler(show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.setLevel(level)
    return logger


def print_log(
    msg, logger: Optional[Union[logging.Logger, str]] = None, level: int = logging.INFO
) -> None:
    """Print a log message.

    Args:
        msg (str): The message to be logged.
        logger (Logger or str, optional): If the type of logger is
        ``logging.Logger``, we directly use logger to log messages.
        Some special loggers are:

        - "silent": No message will be printed.
        - "current": Use the package logger ``lanetruth``.
        - None: The `print()` method will be used to print log messages.

        If the type of logger is str, it is treated as the name of a
        logger from ``logging.getLogger``.
        level (int): Logging level. Only available when `logger` is a
        Logger object, "current", or a logger name.
    """
    if logger is None:
        print(msg)
    elif isinstance(logger, logging.Logger):
        logger.log(level, msg)
    elif logger == "silent":
        pass
    elif logger == "current":
        get_logger().log(level, msg)
    elif isinstance(logger, str):
        logging.getLogger(logger).log(level, msg)
    else:
        raise TypeError(
            "`logger` should be either a logging.Logger object, str, "
            f'"silent", "current" or None, but got {type(logger)}'
        )
