"""Logging infrastructure setup."""

import logging
from pathlib import Path


def setup_logger(
    name: str = "weather_news",
    log_file: str = "output/weather_news.log",
    console_level: int = logging.WARNING,
) -> logging.Logger:
    """
    Configure and return a logger that writes to a file and the console.

    The console handler is quieter than the file handler so that the interactive
    loop's own output stays readable.

    Args:
        name (str): The name of the logger.
        log_file (str): The path to the log file.
        console_level (int): Minimum level echoed to the console.

    Returns:
        logging.Logger: The configured logger instance.
    """
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)

    # Avoid adding multiple handlers if setup is called multiple times
    if logger.hasHandlers():
        return logger

    logger.setLevel(logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(module)s.%(funcName)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger

# Create a default logger instance
logger = setup_logger()
