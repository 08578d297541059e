import logging
from logging.handlers import RotatingFileHandler

from .settings import Settings

LOGGER_NAME = "pgmcp_client"


def setup_client_logging(settings: Settings) -> logging.Logger:
    """Configure and return the package logger (stderr + rotating file).

    Safe to call more than once: handlers are only attached the first time.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    settings.log_dir.mkdir(parents=True, exist_ok=True)

    logger.setLevel(settings.log_level)
    fmt = logging.Formatter("%(asctime)s %(levelname)s %(name)s - %(message)s")

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    fh = RotatingFileHandler(
        settings.log_dir / "client.log",
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
    )
    fh.setFormatter(fmt)
    logger.addHandler(fh)
    return logger
