import logging
from pathlib import Path

from app.core.config import settings


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Libraries that are too chatty at INFO for a CRUD service.
_NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "passlib")


def _file_handler_exists(root: logging.Logger, log_path: Path) -> bool:
    return any(
        isinstance(handler, logging.FileHandler)
        and getattr(handler, "baseFilename", None) == str(log_path.resolve())
        for handler in root.handlers
    )


def configure_logging() -> logging.Logger:
    level = getattr(logging, (settings.log_level or "INFO").upper(), logging.INFO)
    root = logging.getLogger()
    formatter = logging.Formatter(LOG_FORMAT)

    if not root.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        if not _file_handler_exists(root, log_path):
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    root.setLevel(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger = logging.getLogger("kupipodaridai")
    logger.setLevel(level)
    return logger
