"""Application settings, validation and logging setup."""

import logging
import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent
DEFAULT_DB_URL = f"sqlite:///{BASE / 'quiz.db'}"


class Settings:
    ENV: str
    DATABASE_URL: str
    SQL_ECHO: bool
    LOG_LEVEL: str

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DB_URL)
        self.SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self._validate()

    def _validate(self):
        if self.ENV != "dev" and self.DATABASE_URL.rstrip("/") in ("sqlite:", "sqlite:///:memory:"):
            raise RuntimeError("DATABASE_URL must point at a persistent database in non-dev environments")


def configure_logging(level: str | None = None):
    """Configure root logging once, using `LOG_LEVEL` unless `level` is given.

    The package never configures logging on import; the process that
    hosts the services (the HTTP app or a script) calls this at startup.
    """
    logger = logging.getLogger("quizapp")
    if not logger.handlers and not logging.getLogger().handlers:
        logging.basicConfig(level=level or settings.LOG_LEVEL)
    logger.setLevel(level or settings.LOG_LEVEL)
    return logger


settings = Settings()
