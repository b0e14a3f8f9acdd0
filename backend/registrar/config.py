import logging
import os
from typing import Optional
from pydantic import BaseModel


class Settings(BaseModel):
    database_url: str = "sqlite:///./registrar.db"
    sql_echo: bool = False
    log_level: str = "INFO"
    sqlite_timeout: float = 30.0


def load_settings() -> Settings:
    """Build settings from REGISTRAR_* environment variables"""
    return Settings(
        database_url=os.getenv("REGISTRAR_DATABASE_URL", "sqlite:///./registrar.db"),
        sql_echo=os.getenv("REGISTRAR_SQL_ECHO", "false").lower() in ("1", "true", "yes"),
        log_level=os.getenv("REGISTRAR_LOG_LEVEL", "INFO").upper(),
        sqlite_timeout=float(os.getenv("REGISTRAR_SQLITE_TIMEOUT", 30)),
    )


def setup_logging(level: Optional[str] = None):
    logging.basicConfig(
        level=level or settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


settings = load_settings()
