import logging

from sigo.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s – %(message)s"


def sql_log_level() -> int:
    """SQL statements are only logged while developing with DEBUG on."""
    if settings.DEBUG and settings.APP_ENV == "development":
        return logging.INFO
    return logging.WARNING


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once; uvicorn keeps its own handlers."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    logging.getLogger("sqlalchemy.engine").setLevel(sql_log_level())
