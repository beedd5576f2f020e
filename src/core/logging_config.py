"""Logging setup shared by the application and the ASGI server."""
import logging.config

from core.config import Settings


def configure_logging(settings: Settings) -> None:
    """Configure root and application loggers from settings."""
    level = settings.log_level.upper()
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
        "loggers": {
            # SQL echo is too noisy outside of local debugging
            "sqlalchemy.engine": {"level": "WARNING"},
            "api.access": {"level": level},
        },
    })
