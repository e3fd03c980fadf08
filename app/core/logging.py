import sys
from logging.config import dictConfig
from app.core.config import APP_ENV

# services, repository and compiler all log under "app.*"
APP_LOG_LEVEL = "DEBUG" if APP_ENV == "development" else "INFO"

ACCESS_FORMAT = (
    "%(asctime)s | ACCESS | %(client_addr)s | %(method)s | "
    "%(path)s | %(status_code)s | %(process_time_ms)sms"
)


def _stdout_handler(formatter: str) -> dict:
    return {
        "class": "logging.StreamHandler",
        "stream": sys.stdout,
        "formatter": formatter,
    }


def setup_logging():
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s"},
                "access": {"format": ACCESS_FORMAT},
            },
            "handlers": {
                "console": _stdout_handler("default"),
                "access_console": _stdout_handler("access"),
            },
            "loggers": {
                "app": {"level": APP_LOG_LEVEL},
                # one line per request from request_logging_middleware
                "access": {
                    "handlers": ["access_console"],
                    "level": "INFO",
                    "propagate": False,
                },
                "uvicorn.access": {"handlers": [], "propagate": False},
                "sqlalchemy.engine": {"level": "WARNING"},
            },
            "root": {"level": "INFO", "handlers": ["console"]},
        }
    )
