import json
import logging
import logging.config
import sys

from photoloc.core.config import configs


class JsonFormatter(logging.Formatter):
    """
    Formatter for logging in JSON format.
    """

    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_record, ensure_ascii=False)


def _build_logging_config(formatter: str, handler: str) -> dict:
    formatters = {
        "default": {
            "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "json": {
            "()": JsonFormatter,
            "datefmt": "%Y-%m-%dT%H:%M:%S%z",
        },
    }
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {formatter: formatters[formatter]},
        "handlers": {
            handler: {
                "class": "logging.StreamHandler",
                "stream": sys.stdout,
                "formatter": formatter,
            },
        },
        "loggers": {
            # Root Logger: Catches everything not caught by specific loggers
            "root": {
                "level": configs.LOG_LEVEL,
                "handlers": [handler],
            },
            # Application Logger
            "photoloc": {
                "level": configs.LOG_LEVEL,
                "handlers": [handler],
                "propagate": False,
            },
            # External Libraries Noise Reduction
            "httpx": {
                "level": "WARNING",
                "handlers": [handler],
                "propagate": False,
            },
            "httpcore": {
                "level": "WARNING",
                "handlers": [handler],
                "propagate": False,
            },
            "pyproj": {
                "level": "WARNING",
                "handlers": [handler],
                "propagate": False,
            },
        },
    }


# -----------------------------------------------------------------------------
# Development Logging Configuration
# -----------------------------------------------------------------------------
# Console-friendly, readable text format.
DEV_LOGGING_CONFIG = _build_logging_config("default", "console")

# -----------------------------------------------------------------------------
# Production Logging Configuration
# -----------------------------------------------------------------------------
# JSON structured, one object per line.
PROD_LOGGING_CONFIG = _build_logging_config("json", "console_json")


def setup_logging():
    """
    Set up logging configuration based on the environment.
    """
    env = configs.ENVIRONMENT.lower()

    if env == "production":
        log_config = PROD_LOGGING_CONFIG
    else:
        log_config = DEV_LOGGING_CONFIG

    logging.config.dictConfig(log_config)

    logger = logging.getLogger("photoloc")
    logger.info(f"Logging setup complete for {env} environment with level {configs.LOG_LEVEL}")
