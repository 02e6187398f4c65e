import logging, logging.config

def setup_logging(level: str = "INFO", access_log: bool = True, production: bool = False):
    level = level.upper()
    # Outbound request/response bodies are only logged outside production
    outbound_level = "WARNING" if production else "DEBUG"
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
                        "datefmt": "%H:%M:%S"},
            # Uvicorn pre-formats access log lines; don't expect extra fields
            "access_simple": {"format": "%(message)s"},
        },
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "default"},
            "access":  {"class": "logging.StreamHandler", "formatter": "access_simple"},
        },
        "loggers": {
            "uvicorn.error":  {"level": level, "handlers": ["console"], "propagate": False},
            "uvicorn.access": {"level": ("INFO" if access_log else "WARNING"),
                               "handlers": ["access"], "propagate": False},
            "httpx": {"level": ("WARNING" if production else level)},
            "app.repositories.http": {"level": outbound_level},
        },
        "root": {"level": level, "handlers": ["console"]},
    })
