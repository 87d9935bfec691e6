#!/usr/bin/env python3

import logging
import logging.config
import os

from pythonjsonlogger import jsonlogger


def setup_logging(stream: str = "ext://sys.stdout", level: str | None = None):
    """Setup JSON logging configuration"""
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": jsonlogger.JsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s"
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": stream
            }
        },
        "loggers": {
            "": {
                "handlers": ["console"],
                "level": level,
                "propagate": False
            }
        }
    }

    logging.config.dictConfig(logging_config)
