"""
Logging configuration for markov_chains
"""

import logging
import logging.config
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union


def setup_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    json_format: bool = False
) -> None:
    """
    Setup logging configuration

    Args:
        level: Level for the package logger
        log_file: Optional file receiving detailed records
        json_format: Write the file handler as JSON lines
    """
    if isinstance(level, str):
        level = level.upper()

    log_config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S"
            },
            "simple": {
                "format": "%(levelname)s - %(message)s"
            },
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(funcName)s %(lineno)d %(message)s"
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "simple",
                "stream": sys.stderr
            }
        },
        "loggers": {
            "markov_chains": {
                "level": level,
                "handlers": ["console"],
                "propagate": False
            }
        }
    }

    if log_file is not None:
        log_config["handlers"]["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "json" if json_format else "detailed",
            "filename": str(log_file),
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5
        }
        log_config["loggers"]["markov_chains"]["handlers"].append("file")

    logging.config.dictConfig(log_config)
