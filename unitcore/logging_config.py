"""
Logging configuration for unitcore.

The library only creates named loggers under "unitcore". Applications (and
the CLI) apply this configuration with logging.config.dictConfig.
"""

import logging
import logging.config
from typing import Any, Dict


class UnitContextFilter(logging.Filter):
    """Guarantee a unit_id attribute on every record for the formatter."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "unit_id"):
            record.unit_id = "-"
        return True


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration for the unitcore logger tree."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "unit_context": {
                "()": UnitContextFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - [%(unit_id)s] %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr",
                "filters": ["unit_context"]
            }
        },
        "loggers": {
            "unitcore": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            }
        },
        "root": {
            "level": "WARNING",
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the unitcore logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
