"""Runtime settings and logging configuration.

Settings come from the environment, after a project-level .env file (if
any) has been loaded:

    ORGCHART_CONFIG_DIR   directory holding payroll_policy.json and roster.json
    ORGCHART_LOG_LEVEL    root log level for the CLI (default WARNING)
"""

from __future__ import annotations

import logging
import logging.config
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[2]

load_dotenv(ROOT / ".env")

DEFAULT_CONFIG_DIR = Path(os.getenv("ORGCHART_CONFIG_DIR", str(ROOT / "config")))
DEFAULT_LOG_LEVEL = os.getenv("ORGCHART_LOG_LEVEL", "WARNING").upper()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s"


def logging_config(level: str = DEFAULT_LOG_LEVEL) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "orgchart": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
        },
    }


def configure_logging(level: Optional[str] = None) -> None:
    """Install the console handler for the orgchart logger tree."""
    resolved = (level or DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(resolved), int):
        raise ValueError(f"Unknown log level: {resolved}")
    logging.config.dictConfig(logging_config(resolved))
