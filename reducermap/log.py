"""
Logging setup.

Library modules only ever call get(); the CLI and the API app call setup()
once at startup. Reads LOG_LEVEL and LOG_JSON from the environment when no
explicit values are passed. Records go to stderr so they never mix with the
state the CLI prints on stdout.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from typing import Optional

TEXT_FORMAT = "[%(asctime)s] %(levelname)s %(name)s | %(message)s"

_configured = False


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        obj = {
            "ts": record.created,
            "lvl": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
            "where": f"{record.module}:{record.lineno}",
        }
        if record.exc_info:
            obj["exc"] = self.formatException(record.exc_info)
        return json.dumps(obj, ensure_ascii=False)


def _level(name: Optional[str]) -> int:
    value = getattr(logging, (name or os.getenv("LOG_LEVEL", "INFO")).upper(), None)
    return value if isinstance(value, int) else logging.INFO


def setup(level: Optional[str] = None, json_mode: Optional[bool] = None, *, force: bool = False) -> None:
    """Configure the root logger. No-op when already configured, unless force=True."""
    global _configured
    if _configured and not force:
        return

    if json_mode is None:
        json_mode = os.getenv("LOG_JSON", "0") == "1"

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(JsonFormatter() if json_mode else logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_level(level))

    _configured = True


def get(name: str) -> logging.Logger:
    """Namespaced logger."""
    return logging.getLogger(name)
