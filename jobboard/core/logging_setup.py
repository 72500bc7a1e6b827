"""
Logging setup - one line per record, configured once per process.
"""

import json
import logging
import sys
import time
from typing import Optional


class JsonFormatter(logging.Formatter):
    """{"t": 1700000000000, "lvl": "INFO", "name": "mod", "msg": "text"}"""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "t": int(time.time() * 1000),
            "lvl": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger. Safe to call more than once."""
    root = logging.getLogger()
    if getattr(root, "_jobboard_configured", False):
        return

    lvl = getattr(logging, (level or "INFO").upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(lvl)
    root._jobboard_configured = True  # type: ignore[attr-defined]
