from __future__ import annotations

import logging
import os
import sys
from typing import Optional

_ENV_LEVEL = "GRIDASTAR_LOG_LEVEL"
_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def resolve_level(level: Optional[str] = None) -> int:
    """Explicit level, else $GRIDASTAR_LOG_LEVEL, else WARNING."""
    name = (level or os.getenv(_ENV_LEVEL, "WARNING")).upper()
    resolved = logging.getLevelName(name)
    if isinstance(resolved, str):  # unknown name
        return logging.WARNING
    return resolved


def configure_logging(level: Optional[str] = None) -> None:
    global _configured
    root = logging.getLogger()
    root.setLevel(resolve_level(level))
    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root.addHandler(handler)
    _configured = True


__all__ = ["configure_logging", "resolve_level"]
