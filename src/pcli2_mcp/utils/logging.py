"""Process-wide logging setup.

``setup_logging`` installs a single stderr handler on the root logger the
first time it is called.  Later calls are no-ops, so the CLI and tests can
call it freely.  ``$PCLI2_MCP_LOG`` overrides the requested level.
"""

from __future__ import annotations

import logging
import os
import sys
import threading

LOG_LEVEL_ENV = "PCLI2_MCP_LOG"
DEFAULT_LEVEL = "info"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_lock = threading.Lock()
_configured = False


def resolve_level(level: str | None) -> int:
    """Map a level name (``trace``/``debug``/``info``/``warn``/``error``) to a logging level."""
    name = (os.environ.get(LOG_LEVEL_ENV) or level or DEFAULT_LEVEL).strip().upper()
    if name == "TRACE":
        name = "DEBUG"
    elif name == "WARN":
        name = "WARNING"
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str | None = None) -> bool:
    """Configure root logging once.  Returns ``True`` if this call did the setup."""
    global _configured
    with _lock:
        if _configured:
            return False
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root = logging.getLogger()
        root.addHandler(handler)
        root.setLevel(resolve_level(level))
        _configured = True
        return True


def is_configured() -> bool:
    return _configured
