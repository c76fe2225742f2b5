from __future__ import annotations

import logging
import sys

from printshop.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str | None = None) -> None:
    global _configured
    settings = get_settings()
    resolved = (level or settings.log_level).upper()

    root = logging.getLogger("printshop")
    root.setLevel(resolved)
    if _configured:
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _configured = True
