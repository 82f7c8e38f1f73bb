from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_VERSION_HISTORY_LIMIT = 50


def version_history_limit() -> int:
    raw = (os.getenv("SB_VERSION_HISTORY_LIMIT", "") or "").strip()
    if not raw:
        return DEFAULT_VERSION_HISTORY_LIMIT
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring invalid SB_VERSION_HISTORY_LIMIT=%r", raw)
        return DEFAULT_VERSION_HISTORY_LIMIT
    return max(1, value)


__all__ = ["DEFAULT_VERSION_HISTORY_LIMIT", "version_history_limit"]
