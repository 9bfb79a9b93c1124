from __future__ import annotations

import logging
import sys

from tourism_api.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def init_logging(level: str | None = None) -> None:
    """Configure the root logger once for the API process.

    Uvicorn installs its own handlers on import, so ``force`` replaces whatever
    is already attached to the root logger.
    """
    resolved = (level or settings.log_level or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        stream=sys.stdout,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        force=True,
    )
    # httpx logs every request at INFO, including query strings with API keys.
    logging.getLogger("httpx").setLevel(logging.WARNING)
