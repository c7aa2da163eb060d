"""Logging configuration shared by the API and the CLI."""

import logging
from typing import Optional

from .config import ClipRenderConfig, get_config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(config: Optional[ClipRenderConfig] = None, force: bool = False) -> None:
    """Configure root logging from the application config.

    Safe to call more than once; only the first call (or a forced call)
    installs handlers.
    """
    global _configured
    if _configured and not force:
        return

    config = config or get_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level.value),
        format=LOG_FORMAT,
        force=force,
    )
    _configured = True
