"""Logging setup for the S3 Vault server."""

import logging
import os
import sys
from typing import Optional

from .config import LOG_LEVEL_ENV

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Install a single stderr handler on the root logger.

    Args:
        level: Level name; falls back to S3VAULT_LOG_LEVEL, then INFO
    """
    level_name = (level or os.getenv(LOG_LEVEL_ENV, "INFO")).upper()
    resolved = getattr(logging, level_name, logging.INFO)

    # stdout may carry protocol traffic, keep logs on stderr
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolved)

    # boto is chatty at INFO
    logging.getLogger("botocore").setLevel(max(resolved, logging.WARNING))
    logging.getLogger("boto3").setLevel(max(resolved, logging.WARNING))
