from __future__ import annotations

import logging
import os
import sys


def setup_logging(default_level: str | None = None) -> None:
    # stdout carries JSON / PKGBUILD text, so logs always go to stderr
    level_name = (default_level or os.getenv("PKGBUMP_LOG_LEVEL") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )
