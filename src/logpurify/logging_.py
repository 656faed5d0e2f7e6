"""Logging utilities.

We use Python's standard `logging` module with a compact structured format.
This keeps dependencies minimal and makes logs easy to ship to ELK/Loki.

- Console output goes to stderr so redacted text on stdout stays clean.
- Optionally logs go to `<log_dir>/<run_id>.log` as well.

Nothing in logpurify logs matched values; log lines carry detector names,
kinds, offsets and counts only.
"""

from __future__ import annotations
import logging
import os
import sys
from typing import Optional

_FMT = "%(asctime)s %(levelname)s %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S"
_HANDLER_ATTR = "_logpurify_handler"


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None, run_id: Optional[str] = None) -> None:
    """Configure the `logpurify` logger. Safe to call more than once."""
    logger = logging.getLogger("logpurify")
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    for h in list(logger.handlers):
        if getattr(h, _HANDLER_ATTR, False):
            logger.removeHandler(h)
            h.close()

    fmt = logging.Formatter(fmt=_FMT, datefmt=_DATEFMT)

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(fmt)
    setattr(ch, _HANDLER_ATTR, True)
    logger.addHandler(ch)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        fh = logging.FileHandler(os.path.join(log_dir, f"{run_id or 'logpurify'}.log"), encoding="utf-8")
        fh.setFormatter(fmt)
        setattr(fh, _HANDLER_ATTR, True)
        logger.addHandler(fh)
