"""Logging configuration for the tracker.

Console (stderr) gets the configured level so it does not fight with the
board output; the log file under the data dir gets everything.
"""
from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional

FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(*, console_level: int = logging.WARNING, log_file: Optional[Path] = None,
                  file_level: int = logging.DEBUG) -> None:
    """Configure the root logger. Call once, before the first log line."""
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=FORMAT, datefmt=DATEFMT)

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)
