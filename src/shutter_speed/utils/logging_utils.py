from __future__ import annotations

import logging
from pathlib import Path
import sys


_STREAM_FORMAT = "%(levelname)s %(name)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str, log_file: Path | None = None) -> None:
    resolved_level = getattr(logging, level.upper(), logging.WARNING)

    # stdout carries command output; diagnostics go to stderr.
    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(logging.Formatter(_STREAM_FORMAT))
    handlers: list[logging.Handler] = [stream]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=resolved_level, handlers=handlers, force=True)
