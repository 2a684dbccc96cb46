from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

FALLBACK_LOG_NAME = "mksysimage.log"


def configure_logging(
    log_path: Optional[str] = None,
    level: int = logging.INFO,
    also_console: bool = True,
) -> Optional[str]:
    """Configure root logging; progress goes to stderr, stdout stays free for --print-fs.

    An unwritable log_path falls back to ./mksysimage.log. Returns the file
    actually used, if any. Calling it again replaces the previous handlers.
    """

    chosen_path = log_path
    handlers: list[logging.Handler] = []

    if log_path:
        try:
            Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_path))
        except OSError:
            chosen_path = str(Path.cwd() / FALLBACK_LOG_NAME)
            handlers.append(logging.FileHandler(chosen_path))

    if also_console:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
        handlers=handlers or [logging.NullHandler()],
        force=True,
    )
    return chosen_path
