from __future__ import annotations

import logging
from pathlib import Path

from .command import ExecutionLog, run_cmd

logger = logging.getLogger(__name__)

# sfdisk script: one Linux partition, default start, rest of disk, bootable.
PARTITION_RECIPE = ",,L,*\n"


def allocate_image(path: Path, size_mb: int, *, log: ExecutionLog) -> None:
    """Write a zero-filled backing file of exactly size_mb MiB."""

    if size_mb <= 0:
        raise ValueError(f"disk size must be positive, got {size_mb}")
    run_cmd(["dd", "if=/dev/zero", f"of={path}", "bs=1M", f"count={size_mb}"], log=log)
    logger.info("Allocated %s MB image at %s", size_mb, path)


def partition_image(path: Path, *, log: ExecutionLog) -> None:
    run_cmd(["sfdisk", str(path)], input_text=PARTITION_RECIPE, log=log)
