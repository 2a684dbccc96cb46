from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from .command import ExecutionLog, run_cmd

logger = logging.getLogger(__name__)

FS_TYPE = "ext3"


def make_filesystem(device: str, *, log: ExecutionLog) -> None:
    run_cmd([f"mkfs.{FS_TYPE}", device], log=log)


def make_mountpoint(temp_dir: Optional[str] = None) -> Path:
    return Path(tempfile.mkdtemp(prefix="mksysimage", dir=temp_dir)).resolve()


def remove_mountpoint(path: Path) -> None:
    os.rmdir(path)


def mount(device: str, mountpoint: Path, *, log: ExecutionLog) -> None:
    run_cmd(["mount", "-t", FS_TYPE, device, str(mountpoint)], log=log)


def umount(mountpoint: Path, *, log: ExecutionLog) -> None:
    # Lazy+force so a busy mount still detaches from the namespace.
    run_cmd(["umount", "-lf", str(mountpoint)], log=log)
