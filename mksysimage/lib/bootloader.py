from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Optional

from .command import ExecutionLog, run_cmd

logger = logging.getLogger(__name__)

MBR_SIZE = 440
BOOT_DIR = "boot"
CONFIG_NAME = "syslinux.cfg"

SYSLINUX_TEMPLATE = (
    "PROMPT 0\n"
    "DEFAULT linux\n"
    "LABEL linux\n"
    "    LINUX {kernel}\n"
    "    APPEND {append}\n"
    "    {initrd}\n"
)


def write_mbr(mbr_path: Path, device: str, *, log: ExecutionLog) -> None:
    """Copy the boot code onto the first 440 bytes of the whole disk."""

    run_cmd(["dd", f"if={mbr_path}", f"of={device}", f"bs={MBR_SIZE}", "count=1"], log=log)


def render_syslinux_config(*, kernel_name: str, kernel_args: str, initrd_name: Optional[str] = None) -> str:
    initrd = f"INITRD {initrd_name}" if initrd_name else ""
    return SYSLINUX_TEMPLATE.format(kernel=kernel_name, append=kernel_args, initrd=initrd)


def install_extlinux(
    *,
    target_root: Path,
    kernel: Path,
    kernel_args: str,
    initrd: Optional[Path] = None,
    log: ExecutionLog,
) -> Path:
    """Copy kernel/initrd into <target_root>/boot, write syslinux.cfg and install extlinux there.

    Returns the boot directory.
    """

    boot_dir = target_root / BOOT_DIR
    boot_dir.mkdir(mode=0o755, parents=True, exist_ok=True)

    shutil.copy2(kernel, boot_dir / kernel.name)
    if initrd is not None:
        shutil.copy2(initrd, boot_dir / initrd.name)

    cfg = boot_dir / CONFIG_NAME
    cfg.write_text(
        render_syslinux_config(
            kernel_name=kernel.name,
            kernel_args=kernel_args,
            initrd_name=initrd.name if initrd is not None else None,
        ),
        encoding="utf-8",
    )
    logger.info("Wrote syslinux config: %s", str(cfg))

    run_cmd(["extlinux", "--install", str(boot_dir)], log=log)
    return boot_dir
