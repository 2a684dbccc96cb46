from __future__ import annotations

import logging
import os
import shutil
from typing import Iterable, List

from ..errors import PreflightError
from ..request import OutputFormat

logger = logging.getLogger(__name__)

BASE_PROGRAMS = [
    "dd",
    "kpartx",
    "losetup",
    "mkfs.ext3",
    "mount",
    "sfdisk",
    "tar",
    "umount",
    "rsync",
    "extlinux",
]

CONVERTER = "vboxmanage"


def required_programs(fmt: OutputFormat, *, inspect: bool = False) -> List[str]:
    programs = list(BASE_PROGRAMS)
    if fmt.needs_converter:
        programs.append(CONVERTER)
    if inspect:
        programs.append("find")
    return programs


def check_programs(programs: Iterable[str]) -> None:
    missing: list[str] = []
    for program in programs:
        logger.info("Checking for program %s", program)
        if shutil.which(program) is None:
            logger.error("Couldn't find program: %s", program)
            missing.append(program)
    if missing:
        raise PreflightError(f"Some required programs are missing: {', '.join(missing)}")


def warn_if_not_root() -> None:
    if hasattr(os, "geteuid") and os.geteuid() != 0:
        logger.warning("Not running as root, image construction will likely fail.")
        logger.warning("Continuing anyway, in case you have root-equivalent capabilities set.")
