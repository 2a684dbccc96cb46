from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..request import OutputFormat
from .command import ExecutionLog, run_cmd

logger = logging.getLogger(__name__)


def finalize_image(
    temp_image: Path,
    output: Path,
    fmt: OutputFormat,
    *,
    disk_uuid: Optional[str] = None,
    log: ExecutionLog,
) -> None:
    """Turn the working image into the requested output file.

    raw is a rename. Other formats go through ``vboxmanage convertfromraw``;
    vdi images may then have their disk UUID set.
    """

    if not fmt.needs_converter:
        temp_image.replace(output)
        logger.info("Renamed %s -> %s", temp_image, output)
        return

    logger.info("Creating %s image", fmt.value)
    run_cmd(
        [
            "vboxmanage",
            "convertfromraw",
            str(temp_image),
            str(output),
            f"--format={fmt.converter_format}",
        ],
        log=log,
    )

    if disk_uuid and fmt is OutputFormat.VDI:
        logger.info("Setting disk UUID")
        run_cmd(["vboxmanage", "internalcommands", "sethduuid", str(output), disk_uuid], log=log)


def remove_temp_image(path: Path) -> None:
    path.unlink(missing_ok=True)
