from __future__ import annotations

import logging

from ..lib.bootloader import write_mbr
from ..pipeline import BuildCtx

logger = logging.getLogger(__name__)


class WriteMbrStep:
    step_id = "35_write_mbr"

    def run(self, ctx: BuildCtx) -> None:
        logger.info("Writing syslinux MBR")
        write_mbr(ctx.request.mbr_path, ctx.state.loop_device, log=ctx.log)
