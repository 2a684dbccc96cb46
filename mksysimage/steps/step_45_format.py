from __future__ import annotations

import logging

from ..lib.storage import FS_TYPE, make_filesystem
from ..pipeline import BuildCtx

logger = logging.getLogger(__name__)


class FormatStep:
    step_id = "45_format"

    def run(self, ctx: BuildCtx) -> None:
        logger.info("Creating %s filesystem on %s", FS_TYPE, ctx.state.partition_device)
        make_filesystem(ctx.state.partition_device, log=ctx.log)
