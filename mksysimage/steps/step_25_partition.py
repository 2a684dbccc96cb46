from __future__ import annotations

import logging

from ..lib.image import partition_image
from ..pipeline import BuildCtx

logger = logging.getLogger(__name__)


class PartitionStep:
    step_id = "25_partition"

    def run(self, ctx: BuildCtx) -> None:
        logger.info("Creating partition table")
        partition_image(ctx.state.image_path, log=ctx.log)
