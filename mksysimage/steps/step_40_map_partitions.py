from __future__ import annotations

import logging

from ..lib.loop import map_partitions, unmap_partitions
from ..pipeline import BuildCtx

logger = logging.getLogger(__name__)


class MapPartitionsStep:
    step_id = "40_map_partitions"

    def run(self, ctx: BuildCtx) -> None:
        device = ctx.state.loop_device
        logger.info("Setting up partition loop device")
        node = map_partitions(device, log=ctx.log)

        ctx.state.record("partition_device", node)
        ctx.resources.push(f"remove partition mapping for {device}", lambda: unmap_partitions(device, log=ctx.log))
