from __future__ import annotations

import logging

from ..lib.loop import attach_loop, detach_loop
from ..pipeline import BuildCtx

logger = logging.getLogger(__name__)


class AttachLoopStep:
    step_id = "30_attach_loop"

    def run(self, ctx: BuildCtx) -> None:
        logger.info("Setting up loop device")
        device = attach_loop(str(ctx.state.image_path), log=ctx.log)

        ctx.state.record("loop_device", device)
        ctx.resources.push(f"detach loop device {device}", lambda: detach_loop(device, log=ctx.log))
        logger.info("Attached %s to %s", ctx.state.image_path, device)
