from __future__ import annotations

import logging

from ..lib.storage import make_mountpoint, mount, remove_mountpoint, umount
from ..pipeline import BuildCtx

logger = logging.getLogger(__name__)


class MountStep:
    step_id = "50_mount"

    def run(self, ctx: BuildCtx) -> None:
        mountpoint = make_mountpoint(ctx.request.temp_dir)
        ctx.state.record("mountpoint", mountpoint)
        ctx.resources.push(f"remove mountpoint {mountpoint}", lambda: remove_mountpoint(mountpoint))

        logger.info("Mounting the partition")
        mount(ctx.state.partition_device, mountpoint, log=ctx.log)
        ctx.resources.push(f"unmount {mountpoint}", lambda: umount(mountpoint, log=ctx.log))
