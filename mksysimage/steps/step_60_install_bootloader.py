from __future__ import annotations

import logging

from ..lib.bootloader import install_extlinux
from ..pipeline import BuildCtx

logger = logging.getLogger(__name__)


class InstallBootloaderStep:
    step_id = "60_install_bootloader"

    def run(self, ctx: BuildCtx) -> None:
        req = ctx.request
        logger.info("Installing extlinux")
        boot_dir = install_extlinux(
            target_root=ctx.state.mountpoint,
            kernel=req.kernel_path,
            kernel_args=req.kernel_args,
            initrd=req.initrd_path,
            log=ctx.log,
        )
        logger.info("Bootloader installed in %s", boot_dir)
