from __future__ import annotations

import logging

from ..lib.convert import remove_temp_image
from ..lib.image import allocate_image
from ..pipeline import BuildCtx

logger = logging.getLogger(__name__)


class AllocateImageStep:
    step_id = "20_allocate_image"

    def run(self, ctx: BuildCtx) -> None:
        image = ctx.request.temp_image_path
        logger.info("Creating filesystem image")
        allocate_image(image, ctx.request.disk_size_mb, log=ctx.log)

        ctx.state.record("image_path", image)
        # Delete-if-exists: a finalized image has already been moved or converted away.
        ctx.artifacts.push(f"delete {image}", lambda: remove_temp_image(image))
