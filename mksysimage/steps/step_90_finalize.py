from __future__ import annotations

import logging

from ..lib.convert import finalize_image
from ..pipeline import BuildCtx
from ..request import OutputFormat

logger = logging.getLogger(__name__)


class FinalizeStep:
    step_id = "90_finalize"

    def run(self, ctx: BuildCtx) -> None:
        req = ctx.request
        fmt = OutputFormat.parse(req.output_format)

        finalize_image(
            ctx.state.image_path,
            req.output_path,
            fmt,
            disk_uuid=req.format_identifier,
            log=ctx.log,
        )
        logger.info("Build complete: %s (%s)", req.output_path, fmt.value)
