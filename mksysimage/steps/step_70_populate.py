from __future__ import annotations

import logging

from ..lib.populate import overlay_source
from ..pipeline import BuildCtx

logger = logging.getLogger(__name__)


class PopulateStep:
    step_id = "70_populate"

    def run(self, ctx: BuildCtx) -> None:
        # Order matters: later sources overwrite earlier ones.
        for spec in ctx.request.sources:
            overlay_source(
                ctx.state.mountpoint,
                spec,
                directory_mode=ctx.request.directory_mode,
                log=ctx.log,
            )
        logger.info("Populated %d source(s)", len(ctx.request.sources))
