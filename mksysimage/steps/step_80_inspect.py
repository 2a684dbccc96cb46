from __future__ import annotations

import logging
import sys

from ..lib.command import run_cmd
from ..pipeline import BuildCtx

logger = logging.getLogger(__name__)


class InspectStep:
    step_id = "80_inspect"

    def run(self, ctx: BuildCtx) -> None:
        if not ctx.request.print_fs:
            return

        r = run_cmd(["find", "."], cwd=str(ctx.state.mountpoint), record_stdout=False, log=ctx.log)
        sys.stdout.write(r.stdout)
        sys.stdout.flush()
