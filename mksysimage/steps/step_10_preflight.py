from __future__ import annotations

import logging

from ..errors import PreflightError
from ..lib.hostcheck import check_programs, required_programs, warn_if_not_root
from ..pipeline import BuildCtx
from ..request import OutputFormat

logger = logging.getLogger(__name__)


class PreflightStep:
    step_id = "10_preflight"

    def run(self, ctx: BuildCtx) -> None:
        req = ctx.request

        warn_if_not_root()

        if req.output_path.exists():
            raise PreflightError(f"Output file already exists: {req.output_path}")
        if req.temp_image_path.exists():
            raise PreflightError(f"Working image path already exists: {req.temp_image_path}")

        fmt = OutputFormat.parse(req.output_format)
        if req.format_identifier and fmt is not OutputFormat.VDI:
            logger.warning("Disk UUID only applies to vdi output; ignoring it for %s", fmt.value)

        check_programs(required_programs(fmt, inspect=req.print_fs))

        if not req.mbr_path.is_file():
            raise PreflightError(f"MBR boot code not found: {req.mbr_path}")

        logger.info("Preflight passed (format=%s, size=%sMB)", fmt.value, req.disk_size_mb)
