from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .build_config import BuildConfig, load_build_config
from .errors import ImageBuildError, MalformedInputError
from .lib.command import ExecutionLog
from .logging_utils import configure_logging
from .pipeline import BuildCtx, PipelineResult, run_pipeline
from .request import BuildRequest, OutputFormat, SourceSpec, parse_source
from .steps import (
    AllocateImageStep,
    AttachLoopStep,
    FinalizeStep,
    FormatStep,
    InspectStep,
    InstallBootloaderStep,
    MapPartitionsStep,
    MountStep,
    PartitionStep,
    PopulateStep,
    PreflightStep,
    WriteMbrStep,
)

logger = logging.getLogger(__name__)


USAGE_EPILOG = """\
Multiple sources can be provided. If a source is a tarball, it is
extracted at its root. If it's a directory, its contents are copied
verbatim to its root. Each source is overlayed in the FS image at its
corresponding root, in the order given.

Example:
  sudo mksysimage out.raw vmlinuz /:./system/ /etc:conf.tgz
"""


def build_steps():
    return [
        PreflightStep(),
        AllocateImageStep(),
        PartitionStep(),
        AttachLoopStep(),
        WriteMbrStep(),
        MapPartitionsStep(),
        FormatStep(),
        MountStep(),
        InstallBootloaderStep(),
        PopulateStep(),
        InspectStep(),
    ]


def finalize_steps():
    return [FinalizeStep()]


def build(request: BuildRequest, *, log: ExecutionLog) -> PipelineResult:
    """Build one disk image. Raises ImageBuildError on failure.

    The caller owns ``log`` and decides when to print it.
    """

    ctx = BuildCtx(request=request, log=log)
    result = run_pipeline(ctx=ctx, steps=build_steps(), finalize_steps=finalize_steps())
    for failure in result.teardown_failures:
        logger.warning("Cleanup problem after successful build: %s", failure)
    return result


def _parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mksysimage",
        usage="%(prog)s [options] outfile kernel root:source...",
        epilog=USAGE_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("outfile")
    p.add_argument("kernel")
    p.add_argument("sources", nargs="+", metavar="root:source")
    p.add_argument("--kernel-args", default=None, help="Commandline flags to pass to the kernel")
    p.add_argument("--kernel-initrd", default=None, help="Initrd file to give the kernel on bootup, if any")
    p.add_argument("--disk-size", type=int, default=None, help="Size of the created disk image in MB")
    p.add_argument(
        "--format",
        default=None,
        help=f"Format of the disk image ({', '.join(f.value for f in OutputFormat)})",
    )
    p.add_argument("--vbox-uuid", default=None, help="If outputting to VDI, the UUID of the disk")
    p.add_argument("--print-log", action="store_true", help="Print the stdout/err log of commands that were run")
    p.add_argument("--print-fs", action="store_true", help="Print the FS image tree to stdout on completion")
    p.add_argument("--config", default=None, help="Optional YAML build config")
    p.add_argument("--log", default=None, help="Also write progress to this file")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def request_from_args(args: argparse.Namespace, cfg: BuildConfig) -> BuildRequest:
    sources: list[SourceSpec] = [parse_source(s) for s in args.sources]
    initrd = args.kernel_initrd or cfg.initrd

    return BuildRequest(
        output_path=Path(args.outfile),
        kernel_path=Path(args.kernel),
        initrd_path=Path(initrd) if initrd else None,
        sources=tuple(sources),
        disk_size_mb=args.disk_size if args.disk_size is not None else cfg.disk_size_mb,
        kernel_args=args.kernel_args if args.kernel_args is not None else cfg.kernel_args,
        output_format=args.format or cfg.format,
        format_identifier=args.vbox_uuid or cfg.vbox_uuid,
        print_fs=bool(args.print_fs or cfg.print_fs),
        directory_mode=cfg.directory_mode,
        mbr_path=Path(cfg.mbr_path),
        temp_dir=cfg.temp_dir,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = _parser()
    args = p.parse_args(argv)

    configure_logging(log_path=args.log, level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        cfg = load_build_config(args.config) if args.config else BuildConfig.empty()
    except (OSError, ValueError, RuntimeError) as e:
        p.error(f"cannot load config {args.config}: {e}")

    try:
        request = request_from_args(args, cfg)
    except (MalformedInputError, ValueError) as e:
        p.error(str(e))

    exe_log = ExecutionLog()
    try:
        build(request, log=exe_log)
    except ImageBuildError as e:
        exe_log.dump(sys.stderr)
        print(e, file=sys.stderr)
        return 1

    if args.print_log or cfg.print_log:
        exe_log.dump(sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
