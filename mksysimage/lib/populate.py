from __future__ import annotations

import logging
import os
from pathlib import Path

from ..errors import MalformedInputError
from ..request import DIRECTORY_MODES, SourceSpec
from .command import ExecutionLog, run_cmd

logger = logging.getLogger(__name__)


def resolve_mount_root(mountpoint: Path, mount_root: str) -> Path:
    """Map an absolute path inside the image onto the host mountpoint."""

    if not os.path.isabs(mount_root):
        raise MalformedInputError(f"Given source root isn't absolute: {mount_root}")

    base = mountpoint.resolve()
    candidate = Path(os.path.normpath(os.path.join(str(base), mount_root.lstrip("/"))))
    try:
        candidate.relative_to(base)
    except ValueError as e:
        raise MalformedInputError(f"Source root escapes the image: {mount_root}") from e
    return candidate


def overlay_source(
    mountpoint: Path,
    spec: SourceSpec,
    *,
    directory_mode: str = "contents",
    log: ExecutionLog,
) -> Path:
    """Overlay one source onto the mounted image and return the host target dir.

    Directories are mirrored with rsync in archive mode from inside the
    source directory; anything else is extracted with tar from inside the
    target. Later overlays replace files written by earlier ones.
    """

    if directory_mode not in DIRECTORY_MODES:
        raise ValueError(f"directory_mode must be one of {DIRECTORY_MODES}, got {directory_mode!r}")

    root = resolve_mount_root(mountpoint, spec.mount_root)

    source = Path(spec.source_path).expanduser().absolute()
    if not source.exists():
        raise MalformedInputError(f"Source path does not exist: {spec.source_path}")

    logger.info("Populating %s from %s", spec.mount_root, source)

    if source.is_dir():
        if directory_mode == "nested":
            root = root / source.resolve().name
        root.mkdir(mode=0o755, parents=True, exist_ok=True)
        run_cmd(["rsync", "-Rav", ".", str(root)], cwd=str(source), log=log)
    else:
        root.mkdir(mode=0o755, parents=True, exist_ok=True)
        run_cmd(["tar", "xvf", str(source)], cwd=str(root), log=log)
    return root
