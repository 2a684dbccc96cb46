from __future__ import annotations

import logging
import os

from ..errors import StageError
from .command import ExecutionLog, run_cmd

logger = logging.getLogger(__name__)

MAPPER_DIR = "/dev/mapper"


def attach_loop(image: str, *, log: ExecutionLog) -> str:
    """Bind image to the first free loop device and return its path."""

    r = run_cmd(["losetup", "--show", "-f", image], log=log)
    device = r.stdout.strip()
    if not device:
        raise StageError(f"losetup did not report a loop device for {image}")
    return device


def detach_loop(device: str, *, log: ExecutionLog) -> None:
    run_cmd(["losetup", "-d", device], log=log)


def partition_node(loop_device: str, number: int = 1) -> str:
    """Device-mapper node kpartx creates for a loop device partition.

    kpartx names mappings after the loop device's basename with a ``p<N>``
    suffix, so /dev/loop3 partition 1 becomes /dev/mapper/loop3p1.
    """

    return f"{MAPPER_DIR}/{os.path.basename(loop_device)}p{number}"


def map_partitions(loop_device: str, *, log: ExecutionLog) -> str:
    run_cmd(["kpartx", "-a", "-v", "-s", loop_device], log=log)
    node = partition_node(loop_device)
    logger.info("Mapped %s partition 1 at %s", loop_device, node)
    return node


def unmap_partitions(loop_device: str, *, log: ExecutionLog) -> None:
    run_cmd(["kpartx", "-d", loop_device], log=log)
