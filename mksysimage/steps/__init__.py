from .step_10_preflight import PreflightStep
from .step_20_allocate_image import AllocateImageStep
from .step_25_partition import PartitionStep
from .step_30_attach_loop import AttachLoopStep
from .step_35_write_mbr import WriteMbrStep
from .step_40_map_partitions import MapPartitionsStep
from .step_45_format import FormatStep
from .step_50_mount import MountStep
from .step_60_install_bootloader import InstallBootloaderStep
from .step_70_populate import PopulateStep
from .step_80_inspect import InspectStep
from .step_90_finalize import FinalizeStep

__all__ = [
    "PreflightStep",
    "AllocateImageStep",
    "PartitionStep",
    "AttachLoopStep",
    "WriteMbrStep",
    "MapPartitionsStep",
    "FormatStep",
    "MountStep",
    "InstallBootloaderStep",
    "PopulateStep",
    "InspectStep",
    "FinalizeStep",
]
