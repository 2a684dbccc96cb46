from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from .errors import MalformedInputError, PreflightError

DEFAULT_DISK_SIZE_MB = 128
DEFAULT_KERNEL_ARGS = "root=/dev/sda1 ro"
DEFAULT_MBR_PATH = "/usr/lib/extlinux/mbr.bin"

# contents: the source directory's children land directly in mount_root.
# nested: the source directory itself is recreated under mount_root.
DIRECTORY_MODES = ("contents", "nested")


class OutputFormat(str, Enum):
    RAW = "raw"
    VDI = "vdi"
    VMDK = "vmdk"
    VHD = "vhd"

    @classmethod
    def parse(cls, name: str) -> "OutputFormat":
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise PreflightError(f"Unknown format {name}") from None

    @property
    def needs_converter(self) -> bool:
        return self is not OutputFormat.RAW

    @property
    def converter_format(self) -> str:
        return self.value.upper()


@dataclass(frozen=True)
class SourceSpec:
    mount_root: str
    source_path: str

    def __str__(self) -> str:
        return f"{self.mount_root}:{self.source_path}"


def parse_source(arg: str) -> SourceSpec:
    """Parse a ``root:source`` argument; the root is everything before the first colon."""

    root, sep, source = arg.partition(":")
    if not sep:
        raise MalformedInputError(f"Malformed source {arg}")
    return SourceSpec(mount_root=root, source_path=source)


@dataclass(frozen=True)
class BuildRequest:
    output_path: Path
    kernel_path: Path
    sources: Tuple[SourceSpec, ...]
    initrd_path: Optional[Path] = None
    disk_size_mb: int = DEFAULT_DISK_SIZE_MB
    kernel_args: str = DEFAULT_KERNEL_ARGS
    output_format: str = OutputFormat.RAW.value
    format_identifier: Optional[str] = None
    print_fs: bool = False
    directory_mode: str = "contents"
    mbr_path: Path = Path(DEFAULT_MBR_PATH)
    temp_dir: Optional[str] = None

    @property
    def temp_image_path(self) -> Path:
        return Path(f"{self.output_path}.tmp")


@dataclass
class PipelineState:
    """Host resources held by a running build.

    Each field is written once, by the step that acquires the resource.
    """

    image_path: Optional[Path] = None
    loop_device: Optional[str] = None
    partition_device: Optional[str] = None
    mountpoint: Optional[Path] = None

    def record(self, name: str, value) -> None:
        if name not in {f.name for f in fields(self)}:
            raise AttributeError(name)
        if getattr(self, name) is not None:
            raise RuntimeError(f"Pipeline state {name} already set to {getattr(self, name)}")
        setattr(self, name, value)
