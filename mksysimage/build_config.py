from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .request import DEFAULT_DISK_SIZE_MB, DEFAULT_KERNEL_ARGS, DEFAULT_MBR_PATH, DIRECTORY_MODES


@dataclass(frozen=True)
class BuildConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "BuildConfig":
        return cls(raw={})

    def _section(self, name: str) -> Dict[str, Any]:
        v = self.raw.get(name)
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ValueError(f"{name} must be a mapping, got {type(v).__name__}")
        return v

    def _flag(self, section: str, key: str) -> bool:
        v = self._section(section).get(key)
        if v is None:
            return False
        if not isinstance(v, bool):
            raise ValueError(f"{section}.{key} must be true or false, got {v!r}")
        return v

    @property
    def disk_size_mb(self) -> int:
        v = self._section("image").get("disk_size_mb")
        if v is None:
            return DEFAULT_DISK_SIZE_MB
        if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
            raise ValueError(f"image.disk_size_mb must be a positive integer, got {v!r}")
        return v

    @property
    def format(self) -> str:
        return str(self._section("image").get("format") or "raw")

    @property
    def vbox_uuid(self) -> Optional[str]:
        v = self._section("image").get("vbox_uuid")
        return str(v) if v else None

    @property
    def kernel_args(self) -> str:
        v = self._section("kernel").get("args")
        return DEFAULT_KERNEL_ARGS if v is None else str(v)

    @property
    def initrd(self) -> Optional[str]:
        v = self._section("kernel").get("initrd")
        return str(v) if v else None

    @property
    def mbr_path(self) -> str:
        return str(self._section("bootloader").get("mbr_path") or DEFAULT_MBR_PATH)

    @property
    def temp_dir(self) -> Optional[str]:
        v = self._section("paths").get("temp_dir")
        return str(v) if v else None

    @property
    def directory_mode(self) -> str:
        return str(self._section("sources").get("directory_mode") or "contents")

    @property
    def print_log(self) -> bool:
        return self._flag("diagnostics", "print_log")

    @property
    def print_fs(self) -> bool:
        return self._flag("diagnostics", "print_fs")

    def validate(self) -> None:
        """Read every setting once so type errors surface at load time."""

        for name in (
            "disk_size_mb",
            "format",
            "vbox_uuid",
            "kernel_args",
            "initrd",
            "mbr_path",
            "temp_dir",
            "directory_mode",
            "print_log",
            "print_fs",
        ):
            getattr(self, name)


def load_build_config(path: str) -> BuildConfig:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("build config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the build config") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"{p.name} is not valid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"{p.name} must contain a mapping/object")

    cfg = BuildConfig(raw=raw)
    cfg.validate()
    if cfg.directory_mode not in DIRECTORY_MODES:
        raise ValueError(
            f"sources.directory_mode must be one of {', '.join(DIRECTORY_MODES)}, got {cfg.directory_mode!r}"
        )
    return cfg
