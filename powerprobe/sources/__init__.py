"""Attribute source implementations and platform selection."""

import sys
from pathlib import Path
from typing import Optional, Union

from powerprobe.core.source import AttributeSource
from powerprobe.sources.null import NullSource
from powerprobe.sources.psutil_source import PsutilSource
from powerprobe.sources.sysfs import SYSFS_CLASS_DIR, SysfsSource
from powerprobe.sources.udev import UdevSource
from powerprobe.sources.upower import UPowerSource

SOURCE_NAMES = ("auto", "sysfs", "udev", "upower", "psutil", "none")


class UnknownSourceError(ValueError):
    """Raised when a source name is not one of SOURCE_NAMES."""

    def __init__(self, name: str):
        super().__init__(
            f"Unknown source {name!r}; expected one of: {', '.join(SOURCE_NAMES)}"
        )
        self.name = name


def default_source(platform: Optional[str] = None,
                   sysfs_root: Union[str, Path] = SYSFS_CLASS_DIR) -> AttributeSource:
    """Pick the attribute source for a platform (sys.platform by default)."""
    platform = platform or sys.platform
    if platform.startswith("linux"):
        return SysfsSource(sysfs_root)
    if platform in ("win32", "cygwin", "darwin") or "bsd" in platform:
        return PsutilSource()
    return NullSource()


def create_source(name: str = "auto",
                  sysfs_root: Union[str, Path] = SYSFS_CLASS_DIR) -> AttributeSource:
    """Build an attribute source by name.

    Raises:
        UnknownSourceError: if name is not one of SOURCE_NAMES.
    """
    key = (name or "auto").strip().lower()
    if key == "auto":
        return default_source(sysfs_root=sysfs_root)
    if key == "sysfs":
        return SysfsSource(sysfs_root)
    if key == "udev":
        return UdevSource()
    if key == "upower":
        return UPowerSource()
    if key == "psutil":
        return PsutilSource()
    if key == "none":
        return NullSource()
    raise UnknownSourceError(name)


__all__ = [
    "SOURCE_NAMES",
    "UnknownSourceError",
    "default_source",
    "create_source",
    "NullSource",
    "PsutilSource",
    "SysfsSource",
    "UdevSource",
    "UPowerSource",
]
