"""sysfs attribute source - reads /sys/class/power_supply/ and /sys/class/thermal/.

Default source on Linux.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from powerprobe.core.source import AttributeSource

log = logging.getLogger(__name__)

SYSFS_CLASS_DIR = Path("/sys/class")


def _read_sysfs(path: Path) -> Optional[str]:
    """Read a sysfs attribute file, returning stripped content or None."""
    try:
        return path.read_text().strip()
    except (OSError, UnicodeDecodeError):
        return None


class SysfsSource(AttributeSource):
    """Attribute source reading device directories under /sys/class/<class>/."""

    def __init__(self, root: Union[str, Path] = SYSFS_CLASS_DIR):
        self._root = Path(root)

    @property
    def name(self) -> str:
        return "sysfs"

    @property
    def root(self) -> Path:
        return self._root

    def is_supported(self) -> bool:
        return self._root.is_dir()

    def list_devices(self, device_class: str) -> List[str]:
        class_dir = self._root / device_class
        try:
            entries = sorted(class_dir.iterdir())
        except OSError:
            log.debug("Cannot list %s", class_dir)
            return []
        # Entries are usually symlinks into /sys/devices; is_dir() follows them.
        return [entry.name for entry in entries if entry.is_dir()]

    def read_attribute(self, device_class: str, device: str,
                       attribute: str) -> Optional[str]:
        return _read_sysfs(self._root / device_class / device / attribute)
