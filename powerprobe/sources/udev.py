"""udev attribute source - power_supply and thermal devices via pyudev."""

import logging
from typing import Dict, List, Optional

from powerprobe.core.source import AttributeSource

log = logging.getLogger(__name__)


def _try_import_pyudev():
    """Import pyudev lazily so the module is loadable without it."""
    try:
        import pyudev
        return pyudev
    except ImportError:
        return None


class UdevSource(AttributeSource):
    """Attribute source enumerating subsystems through the udev database."""

    def __init__(self):
        self._context = None
        # device_class -> sys_name -> pyudev.Device, refreshed on every listing
        self._devices: Dict[str, Dict[str, object]] = {}

    @property
    def name(self) -> str:
        return "udev"

    def _get_context(self):
        if self._context is None:
            pyudev = _try_import_pyudev()
            if pyudev is None:
                return None
            try:
                self._context = pyudev.Context()
            except Exception:
                log.debug("Could not create udev context")
                return None
        return self._context

    def is_supported(self) -> bool:
        return self._get_context() is not None

    def list_devices(self, device_class: str) -> List[str]:
        context = self._get_context()
        if context is None:
            return []

        try:
            found = {device.sys_name: device
                     for device in context.list_devices(subsystem=device_class)}
        except Exception:
            log.debug("Failed to enumerate udev subsystem %s", device_class)
            found = {}

        self._devices[device_class] = found
        return sorted(found)

    def read_attribute(self, device_class: str, device: str,
                       attribute: str) -> Optional[str]:
        udev_device = self._devices.get(device_class, {}).get(device)
        if udev_device is None:
            return None
        try:
            return udev_device.attributes.asstring(attribute).strip()
        except (KeyError, OSError, UnicodeDecodeError):
            return None

    def close(self) -> None:
        self._devices.clear()
        self._context = None
