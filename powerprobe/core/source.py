"""Abstract base class for raw attribute sources."""

from abc import ABC, abstractmethod
from typing import List, Optional

# Device classes understood by every source. Names follow the Linux
# /sys/class layout; other backends translate into the same vocabulary.
POWER_SUPPLY = "power_supply"
THERMAL = "thermal"


class AttributeSource(ABC):
    """A platform facility that exposes devices as named text attributes.

    Implementations:
    - SysfsSource: /sys/class/power_supply and /sys/class/thermal
    - UdevSource: the same subsystems through the udev database
    - UPowerSource: D-Bus UPower daemon
    - PsutilSource: a single psutil call (Windows, macOS, BSD)
    - NullSource: platforms without any power reporting facility

    None of the methods may raise. A facility that is missing or fails
    yields empty device lists and absent attributes.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name (e.g., 'sysfs')."""
        ...

    @abstractmethod
    def is_supported(self) -> bool:
        """Whether the facility is reachable at all."""
        ...

    @abstractmethod
    def list_devices(self, device_class: str) -> List[str]:
        """Return identifiers of the devices under a device class.

        Called once per device class for every acquisition, so sources
        that fetch all data in one call may refresh their cache here.
        """
        ...

    @abstractmethod
    def read_attribute(self, device_class: str, device: str,
                       attribute: str) -> Optional[str]:
        """Read a single attribute as text, or None if it is not present.

        Surrounding whitespace (the trailing newline of sysfs files) is
        already stripped.
        """
        ...

    def close(self) -> None:
        """Clean up resources."""
        pass
