"""Core data types for power-supply and thermal telemetry."""

from dataclasses import dataclass
from enum import Enum, IntFlag, auto
from typing import Iterable, Optional, Tuple, Union


class ChargeState(Enum):
    """What the battery is currently doing."""
    UNKNOWN = auto()
    CHARGING = auto()
    DISCHARGING = auto()
    CHARGED = auto()

    def __str__(self) -> str:
        return _CHARGE_STATE_LABELS[self]


_CHARGE_STATE_LABELS = {
    ChargeState.UNKNOWN: "unknown",
    ChargeState.CHARGING: "charging",
    ChargeState.DISCHARGING: "discharging",
    ChargeState.CHARGED: "charged",
}


class AcState(Enum):
    """Whether an AC adapter is feeding the system."""
    UNKNOWN = auto()
    OFFLINE = auto()
    ONLINE = auto()

    def __str__(self) -> str:
        if self is AcState.OFFLINE:
            return "off-line"
        if self is AcState.ONLINE:
            return "on-line"
        return "not supported"


class DeviceCategory(IntFlag):
    """Independently selectable device categories for acquisition."""
    BATTERY = 1
    AC_ADAPTER = 2
    THERMAL_ZONE = 4
    FAN = 8
    ALL = BATTERY | AC_ADAPTER | THERMAL_ZONE | FAN

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "DeviceCategory":
        """Build a category mask from names like 'battery' or 'thermal_zone'.

        Raises:
            UnknownCategoryError: if a name does not match any category.
        """
        mask = cls(0)
        for name in names:
            key = name.strip().upper().replace("-", "_")
            try:
                mask |= cls[key]
            except KeyError:
                raise UnknownCategoryError(name) from None
        return mask


class UnknownCategoryError(ValueError):
    """Raised when a device category name is not recognized."""

    def __init__(self, name: str):
        super().__init__(f"Unknown device category: {name!r}")
        self.name = name


CategoriesArg = Union[DeviceCategory, int, Iterable[str]]


def as_categories(categories: CategoriesArg) -> DeviceCategory:
    """Normalize a mask, an int or an iterable of names to a DeviceCategory."""
    if isinstance(categories, DeviceCategory):
        return categories
    if isinstance(categories, int):
        return DeviceCategory(categories) & DeviceCategory.ALL
    if isinstance(categories, str):
        return DeviceCategory.from_names([categories])
    return DeviceCategory.from_names(categories)


@dataclass(frozen=True)
class CapacityReadings:
    """Raw battery readings in milli-units, before and after reconciliation.

    Charge-based values are mAh (rate in mA), energy-based values are mWh
    (rate in mW), voltage is mV. None means the reading was not available.
    """
    remaining_capacity: Optional[int] = None
    remaining_energy: Optional[int] = None
    present_rate: Optional[int] = None
    last_capacity: Optional[int] = None
    last_capacity_energy: Optional[int] = None
    voltage: Optional[int] = None

    def has_full_baseline(self) -> bool:
        """Whether a full capacity is known in either unit regime."""
        return self.last_capacity is not None or self.last_capacity_energy is not None


@dataclass(frozen=True)
class Battery:
    """A battery as seen during one acquisition."""
    name: str = ""
    manufacturer: str = ""
    model_name: str = ""
    technology: str = ""
    charge_state: ChargeState = ChargeState.UNKNOWN
    percentage: int = 0
    seconds: Optional[int] = None
    capacity: Optional[CapacityReadings] = None


@dataclass(frozen=True)
class AcAdapter:
    name: str = ""
    state: AcState = AcState.UNKNOWN


@dataclass(frozen=True)
class ThermalZone:
    name: str = ""
    temperature: Optional[float] = None  # degrees Celsius


@dataclass(frozen=True)
class Fan:
    """A cooling device; states are driver-defined integer levels."""
    name: str = ""
    cur_state: Optional[int] = None
    max_state: Optional[int] = None


@dataclass(frozen=True)
class Snapshot:
    """All records held by a telemetry facade at one instant."""
    batteries: Tuple[Battery, ...] = ()
    ac_adapters: Tuple[AcAdapter, ...] = ()
    thermal_zones: Tuple[ThermalZone, ...] = ()
    fans: Tuple[Fan, ...] = ()
