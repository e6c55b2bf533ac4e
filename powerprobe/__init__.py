"""powerprobe - battery, AC adapter, thermal zone and fan telemetry."""

from powerprobe.core import (
    AcAdapter,
    AcState,
    AttributeSource,
    Battery,
    CapacityReadings,
    ChargeState,
    DeviceCategory,
    Fan,
    PowerTelemetry,
    Snapshot,
    ThermalZone,
    UnknownCategoryError,
)

__version__ = "0.1.0"

__all__ = [
    "AcAdapter",
    "AcState",
    "AttributeSource",
    "Battery",
    "CapacityReadings",
    "ChargeState",
    "DeviceCategory",
    "Fan",
    "PowerTelemetry",
    "Snapshot",
    "ThermalZone",
    "UnknownCategoryError",
]
