"""Core abstractions for power-supply and thermal telemetry."""

from powerprobe.core.types import (
    AcAdapter,
    AcState,
    Battery,
    CapacityReadings,
    ChargeState,
    DeviceCategory,
    Fan,
    Snapshot,
    ThermalZone,
    UnknownCategoryError,
)
from powerprobe.core.source import AttributeSource
from powerprobe.core.telemetry import PowerTelemetry

__all__ = [
    "AcAdapter",
    "AcState",
    "Battery",
    "CapacityReadings",
    "ChargeState",
    "DeviceCategory",
    "Fan",
    "Snapshot",
    "ThermalZone",
    "UnknownCategoryError",
    "AttributeSource",
    "PowerTelemetry",
]
