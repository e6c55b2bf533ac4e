"""Telemetry facade - acquisition and read access to the device snapshot."""

import sys
from typing import Optional, TextIO

from powerprobe.core.scanner import scan_power_supply, scan_thermal
from powerprobe.core.source import AttributeSource
from powerprobe.core.store import SnapshotStore
from powerprobe.core.types import (
    AcAdapter, AcState, Battery, CategoriesArg, DeviceCategory, Fan,
    Snapshot, ThermalZone, as_categories,
)

_POWER_SUPPLY_CATEGORIES = DeviceCategory.BATTERY | DeviceCategory.AC_ADAPTER
_THERMAL_CATEGORIES = DeviceCategory.THERMAL_ZONE | DeviceCategory.FAN


def _default_source() -> AttributeSource:
    from powerprobe.sources import default_source
    return default_source()


class PowerTelemetry:
    """Point-in-time view of batteries, AC adapters, thermal zones and fans.

    Acquisition is synchronous and mutates this instance; guard it with a
    lock if several threads share one instance.

    Args:
        source: Raw attribute source; the platform default when omitted.
        acquire: Run a full acquisition right away.
        retain_unselected: Keep records of categories that an acquisition
            did not request instead of clearing them.
    """

    def __init__(self, source: Optional[AttributeSource] = None,
                 acquire: bool = True, retain_unselected: bool = False):
        self._source = source if source is not None else _default_source()
        self._store = SnapshotStore()
        self._retain_unselected = retain_unselected
        if acquire:
            self.acquire()

    @staticmethod
    def has_acpi_support() -> bool:
        """Whether the platform's power reporting facility is reachable."""
        return _default_source().is_supported()

    @property
    def source(self) -> AttributeSource:
        return self._source

    def acquire(self, categories: CategoriesArg = DeviceCategory.ALL) -> None:
        """Rescan the requested device categories.

        Never fails: a missing facility or unreadable devices produce
        empty collections.
        """
        categories = as_categories(categories)
        if not self._retain_unselected:
            self._store.clear(DeviceCategory.ALL & ~categories)

        if not self._source.is_supported():
            self._store.clear(categories)
            return

        if categories & _POWER_SUPPLY_CATEGORIES:
            batteries, adapters = scan_power_supply(self._source, categories)
            if categories & DeviceCategory.BATTERY:
                self._store.replace(DeviceCategory.BATTERY, batteries)
            if categories & DeviceCategory.AC_ADAPTER:
                self._store.replace(DeviceCategory.AC_ADAPTER, adapters)

        if categories & _THERMAL_CATEGORIES:
            zones, fans = scan_thermal(self._source, categories)
            if categories & DeviceCategory.THERMAL_ZONE:
                self._store.replace(DeviceCategory.THERMAL_ZONE, zones)
            if categories & DeviceCategory.FAN:
                self._store.replace(DeviceCategory.FAN, fans)

    # --- Counts ---

    def batteries_available(self) -> int:
        return self._store.count(DeviceCategory.BATTERY)

    def ac_adapters_available(self) -> int:
        return self._store.count(DeviceCategory.AC_ADAPTER)

    def thermal_zones_available(self) -> int:
        return self._store.count(DeviceCategory.THERMAL_ZONE)

    def fans_available(self) -> int:
        return self._store.count(DeviceCategory.FAN)

    # --- Indexed access (default record when out of range) ---

    def battery_at(self, index: int) -> Battery:
        return self._store.at(DeviceCategory.BATTERY, index)

    def ac_adapter_at(self, index: int) -> AcAdapter:
        return self._store.at(DeviceCategory.AC_ADAPTER, index)

    def thermal_zone_at(self, index: int) -> ThermalZone:
        return self._store.at(DeviceCategory.THERMAL_ZONE, index)

    def fan_at(self, index: int) -> Fan:
        return self._store.at(DeviceCategory.FAN, index)

    def ac_state(self) -> AcState:
        """Overall AC state: online if any adapter is online."""
        states = {adapter.state for adapter in self._store.records(DeviceCategory.AC_ADAPTER)}
        if AcState.ONLINE in states:
            return AcState.ONLINE
        if AcState.OFFLINE in states:
            return AcState.OFFLINE
        return AcState.UNKNOWN

    def snapshot(self) -> Snapshot:
        return self._store.snapshot()

    def dump(self, sink: Optional[TextIO] = None, extended: bool = False) -> None:
        """Write a human-readable report of the current snapshot."""
        from powerprobe.report import write_report
        write_report(self.snapshot(), sink if sink is not None else sys.stdout, extended)

    def close(self) -> None:
        self._source.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
