"""In-memory snapshot of the records produced by the last acquisitions."""

from typing import Dict, Sequence, Tuple, Type

from powerprobe.core.types import (
    AcAdapter, Battery, DeviceCategory, Fan, Snapshot, ThermalZone,
)

_RECORD_TYPES: Dict[DeviceCategory, Type] = {
    DeviceCategory.BATTERY: Battery,
    DeviceCategory.AC_ADAPTER: AcAdapter,
    DeviceCategory.THERMAL_ZONE: ThermalZone,
    DeviceCategory.FAN: Fan,
}

SINGLE_CATEGORIES = tuple(_RECORD_TYPES)


class SnapshotStore:
    """One immutable tuple of records per device category.

    A category is replaced as a whole, so readers never see a collection
    that is only partially rebuilt.
    """

    def __init__(self):
        self._records: Dict[DeviceCategory, Tuple] = {
            category: () for category in SINGLE_CATEGORIES
        }

    def replace(self, category: DeviceCategory, records: Sequence) -> None:
        if category not in self._records:
            raise ValueError(f"Not a single device category: {category!r}")
        self._records[category] = tuple(records)

    def clear(self, categories: DeviceCategory) -> None:
        for category in SINGLE_CATEGORIES:
            if categories & category:
                self._records[category] = ()

    def records(self, category: DeviceCategory) -> Tuple:
        return self._records[category]

    def count(self, category: DeviceCategory) -> int:
        return len(self._records[category])

    def at(self, category: DeviceCategory, index: int):
        """Record at index, or a default record when index is out of range."""
        records = self._records[category]
        if 0 <= index < len(records):
            return records[index]
        return _RECORD_TYPES[category]()

    def snapshot(self) -> Snapshot:
        return Snapshot(
            batteries=self._records[DeviceCategory.BATTERY],
            ac_adapters=self._records[DeviceCategory.AC_ADAPTER],
            thermal_zones=self._records[DeviceCategory.THERMAL_ZONE],
            fans=self._records[DeviceCategory.FAN],
        )
