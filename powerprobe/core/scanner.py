"""Single-pass scan of the power_supply and thermal device classes.

Each device is classified from its own attributes and turned into a
record. Devices that cannot be classified are skipped; attributes that
are missing or malformed leave the corresponding field unknown.
"""

import logging
from typing import List, Optional, Tuple

from powerprobe.core.metrics import derive, parse_charge_state
from powerprobe.core.source import POWER_SUPPLY, THERMAL, AttributeSource
from powerprobe.core.types import (
    AcAdapter, AcState, Battery, DeviceCategory, Fan, ThermalZone,
)
from powerprobe.core.units import parse_int, parse_temperature

log = logging.getLogger(__name__)


class _DeviceAttributes:
    """Attribute reader bound to one device of a source."""

    def __init__(self, source: AttributeSource, device_class: str, device: str):
        self._source = source
        self._device_class = device_class
        self.device = device

    def __call__(self, attribute: str) -> Optional[str]:
        try:
            value = self._source.read_attribute(self._device_class, self.device, attribute)
        except Exception:
            log.debug("Reading %s/%s/%s via %s failed", self._device_class,
                      self.device, attribute, self._source.name, exc_info=True)
            return None
        if value is None:
            return None
        return value.strip()

    def text(self, attribute: str) -> str:
        return self(attribute) or ""


def _list_devices(source: AttributeSource, device_class: str) -> List[str]:
    try:
        return list(source.list_devices(device_class))
    except Exception:
        log.debug("Listing %s via %s failed", device_class, source.name, exc_info=True)
        return []


def read_battery(read: _DeviceAttributes) -> Battery:
    state = parse_charge_state(read("status"))
    metrics = derive(read, state)
    return Battery(
        name=read.device,
        manufacturer=read.text("manufacturer"),
        model_name=read.text("model_name"),
        technology=read.text("technology"),
        charge_state=state,
        percentage=metrics.percentage,
        seconds=metrics.seconds,
        capacity=metrics.readings,
    )


def read_ac_adapter(read: _DeviceAttributes) -> AcAdapter:
    online = parse_int(read("online"))
    if online is None:
        state = AcState.UNKNOWN
    elif online == 0:
        state = AcState.OFFLINE
    else:
        state = AcState.ONLINE
    return AcAdapter(name=read.device, state=state)


def read_thermal_zone(read: _DeviceAttributes) -> ThermalZone:
    return ThermalZone(name=read.device, temperature=parse_temperature(read("temp")))


def read_fan(read: _DeviceAttributes) -> Fan:
    return Fan(
        name=read.device,
        cur_state=parse_int(read("cur_state")),
        max_state=parse_int(read("max_state")),
    )


def scan_power_supply(
    source: AttributeSource, categories: DeviceCategory,
) -> Tuple[List[Battery], List[AcAdapter]]:
    """Scan power supplies, keeping batteries and mains adapters as requested."""
    batteries: List[Battery] = []
    adapters: List[AcAdapter] = []

    for device in _list_devices(source, POWER_SUPPLY):
        read = _DeviceAttributes(source, POWER_SUPPLY, device)
        ps_type = (read("type") or "").lower()

        if ps_type.startswith("battery"):
            if categories & DeviceCategory.BATTERY:
                batteries.append(read_battery(read))
        elif ps_type.startswith("mains"):
            if categories & DeviceCategory.AC_ADAPTER:
                adapters.append(read_ac_adapter(read))

    return batteries, adapters


def scan_thermal(
    source: AttributeSource, categories: DeviceCategory,
) -> Tuple[List[ThermalZone], List[Fan]]:
    """Scan thermal devices: entries with a temperature are zones, the rest fans."""
    zones: List[ThermalZone] = []
    fans: List[Fan] = []

    for device in _list_devices(source, THERMAL):
        read = _DeviceAttributes(source, THERMAL, device)

        if read("temp"):
            if categories & DeviceCategory.THERMAL_ZONE:
                zones.append(read_thermal_zone(read))
        elif categories & DeviceCategory.FAN:
            fans.append(read_fan(read))

    return zones, fans
