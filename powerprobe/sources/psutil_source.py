"""psutil attribute source - one OS call per scan, for Windows, macOS and BSD.

psutil.sensors_battery() reports a single system battery with a ready-made
percentage and time estimate, so batteries from this source carry no raw
capacity readings. Thermal zones come from psutil.sensors_temperatures()
where the platform provides it.
"""

import logging
from typing import Dict, List, Optional

import psutil

from powerprobe.core.source import POWER_SUPPLY, THERMAL, AttributeSource

log = logging.getLogger(__name__)

BATTERY_NAME = "BAT0"
AC_ADAPTER_NAME = "AC"


def battery_attributes(battery) -> Dict[str, Dict[str, str]]:
    """Translate a psutil sbattery tuple into power_supply devices."""
    plugged = battery.power_plugged
    percent = int(battery.percent)

    if plugged is None:
        status = "Unknown"
    elif not plugged:
        status = "Discharging"
    elif percent >= 100:
        status = "Full"
    else:
        status = "Charging"

    bat = {
        "type": "Battery",
        "status": status,
        "capacity": str(percent),
    }
    # POWER_TIME_UNKNOWN and POWER_TIME_UNLIMITED are negative.
    if not plugged and isinstance(battery.secsleft, int) and battery.secsleft >= 0:
        bat["time_to_empty_now"] = str(battery.secsleft)

    devices = {BATTERY_NAME: bat}
    if plugged is not None:
        devices[AC_ADAPTER_NAME] = {"type": "Mains", "online": "1" if plugged else "0"}
    return devices


def temperature_attributes(sensors) -> Dict[str, Dict[str, str]]:
    """Translate psutil.sensors_temperatures() output into thermal devices.

    Sensors of one driver share a chip key and often a label (two NVMe
    drives are both 'Composite'), so repeated names get the entry index.
    """
    devices = {}
    for chip, entries in sorted(sensors.items()):
        for index, entry in enumerate(entries):
            name = f"{chip}_{entry.label or index}".replace(" ", "_")
            if name in devices:
                name = f"{name}_{index}"
            suffix = 1
            base = name
            while name in devices:
                name = f"{base}_{suffix}"
                suffix += 1
            devices[name] = {"temp": str(int(round(entry.current * 1000)))}
    return devices


class PsutilSource(AttributeSource):
    """Attribute source built on psutil's cross-platform sensors API."""

    def __init__(self):
        self._devices: Dict[str, Dict[str, Dict[str, str]]] = {}

    @property
    def name(self) -> str:
        return "psutil"

    def is_supported(self) -> bool:
        return hasattr(psutil, "sensors_battery")

    def list_devices(self, device_class: str) -> List[str]:
        if device_class == POWER_SUPPLY:
            devices = self._read_power_supply()
        elif device_class == THERMAL:
            devices = self._read_thermal()
        else:
            devices = {}
        self._devices[device_class] = devices
        return list(devices)

    def read_attribute(self, device_class: str, device: str,
                       attribute: str) -> Optional[str]:
        return self._devices.get(device_class, {}).get(device, {}).get(attribute)

    @staticmethod
    def _read_power_supply() -> Dict[str, Dict[str, str]]:
        try:
            battery = psutil.sensors_battery()
        except Exception:
            log.debug("psutil.sensors_battery() failed")
            return {}
        if battery is None:
            return {}
        return battery_attributes(battery)

    @staticmethod
    def _read_thermal() -> Dict[str, Dict[str, str]]:
        if not hasattr(psutil, "sensors_temperatures"):
            return {}
        try:
            sensors = psutil.sensors_temperatures()
        except Exception:
            log.debug("psutil.sensors_temperatures() failed")
            return {}
        return temperature_attributes(sensors)
