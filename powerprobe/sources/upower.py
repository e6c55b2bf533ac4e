"""UPower attribute source - power supplies via the UPower D-Bus daemon.

UPower device properties are translated into the power_supply attribute
vocabulary (uWh, uW, uV) so batteries are derived the same way as from
sysfs. UPower has no thermal data.
"""

import logging
from typing import Any, Dict, List, Optional

from powerprobe.core.source import POWER_SUPPLY, AttributeSource

log = logging.getLogger(__name__)

# UPower device type constants
_UPOWER_TYPE_LINE_POWER = 1
_UPOWER_TYPE_BATTERY = 2

# UPower state constants
_UPOWER_STATE_CHARGING = 1
_UPOWER_STATE_DISCHARGING = 2
_UPOWER_STATE_FULLY_CHARGED = 4

_STATUS_NAMES = {
    _UPOWER_STATE_CHARGING: "Charging",
    _UPOWER_STATE_DISCHARGING: "Discharging",
    _UPOWER_STATE_FULLY_CHARGED: "Full",
}

_TECHNOLOGY_NAMES = {
    1: "Li-ion",
    2: "Li-poly",
    3: "LiFe",
    4: "Lead acid",
    5: "NiCd",
    6: "NiMH",
}

_IFACE_DEVICE = "org.freedesktop.UPower.Device"
_IFACE_PROPS = "org.freedesktop.DBus.Properties"
_IFACE_UPOWER = "org.freedesktop.UPower"
_UPOWER_PATH = "/org/freedesktop/UPower"
_UPOWER_BUS = "org.freedesktop.UPower"

_MICRO = 1_000_000


def _try_import_dbus():
    """Import dbus lazily so the module is loadable even without dbus-python."""
    try:
        import dbus
        return dbus
    except ImportError:
        return None


def _micro(value: Any) -> str:
    return str(int(round(float(value) * _MICRO)))


def translate_properties(props: Dict[str, Any]) -> Dict[str, str]:
    """Map UPower device properties onto power_supply attributes."""
    dev_type = int(props.get("Type", 0))
    attrs: Dict[str, str] = {}

    if dev_type == _UPOWER_TYPE_LINE_POWER:
        attrs["type"] = "Mains"
        if "Online" in props:
            attrs["online"] = "1" if bool(props["Online"]) else "0"
        return attrs

    if dev_type != _UPOWER_TYPE_BATTERY:
        return attrs

    attrs["type"] = "Battery"
    attrs["status"] = _STATUS_NAMES.get(int(props.get("State", 0)), "Unknown")
    attrs["manufacturer"] = str(props.get("Vendor") or "")
    attrs["model_name"] = str(props.get("Model") or "")
    attrs["technology"] = _TECHNOLOGY_NAMES.get(int(props.get("Technology", 0)), "Unknown")

    # UPower reports 0 for energies it does not know.
    if float(props.get("EnergyFull", 0)) > 0:
        attrs["energy_full"] = _micro(props["EnergyFull"])
        attrs["energy_now"] = _micro(props.get("Energy", 0))
        attrs["power_now"] = _micro(props.get("EnergyRate", 0))
        if float(props.get("Voltage", 0)) > 0:
            attrs["voltage_now"] = _micro(props["Voltage"])

    if "Percentage" in props:
        attrs["capacity"] = str(int(float(props["Percentage"])))
    if int(props.get("TimeToEmpty", 0)) > 0:
        attrs["time_to_empty_now"] = str(int(props["TimeToEmpty"]))
    if int(props.get("TimeToFull", 0)) > 0:
        attrs["time_to_full_now"] = str(int(props["TimeToFull"]))

    return attrs


class UPowerSource(AttributeSource):
    """Attribute source using the UPower D-Bus daemon."""

    def __init__(self):
        self._bus = None
        self._devices: Dict[str, Dict[str, str]] = {}

    @property
    def name(self) -> str:
        return "UPower"

    def _get_bus(self):
        if self._bus is None:
            dbus = _try_import_dbus()
            if dbus is None:
                return None
            try:
                self._bus = dbus.SystemBus()
            except Exception:
                log.debug("Could not connect to system D-Bus")
                return None
        return self._bus

    def _enumerate(self) -> Optional[List[str]]:
        dbus = _try_import_dbus()
        bus = self._get_bus()
        if dbus is None or bus is None:
            return None
        try:
            upower_obj = bus.get_object(_UPOWER_BUS, _UPOWER_PATH)
            upower_iface = dbus.Interface(upower_obj, _IFACE_UPOWER)
            return [str(path) for path in upower_iface.EnumerateDevices()]
        except Exception:
            log.debug("Failed to enumerate UPower devices")
            return None

    def is_supported(self) -> bool:
        return self._enumerate() is not None

    def list_devices(self, device_class: str) -> List[str]:
        if device_class != POWER_SUPPLY:
            return []

        dbus = _try_import_dbus()
        device_paths = self._enumerate()
        if dbus is None or device_paths is None:
            self._devices = {}
            return []

        devices: Dict[str, Dict[str, str]] = {}
        for dev_path in device_paths:
            try:
                dev_obj = self._bus.get_object(_UPOWER_BUS, dev_path)
                props = dbus.Interface(dev_obj, _IFACE_PROPS)
                attrs = translate_properties(props.GetAll(_IFACE_DEVICE))
            except Exception:
                log.debug("Failed to read UPower device %s", dev_path)
                continue
            devices[dev_path.rsplit("/", 1)[-1]] = attrs

        self._devices = devices
        return list(devices)

    def read_attribute(self, device_class: str, device: str,
                       attribute: str) -> Optional[str]:
        if device_class != POWER_SUPPLY:
            return None
        return self._devices.get(device, {}).get(attribute)

    def close(self) -> None:
        self._devices = {}
        self._bus = None
