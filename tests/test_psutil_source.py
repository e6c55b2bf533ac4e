from collections import namedtuple

import psutil
import pytest

from powerprobe.core.telemetry import PowerTelemetry
from powerprobe.core.types import AcState, ChargeState
from powerprobe.sources import psutil_source
from powerprobe.sources.psutil_source import PsutilSource, battery_attributes

sbattery = namedtuple("sbattery", ["percent", "secsleft", "power_plugged"])
shwtemp = namedtuple("shwtemp", ["label", "current", "high", "critical"])


@pytest.fixture
def fake_sensors(monkeypatch):
    state = {"battery": sbattery(62.4, 4500, False), "temps": {
        "coretemp": [shwtemp("Package id 0", 48.0, 80.0, 100.0), shwtemp("", 46.5, None, None)],
    }}
    monkeypatch.setattr(psutil, "sensors_battery", lambda: state["battery"], raising=False)
    monkeypatch.setattr(psutil, "sensors_temperatures", lambda: state["temps"], raising=False)
    return state


def test_discharging_battery(fake_sensors):
    telemetry = PowerTelemetry(PsutilSource())

    bat = telemetry.battery_at(0)
    assert bat.name == "BAT0"
    assert bat.charge_state is ChargeState.DISCHARGING
    assert bat.percentage == 62
    assert bat.seconds == 4500
    assert telemetry.ac_adapter_at(0).state is AcState.OFFLINE


def test_plugged_in_battery(fake_sensors):
    fake_sensors["battery"] = sbattery(80.0, psutil_source.psutil.POWER_TIME_UNLIMITED, True)
    telemetry = PowerTelemetry(PsutilSource())

    bat = telemetry.battery_at(0)
    assert bat.charge_state is ChargeState.CHARGING
    assert bat.seconds is None
    assert telemetry.ac_state() is AcState.ONLINE


def test_full_battery():
    attrs = battery_attributes(sbattery(100.0, -2, True))
    assert attrs["BAT0"]["status"] == "Full"


def test_unknown_plug_state_has_no_adapter():
    attrs = battery_attributes(sbattery(40.0, -1, None))
    assert attrs["BAT0"]["status"] == "Unknown"
    assert "AC" not in attrs


def test_no_battery(fake_sensors):
    fake_sensors["battery"] = None
    telemetry = PowerTelemetry(PsutilSource())

    assert telemetry.batteries_available() == 0
    assert telemetry.ac_adapters_available() == 0


def test_thermal_zones_from_temperatures(fake_sensors):
    telemetry = PowerTelemetry(PsutilSource())

    assert telemetry.thermal_zones_available() == 2
    assert telemetry.thermal_zone_at(0).name == "coretemp_Package_id_0"
    assert telemetry.thermal_zone_at(0).temperature == 48.0
    assert telemetry.thermal_zone_at(1).name == "coretemp_1"
    assert telemetry.fans_available() == 0


def test_sensor_failure_degrades_to_empty(monkeypatch):
    def boom():
        raise OSError("no sensors")

    monkeypatch.setattr(psutil, "sensors_battery", boom, raising=False)
    monkeypatch.setattr(psutil, "sensors_temperatures", boom, raising=False)
    telemetry = PowerTelemetry(PsutilSource())

    assert telemetry.batteries_available() == 0
    assert telemetry.thermal_zones_available() == 0


def test_sensors_with_repeated_labels_keep_every_zone(fake_sensors):
    fake_sensors["temps"] = {"nvme": [shwtemp("Composite", 40.0, None, None),
                                      shwtemp("Composite", 55.0, None, None)]}
    telemetry = PowerTelemetry(PsutilSource())

    assert telemetry.thermal_zones_available() == 2
    assert [z.name for z in telemetry.snapshot().thermal_zones] == [
        "nvme_Composite", "nvme_Composite_1",
    ]
    assert [z.temperature for z in telemetry.snapshot().thermal_zones] == [40.0, 55.0]
