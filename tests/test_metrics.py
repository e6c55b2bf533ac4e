import pytest

from powerprobe.core.metrics import (
    compute_percentage, compute_seconds, derive, parse_charge_state,
    read_capacity, reconcile,
)
from powerprobe.core.types import CapacityReadings, ChargeState


def reader(**attrs):
    return lambda name: attrs.get(name)


@pytest.mark.parametrize("status, expected", [
    ("Discharging", ChargeState.DISCHARGING),
    ("Charging", ChargeState.CHARGING),
    ("Full", ChargeState.CHARGED),
    ("FULL", ChargeState.CHARGED),
    ("Not charging", ChargeState.UNKNOWN),
    ("", ChargeState.UNKNOWN),
    (None, ChargeState.UNKNOWN),
])
def test_parse_charge_state(status, expected):
    assert parse_charge_state(status) is expected


def test_read_capacity_prefers_current_over_power():
    readings = read_capacity(reader(current_now="1500000", power_now="9000000"))
    assert readings.present_rate == 1500


def test_read_capacity_falls_back_to_power():
    readings = read_capacity(reader(power_now="9000000"))
    assert readings.present_rate == 9000


def test_zero_voltage_is_unknown():
    assert read_capacity(reader(voltage_now="0")).voltage is None
    assert read_capacity(reader(voltage_now="500")).voltage is None


def test_charge_based_percentage():
    metrics = derive(reader(charge_now="50000", charge_full="200000"), ChargeState.UNKNOWN)
    assert metrics.percentage == 25
    assert metrics.seconds is None


def test_energy_based_with_voltage_matches_charge_based():
    metrics = derive(
        reader(energy_now="100000", energy_full="400000", voltage_now="2000000"),
        ChargeState.UNKNOWN,
    )
    assert metrics.readings.last_capacity == 200
    assert metrics.readings.remaining_capacity == 50
    assert metrics.percentage == 25


def test_energy_without_voltage_is_used_as_proxy():
    readings = reconcile(CapacityReadings(remaining_energy=30, last_capacity_energy=60))
    assert readings.last_capacity == 60
    assert readings.remaining_capacity == 30
    assert compute_percentage(readings) == 50


def test_present_rate_rescaled_with_remaining_energy():
    readings = reconcile(CapacityReadings(
        remaining_energy=40000, last_capacity_energy=80000,
        present_rate=16000, voltage=16000,
    ))
    assert readings.remaining_capacity == 2500
    assert readings.last_capacity == 5000
    assert readings.present_rate == 1000


def test_charge_readings_are_not_overridden_by_energy():
    readings = reconcile(CapacityReadings(
        remaining_capacity=10, remaining_energy=999,
        last_capacity=20, last_capacity_energy=999, present_rate=5, voltage=1000,
    ))
    assert (readings.remaining_capacity, readings.last_capacity, readings.present_rate) == (10, 20, 5)


@pytest.mark.parametrize("full", [None, 0, -1])
def test_percentage_is_zero_without_usable_full_capacity(full):
    assert compute_percentage(CapacityReadings(remaining_capacity=500, last_capacity=full)) == 0


def test_percentage_is_clamped():
    assert compute_percentage(CapacityReadings(remaining_capacity=300, last_capacity=200)) == 100
    assert compute_percentage(CapacityReadings(remaining_capacity=-50, last_capacity=200)) == 0


def test_discharging_seconds():
    readings = CapacityReadings(remaining_capacity=50, last_capacity=200, present_rate=100)
    assert compute_seconds(readings, ChargeState.DISCHARGING) == 1800


def test_charging_seconds():
    readings = CapacityReadings(remaining_capacity=150, last_capacity=200, present_rate=50)
    assert compute_seconds(readings, ChargeState.CHARGING) == 3600


@pytest.mark.parametrize("state", [ChargeState.CHARGING, ChargeState.DISCHARGING])
@pytest.mark.parametrize("rate", [None, 0, -100])
def test_seconds_unavailable_without_rate(state, rate):
    readings = CapacityReadings(remaining_capacity=150, last_capacity=200, present_rate=rate)
    assert compute_seconds(readings, state) is None


@pytest.mark.parametrize("state", [ChargeState.CHARGED, ChargeState.UNKNOWN])
def test_seconds_unavailable_when_idle(state):
    readings = CapacityReadings(remaining_capacity=150, last_capacity=200, present_rate=50)
    assert compute_seconds(readings, state) is None


def test_raw_regime_ignores_reported_values():
    metrics = derive(
        reader(charge_now="50000", charge_full="200000", capacity="90",
               time_to_empty_now="600"),
        ChargeState.DISCHARGING,
    )
    assert metrics.percentage == 25
    assert metrics.seconds is None


def test_reported_only_regime():
    metrics = derive(reader(capacity="87", time_to_empty_now="5400"), ChargeState.DISCHARGING)
    assert metrics.percentage == 87
    assert metrics.seconds == 5400
    assert not metrics.readings.has_full_baseline()


def test_reported_only_regime_charging_uses_time_to_full():
    metrics = derive(reader(capacity="120", time_to_empty_now="5400", time_to_full_now="900"),
                     ChargeState.CHARGING)
    assert metrics.percentage == 100
    assert metrics.seconds == 900


def test_no_readings_at_all():
    metrics = derive(reader(), ChargeState.DISCHARGING)
    assert metrics.percentage == 0
    assert metrics.seconds is None


def test_voltage_without_full_capacity_uses_reported_percentage():
    metrics = derive(reader(capacity="64", voltage_now="3900000"), ChargeState.DISCHARGING)

    assert metrics.percentage == 64
    assert metrics.seconds is None
    assert metrics.readings.voltage == 3900


def test_full_capacity_below_threshold_ignores_reported_percentage():
    metrics = derive(reader(charge_now="50000", charge_full="0", capacity="80"),
                     ChargeState.DISCHARGING)

    assert metrics.percentage == 0


def test_charging_past_full_clamps_seconds_to_zero():
    readings = CapacityReadings(remaining_capacity=250, last_capacity=200, present_rate=50)

    assert compute_seconds(readings, ChargeState.CHARGING) == 0
