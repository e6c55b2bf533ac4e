"""Battery percentage and time estimates from heterogeneous raw readings.

Drivers report capacity either charge-based (charge_* in uAh, current_now
in uA) or energy-based (energy_* in uWh, power_now in uW), and sometimes
only half of either set. Voltage is the only bridge between the two: when
it is missing the energy values are used directly as a proxy.
"""

from dataclasses import dataclass, replace
from typing import Callable, Optional

from powerprobe.core.types import CapacityReadings, ChargeState
from powerprobe.core.units import parse_int, parse_milli, truncating_div

MIN_CAPACITY = 0.01
MIN_PRESENT_RATE = 0.01

SECONDS_PER_HOUR = 3600

AttributeReader = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class BatteryMetrics:
    percentage: int
    seconds: Optional[int]
    readings: CapacityReadings


def parse_charge_state(status: Optional[str]) -> ChargeState:
    """Classify a power_supply 'status' value by its prefix."""
    status = (status or "").lower()
    if status.startswith("disch"):
        return ChargeState.DISCHARGING
    if status.startswith("full"):
        return ChargeState.CHARGED
    if status.startswith("chargi"):
        return ChargeState.CHARGING
    return ChargeState.UNKNOWN


def read_capacity(read: AttributeReader) -> CapacityReadings:
    """Collect the six raw readings of a battery, in milli-units."""
    present_rate = parse_milli(read("current_now"))
    if present_rate is None:
        present_rate = parse_milli(read("power_now"))

    # Zero volts is a driver placeholder, not a measurement.
    voltage = parse_milli(read("voltage_now")) or None

    return CapacityReadings(
        remaining_capacity=parse_milli(read("charge_now")),
        remaining_energy=parse_milli(read("energy_now")),
        present_rate=present_rate,
        last_capacity=parse_milli(read("charge_full")),
        last_capacity_energy=parse_milli(read("energy_full")),
        voltage=voltage,
    )


def reconcile(readings: CapacityReadings) -> CapacityReadings:
    """Express energy-only readings in charge units.

    The present rate is rescaled together with the remaining capacity so
    both stay in the same unit regime.
    """
    voltage = readings.voltage

    if readings.last_capacity is None and readings.last_capacity_energy is not None:
        if voltage is not None:
            last_capacity = truncating_div(readings.last_capacity_energy * 1000, voltage)
        else:
            last_capacity = readings.last_capacity_energy
        readings = replace(readings, last_capacity=last_capacity)

    if readings.remaining_capacity is None and readings.remaining_energy is not None:
        if voltage is not None:
            present_rate = readings.present_rate
            if present_rate is not None:
                present_rate = truncating_div(present_rate * 1000, voltage)
            readings = replace(
                readings,
                remaining_capacity=truncating_div(readings.remaining_energy * 1000, voltage),
                present_rate=present_rate,
            )
        else:
            readings = replace(readings, remaining_capacity=readings.remaining_energy)

    return readings


def compute_percentage(readings: CapacityReadings) -> int:
    """Charge level in [0, 100]; 0 when there is no usable full capacity."""
    full = readings.last_capacity
    if full is None or full < MIN_CAPACITY:
        return 0
    remaining = readings.remaining_capacity
    if remaining is None:
        return 0
    return _clamp_percentage(truncating_div(remaining * 100, full))


def compute_seconds(readings: CapacityReadings, state: ChargeState) -> Optional[int]:
    """Seconds until empty (discharging) or full (charging), else None."""
    rate = readings.present_rate
    if rate is None or rate <= MIN_PRESENT_RATE:
        return None

    remaining = readings.remaining_capacity
    if remaining is None:
        return None

    if state is ChargeState.CHARGING:
        if readings.last_capacity is None:
            return None
        seconds = truncating_div(SECONDS_PER_HOUR * (readings.last_capacity - remaining), rate)
    elif state is ChargeState.DISCHARGING:
        seconds = truncating_div(SECONDS_PER_HOUR * remaining, rate)
    else:
        return None

    return max(seconds, 0)


def derive(read: AttributeReader, state: ChargeState) -> BatteryMetrics:
    """Read and reconcile a battery's capacity model and derive its metrics.

    Batteries without a full capacity in either unit (peripheral batteries
    often expose only voltage_now next to capacity) fall back to the
    percentage and time estimates the driver reports itself.
    """
    readings = reconcile(read_capacity(read))

    if not readings.has_full_baseline():
        return BatteryMetrics(
            percentage=_clamp_percentage(parse_int(read("capacity")) or 0),
            seconds=_reported_seconds(read, state),
            readings=readings,
        )

    return BatteryMetrics(
        percentage=compute_percentage(readings),
        seconds=compute_seconds(readings, state),
        readings=readings,
    )


def _reported_seconds(read: AttributeReader, state: ChargeState) -> Optional[int]:
    if state is ChargeState.CHARGING:
        seconds = parse_int(read("time_to_full_now"))
    elif state is ChargeState.DISCHARGING:
        seconds = parse_int(read("time_to_empty_now"))
    else:
        return None
    if seconds is None or seconds < 0:
        return None
    return seconds


def _clamp_percentage(value: int) -> int:
    return max(0, min(100, value))
