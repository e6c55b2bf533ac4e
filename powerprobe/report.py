"""Text report and JSON-ready export of a telemetry snapshot."""

from dataclasses import asdict
from typing import Any, Dict, Optional, TextIO

from powerprobe.core.types import Battery, ChargeState, Snapshot


def format_duration(seconds: int) -> str:
    """Format seconds as HH:MM:SS."""
    hours, rest = divmod(seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def _num(value: Optional[Any]) -> str:
    # Unknown values print as -1, as in the historical report.
    return "-1" if value is None else str(value)


def _write_battery(out: TextIO, index: int, bat: Battery, extended: bool) -> None:
    out.write(f"Battery {index}\n")
    out.write(f"\tname              : {bat.name}\n")
    out.write(f"\tmanufacturer      : {bat.manufacturer}\n")
    out.write(f"\tmodel name        : {bat.model_name}\n")
    out.write(f"\ttechnology        : {bat.technology}\n")
    out.write(f"\tstatus            : {bat.charge_state}\n")

    if extended and bat.capacity is not None:
        cap = bat.capacity
        out.write(f"\tremaining capacity: {_num(cap.remaining_capacity)}\n")
        out.write(f"\tremaining energy  : {_num(cap.remaining_energy)}\n")
        out.write(f"\tpresent rate      : {_num(cap.present_rate)}\n")
        out.write(f"\tlast capacity     : {_num(cap.last_capacity)}\n")
        out.write(f"\tlast capacity unit: {_num(cap.last_capacity_energy)}\n")
        out.write(f"\tvoltage           : {_num(cap.voltage)}\n")

    out.write(f"\tpercentage        : {bat.percentage}\n")
    out.write(f"\tseconds           : {_num(bat.seconds)}\n")

    if bat.seconds:
        if bat.charge_state is ChargeState.DISCHARGING:
            label = "time remaining    "
        else:
            label = "time until charged"
        out.write(f"\t{label}: {format_duration(bat.seconds)}\n")


def write_report(snapshot: Snapshot, out: TextIO, extended: bool = False) -> None:
    """Write one section per category and one block per device."""
    out.write(f"Batteries available: {len(snapshot.batteries)}\n")
    for i, bat in enumerate(snapshot.batteries):
        _write_battery(out, i, bat, extended)

    out.write(f"AC adapters available: {len(snapshot.ac_adapters)}\n")
    for i, ac in enumerate(snapshot.ac_adapters):
        out.write(f"AC adapter {i}\n")
        out.write(f"\tname  : {ac.name}\n")
        out.write(f"\tstatus: {ac.state}\n")

    out.write(f"Thermal zones available: {len(snapshot.thermal_zones)}\n")
    for i, tz in enumerate(snapshot.thermal_zones):
        out.write(f"Thermal zone {i}\n")
        out.write(f"\tname       : {tz.name}\n")
        out.write(f"\ttemperature: {_num(tz.temperature)} degrees Celsius\n")

    out.write(f"Fans (cooling devices) available: {len(snapshot.fans)}\n")
    for i, fan in enumerate(snapshot.fans):
        out.write(f"Fan (Cooling device) {i}\n")
        out.write(f"\tname       : {fan.name}\n")
        out.write(f"\tcur state  : {_num(fan.cur_state)}\n")
        out.write(f"\tmax state  : {_num(fan.max_state)}\n")


def snapshot_to_dict(snapshot: Snapshot, extended: bool = False) -> Dict[str, Any]:
    """Export a snapshot as plain JSON-serialisable data."""
    batteries = []
    for bat in snapshot.batteries:
        entry = {
            "name": bat.name,
            "manufacturer": bat.manufacturer,
            "model_name": bat.model_name,
            "technology": bat.technology,
            "status": str(bat.charge_state),
            "percentage": bat.percentage,
            "seconds": bat.seconds,
        }
        if extended and bat.capacity is not None:
            entry["capacity"] = asdict(bat.capacity)
        batteries.append(entry)

    return {
        "batteries": batteries,
        "ac_adapters": [
            {"name": ac.name, "status": str(ac.state)} for ac in snapshot.ac_adapters
        ],
        "thermal_zones": [
            {"name": tz.name, "temperature": tz.temperature} for tz in snapshot.thermal_zones
        ],
        "fans": [
            {"name": fan.name, "cur_state": fan.cur_state, "max_state": fan.max_state}
            for fan in snapshot.fans
        ],
    }
