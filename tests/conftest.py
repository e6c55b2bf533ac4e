from pathlib import Path
from typing import Dict, List, Optional

import pytest

from powerprobe.core.source import AttributeSource


class DictSource(AttributeSource):
    """In-memory source: {device_class: {device: {attribute: text}}}."""

    def __init__(self, tree: Dict[str, Dict[str, Dict[str, str]]], supported: bool = True):
        self.tree = tree
        self.supported = supported
        self.list_calls: List[str] = []

    @property
    def name(self) -> str:
        return "dict"

    def is_supported(self) -> bool:
        return self.supported

    def list_devices(self, device_class: str) -> List[str]:
        self.list_calls.append(device_class)
        return list(self.tree.get(device_class, {}))

    def read_attribute(self, device_class: str, device: str,
                       attribute: str) -> Optional[str]:
        return self.tree.get(device_class, {}).get(device, {}).get(attribute)


def write_device(root: Path, device_class: str, device: str, **attrs: str) -> Path:
    device_dir = root / device_class / device
    device_dir.mkdir(parents=True, exist_ok=True)
    for name, value in attrs.items():
        (device_dir / name).write_text(f"{value}\n")
    return device_dir


@pytest.fixture
def sysfs_tree(tmp_path: Path) -> Path:
    """A /sys/class look-alike with a laptop battery, AC, a zone and a fan."""
    write_device(tmp_path, "power_supply", "BAT0",
                 type="Battery", status="Discharging", manufacturer="SMP",
                 model_name="5B10W13930", technology="Li-poly",
                 energy_now="40000000", energy_full="80000000",
                 power_now="20000000", voltage_now="16000000")
    write_device(tmp_path, "power_supply", "AC", type="Mains", online="0")
    write_device(tmp_path, "thermal", "thermal_zone0", type="x86_pkg_temp", temp="45500")
    write_device(tmp_path, "thermal", "cooling_device0", type="Fan",
                 cur_state="2", max_state="5")
    return tmp_path
