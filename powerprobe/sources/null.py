"""Attribute source for platforms without power reporting."""

from typing import List, Optional

from powerprobe.core.source import AttributeSource


class NullSource(AttributeSource):

    @property
    def name(self) -> str:
        return "none"

    def is_supported(self) -> bool:
        return False

    def list_devices(self, device_class: str) -> List[str]:
        return []

    def read_attribute(self, device_class: str, device: str,
                       attribute: str) -> Optional[str]:
        return None
