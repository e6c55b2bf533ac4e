import pytest

from powerprobe.sources import (
    NullSource, PsutilSource, SysfsSource, UdevSource, UPowerSource,
    UnknownSourceError, create_source, default_source,
)


@pytest.mark.parametrize("platform, expected", [
    ("linux", SysfsSource),
    ("win32", PsutilSource),
    ("darwin", PsutilSource),
    ("freebsd14", PsutilSource),
    ("emscripten", NullSource),
])
def test_default_source_per_platform(platform, expected):
    assert isinstance(default_source(platform), expected)


@pytest.mark.parametrize("name, expected", [
    ("sysfs", SysfsSource),
    ("udev", UdevSource),
    ("UPower", UPowerSource),
    ("psutil", PsutilSource),
    ("none", NullSource),
])
def test_create_source_by_name(name, expected):
    assert isinstance(create_source(name), expected)


def test_create_source_passes_sysfs_root(tmp_path):
    source = create_source("sysfs", sysfs_root=tmp_path)
    assert source.root == tmp_path


def test_unknown_source_name():
    with pytest.raises(UnknownSourceError, match="bluetooth"):
        create_source("bluetooth")


def test_null_source():
    source = NullSource()
    assert not source.is_supported()
    assert source.list_devices("power_supply") == []
    assert source.read_attribute("power_supply", "BAT0", "type") is None
