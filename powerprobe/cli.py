#!/usr/bin/env python3
"""Command-line interface for powerprobe power and thermal telemetry."""

import sys
import json
import logging
import argparse
from pathlib import Path

from powerprobe import config as cfg
from powerprobe.core.telemetry import PowerTelemetry
from powerprobe.core.types import UnknownCategoryError, as_categories
from powerprobe.report import snapshot_to_dict
from powerprobe.sources import SOURCE_NAMES, UnknownSourceError, create_source

_CATEGORY_NAMES = ("battery", "ac_adapter", "thermal_zone", "fan")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="powerprobe",
        description="powerprobe - battery, AC adapter, thermal zone and fan telemetry",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  %(prog)s                  Report all device categories
  %(prog)s --extended       Include raw capacity readings and voltage
  %(prog)s -c battery -c ac_adapter
                            Report batteries and AC adapters only
  %(prog)s --json           Output as JSON (for scripts/status bars)
  %(prog)s --check          Exit 0 if power reporting is available
""",
    )
    parser.add_argument("--check", action="store_true",
                        help="Only check whether power reporting is available")
    parser.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    parser.add_argument("--extended", "-e", action="store_true", default=None,
                        help="Include capacity derivation details")
    parser.add_argument("--category", "-c", action="append", choices=_CATEGORY_NAMES,
                        help="Device category to acquire (repeatable, default: all)")
    parser.add_argument("--backend", "-b", choices=SOURCE_NAMES, default=None,
                        help="Attribute source (default: from config, else auto)")
    parser.add_argument("--sysfs-root", type=Path, default=None,
                        help="Root of the sysfs class tree (default: /sys/class)")
    parser.add_argument("--config", type=Path, default=None,
                        help="Configuration file (default: ~/.config/powerprobe/config.json)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def _setup_logging(level_name: str, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, str(level_name).upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    config = cfg.load_config(args.config)
    _setup_logging(cfg.get("logging.level", "WARNING", config), args.verbose)

    backend = args.backend or cfg.get("source.backend", "auto", config)
    sysfs_root = args.sysfs_root or cfg.get("source.sysfs_root", "/sys/class", config)
    extended = args.extended if args.extended is not None else bool(
        cfg.get("report.extended", False, config))

    try:
        source = create_source(backend, sysfs_root=sysfs_root)
        categories = as_categories(
            args.category or cfg.get("acquire.categories", _CATEGORY_NAMES, config))
    except (UnknownSourceError, UnknownCategoryError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if not source.is_supported():
        print("It seems there is no ACPI support for your system!", file=sys.stderr)
        return 1

    if args.check:
        print(f"This system has ACPI support ({source.name}).")
        return 0

    with PowerTelemetry(
        source,
        acquire=False,
        retain_unselected=bool(cfg.get("acquire.retain_unselected", False, config)),
    ) as telemetry:
        telemetry.acquire(categories)

        if args.json:
            print(json.dumps(snapshot_to_dict(telemetry.snapshot(), extended), indent=2))
        else:
            telemetry.dump(sys.stdout, extended)

    return 0


if __name__ == "__main__":
    sys.exit(main())
