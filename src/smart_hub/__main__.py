"""
Demonstration entry point.

Run with: python -m smart_hub [--verbose]
"""

import argparse
import logging
from datetime import datetime
from typing import List, Optional

from smart_hub.core.factory import create_device
from smart_hub.hub import Hub


def build_demo_hub() -> Hub:
    """One device of each kind, one schedule and one trigger."""
    hub = Hub()

    hub.add_device(create_device(1, "light"))
    hub.add_device(create_device(2, "thermostat", 70))
    hub.add_device(create_device(3, "door"))

    hub.set_schedule(2, "06:00:00", "Turn On")
    hub.add_trigger("temperature", ">", 75, "turnOff(1)")
    return hub


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="smart-hub-demo", description=__doc__)
    parser.add_argument("--verbose", "-v", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    hub = build_demo_hub()

    print(hub.get_status_report())
    print(hub.get_scheduled_tasks())
    print(hub.get_automated_triggers())

    hub.turn_on_device(1)
    hub.check_schedules(datetime.now())
    hub.check_triggers()

    print(hub.get_status_report())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
