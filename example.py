#!/usr/bin/env python3
"""
Quick example demonstrating smart-hub basic usage.

Run with: PYTHONPATH=src python3 example.py
"""

from datetime import datetime
from smart_hub import Hub, Event, create_device

print("=" * 60)
print("smart-hub Example")
print("=" * 60)

# 1. Hub and observer
print("\n1. Creating hub...")
hub = Hub()
received = []


def on_change(event: Event) -> None:
    received.append(event)


hub.register_observer(on_change)
print("   ✓ Hub created, observer registered")

# 2. Devices
print("\n2. Adding devices...")
for device in (
    create_device(1, "light"),
    create_device(2, "thermostat", 70),
    create_device(3, "door"),
):
    hub.add_device(device)
    print(f"   ✓ Added: {device.describe()}")

# 3. Schedules and triggers
print("\n3. Registering automation...")
hub.set_schedule(2, "06:00:00", "Turn On")
hub.add_trigger("temperature", ">", 75, "turnOff(1)")
print(f"   ✓ Schedules: {hub.get_scheduled_tasks()}")
print(f"   ✓ Triggers: {hub.get_automated_triggers()}")

# 4. Manual command
print("\n4. Turning on the light...")
hub.turn_on_device(1)
print(f"   ✓ {hub.get_status_report()}")

# 5. Schedule poll
print("\n5. Checking schedules at 07:00...")
result = hub.check_schedules(datetime.now().replace(hour=7, minute=0, second=0))
print(f"   ✓ {result.actions_executed} command(s) applied")
print(f"   ✓ {hub.get_status_report()}")

# 6. Trigger poll
print("\n6. Raising thermostat to 80 and checking triggers...")
hub.set_device_attribute(2, "temperature", 80)
result = hub.check_triggers()
print(f"   ✓ {result.rules_triggered} trigger(s) fired")
print(f"   ✓ {hub.get_status_report()}")

print(f"\n   Observer received {len(received)} notification(s)")

print("\n" + "=" * 60)
print("Example complete!")
print("=" * 60)
