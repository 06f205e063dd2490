"""
smart-hub: an in-memory home-automation hub.

This library provides:
- A registry of controllable devices (lights, thermostats, door locks)
- Time-of-day schedules
- Attribute-threshold triggers with device actions
- Synchronous change notifications to observers
"""

from smart_hub.core.devices import Command, Device, DeviceKind
from smart_hub.core.factory import create_device
from smart_hub.core.proxy import DeviceProxy
from smart_hub.core.bus import Event, NotificationBus
from smart_hub.core.registry import DeviceRegistry
from smart_hub.config import HubConfig
from smart_hub.hub import Hub

__version__ = "0.1.0"

__all__ = [
    "Command",
    "Device",
    "DeviceKind",
    "create_device",
    "DeviceProxy",
    "Event",
    "NotificationBus",
    "DeviceRegistry",
    "HubConfig",
    "Hub",
]
