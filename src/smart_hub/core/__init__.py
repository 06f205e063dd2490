"""
Core components of the smart-hub kernel.

This package contains:
- devices: Device model, kinds and commands
- factory: Device construction by kind name
- proxy: Policy wrapper around a device
- bus: Notification bus
- registry: DeviceRegistry that owns the device set
- exceptions: Error taxonomy
"""

from smart_hub.core.devices import Command, Device, DeviceKind
from smart_hub.core.factory import create_device
from smart_hub.core.proxy import DeviceProxy
from smart_hub.core.bus import Event, NotificationBus
from smart_hub.core.registry import DeviceRegistry
from smart_hub.core.exceptions import (
    HubError,
    DuplicateDeviceError,
    InvalidDeviceKindError,
    InvalidOperatorError,
    InvalidThresholdError,
    InvalidCommandError,
    MalformedActionError,
    ObserverError,
)

__all__ = [
    "Command",
    "Device",
    "DeviceKind",
    "create_device",
    "DeviceProxy",
    "Event",
    "NotificationBus",
    "DeviceRegistry",
    "HubError",
    "DuplicateDeviceError",
    "InvalidDeviceKindError",
    "InvalidOperatorError",
    "InvalidThresholdError",
    "InvalidCommandError",
    "MalformedActionError",
    "ObserverError",
]
