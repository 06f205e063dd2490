"""
DeviceRegistry: owner of the device set.

The registry is the only component that adds or removes devices.
"""

from typing import Any, Dict, List, Optional, Union
import logging

from .bus import Event, NotificationBus
from .devices import Command, Device
from .exceptions import DuplicateDeviceError
from .proxy import DeviceProxy

logger = logging.getLogger(__name__)

AnyDevice = Union[Device, DeviceProxy]


class DeviceRegistry:
    """
    Stores devices by id, in insertion order.

    Responsibilities:
    - Add, remove and look up devices
    - Apply on/off commands and attribute updates
    - Publish a notification for every mutation (unless asked not to)

    Missing ids are never an error for lookups or commands.
    """

    def __init__(self, bus: Optional[NotificationBus] = None) -> None:
        """
        Initialize an empty registry.

        Args:
            bus: Bus that receives change notifications (a private one if None)
        """
        self._devices: Dict[int, AnyDevice] = {}
        self._bus = bus if bus is not None else NotificationBus()

    @property
    def bus(self) -> NotificationBus:
        return self._bus

    def add(self, device: AnyDevice) -> AnyDevice:
        """
        Add a device.

        Args:
            device: Device (or DeviceProxy) to add

        Returns:
            The added device

        Raises:
            DuplicateDeviceError: If a device with the same id exists
        """
        if device.id in self._devices:
            raise DuplicateDeviceError(device.id)

        self._devices[device.id] = device
        logger.info(f"Added device: {device.type} {device.id}")
        self._bus.publish(Event(type="device.added", source="registry", device_id=device.id))
        return device

    def remove(self, device_id: int) -> Optional[AnyDevice]:
        """
        Remove a device if present.

        Args:
            device_id: The device id

        Returns:
            The removed device, or None if no device had that id
        """
        device = self._devices.pop(device_id, None)
        if device is None:
            logger.debug(f"Remove ignored, no device {device_id}")
            return None

        logger.info(f"Removed device: {device.type} {device_id}")
        self._bus.publish(Event(type="device.removed", source="registry", device_id=device_id))
        return device

    def get(self, device_id: int) -> Optional[AnyDevice]:
        """
        Get a device by id.

        Returns:
            The device or None if not found
        """
        return self._devices.get(device_id)

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._devices

    def __len__(self) -> int:
        return len(self._devices)

    def all_devices(self) -> List[AnyDevice]:
        """All devices in insertion order."""
        return list(self._devices.values())

    def devices_with_attribute(self, name: str) -> List[AnyDevice]:
        """Devices exposing the named attribute, in insertion order."""
        return [d for d in self._devices.values() if d.has_attribute(name)]

    def turn_on(self, device_id: int) -> Optional[AnyDevice]:
        return self.apply_command(device_id, Command.TURN_ON)

    def turn_off(self, device_id: int) -> Optional[AnyDevice]:
        return self.apply_command(device_id, Command.TURN_OFF)

    def apply_command(
        self,
        device_id: int,
        command: Command,
        notify: bool = True,
    ) -> Optional[AnyDevice]:
        """
        Apply a command to a device.

        Args:
            device_id: Target device id
            command: Command to apply
            notify: Publish a device.state_changed event

        Returns:
            The device, or None if no device had that id (nothing happens)
        """
        device = self._devices.get(device_id)
        if device is None:
            logger.debug(f"{command.value} ignored, no device {device_id}")
            return None

        previous = device.status
        device.apply(command)
        logger.debug(f"{device.type} {device_id}: {previous} -> {device.status}")

        if notify:
            self._bus.publish(
                Event(
                    type="device.state_changed",
                    source="registry",
                    device_id=device_id,
                    payload={"old_status": previous, "new_status": device.status},
                )
            )
        return device

    def set_attribute(self, device_id: int, name: str, value: Any) -> Optional[AnyDevice]:
        """
        Update a device attribute.

        Returns:
            The device, or None if no device had that id

        Raises:
            ValueError: If the device does not expose the attribute
        """
        device = self._devices.get(device_id)
        if device is None:
            logger.debug(f"Attribute update ignored, no device {device_id}")
            return None

        previous = device.get_attribute(name)
        device.set_attribute(name, value)
        logger.info(f"Set {device.type} {device_id} {name}: {previous} -> {value}")
        self._bus.publish(
            Event(
                type="device.attribute_changed",
                source="registry",
                device_id=device_id,
                payload={"attribute": name, "old_value": previous, "new_value": value},
            )
        )
        return device
