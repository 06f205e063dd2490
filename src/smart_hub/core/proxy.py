"""
Pass-through device wrapper for cross-cutting policy.

A DeviceProxy behaves like the Device it wraps. Commands go through an
optional policy callable first, which can deny them (e.g. access control),
and every command is logged.
"""

from typing import Any, Callable, Dict, Optional
import logging

from .devices import Command, Device, DeviceKind

logger = logging.getLogger(__name__)

CommandPolicy = Callable[[Device, Command], bool]


class DeviceProxy:
    """Wraps a Device; the registry accepts it anywhere a Device is accepted."""

    def __init__(self, device: Device, policy: Optional[CommandPolicy] = None) -> None:
        self._device = device
        self._policy = policy

    @property
    def wrapped(self) -> Device:
        return self._device

    @property
    def id(self) -> int:
        return self._device.id

    @property
    def kind(self) -> DeviceKind:
        return self._device.kind

    @property
    def type(self) -> str:
        return self._device.type

    @property
    def status(self) -> str:
        return self._device.status

    @status.setter
    def status(self, value: str) -> None:
        self._device.status = value

    @property
    def attributes(self) -> Dict[str, Any]:
        return self._device.attributes

    def turn_on(self) -> None:
        self.apply(Command.TURN_ON)

    def turn_off(self) -> None:
        self.apply(Command.TURN_OFF)

    def apply(self, command: Command) -> None:
        if self._policy is not None and not self._policy(self._device, command):
            logger.info(f"Policy denied {command.value!r} for {self.type} {self.id}")
            return
        logger.info(f"{command.value} -> {self.type} {self.id}")
        self._device.apply(command)

    def has_attribute(self, name: str) -> bool:
        return self._device.has_attribute(name)

    def get_attribute(self, name: str) -> Any:
        return self._device.get_attribute(name)

    def set_attribute(self, name: str, value: Any) -> None:
        self._device.set_attribute(name, value)

    def describe(self) -> str:
        return self._device.describe()

    def __repr__(self) -> str:
        return f"DeviceProxy({self._device!r})"
