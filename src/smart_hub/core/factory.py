"""
Device factory keyed by kind name.
"""

from typing import Dict, Optional
import logging

from .devices import Device, DeviceKind
from .exceptions import InvalidDeviceKindError

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 70

KIND_NAMES: Dict[str, DeviceKind] = {
    "light": DeviceKind.LIGHT,
    "thermostat": DeviceKind.THERMOSTAT,
    "door": DeviceKind.DOOR_LOCK,
}


def resolve_kind(kind: "DeviceKind | str") -> DeviceKind:
    """
    Resolve a kind name (case-insensitive) or DeviceKind to a DeviceKind.

    Raises:
        InvalidDeviceKindError: If the name is not a known kind
    """
    if isinstance(kind, DeviceKind):
        return kind
    if isinstance(kind, str) and kind.strip().lower() in KIND_NAMES:
        return KIND_NAMES[kind.strip().lower()]
    raise InvalidDeviceKindError(kind)


def create_device(
    device_id: int,
    kind: "DeviceKind | str",
    temperature: Optional[int] = None,
    *,
    default_temperature: int = DEFAULT_TEMPERATURE,
) -> Device:
    """
    Create a device of the given kind.

    Args:
        device_id: Unique device id
        kind: "light", "thermostat" or "door" (any case), or a DeviceKind
        temperature: Initial temperature (thermostats only)
        default_temperature: Temperature used when none is given

    Returns:
        The new Device, status "off"

    Raises:
        InvalidDeviceKindError: If kind is not recognized
    """
    resolved = resolve_kind(kind)

    if resolved is DeviceKind.THERMOSTAT:
        temp = default_temperature if temperature is None else temperature
        device = Device(id=device_id, kind=resolved, attributes={"temperature": temp})
    else:
        if temperature is not None:
            logger.debug(f"Ignoring temperature for {resolved.label} {device_id}")
        device = Device(id=device_id, kind=resolved)

    logger.debug(f"Created device: {device.describe()}")
    return device
