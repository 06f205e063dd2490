"""
Parsing of trigger actions.

Actions are written as calls, e.g. "turnOff(1)" or "turn_on(3)".
"""

import re

from smart_hub.core.devices import Command
from smart_hub.core.exceptions import InvalidCommandError, MalformedActionError

from .models import ActionConfig, DeviceAction

_ACTION_PATTERN = re.compile(r"^\s*([A-Za-z_ ]+?)\s*\(\s*(-?\d+)\s*\)\s*$")


def parse_action(action: ActionConfig) -> DeviceAction:
    """
    Parse an action into a DeviceAction.

    Args:
        action: DeviceAction (returned as-is) or a call string like "turnOff(1)"

    Returns:
        The structured action

    Raises:
        MalformedActionError: If the string cannot be parsed
    """
    if isinstance(action, DeviceAction):
        return action
    if not isinstance(action, str):
        raise MalformedActionError(f"Unsupported action: {action!r}")

    match = _ACTION_PATTERN.match(action)
    if not match:
        raise MalformedActionError(f"Cannot parse action: {action!r}")

    name, device_id = match.groups()
    try:
        command = Command.parse(name)
    except InvalidCommandError:
        raise MalformedActionError(f"Unknown action command: {name!r}") from None

    return DeviceAction(device_id=int(device_id), command=command)
