"""
Error types raised by the smart-hub kernel.

Every concrete error is also a ValueError, so callers that only care about
bad input can keep catching ValueError.
"""

from typing import Any, List, Tuple


class HubError(Exception):
    """Base class for all smart-hub errors."""


class DuplicateDeviceError(HubError, ValueError):
    """A device with the same id is already registered."""

    def __init__(self, device_id: int) -> None:
        super().__init__(f"Device with id {device_id} already exists")
        self.device_id = device_id


class InvalidDeviceKindError(HubError, ValueError):
    """The device factory does not know the requested kind."""

    def __init__(self, kind: Any) -> None:
        super().__init__(f"Invalid device type: {kind!r}")
        self.kind = kind


class InvalidOperatorError(HubError, ValueError):
    """A trigger rule uses an operator outside the supported set."""

    def __init__(self, operator: Any) -> None:
        super().__init__(f"Unknown comparison operator: {operator!r}")
        self.operator = operator


class InvalidThresholdError(HubError, ValueError):
    """A trigger rule threshold is not an integer."""

    def __init__(self, threshold: Any) -> None:
        super().__init__(f"Trigger threshold must be an integer: {threshold!r}")
        self.threshold = threshold


class InvalidCommandError(HubError, ValueError):
    """A schedule or action names a command other than turn on/off."""

    def __init__(self, command: Any) -> None:
        super().__init__(f"Unknown device command: {command!r}")
        self.command = command


class MalformedActionError(HubError, ValueError):
    """A trigger action could not be parsed or dispatched."""


class ObserverError(HubError):
    """
    One or more observers failed during an isolated notification round.

    Attributes:
        failures: (observer, exception) pairs in notification order
    """

    def __init__(self, failures: List[Tuple[Any, Exception]]) -> None:
        names = ", ".join(getattr(o, "__name__", repr(o)) for o, _ in failures)
        super().__init__(f"{len(failures)} observer(s) failed: {names}")
        self.failures = failures
