"""
Device model for the smart-hub kernel.

A Device is an in-memory state holder. Kind-specific behavior lives in the
transition and attribute tables below rather than in subclasses.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet

from .exceptions import InvalidCommandError

INITIAL_STATUS = "off"


class DeviceKind(Enum):
    """Closed set of supported device kinds. Values are display labels."""

    LIGHT = "Light"
    THERMOSTAT = "Thermostat"
    DOOR_LOCK = "Door"

    @property
    def label(self) -> str:
        return self.value

    @property
    def on_status(self) -> str:
        return _TRANSITIONS[self][0]

    @property
    def off_status(self) -> str:
        return _TRANSITIONS[self][1]

    @property
    def valid_statuses(self) -> FrozenSet[str]:
        return frozenset({INITIAL_STATUS, *_TRANSITIONS[self]})

    @property
    def attribute_defaults(self) -> Dict[str, int]:
        return dict(_ATTRIBUTES.get(self, {}))


class Command(Enum):
    """Commands a schedule or trigger can issue."""

    TURN_ON = "Turn On"
    TURN_OFF = "Turn Off"

    @classmethod
    def parse(cls, value: "Command | str") -> "Command":
        """
        Parse a command from its enum, display value or a loose spelling.

        Accepts "Turn On", "turn_on", "turnOn", "on" and the like.

        Raises:
            InvalidCommandError: If the value names no known command
        """
        if isinstance(value, Command):
            return value
        if not isinstance(value, str):
            raise InvalidCommandError(value)

        key = value.replace(" ", "").replace("_", "").replace("-", "").lower()
        if key in ("turnon", "on"):
            return cls.TURN_ON
        if key in ("turnoff", "off"):
            return cls.TURN_OFF
        raise InvalidCommandError(value)


# (turn_on status, turn_off status)
_TRANSITIONS: Dict[DeviceKind, tuple[str, str]] = {
    DeviceKind.LIGHT: ("on", "off"),
    DeviceKind.THERMOSTAT: ("on", "off"),
    DeviceKind.DOOR_LOCK: ("locked", "unlocked"),
}

# Kind-specific attributes and their defaults
_ATTRIBUTES: Dict[DeviceKind, Dict[str, int]] = {
    DeviceKind.THERMOSTAT: {"temperature": 70},
}

_IMMUTABLE_FIELDS = frozenset({"id", "kind"})


@dataclass
class Device:
    """
    A controllable device held by the registry.

    Attributes:
        id: Unique identifier within a registry
        kind: Device kind (fixes the valid statuses and attributes)
        attributes: Kind-specific numeric state (e.g. thermostat temperature)
    """

    id: int
    kind: DeviceKind
    attributes: Dict[str, Any] = field(default_factory=dict)
    _status: str = field(default=INITIAL_STATUS, init=False, repr=False)

    def __post_init__(self) -> None:
        defaults = self.kind.attribute_defaults
        unknown = set(self.attributes) - set(defaults)
        if unknown:
            raise ValueError(
                f"{self.kind.label} does not expose attribute(s): {sorted(unknown)}"
            )
        self.attributes = {**defaults, **self.attributes}

    def __setattr__(self, name: str, value: Any) -> None:
        # id and kind are set once by __init__; the registry keys devices by id
        if name in _IMMUTABLE_FIELDS and name in self.__dict__:
            raise AttributeError(f"Device {name} cannot be changed after creation")
        super().__setattr__(name, value)

    @property
    def status(self) -> str:
        return self._status

    @status.setter
    def status(self, value: str) -> None:
        if value not in self.kind.valid_statuses:
            raise ValueError(f"Invalid status {value!r} for {self.kind.label} {self.id}")
        self._status = value

    @property
    def type(self) -> str:
        """Display label of the device kind."""
        return self.kind.label

    def turn_on(self) -> None:
        self._status = self.kind.on_status

    def turn_off(self) -> None:
        self._status = self.kind.off_status

    def apply(self, command: Command) -> None:
        """Apply a command using this kind's transition table."""
        if command is Command.TURN_ON:
            self.turn_on()
        else:
            self.turn_off()

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def get_attribute(self, name: str) -> Any:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        """
        Update a kind-specific attribute.

        Raises:
            ValueError: If this kind does not expose the attribute
        """
        if name not in self.attributes:
            raise ValueError(f"{self.kind.label} {self.id} has no attribute {name!r}")
        self.attributes[name] = value

    def describe(self) -> str:
        """Human-readable status line, e.g. "Light 1 is off."."""
        return f"{self.kind.label} {self.id} is {self.status}."
