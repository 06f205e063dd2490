"""
Data models for the schedule and trigger engines.

Defines schedule entries, trigger rules, actions, and engine results.
"""

import operator as _op
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from smart_hub.core.devices import Command
from smart_hub.core.exceptions import InvalidOperatorError, InvalidThresholdError


# =============================================================================
# Enums
# =============================================================================


class ComparisonOperator(Enum):
    """Operators a trigger condition can use."""

    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    EQ = "=="
    NE = "!="

    @classmethod
    def parse(cls, value: "ComparisonOperator | str") -> "ComparisonOperator":
        """
        Parse an operator symbol.

        Raises:
            InvalidOperatorError: If the symbol is not supported
        """
        if isinstance(value, ComparisonOperator):
            return value
        try:
            return cls(value.strip() if isinstance(value, str) else value)
        except ValueError:
            raise InvalidOperatorError(value) from None

    def compare(self, left: Any, right: Any) -> bool:
        return _COMPARATORS[self](left, right)


_COMPARATORS: Dict[ComparisonOperator, Callable[[Any, Any], bool]] = {
    ComparisonOperator.GT: _op.gt,
    ComparisonOperator.LT: _op.lt,
    ComparisonOperator.GE: _op.ge,
    ComparisonOperator.LE: _op.le,
    ComparisonOperator.EQ: _op.eq,
    ComparisonOperator.NE: _op.ne,
}


# =============================================================================
# Time helpers
# =============================================================================


def parse_time_of_day(value: "time | timedelta | str") -> time:
    """
    Normalize a time-of-day value.

    Args:
        value: time, timedelta since midnight (< 24h) or "HH:MM[:SS]" string

    Returns:
        Naive time value

    Raises:
        ValueError: If the value is not a valid time of day
    """
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value.replace(tzinfo=None)
    if isinstance(value, timedelta):
        if value < timedelta(0) or value >= timedelta(days=1):
            raise ValueError(f"Time of day out of range: {value}")
        return (datetime.min + value).time()
    if isinstance(value, str):
        return time.fromisoformat(value.strip()).replace(tzinfo=None)
    raise ValueError(f"Unsupported time of day: {value!r}")


# =============================================================================
# Actions
# =============================================================================


@dataclass(frozen=True)
class DeviceAction:
    """Apply a command to a device, e.g. turnOff(1)."""

    device_id: int
    command: Command

    def __str__(self) -> str:
        name = "turnOn" if self.command is Command.TURN_ON else "turnOff"
        return f"{name}({self.device_id})"


ActionConfig = Union[DeviceAction, str]


# =============================================================================
# Schedule entries and trigger rules
# =============================================================================


@dataclass(frozen=True)
class ScheduleEntry:
    """Apply a command to a device once the time of day reaches `at`."""

    device_id: int
    at: time
    command: Command

    def describe(self) -> str:
        return (
            f'{{device: {self.device_id}, time: "{self.at.isoformat()}", '
            f'command: "{self.command.value}"}}'
        )


@dataclass(frozen=True)
class TriggerRule:
    """
    Fire an action when a device attribute compares true against a threshold.

    Attributes:
        condition_type: Device attribute to inspect (e.g. "temperature")
        operator: Comparison operator (symbols are parsed on construction)
        threshold: Value the attribute is compared against
        action: DeviceAction, or a string such as "turnOff(1)" parsed at dispatch
        source_device_id: Inspect only this device (None = any device
            exposing the attribute)
    """

    condition_type: str
    operator: ComparisonOperator
    threshold: int
    action: ActionConfig
    source_device_id: Optional[int] = None

    def __post_init__(self) -> None:
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "operator", ComparisonOperator.parse(self.operator))
        if not isinstance(self.threshold, int) or isinstance(self.threshold, bool):
            raise InvalidThresholdError(self.threshold)

    @property
    def condition(self) -> str:
        return f"{self.condition_type} {self.operator.value} {self.threshold}"

    def describe(self) -> str:
        return f'{{condition: "{self.condition}", action: "{self.action}"}}'


# =============================================================================
# Results and history
# =============================================================================


@dataclass
class EngineResult:
    """Result of one poll."""

    rules_evaluated: int = 0
    rules_triggered: int = 0
    actions_executed: int = 0
    errors: List[str] = field(default_factory=list)


@dataclass
class RuleExecution:
    """Record of a fired or failed trigger rule (for history/debugging)."""

    rule_index: int
    condition: str
    action: str
    matched_device_ids: List[int]
    success: bool
    error: Optional[str]
    timestamp: datetime
