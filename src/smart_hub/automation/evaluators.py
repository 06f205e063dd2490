"""
Condition evaluators for the schedule and trigger engines.
"""

import logging
from datetime import datetime, time
from numbers import Real
from typing import Any, List

from smart_hub.core.registry import AnyDevice, DeviceRegistry

from .models import ScheduleEntry, TriggerRule

logger = logging.getLogger(__name__)


def schedule_is_due(entry: ScheduleEntry, now: datetime) -> bool:
    """
    Check if a schedule entry applies at `now`.

    Level-triggered: true for every time of day at or after the entry's time.
    """
    current: time = now.time()
    return current >= entry.at


def is_numeric(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


class ConditionEvaluator:
    """
    Evaluates trigger conditions against live device attributes.

    A rule with a source_device_id inspects only that device. Otherwise every
    device exposing the rule's attribute is inspected, and the condition
    holds if ANY of them matches.
    """

    def __init__(self, registry: DeviceRegistry) -> None:
        self._registry = registry

    def candidates(self, rule: TriggerRule) -> List[AnyDevice]:
        """Devices whose attribute the rule inspects."""
        if rule.source_device_id is not None:
            device = self._registry.get(rule.source_device_id)
            if device is None or not device.has_attribute(rule.condition_type):
                return []
            return [device]
        return self._registry.devices_with_attribute(rule.condition_type)

    def matching_devices(self, rule: TriggerRule) -> List[AnyDevice]:
        """
        Devices for which the rule's condition currently holds.

        Args:
            rule: The rule to evaluate

        Returns:
            Matching devices in registry order (empty if the condition is false)
        """
        matched = []
        for device in self.candidates(rule):
            value = device.get_attribute(rule.condition_type)
            if not is_numeric(value):
                logger.debug(
                    f"Skipping {device.type} {device.id}: "
                    f"{rule.condition_type}={value!r} is not numeric"
                )
                continue
            if rule.operator.compare(value, rule.threshold):
                matched.append(device)
        return matched

    def evaluate(self, rule: TriggerRule) -> bool:
        return bool(self.matching_devices(rule))
