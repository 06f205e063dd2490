"""Tests for condition evaluators."""

from datetime import datetime, time, UTC

import pytest

from smart_hub.core import Command, DeviceRegistry, create_device
from smart_hub.automation import (
    ConditionEvaluator,
    ScheduleEntry,
    TriggerRule,
    schedule_is_due,
)


@pytest.fixture
def registry():
    registry = DeviceRegistry()
    registry.add(create_device(1, "light"))
    registry.add(create_device(2, "thermostat", 70))
    registry.add(create_device(4, "thermostat", 80))
    return registry


@pytest.fixture
def evaluator(registry):
    return ConditionEvaluator(registry)


class TestScheduleIsDue:
    """Tests for the time-of-day comparison."""

    entry = ScheduleEntry(device_id=2, at=time(6, 0), command=Command.TURN_ON)

    def test_before(self):
        assert schedule_is_due(self.entry, datetime(2025, 1, 15, 5, 59, 59)) is False

    def test_exactly_at(self):
        assert schedule_is_due(self.entry, datetime(2025, 1, 15, 6, 0, 0)) is True

    def test_after(self):
        assert schedule_is_due(self.entry, datetime(2025, 1, 15, 23, 0, 0)) is True

    def test_aware_datetime_uses_wall_clock(self):
        assert schedule_is_due(self.entry, datetime(2025, 1, 15, 7, 0, tzinfo=UTC)) is True


class TestConditionEvaluator:
    """Tests for trigger condition evaluation."""

    def test_any_device_matches(self, evaluator):
        """Test that one matching thermostat is enough."""
        rule = TriggerRule("temperature", ">", 75, "turnOff(1)")
        assert evaluator.evaluate(rule) is True
        assert [d.id for d in evaluator.matching_devices(rule)] == [4]

    def test_no_device_matches(self, evaluator):
        rule = TriggerRule("temperature", ">", 85, "turnOff(1)")
        assert evaluator.evaluate(rule) is False

    def test_source_device_restricts_inspection(self, evaluator):
        """Test that source_device_id limits the check to one device."""
        rule = TriggerRule("temperature", ">", 75, "turnOff(1)", source_device_id=2)
        assert evaluator.evaluate(rule) is False

        rule = TriggerRule("temperature", ">", 75, "turnOff(1)", source_device_id=4)
        assert evaluator.evaluate(rule) is True

    def test_missing_source_device(self, evaluator):
        rule = TriggerRule("temperature", ">", 0, "turnOff(1)", source_device_id=99)
        assert evaluator.candidates(rule) == []
        assert evaluator.evaluate(rule) is False

    def test_source_device_without_attribute(self, evaluator):
        rule = TriggerRule("temperature", ">", 0, "turnOff(1)", source_device_id=1)
        assert evaluator.evaluate(rule) is False

    def test_unknown_attribute(self, evaluator):
        rule = TriggerRule("humidity", ">", 0, "turnOff(1)")
        assert evaluator.evaluate(rule) is False

    def test_non_numeric_value_never_matches(self, registry, evaluator):
        registry.set_attribute(2, "temperature", "hot")
        registry.set_attribute(4, "temperature", None)
        rule = TriggerRule("temperature", "!=", 0, "turnOff(1)")
        assert evaluator.evaluate(rule) is False

    def test_equality(self, evaluator):
        assert evaluator.evaluate(TriggerRule("temperature", "==", 70, "turnOn(1)")) is True
        assert evaluator.evaluate(TriggerRule("temperature", "==", 71, "turnOn(1)")) is False
