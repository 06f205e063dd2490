"""Tests for the schedule engine."""

from datetime import datetime, time, timedelta

import pytest

from smart_hub.core import Command, DeviceRegistry, InvalidCommandError, NotificationBus, create_device
from smart_hub.automation import ScheduleEngine


@pytest.fixture
def bus():
    return NotificationBus()


@pytest.fixture
def events(bus):
    received = []
    bus.register(received.append)
    return received


@pytest.fixture
def registry(bus):
    registry = DeviceRegistry(bus)
    registry.add(create_device(1, "light"))
    registry.add(create_device(2, "thermostat", 70))
    registry.add(create_device(3, "door"))
    return registry


@pytest.fixture
def engine(registry):
    return ScheduleEngine(registry)


def at(hour: int, minute: int = 0, second: int = 0) -> datetime:
    return datetime(2025, 1, 15, hour, minute, second)


class TestAddEntries:
    """Tests for adding schedule entries."""

    def test_add_normalizes(self, engine):
        entry = engine.add(2, "06:00:00", "Turn On")
        assert entry.at == time(6, 0)
        assert entry.command is Command.TURN_ON
        assert engine.entries == [entry]

    def test_add_accepts_timedelta(self, engine):
        entry = engine.add(2, timedelta(hours=22), Command.TURN_OFF)
        assert entry.at == time(22, 0)

    def test_unknown_command(self, engine):
        with pytest.raises(InvalidCommandError):
            engine.add(2, "06:00:00", "Explode")
        assert engine.entries == []

    def test_unresolved_device_allowed(self, engine):
        entry = engine.add(99, "06:00:00", "Turn On")
        assert entry.device_id == 99


class TestPoll:
    """Tests for schedule polling."""

    def test_before_threshold_does_nothing(self, engine, registry):
        engine.add(2, "06:00:00", "Turn On")
        result = engine.poll(at(5, 59, 59))

        assert registry.get(2).status == "off"
        assert result.rules_evaluated == 1
        assert result.actions_executed == 0

    def test_at_threshold_applies(self, engine, registry):
        engine.add(2, "06:00:00", "Turn On")
        result = engine.poll(at(6))

        assert registry.get(2).status == "on"
        assert result.actions_executed == 1

    def test_time_with_offset_compares_as_local(self, engine, registry):
        entry = engine.add(2, "06:00:00+02:00", "Turn On")
        engine.poll(at(7))

        assert entry.describe() == '{device: 2, time: "06:00:00", command: "Turn On"}'
        assert registry.get(2).status == "on"

    def test_level_triggered(self, engine, registry):
        """Test that later polls re-apply the command."""
        engine.add(1, "06:00:00", "Turn On")
        engine.poll(at(7))
        assert registry.get(1).status == "on"

        # Manual override is undone by the next poll past the threshold
        registry.turn_off(1)
        result = engine.poll(at(8))
        assert registry.get(1).status == "on"
        assert result.actions_executed == 1

        # Repeated polls converge, no oscillation
        for hour in (9, 10, 11):
            engine.poll(at(hour))
            assert registry.get(1).status == "on"

    def test_entries_applied_in_order(self, engine, registry):
        """Test that a later entry wins when both are due."""
        engine.add(3, "06:00:00", "Turn On")
        engine.add(3, "07:00:00", "Turn Off")

        engine.poll(at(6, 30))
        assert registry.get(3).status == "locked"

        engine.poll(at(7, 30))
        assert registry.get(3).status == "unlocked"

    def test_missing_device_skipped(self, engine, registry):
        engine.add(99, "06:00:00", "Turn On")
        engine.add(2, "06:00:00", "Turn On")

        result = engine.poll(at(7))

        assert result.rules_triggered == 2
        assert result.actions_executed == 1
        assert result.errors == []
        assert registry.get(2).status == "on"

    def test_removed_device_skipped(self, engine, registry):
        engine.add(2, "06:00:00", "Turn On")
        registry.remove(2)
        result = engine.poll(at(7))
        assert result.actions_executed == 0

    def test_single_notification_per_poll(self, engine, events):
        """Test that a poll publishes exactly one batch event."""
        engine.add(1, "06:00:00", "Turn On")
        engine.add(2, "06:00:00", "Turn On")
        events.clear()

        engine.poll(at(7))

        assert [e.type for e in events] == ["schedules.checked"]
        assert events[0].payload["applied"] == 2

    def test_notification_even_without_entries(self, engine, events):
        events.clear()
        engine.poll(at(7))
        assert len(events) == 1

    def test_poll_defaults_to_now(self, engine, registry):
        engine.add(1, "00:00:00", "Turn On")
        engine.poll()
        assert registry.get(1).status == "on"
