"""
Schedule engine - time-of-day command processing.
"""

import logging
from datetime import datetime, time, timedelta
from typing import List, Optional

from smart_hub.core.bus import Event
from smart_hub.core.devices import Command
from smart_hub.core.registry import DeviceRegistry

from .evaluators import schedule_is_due
from .models import EngineResult, ScheduleEntry, parse_time_of_day

logger = logging.getLogger(__name__)


def build_entry(
    device_id: int,
    at: "time | timedelta | str",
    command: "Command | str",
) -> ScheduleEntry:
    """
    Build a schedule entry from loose inputs.

    Raises:
        InvalidCommandError: If the command is unknown
        ValueError: If the time of day is invalid
    """
    return ScheduleEntry(
        device_id=device_id,
        at=parse_time_of_day(at),
        command=Command.parse(command),
    )


class ScheduleEngine:
    """
    Applies scheduled commands on each poll.

    Entries are level-triggered: once the current time of day reaches an
    entry's time, every poll re-applies its command until the day rolls over.
    Entries whose device does not exist are skipped silently.
    """

    def __init__(self, registry: DeviceRegistry) -> None:
        self._registry = registry
        self._entries: List[ScheduleEntry] = []

    @property
    def entries(self) -> List[ScheduleEntry]:
        return list(self._entries)

    def add(
        self,
        device_id: int,
        at: "time | timedelta | str",
        command: "Command | str",
    ) -> ScheduleEntry:
        """
        Add a schedule entry.

        Args:
            device_id: Target device (need not exist yet)
            at: Time of day
            command: Command or its name (e.g. "Turn On")

        Returns:
            The new entry

        Raises:
            InvalidCommandError: If the command is unknown
            ValueError: If the time of day is invalid
        """
        return self.add_entry(build_entry(device_id, at, command))

    def add_entry(self, entry: ScheduleEntry) -> ScheduleEntry:
        """Add an already-built schedule entry."""
        self._entries.append(entry)
        logger.info(
            f"Scheduled {entry.command.value!r} for device {entry.device_id} at {entry.at}"
        )
        return entry

    def poll(self, now: Optional[datetime] = None) -> EngineResult:
        """
        Apply every due entry, then publish one schedules.checked event.

        Args:
            now: Current time (local time if None)

        Returns:
            Result with counts of entries evaluated/applied
        """
        if now is None:
            now = datetime.now()

        result = EngineResult()

        for entry in self._entries:
            result.rules_evaluated += 1

            if not schedule_is_due(entry, now):
                continue

            result.rules_triggered += 1
            device = self._registry.apply_command(entry.device_id, entry.command, notify=False)
            if device is None:
                logger.debug(f"Schedule skipped, device {entry.device_id} not found")
                continue
            result.actions_executed += 1

        logger.debug(
            f"Checked {result.rules_evaluated} schedule(s) at {now.time()}: "
            f"{result.actions_executed} applied"
        )
        self._registry.bus.publish(
            Event(
                type="schedules.checked",
                source="schedules",
                payload={
                    "time": now.time().isoformat(),
                    "evaluated": result.rules_evaluated,
                    "applied": result.actions_executed,
                },
            )
        )
        return result
