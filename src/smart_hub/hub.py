"""
Hub: composition root of the smart-hub kernel.

External callers go through the Hub to mutate devices, register schedules
and triggers, drive polls and produce reports.
"""

from datetime import datetime, time, timedelta
from threading import RLock
from typing import Any, Dict, List, Optional
import logging

from smart_hub.automation import (
    ActionConfig,
    ComparisonOperator,
    EngineResult,
    RuleExecution,
    ScheduleEngine,
    ScheduleEntry,
    TriggerEngine,
    TriggerRule,
    build_entry,
)
from smart_hub.config import HubConfig
from smart_hub.core.bus import NotificationBus, Observer
from smart_hub.core.devices import Command
from smart_hub.core.exceptions import DuplicateDeviceError
from smart_hub.core.factory import create_device
from smart_hub.core.registry import AnyDevice, DeviceRegistry

logger = logging.getLogger(__name__)


class Hub:
    """
    Single entry point for one home.

    Owns a NotificationBus, a DeviceRegistry, a ScheduleEngine and a
    TriggerEngine, and delegates to them. Every public operation runs under
    one coarse lock, so the hub can be driven from a timer thread while
    other threads add or remove devices.
    """

    def __init__(self, config: Optional[HubConfig] = None) -> None:
        """
        Initialize an empty hub.

        Args:
            config: Hub settings (defaults if None)
        """
        self.config = config or HubConfig()
        self._lock = RLock()
        self._bus = NotificationBus(isolate_failures=self.config.isolate_observer_failures)
        self._registry = DeviceRegistry(self._bus)
        self._schedules = ScheduleEngine(self._registry)
        self._triggers = TriggerEngine(self._registry, history_size=self.config.history_size)

    # =========================================================================
    # Devices
    # =========================================================================

    def add_device(self, device: AnyDevice) -> AnyDevice:
        """
        Add a device.

        Raises:
            DuplicateDeviceError: If the id is already registered
        """
        with self._lock:
            return self._registry.add(device)

    def remove_device(self, device_id: int) -> Optional[AnyDevice]:
        """Remove a device; missing ids are ignored."""
        with self._lock:
            return self._registry.remove(device_id)

    def get_device(self, device_id: int) -> Optional[AnyDevice]:
        with self._lock:
            return self._registry.get(device_id)

    @property
    def devices(self) -> List[AnyDevice]:
        with self._lock:
            return self._registry.all_devices()

    def turn_on_device(self, device_id: int) -> Optional[AnyDevice]:
        with self._lock:
            return self._registry.turn_on(device_id)

    def turn_off_device(self, device_id: int) -> Optional[AnyDevice]:
        with self._lock:
            return self._registry.turn_off(device_id)

    def set_device_attribute(self, device_id: int, name: str, value: Any) -> Optional[AnyDevice]:
        """
        Update a device attribute (e.g. a thermostat's temperature).

        Raises:
            ValueError: If the device does not expose the attribute
        """
        with self._lock:
            return self._registry.set_attribute(device_id, name, value)

    # =========================================================================
    # Schedules and triggers
    # =========================================================================

    def set_schedule(
        self,
        device_id: int,
        at: "time | timedelta | str",
        command: "Command | str",
    ) -> ScheduleEntry:
        with self._lock:
            return self._schedules.add(device_id, at, command)

    def add_trigger(
        self,
        condition_type: str,
        operator: "ComparisonOperator | str",
        threshold: int,
        action: ActionConfig,
        source_device_id: Optional[int] = None,
    ) -> TriggerRule:
        with self._lock:
            return self._triggers.add(condition_type, operator, threshold, action, source_device_id)

    @property
    def schedules(self) -> List[ScheduleEntry]:
        with self._lock:
            return self._schedules.entries

    @property
    def triggers(self) -> List[TriggerRule]:
        with self._lock:
            return self._triggers.rules

    def check_schedules(self, now: Optional[datetime] = None) -> EngineResult:
        """Poll the schedule engine."""
        with self._lock:
            return self._schedules.poll(now)

    def check_triggers(self) -> EngineResult:
        """Poll the trigger engine."""
        with self._lock:
            return self._triggers.poll()

    def get_trigger_history(self, limit: int = 20) -> List[RuleExecution]:
        with self._lock:
            return self._triggers.get_history(limit)

    # =========================================================================
    # Observers
    # =========================================================================

    def register_observer(self, observer: Observer) -> None:
        with self._lock:
            self._bus.register(observer)

    def remove_observer(self, observer: Observer) -> None:
        with self._lock:
            self._bus.unregister(observer)

    # =========================================================================
    # Reports
    # =========================================================================

    def get_status_report(self) -> str:
        """All devices as "{Type} {Id} is {Status}.", space separated."""
        with self._lock:
            return " ".join(d.describe() for d in self._registry.all_devices())

    def get_scheduled_tasks(self) -> str:
        with self._lock:
            return ", ".join(e.describe() for e in self._schedules.entries)

    def get_automated_triggers(self) -> str:
        with self._lock:
            return ", ".join(r.describe() for r in self._triggers.rules)

    # =========================================================================
    # Configuration
    # =========================================================================

    @classmethod
    def from_config(cls, data: Dict[str, Any]) -> "Hub":
        """
        Build a hub from a config dict.

        Recognized keys: "settings", "devices", "schedules", "triggers".
        """
        hub = cls(HubConfig.from_dict(data.get("settings", {})))
        hub.load_config(data)
        return hub

    def load_config(self, data: Dict[str, Any]) -> None:
        """
        Add the devices, schedules and triggers listed in a config dict.

        Every entry is built and checked before the hub is touched, so a bad
        entry anywhere in the config leaves the hub unchanged.

        Raises:
            DuplicateDeviceError, InvalidDeviceKindError, InvalidCommandError,
            InvalidOperatorError, InvalidThresholdError: On bad entries
            KeyError: If a required entry field is missing
        """
        with self._lock:
            devices = []
            seen_ids = set()
            for entry in data.get("devices", []):
                device = create_device(
                    entry["id"],
                    entry["type"],
                    entry.get("temperature"),
                    default_temperature=self.config.default_temperature,
                )
                if device.id in seen_ids or device.id in self._registry:
                    raise DuplicateDeviceError(device.id)
                seen_ids.add(device.id)
                devices.append(device)

            schedules = [
                build_entry(entry["device_id"], entry["time"], entry["command"])
                for entry in data.get("schedules", [])
            ]

            triggers = [
                TriggerRule(
                    condition_type=entry["condition_type"],
                    operator=entry["operator"],
                    threshold=entry["threshold"],
                    action=entry["action"],
                    source_device_id=entry.get("source_device_id"),
                )
                for entry in data.get("triggers", [])
            ]

            for device in devices:
                self._registry.add(device)
            for schedule in schedules:
                self._schedules.add_entry(schedule)
            for rule in triggers:
                self._triggers.add_rule(rule)

        logger.info(
            f"Loaded config: {len(devices)} device(s), "
            f"{len(schedules)} schedule(s), "
            f"{len(triggers)} trigger(s)"
        )
