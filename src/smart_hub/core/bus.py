"""
Notification bus for device state changes.

The bus is a simple, synchronous fan-out to registered observers.
"""

from dataclasses import dataclass, field
from datetime import datetime, UTC
from typing import Optional, Dict, Any, Callable, List, Tuple
import logging

from .exceptions import ObserverError

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    """Get current UTC time (for default factory)."""
    return datetime.now(UTC)


@dataclass
class Event:
    """
    A state-change notification.

    Attributes:
        type: Event type (e.g., "device.state_changed", "schedules.checked")
        source: Component that emitted the event (e.g., "registry", "triggers")
        device_id: Optional device this event relates to
        payload: Event-specific data
        timestamp: When the event occurred
    """

    type: str
    source: str
    device_id: Optional[int] = None
    payload: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=_utc_now)


Observer = Callable[[Event], None]


class NotificationBus:
    """
    Synchronous observer fan-out for one hub.

    Observers are called in registration order. Registering the same observer
    twice delivers every event to it twice.

    By default a failing observer propagates and the remaining observers are
    not called. With isolate_failures=True every observer runs and the
    failures are raised together as an ObserverError.
    """

    def __init__(self, isolate_failures: bool = False) -> None:
        """
        Initialize the bus.

        Args:
            isolate_failures: Run every observer even if some fail
        """
        self._observers: List[Observer] = []
        self.isolate_failures = isolate_failures

    @property
    def observers(self) -> List[Observer]:
        return list(self._observers)

    def register(self, observer: Observer) -> None:
        """
        Register an observer.

        Args:
            observer: Callable that receives Event objects
        """
        self._observers.append(observer)
        logger.debug(f"Registered observer {_name_of(observer)}")

    def unregister(self, observer: Observer) -> None:
        """
        Remove the first registration of an observer. No-op if absent.

        Args:
            observer: The observer to remove
        """
        try:
            self._observers.remove(observer)
        except ValueError:
            return
        logger.debug(f"Unregistered observer {_name_of(observer)}")

    def notify_all(self, event: Event) -> None:
        """
        Deliver an event to every registered observer.

        Args:
            event: The event to deliver

        Raises:
            ObserverError: In isolation mode, if any observer failed
        """
        logger.debug(f"Notifying {len(self._observers)} observer(s): {event.type}")

        if not self.isolate_failures:
            for observer in list(self._observers):
                observer(event)
            return

        failures: List[Tuple[Observer, Exception]] = []
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception as e:
                logger.error(
                    f"Error in observer {_name_of(observer)} for event {event.type}: {e}",
                    exc_info=True,
                )
                failures.append((observer, e))

        if failures:
            raise ObserverError(failures)

    publish = notify_all


def _name_of(observer: Observer) -> str:
    return getattr(observer, "__name__", type(observer).__name__)
