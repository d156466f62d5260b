# File: multilevel_parking/infrastructure/messaging.py
"""
Messaging Infrastructure for the Multi-Floor Parking Lot

In-process publish/subscribe for the domain events raised by the
ParkingLot aggregate. Handlers run synchronously in the publishing thread;
a failing handler is logged and never affects the command that raised the
event.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Dict, List, Deque, Any
from enum import Enum
import logging
import threading

from ..domain.models import DomainEvent


# ============================================================================
# EVENT TYPES
# ============================================================================

class EventType(str, Enum):
    """Domain event types"""
    PARKING_LOT_CREATED = "parking_lot.created"
    VEHICLE_PARKED = "vehicle.parked"
    VEHICLE_LEFT = "vehicle.left"


# ============================================================================
# EVENT HANDLERS
# ============================================================================

class EventHandler(ABC):
    """Abstract base class for event handlers"""

    @abstractmethod
    def handle(self, event: DomainEvent) -> None:
        """Handle a domain event"""
        pass

    def can_handle(self, event: DomainEvent) -> bool:
        return True


class OccupancyAuditHandler(EventHandler):
    """
    Logs every parking event and keeps the most recent ones in memory
    """

    def __init__(self, max_entries: int = 1000):
        self.logger = logging.getLogger(self.__class__.__name__)
        self._entries: Deque[Dict[str, Any]] = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def handle(self, event: DomainEvent) -> None:
        entry = event.to_dict()
        with self._lock:
            self._entries.append(entry)
        self.logger.info(f"{entry['event_type']}: {entry['data']}")

    @property
    def entries(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


# ============================================================================
# EVENT BUS (In-memory)
# ============================================================================

class EventBus:
    """
    In-memory event bus for intra-process event publishing
    """

    def __init__(self):
        self._subscribers: Dict[EventType, List[EventHandler]] = {}
        self._lock = threading.Lock()
        self._logger = logging.getLogger(self.__class__.__name__)

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        """Subscribe to events of a specific type"""
        with self._lock:
            handlers = self._subscribers.setdefault(event_type, [])
            if handler not in handlers:
                handlers.append(handler)
                self._logger.debug(f"Subscribed {handler.__class__.__name__} to {event_type.value}")

    def subscribe_all(self, handler: EventHandler) -> None:
        for event_type in EventType:
            self.subscribe(event_type, handler)

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> None:
        with self._lock:
            handlers = self._subscribers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)
                self._logger.debug(f"Unsubscribed {handler.__class__.__name__} from {event_type.value}")

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers"""
        event_type = EventType(event.event_type)
        self._logger.debug(f"Publishing event: {event_type.value} (ID: {event.event_id})")

        with self._lock:
            handlers = list(self._subscribers.get(event_type, []))

        for handler in handlers:
            if not handler.can_handle(event):
                continue
            try:
                handler.handle(event)
            except Exception as e:
                self._logger.error(
                    f"Error handling event {event_type.value} with {handler.__class__.__name__}: {e}",
                    exc_info=True
                )

    def publish_all(self, events: List[DomainEvent]) -> None:
        for event in events:
            self.publish(event)

    def clear_subscribers(self) -> None:
        """Clear all subscribers (for testing)"""
        with self._lock:
            self._subscribers.clear()
