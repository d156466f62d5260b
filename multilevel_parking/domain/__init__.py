"""Domain layer: vehicles, slots, floors, tickets and the ParkingLot aggregate."""

from .models import (
    VehicleCategory, VehicleKind, Vehicle, FloorLayout, Ticket, UnparkResult,
    Slot, Floor, DomainEvent, ParkingLotCreatedEvent, VehicleParkedEvent, VehicleLeftEvent
)
from .policies import (
    DEFAULT_TICKET_SEPARATOR, category_for_kind, derive_ticket_id, validate_ticket_separator,
    SlotAllocationStrategy, LowestFloorFirstStrategy
)
from .aggregates import AggregateRoot, ParkingLot

__all__ = [
    "VehicleCategory", "VehicleKind", "Vehicle", "FloorLayout", "Ticket", "UnparkResult",
    "Slot", "Floor", "DomainEvent", "ParkingLotCreatedEvent", "VehicleParkedEvent",
    "VehicleLeftEvent", "DEFAULT_TICKET_SEPARATOR", "category_for_kind", "derive_ticket_id",
    "validate_ticket_separator", "SlotAllocationStrategy", "LowestFloorFirstStrategy", "AggregateRoot", "ParkingLot",
]
