# File: multilevel_parking/domain/aggregates.py
"""
Aggregate Roots for the Multi-Floor Parking Lot
Following Domain-Driven Design (DDD) Aggregate Pattern

The ParkingLot aggregate owns every Floor, every Slot and every active
Ticket. All modifications go through its methods, which run under one
lot-wide lock so that scanning for a slot and occupying it can never
interleave with another park or unpark.
"""

from typing import List, Optional, Dict, Tuple, Any
import logging
import threading

from .models import (
    Entity, Floor, FloorLayout, Ticket, UnparkResult,
    Vehicle, VehicleKind, VehicleCategory,
    DomainEvent, ParkingLotCreatedEvent, VehicleParkedEvent, VehicleLeftEvent
)
from .policies import (
    SlotAllocationStrategy, LowestFloorFirstStrategy,
    DEFAULT_TICKET_SEPARATOR, category_for_kind, derive_ticket_id,
    validate_ticket_separator
)


# ============================================================================
# BASE AGGREGATE ROOT
# ============================================================================

class AggregateRoot(Entity):
    """
    Base class for all aggregate roots
    Provides domain event collection and versioning
    """

    def __init__(self, id: Optional[str] = None):
        super().__init__(id)
        self._version: int = 1
        self._changes: List[DomainEvent] = []
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def version(self) -> int:
        return self._version

    def _increment_version(self) -> None:
        self._version += 1

    def _add_domain_event(self, event: DomainEvent) -> None:
        self._changes.append(event)
        self._logger.debug(f"Added domain event: {event.__class__.__name__}")

    def clear_events(self) -> List[DomainEvent]:
        """Clear and return all domain events"""
        events = self._changes.copy()
        self._changes.clear()
        return events

    @property
    def has_changes(self) -> bool:
        return len(self._changes) > 0

    def _validate_invariants(self) -> None:
        """Validate aggregate invariants - to be overridden by subclasses"""
        pass


# ============================================================================
# PARKING LOT AGGREGATE
# ============================================================================

class ParkingLot(AggregateRoot):
    """
    Aggregate Root: the allocation manager

    Floors are created once at construction and never resized. Park and
    unpark return result values for the Full / InvalidTicket cases instead
    of raising.
    """

    def __init__(
        self,
        lot_id: str,
        number_of_floors: int,
        slots_per_floor: int,
        layout: Optional[FloorLayout] = None,
        strategy: Optional[SlotAllocationStrategy] = None,
        ticket_separator: str = DEFAULT_TICKET_SEPARATOR
    ):
        if not lot_id:
            raise ValueError("Parking lot id cannot be empty")
        if number_of_floors < 0:
            raise ValueError(f"Number of floors cannot be negative, got: {number_of_floors}")
        if slots_per_floor < 0:
            raise ValueError(f"Slots per floor cannot be negative, got: {slots_per_floor}")
        validate_ticket_separator(ticket_separator)

        super().__init__(lot_id)
        self.number_of_floors = number_of_floors
        self.slots_per_floor = slots_per_floor
        self.layout = layout or FloorLayout()
        self.strategy = strategy or LowestFloorFirstStrategy()
        self.ticket_separator = ticket_separator

        self._floors: List[Floor] = [
            Floor(number, slots_per_floor, self.layout)
            for number in range(1, number_of_floors + 1)
        ]
        self._active_tickets: Dict[str, Ticket] = {}  # ticket_id -> Ticket
        self._lock = threading.RLock()

        self._validate_invariants()
        self._add_domain_event(
            ParkingLotCreatedEvent(self.id, number_of_floors, slots_per_floor)
        )
        self._logger.info(
            f"Created ParkingLot {self.id}: {number_of_floors} floors x {slots_per_floor} slots"
        )

    @property
    def lot_id(self) -> str:
        return self.id

    @property
    def floors(self) -> List[Floor]:
        return list(self._floors)

    @property
    def active_ticket_count(self) -> int:
        with self._lock:
            return len(self._active_tickets)

    def get_ticket(self, ticket_id: str) -> Optional[Ticket]:
        with self._lock:
            return self._active_tickets.get(ticket_id)

    def clear_events(self) -> List[DomainEvent]:
        with self._lock:
            return super().clear_events()

    # ========================================================================
    # PUBLIC BUSINESS METHODS
    # ========================================================================

    def park_vehicle(self, vehicle: Vehicle) -> Optional[Ticket]:
        """
        Park a vehicle in the first free slot of its category
        Returns: the issued Ticket, or None when the lot is full for that category
        """
        required = category_for_kind(vehicle.kind)

        with self._lock:
            located = self.strategy.find_slot(self._floors, required)
            if located is None:
                self._logger.warning(
                    f"No free {required} slot for {vehicle.registration_number}"
                )
                return None

            floor, slot = located
            ticket_id = derive_ticket_id(
                self.id, floor.number, slot.number,
                vehicle.registration_number, self.ticket_separator
            )
            if ticket_id in self._active_tickets:
                self._logger.error(f"Ticket id {ticket_id} is already active; refusing allocation")
                return None

            slot.park(vehicle)
            ticket = Ticket(
                ticket_id=ticket_id,
                lot_id=self.id,
                floor_number=floor.number,
                slot_number=slot.number,
                vehicle=vehicle
            )
            self._active_tickets[ticket.ticket_id] = ticket
            self._increment_version()
            self._add_domain_event(VehicleParkedEvent(ticket))

        self._logger.info(
            f"Vehicle {vehicle.registration_number} parked on floor {ticket.floor_number} "
            f"slot {ticket.slot_number} (Ticket: {ticket.ticket_id})"
        )
        return ticket

    def unpark_vehicle(self, ticket_id: str) -> UnparkResult:
        """
        Release the slot named by an active ticket
        Returns: UnparkResult.invalid() for an unknown ticket, or one whose
        slot is out of bounds or already free
        """
        with self._lock:
            ticket = self._active_tickets.get(ticket_id)
            if ticket is None:
                self._logger.warning(f"Unknown ticket: {ticket_id}")
                return UnparkResult.invalid()

            floor = self._get_floor(ticket.floor_number)
            slot = floor.get_slot(ticket.slot_number) if floor else None
            if slot is None or slot.is_free:
                self._logger.warning(
                    f"Ticket {ticket_id} points at floor {ticket.floor_number} "
                    f"slot {ticket.slot_number}, which is missing or free"
                )
                return UnparkResult.invalid()

            vehicle = slot.unpark()
            del self._active_tickets[ticket_id]
            self._increment_version()
            self._add_domain_event(VehicleLeftEvent(ticket))

        self._logger.info(
            f"Vehicle {vehicle.registration_number} left floor {ticket.floor_number} "
            f"slot {ticket.slot_number}"
        )
        return UnparkResult.released(vehicle)

    # ========================================================================
    # QUERY METHODS (Read-only)
    # ========================================================================

    def free_count(self, kind: VehicleKind) -> List[Tuple[int, int]]:
        """(floor_number, free slot count) for every floor"""
        return [(number, len(slots)) for number, slots in self.free_slots(kind)]

    def free_slots(self, kind: VehicleKind) -> List[Tuple[int, List[int]]]:
        """(floor_number, ascending free slot numbers) for every floor"""
        category = category_for_kind(kind)
        with self._lock:
            return [(f.number, f.free_slot_numbers(category)) for f in self._floors]

    def occupied_slots(self, kind: VehicleKind) -> List[Tuple[int, List[int]]]:
        """(floor_number, ascending occupied slot numbers) for every floor"""
        category = category_for_kind(kind)
        with self._lock:
            return [(f.number, f.occupied_slot_numbers(category)) for f in self._floors]

    def get_status_report(self) -> Dict[str, Any]:
        """Totals per category across all floors"""
        with self._lock:
            by_category = {}
            for category in VehicleCategory:
                total = sum(len(f.slot_numbers(category)) for f in self._floors)
                occupied = sum(len(f.occupied_slot_numbers(category)) for f in self._floors)
                by_category[category.name] = {
                    "total": total,
                    "occupied": occupied,
                    "free": total - occupied,
                }

            return {
                "lot_id": self.id,
                "number_of_floors": self.number_of_floors,
                "slots_per_floor": self.slots_per_floor,
                "active_tickets": len(self._active_tickets),
                "by_category": by_category,
                "version": self.version,
            }

    # ========================================================================
    # INTERNAL HELPER METHODS
    # ========================================================================

    def _get_floor(self, floor_number: int) -> Optional[Floor]:
        if 1 <= floor_number <= len(self._floors):
            return self._floors[floor_number - 1]
        return None

    def _validate_invariants(self) -> None:
        """Every active ticket names an occupied slot holding its vehicle, and nothing else is occupied"""
        with self._lock:
            occupied = sum(
                1 for floor in self._floors for slot in floor.slots if not slot.is_free
            )
            if occupied != len(self._active_tickets):
                raise ValueError(
                    f"Occupancy mismatch: {occupied} occupied slots, "
                    f"{len(self._active_tickets)} active tickets"
                )

            for ticket_id, ticket in self._active_tickets.items():
                floor = self._get_floor(ticket.floor_number)
                slot = floor.get_slot(ticket.slot_number) if floor else None
                if slot is None or slot.occupant != ticket.vehicle:
                    raise ValueError(f"Ticket {ticket_id} does not match its slot")

        self._logger.debug("All parking lot invariants satisfied")

    def check_invariants(self) -> None:
        """Raise ValueError if the slot state and the ticket map have drifted apart"""
        self._validate_invariants()

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "lot_id": self.id,
                "number_of_floors": self.number_of_floors,
                "slots_per_floor": self.slots_per_floor,
                "layout": {"large": self.layout.large, "small": self.layout.small},
                "strategy": self.strategy.get_strategy_name(),
                "floors": [
                    {"number": f.number, "slots": [s.to_dict() for s in f.slots]}
                    for f in self._floors
                ],
                "active_tickets": [t.to_dict() for t in self._active_tickets.values()],
                "version": self.version,
            }

    def __str__(self) -> str:
        return (
            f"ParkingLot: {self.id} ({self.number_of_floors} floors, "
            f"{self.active_ticket_count} vehicles parked)"
        )
