# File: multilevel_parking/domain/models.py
"""
Domain Models for the Multi-Floor Parking Lot

This module contains:
1. Enums: vehicle kinds and the slot categories they map to
2. Value Objects: Vehicle, FloorLayout, Ticket, UnparkResult
3. Entities: Slot and Floor, which carry mutable occupancy
4. Domain Events: events raised by the ParkingLot aggregate

Slots and floors are only ever mutated through the ParkingLot aggregate
root (see aggregates.py).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, List, Dict, Any
from datetime import datetime
from enum import Enum
import uuid


# ============================================================================
# ENUMS FOR DOMAIN TYPES
# ============================================================================

class VehicleCategory(Enum):
    """
    Slot compatibility class
    A slot accepts exactly one category; a vehicle requires exactly one
    """
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"

    def __str__(self) -> str:
        return self.name


class VehicleKind(Enum):
    """Input-facing vehicle type"""
    BIKE = "bike"
    CAR = "car"
    TRUCK = "truck"

    @classmethod
    def parse(cls, value: str) -> Optional['VehicleKind']:
        """Case-insensitive lookup, None for an unknown kind"""
        try:
            return cls(value.strip().lower())
        except (ValueError, AttributeError):
            return None

    def __str__(self) -> str:
        return self.name


# ============================================================================
# VALUE OBJECTS
# ============================================================================

@dataclass(frozen=True)  # Value objects are immutable
class Vehicle:
    """
    Value Object: a vehicle as seen by the parking lot
    Two vehicles with identical fields are indistinguishable
    """
    kind: VehicleKind
    registration_number: str
    color: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "registration_number": self.registration_number,
            "color": self.color,
        }

    def __str__(self) -> str:
        return f"{self.kind} {self.registration_number} ({self.color})"


@dataclass(frozen=True)
class FloorLayout:
    """
    Value Object: how slot categories are laid out on every floor

    Positions 1..large are LARGE, the next `small` positions are SMALL and
    every remaining position is MEDIUM. The defaults give slot 1 LARGE,
    slots 2-3 SMALL and the rest MEDIUM.
    """
    large: int = 1
    small: int = 2

    def __post_init__(self):
        if self.large < 0 or self.small < 0:
            raise ValueError(
                f"Layout counts cannot be negative, got large={self.large}, small={self.small}"
            )

    def category_for_position(self, position: int) -> VehicleCategory:
        """Category of the 1-based slot position"""
        if position < 1:
            raise ValueError(f"Slot position must be positive, got: {position}")
        if position <= self.large:
            return VehicleCategory.LARGE
        if position <= self.large + self.small:
            return VehicleCategory.SMALL
        return VehicleCategory.MEDIUM

    def categories(self, slot_count: int) -> List[VehicleCategory]:
        return [self.category_for_position(n) for n in range(1, slot_count + 1)]


@dataclass(frozen=True)
class Ticket:
    """Value Object: allocation receipt binding a vehicle to a (floor, slot)"""
    ticket_id: str
    lot_id: str
    floor_number: int
    slot_number: int
    vehicle: Vehicle

    @property
    def registration_number(self) -> str:
        return self.vehicle.registration_number

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ticket_id": self.ticket_id,
            "lot_id": self.lot_id,
            "floor_number": self.floor_number,
            "slot_number": self.slot_number,
            "vehicle": self.vehicle.to_dict(),
        }


@dataclass(frozen=True)
class UnparkResult:
    """Result of an unpark: valid=False means the ticket was invalid"""
    valid: bool
    vehicle: Optional[Vehicle] = None

    @classmethod
    def invalid(cls) -> 'UnparkResult':
        return cls(valid=False)

    @classmethod
    def released(cls, vehicle: Vehicle) -> 'UnparkResult':
        return cls(valid=True, vehicle=vehicle)


# ============================================================================
# DOMAIN ENTITIES
# ============================================================================

class Entity:
    """
    Base class for domain entities
    Entities are equal when they have the same ID and type
    """

    def __init__(self, id: Optional[str] = None):
        self._id = id or str(uuid.uuid4())

    @property
    def id(self) -> str:
        return self._id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return False
        return self.id == other.id and type(self) == type(other)

    def __hash__(self) -> int:
        return hash((self.id, type(self).__name__))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id})"


class Slot:
    """
    A single parking space with a fixed category

    State machine: FREE -> OCCUPIED through park(), OCCUPIED -> FREE
    through unpark(). The category never changes.
    """

    def __init__(self, number: int, category: VehicleCategory):
        if number < 1:
            raise ValueError("Slot number must be positive")
        self._number = number
        self._category = category
        self._occupant: Optional[Vehicle] = None

    @property
    def number(self) -> int:
        return self._number

    @property
    def category(self) -> VehicleCategory:
        return self._category

    @property
    def occupant(self) -> Optional[Vehicle]:
        return self._occupant

    @property
    def is_free(self) -> bool:
        return self._occupant is None

    def park(self, vehicle: Vehicle) -> bool:
        """
        Occupy the slot
        Returns: False (and changes nothing) if the slot is already occupied
        """
        if not self.is_free:
            return False
        self._occupant = vehicle
        return True

    def unpark(self) -> Optional[Vehicle]:
        """Vacate the slot and return the vehicle it held, None if it was free"""
        vehicle = self._occupant
        self._occupant = None
        return vehicle

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "category": self.category.value,
            "is_free": self.is_free,
            "occupant": self._occupant.to_dict() if self._occupant else None,
        }

    def __repr__(self) -> str:
        status = "free" if self.is_free else "occupied"
        return f"Slot({self.number}, {self.category}, {status})"


class Floor:
    """
    Ordered collection of slots, built once from a layout
    Slot numbers run 1..slot_count in ascending order
    """

    def __init__(self, number: int, slot_count: int, layout: Optional[FloorLayout] = None):
        if number < 1:
            raise ValueError("Floor number must be positive")
        if slot_count < 0:
            raise ValueError("Slot count cannot be negative")

        self._number = number
        self._slots: List[Slot] = [
            Slot(position, category)
            for position, category in enumerate((layout or FloorLayout()).categories(slot_count), start=1)
        ]

    @property
    def number(self) -> int:
        return self._number

    @property
    def slots(self) -> List[Slot]:
        """Copy of the slot list, in slot-number order"""
        return list(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def get_slot(self, slot_number: int) -> Optional[Slot]:
        """Slot by number, None when out of range"""
        if 1 <= slot_number <= len(self._slots):
            return self._slots[slot_number - 1]
        return None

    def find_first_free_slot(self, category: VehicleCategory) -> Optional[Slot]:
        """Lowest-numbered free slot of the given category"""
        for slot in self._slots:
            if slot.category == category and slot.is_free:
                return slot
        return None

    def free_slot_numbers(self, category: VehicleCategory) -> List[int]:
        return [s.number for s in self._slots if s.category == category and s.is_free]

    def occupied_slot_numbers(self, category: VehicleCategory) -> List[int]:
        return [s.number for s in self._slots if s.category == category and not s.is_free]

    def slot_numbers(self, category: VehicleCategory) -> List[int]:
        return [s.number for s in self._slots if s.category == category]

    def __repr__(self) -> str:
        return f"Floor({self.number}, slots={len(self._slots)})"


# ============================================================================
# DOMAIN EVENTS
# ============================================================================

class DomainEvent(ABC):
    """
    Base class for all domain events
    Events represent something that happened in the domain
    """

    event_type: str = "domain.event"

    def __init__(self):
        self.event_id = str(uuid.uuid4())
        self.timestamp = datetime.now()
        self.version = "1.0"

    @abstractmethod
    def data(self) -> Dict[str, Any]:
        """Event payload"""
        pass

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": self.event_type,
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "version": self.version,
            "data": self.data(),
        }

    def __str__(self) -> str:
        return f"{self.__class__.__name__} at {self.timestamp}"


class ParkingLotCreatedEvent(DomainEvent):
    """Event raised when a parking lot is built"""

    event_type = "parking_lot.created"

    def __init__(self, lot_id: str, number_of_floors: int, slots_per_floor: int):
        super().__init__()
        self.lot_id = lot_id
        self.number_of_floors = number_of_floors
        self.slots_per_floor = slots_per_floor

    def data(self) -> Dict[str, Any]:
        return {
            "lot_id": self.lot_id,
            "number_of_floors": self.number_of_floors,
            "slots_per_floor": self.slots_per_floor,
        }


class VehicleParkedEvent(DomainEvent):
    """Event raised when a vehicle is parked"""

    event_type = "vehicle.parked"

    def __init__(self, ticket: Ticket):
        super().__init__()
        self.ticket = ticket

    def data(self) -> Dict[str, Any]:
        return {
            "lot_id": self.ticket.lot_id,
            "ticket_id": self.ticket.ticket_id,
            "floor_number": self.ticket.floor_number,
            "slot_number": self.ticket.slot_number,
            "vehicle_kind": self.ticket.vehicle.kind.value,
            "registration_number": self.ticket.registration_number,
        }


class VehicleLeftEvent(DomainEvent):
    """Event raised when a vehicle leaves"""

    event_type = "vehicle.left"

    def __init__(self, ticket: Ticket):
        super().__init__()
        self.ticket = ticket

    def data(self) -> Dict[str, Any]:
        return {
            "lot_id": self.ticket.lot_id,
            "ticket_id": self.ticket.ticket_id,
            "floor_number": self.ticket.floor_number,
            "slot_number": self.ticket.slot_number,
            "registration_number": self.ticket.registration_number,
            "color": self.ticket.vehicle.color,
        }
