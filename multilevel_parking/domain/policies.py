# File: multilevel_parking/domain/policies.py
"""
Allocation Policies for the Multi-Floor Parking Lot

1. Category mapping - which slot category a vehicle kind requires
2. Ticket id derivation - deterministic id for an allocation
3. Slot allocation strategy - which free slot a vehicle receives

All functions here are pure; the strategy reads floor state but never
mutates it.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple
import logging

from .models import Floor, Slot, VehicleCategory, VehicleKind


DEFAULT_TICKET_SEPARATOR = "_"

_CATEGORY_BY_KIND = {
    VehicleKind.BIKE: VehicleCategory.SMALL,
    VehicleKind.CAR: VehicleCategory.MEDIUM,
    VehicleKind.TRUCK: VehicleCategory.LARGE,
}


def category_for_kind(kind: VehicleKind) -> VehicleCategory:
    """Slot category a vehicle kind requires; MEDIUM for anything unmapped"""
    return _CATEGORY_BY_KIND.get(kind, VehicleCategory.MEDIUM)


def validate_ticket_separator(separator: str) -> str:
    """
    A separator must be non-empty with no digits or whitespace, so that
    floor and slot stay delimited and the id stays a single command token
    """
    if not separator:
        raise ValueError("Ticket separator cannot be empty")
    if any(ch.isdigit() or ch.isspace() for ch in separator):
        raise ValueError(f"Ticket separator cannot contain digits or whitespace, got: {separator!r}")
    return separator


def derive_ticket_id(
    lot_id: str,
    floor_number: int,
    slot_number: int,
    registration_number: str,
    separator: str = DEFAULT_TICKET_SEPARATOR
) -> str:
    """
    Ticket id for an allocation: <lot><sep><floor><sep><slot><sep><registration>

    Floor and slot are integers, so for a fixed lot two active tickets can
    only share an id if they share (floor, slot), which the lot never allows.
    """
    validate_ticket_separator(separator)
    return separator.join([lot_id, str(floor_number), str(slot_number), registration_number])


# ============================================================================
# SLOT ALLOCATION STRATEGIES
# ============================================================================

class SlotAllocationStrategy(ABC):
    """
    Abstract base class for slot allocation
    Callers hold the lot lock while a strategy runs
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def find_slot(
        self,
        floors: Sequence[Floor],
        category: VehicleCategory
    ) -> Optional[Tuple[Floor, Slot]]:
        """
        Pick a free slot of the given category
        Returns: (floor, slot) or None when every matching slot is taken
        """
        pass

    def get_strategy_name(self) -> str:
        return self.__class__.__name__.replace("Strategy", "")

    def __str__(self) -> str:
        return self.get_strategy_name()


class LowestFloorFirstStrategy(SlotAllocationStrategy):
    """
    Strategy: first free matching slot in (floor, slot) order
    Lowest floor wins, then lowest slot number. No best-fit, no balancing.
    """

    def find_slot(
        self,
        floors: Sequence[Floor],
        category: VehicleCategory
    ) -> Optional[Tuple[Floor, Slot]]:
        for floor in floors:
            slot = floor.find_first_free_slot(category)
            if slot is not None:
                self.logger.debug(f"Found {category} slot {slot.number} on floor {floor.number}")
                return floor, slot
        return None
