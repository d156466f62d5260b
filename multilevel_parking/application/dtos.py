# File: multilevel_parking/application/dtos.py
"""
Data Transfer Objects (DTOs) for the Multi-Floor Parking Lot

1. Input DTOs - requests built by the command parser
2. Output DTOs - results handed back to the command layer

DTO Principles:
- Validation at creation
- No business logic, only data
- Serialization support through BaseDTO
"""

from typing import Dict, List, Optional, Any
from enum import Enum
import json

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.models import VehicleKind


# ============================================================================
# BASE DTO CLASSES
# ============================================================================

class BaseDTO(BaseModel):
    """Base DTO with common functionality"""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_dict(self, exclude_none: bool = False, **kwargs) -> Dict[str, Any]:
        data = self.model_dump(**kwargs)
        if exclude_none:
            data = {k: v for k, v in data.items() if v is not None}
        return data

    def to_json(self, **kwargs) -> str:
        return self.model_dump_json(**kwargs)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseDTO':
        return cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> 'BaseDTO':
        return cls(**json.loads(json_str))


# ============================================================================
# ENUM DTOs
# ============================================================================

class VehicleKindDTO(str, Enum):
    BIKE = "bike"
    CAR = "car"
    TRUCK = "truck"


class DisplayTypeDTO(str, Enum):
    FREE_COUNT = "free_count"
    FREE_SLOTS = "free_slots"
    OCCUPIED_SLOTS = "occupied_slots"


def _parse_kind(v: Any) -> Any:
    """Known kinds in any case become their canonical value; anything else fails enum validation"""
    kind = VehicleKind.parse(v)
    return kind.value if kind else v


# ============================================================================
# REQUEST DTOs
# ============================================================================

class CreateLotRequestDTO(BaseDTO):
    """DTO for creating (or replacing) the parking lot"""
    lot_id: str = Field(min_length=1, description="Parking lot ID")
    number_of_floors: int = Field(ge=0, description="Number of floors")
    slots_per_floor: int = Field(ge=0, description="Slots on every floor")


class ParkRequestDTO(BaseDTO):
    """DTO for parking request"""
    vehicle_kind: VehicleKindDTO = Field(description="Vehicle kind (case-insensitive)")
    registration_number: str = Field(min_length=1, description="Registration number")
    color: str = Field(min_length=1, description="Vehicle color")

    @field_validator("vehicle_kind", mode="before")
    @classmethod
    def normalize_kind(cls, v):
        return _parse_kind(v)


class UnparkRequestDTO(BaseDTO):
    """DTO for unpark request"""
    ticket_id: str = Field(min_length=1, description="Ticket ID issued at park time")


class DisplayRequestDTO(BaseDTO):
    """DTO for an occupancy query"""
    display_type: DisplayTypeDTO = Field(description="free_count, free_slots or occupied_slots")
    vehicle_kind: VehicleKindDTO = Field(description="Vehicle kind (case-insensitive)")

    @field_validator("vehicle_kind", mode="before")
    @classmethod
    def normalize_kind(cls, v):
        return _parse_kind(v)


# ============================================================================
# RESULT DTOs
# ============================================================================

class LotCreatedDTO(BaseDTO):
    lot_id: str
    number_of_floors: int
    slots_per_floor: int
    message: Optional[str] = None


class ParkingAllocationDTO(BaseDTO):
    """DTO for parking allocation result"""
    success: bool = Field(description="Allocation success")
    ticket_id: Optional[str] = Field(default=None, description="Issued ticket ID")
    floor_number: Optional[int] = Field(default=None, description="Allocated floor")
    slot_number: Optional[int] = Field(default=None, description="Allocated slot number")
    message: Optional[str] = Field(default=None, description="Result message")


class ParkingExitDTO(BaseDTO):
    """DTO for unpark result"""
    success: bool = Field(description="Unpark success")
    registration_number: Optional[str] = Field(default=None, description="Registration of the released vehicle")
    color: Optional[str] = Field(default=None, description="Color of the released vehicle")
    message: Optional[str] = Field(default=None, description="Result message")


class FloorReportDTO(BaseDTO):
    """One floor's answer to an occupancy query"""
    floor_number: int = Field(ge=1)
    vehicle_kind: VehicleKindDTO
    display_type: DisplayTypeDTO
    slot_numbers: List[int] = Field(default_factory=list, description="Ascending slot numbers")
    count: int = Field(ge=0)


class CategoryStatusDTO(BaseDTO):
    total: int = Field(ge=0)
    occupied: int = Field(ge=0)
    free: int = Field(ge=0)


class ParkingLotStatusDTO(BaseDTO):
    """Lot-wide occupancy summary"""
    lot_id: str
    number_of_floors: int
    slots_per_floor: int
    active_tickets: int
    by_category: Dict[str, CategoryStatusDTO]
