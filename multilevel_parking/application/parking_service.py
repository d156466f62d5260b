# File: multilevel_parking/application/parking_service.py
"""
Parking Lot Application Service

Orchestrates the use cases of the system on top of the ParkingLot
aggregate:
1. Create (or replace) the lot
2. Park and unpark vehicles
3. Answer per-floor occupancy queries

The service owns the optional "current lot" for a session and publishes
the aggregate's domain events after every operation.
"""

from typing import Dict, List, Optional, Any
import logging
import threading

from ..domain.models import Vehicle, VehicleKind
from ..domain.aggregates import ParkingLot
from ..infrastructure.messaging import EventBus, OccupancyAuditHandler
from .settings import ParkingSettings
from .dtos import (
    CreateLotRequestDTO, ParkRequestDTO, UnparkRequestDTO, DisplayRequestDTO,
    LotCreatedDTO, ParkingAllocationDTO, ParkingExitDTO, FloorReportDTO,
    DisplayTypeDTO, CategoryStatusDTO, ParkingLotStatusDTO
)


# ============================================================================
# EXCEPTIONS
# ============================================================================

class ParkingServiceError(Exception):
    """Base exception for parking service errors"""
    pass


class MalformedCommandError(ParkingServiceError):
    """Command line with bad arity, bad numbers, unknown kind or unknown word"""
    pass


class LotNotCreatedError(ParkingServiceError):
    """Operation needs a parking lot and none has been created"""
    pass


# ============================================================================
# MAIN PARKING SERVICE
# ============================================================================

class ParkingService:
    """
    Main application service for the parking lot
    """

    def __init__(
        self,
        settings: Optional[ParkingSettings] = None,
        event_bus: Optional[EventBus] = None
    ):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.settings = settings or ParkingSettings()
        self.event_bus = event_bus or EventBus()

        self._lot: Optional[ParkingLot] = None
        self._lot_lock = threading.Lock()

        self.logger.info("ParkingService initialized")

    @property
    def parking_lot(self) -> Optional[ParkingLot]:
        with self._lot_lock:
            return self._lot

    @property
    def has_lot(self) -> bool:
        return self.parking_lot is not None

    def _require_lot(self) -> ParkingLot:
        lot = self.parking_lot
        if lot is None:
            raise LotNotCreatedError("No parking lot has been created")
        return lot

    def _publish_events(self, lot: ParkingLot) -> None:
        self.event_bus.publish_all(lot.clear_events())

    # ========================================================================
    # USE CASES
    # ========================================================================

    def create_lot(self, request: CreateLotRequestDTO) -> LotCreatedDTO:
        """Build a new lot and make it the current one, replacing any previous lot"""
        lot = ParkingLot(
            lot_id=request.lot_id,
            number_of_floors=request.number_of_floors,
            slots_per_floor=request.slots_per_floor,
            layout=self.settings.floor_layout(),
            ticket_separator=self.settings.ticket_separator
        )

        with self._lot_lock:
            previous, self._lot = self._lot, lot

        if previous is not None:
            self.logger.info(f"Replaced parking lot {previous.lot_id} with {lot.lot_id}")

        self._publish_events(lot)
        return LotCreatedDTO(
            lot_id=lot.lot_id,
            number_of_floors=lot.number_of_floors,
            slots_per_floor=lot.slots_per_floor,
            message="Parking lot created"
        )

    def park_vehicle(self, request: ParkRequestDTO) -> ParkingAllocationDTO:
        """
        Park a vehicle in the current lot

        Returns: allocation with success=False when no matching slot is free
        Raises: LotNotCreatedError
        """
        lot = self._require_lot()
        vehicle = Vehicle(
            kind=VehicleKind(request.vehicle_kind),
            registration_number=request.registration_number,
            color=request.color
        )

        ticket = lot.park_vehicle(vehicle)
        self._publish_events(lot)

        if ticket is None:
            return ParkingAllocationDTO(success=False, message="Parking Lot Full")

        return ParkingAllocationDTO(
            success=True,
            ticket_id=ticket.ticket_id,
            floor_number=ticket.floor_number,
            slot_number=ticket.slot_number,
            message="Vehicle parked successfully"
        )

    def unpark_vehicle(self, request: UnparkRequestDTO) -> ParkingExitDTO:
        """
        Release the slot held by a ticket

        Returns: exit result with success=False for an invalid ticket
        Raises: LotNotCreatedError
        """
        lot = self._require_lot()
        result = lot.unpark_vehicle(request.ticket_id)
        self._publish_events(lot)

        if not result.valid:
            return ParkingExitDTO(success=False, message="Invalid Ticket")

        return ParkingExitDTO(
            success=True,
            registration_number=result.vehicle.registration_number,
            color=result.vehicle.color,
            message="Vehicle unparked successfully"
        )

    def query(self, request: DisplayRequestDTO) -> List[FloorReportDTO]:
        """
        Per-floor occupancy for one vehicle kind, ordered by floor number
        Raises: LotNotCreatedError
        """
        lot = self._require_lot()
        kind = VehicleKind(request.vehicle_kind)
        display_type = DisplayTypeDTO(request.display_type)

        if display_type == DisplayTypeDTO.OCCUPIED_SLOTS:
            per_floor = lot.occupied_slots(kind)
        else:
            per_floor = lot.free_slots(kind)

        reports = []
        for floor_number, slot_numbers in per_floor:
            reports.append(FloorReportDTO(
                floor_number=floor_number,
                vehicle_kind=request.vehicle_kind,
                display_type=display_type,
                slot_numbers=[] if display_type == DisplayTypeDTO.FREE_COUNT else slot_numbers,
                count=len(slot_numbers)
            ))
        return reports

    def get_status(self) -> ParkingLotStatusDTO:
        """Lot-wide totals per category. Raises: LotNotCreatedError"""
        report = self._require_lot().get_status_report()
        return ParkingLotStatusDTO(
            lot_id=report["lot_id"],
            number_of_floors=report["number_of_floors"],
            slots_per_floor=report["slots_per_floor"],
            active_tickets=report["active_tickets"],
            by_category={
                name: CategoryStatusDTO(**counts)
                for name, counts in report["by_category"].items()
            }
        )


# ============================================================================
# SERVICE FACTORY
# ============================================================================

class ParkingServiceFactory:
    """Factory for creating parking service instances"""

    @staticmethod
    def create_default_service() -> ParkingService:
        return ParkingServiceFactory.create_service(ParkingSettings())

    @staticmethod
    def create_service_with_config(config: Dict[str, Any]) -> ParkingService:
        return ParkingServiceFactory.create_service(ParkingSettings.from_dict(config))

    @staticmethod
    def create_service(settings: ParkingSettings) -> ParkingService:
        """Service with an event bus that audits every parking event"""
        event_bus = EventBus()
        event_bus.subscribe_all(OccupancyAuditHandler())
        return ParkingService(settings=settings, event_bus=event_bus)
