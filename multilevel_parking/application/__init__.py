"""Application layer: service, commands, DTOs and settings."""

from .settings import ParkingSettings
from .parking_service import (
    ParkingService, ParkingServiceFactory,
    ParkingServiceError, MalformedCommandError, LotNotCreatedError
)
from .commands import (
    Command, CommandResult, CommandParser, CommandProcessor,
    CreateParkingLotCommand, ParkVehicleCommand, UnparkVehicleCommand,
    DisplayCommand, ExitCommand, render_floor_report
)

__all__ = [
    "ParkingSettings", "ParkingService", "ParkingServiceFactory",
    "ParkingServiceError", "MalformedCommandError", "LotNotCreatedError",
    "Command", "CommandResult", "CommandParser", "CommandProcessor",
    "CreateParkingLotCommand", "ParkVehicleCommand", "UnparkVehicleCommand",
    "DisplayCommand", "ExitCommand", "render_floor_report",
]
