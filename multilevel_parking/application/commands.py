# File: multilevel_parking/application/commands.py
"""
Command Pattern Implementation for the Multi-Floor Parking Lot

Each input line becomes a command object that can be executed against the
ParkingService and rendered as output lines.

Command words:
- create_parking_lot <lot_id> <floors> <slots_per_floor>
- park_vehicle <kind> <registration> <color>
- unpark_vehicle <ticket_id>
- display <free_count|free_slots|occupied_slots> <kind>
- exit
"""

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, List, Optional, Any
import logging
import uuid

from pydantic import ValidationError

from .parking_service import ParkingService, MalformedCommandError, LotNotCreatedError
from .dtos import (
    CreateLotRequestDTO, ParkRequestDTO, UnparkRequestDTO, DisplayRequestDTO,
    DisplayTypeDTO, FloorReportDTO
)


# ============================================================================
# COMMAND RESULT
# ============================================================================

@dataclass
class CommandResult:
    """Outcome of a command plus the lines to show the user"""
    success: bool
    command_type: str
    lines: List[str] = field(default_factory=list)
    data: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "command_type": self.command_type,
            "lines": list(self.lines),
            "data": self.data,
        }


# ============================================================================
# OUTPUT RENDERING
# ============================================================================

def _render_slot_list(slot_numbers: List[int]) -> str:
    return ",".join(str(n) for n in slot_numbers)


def render_floor_report(report: FloorReportDTO) -> str:
    """One output line for one floor of a display query"""
    kind = report.vehicle_kind.upper()
    if report.display_type == DisplayTypeDTO.FREE_COUNT.value:
        return f"No. of free slots for {kind} on Floor {report.floor_number}: {report.count}"
    if report.display_type == DisplayTypeDTO.FREE_SLOTS.value:
        return f"Free slots for {kind} on Floor {report.floor_number}: {_render_slot_list(report.slot_numbers)}"
    return f"Occupied slots for {kind} on Floor {report.floor_number}: {_render_slot_list(report.slot_numbers)}"


# ============================================================================
# COMMANDS
# ============================================================================

class Command(ABC):
    """
    Abstract base class for all commands
    Commands are named in the imperative (e.g., ParkVehicleCommand).
    """

    name: str = ""
    is_exit: bool = False

    def __init__(self):
        self.command_id = str(uuid.uuid4())
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def execute(self, service: ParkingService) -> CommandResult:
        """
        Execute the command using the provided service
        Raises: LotNotCreatedError for commands that need a lot
        """
        pass

    def get_description(self) -> str:
        return self.__class__.__name__.replace("Command", "")

    def _result(self, success: bool, lines: List[str], data: Optional[Dict[str, Any]] = None) -> CommandResult:
        return CommandResult(success=success, command_type=self.name, lines=lines, data=data)


class CreateParkingLotCommand(Command):
    name = "create_parking_lot"

    def __init__(self, request: CreateLotRequestDTO):
        super().__init__()
        self.request = request

    def execute(self, service: ParkingService) -> CommandResult:
        created = service.create_lot(self.request)
        return self._result(True, [
            f"Created parking lot with {created.number_of_floors} floors "
            f"and {created.slots_per_floor} slots per floor"
        ], created.to_dict())

    def get_description(self) -> str:
        return f"CreateParkingLot {self.request.lot_id}"


class ParkVehicleCommand(Command):
    name = "park_vehicle"

    def __init__(self, request: ParkRequestDTO):
        super().__init__()
        self.request = request

    def execute(self, service: ParkingService) -> CommandResult:
        allocation = service.park_vehicle(self.request)
        if not allocation.success:
            return self._result(False, ["Parking Lot Full"], allocation.to_dict())
        return self._result(True, [f"Parked vehicle. Ticket ID: {allocation.ticket_id}"], allocation.to_dict())

    def get_description(self) -> str:
        return f"ParkVehicle {self.request.registration_number}"


class UnparkVehicleCommand(Command):
    name = "unpark_vehicle"

    def __init__(self, request: UnparkRequestDTO):
        super().__init__()
        self.request = request

    def execute(self, service: ParkingService) -> CommandResult:
        exit_result = service.unpark_vehicle(self.request)
        if not exit_result.success:
            return self._result(False, ["Invalid Ticket"], exit_result.to_dict())
        return self._result(True, [
            f"Unparked vehicle with Registration Number: {exit_result.registration_number} "
            f"and Color: {exit_result.color}"
        ], exit_result.to_dict())

    def get_description(self) -> str:
        return f"UnparkVehicle {self.request.ticket_id}"


class DisplayCommand(Command):
    name = "display"

    def __init__(self, request: DisplayRequestDTO):
        super().__init__()
        self.request = request

    def execute(self, service: ParkingService) -> CommandResult:
        reports = service.query(self.request)
        return self._result(
            True,
            [render_floor_report(r) for r in reports],
            {"floors": [r.to_dict() for r in reports]}
        )

    def get_description(self) -> str:
        return f"Display {self.request.display_type} {self.request.vehicle_kind}"


class ExitCommand(Command):
    name = "exit"
    is_exit = True

    def execute(self, service: ParkingService) -> CommandResult:
        return self._result(True, [])


# ============================================================================
# COMMAND PARSER
# ============================================================================

class CommandParser:
    """
    Turns one input line into a Command
    Raises MalformedCommandError for anything the shell should silently ignore
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)
        self._builders: Dict[str, Callable[[List[str]], Command]] = {
            CreateParkingLotCommand.name: self._build_create,
            ParkVehicleCommand.name: self._build_park,
            UnparkVehicleCommand.name: self._build_unpark,
            DisplayCommand.name: self._build_display,
        }

    def parse(self, line: str) -> Command:
        stripped = line.strip()
        if not stripped:
            raise MalformedCommandError("Empty command")
        if stripped.lower() == ExitCommand.name:
            return ExitCommand()

        tokens = stripped.split()
        builder = self._builders.get(tokens[0])
        if builder is None:
            raise MalformedCommandError(f"Unknown command: {tokens[0]}")

        try:
            return builder(tokens)
        except ValidationError as e:
            raise MalformedCommandError(f"Invalid arguments for {tokens[0]}: {e}") from e

    @staticmethod
    def _expect_arity(tokens: List[str], expected: int, at_least: bool = False) -> None:
        count = len(tokens)
        if count < expected or (not at_least and count != expected):
            raise MalformedCommandError(
                f"{tokens[0]} expects {expected} tokens, got {count}"
            )

    def _build_create(self, tokens: List[str]) -> Command:
        self._expect_arity(tokens, 4)
        try:
            floors, slots = int(tokens[2]), int(tokens[3])
        except ValueError as e:
            raise MalformedCommandError(f"Floor and slot counts must be integers: {tokens[2:]}") from e
        return CreateParkingLotCommand(CreateLotRequestDTO(
            lot_id=tokens[1], number_of_floors=floors, slots_per_floor=slots
        ))

    def _build_park(self, tokens: List[str]) -> Command:
        # extra tokens after the color are ignored
        self._expect_arity(tokens, 4, at_least=True)
        return ParkVehicleCommand(ParkRequestDTO(
            vehicle_kind=tokens[1], registration_number=tokens[2], color=tokens[3]
        ))

    def _build_unpark(self, tokens: List[str]) -> Command:
        self._expect_arity(tokens, 2)
        return UnparkVehicleCommand(UnparkRequestDTO(ticket_id=tokens[1]))

    def _build_display(self, tokens: List[str]) -> Command:
        self._expect_arity(tokens, 3)
        return DisplayCommand(DisplayRequestDTO(
            display_type=tokens[1], vehicle_kind=tokens[2]
        ))


# ============================================================================
# COMMAND PROCESSOR
# ============================================================================

class CommandProcessor:
    """
    Runs commands against the service and keeps a bounded history
    of the ones that executed
    """

    def __init__(self, service: ParkingService, max_history_size: int = 1000):
        self.service = service
        self.logger = logging.getLogger(self.__class__.__name__)
        self.command_history: Deque[Command] = deque(maxlen=max_history_size)

    def process(self, command: Command) -> CommandResult:
        self.logger.debug(f"Processing command: {command.get_description()}")

        try:
            result = command.execute(self.service)
        except LotNotCreatedError:
            self.logger.debug(f"Ignoring {command.name}: no parking lot yet")
            return CommandResult(success=False, command_type=command.name)

        self.command_history.append(command)
        return result

    def process_batch(self, commands: List[Command]) -> List[CommandResult]:
        return [self.process(command) for command in commands]
