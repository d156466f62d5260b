# File: multilevel_parking/application/settings.py
"""
Runtime settings for the parking lot application.
Loaded from a JSON file or a plain dict; unknown keys are rejected.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import json
import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.models import FloorLayout
from ..domain.policies import DEFAULT_TICKET_SEPARATOR, validate_ticket_separator


class ParkingSettings(BaseModel):
    """
    Settings for logging, floor layout and ticket ids.
    The layout defaults reproduce slot 1 LARGE, slots 2-3 SMALL, rest MEDIUM.
    """
    model_config = ConfigDict(extra="forbid")

    log_level: str = Field(default="INFO", description="Root log level")
    log_dir: Optional[str] = Field(default=None, description="Directory for the log file; no file when unset")
    log_file: str = Field(default="parking_lot.log", min_length=1, description="Log file name inside log_dir")
    large_slots_per_floor: int = Field(default=1, ge=0, description="LARGE slots at the start of each floor")
    small_slots_per_floor: int = Field(default=2, ge=0, description="SMALL slots following the LARGE ones")
    ticket_separator: str = Field(default=DEFAULT_TICKET_SEPARATOR, min_length=1, description="Separator between ticket id parts")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("ticket_separator")
    @classmethod
    def validate_separator(cls, v: str) -> str:
        return validate_ticket_separator(v)

    def floor_layout(self) -> FloorLayout:
        return FloorLayout(large=self.large_slots_per_floor, small=self.small_slots_per_floor)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ParkingSettings':
        return cls(**data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'ParkingSettings':
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))
