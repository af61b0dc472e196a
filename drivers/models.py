"""
Purpose: Core data models for the drivers domain.
What it does:
Defines the capacity snapshot of a driver and the vehicle classes the shuttle fleet uses,
without relying on any ORM.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from routing.models import Location


class VehicleType(str, Enum):
    """
    Vehicle classes by seat count.
    """
    SEDAN = "sedan"
    VAN = "van"
    BUS = "bus"

    @classmethod
    def for_capacity(cls, max_passengers: int) -> VehicleType:
        if max_passengers <= 4:
            return cls.SEDAN
        if max_passengers <= 15:
            return cls.VAN
        return cls.BUS


@dataclass(frozen=True)
class DriverCapacity:
    """
    A purely stateless capacity snapshot of a driver at a specific point in time.
    """
    driver_id: str
    max_passengers: int
    current_load: int
    available_slots: int
    vehicle_type: VehicleType
    is_available: bool
    current_location: Optional[Location] = None
    last_updated: Optional[datetime] = None
