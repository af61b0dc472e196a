"""
Purpose: Driver capacity assessment.
What it does:
Shapes a driver id and a declared passenger count into a DriverCapacity snapshot
the dispatch service can compare against a route's stop count.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from routing.models import Location

from .models import DriverCapacity, VehicleType

logger = logging.getLogger(__name__)

DEFAULT_VAN_CAPACITY = 8


def assess_driver_capacity(
    driver_id: str,
    declared_capacity: int,
    current_location: Optional[Location] = None,
    current_load: int = 0,
) -> DriverCapacity:
    """
    Capacity snapshot for a driver.

    - a non-positive declared capacity falls back to the default 8-seat van
    - current_load is clamped to [0, max_passengers]
    - the driver is available while at least one seat is free
    """
    max_passengers = declared_capacity if declared_capacity and declared_capacity > 0 else DEFAULT_VAN_CAPACITY
    if max_passengers != declared_capacity:
        logger.debug(f"Driver {driver_id} declared capacity {declared_capacity!r}, using {max_passengers}")

    load = min(max(current_load, 0), max_passengers)
    available_slots = max_passengers - load

    return DriverCapacity(
        driver_id=driver_id,
        max_passengers=max_passengers,
        current_load=load,
        available_slots=available_slots,
        vehicle_type=VehicleType.for_capacity(max_passengers),
        is_available=available_slots > 0,
        current_location=current_location,
        last_updated=datetime.now(timezone.utc),
    )
