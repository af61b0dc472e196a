from .capacity import DEFAULT_VAN_CAPACITY, assess_driver_capacity
from .models import DriverCapacity, VehicleType

__all__ = [
    "assess_driver_capacity",
    "DEFAULT_VAN_CAPACITY",
    "DriverCapacity",
    "VehicleType",
]
