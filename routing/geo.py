#Purpose: Great-circle distance helpers.
#Every optimizer and the ETA calculator measure legs through this module,
#so there is exactly one definition of "distance" in the engine.
#Typical responsibilities:
#haversine distance in km between two locations
#summing consecutive legs of a visiting sequence
#Output: plain floats (kilometres). Non-finite coordinates give NaN, never an exception.

import math
from typing import Optional, Sequence

from .models import Location

EARTH_RADIUS_KM = 6371.0088 #mean earth radius


def haversine_km(a: Location, b: Location) -> float:
    """
    Great-circle distance between two locations in kilometres.

    - 0.0 for identical coordinates
    - symmetric: haversine_km(a, b) == haversine_km(b, a)
    - safe at the poles and across the antimeridian
    - NaN (not an error) when either coordinate is not finite
    """
    lat1, lon1 = a.latitude, a.longitude
    lat2, lon2 = b.latitude, b.longitude

    if not all(math.isfinite(value) for value in (lat1, lon1, lat2, lon2)):
        return float("nan")

    if lat1 == lat2 and lon1 == lon2:
        return 0.0

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    h = (math.sin(d_phi / 2) ** 2
         + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2)

    # float error can push h slightly outside [0, 1] for antipodal points
    if h > 1.0:
        h = 1.0
    elif h < 0.0:
        h = 0.0

    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def route_distance_km(route: Sequence[Location],
                      start: Optional[Location] = None,
                      end: Optional[Location] = None) -> float:
    """
    Sum of consecutive-leg distances along the route.
    start/end legs are only added when those depots are given and the route is not empty.
    """
    total = 0.0
    for previous, current in zip(route[:-1], route[1:]):
        total += haversine_km(previous, current)

    if route and start is not None:
        total += haversine_km(start, route[0])
    if route and end is not None:
        total += haversine_km(route[-1], end)
    return total
