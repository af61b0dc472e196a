#Purpose: ETA estimation policy.
#Converts an optimized stop sequence into arrival predictions used by:
#worker-facing "shuttle arrives in X"
#trip records created by the dispatch service
#Typical responsibilities:
#walk the stops in order, add leg travel time at a constant average speed
#add a fixed dwell time for every stop already served
#attach a confidence that decays with the stop's position in the route
#Keeps ETA logic separate from route optimization (which only orders stops).

import logging
import math
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from .geo import haversine_km
from .models import ETAEntry, OptimizedStop
from .policy import EtaPolicy, default_eta_policy

logger = logging.getLogger(__name__)

MIN_ARRIVAL_STEP = timedelta(seconds=1)


def calculate_etas(
        stops: Sequence[OptimizedStop],
        start_time: datetime,
        average_speed_kmh: Optional[float] = None,
        stop_duration_minutes: Optional[float] = None,
        *,
        policy: Optional[EtaPolicy] = None,
        trip_id: str = "",
) -> List[ETAEntry]:
    """
    Progressive arrival estimates for an ordered list of stops.

    Args:
        stops: optimized stops in visiting order (each carries its Location)
        start_time: arrival time at the first stop
        average_speed_kmh: constant speed model, policy default when omitted
        stop_duration_minutes: dwell time per served stop, policy default when omitted
        policy: EtaPolicy with defaults and the confidence decay
        trip_id: copied onto every entry (the trip service usually fills it later)

    Returns:
        List[ETAEntry] in the same order as `stops`. Arrivals strictly increase (at
        least MIN_ARRIVAL_STEP apart) and confidence is non-increasing along the route.
    """
    policy = policy or default_eta_policy()

    speed = policy.average_speed_kmh if average_speed_kmh is None else average_speed_kmh
    dwell = policy.stop_duration_minutes if stop_duration_minutes is None else stop_duration_minutes

    #the speed model divides by speed
    if not speed > 0:
        logger.warning(f"Non-positive average speed {speed!r}, using {policy.average_speed_kmh} km/h")
        speed = policy.average_speed_kmh
    if not dwell >= 0:
        dwell = 0.0

    etas: List[ETAEntry] = []
    calculated_at = datetime.now(tz=start_time.tzinfo)

    current_time = start_time
    cumulative_km = 0.0
    total_stops = len(stops)

    for index, stop in enumerate(stops):
        leg_km = 0.0
        if index > 0:
            leg_km = haversine_km(stops[index - 1].location, stop.location)

            travel_km = leg_km
            if not math.isfinite(leg_km):
                # caller validates coordinates; we just keep the clock moving
                logger.warning(f"Non-finite leg distance to stop {stop.user_id}, counting zero travel time")
                travel_km = 0.0

            cumulative_km += travel_km
            step = timedelta(minutes=travel_km / speed * 60 + dwell)
            # arrivals must strictly increase, even for co-located stops with no dwell
            current_time = current_time + max(step, MIN_ARRIVAL_STEP)

        etas.append(
            ETAEntry(
                stop_id=stop.user_id,
                estimated_arrival=current_time,
                confidence=eta_confidence(index, total_stops, policy),
                factors={
                    "distance": cumulative_km,
                    "leg_distance": leg_km,
                    "traffic": 1.0,
                    "weather": 1.0,
                    "historical": 1.0,
                },
                calculated_at=calculated_at,
                trip_id=trip_id,
            )
        )

    return etas


def eta_confidence(stop_index: int, total_stops: int, policy: Optional[EtaPolicy] = None) -> float:
    """
    Confidence decreases with distance from the start of the route.
    """
    policy = policy or default_eta_policy()
    if total_stops <= 0:
        return 1.0
    return max(policy.min_confidence, 1 - (stop_index / total_stops) * policy.confidence_decay)
