from __future__ import annotations

from typing import List, Optional, Sequence

from .geo import haversine_km
from .models import Location


class DistanceMatrix:
    """
    Precomputed haversine distances (km) between a fixed list of locations,
    plus optional start/end depot vectors.

    Search strategies evaluate thousands of permutations of the same stops;
    they index into this table instead of recomputing great-circle math.
    Indices refer to positions in `locations`.
    """
    def __init__(self, locations: Sequence[Location],
                 start: Optional[Location] = None,
                 end: Optional[Location] = None):
        self.locations = list(locations)
        self.start = start
        self.end = end

        size = len(self.locations)
        self.legs: List[List[float]] = [[0.0] * size for _ in range(size)]
        for src_idx in range(size):
            for dest_idx in range(src_idx + 1, size):
                distance = haversine_km(self.locations[src_idx], self.locations[dest_idx])
                self.legs[src_idx][dest_idx] = distance
                self.legs[dest_idx][src_idx] = distance

        self.from_start: Optional[List[float]] = None
        if start is not None:
            self.from_start = [haversine_km(start, location) for location in self.locations]

        self.to_end: Optional[List[float]] = None
        if end is not None:
            self.to_end = [haversine_km(location, end) for location in self.locations]

    def __len__(self) -> int:
        return len(self.locations)

    def __call__(self, src_idx: int, dest_idx: int) -> float:
        return self.legs[src_idx][dest_idx]

    def leg_distances(self, sequence: Sequence[int]) -> List[float]:
        """
        Distances of consecutive legs along the sequence (stop to stop only).
        """
        return [self.legs[a][b] for a, b in zip(sequence[:-1], sequence[1:])]

    def sequence_distance(self, sequence: Sequence[int]) -> float:
        return sum(self.leg_distances(sequence))

    def approach_distance(self, sequence: Sequence[int]) -> float:
        if not sequence or self.from_start is None:
            return 0.0
        return self.from_start[sequence[0]]

    def return_distance(self, sequence: Sequence[int]) -> float:
        if not sequence or self.to_end is None:
            return 0.0
        return self.to_end[sequence[-1]]


def distance_matrix_for(locations: Sequence[Location],
                        start: Optional[Location] = None,
                        end: Optional[Location] = None) -> DistanceMatrix:
    """
    Convenience factory mirroring how strategies build their lookup table.
    """
    return DistanceMatrix(locations, start=start, end=end)
