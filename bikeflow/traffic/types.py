# bikeflow/traffic/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Tuple

MINUTES_PER_DAY = 1440
NO_FILTER = -1
DEFAULT_RADIUS_MINUTES = 60

# shown for stations with no traffic in the current window
NEUTRAL_DEPARTURE_RATIO = 0.5


class TripKind(Enum):
    DEPARTURES = "departures"
    ARRIVALS = "arrivals"
    BOTH = "both"


class StationField(Enum):
    START_STATION = "start_station_id"
    END_STATION = "end_station_id"


@dataclass(frozen=True)
class Trip:
    id: str
    started_at: datetime
    ended_at: datetime
    start_station_id: str
    end_station_id: str


@dataclass(frozen=True)
class Station:
    id: str  # short_name
    longitude: float
    latitude: float
    name: str = ""


@dataclass(frozen=True)
class StationTraffic:
    station_id: str
    departures: int
    arrivals: int
    total_traffic: int
    departure_ratio: float = NEUTRAL_DEPARTURE_RATIO

    def __post_init__(self):
        if self.departures < 0 or self.arrivals < 0:
            raise ValueError("departures and arrivals must be >= 0")
        if self.total_traffic != self.departures + self.arrivals:
            raise ValueError(
                f"total_traffic ({self.total_traffic}) must equal "
                f"departures + arrivals ({self.departures} + {self.arrivals})"
            )

    @classmethod
    def from_counts(cls, station_id: str, departures: int, arrivals: int) -> "StationTraffic":
        departures = int(departures)
        arrivals = int(arrivals)
        total = departures + arrivals
        ratio = departures / total if total > 0 else NEUTRAL_DEPARTURE_RATIO
        return cls(
            station_id=station_id,
            departures=departures,
            arrivals=arrivals,
            total_traffic=total,
            departure_ratio=ratio,
        )

    def to_dict(self) -> dict:
        return {
            "station_id": self.station_id,
            "departures": self.departures,
            "arrivals": self.arrivals,
            "total_traffic": self.total_traffic,
            "departure_ratio": self.departure_ratio,
        }


@dataclass(frozen=True)
class Viewport:
    latitude: float
    longitude: float
    zoom: int = 12


@dataclass(frozen=True)
class MinuteBucketIndex:
    """
    departure_buckets[m]: trips whose started_at falls in minute-of-day m
    arrival_buckets[m]:   trips whose ended_at falls in minute-of-day m
    trips:                every indexed trip, in load order

    Built once by build_index(); never mutated afterwards.
    """
    departure_buckets: Tuple[Tuple[Trip, ...], ...]
    arrival_buckets: Tuple[Tuple[Trip, ...], ...]
    trips: Tuple[Trip, ...] = field(default=())

    @property
    def trip_count(self) -> int:
        return len(self.trips)

    def buckets(self, kind: TripKind) -> Tuple[Tuple[Trip, ...], ...]:
        if kind is TripKind.DEPARTURES:
            return self.departure_buckets
        if kind is TripKind.ARRIVALS:
            return self.arrival_buckets
        raise ValueError(f"no single bucket array for {kind}")
