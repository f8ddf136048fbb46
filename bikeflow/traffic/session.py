# bikeflow/traffic/session.py
from __future__ import annotations

import warnings
from enum import Enum
from typing import Iterable, Tuple

from colorama import Fore, Style

from bikeflow.traffic.aggregate import aggregate, count_missing_station_references
from bikeflow.traffic.errors import MissingStationReference
from bikeflow.traffic.events import EventChannel
from bikeflow.traffic.minute_index import build_index
from bikeflow.traffic.range_query import query, validate_center_minute, validate_radius
from bikeflow.traffic.station_view import compute_station_traffic
from bikeflow.traffic.types import (
    DEFAULT_RADIUS_MINUTES,
    NO_FILTER,
    Station,
    StationField,
    StationTraffic,
    Trip,
    TripKind,
    Viewport,
)

# Boston, where the Bluebikes data lives
DEFAULT_VIEWPORT = Viewport(latitude=42.36027, longitude=-71.09415, zoom=12)


class WindowMatch(Enum):
    # departures counted from trips that start in the window,
    # arrivals from trips that end in the window
    ENDPOINT = "endpoint"
    # a trip that starts OR ends in the window counts toward both its
    # start station's departures and its end station's arrivals
    EITHER = "either"


class TrafficSession:
    """
    Owns everything one map session needs:
      - station catalog and trip store (tuples, never mutated)
      - the minute-bucket index (built once here)
      - the current time filter, viewport and the last computed traffic

    Handlers get the session passed in; they subscribe to
      - filter_changed(center_minute, traffic)
      - viewport_changed(viewport, traffic)
    """

    def __init__(
        self,
        stations: Iterable[Station],
        trips: Iterable[Trip],
        *,
        radius_minutes: int = DEFAULT_RADIUS_MINUTES,
        match: WindowMatch = WindowMatch.ENDPOINT,
        viewport: Viewport = DEFAULT_VIEWPORT,
    ):
        self.stations: Tuple[Station, ...] = tuple(stations)
        self.trips: Tuple[Trip, ...] = tuple(trips)
        self.radius_minutes = validate_radius(radius_minutes)
        self.match = WindowMatch(match)

        print(f"{Fore.CYAN}Indexing {len(self.trips):,} trips by minute of day…{Style.RESET_ALL}")
        self.index = build_index(self.trips)

        missing = count_missing_station_references(self.trips, self.stations)
        if missing:
            n_refs = sum(missing.values())
            print(
                f"{Fore.YELLOW}{n_refs:,} trip endpoints reference "
                f"{len(missing):,} station ids not in the catalog{Style.RESET_ALL}"
            )
            warnings.warn(
                f"{n_refs} trip endpoints reference {len(missing)} unknown station ids "
                f"(e.g. {sorted(missing)[:5]}); their traffic is not shown",
                MissingStationReference,
                stacklevel=2,
            )
        self.missing_station_refs = missing

        self.filter_changed = EventChannel("filter_changed")
        self.viewport_changed = EventChannel("viewport_changed")

        self._center_minute = NO_FILTER
        self._viewport = viewport
        self._traffic = self.recompute_traffic(NO_FILTER)

        print(f"{Fore.GREEN}Session ready: {len(self.stations):,} stations.{Style.RESET_ALL}")

    # ----------------------------
    # state
    # ----------------------------
    @property
    def center_minute(self) -> int:
        return self._center_minute

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def traffic(self) -> Tuple[StationTraffic, ...]:
        return self._traffic

    # ----------------------------
    # queries
    # ----------------------------
    def recompute_traffic(self, center_minute: int) -> Tuple[StationTraffic, ...]:
        """
        Per-station traffic for the window around center_minute (-1 = all day).

        Pure: reads only the index and the catalog, touches no session state.
        """
        center_minute = validate_center_minute(center_minute)

        if self.match is WindowMatch.EITHER:
            active = query(self.index, center_minute, self.radius_minutes, TripKind.BOTH)
            departures = active
            arrivals = active
        else:
            departures = query(self.index, center_minute, self.radius_minutes, TripKind.DEPARTURES)
            arrivals = query(self.index, center_minute, self.radius_minutes, TripKind.ARRIVALS)

        return compute_station_traffic(
            self.stations,
            aggregate(departures, StationField.START_STATION),
            aggregate(arrivals, StationField.END_STATION),
        )

    # ----------------------------
    # events
    # ----------------------------
    def set_time_filter(self, center_minute: int) -> Tuple[StationTraffic, ...]:
        traffic = self.recompute_traffic(center_minute)

        self._center_minute = center_minute
        self._traffic = traffic
        self.filter_changed.emit(center_minute, traffic)
        return traffic

    def move_viewport(self, viewport: Viewport) -> None:
        # positions change, counts don't
        self._viewport = viewport
        self.viewport_changed.emit(viewport, self._traffic)
