# bikeflow/traffic/station_view.py
from __future__ import annotations

from typing import Iterable, Mapping, Tuple

from bikeflow.traffic.types import Station, StationTraffic


def compute_station_traffic(
    stations: Iterable[Station],
    departure_counts: Mapping[str, int],
    arrival_counts: Mapping[str, int],
) -> Tuple[StationTraffic, ...]:
    """
    One StationTraffic per catalog station, in catalog order.

    Stations with no trips in the window still get an all-zero record so the
    renderer can keep a stable set of markers. Ids that only appear in the
    trip log are never surfaced here.
    """
    return tuple(
        StationTraffic.from_counts(
            s.id,
            departures=departure_counts.get(s.id, 0),
            arrivals=arrival_counts.get(s.id, 0),
        )
        for s in stations
    )


def max_total_traffic(traffic: Iterable[StationTraffic]) -> int:
    return max((t.total_traffic for t in traffic), default=0)
