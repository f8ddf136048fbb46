# bikeflow/traffic/aggregate.py
from __future__ import annotations

from typing import Dict, Iterable

from bikeflow.traffic.types import Station, StationField, Trip


def aggregate(trips: Iterable[Trip], by: StationField) -> Dict[str, int]:
    """
    Count trips per station id (start or end station).
    Stations with no trips are absent; callers treat that as 0.
    """
    attr = by.value

    counts: Dict[str, int] = {}
    for t in trips:
        sid = getattr(t, attr)
        counts[sid] = counts.get(sid, 0) + 1

    return counts


def count_missing_station_references(
    trips: Iterable[Trip],
    stations: Iterable[Station],
) -> Dict[str, int]:
    """
    station_id -> number of trip endpoints (start or end) that reference an id
    not present in the station catalog.
    """
    known = {s.id for s in stations}

    missing: Dict[str, int] = {}
    for t in trips:
        for sid in (t.start_station_id, t.end_station_id):
            if sid not in known:
                missing[sid] = missing.get(sid, 0) + 1

    return missing
