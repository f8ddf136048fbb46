# bikeflow/traffic/minute_index.py
from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Tuple

import numpy as np

from bikeflow.traffic.errors import InvalidTimestamp
from bikeflow.traffic.types import MINUTES_PER_DAY, MinuteBucketIndex, Trip, TripKind


def minute_of_day(ts: datetime) -> int:
    """
    Local wall-clock minute of the day: hour * 60 + minute (0..1439).
    Date, seconds and tz offset are ignored.

    Raises ValueError for anything that is not a real datetime (None, NaT, strings).
    """
    if not isinstance(ts, datetime):
        raise ValueError(f"not a datetime: {ts!r}")

    hour = ts.hour
    minute = ts.minute
    # pandas NaT passes the isinstance check but has float('nan') fields
    if not isinstance(hour, int) or not isinstance(minute, int):
        raise ValueError(f"timestamp has no hour/minute: {ts!r}")

    return hour * 60 + minute


def build_index(trips: Iterable[Trip]) -> MinuteBucketIndex:
    """
    Partition trips into 1440 departure buckets (by started_at) and 1440
    arrival buckets (by ended_at).

    Every timestamp is checked before anything is returned: if any trip
    cannot be placed, InvalidTimestamp is raised naming all of them and no
    index is built.
    """
    trips = tuple(trips)

    dep: List[List[Trip]] = [[] for _ in range(MINUTES_PER_DAY)]
    arr: List[List[Trip]] = [[] for _ in range(MINUTES_PER_DAY)]
    offenders: List[Tuple[str, str]] = []

    for trip in trips:
        try:
            m_start = minute_of_day(trip.started_at)
        except ValueError:
            offenders.append((trip.id, "started_at"))
            m_start = None

        try:
            m_end = minute_of_day(trip.ended_at)
        except ValueError:
            offenders.append((trip.id, "ended_at"))
            m_end = None

        if m_start is None or m_end is None:
            continue

        dep[m_start].append(trip)
        arr[m_end].append(trip)

    if offenders:
        raise InvalidTimestamp(offenders)

    return MinuteBucketIndex(
        departure_buckets=tuple(tuple(b) for b in dep),
        arrival_buckets=tuple(tuple(b) for b in arr),
        trips=trips,
    )


def bucket_counts(index: MinuteBucketIndex, kind: TripKind = TripKind.DEPARTURES) -> np.ndarray:
    """
    Number of trips per minute-of-day, shape (1440,).
    kind=BOTH sums departures and arrivals.
    """
    if kind is TripKind.BOTH:
        return bucket_counts(index, TripKind.DEPARTURES) + bucket_counts(index, TripKind.ARRIVALS)

    return np.fromiter(
        (len(b) for b in index.buckets(kind)),
        dtype=np.int64,
        count=MINUTES_PER_DAY,
    )
