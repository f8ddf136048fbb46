# bikeflow/traffic/range_query.py
from __future__ import annotations

from typing import List, Tuple

from bikeflow.traffic.errors import InvalidArgument
from bikeflow.traffic.types import (
    DEFAULT_RADIUS_MINUTES,
    MINUTES_PER_DAY,
    NO_FILTER,
    MinuteBucketIndex,
    Trip,
    TripKind,
)

MAX_RADIUS_MINUTES = MINUTES_PER_DAY // 2


def _check_int(name: str, value) -> int:
    # bool is an int subclass; True/False as a minute is always a caller bug
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{name} must be an int, got {value!r}")
    return value


def validate_center_minute(center_minute) -> int:
    center_minute = _check_int("center_minute", center_minute)
    if not (NO_FILTER <= center_minute < MINUTES_PER_DAY):
        raise InvalidArgument(
            f"center_minute must be -1 (no filter) or 0..{MINUTES_PER_DAY - 1}, "
            f"got {center_minute}"
        )
    return center_minute


def validate_radius(radius_minutes) -> int:
    radius_minutes = _check_int("radius_minutes", radius_minutes)
    if not (1 <= radius_minutes <= MAX_RADIUS_MINUTES):
        raise InvalidArgument(
            f"radius_minutes must be 1..{MAX_RADIUS_MINUTES}, got {radius_minutes}"
        )
    return radius_minutes


def window_bounds(center_minute: int, radius_minutes: int = DEFAULT_RADIUS_MINUTES) -> Tuple[int, int]:
    """(lo, hi) of the circular window, both in 0..1439."""
    lo = (center_minute - radius_minutes + MINUTES_PER_DAY) % MINUTES_PER_DAY
    hi = (center_minute + radius_minutes) % MINUTES_PER_DAY
    return lo, hi


def window_minutes(center_minute: int, radius_minutes: int = DEFAULT_RADIUS_MINUTES) -> List[int]:
    """
    Bucket ids covered by the window, in query order.

      lo < hi : [lo, hi)
      lo > hi : [lo, 1440) then [0, hi)    (wraps midnight)
      lo == hi: radius is half a day, so the whole day starting at lo
    """
    center_minute = validate_center_minute(center_minute)
    radius_minutes = validate_radius(radius_minutes)
    if center_minute == NO_FILTER:
        raise InvalidArgument("the no-filter sentinel has no window")

    lo, hi = window_bounds(center_minute, radius_minutes)

    if lo < hi:
        return list(range(lo, hi))
    return list(range(lo, MINUTES_PER_DAY)) + list(range(0, hi))


def _collect(buckets, minutes: List[int]) -> List[Trip]:
    out: List[Trip] = []
    for m in minutes:
        out.extend(buckets[m])
    return out


def query(
    index: MinuteBucketIndex,
    center_minute: int,
    radius_minutes: int = DEFAULT_RADIUS_MINUTES,
    kind: TripKind = TripKind.BOTH,
) -> Tuple[Trip, ...]:
    """
    Trips whose bucket falls in the circular window around center_minute.

    kind=DEPARTURES looks at started_at buckets, ARRIVALS at ended_at buckets,
    BOTH takes a trip if either endpoint is in the window (departure hits
    first, then trips that only arrive in the window).

    center_minute == -1 returns every trip in load order.
    Only the window's buckets are visited, never the full trip list.
    """
    center_minute = validate_center_minute(center_minute)
    radius_minutes = validate_radius(radius_minutes)

    if center_minute == NO_FILTER:
        return index.trips

    minutes = window_minutes(center_minute, radius_minutes)

    if kind is TripKind.BOTH:
        departures = _collect(index.departure_buckets, minutes)
        seen = {id(t) for t in departures}
        arrivals_only = [
            t for t in _collect(index.arrival_buckets, minutes) if id(t) not in seen
        ]
        return tuple(departures + arrivals_only)

    return tuple(_collect(index.buckets(kind), minutes))
