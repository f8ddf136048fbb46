from __future__ import annotations

import random
from datetime import datetime, timedelta

import pytest

from bikeflow.traffic.types import Station, Trip


def _at(hhmm: str, day: str = "2024-03-01") -> datetime:
    return datetime.fromisoformat(f"{day}T{hhmm}")


@pytest.fixture
def make_trip():
    def _make(trip_id, start, end, from_sid, to_sid, *, start_day="2024-03-01", end_day=None):
        return Trip(
            id=trip_id,
            started_at=_at(start, start_day),
            ended_at=_at(end, end_day or start_day),
            start_station_id=from_sid,
            end_station_id=to_sid,
        )

    return _make


@pytest.fixture
def stations_ab():
    return [
        Station(id="A", longitude=-71.09, latitude=42.36, name="Mass Ave"),
        Station(id="B", longitude=-71.10, latitude=42.37, name="Central Sq"),
    ]


@pytest.fixture
def midnight_trips(make_trip):
    # one trip just after midnight A -> B, one just before midnight B -> A
    return [
        make_trip("t1", "00:05", "00:50", "A", "B"),
        make_trip("t2", "23:50", "00:10", "B", "A", end_day="2024-03-02"),
    ]


@pytest.fixture
def random_trips():
    rng = random.Random(7)
    station_ids = [f"S{i}" for i in range(12)]
    base = datetime(2024, 3, 1)

    trips = []
    for i in range(2000):
        start = base + timedelta(days=rng.randrange(31), minutes=rng.randrange(1440), seconds=rng.randrange(60))
        end = start + timedelta(minutes=rng.randrange(1, 180))
        trips.append(
            Trip(
                id=f"r{i}",
                started_at=start,
                ended_at=end,
                start_station_id=rng.choice(station_ids),
                end_station_id=rng.choice(station_ids),
            )
        )
    return trips


@pytest.fixture
def random_stations():
    return [Station(id=f"S{i}", longitude=-71.0 - i / 100, latitude=42.3 + i / 100) for i in range(12)]
