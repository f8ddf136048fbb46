from __future__ import annotations

import pytest

from bikeflow.traffic.station_view import compute_station_traffic, max_total_traffic
from bikeflow.traffic.types import NEUTRAL_DEPARTURE_RATIO, Station, StationTraffic


def test_every_catalog_station_in_catalog_order():
    stations = [Station("C", 0, 0), Station("A", 0, 0), Station("B", 0, 0)]

    traffic = compute_station_traffic(stations, {"A": 3, "Z": 9}, {"B": 2, "A": 1})

    assert [t.station_id for t in traffic] == ["C", "A", "B"]
    c, a, b = traffic
    assert (c.departures, c.arrivals, c.total_traffic) == (0, 0, 0)
    assert (a.departures, a.arrivals, a.total_traffic) == (3, 1, 4)
    assert (b.departures, b.arrivals, b.total_traffic) == (0, 2, 2)
    # ids only seen in the trip log are not surfaced
    assert "Z" not in {t.station_id for t in traffic}


def test_departure_ratio():
    assert StationTraffic.from_counts("A", 3, 1).departure_ratio == pytest.approx(0.75)
    assert StationTraffic.from_counts("A", 0, 5).departure_ratio == 0.0
    assert StationTraffic.from_counts("A", 0, 0).departure_ratio == NEUTRAL_DEPARTURE_RATIO


def test_total_must_equal_departures_plus_arrivals():
    with pytest.raises(ValueError):
        StationTraffic(station_id="A", departures=1, arrivals=1, total_traffic=3)
    with pytest.raises(ValueError):
        StationTraffic(station_id="A", departures=-1, arrivals=1, total_traffic=0)


def test_records_are_immutable():
    rec = StationTraffic.from_counts("A", 1, 2)
    with pytest.raises(AttributeError):
        rec.departures = 5


def test_empty_catalog_and_max():
    assert compute_station_traffic([], {"A": 1}, {}) == ()
    assert max_total_traffic([]) == 0
    assert max_total_traffic([StationTraffic.from_counts("A", 1, 2), StationTraffic.from_counts("B", 4, 0)]) == 4


def test_to_dict():
    assert StationTraffic.from_counts("A", 1, 1).to_dict() == {
        "station_id": "A",
        "departures": 1,
        "arrivals": 1,
        "total_traffic": 2,
        "departure_ratio": 0.5,
    }
