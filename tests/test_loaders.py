from __future__ import annotations

import json
import textwrap
from datetime import datetime

import pytest

from bikeflow.traffic.errors import InvalidTimestamp
from bikeflow.traffic.minute_index import minute_of_day
from bikeflow.util.stations import load_stations
from bikeflow.util.trips import load_trips


def _write(path, text):
    path.write_text(textwrap.dedent(text).strip() + "\n", encoding="utf-8")
    return path


def test_load_stations_bluebikes_json(tmp_path):
    payload = {
        "data": {
            "stations": [
                {"short_name": "A32000", "NAME": "Fan Pier", "Lat": "42.353", "Long": "-71.044"},
                {"station_id": "7", "name": "Kendall", "lat": 42.362, "lon": -71.084},
                {"short_name": "NOPE", "name": "No coordinates"},
            ]
        }
    }
    path = tmp_path / "stations.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    stations = load_stations(path)

    assert [s.id for s in stations] == ["A32000", "7"]
    assert stations[0].name == "Fan Pier"
    assert stations[0].latitude == pytest.approx(42.353)
    assert stations[0].longitude == pytest.approx(-71.044)
    assert stations[1].name == "Kendall"


def test_load_trips_csv(tmp_path):
    path = _write(
        tmp_path / "trips.csv",
        """
        ride_id,rideable_type,started_at,ended_at,start_station_id,end_station_id
        r1,classic_bike,2024-03-01 00:05:00.000,2024-03-01 00:50:12.000,A32000,M32006
        r2,electric_bike,2024-03-01 23:50:00.000,2024-03-02 00:10:00.000,M32006,
        """,
    )

    trips = load_trips(path)

    assert [t.id for t in trips] == ["r1", "r2"]
    assert trips[0].started_at == datetime(2024, 3, 1, 0, 5)
    assert trips[0].ended_at == datetime(2024, 3, 1, 0, 50, 12)
    assert trips[0].start_station_id == "A32000"
    assert trips[1].end_station_id == ""
    assert trips[1].ended_at.hour == 0


def test_load_trips_rejects_unparseable_timestamps(tmp_path):
    path = _write(
        tmp_path / "trips.csv",
        """
        ride_id,started_at,ended_at,start_station_id,end_station_id
        r1,2024-03-01 08:00:00,2024-03-01 08:10:00,A,B
        r2,not a time,2024-03-01 08:10:00,A,B
        r3,2024-03-01 09:00:00,,A,B
        """,
    )

    with pytest.raises(InvalidTimestamp) as exc:
        load_trips(path)

    assert exc.value.offenders == [("r2", "started_at"), ("r3", "ended_at")]


def test_load_trips_requires_columns(tmp_path):
    path = _write(
        tmp_path / "trips.csv",
        """
        ride_id,started_at,ended_at
        r1,2024-03-01 08:00:00,2024-03-01 08:10:00
        """,
    )

    with pytest.raises(ValueError, match="start_station_id"):
        load_trips(path)


def test_missing_file_propagates(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_trips(tmp_path / "nope.csv")


def test_load_trips_accepts_mixed_fractional_seconds(tmp_path):
    path = _write(
        tmp_path / "trips.csv",
        """
        ride_id,started_at,ended_at,start_station_id,end_station_id
        r1,2024-03-01 08:00:00,2024-03-01 08:10:00,A,B
        r2,2024-03-01 09:00:00.123,2024-03-01 09:20:45.5,B,A
        """,
    )

    trips = load_trips(path)

    assert [t.id for t in trips] == ["r1", "r2"]
    assert trips[1].started_at == datetime(2024, 3, 1, 9, 0, 0, 123000)
    assert minute_of_day(trips[1].ended_at) == 9 * 60 + 20


def test_load_trips_keeps_wall_clock_across_offset_change(tmp_path):
    # DST starts 2024-03-10 in Boston: -05:00 before, -04:00 after
    path = _write(
        tmp_path / "trips.csv",
        """
        ride_id,started_at,ended_at,start_station_id,end_station_id
        r1,2024-03-10 01:30:00-05:00,2024-03-10 01:45:00-05:00,A,B
        r2,2024-03-10 03:30:00-04:00,2024-03-10 03:50:00-04:00,B,A
        r3,not a time,2024-03-10 04:00:00-04:00,A,B
        """,
    )

    with pytest.raises(InvalidTimestamp) as exc:
        load_trips(path)
    assert exc.value.offenders == [("r3", "started_at")]

    lines = path.read_text(encoding="utf-8").splitlines()
    path.write_text("\n".join(lines[:-1]) + "\n", encoding="utf-8")

    trips = load_trips(path)

    assert [minute_of_day(t.started_at) for t in trips] == [90, 210]
    assert [minute_of_day(t.ended_at) for t in trips] == [105, 230]
