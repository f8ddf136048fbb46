import json

from bikeflow.traffic.types import Station


def _first(s, *keys):
    for k in keys:
        v = s.get(k)
        if v is not None and v != "":
            return v
    return None


def load_stations(path):
    """
    Load Bluebikes stations from the stations JSON ({"data": {"stations": [...]}}).

    Station id is short_name (what the trip log references), falling back to
    station_id / Number. Coordinates come from Long/Lat or lon/lat.
    Stations without usable coordinates are skipped.
    """
    with open(path) as f:
        raw = json.load(f)["data"]["stations"]

    stations = []
    for s in raw:
        sid = _first(s, "short_name", "station_id", "Number")
        lon = _first(s, "Long", "lon")
        lat = _first(s, "Lat", "lat")
        if sid is None or lon is None or lat is None:
            continue

        stations.append(
            Station(
                id=str(sid),
                longitude=float(lon),
                latitude=float(lat),
                name=str(_first(s, "name", "NAME") or ""),
            )
        )

    return stations
