import os

from bikeflow.traffic.session import TrafficSession, WindowMatch
from bikeflow.util.stations import load_stations
from bikeflow.util.trips import load_trips
from bikeflow.viz.app.single import serve_session

STATIONS = os.environ.get("STATIONS_JSON", "bluebikes-stations.json")
TRIPS = os.environ.get("TRIPS_CSV", "bluebikes-traffic-2024-03.csv")


def build_session():
  stations = load_stations(STATIONS)
  trips = load_trips(TRIPS, progress=True)

  return TrafficSession(
      stations,
      trips,
      radius_minutes=int(os.environ.get("RADIUS_MINUTES", "60")),
      match=WindowMatch(os.environ.get("WINDOW_MATCH", "endpoint").strip().lower()),
  )


def main():
  session = build_session()

  port = int(os.environ.get("PORT", "8080"))
  host = os.environ.get("HOST", "127.0.0.1")

  serve_session(
      session,
      host=host,
      port=port,
      title=os.environ.get("TITLE", "Bluebikes Traffic"),
  )


if __name__ == "__main__":
  main()
