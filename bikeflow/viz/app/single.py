# bikeflow/viz/app/single.py
from __future__ import annotations

from flask import Flask, abort, jsonify, request

from bikeflow.traffic.errors import InvalidArgument
from bikeflow.traffic.minute_index import bucket_counts
from bikeflow.traffic.types import NO_FILTER, TripKind, Viewport
from bikeflow.viz.maps.render import render_map_document
from bikeflow.viz.scales import format_minute


def create_app(session, *, title: str | None = "Bluebikes Traffic"):
    """
    Flask app over one TrafficSession.

      GET /?t=<minute>&lat=..&lon=..&zoom=..   map page
      GET /traffic.json?t=<minute>             station traffic records

    Requests only call session.recompute_traffic (pure), so the shared
    session is never mutated by concurrent requests.
    """
    if session is None:
        raise ValueError("create_app requires a TrafficSession")

    activity = bucket_counts(session.index, TripKind.BOTH)

    app = Flask(__name__)

    def _resolve_time() -> int:
        raw = request.args.get("t", None)
        if raw is None or raw == "":
            return NO_FILTER
        try:
            return int(raw)
        except ValueError:
            abort(400, description=f"t must be an integer minute, got {raw!r}")

    def _resolve_viewport() -> Viewport:
        vp = session.viewport
        return Viewport(
            latitude=request.args.get("lat", vp.latitude, type=float),
            longitude=request.args.get("lon", vp.longitude, type=float),
            zoom=request.args.get("zoom", vp.zoom, type=int),
        )

    def _traffic_for(t_cur: int):
        try:
            return session.recompute_traffic(t_cur)
        except InvalidArgument as e:
            abort(400, description=str(e))

    @app.route("/")
    def _index():
        t_cur = _resolve_time()
        traffic = _traffic_for(t_cur)

        return render_map_document(
            stations=session.stations,
            traffic=traffic,
            center_minute=t_cur,
            viewport=_resolve_viewport(),
            title=title,
            bucket_counts=activity,
        )

    @app.route("/traffic.json")
    def _traffic_json():
        t_cur = _resolve_time()
        traffic = _traffic_for(t_cur)

        return jsonify(
            {
                "center_minute": t_cur,
                "label": format_minute(t_cur),
                "radius_minutes": session.radius_minutes,
                "stations": [t.to_dict() for t in traffic],
            }
        )

    return app


def serve_session(
    session,
    *,
    host: str = "127.0.0.1",
    port: int = 8080,
    debug: bool = False,
    title: str | None = "Bluebikes Traffic",
):
    app = create_app(session, title=title)
    app.run(host=host, port=int(port), debug=bool(debug))
