import folium

from bikeflow.viz.scales import flow_color, radius_scale


def add_traffic_markers(m, stations, traffic):
    """
    Draw one circle per station.
      - radius: sqrt of total traffic in the window
      - color: departure ratio bucket (departures / balanced / arrivals)

    traffic is aligned with stations (same order, same length).
    """
    if len(stations) != len(traffic):
        raise ValueError("stations and traffic must be the same length")

    max_total = max((t.total_traffic for t in traffic), default=0)
    radii = radius_scale([t.total_traffic for t in traffic], max_total)

    for s, t, r in zip(stations, traffic, radii):
        tooltip = (
            f"{t.total_traffic} trips "
            f"({t.departures} departures, {t.arrivals} arrivals)"
        )
        popup = [
            f"<b>{s.name or s.id}</b>",
            f"Station: {s.id}",
            tooltip,
        ]

        color = flow_color(t.departure_ratio)

        folium.CircleMarker(
            location=[s.latitude, s.longitude],
            radius=float(r),
            fill=True,
            color="white",
            weight=1,
            fill_color=color,
            fill_opacity=0.6,
            tooltip=tooltip,
            popup="<br>".join(popup),
        ).add_to(m)
