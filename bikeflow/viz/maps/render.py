# bikeflow/viz/maps/render.py
import json

import folium

from bikeflow.traffic.session import DEFAULT_VIEWPORT
from bikeflow.viz.overlays.stations import add_traffic_markers
from bikeflow.viz.widgets.legend import build_legend_widget
from bikeflow.viz.widgets.time_slider import build_time_slider


def _js_string(text: str) -> str:
    """JS string literal that is also safe inside an inline <script> block."""
    return json.dumps(str(text)).replace("<", "\\u003c").replace(">", "\\u003e")


def render_map_document(
    *,
    stations,
    traffic,
    center_minute,
    viewport=DEFAULT_VIEWPORT,
    title: str | None = None,
    bucket_counts=None,
):
    """
    Single place that assembles the full Folium map HTML document.

    When the map is panned or zoomed, the new viewport is written back into
    the page URL (lat/lon/zoom) so a slider reload keeps the view.
    """
    m = folium.Map(
        location=[viewport.latitude, viewport.longitude],
        zoom_start=viewport.zoom,
        min_zoom=5,
        max_zoom=18,
        tiles="cartodbpositron",
        prefer_canvas=True,
    )

    # stations
    add_traffic_markers(m, stations, traffic)

    # legend + slider (widgets)
    m.get_root().html.add_child(build_legend_widget())
    m.get_root().html.add_child(build_time_slider(center_minute, bucket_counts))

    map_var = m.get_name()
    title_js = _js_string(title) if title else ""

    # title + wrap so widgets sit on-map
    m.get_root().html.add_child(
        folium.Element(
            f"""
<style>
#map-wrap {{
  position: relative;
  width: 100%;
}}
#map-wrap .leaflet-container {{
  width: 100% !important;
  height: 85vh !important;
  min-height: 520px;
}}
#map-title {{
  position: absolute;
  top: 12px;
  left: 50%;
  transform: translateX(-50%);
  background: rgba(255,255,255,0.95);
  padding: 6px 16px;
  border-radius: 999px;
  font-size: 14px;
  font-weight: 600;
  z-index: 1300;
}}
</style>

<script>
document.addEventListener("DOMContentLoaded", () => {{
  const mapEl = document.querySelector(".leaflet-container");
  if (!mapEl) return;

  let wrap = document.getElementById("map-wrap");
  if (!wrap) {{
    wrap = document.createElement("div");
    wrap.id = "map-wrap";
    mapEl.parentNode.insertBefore(wrap, mapEl);
    wrap.appendChild(mapEl);
  }}

  const existingTitle = document.getElementById("map-title");
  if (existingTitle) existingTitle.remove();

  {"const t=document.createElement('div');t.id='map-title';t.textContent=%s;wrap.appendChild(t);" % title_js if title else ""}

  const panel = document.getElementById("time-filter");
  if (panel) wrap.appendChild(panel);
}});

window.addEventListener("load", () => {{
  if (typeof {map_var} === "undefined") return;
  {map_var}.on("moveend", () => {{
    const c = {map_var}.getCenter();
    const url = new URL(window.location.href);
    url.searchParams.set("lat", c.lat.toFixed(5));
    url.searchParams.set("lon", c.lng.toFixed(5));
    url.searchParams.set("zoom", String({map_var}.getZoom()));
    window.history.replaceState(null, "", url.toString());
  }});
}});
</script>
"""
        )
    )

    return m.get_root().render()
