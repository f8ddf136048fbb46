# bikeflow/viz/widgets/legend.py
import folium

from bikeflow.viz.scales import ARRIVALS_COLOR, BALANCED_COLOR, DEPARTURES_COLOR


def build_legend_widget():
    """
    Returns a Folium Element that injects a floating flow legend.
    """
    return folium.Element(
        f"""
<style>
#map-legend {{
  position: absolute;
  top: 12px;
  right: 16px;
  background: rgba(255,255,255,0.95);
  padding: 8px 12px;
  border-radius: 10px;
  font-size: 12px;
  z-index: 1200;
  display: flex;
  gap: 12px;
}}
.legend-dot {{
  width: 10px;
  height: 10px;
  border-radius: 50%;
  display: inline-block;
  margin-right: 6px;
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
    wrap.style.position = "relative";
    wrap.style.width = "100%";
    mapEl.parentNode.insertBefore(wrap, mapEl);
    wrap.appendChild(mapEl);
  }}

  const existing = document.getElementById("map-legend");
  if (existing) existing.remove();

  const legend = document.createElement("div");
  legend.id = "map-legend";
  legend.innerHTML = `
    <div><span class="legend-dot" style="background:{DEPARTURES_COLOR}"></span>More departures</div>
    <div><span class="legend-dot" style="background:{BALANCED_COLOR}"></span>Balanced</div>
    <div><span class="legend-dot" style="background:{ARRIVALS_COLOR}"></span>More arrivals</div>
  `;
  wrap.appendChild(legend);
}});
</script>
"""
    )
