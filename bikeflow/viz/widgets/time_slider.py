# bikeflow/viz/widgets/time_slider.py
import folium
import numpy as np

from bikeflow.traffic.types import MINUTES_PER_DAY, NO_FILTER
from bikeflow.viz.scales import format_minute


def _hourly_activity(bucket_counts):
    """Collapse 1440 per-minute counts to 24 per-hour counts."""
    if bucket_counts is None:
        return np.zeros(24, dtype=np.int64)

    counts = np.asarray(bucket_counts, dtype=np.int64)
    if counts.shape != (MINUTES_PER_DAY,):
        raise ValueError(f"bucket_counts must have shape ({MINUTES_PER_DAY},)")
    return counts.reshape(24, 60).sum(axis=1)


def build_time_slider(center_minute, bucket_counts=None):
    """
    Time filter:
      - range input over -1 (any time) .. 1439
      - label shows the selected time or "(any time)"
      - thin strip of per-hour trip volume under the slider

    Dragging only updates the label; releasing the slider reloads the page
    with ?t=<minute>, keeping any other query params (lat/lon/zoom).
    """
    hourly = _hourly_activity(bucket_counts)
    max_h = int(hourly.max()) if hourly.size else 0

    bars = []
    for h, c in enumerate(hourly):
        height = int((int(c) / max_h) * 24) if max_h > 0 else 0
        bars.append(
            f'<div class="activity-bar" title="{h:02d}:00 · {int(c)} trips" '
            f'style="height:{height}px"></div>'
        )

    is_any = center_minute == NO_FILTER
    label = "" if is_any else format_minute(center_minute)

    return folium.Element(
        f"""
<style>
#time-filter {{
  position: absolute;
  left: 16px;
  right: 16px;
  bottom: 14px;
  z-index: 1200;
  background: rgba(255,255,255,0.92);
  padding: 8px 14px;
  border-radius: 10px;
  font-size: 12px;
}}
#time-filter input[type=range] {{
  width: 100%;
}}
#time-filter .time-label {{
  font-weight: 600;
}}
#any-time {{
  color: #888;
  font-style: italic;
  display: {"inline" if is_any else "none"};
}}
#activity-strip {{
  display: flex;
  align-items: flex-end;
  height: 24px;
  gap: 2px;
  margin: 0 2px;
}}
.activity-bar {{
  flex: 1;
  background: #bbb;
  border-radius: 1px;
}}
</style>

<div id="time-filter">
  <label>
    Filter by time:
    <span class="time-label" id="selected-time">{label}</span>
    <span id="any-time">(any time)</span>
  </label>
  <div id="activity-strip">{''.join(bars)}</div>
  <input id="time-slider" type="range" min="{NO_FILTER}" max="{MINUTES_PER_DAY - 1}" value="{int(center_minute)}">
</div>

<script>
function formatMinute(minutes) {{
  const d = new Date(0, 0, 0, 0, minutes);
  return d.toLocaleString("en-US", {{ timeStyle: "short" }});
}}

document.addEventListener("DOMContentLoaded", () => {{
  const slider = document.getElementById("time-slider");
  const selected = document.getElementById("selected-time");
  const anyTime = document.getElementById("any-time");
  if (!slider) return;

  slider.addEventListener("input", () => {{
    const t = Number(slider.value);
    if (t === {NO_FILTER}) {{
      selected.textContent = "";
      anyTime.style.display = "inline";
    }} else {{
      selected.textContent = formatMinute(t);
      anyTime.style.display = "none";
    }}
  }});

  slider.addEventListener("change", () => {{
    const url = new URL(window.location.href);
    url.searchParams.set("t", slider.value);
    window.location.href = url.toString();
  }});

  const wrap = document.getElementById("map-wrap");
  const panel = document.getElementById("time-filter");
  if (wrap && panel) wrap.appendChild(panel);
}});
</script>
"""
    )
