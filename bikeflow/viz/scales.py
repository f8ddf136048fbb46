# bikeflow/viz/scales.py
from __future__ import annotations

import numpy as np

from bikeflow.traffic.types import NO_FILTER

MIN_RADIUS_PX = 3.0
MAX_RADIUS_PX = 50.0

DEPARTURES_COLOR = "steelblue"
ARRIVALS_COLOR = "darkorange"
BALANCED_COLOR = "#a77a81"  # midway mix of the two


def radius_scale(values, max_value, *, r_min=MIN_RADIUS_PX, r_max=MAX_RADIUS_PX) -> np.ndarray:
    """
    Square-root scale [0, max_value] -> [r_min, r_max] (area tracks traffic).
    With max_value == 0 every marker gets r_min.
    """
    v = np.asarray(values, dtype=np.float64)
    if max_value <= 0:
        return np.full(v.shape, r_min)

    frac = np.sqrt(np.clip(v, 0.0, None) / float(max_value))
    return r_min + frac * (r_max - r_min)


def flow_bucket(ratio: float) -> float:
    """Quantize the departure ratio into 0 (arrivals), 0.5 (balanced), 1 (departures)."""
    r = min(1.0, max(0.0, float(ratio)))
    return [0.0, 0.5, 1.0][min(2, int(r * 3))]


def flow_color(ratio: float) -> str:
    b = flow_bucket(ratio)
    if b == 1.0:
        return DEPARTURES_COLOR
    if b == 0.0:
        return ARRIVALS_COLOR
    return BALANCED_COLOR


def format_minute(minute: int) -> str:
    """-1 -> "(any time)", 0 -> "12:00 AM", 1000 -> "4:40 PM"."""
    if minute == NO_FILTER:
        return "(any time)"

    h, m = divmod(int(minute), 60)
    suffix = "AM" if h < 12 else "PM"
    h12 = h % 12 or 12
    return f"{h12}:{m:02d} {suffix}"
