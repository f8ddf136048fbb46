# bikeflow/util/trips.py
from __future__ import annotations

import warnings
from pathlib import Path
from typing import List

import pandas as pd
from colorama import Fore, Style
from tqdm import tqdm

from bikeflow.traffic.errors import InvalidTimestamp
from bikeflow.traffic.types import Trip

TRIP_COLUMNS = [
    "ride_id",
    "started_at",
    "ended_at",
    "start_station_id",
    "end_station_id",
]


def _parse_one(value):
    try:
        return pd.Timestamp(value)
    except (TypeError, ValueError):
        return pd.NaT


def parse_timestamps(values: pd.Series) -> pd.Series:
    """
    Parse a column of ISO 8601 timestamps; unparseable cells become NaT.

    Rows may differ in precision ("08:00:00" vs "09:00:00.123"). If rows carry
    different UTC offsets (a file spanning a DST change), each row is parsed
    on its own so it keeps the wall clock it was written in.
    """
    try:
        with warnings.catch_warnings():
            # pandas 2.x warns (3.x raises) on mixed offsets; both go row by row
            warnings.simplefilter("ignore", FutureWarning)
            parsed = pd.to_datetime(values, format="ISO8601", errors="coerce")
    except ValueError:
        parsed = None

    if parsed is None or not pd.api.types.is_datetime64_any_dtype(parsed):
        parsed = values.map(_parse_one)

    return parsed


def load_trips(trips_csv: str | Path, *, progress: bool = False) -> List[Trip]:
    """
    Loads a Bluebikes trips CSV with columns:

      ride_id, started_at, ended_at, start_station_id, end_station_id

    Timestamps are parsed as local wall-clock time. If any row's
    started_at / ended_at does not parse, the whole load is rejected with
    InvalidTimestamp naming those ride ids. Blank station ids become "".
    """
    trips_csv = Path(trips_csv)

    print(f"{Fore.CYAN}Reading trips from {trips_csv}…{Style.RESET_ALL}")
    df = pd.read_csv(trips_csv, dtype=str, keep_default_na=False)

    missing_cols = [c for c in TRIP_COLUMNS if c not in df.columns]
    if missing_cols:
        raise ValueError(f"Trips CSV missing columns: {', '.join(missing_cols)}")

    started = parse_timestamps(df["started_at"])
    ended = parse_timestamps(df["ended_at"])

    offenders = []
    for field, parsed in (("started_at", started), ("ended_at", ended)):
        for ride_id in df.loc[parsed.isna(), "ride_id"]:
            offenders.append((str(ride_id), field))
    if offenders:
        raise InvalidTimestamp(offenders)

    rows = zip(
        df["ride_id"],
        started.tolist(),
        ended.tolist(),
        df["start_station_id"].str.strip(),
        df["end_station_id"].str.strip(),
    )
    if progress:
        rows = tqdm(rows, total=len(df), desc="Building trips")

    trips = [
        Trip(
            id=str(ride_id),
            started_at=s,
            ended_at=e,
            start_station_id=str(s0),
            end_station_id=str(s1),
        )
        for ride_id, s, e, s0, s1 in rows
    ]

    print(f"{Fore.GREEN}Loaded {len(trips):,} trips.{Style.RESET_ALL}")
    return trips
