# bikeflow/traffic/errors.py
from __future__ import annotations

from typing import List, Tuple


class InvalidTimestamp(ValueError):
    """
    Raised when one or more trips cannot be placed on a minute-of-day.

    offenders: list of (trip_id, field) pairs, e.g. ("A1B2", "started_at")
    """

    def __init__(self, offenders: List[Tuple[str, str]]):
        self.offenders = list(offenders)

        shown = ", ".join(f"{tid} ({field})" for tid, field in self.offenders[:10])
        more = len(self.offenders) - 10
        if more > 0:
            shown += f", … and {more} more"

        super().__init__(
            f"{len(self.offenders)} trip timestamp(s) could not be resolved "
            f"to a minute of day: {shown}"
        )


class InvalidArgument(ValueError):
    pass


class MissingStationReference(UserWarning):
    """Trips point at station ids that are not in the station catalog."""
