# bikeflow/traffic/events.py
from __future__ import annotations

from typing import Callable, List


class EventChannel:
    """
    Tiny observer list. Subscribers run synchronously, in subscription order,
    inside emit().
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._subscribers: List[Callable] = []

    def subscribe(self, callback: Callable) -> Callable[[], None]:
        self._subscribers.append(callback)

        def _unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def emit(self, *args) -> None:
        for cb in list(self._subscribers):
            cb(*args)

    def __len__(self) -> int:
        return len(self._subscribers)
