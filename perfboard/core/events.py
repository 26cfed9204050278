from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable

from perfboard.core.logging import get_logger
from perfboard.schemas.employee import EmployeeOut
from perfboard.schemas.evaluation import EvaluationOut

logger = get_logger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Full copy of both collections at one point in time."""
    employees: tuple[EmployeeOut, ...] = field(default_factory=tuple)
    evaluations: tuple[EvaluationOut, ...] = field(default_factory=tuple)


Listener = Callable[[Snapshot], None]


class ChangeFeed:
    """
    Fan-out of store snapshots. Stores publish after every successful
    mutation; subscribers recompute from the full snapshot.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    @property
    def has_subscribers(self) -> bool:
        with self._lock:
            return bool(self._listeners)

    def publish(self, snapshot: Snapshot) -> None:
        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(snapshot)
            except Exception:
                # a failing subscriber is logged and skipped
                logger.exception("change_listener_failed", listener=repr(listener))


change_feed = ChangeFeed()
