from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Tuple

logger = logging.getLogger(__name__)

HIT_MESSAGE = "serving cached inverse"


@dataclass
class SolveRecord:
    op: str
    route: str
    trace_tag: str
    shape: Tuple[int, ...] | None
    timestamp: float


HitListener = Callable[[SolveRecord], None]


def _shape(obj: Any) -> Tuple[int, ...] | None:
    shape_attr = getattr(obj, "shape", None)
    if isinstance(shape_attr, tuple):
        return tuple(int(dim) for dim in shape_attr)
    return None


class SolveObservability:
    """Keeps the latest solve records and fans cache hits out to listeners."""

    def __init__(self) -> None:
        self._counter = 0
        self._last: dict[str, dict[str, Any]] = {}
        self._listeners: List[HitListener] = []

    def clear(self) -> None:
        self._last.clear()

    def add_listener(self, listener: HitListener) -> HitListener:
        if not callable(listener):
            raise TypeError("hit listener must be callable")
        self._listeners.append(listener)
        return listener

    def remove_listener(self, listener: HitListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _record(self, record: SolveRecord) -> dict[str, Any]:
        payload = asdict(record)
        self._last["__latest__"] = payload
        self._last[record.op] = payload
        return payload

    def _make_record(self, op: str, route: str, matrix: Any) -> SolveRecord:
        self._counter += 1
        return SolveRecord(
            op=op,
            route=route,
            trace_tag=f"{op}:{self._counter}",
            shape=_shape(matrix),
            timestamp=time.time(),
        )

    def record_hit(self, op: str, matrix: Any) -> SolveRecord:
        record = self._make_record(op, "cache", matrix)
        self._record(record)
        logger.info("%s (%s, shape=%s)", HIT_MESSAGE, record.trace_tag, record.shape)
        # Listeners may unregister themselves while being notified.
        for listener in list(self._listeners):
            try:
                listener(record)
            except Exception:
                logger.exception("hit listener %r failed", listener)
        return record

    def record_miss(self, op: str, matrix: Any) -> SolveRecord:
        record = self._make_record(op, "compute", matrix)
        self._record(record)
        logger.debug("computed inverse (%s, shape=%s)", record.trace_tag, record.shape)
        return record

    def last(self, op: str | None = None) -> Dict[str, Any] | None:
        key = op or "__latest__"
        payload = self._last.get(key)
        if payload is None:
            return None
        return dict(payload)


_default_observability = SolveObservability()


def default_instance() -> SolveObservability:
    return _default_observability
