"""Bounded most-recent-first histories for immutable records."""

from __future__ import annotations

from collections import deque
from typing import Generic, Iterable, TypeVar

from vanara_ops.domain.detection import Detection

T = TypeVar("T")


class BoundedHistory(Generic[T]):
    """Keeps the ``cap`` newest items; the oldest fall off the end.

    Items are never mutated, so reads hand out plain list copies.
    """

    def __init__(self, cap: int, items: Iterable[T] = ()) -> None:
        if cap < 1:
            raise ValueError("cap must be at least 1")
        self._items: deque[T] = deque(maxlen=cap)
        # Seed items arrive newest-first, like the history itself
        for item in reversed(list(items)):
            self._items.appendleft(item)

    @property
    def cap(self) -> int:
        return self._items.maxlen or 0

    def add(self, item: T) -> T:
        self._items.appendleft(item)
        return item

    def items(self) -> list[T]:
        """Newest first."""
        return list(self._items)

    def latest(self) -> T | None:
        return self._items[0] if self._items else None

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


class DetectionHistory(BoundedHistory[Detection]):
    """Detection history with the filters the operator console offers."""

    def filter(
        self,
        detection_type: str | None = None,
        min_confidence: float = 0.0,
        max_confidence: float = 1.0,
    ) -> list[Detection]:
        """Detections matching *detection_type* (None = all) within a confidence band."""
        return [
            d for d in self._items
            if (detection_type is None or d.type == detection_type)
            and min_confidence <= d.confidence <= max_confidence
        ]
