"""Frame sources feeding the presence scanner.

Video capture itself is external.  A FrameSource only has to hand over
the next frame as an ``H x W x C`` uint8 array (C >= 3, RGB first) along
with its playback offset in seconds.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import NamedTuple, Sequence

import numpy as np


class Frame(NamedTuple):
    pixels: np.ndarray
    offset: float


class FrameSource(ABC):
    """Base class for anything the scanner can sample from."""

    @abstractmethod
    def read(self) -> Frame | None:
        """Return the next frame, or None when nothing new is available."""
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        ...


class SequenceFrameSource(FrameSource):
    """Replays an in-memory sequence of frames at a fixed frame interval.

    Offsets advance by ``frame_interval`` per frame.  With ``loop=True``
    the sequence restarts and offsets wrap back to zero, like a looping
    preview clip.
    """

    def __init__(
        self,
        frames: Sequence[np.ndarray],
        frame_interval: float = 0.5,
        loop: bool = False,
        name: str = "sequence",
    ) -> None:
        if not frames:
            raise ValueError("frame sequence is empty")
        self._frames = list(frames)
        self._interval = frame_interval
        self._loop = loop
        self._name = name
        self._index = 0

    @property
    def source_name(self) -> str:
        return self._name

    def read(self) -> Frame | None:
        if self._index >= len(self._frames):
            if not self._loop:
                return None
            self._index = 0
        idx = self._index
        self._index += 1
        return Frame(self._frames[idx], idx * self._interval)

    def seek(self, offset: float) -> None:
        """Jump to the frame at *offset* seconds (used for replay)."""
        idx = int(max(0.0, offset) / self._interval) if self._interval > 0 else 0
        self._index = min(idx, len(self._frames) - 1)
