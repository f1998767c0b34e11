"""
Host frame clocks.

A clock calls back once per presented frame with a timestamp in
milliseconds. Callbacks are one-shot: whoever wants the next frame
schedules again from inside the callback.
"""

import itertools
from typing import Callable, Protocol

FrameCallback = Callable[[float], None]


class FrameClock(Protocol):
    def schedule(self, callback: FrameCallback) -> int: ...

    def cancel(self, handle: int) -> None: ...


class ManualFrameClock:
    """
    Frame clock advanced explicitly by its owner, e.g. a video writer
    asking for the frame at time t, or a test.
    """

    def __init__(self):
        self._handles = itertools.count(1)
        self._pending = {}

    @property
    def pending(self):
        return len(self._pending)

    def schedule(self, callback):
        handle = next(self._handles)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle):
        self._pending.pop(handle, None)

    def present(self, timestamp):
        """Fire every callback scheduled before this frame."""
        due, self._pending = self._pending, {}
        for callback in due.values():
            callback(timestamp)
        return len(due)
