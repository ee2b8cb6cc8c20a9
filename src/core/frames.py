"""
Frame de-duplication for polling loops that can outrun the camera.
"""


class FrameGate:
    """
    Lets each camera frame id through once.

    HandTracker ids start at 1 and only advance when a new frame is
    captured, so a loop that polls faster than the camera sees the same id
    again and must not classify it twice.
    """

    def __init__(self):
        self._last_id = 0

    @property
    def last_id(self) -> int:
        return self._last_id

    def accept(self, frame_id: int) -> bool:
        """Return True the first time frame_id is seen in a row."""
        if frame_id == self._last_id:
            return False
        self._last_id = frame_id
        return True
