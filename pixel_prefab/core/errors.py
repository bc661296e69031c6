"""
Error types raised by the conversion pipeline
"""


class PixelPrefabError(Exception):
    """Base class for pipeline errors"""


class MalformedFrameError(PixelPrefabError, ValueError):
    """A frame's pixel buffer does not hold width * height * 4 bytes"""

    kind = "MalformedFrame"

    def __init__(self, frame_index: int, expected: int, actual: int):
        self.frame_index = frame_index
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Frame {frame_index} has {actual} bytes, expected {expected} "
            f"(width * height * 4)"
        )


class SlotMismatchError(PixelPrefabError):
    """Frames decomposed into different rectangle counts under the strict slot policy"""

    kind = "SlotMismatch"

    def __init__(self, counts):
        self.counts = list(counts)
        super().__init__(
            f"Rectangle count differs between frames: {self.counts}"
        )
